"""Escape-aware hard wrapping of log lines into display rows."""

import re
from functools import lru_cache
from typing import Iterator, List, Tuple
from wcwidth import wcswidth, wcwidth

# CSI sequences (colours, cursor movement) and two-byte escapes
ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]|\x1b[@-Z\\-_]")

RESET = "\x1b[0m"


def strip_escapes(text: str) -> str:
    """Remove terminal escape sequences from text."""
    return ESCAPE_RE.sub("", text)


@lru_cache(maxsize=4096)
def char_width(char: str) -> int:
    """Display cells taken by a single character."""
    if char.isascii():
        return 1
    width = wcwidth(char)
    # Unprintable characters still take a cell in most terminals
    return width if width >= 0 else 1


@lru_cache(maxsize=100000)
def display_width(text: str) -> int:
    """Printable width of text with escape sequences ignored."""
    text = strip_escapes(text)
    # Fast path for ASCII (99% of log lines)
    if text.isascii():
        return len(text)
    width = wcswidth(text)
    if width >= 0:
        return width
    return sum(char_width(char) for char in text)


def pad(text: str, width: int) -> str:
    """Right-pad text with spaces to the given printable width."""
    return text + " " * max(0, width - display_width(text))


def _tokens(text: str) -> Iterator[Tuple[str, bool]]:
    """Split text into (token, is_escape) pairs, one printable char per token."""
    position = 0
    for match in ESCAPE_RE.finditer(text):
        for char in text[position : match.start()]:
            yield char, False
        yield match.group(), True
        position = match.end()
    for char in text[position:]:
        yield char, False


def _is_reset(sequence: str) -> bool:
    return sequence in ("\x1b[m", "\x1b[0m")


def _is_style(sequence: str) -> bool:
    return sequence.startswith("\x1b[") and sequence.endswith("m")


def wrap(text: str, width: int, indent: int = 0) -> List[str]:
    """
    Hard-wrap text into rows of at most ``width`` printable columns.

    Escape sequences are kept whole and take no columns. Styling that is
    still active at a break is reset at the end of the row and re-applied at
    the start of the next one, so every row renders on its own.

    Args:
        text: Logical line, may contain escape sequences
        width: Maximum printable columns per row
        indent: Spaces prepended to every row after the first

    Returns:
        List of rows, always at least one

    Raises:
        ValueError: If width is less than 1
    """
    if width < 1:
        raise ValueError("Width must be positive")
    if indent < 0 or indent >= width:
        indent = 0

    rows = []
    current: List[str] = []
    active: List[str] = []
    pending: List[str] = []
    used = 0
    limit = width

    for token, is_escape in _tokens(text):
        if is_escape:
            pending.append(token)
            continue

        cells = char_width(token)
        if used and used + cells > limit:
            if active:
                current.append(RESET)
            rows.append("".join(current))
            current = [" " * indent] if indent else []
            current.extend(active)
            used = 0
            limit = width - indent

        # Escapes seen before this char belong to the row it lands on
        for sequence in pending:
            current.append(sequence)
            if _is_reset(sequence):
                active.clear()
            elif _is_style(sequence):
                active.append(sequence)
        pending.clear()

        current.append(token)
        used += cells

    current.extend(pending)
    rows.append("".join(current))
    return rows
