"""Turns raw log lines into boxed, wrapped and highlighted display rows."""

import logging
import re
from dataclasses import replace
from typing import Iterable, List, Optional, Tuple

from .classify import FrameClassifier, VendorFrameClassifier
from .lines import PhysicalLine
from .theme import Theme
from .wrap import pad, wrap

logger = logging.getLogger(__name__)

# One space outside each border
BOX_MARGIN = 2
# One border and one space on each side
BOX_PADDING = 4
# Hanging indent for wrapped frame continuation rows
FRAME_INDENT = 4
# Tab stops, as the terminal renderer expands them
TAB_SIZE = 8

EXCEPTION_MARKER = '{"exception":"[object] '
STACKTRACE_MARKER = "[stacktrace]"
EXCEPTION_END = '"}'
SUMMARY_TEXT = "#…"

FRAME_RE = re.compile(r"#[0-9]+ ")
SINGLE_DIGIT_FRAME_RE = re.compile(r"^#(\d)(?!\d)")
# Frame number, file, then an optional ":" and the method after it
FRAME_PARTS_RE = re.compile(r"^(#\d+)(.*?)(:.*)?$")


class LineFormatter:
    """
    Formats raw log lines for a viewport of a given width.

    Stack traces are drawn inside a dim box, exception messages are split
    from their payload, and vendor frames can be replaced by summary rows
    that remember how many rows they stand for.
    """

    def __init__(
        self,
        classifier: Optional[FrameClassifier] = None,
        base_path: Optional[str] = None,
        theme: Optional[Theme] = None,
    ):
        """
        Initialize a LineFormatter.

        Args:
            classifier: Predicate deciding if a frame line is vendor code
            base_path: Prefix removed from frame paths to keep them short
            theme: Styling for boxes and exception text
        """
        self.classifier = classifier or VendorFrameClassifier()
        # A bare "/" would strip every separator
        self.base_path = base_path.rstrip("/\\") if base_path else ""
        self.theme = theme or Theme()

    @staticmethod
    def box_width(width: int) -> int:
        return max(1, width - BOX_MARGIN)

    @classmethod
    def content_width(cls, width: int) -> int:
        return max(1, cls.box_width(width) - BOX_PADDING)

    def format_lines(self, raw_lines: Iterable[str], width: int, hide_vendor: bool) -> List[PhysicalLine]:
        """
        Format a whole buffer in one pass.

        The compressed row counter starts at zero for every pass and is
        threaded through each line, so summary rows carry running totals.
        Every row records the index of the raw line it was wrapped from.
        """
        rows = []
        compressed = 0
        for line_no, line in enumerate(raw_lines):
            formatted, compressed = self.format_line(line, width, hide_vendor, compressed)
            rows.extend(replace(row, line_no=line_no) for row in formatted)

        logger.debug(f"Formatted {len(rows)} rows at width {width}, {compressed} rows compressed")
        return rows

    def format_line(
        self, line: str, width: int, hide_vendor: bool, compressed: int = 0
    ) -> Tuple[List[PhysicalLine], int]:
        """
        Format one raw line.

        Args:
            line: Raw log line
            width: Viewport width
            hide_vendor: Replace vendor frames with summary rows
            compressed: Rows compressed so far in this pass

        Returns:
            Tuple of (rows, updated compressed total)
        """
        width = max(1, width)
        line = line.expandtabs(TAB_SIZE)
        box_width = self.box_width(width)
        content_width = self.content_width(width)

        if line.strip() == EXCEPTION_END:
            footer = " ╰" + "═" * (box_width - 2) + "╯"
            return [PhysicalLine(self.theme.dim(footer))], compressed

        if EXCEPTION_MARKER in line:
            return self.format_exception(line, width), compressed

        if STACKTRACE_MARKER in line:
            header = " ╭─Trace" + "─" * (content_width - 4) + "╮"
            return [PhysicalLine(self.theme.dim(header))], compressed

        if not FRAME_RE.search(line):
            return [PhysicalLine(row) for row in wrap(line, width)], compressed

        return self.format_frame(line, content_width, hide_vendor, compressed)

    def format_exception(self, line: str, width: int) -> List[PhysicalLine]:
        """Split an inline JSON exception into its message and payload rows."""
        message, exception = line.split(EXCEPTION_MARKER, 1)

        rows = [PhysicalLine(self.theme.exception(row)) for row in wrap(message, width)]
        rows.extend(
            PhysicalLine(" " + self.theme.exception(row)) for row in wrap(exception, max(1, width - 1))
        )
        return rows

    def shorten_frame(self, line: str) -> str:
        """Strip the base path and zero-pad single digit frame numbers."""
        if self.base_path:
            line = line.replace(self.base_path, "")
        return SINGLE_DIGIT_FRAME_RE.sub(r"#0\1", line)

    def format_frame(
        self, line: str, content_width: int, hide_vendor: bool, compressed: int
    ) -> Tuple[List[PhysicalLine], int]:
        line = self.shorten_frame(line)
        vendor = bool(self.classifier(line))

        if hide_vendor and vendor:
            # Count the rows this frame would take if it were shown
            compressed += len(wrap(line, content_width, FRAME_INDENT))
            summary = self.theme.dim(" │ " + pad(SUMMARY_TEXT, content_width) + " │ ")
            return [PhysicalLine(summary, is_vendor=True, compressed=compressed)], compressed

        rows = [
            PhysicalLine(
                self.theme.dim(" │ ") + pad(row, content_width) + self.theme.dim(" │") + " ",
                is_vendor=vendor,
            )
            for row in wrap(self.highlight_file(line), content_width, FRAME_INDENT)
        ]
        return rows, compressed

    def highlight_file(self, line: str) -> str:
        """Dim the frame number and method, leaving the file path plain."""
        match = FRAME_PARTS_RE.match(line)
        if not match:
            return line

        number, path, method = match.groups()
        return self.theme.dim(number) + path + self.theme.dim(method or "")
