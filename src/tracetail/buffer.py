"""In-memory store of raw log lines."""

import logging
from typing import Iterable, Iterator, List, Optional

logger = logging.getLogger(__name__)


class LineBuffer:
    """
    Holds the raw lines read from the tailed file.

    Lines are only ever appended or cleared all at once. When ``max_lines``
    is set, the oldest lines are dropped to stay within it.
    """

    def __init__(self, lines: Iterable[str] = (), max_lines: Optional[int] = None):
        """
        Initialize a LineBuffer.

        Args:
            lines: Initial lines
            max_lines: Scrollback limit, None for unlimited

        Raises:
            ValueError: If max_lines is not positive
        """
        if max_lines is not None and max_lines <= 0:
            raise ValueError("max_lines must be positive")
        self.max_lines = max_lines
        self._lines: List[str] = []
        self.extend(lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, line_no: int) -> str:
        """
        Get a line by line number.

        Args:
            line_no: Line number (0-based, negative indexing supported)

        Raises:
            IndexError: If line_no is out of bounds
        """
        total_lines = len(self)

        # Handle negative indexing
        if line_no < 0:
            line_no = total_lines + line_no

        if line_no < 0 or line_no >= total_lines:
            raise IndexError(f"Line {line_no} out of range [0, {total_lines})")

        return self._lines[line_no]

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def append(self, line: str) -> None:
        self.extend([line])

    def extend(self, lines: Iterable[str]) -> None:
        self._lines.extend(lines)

        if self.max_lines is not None and len(self._lines) > self.max_lines:
            overflow = len(self._lines) - self.max_lines
            del self._lines[:overflow]
            logger.debug(f"Dropped {overflow} lines over the {self.max_lines} line limit")

    def clear(self) -> None:
        """Forget every line held in memory."""
        self._lines.clear()
