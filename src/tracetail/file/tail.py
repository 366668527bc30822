"""Polling tail of a growing log file."""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

# Bytes read from the end of the file to find the initial lines
INITIAL_READ_BYTES = 1 << 20


def default_split_lines(text: str) -> List[str]:
    """Default line splitting on newlines."""
    # Handle different line endings
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    # Don't lose empty lines
    if text.endswith("\n"):
        lines.pop()  # Remove last empty element from split
    return lines


class FileTail:
    """
    Reads lines appended to a log file since the last poll.

    The first poll returns the last ``initial_lines`` lines, like
    ``tail -n``. Incomplete trailing lines are held back until their newline
    arrives. A file that shrinks below the read position was truncated or
    rotated, and is read again from the start.
    """

    def __init__(self, path: Union[Path, str], initial_lines: int = 100):
        """
        Initialize a FileTail.

        Args:
            path: Log file to follow
            initial_lines: Lines to return from the end of the file on first read

        Raises:
            ValueError: If initial_lines is negative
        """
        if initial_lines < 0:
            raise ValueError("initial_lines can't be negative")
        self.path = Path(path)
        self.initial_lines = initial_lines
        self._position: Optional[int] = None
        self._partial = b""

    @property
    def position(self) -> int:
        """Byte offset of the next unread data."""
        return self._position or 0

    def read_new(self) -> List[str]:
        """
        Read complete lines written since the last call.

        Returns:
            New lines without line endings, empty if the file is missing
        """
        try:
            size = self.path.stat().st_size
        except FileNotFoundError:
            return []

        first_read = self._position is None
        skip_first = False

        if first_read:
            self._position = max(0, size - INITIAL_READ_BYTES)
            # Started mid-file, the first line is cut short unless a newline precedes it
            skip_first = self._position > 0 and not self._follows_newline(self._position)
        elif size < self._position:
            logger.info(f"File truncated/rotated - reading {self.path} from start (size: {size:,}, pos: {self._position:,})")
            self._position = 0
            self._partial = b""

        if size == self._position:
            return []

        with open(self.path, "rb") as f:
            f.seek(self._position)
            data = f.read(size - self._position)
        self._position += len(data)

        data = self._partial + data
        end = data.rfind(b"\n")
        if end == -1:
            self._partial = data
            return []
        complete, self._partial = data[: end + 1], data[end + 1 :]

        lines = default_split_lines(complete.decode("utf-8", errors="replace"))
        if skip_first:
            lines = lines[1:]
        if first_read:
            lines = lines[max(0, len(lines) - self.initial_lines) :]

        logger.debug(f"Read {len(lines)} new lines from {self.path}")
        return lines

    def _follows_newline(self, position: int) -> bool:
        with open(self.path, "rb") as f:
            f.seek(position - 1)
            return f.read(1) == b"\n"

    async def aread_new(self) -> List[str]:
        """Async version of read_new() that reads in a worker thread."""
        return await asyncio.to_thread(self.read_new)
