"""Scroll anchoring across vendor frame visibility toggles."""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .lines import PhysicalLine

logger = logging.getLogger(__name__)


@dataclass
class ScrollState:
    """
    Top-of-view row index plus an adjustment waiting for the next render.

    ``pending_index`` is only set between a visibility toggle and the render
    pass that follows it.
    """

    index: int = 0
    pending_index: Optional[int] = None

    def resolve(self, total_lines: int, height: int) -> bool:
        """
        Apply the pending index, clamped to the scrollable range.

        Returns:
            True if a pending index was applied
        """
        if self.pending_index is None:
            return False

        max_index = max(0, total_lines - height)
        resolved = max(0, min(self.pending_index, max_index))
        logger.debug(f"Resolved pending scroll index {self.pending_index} to {resolved} (max {max_index})")

        self.index = resolved
        self.pending_index = None
        return True


def _rows_from(lines: Sequence[PhysicalLine], index: int):
    """Rows from index up to the top of the buffer, nearest first."""
    start = min(index, len(lines) - 1)
    for cursor in range(start, -1, -1):
        yield lines[cursor]


def hide_anchor(lines: Sequence[PhysicalLine], index: int) -> int:
    """
    Scroll index to use once vendor frames are collapsed.

    Every contiguous run of vendor rows at or above the index shrinks to a
    single row, so a run of k rows moves the anchor up by k - 1.

    Args:
        lines: Rows as currently shown, vendor frames expanded
        index: Current scroll index
    """
    total_vendor = 0
    remaining_vendor = 0
    in_run = False

    for line in _rows_from(lines, index):
        if line.is_vendor:
            total_vendor += 1
            if not in_run:
                remaining_vendor += 1
                in_run = True
        else:
            in_run = False

    return index - total_vendor + remaining_vendor


def show_anchor(lines: Sequence[PhysicalLine], index: int) -> Optional[int]:
    """
    Scroll index to use once vendor frames are expanded again.

    The nearest summary row at or above the index carries the running total
    of rows compressed above the anchor. Each summary row visited is itself
    replaced by the rows it stands for, so it is taken off again.

    Args:
        lines: Rows as currently shown, vendor frames collapsed
        index: Current scroll index

    Returns:
        New scroll index, or None when no collapsed rows lie above the anchor
    """
    pending = None

    for line in _rows_from(lines, index):
        if pending is None and line.compressed is not None:
            pending = index + line.compressed
        if pending is not None and line.is_vendor:
            pending -= 1

    return pending
