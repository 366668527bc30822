"""Viewer core tying formatting, collapsing and scroll anchoring together."""

import logging
from bisect import bisect_left, bisect_right
from pathlib import Path
from typing import Callable, List, NamedTuple, Optional, Tuple, Union

from .buffer import LineBuffer
from .classify import VendorFrameClassifier
from .collapse import collapse_vendor_frames
from .config import ViewerConfig
from .formatter import LineFormatter
from .lines import PhysicalLine
from .scroll import ScrollState, hide_anchor, show_anchor
from .truncate import truncate_file

logger = logging.getLogger(__name__)

SHOW_VENDOR_LABEL = "Show Vendor"
HIDE_VENDOR_LABEL = "Hide Vendor"
TRUNCATE_LABEL = "Truncate"


class Hotkey(NamedTuple):
    """A key the host should bind, with the label to show for it."""

    key: str
    callback: Callable[[], object]
    label: str


class TailViewer:
    """
    Renders a live-tailed log for a fixed-size viewport.

    Rows are recomputed from the buffer on every render. The scroll state is
    the only thing carried across a vendor frame toggle: the toggle stores a
    pending index and the next render applies it.
    """

    def __init__(
        self,
        path: Optional[Union[Path, str]] = None,
        config: Optional[ViewerConfig] = None,
        formatter: Optional[LineFormatter] = None,
        buffer: Optional[LineBuffer] = None,
    ):
        """
        Initialize a TailViewer.

        Args:
            path: Backing log file, needed for truncation
            config: Viewer settings
            formatter: Row formatter (built from config if None)
            buffer: Raw line store (built from config if None)
        """
        self.config = config or ViewerConfig()
        self.path = Path(path) if path is not None else None

        if formatter is None:
            classifier = VendorFrameClassifier(self.config.vendor_segment, self.config.boundary_pattern)
            formatter = LineFormatter(classifier=classifier, base_path=self.config.base_path)
        self.formatter = formatter

        self.buffer = buffer if buffer is not None else LineBuffer(max_lines=self.config.max_lines)
        self.hide_vendor = self.config.hide_vendor
        self.scroll = ScrollState()
        self.lines: List[PhysicalLine] = []
        self.width = 0

    def render(self, width: int, height: int) -> List[PhysicalLine]:
        """
        Recompute every row and apply any pending scroll adjustment.

        When the width changed since the last render the top row moves with
        the raw line it showed, so the view stays on the same text.

        Args:
            width: Viewport width
            height: Viewport height

        Returns:
            All rows of the log in display order
        """
        anchor = None
        if self.scroll.pending_index is None and self.width and width != self.width:
            anchor = self.line_at_row(self.scroll.index)

        lines = self.formatter.format_lines(self.buffer, width, self.hide_vendor)
        if self.hide_vendor:
            lines = collapse_vendor_frames(lines)
        self.lines = lines
        self.width = width

        if anchor is not None:
            self.scroll.pending_index = self.row_for_line(*anchor)
            logger.debug(f"Width changed, line {anchor[0]} +{anchor[1]} now starts at row {self.scroll.pending_index}")

        self.scroll.resolve(len(lines), height)
        return lines

    def line_at_row(self, row: int) -> Optional[Tuple[int, int]]:
        """
        Find the raw line shown at a row.

        Args:
            row: Row index into the current render

        Returns:
            Tuple of (line number, rows into that line), or None if the row is empty
        """
        if not 0 <= row < len(self.lines) or self.lines[row].line_no is None:
            return None

        line_no = self.lines[row].line_no
        first = row
        while first > 0 and self.lines[first - 1].line_no == line_no:
            first -= 1
        return line_no, row - first

    def row_for_line(self, line_no: int, offset: int = 0) -> int:
        """
        Row showing a raw line, offset into its wrapped rows.

        The offset is kept within the line's own rows. A line with no rows of
        its own, like a vendor frame folded into a later summary, maps to the
        next row that is shown.
        """
        numbers = [row.line_no for row in self.lines]
        first = bisect_left(numbers, line_no)
        last = bisect_right(numbers, line_no) - 1
        if first >= len(numbers):
            return max(0, len(numbers) - 1)
        if last < first:
            return first
        return min(first + offset, last)

    def window(self, height: int) -> List[PhysicalLine]:
        """Rows visible from the current scroll index."""
        start = max(0, self.scroll.index)
        return self.lines[start : start + height]

    def toggle_vendor(self):
        """Switch vendor frames between collapsed and expanded."""
        if self.hide_vendor:
            pending = show_anchor(self.lines, self.scroll.index)
        else:
            pending = hide_anchor(self.lines, self.scroll.index)

        self.hide_vendor = not self.hide_vendor
        self.scroll.pending_index = pending
        logger.debug(
            f"Vendor frames {'hidden' if self.hide_vendor else 'shown'}, "
            f"scroll index {self.scroll.index} -> pending {pending}"
        )

    def truncate(self) -> bool:
        """Empty the backing file and the buffer."""
        if self.path is None:
            return False

        truncated = truncate_file(self.path, self.clear)
        if truncated:
            self.scroll.index = 0
        return truncated

    def clear(self):
        """Drop the lines held in memory."""
        self.buffer.clear()
        self.lines = []

    @property
    def vendor_label(self) -> str:
        return SHOW_VENDOR_LABEL if self.hide_vendor else HIDE_VENDOR_LABEL

    def hotkeys(self) -> List[Hotkey]:
        """Keys the host should register, labelled for the current state."""
        hotkeys = [Hotkey("v", self.toggle_vendor, self.vendor_label)]
        if self.path is not None:
            hotkeys.append(Hotkey("t", self.truncate, TRUNCATE_LABEL))
        return hotkeys
