import logging
from pathlib import Path
from typing import Optional, Union

from rich.text import Text
from textual.binding import Binding
from textual.geometry import Size
from textual.message import Message
from textual.scroll_view import ScrollView
from textual.strip import Strip

from ...config import ViewerConfig
from ...file.tail import FileTail
from ...viewer import HIDE_VENDOR_LABEL, SHOW_VENDOR_LABEL, TRUNCATE_LABEL, TailViewer

# Configure logger
logger = logging.getLogger(__name__)


class TailWidget(ScrollView):
    """A scrollable widget that follows a log file and folds vendor frames."""

    class VendorToggled(Message):
        """Posted after vendor frames were shown or hidden."""

        def __init__(self, hide_vendor: bool, label: str) -> None:
            super().__init__()
            self.hide_vendor = hide_vendor
            self.label = label

    class LogUpdated(Message):
        """Posted when the rendered rows change."""

        def __init__(self, scroll_y: int, total_rows: int, width: int) -> None:
            super().__init__()
            self.scroll_y = scroll_y
            self.total_rows = total_rows
            self.width = width

    DEFAULT_CSS = """
    TailWidget {
        padding: 0;
        margin: 0;
        border: none;
        scrollbar-size-horizontal: 0;
        overflow-y: scroll;
        width: 100%;
        height: 100%;
    }
    """

    # Both vendor bindings share a key, check_action keeps only one active
    BINDINGS = [
        Binding("v", "show_vendor", SHOW_VENDOR_LABEL),
        Binding("v", "hide_vendor", HIDE_VENDOR_LABEL),
        Binding("t", "truncate", TRUNCATE_LABEL),
    ]

    can_focus = True

    def __init__(self, path: Union[Path, str], config: Optional[ViewerConfig] = None, **kwargs):
        super().__init__(**kwargs)
        self.config = config or ViewerConfig()
        self.viewer = TailViewer(path, self.config)
        self.tail = FileTail(path, self.config.initial_lines)
        self.current_width = 0

    def on_mount(self):
        """Called when widget is mounted."""
        logger.info(f"TailWidget mounted for {self.tail.path}")
        self.set_interval(self.config.refresh_interval, self.arefresh_log_data, name="tail_refresh")
        self.call_later(self.arefresh_log_data)

    def on_resize(self, event):
        """Called when widget is resized."""
        if event.size.width > 0 and event.size.width != self.current_width:
            self.update_lines()

    async def arefresh_log_data(self):
        """Pull new lines from the file without blocking the UI."""
        try:
            new_lines = await self.tail.aread_new()
        except OSError as e:
            # Log error but don't crash, the next tick retries
            logger.warning(f"Failed to read {self.tail.path}: {e}")
            return

        if new_lines:
            self.viewer.buffer.extend(new_lines)
            self.update_lines()

    def update_lines(self):
        """Re-render every row and keep the scroll position anchored."""
        width = self.scrollable_content_region.width or self.size.width
        height = self.scrollable_content_region.height or self.size.height
        if width <= 0:
            return

        # Stay pinned to the bottom while following the tail
        following = self.scroll_y >= self.max_scroll_y
        has_pending = self.viewer.scroll.pending_index is not None
        if not has_pending:
            self.viewer.scroll.index = round(self.scroll_y)

        # A width change reflows the rows, the viewer moves the index with them
        lines = self.viewer.render(width, height)
        self.virtual_size = Size(width, len(lines))
        self.current_width = width

        if following and not has_pending:
            self.scroll_end(animate=False)
        elif self.viewer.scroll.index != round(self.scroll_y):
            self.scroll_to(y=self.viewer.scroll.index)

        self.refresh()
        self._post_log_updated()

    def _post_log_updated(self):
        """Post a LogUpdated message with current state."""
        self.post_message(
            self.LogUpdated(scroll_y=round(self.scroll_y), total_rows=len(self.viewer.lines), width=self.current_width)
        )

    def render_line(self, y: int) -> Strip:
        """Render a single row of the log."""
        line_index = self.scroll_offset.y + y
        if line_index >= len(self.viewer.lines):
            return Strip.blank(self.size.width)

        text = Text.from_ansi(self.viewer.lines[line_index].text)
        return Strip(list(text.render(self.app.console))).crop(0, self.size.width)

    def check_action(self, action: str, parameters) -> Optional[bool]:
        """Offer only the vendor binding that matches the current mode."""
        if action == "show_vendor":
            return self.viewer.hide_vendor
        if action == "hide_vendor":
            return not self.viewer.hide_vendor
        return True

    def run_hotkey(self, key: str):
        """Call the viewer callback registered for a key."""
        for hotkey in self.viewer.hotkeys():
            if hotkey.key == key:
                return hotkey.callback()
        return None

    def action_show_vendor(self):
        self._toggle_vendor()

    def action_hide_vendor(self):
        self._toggle_vendor()

    def _toggle_vendor(self):
        self.viewer.scroll.index = round(self.scroll_y)
        self.run_hotkey("v")
        self.update_lines()
        self.refresh_bindings()
        self.post_message(self.VendorToggled(self.viewer.hide_vendor, self.viewer.vendor_label))

    def action_truncate(self):
        if self.run_hotkey("t"):
            self.update_lines()
            self.scroll_home(animate=False)

    def scroll_to(self, x=None, y=None, **kwargs):
        """Override scroll_to to always disable animation."""
        return super().scroll_to(x=x, y=y, animate=False)
