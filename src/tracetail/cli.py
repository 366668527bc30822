"""Command line entry point: follow a log file in the terminal."""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

import platformdirs
from textual.app import App, ComposeResult
from textual.widgets import Footer, Header

from . import __version__, configure_logging
from .config import DEFAULT_INITIAL_LINES, DEFAULT_REFRESH_INTERVAL, ViewerConfig
from .ui.textual import TailWidget

logger = logging.getLogger(__name__)


class TailApp(App):
    """Full screen tail of a single log file."""

    CSS = """
    #tail {
        width: 100%;
        height: 1fr;
    }
    """

    def __init__(self, path: Path, config: ViewerConfig) -> None:
        super().__init__()
        self.path = path
        self.config = config
        self.title = str(path)

    def compose(self) -> ComposeResult:
        yield Header()
        yield TailWidget(self.path, self.config, id="tail")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(TailWidget).focus()
        self.update_hotkey_labels()

    def update_hotkey_labels(self) -> None:
        widget = self.query_one(TailWidget)
        self.sub_title = " · ".join(f"{hotkey.key}: {hotkey.label}" for hotkey in widget.viewer.hotkeys())

    def on_tail_widget_vendor_toggled(self, event: TailWidget.VendorToggled) -> None:
        self.update_hotkey_labels()


def default_log_file() -> Path:
    """Where tracetail writes its own log, since the TUI owns the terminal."""
    log_dir = Path(platformdirs.user_log_dir("tracetail"))
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "tracetail.log"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tracetail",
        description="Follow a log file with vendor stack frames folded away.",
    )
    parser.add_argument("path", type=Path, help="log file to follow")
    parser.add_argument("--base-path", default=None, help="prefix stripped from stack frame paths (default: cwd)")
    parser.add_argument("--show-vendor", action="store_true", help="start with vendor frames expanded")
    parser.add_argument(
        "-n", "--lines", type=int, default=DEFAULT_INITIAL_LINES, help="lines to show from the end of the file"
    )
    parser.add_argument("--max-lines", type=int, default=None, help="scrollback limit kept in memory")
    parser.add_argument(
        "--interval", type=float, default=DEFAULT_REFRESH_INTERVAL, help="seconds between file polls"
    )
    parser.add_argument("--log-file", type=Path, default=None, help="where to write tracetail's own log")
    parser.add_argument("--debug", action="store_true", help="log at debug level")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(args: argparse.Namespace) -> ViewerConfig:
    config = ViewerConfig(
        hide_vendor=not args.show_vendor,
        initial_lines=args.lines,
        max_lines=args.max_lines,
        refresh_interval=args.interval,
    )
    if args.base_path is not None:
        config.base_path = args.base_path
    return config


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    log_file = args.log_file or default_log_file()
    configure_logging(logging.DEBUG if args.debug else logging.INFO, filename=str(log_file))
    logger.info(f"tracetail {__version__} following {args.path}")

    TailApp(args.path, config).run()
