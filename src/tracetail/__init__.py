"""tracetail - Live log tailing with collapsible vendor stack frames."""

import logging
import sys
from typing import Optional

from .buffer import LineBuffer
from .classify import VendorFrameClassifier
from .collapse import collapse_vendor_frames
from .config import ViewerConfig
from .formatter import LineFormatter
from .lines import PhysicalLine
from .scroll import ScrollState, hide_anchor, show_anchor
from .truncate import truncate_file
from .viewer import Hotkey, TailViewer
from .wrap import wrap

__version__ = "0.1.0"
__all__ = [
    "Hotkey",
    "LineBuffer",
    "LineFormatter",
    "PhysicalLine",
    "ScrollState",
    "TailViewer",
    "VendorFrameClassifier",
    "ViewerConfig",
    "collapse_vendor_frames",
    "configure_logging",
    "hide_anchor",
    "show_anchor",
    "truncate_file",
    "wrap",
]


def configure_logging(level=logging.INFO, filename: Optional[str] = None):
    """Configure logging for tracetail, to a file when the terminal is in use."""
    # Create formatter
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if filename:
        handler = logging.FileHandler(filename)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    logger = logging.getLogger("tracetail")
    logger.setLevel(level)
    # Remove existing handlers to avoid duplicates, closing any open log file
    for old_handler in logger.handlers:
        old_handler.close()
    logger.handlers.clear()
    logger.addHandler(handler)
