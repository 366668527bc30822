"""Viewer settings."""

import os
from dataclasses import dataclass, field
from typing import Optional

from .classify import DEFAULT_BOUNDARY_PATTERN, DEFAULT_VENDOR_SEGMENT

DEFAULT_INITIAL_LINES = 100
DEFAULT_REFRESH_INTERVAL = 0.5


@dataclass
class ViewerConfig:
    """
    Settings shared by the viewer core and the Textual widget.

    Attributes:
        base_path: Prefix removed from stack frame paths
        vendor_segment: Path segment marking library code
        boundary_pattern: Regex for dispatch frames that count as application code
        hide_vendor: Start with vendor frames collapsed
        initial_lines: Lines read from the end of the file on first open
        max_lines: Scrollback limit for the in-memory buffer, None for unlimited
        refresh_interval: Seconds between file polls
    """

    base_path: Optional[str] = field(default_factory=os.getcwd)
    vendor_segment: str = DEFAULT_VENDOR_SEGMENT
    boundary_pattern: Optional[str] = DEFAULT_BOUNDARY_PATTERN
    hide_vendor: bool = True
    initial_lines: int = DEFAULT_INITIAL_LINES
    max_lines: Optional[int] = None
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL

    def __post_init__(self):
        if self.initial_lines < 0:
            raise ValueError("initial_lines can't be negative")
        if self.max_lines is not None and self.max_lines <= 0:
            raise ValueError("max_lines must be positive")
        if self.refresh_interval <= 0:
            raise ValueError("refresh_interval must be positive")
