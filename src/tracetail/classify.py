"""Vendor stack frame classification."""

import re
from typing import Callable, Optional, Union

from .lines import PhysicalLine

DEFAULT_VENDOR_SEGMENT = "/vendor/"

# Container dispatch into application code lives under vendor/ but
# the frame is the app's own entry point.
DEFAULT_BOUNDARY_PATTERN = r"BoundMethod\.php\([0-9]+\): App"

MAIN_FRAME = "{main}"

FrameClassifier = Callable[[str], bool]


class VendorFrameClassifier:
    """
    Decides whether a stack frame line comes from library code.

    A line is vendor when it is a row already tagged as vendor, when it
    contains the library path segment and is not an application boundary
    frame, or when it is the terminal ``{main}`` frame.
    """

    def __init__(
        self,
        vendor_segment: str = DEFAULT_VENDOR_SEGMENT,
        boundary_pattern: Optional[str] = DEFAULT_BOUNDARY_PATTERN,
        main_frame: str = MAIN_FRAME,
    ):
        self.vendor_segment = vendor_segment
        self.main_frame = main_frame
        self._boundary = re.compile(boundary_pattern) if boundary_pattern else None

    def is_boundary_frame(self, line: str) -> bool:
        """True for dispatch frames that hand off to application code."""
        return bool(self._boundary and self._boundary.search(line))

    def is_vendor_frame(self, line: Union[str, PhysicalLine]) -> bool:
        if isinstance(line, PhysicalLine):
            return line.is_vendor

        if self.vendor_segment and self.vendor_segment in line and not self.is_boundary_frame(line):
            return True

        return bool(self.main_frame) and line.rstrip().endswith(self.main_frame)

    __call__ = is_vendor_frame
