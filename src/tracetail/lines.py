"""Rendered row type shared by the formatter, collapser and scroll logic."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PhysicalLine:
    """
    One terminal row of the rendered log.

    Attributes:
        text: Printable text, may contain SGR escape sequences
        is_vendor: Row belongs to a vendor stack frame (shown or summarised)
        compressed: Running total of rows hidden so far in the render pass,
            set only on collapsed vendor summary rows
        line_no: Index of the raw buffer line this row was wrapped from
    """

    text: str
    is_vendor: bool = False
    compressed: Optional[int] = None
    line_no: Optional[int] = None

    def __str__(self) -> str:
        return self.text
