"""File access for tailed logs."""

from .tail import FileTail, default_split_lines

__all__ = ["FileTail", "default_split_lines"]
