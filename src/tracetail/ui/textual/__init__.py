"""Textual host for the tail viewer."""

from .tail_widget import TailWidget

__all__ = ["TailWidget"]
