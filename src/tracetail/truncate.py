"""Clearing of the backing log file."""

import logging
from pathlib import Path
from typing import Callable, Optional, Union

logger = logging.getLogger(__name__)


def truncate_file(path: Union[Path, str], on_cleared: Optional[Callable[[], None]] = None) -> bool:
    """
    Empty the log file and then the lines held in memory.

    Opening for write truncates the file, or creates it when missing. If the
    file can't be opened nothing happens, and the in-memory lines are kept.

    Args:
        path: Backing log file
        on_cleared: Called after the file was truncated, clears the buffer

    Returns:
        True if the file was truncated
    """
    try:
        with open(path, "w"):
            pass
    except OSError as e:
        logger.debug(f"Could not truncate {path}: {e}")
        return False

    logger.info(f"Truncated {path}")
    if on_cleared is not None:
        on_cleared()
    return True
