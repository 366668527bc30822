"""Collapsing of contiguous vendor frame rows."""

from typing import List, Sequence

from .lines import PhysicalLine


def collapse_vendor_frames(lines: Sequence[PhysicalLine]) -> List[PhysicalLine]:
    """
    Keep one row per contiguous run of vendor rows.

    The bottom-most row of a run is kept because it holds the running
    compressed count; keeping any other row would lose it and break the
    scroll position when frames are expanded again.
    """
    kept = []
    in_run = False

    # Walk backwards so the first vendor row seen in a run is the last one
    for line in reversed(lines):
        if line.is_vendor:
            if in_run:
                continue
            in_run = True
        else:
            in_run = False
        kept.append(line)

    kept.reverse()
    return kept
