#!/usr/bin/env python3
"""Profile rendering a log full of stack traces for snakeviz analysis."""

import cProfile
import pstats
import sys
from pathlib import Path

from tracetail import TailViewer, ViewerConfig
from tracetail.file import FileTail


def profile_formatting(log_path: str, output_file: str = "logs/profile.stats", width: int = 120, height: int = 40):
    """Profile a render in both vendor modes plus a toggle."""

    # Ensure output directory exists
    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    viewer = TailViewer(log_path, ViewerConfig())
    viewer.buffer.extend(FileTail(log_path, initial_lines=1_000_000).read_new())

    print(f"Profiling rendering of {len(viewer.buffer):,} lines from {log_path}")
    print(f"Output will be saved to {output_file}")
    print("Running profiler...")

    profiler = cProfile.Profile()
    profiler.enable()

    # This is what we're profiling
    viewer.render(width, height)
    viewer.scroll.index = len(viewer.lines) // 2
    viewer.toggle_vendor()
    viewer.render(width, height)

    profiler.disable()

    # Save stats
    profiler.dump_stats(output_file)

    # Print summary
    print(f"\nProfile saved to {output_file}")
    print("To view with snakeviz:")
    print(f"  snakeviz {output_file}")
    print("\nTop 20 functions by cumulative time:")
    stats = pstats.Stats(output_file)
    stats.sort_stats("cumulative")
    stats.print_stats(20)

    print("\n\nWrap functions:")
    stats.print_stats("wrap")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python profile_formatting.py <log_file> [output.stats]")
        print("Example: python profile_formatting.py storage/logs/laravel.log profile.stats")
        sys.exit(1)

    log_path = sys.argv[1]
    output_file = sys.argv[2] if len(sys.argv) > 2 else "profile.stats"

    if not Path(log_path).exists():
        print(f"Error: {log_path} does not exist")
        sys.exit(1)

    profile_formatting(log_path, output_file)
