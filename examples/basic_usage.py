#!/usr/bin/env python3
"""
Basic usage example for tracetail.

This example demonstrates:
- Tailing a log file into a viewer
- Rendering with vendor frames collapsed and expanded
- Keeping the scroll position when toggling
- Truncating the log
"""

import tempfile
from pathlib import Path

from tracetail import TailViewer, ViewerConfig
from tracetail.file import FileTail

SAMPLE = """[2024-05-01 10:00:00] local.INFO: Starting import
[2024-05-01 10:00:01] local.ERROR: Connection refused {"exception":"[object] (PDOException(code: 2002): Connection refused at /srv/app/vendor/laravel/framework/src/Illuminate/Database/Connectors/Connector.php:70)
[stacktrace]
#0 /srv/app/vendor/laravel/framework/src/Illuminate/Database/Connectors/Connector.php(70): PDO->__construct()
#1 /srv/app/vendor/laravel/framework/src/Illuminate/Database/Connectors/Connector.php(46): Illuminate\\Database\\Connectors\\Connector->createPdoConnection()
#2 /srv/app/vendor/laravel/framework/src/Illuminate/Container/BoundMethod.php(36): App\\Jobs\\ImportUsers->handle()
#3 /srv/app/app/Jobs/ImportUsers.php(25): Illuminate\\Database\\Connection->select()
#4 /srv/app/vendor/laravel/framework/src/Illuminate/Queue/CallQueuedHandler.php(124): App\\Jobs\\ImportUsers->handle()
#5 {main}
"}
[2024-05-01 10:00:02] local.INFO: Retrying in 5 seconds
"""


def show(viewer: TailViewer, width: int, height: int):
    viewer.render(width, height)
    print(f"{len(viewer.lines)} rows, index {viewer.scroll.index}, vendor {'hidden' if viewer.hide_vendor else 'shown'}")
    for row in viewer.window(height):
        print(row.text)


def main():
    with tempfile.NamedTemporaryFile(mode="w", suffix=".log", delete=False) as f:
        f.write(SAMPLE)
        log_path = Path(f.name)

    print(f"Created sample log at: {log_path}")

    try:
        viewer = TailViewer(log_path, ViewerConfig(base_path="/srv/app"))
        tail = FileTail(log_path)
        viewer.buffer.extend(tail.read_new())

        print("\n=== Vendor frames collapsed ===")
        show(viewer, 80, 40)

        print("\n=== Vendor frames expanded ===")
        viewer.toggle_vendor()
        show(viewer, 80, 40)

        print("\n=== Scrolled, then collapsed again ===")
        viewer.scroll.index = 12
        viewer.toggle_vendor()
        show(viewer, 80, 6)

        print("\n=== Following appended lines ===")
        with open(log_path, "a") as log:
            log.write("[2024-05-01 10:00:07] local.INFO: Import finished\n")
        viewer.buffer.extend(tail.read_new())
        print(f"Buffer now holds {len(viewer.buffer)} lines, last: {viewer.buffer[-1]}")

        print("\n=== Truncating ===")
        viewer.truncate()
        print(f"File size: {log_path.stat().st_size}, buffered lines: {len(viewer.buffer)}")

    finally:
        log_path.unlink()
        print(f"\nCleaned up {log_path}")


if __name__ == "__main__":
    main()
    print("\nExample complete!")
