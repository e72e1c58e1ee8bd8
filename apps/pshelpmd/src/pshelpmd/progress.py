"""Console progress rendering helpers."""

from __future__ import annotations


class ConsoleProgressReporter:
    """Renders per-item batch progress in-place on the terminal."""

    def __init__(self) -> None:
        self._line_open = False
        self._last_line_width = 0

    def report_item(self, index: int, total: int, item_name: str) -> None:
        width = len(str(total))
        line = f"Processing {index:>{width}} / {total}: {item_name}"
        padding = " " * max(self._last_line_width - len(line), 0)
        print(f"\r{line}{padding}", end="", flush=True)
        self._last_line_width = len(line)
        self._line_open = True

    def close_open_line(self) -> None:
        if self._line_open:
            print()
            self._line_open = False
            self._last_line_width = 0
