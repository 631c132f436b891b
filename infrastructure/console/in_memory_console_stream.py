from __future__ import annotations

from threading import Lock
from typing import List


class InMemoryConsoleStream:
    def __init__(self) -> None:
        self._lines: List[str] = []
        self._lock = Lock()

    def write_line(self, line: str) -> None:
        with self._lock:
            self._lines.append(line)

    def lines(self) -> List[str]:
        with self._lock:
            return list(self._lines)
