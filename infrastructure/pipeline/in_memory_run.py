from __future__ import annotations

from threading import Lock

from domain.run import RunStatus


class InMemoryRun:
    def __init__(self, run_id: str, status: RunStatus = RunStatus.SUCCESS) -> None:
        self.run_id = run_id
        self._status = status
        self._lock = Lock()

    def get_status(self) -> RunStatus:
        with self._lock:
            return self._status

    def set_status(self, status: RunStatus) -> None:
        with self._lock:
            self._status = status
