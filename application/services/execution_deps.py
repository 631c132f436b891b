from __future__ import annotations

from dataclasses import dataclass

from application.ports.logger import LoggerPort


@dataclass(frozen=True)
class ExecutionDeps:
    logger: LoggerPort
