from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from domain.run import RunStatus
from domain.severity import Severity


class VerdictKind(Enum):
    NONE = "none"
    DEGRADED = "degraded"
    FAILED = "failed"
    FAILED_PROPAGATE = "failed_propagate"


_NODE_RESULTS: Dict[VerdictKind, Optional[RunStatus]] = {
    VerdictKind.NONE: None,
    VerdictKind.DEGRADED: RunStatus.UNSTABLE,
    VerdictKind.FAILED: RunStatus.FAILURE,
    VerdictKind.FAILED_PROPAGATE: RunStatus.FAILURE,
}


@dataclass(frozen=True)
class Verdict:
    kind: VerdictKind
    message: Optional[str] = None

    @property
    def node_result(self) -> Optional[RunStatus]:
        return _NODE_RESULTS[self.kind]

    @property
    def annotates(self) -> bool:
        return self.kind is not VerdictKind.NONE

    @property
    def fails_run(self) -> bool:
        return self.kind is VerdictKind.FAILED_PROPAGATE


class SeverityPolicy:
    """
    Maps a severity to the annotation outcome for the node and the run.

    The verdict message is always the label: annotations surface the short
    label while the console carries the full message body.
    """

    _TABLE: Dict[Severity, VerdictKind] = {
        Severity.TRACE: VerdictKind.NONE,
        Severity.DEBUG: VerdictKind.NONE,
        Severity.INFO: VerdictKind.NONE,
        Severity.WARN: VerdictKind.DEGRADED,
        Severity.ERROR: VerdictKind.FAILED,
        Severity.FATAL: VerdictKind.FAILED_PROPAGATE,
    }

    def __init__(self) -> None:
        missing = [s.name for s in Severity if s not in self._TABLE]
        if missing:
            raise RuntimeError(f"No verdict mapped for severities: {missing}")

    def decide(self, severity: Severity, label: str) -> Verdict:
        kind = self._TABLE[severity]
        if kind is VerdictKind.NONE:
            return Verdict(kind=kind)
        return Verdict(kind=kind, message=label)
