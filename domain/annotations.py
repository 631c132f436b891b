from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from domain.run import RunStatus


class AnnotationKind(Enum):
    LABEL = "label"
    WARNING = "warning"


@dataclass(frozen=True)
class Annotation:
    kind: AnnotationKind
    payload: str
    result: Optional[RunStatus] = None  # node-local status, warnings only
