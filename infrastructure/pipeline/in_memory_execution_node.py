from __future__ import annotations

from threading import Lock
from typing import Dict, List, Optional

from domain.annotations import Annotation, AnnotationKind
from domain.run import RunStatus


class InMemoryExecutionNode:
    def __init__(self, node_id: str) -> None:
        self._node_id = node_id
        self._annotations: Dict[AnnotationKind, Annotation] = {}
        self._lock = Lock()

    @property
    def node_id(self) -> str:
        return self._node_id

    def replace_annotation(
        self,
        kind: AnnotationKind,
        payload: str,
        result: Optional[RunStatus] = None,
    ) -> None:
        with self._lock:
            self._annotations[kind] = Annotation(kind=kind, payload=payload, result=result)

    def get_annotation(self, kind: AnnotationKind) -> Optional[Annotation]:
        with self._lock:
            return self._annotations.get(kind)

    def annotations(self) -> List[Annotation]:
        with self._lock:
            return list(self._annotations.values())
