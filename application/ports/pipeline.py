"""
Ports onto the host pipeline engine.

The host owns execution nodes, runs and the console stream. Implementations
must serialize annotation changes on a single node; callers of these ports
do not lock.
"""
from __future__ import annotations

from typing import Optional, Protocol

from domain.annotations import AnnotationKind
from domain.run import RunStatus


class ExecutionNodePort(Protocol):
    @property
    def node_id(self) -> str:
        ...

    def replace_annotation(
        self,
        kind: AnnotationKind,
        payload: str,
        result: Optional[RunStatus] = None,
    ) -> None:
        """Add an annotation, overwriting any existing one of the same kind."""
        ...


class RunPort(Protocol):
    def get_status(self) -> RunStatus:
        ...

    def set_status(self, status: RunStatus) -> None:
        ...


class ConsoleStreamPort(Protocol):
    def write_line(self, line: str) -> None:
        ...


class PipelineContextPort(Protocol):
    """Raises CollaboratorUnavailable when the requested collaborator is not bound."""

    def get_execution_node(self) -> ExecutionNodePort:
        ...

    def get_run(self) -> RunPort:
        ...

    def get_console_stream(self) -> ConsoleStreamPort:
        ...
