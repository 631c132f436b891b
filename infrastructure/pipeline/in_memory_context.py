from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from application.ports.pipeline import ConsoleStreamPort, ExecutionNodePort, RunPort
from domain.errors import CollaboratorUnavailable


@dataclass
class InMemoryPipelineContext:
    node: Optional[ExecutionNodePort] = None
    run: Optional[RunPort] = None
    console: Optional[ConsoleStreamPort] = None

    def get_execution_node(self) -> ExecutionNodePort:
        if self.node is None:
            raise CollaboratorUnavailable("No execution node bound to the current context")
        return self.node

    def get_run(self) -> RunPort:
        if self.run is None:
            raise CollaboratorUnavailable("No run bound to the current context")
        return self.run

    def get_console_stream(self) -> ConsoleStreamPort:
        if self.console is None:
            raise CollaboratorUnavailable("No console stream bound to the current context")
        return self.console
