from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, TypeVar

from application.ports.logger import LoggerPort
from application.ports.pipeline import (
    ConsoleStreamPort,
    ExecutionNodePort,
    PipelineContextPort,
    RunPort,
)
from domain.annotations import AnnotationKind
from domain.errors import CollaboratorUnavailable
from domain.log_request import LogRequest
from domain.run import RunStatus
from domain.severity import Severity
from domain.severity_policy import SeverityPolicy, Verdict

T = TypeVar("T")


@dataclass(frozen=True)
class Collaborators:
    node: ExecutionNodePort
    run: RunPort
    console: ConsoleStreamPort


def _require(name: str, getter: Callable[[], T]) -> T:
    try:
        value = getter()
    except CollaboratorUnavailable:
        raise
    except Exception as exc:
        raise CollaboratorUnavailable(f"{name} is not available: {exc}") from exc
    if value is None:
        raise CollaboratorUnavailable(f"{name} is not available")
    return value


def bind_collaborators(ctx: PipelineContextPort) -> Collaborators:
    """Obtain node, run and console up front so a missing one aborts before any side effect."""
    return Collaborators(
        node=_require("execution node", ctx.get_execution_node),
        run=_require("run", ctx.get_run),
        console=_require("console stream", ctx.get_console_stream),
    )


def render_lines(severity: Severity, label: str, message: str) -> List[str]:
    prefix = f"[{severity.name}]"
    lines: List[str] = []
    if label:
        lines.append(f"{prefix} {label}")
    if message:
        segments = [s[:-1] if s.endswith("\r") else s for s in message.split("\n")]
        while segments and segments[-1] == "":
            segments.pop()
        lines.extend(f"{prefix} {segment}" for segment in segments)
    return lines


class LogEmitter:
    def __init__(self, policy: SeverityPolicy, logger: LoggerPort):
        self._policy = policy
        self._logger = logger

    def resolve_severity(self, request: LogRequest) -> Severity:
        raw = request.log_level
        if raw is not None and not isinstance(raw, Severity) and not Severity.is_known(raw):
            self._logger.debug("log.level_fallback", log_level=raw, severity=Severity.default().name)
        return Severity.parse(raw)

    def emit(
        self,
        request: LogRequest,
        node: ExecutionNodePort,
        run: RunPort,
        console: ConsoleStreamPort,
    ) -> str:
        """
        Annotate the node (and possibly the run) and write the console lines.

        Returns the node id. The annotation replace is not safe to run
        concurrently on the same node; the host must serialize such calls.
        """
        severity = self.resolve_severity(request)

        if not request.suppress_annotation:
            self._apply(self._policy.decide(severity, request.label), node, run)

        lines = render_lines(severity, request.label, request.message)
        for line in lines:
            console.write_line(line)

        self._logger.debug(
            "log.emitted",
            node_id=node.node_id,
            severity=severity.name,
            lines=len(lines),
        )
        return node.node_id

    def _apply(self, verdict: Verdict, node: ExecutionNodePort, run: RunPort) -> None:
        if not verdict.annotates:
            return

        node.replace_annotation(AnnotationKind.WARNING, verdict.message, result=verdict.node_result)
        self._logger.debug(
            "log.annotated",
            node_id=node.node_id,
            verdict=verdict.kind.value,
            result=verdict.node_result.value,
        )

        if verdict.fails_run:
            previous = run.get_status()
            run.set_status(RunStatus.FAILURE)
            self._logger.info(
                "log.run_failed",
                node_id=node.node_id,
                previous_status=previous.value if previous is not None else None,
            )
