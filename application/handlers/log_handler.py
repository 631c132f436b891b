# application/handlers/log_handler.py
from __future__ import annotations

from application.handlers.base import StepHandler
from application.outcome import StepOutcome
from application.ports.pipeline import PipelineContextPort
from application.services.execution_deps import ExecutionDeps
from application.services.log_emitter import LogEmitter, bind_collaborators
from domain.annotations import AnnotationKind
from domain.errors import LoggerStepError
from domain.log_request import LogRequest
from domain.severity_policy import SeverityPolicy
from domain.steps.log import LogStep


class LogStepHandler(StepHandler):
    def __init__(self, policy: SeverityPolicy):
        self._policy = policy

    def supports(self, step) -> bool:
        return isinstance(step, LogStep)

    def handle(self, step: LogStep, ctx: PipelineContextPort, deps: ExecutionDeps) -> StepOutcome:
        logger = deps.logger.bind(step_id=step.id)
        try:
            request = LogRequest.build(
                message=step.message,
                label=step.label,
                label_encoded=step.label_encoded,
                log_level=step.log_level,
                skip_ui_coloring=step.skip_ui_coloring,
            )
            collaborators = bind_collaborators(ctx)
        except LoggerStepError as exc:
            logger.error("log.step_failed", error=str(exc), error_type=type(exc).__name__)
            return StepOutcome(ok=False, error_message=str(exc))

        emitter = LogEmitter(self._policy, logger)

        # The severity label is shown on the node even when coloring is skipped.
        collaborators.node.replace_annotation(
            AnnotationKind.LABEL, request.severity.name
        )

        node_id = emitter.emit(
            request,
            collaborators.node,
            collaborators.run,
            collaborators.console,
        )
        return StepOutcome(ok=True, value=node_id)
