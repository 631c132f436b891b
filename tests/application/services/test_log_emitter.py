from __future__ import annotations

from typing import Any, Dict, List

import pytest

from application.services.log_emitter import LogEmitter, bind_collaborators, render_lines
from domain.annotations import AnnotationKind
from domain.errors import CollaboratorUnavailable
from domain.log_request import LogRequest
from domain.run import RunStatus
from domain.severity import Severity
from domain.severity_policy import SeverityPolicy
from infrastructure.console.in_memory_console_stream import InMemoryConsoleStream
from infrastructure.pipeline.in_memory_context import InMemoryPipelineContext
from infrastructure.pipeline.in_memory_execution_node import InMemoryExecutionNode
from infrastructure.pipeline.in_memory_run import InMemoryRun


class MockLogger:
    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []

    def debug(self, event: str, **fields: Any) -> None:
        self.calls.append({"event": event, "level": "debug", **fields})

    def info(self, event: str, **fields: Any) -> None:
        self.calls.append({"event": event, "level": "info", **fields})

    def error(self, event: str, **fields: Any) -> None:
        self.calls.append({"event": event, "level": "error", **fields})

    def bind(self, **fields: Any) -> "MockLogger":
        return self


class RecordingRun:
    def __init__(self, status: RunStatus = RunStatus.SUCCESS) -> None:
        self.status = status
        self.set_calls: List[RunStatus] = []

    def get_status(self) -> RunStatus:
        return self.status

    def set_status(self, status: RunStatus) -> None:
        self.set_calls.append(status)
        self.status = status


def _emit(level, label="Deploy", message="details", suppress=False, run=None, node=None, logger=None):
    node = node or InMemoryExecutionNode(node_id="node-1")
    run = run or RecordingRun()
    console = InMemoryConsoleStream()
    emitter = LogEmitter(SeverityPolicy(), logger or MockLogger())
    request = LogRequest(message=message, label=label, log_level=level, suppress_annotation=suppress)
    node_id = emitter.emit(request, node, run, console)
    return node_id, node, run, console


class TestLogEmitterAnnotation:
    @pytest.mark.parametrize("level", ["TRACE", "DEBUG", "INFO"])
    @pytest.mark.parametrize("suppress", [False, True])
    def test_quiet_levels_do_not_annotate(self, level, suppress):
        _, node, run, _ = _emit(level, suppress=suppress)
        assert node.annotations() == []
        assert run.set_calls == []
        assert run.status is RunStatus.SUCCESS

    def test_warn_marks_node_unstable(self):
        _, node, run, _ = _emit("WARN")
        annotation = node.get_annotation(AnnotationKind.WARNING)
        assert annotation.payload == "Deploy"
        assert annotation.result is RunStatus.UNSTABLE
        assert run.set_calls == []

    def test_error_marks_node_failed_without_touching_run(self):
        _, node, run, _ = _emit("ERROR")
        annotation = node.get_annotation(AnnotationKind.WARNING)
        assert annotation.payload == "Deploy"
        assert annotation.result is RunStatus.FAILURE
        assert run.set_calls == []
        assert run.status is RunStatus.SUCCESS

    @pytest.mark.parametrize("previous", list(RunStatus))
    def test_fatal_fails_run_unconditionally(self, previous):
        _, node, run, _ = _emit("FATAL", run=RecordingRun(status=previous))
        annotation = node.get_annotation(AnnotationKind.WARNING)
        assert annotation.payload == "Deploy"
        assert annotation.result is RunStatus.FAILURE
        assert run.set_calls == [RunStatus.FAILURE]
        assert run.status is RunStatus.FAILURE

    @pytest.mark.parametrize("level", list(Severity))
    def test_suppress_annotation_skips_node_and_run(self, level):
        _, node, run, console = _emit(level, suppress=True)
        assert node.annotations() == []
        assert run.set_calls == []
        assert console.lines() == [f"[{level.name}] Deploy", f"[{level.name}] details"]

    def test_annotation_uses_label_not_message(self):
        _, node, _, _ = _emit("ERROR", label="short", message="long body")
        assert node.get_annotation(AnnotationKind.WARNING).payload == "short"

    def test_repeated_emit_replaces_warning(self):
        node = InMemoryExecutionNode(node_id="node-1")
        _emit("WARN", node=node)
        _emit("WARN", node=node)
        warnings = [a for a in node.annotations() if a.kind is AnnotationKind.WARNING]
        assert len(warnings) == 1

    def test_later_annotation_overwrites_earlier(self):
        node = InMemoryExecutionNode(node_id="node-1")
        _emit("WARN", label="first", node=node)
        _emit("ERROR", label="second", node=node)
        annotation = node.get_annotation(AnnotationKind.WARNING)
        assert annotation.payload == "second"
        assert annotation.result is RunStatus.FAILURE

    def test_label_annotation_left_untouched(self):
        node = InMemoryExecutionNode(node_id="node-1")
        node.replace_annotation(AnnotationKind.LABEL, "INFO")
        _emit("WARN", node=node)
        assert node.get_annotation(AnnotationKind.LABEL).payload == "INFO"
        assert len(node.annotations()) == 2


class TestLogEmitterConsole:
    def test_label_then_message_lines(self):
        _, _, _, console = _emit("WARN", label="Deploy", message="step one\nstep two")
        assert console.lines() == [
            "[WARN] Deploy",
            "[WARN] step one",
            "[WARN] step two",
        ]

    def test_empty_label_writes_only_message(self):
        _, _, _, console = _emit("INFO", label="", message="only body")
        assert console.lines() == ["[INFO] only body"]

    def test_empty_message_writes_only_label(self):
        _, _, _, console = _emit("INFO", label="Deploy", message="")
        assert console.lines() == ["[INFO] Deploy"]

    def test_both_empty_writes_nothing(self):
        _, _, _, console = _emit("ERROR", label="", message="")
        assert console.lines() == []

    def test_unknown_level_prints_info(self):
        logger = MockLogger()
        _, node, run, console = _emit("banana", logger=logger)
        assert console.lines() == ["[INFO] Deploy", "[INFO] details"]
        assert node.annotations() == []
        assert any(c["event"] == "log.level_fallback" and c["log_level"] == "banana" for c in logger.calls)

    def test_missing_level_prints_info_without_fallback_event(self):
        logger = MockLogger()
        _, _, _, console = _emit(None, logger=logger)
        assert console.lines()[0] == "[INFO] Deploy"
        assert not any(c["event"] == "log.level_fallback" for c in logger.calls)

    def test_lowercase_level_prints_upper(self):
        _, _, _, console = _emit("error")
        assert console.lines()[0] == "[ERROR] Deploy"


class TestLogEmitterResult:
    def test_returns_node_id(self):
        node_id, _, _, _ = _emit("INFO")
        assert node_id == "node-1"

    def test_fatal_logs_run_failure(self):
        logger = MockLogger()
        _emit("FATAL", logger=logger)
        call = next(c for c in logger.calls if c["event"] == "log.run_failed")
        assert call["level"] == "info"
        assert call["previous_status"] == "SUCCESS"


class TestRenderLines:
    def test_blank_interior_lines_are_kept(self):
        assert render_lines(Severity.INFO, "", "a\n\nb") == ["[INFO] a", "[INFO] ", "[INFO] b"]

    def test_trailing_newlines_are_dropped(self):
        assert render_lines(Severity.INFO, "", "a\n\n") == ["[INFO] a"]

    def test_newline_only_message_writes_nothing(self):
        assert render_lines(Severity.INFO, "", "\n") == []

    def test_crlf_line_endings(self):
        assert render_lines(Severity.DEBUG, "", "a\r\nb") == ["[DEBUG] a", "[DEBUG] b"]

    def test_only_newline_splits_lines(self):
        assert render_lines(Severity.INFO, "", "page1\x0cpage2") == ["[INFO] page1\x0cpage2"]
        assert render_lines(Severity.INFO, "", "a\u2028b") == ["[INFO] a\u2028b"]
        assert render_lines(Severity.INFO, "", "a\x0bb\x1cc\x85d\u2029e") == ["[INFO] a\x0bb\x1cc\x85d\u2029e"]

    def test_only_one_trailing_carriage_return_is_removed(self):
        assert render_lines(Severity.INFO, "", "a\r\r\nb\r\n") == ["[INFO] a\r", "[INFO] b"]

    def test_crlf_only_message_writes_nothing(self):
        assert render_lines(Severity.INFO, "", "\r\n") == []


class TestBindCollaborators:
    def test_binds_all_collaborators(self):
        node = InMemoryExecutionNode(node_id="n")
        run = InMemoryRun(run_id="r")
        console = InMemoryConsoleStream()
        bound = bind_collaborators(InMemoryPipelineContext(node=node, run=run, console=console))
        assert bound.node is node
        assert bound.run is run
        assert bound.console is console

    @pytest.mark.parametrize("missing", ["node", "run", "console"])
    def test_missing_collaborator_raises(self, missing):
        parts = {
            "node": InMemoryExecutionNode(node_id="n"),
            "run": InMemoryRun(run_id="r"),
            "console": InMemoryConsoleStream(),
        }
        parts[missing] = None
        with pytest.raises(CollaboratorUnavailable):
            bind_collaborators(InMemoryPipelineContext(**parts))

    def test_getter_failure_is_wrapped(self):
        class BrokenContext(InMemoryPipelineContext):
            def get_run(self):
                raise LookupError("no run")

        ctx = BrokenContext(node=InMemoryExecutionNode(node_id="n"), console=InMemoryConsoleStream())
        with pytest.raises(CollaboratorUnavailable) as excinfo:
            bind_collaborators(ctx)
        assert "no run" in str(excinfo.value)

    def test_getter_returning_none_raises(self):
        class NoneContext(InMemoryPipelineContext):
            def get_console_stream(self):
                return None

        ctx = NoneContext(node=InMemoryExecutionNode(node_id="n"), run=InMemoryRun(run_id="r"))
        with pytest.raises(CollaboratorUnavailable):
            bind_collaborators(ctx)
