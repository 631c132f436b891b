#!/usr/bin/env python3
"""
Run one logger step against in-memory pipeline collaborators

Usage:
  python scripts/smoke_log_step.py --message <text> (--label <text> | --label-encoded <base64>)
                                   [--log-level <level>] [--skip-ui-coloring]

Examples:
  python scripts/smoke_log_step.py --message 'step one' --label 'Deploy' --log-level WARN
  python scripts/smoke_log_step.py --message 'boom' --label-encoded QnVpbGQgZmFpbGVk --log-level FATAL
"""
from __future__ import annotations

import argparse
import sys
import uuid
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

from application.handlers.log_handler import LogStepHandler
from application.services.execution_deps import ExecutionDeps
from domain.severity_policy import SeverityPolicy
from domain.steps.log import LogStep
from infrastructure.config.settings import load_settings
from infrastructure.console.text_console_stream import TextConsoleStream
from infrastructure.logging.log_setup import setup_console_logging
from infrastructure.logging.loguru_logger import LoguruLogger
from infrastructure.pipeline.in_memory_context import InMemoryPipelineContext
from infrastructure.pipeline.in_memory_execution_node import InMemoryExecutionNode
from infrastructure.pipeline.in_memory_run import InMemoryRun


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a logger step locally")
    parser.add_argument("--message", required=True, help="Message body written to the console")
    label = parser.add_mutually_exclusive_group()
    label.add_argument("--label", help="Short label shown on the node")
    label.add_argument("--label-encoded", help="Base64 encoded label")
    parser.add_argument("--log-level", default="INFO", help="TRACE, DEBUG, INFO, WARN, ERROR or FATAL")
    parser.add_argument("--skip-ui-coloring", action="store_true", help="Do not annotate node or run")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = _build_parser().parse_args(argv)
    settings = load_settings()
    setup_console_logging(level=settings.diagnostics_level)

    run = InMemoryRun(run_id=uuid.uuid4().hex)
    node = InMemoryExecutionNode(node_id=settings.default_node_id)
    ctx = InMemoryPipelineContext(node=node, run=run, console=TextConsoleStream())
    deps = ExecutionDeps(logger=LoguruLogger().bind(run_id=run.run_id))

    step = LogStep(
        id=settings.default_node_id,
        name="logger",
        message=args.message,
        label=args.label,
        label_encoded=args.label_encoded,
        log_level=args.log_level,
        skip_ui_coloring=args.skip_ui_coloring,
    )
    outcome = LogStepHandler(SeverityPolicy()).handle(step, ctx, deps)

    if not outcome.ok:
        print(f"Error: {outcome.error_message}", file=sys.stderr)
        sys.exit(1)

    print(f"Node: {outcome.value}")
    print(f"Run status: {run.get_status().value}")
    for annotation in node.annotations():
        result = f" ({annotation.result.value})" if annotation.result else ""
        print(f"Annotation {annotation.kind.value}: {annotation.payload}{result}")
    sys.exit(0)


if __name__ == "__main__":
    main()
