from __future__ import annotations


class LoggerStepError(Exception):
    pass


class ConstructionError(LoggerStepError, ValueError):
    """Raised when a log request cannot be built from the supplied arguments."""


class CollaboratorUnavailable(LoggerStepError, RuntimeError):
    """Raised when the execution node, run or console stream is not bound."""
