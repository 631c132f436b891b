import sys

from loguru import logger


def setup_console_logging(level: str = "INFO") -> None:
    """Route diagnostics to stderr so stdout stays the step's console stream."""
    logger.remove()
    logger.add(lambda msg: print(msg, end="", file=sys.stderr), level=level.upper())
