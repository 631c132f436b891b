from __future__ import annotations

from enum import Enum
from typing import Optional, Union


class Severity(Enum):
    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    FATAL = "FATAL"

    @classmethod
    def default(cls) -> "Severity":
        return cls.INFO

    @classmethod
    def parse(cls, text: Optional[Union[str, "Severity"]]) -> "Severity":
        """
        Resolve free text to a Severity.

        Matching is case-insensitive. None or unknown text resolves to
        INFO instead of raising: callers passing arbitrary text must not
        break the pipeline.
        """
        if isinstance(text, cls):
            return text
        if not isinstance(text, str):
            return cls.default()
        try:
            return cls[text.upper()]
        except KeyError:
            return cls.default()

    @classmethod
    def is_known(cls, text: Optional[str]) -> bool:
        return isinstance(text, str) and text.upper() in cls.__members__
