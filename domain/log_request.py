from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Optional, Union

from domain.errors import ConstructionError
from domain.severity import Severity


def decode_label(encoded: str) -> str:
    """Decode a base64 (UTF-8) label."""
    try:
        raw = base64.b64decode(encoded, validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, TypeError, ValueError) as exc:
        raise ConstructionError(f"label_encoded is not valid base64 text: {exc}") from exc


@dataclass(frozen=True)
class LogRequest:
    message: str
    label: str
    log_level: Optional[Union[str, Severity]] = None
    suppress_annotation: bool = False

    def __post_init__(self) -> None:
        if self.message is None:
            raise ConstructionError("message field must be defined")
        if self.label is None:
            raise ConstructionError("label or label_encoded field must be defined")

    @classmethod
    def build(
        cls,
        message: Optional[str],
        label: Optional[str] = None,
        label_encoded: Optional[str] = None,
        log_level: Optional[Union[str, Severity]] = None,
        skip_ui_coloring: bool = False,
    ) -> "LogRequest":
        if message is None:
            raise ConstructionError("message field must be defined")

        # label_encoded exists for hosts that null out plain-text arguments
        # carrying dynamic environment values.
        if label is None:
            if label_encoded is None:
                raise ConstructionError("label or label_encoded field must be defined")
            label = decode_label(label_encoded)

        return cls(
            message=message,
            label=label,
            log_level=log_level,
            suppress_annotation=bool(skip_ui_coloring),
        )

    @property
    def severity(self) -> Severity:
        return Severity.parse(self.log_level)
