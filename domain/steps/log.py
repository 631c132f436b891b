from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from domain.steps.base import Step


@dataclass(frozen=True)
class LogStep(Step):
    message: Optional[str] = None
    label: Optional[str] = None
    label_encoded: Optional[str] = None
    log_level: Optional[str] = "INFO"
    skip_ui_coloring: bool = False
