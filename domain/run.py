from __future__ import annotations

from enum import Enum


class RunStatus(Enum):
    SUCCESS = "SUCCESS"
    UNSTABLE = "UNSTABLE"
    FAILURE = "FAILURE"
