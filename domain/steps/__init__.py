from domain.steps.base import Step
from domain.steps.log import LogStep

__all__ = [
    "Step",
    "LogStep",
]
