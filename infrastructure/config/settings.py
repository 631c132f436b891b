from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values

_env_path = Path(__file__).parent.parent.parent / ".env"

DEFAULT_DIAGNOSTICS_LEVEL = "INFO"
DEFAULT_NODE_ID = "log"


@dataclass(frozen=True)
class LoggerStepSettings:
    diagnostics_level: str = DEFAULT_DIAGNOSTICS_LEVEL
    default_node_id: str = DEFAULT_NODE_ID


def load_settings(env: Optional[Mapping[str, str]] = None) -> LoggerStepSettings:
    """
    Read settings from the process environment, falling back to the project .env.

    Environment variables take precedence over .env values.
    """
    values = {}
    if env is None:
        if _env_path.exists():
            values.update({k: v for k, v in dotenv_values(_env_path).items() if v is not None})
        values.update(os.environ)
    else:
        values.update(env)

    return LoggerStepSettings(
        diagnostics_level=(values.get("LOGGER_STEP_DIAGNOSTICS_LEVEL") or DEFAULT_DIAGNOSTICS_LEVEL).upper(),
        default_node_id=values.get("LOGGER_STEP_DEFAULT_NODE_ID") or DEFAULT_NODE_ID,
    )
