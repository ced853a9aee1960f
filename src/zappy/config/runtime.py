"""Run-level configuration values."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Final

from .env import env_flag
from .errors import ConfigurationError

DEFAULT_LOG_LEVEL: Final[str] = "INFO"


@dataclass(frozen=True, slots=True)
class RunConfig:
    why_run: bool = False
    log_level: int = logging.INFO


def parse_log_level(value: str) -> int:
    level = logging.getLevelNamesMapping().get(value.strip().upper())
    if level is None:
        raise ConfigurationError(f"Unknown log level: {value!r}")
    return level


def get_run_config() -> RunConfig:
    return RunConfig(
        why_run=env_flag("ZAPPY_WHY_RUN"),
        log_level=parse_log_level(os.getenv("ZAPPY_LOG_LEVEL") or DEFAULT_LOG_LEVEL),
    )
