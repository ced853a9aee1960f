"""Application configuration helpers."""

from __future__ import annotations

from zappy.common.logging import configure_logging

from .env import env_flag, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .runtime import RunConfig, get_run_config, parse_log_level
from .storage import DatabaseConfig, get_database_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "RunConfig",
    "configure_logging",
    "env_flag",
    "get_database_config",
    "get_run_config",
    "parse_log_level",
    "require_env_vars",
]
