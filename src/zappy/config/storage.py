"""Database configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def get_database_config(*, uri: str | None = None) -> DatabaseConfig:
    """Return ``uri`` when given, else the required ``DATABASE_URI`` variable."""

    if uri:
        return DatabaseConfig(uri=uri)
    return DatabaseConfig(uri=require_env_vars(("DATABASE_URI",))["DATABASE_URI"])
