"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import create_engine

from zappy.adapters.manifest import load_manifest, populate
from zappy.config import get_database_config, get_run_config
from zappy.domain.model import RunContext
from zappy.domain.runner import converge

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from zappy.domain.runner import RunReport

log = getLogger(__name__)


def converge_manifest(
    path: Path,
    *,
    why_run: bool | None = None,
    engine: Engine | None = None,
) -> RunReport:
    """Load the manifest at ``path`` and converge it.

    ``why_run`` defaults to the ``ZAPPY_WHY_RUN`` setting. When the manifest
    declares tables and no ``engine`` is passed, one is created from the
    manifest's ``database_uri`` (or ``DATABASE_URI``) and disposed afterwards.
    """

    config = get_run_config()
    manifest = load_manifest(path)
    context = RunContext(why_run=config.why_run if why_run is None else why_run)

    owned_engine: Engine | None = None
    if engine is None and manifest.needs_database:
        database = get_database_config(uri=manifest.database_uri)
        owned_engine = engine = create_engine(database.uri)

    log.info("Starting run for %s: why_run=%s", path, context.why_run)
    try:
        populate(manifest, context, engine=engine)
        report = converge(context)
    finally:
        if owned_engine is not None:
            owned_engine.dispose()

    log.info(
        f"Finished run for {path}: processed={report.processed}, "
        f"updated={report.updated}, failures={len(report.failures)}"
    )
    return report
