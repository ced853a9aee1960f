"""Translate a validated manifest into resources of a run context."""

from __future__ import annotations

import os
from fnmatch import fnmatch
from logging import getLogger
from typing import TYPE_CHECKING

from zappy.adapters.filesystem import DirectoryZap, FileResource
from zappy.adapters.sqlalchemy import TableResource, TableZap
from zappy.domain.model import Provenance

from .schema import DirectoryZapEntry, FileEntry, Manifest, TableEntry, TableZapEntry

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from zappy.domain.model import Resource, RunContext
    from zappy.domain.reconciliation import NameFilter, ZapDeclaration

    from .schema import ZapEntry

log = getLogger(__name__)


class ManifestError(ValueError):
    """Raised when a manifest is structurally valid but cannot be applied."""


def load_manifest(path: Path) -> Manifest:
    return Manifest.model_validate_json(path.read_text())


def _exclude_filter(patterns: tuple[str, ...]) -> NameFilter | None:
    if not patterns:
        return None

    def keep(entry: str) -> bool:
        basename = os.path.basename(entry)
        return not any(fnmatch(basename, pattern) for pattern in patterns)

    return keep


def _zap_options(entry: ZapEntry, provenance: Provenance) -> dict[str, object]:
    return {
        "pattern": entry.pattern,
        "action": entry.action,
        "immediately": entry.schedule == "immediate",
        "provenance": provenance,
    }


def populate(manifest: Manifest, context: RunContext, *, engine: Engine | None = None) -> None:
    """Append the manifest's resources to ``context`` in declaration order.

    Deferred zap entries are promoted once every entry is declared, so their
    deferred clones queue behind all declared resources.
    """

    if manifest.needs_database and engine is None:
        raise ManifestError("Manifest declares tables but no engine was provided")

    provenance = Provenance(cookbook_name=manifest.cookbook, recipe_name=manifest.recipe)
    collection = context.resource_collection
    deferred: list[ZapDeclaration] = []

    for entry in manifest.resources:
        resource: Resource
        match entry:
            case FileEntry():
                resource = FileResource(
                    name=entry.path,
                    content=entry.content,
                    action=entry.action,
                    provenance=provenance,
                )
            case TableEntry():
                resource = TableResource(
                    name=entry.name,
                    schema=entry.schema_name,
                    engine=engine,
                    action=entry.action,
                    provenance=provenance,
                )
            case DirectoryZapEntry():
                resource = DirectoryZap(
                    entry.name or entry.path,
                    path=entry.path,
                    filter=_exclude_filter(entry.exclude),
                    **_zap_options(entry, provenance),
                )
            case TableZapEntry():
                resource = TableZap(
                    entry.name,
                    engine=engine,  # pyright: ignore[reportArgumentType]
                    schema=entry.schema_name,
                    **_zap_options(entry, provenance),
                )
        collection.append(resource)
        if isinstance(entry, (DirectoryZapEntry, TableZapEntry)) and entry.schedule == "deferred":
            deferred.append(resource)  # pyright: ignore[reportArgumentType]

    for declaration in deferred:
        declaration.promote_to_deferred(collection)

    log.debug("Loaded %s resources (%s deferred zaps)", len(collection), len(deferred))
