from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from zappy.adapters.filesystem import DirectoryZap, FileResource
from zappy.adapters.manifest import Manifest, ManifestError, load_manifest, populate
from zappy.adapters.sqlalchemy import TableResource, TableZap
from zappy.domain.model import RunContext
from zappy.domain.reconciliation import SchedulingMode, ZapDeclaration

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine


def _write(path: Path, payload: dict[str, object]) -> Path:
    path.write_text(json.dumps(payload))
    return path


def test_load_manifest_parses_entries(tmp_path: Path) -> None:
    manifest = load_manifest(
        _write(
            tmp_path / "run.json",
            {
                "cookbook": "base",
                "recipe": "cleanup",
                "resources": [
                    {"type": "file", "path": "/srv/app/a.conf", "content": "x"},
                    {"type": "zap_directory", "path": "/srv/app", "pattern": "*.conf"},
                    {"type": "table", "name": "users", "schema": "main"},
                    {"type": "zap_tables", "pattern": "tmp_*", "schedule": "immediate"},
                ],
            },
        )
    )

    assert manifest.cookbook == "base"
    assert [entry.type for entry in manifest.resources] == [
        "file",
        "zap_directory",
        "table",
        "zap_tables",
    ]
    assert manifest.needs_database


def test_manifest_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        Manifest.model_validate(
            {"resources": [{"type": "file", "path": "/x", "mode": "0644"}]}
        )


def test_manifest_rejects_unknown_resource_types() -> None:
    with pytest.raises(ValidationError):
        Manifest.model_validate({"resources": [{"type": "user", "name": "bob"}]})


def test_populate_declares_resources_and_promotes_deferred_zaps(tmp_path: Path) -> None:
    manifest = Manifest.model_validate(
        {
            "cookbook": "base",
            "recipe": "cleanup",
            "resources": [
                {"type": "zap_directory", "path": str(tmp_path), "exclude": ["*.keep"]},
                {"type": "file", "path": str(tmp_path / "a.conf")},
                {"type": "zap_directory", "path": "/srv", "schedule": "immediate"},
                {"type": "zap_directory", "path": "/opt", "schedule": "inline"},
            ],
        }
    )
    context = RunContext()

    populate(manifest, context)

    resources = context.resource_collection.snapshot()
    assert [type(resource) for resource in resources] == [
        DirectoryZap,
        FileResource,
        DirectoryZap,
        DirectoryZap,
        DirectoryZap,
    ]
    modes = [r.scheduling_mode for r in resources if isinstance(r, ZapDeclaration)]
    assert modes == [
        SchedulingMode.INLINE,
        SchedulingMode.IMMEDIATE,
        SchedulingMode.INLINE,
        SchedulingMode.DEFERRED,
    ]
    deferred = resources[-1]
    assert isinstance(deferred, DirectoryZap)
    assert deferred.path == tmp_path
    assert not deferred.filter(str(tmp_path / "x.keep"))
    assert deferred.filter(str(tmp_path / "x.conf"))
    assert resources[1].provenance.recipe_name == "cleanup"


def test_populate_requires_engine_for_tables() -> None:
    manifest = Manifest.model_validate({"resources": [{"type": "table", "name": "users"}]})

    with pytest.raises(ManifestError):
        populate(manifest, RunContext())


def test_populate_attaches_engine(sqlite_engine: Engine) -> None:
    manifest = Manifest.model_validate(
        {
            "resources": [
                {"type": "table", "name": "users"},
                {"type": "zap_tables", "name": "scratch", "schema": "main"},
            ]
        }
    )
    context = RunContext()

    populate(manifest, context, engine=sqlite_engine)

    table, zap, clone = context.resource_collection.snapshot()
    assert isinstance(table, TableResource)
    assert table.engine is sqlite_engine
    assert isinstance(zap, TableZap)
    assert zap.schema == "main"
    assert isinstance(clone, TableZap)
    assert clone.is_deferred()
