from __future__ import annotations

import json
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, inspect

from zappy.app import converge_manifest

if TYPE_CHECKING:
    from pathlib import Path

    import pytest


def _manifest(path: Path, resources: list[dict[str, object]], **extra: object) -> Path:
    path.write_text(json.dumps({"resources": resources, **extra}))
    return path


def test_converge_manifest_zaps_files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ZAPPY_WHY_RUN", raising=False)
    target = tmp_path / "etc"
    target.mkdir()
    (target / "old.conf").write_text("old")
    manifest = _manifest(
        tmp_path / "run.json",
        [
            {"type": "file", "path": str(target / "app.conf"), "content": "new"},
            {"type": "zap_directory", "path": str(target)},
        ],
    )

    report = converge_manifest(manifest)

    assert report.succeeded
    assert sorted(path.name for path in target.iterdir()) == ["app.conf"]


def test_converge_manifest_honours_why_run_setting(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("ZAPPY_WHY_RUN", "true")
    (tmp_path / "stale.txt").write_text("stale")
    manifest = _manifest(
        tmp_path / "run.json",
        [{"type": "zap_directory", "path": str(tmp_path), "pattern": "*.txt"}],
    )

    report = converge_manifest(manifest)

    assert report.updated
    assert (tmp_path / "stale.txt").exists()


def test_converge_manifest_creates_engine_from_manifest(tmp_path: Path) -> None:
    uri = f"sqlite+pysqlite:///{tmp_path / 'state.db'}"
    manifest = _manifest(
        tmp_path / "run.json",
        [
            {"type": "table", "name": "keep"},
            {"type": "zap_tables", "pattern": "*"},
        ],
        database_uri=uri,
    )
    seed = create_engine(uri)
    with seed.begin() as connection:
        connection.exec_driver_sql("CREATE TABLE stale (id INTEGER PRIMARY KEY)")
    seed.dispose()

    report = converge_manifest(manifest, why_run=False)

    engine = create_engine(uri)
    try:
        assert report.succeeded
        assert inspect(engine).get_table_names() == ["keep"]
    finally:
        engine.dispose()
