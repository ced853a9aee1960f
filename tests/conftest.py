from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from tests.helpers.resources import Widget
from zappy.domain.model import ResourceRegistry, RunContext

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_widgets() -> Iterator[None]:
    Widget.reset()
    yield
    Widget.reset()


@pytest.fixture
def registry() -> ResourceRegistry:
    registry = ResourceRegistry()
    registry.add(Widget)
    return registry


@pytest.fixture
def context() -> RunContext:
    return RunContext()


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    try:
        yield engine
    finally:
        engine.dispose()
