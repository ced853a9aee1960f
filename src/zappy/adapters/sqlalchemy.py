"""Database tables as zap entities, via SQLAlchemy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from sqlalchemy import Column, Integer, MetaData, Table, inspect

from zappy.domain.model import NOTHING, Resource, ZapAction, register_resource
from zappy.domain.reconciliation import Capability, ZapDeclaration

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from zappy.domain.model import RunContext

CREATE = "create"


class MissingEngineError(RuntimeError):
    """Raised when a table resource runs without an engine attached."""


@register_resource()
@dataclass(eq=False, kw_only=True)
class TableResource(Resource):
    """One table; ``create`` makes an empty table keyed by an integer ``id``."""

    RESOURCE_NAME: ClassVar[str | None] = "sqlalchemy.table"
    ALLOWED_ACTIONS: ClassVar[frozenset[str]] = frozenset(
        {NOTHING, CREATE, ZapAction.DELETE, ZapAction.REMOVE}
    )
    DEFAULT_ACTION: ClassVar[str] = CREATE

    engine: Engine | None = None
    schema: str | None = None

    def apply(self, action: str, context: RunContext) -> None:
        engine = self._require_engine()
        exists = inspect(engine).has_table(self.name, schema=self.schema)
        if action == CREATE:
            if not exists:
                context.converge_by(
                    self, f"create table {self.name}", lambda: self._table().create(engine)
                )
        elif exists:
            context.converge_by(
                self, f"drop table {self.name}", lambda: self._table().drop(engine)
            )

    def _table(self) -> Table:
        return Table(
            self.name,
            MetaData(schema=self.schema),
            Column("id", Integer, primary_key=True),
        )

    def _require_engine(self) -> Engine:
        if self.engine is None:
            raise MissingEngineError(f"{self} has no engine attached")
        return self.engine


class TableZap(ZapDeclaration):
    """Drop tables matching ``pattern`` that no ``TableResource`` declares.

    Only table resources in the same ``schema`` claim a name.
    """

    RESOURCE_NAME: ClassVar[str | None] = "zap_tables"
    SUPPORTS: ClassVar[frozenset[Capability]] = frozenset({Capability.MATCHER})
    DEFAULT_ENTITY_CLASSES: ClassVar[tuple[str, ...]] = ("sqlalchemy.table",)

    def __init__(
        self,
        name: str,
        *,
        engine: Engine,
        schema: str | None = None,
        **kwargs: object,
    ) -> None:
        super().__init__(name, **kwargs)  # pyright: ignore[reportArgumentType]
        self.engine = engine
        self.schema = schema

    def collect(self) -> list[str]:
        return inspect(self.engine).get_table_names(schema=self.schema)

    def claimed_name(self, resource: Resource) -> str | None:
        if isinstance(resource, TableResource) and resource.schema != self.schema:
            return None
        return resource.name

    def prepare_removal(self, resource: Resource) -> None:
        if isinstance(resource, TableResource):
            resource.engine = self.engine
            resource.schema = self.schema
