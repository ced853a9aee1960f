"""Pydantic models describing JSON run manifests.

A manifest lists resources in declaration order. Zap entries may appear
anywhere: every pass sees the whole collection, as declared before the run
starts.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

ResourceAction = Literal["create", "delete", "remove"]
ZapVerb = Literal["delete", "remove"]
Schedule = Literal["deferred", "immediate", "inline"]


class ManifestBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class FileEntry(ManifestBaseModel):
    type: Literal["file"]
    path: str
    content: str | None = None
    action: ResourceAction = "create"


class TableEntry(ManifestBaseModel):
    type: Literal["table"]
    name: str
    schema_name: str | None = Field(default=None, alias="schema")
    action: ResourceAction = "create"


class ZapEntry(ManifestBaseModel):
    pattern: str = "*"
    action: ZapVerb = "delete"
    schedule: Schedule = "deferred"


class DirectoryZapEntry(ZapEntry):
    type: Literal["zap_directory"]
    path: str
    name: str | None = None
    exclude: tuple[str, ...] = ()


class TableZapEntry(ZapEntry):
    type: Literal["zap_tables"]
    name: str = "tables"
    schema_name: str | None = Field(default=None, alias="schema")


ManifestEntry = Annotated[
    FileEntry | TableEntry | DirectoryZapEntry | TableZapEntry,
    Field(discriminator="type"),
]


class Manifest(ManifestBaseModel):
    cookbook: str | None = None
    recipe: str | None = None
    database_uri: str | None = None
    resources: list[ManifestEntry] = Field(default_factory=list)

    @property
    def needs_database(self) -> bool:
        return any(isinstance(entry, (TableEntry, TableZapEntry)) for entry in self.resources)
