"""Files as zap entities.

``FileResource`` manages one regular file. ``DirectoryZap`` enumerates the
entries of a directory so a run can remove files it did not declare there.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from zappy.domain.model import NOTHING, Resource, ZapAction, register_resource
from zappy.domain.reconciliation import Capability, ZapDeclaration

if TYPE_CHECKING:
    from zappy.domain.model import RunContext

CREATE = "create"


@register_resource()
@dataclass(eq=False, kw_only=True)
class FileResource(Resource):
    """A regular file; ``name`` is its path."""

    RESOURCE_NAME: ClassVar[str | None] = "file"
    ALLOWED_ACTIONS: ClassVar[frozenset[str]] = frozenset(
        {NOTHING, CREATE, ZapAction.DELETE, ZapAction.REMOVE}
    )
    DEFAULT_ACTION: ClassVar[str] = CREATE

    content: str | None = None

    @property
    def path(self) -> Path:
        return Path(self.name)

    def apply(self, action: str, context: RunContext) -> None:
        if action == CREATE:
            self._create(context)
        else:
            self._delete(context)

    def _create(self, context: RunContext) -> None:
        path = self.path
        if path.is_file() and (self.content is None or path.read_text() == self.content):
            return
        content = self.content or ""
        context.converge_by(self, f"create file {path}", lambda: path.write_text(content))

    def _delete(self, context: RunContext) -> None:
        path = self.path
        if path.is_dir() and not path.is_symlink():
            raise IsADirectoryError(f"Refusing to delete directory {path} as a file")
        if not path.exists() and not path.is_symlink():
            return
        context.converge_by(self, f"delete file {path}", path.unlink)


class DirectoryZap(ZapDeclaration):
    """Zap files inside ``path`` that no ``FileResource`` declares.

    Candidates are normalized absolute entry paths in sorted order, so ``pattern``
    is matched against the full path. ``filter`` further restricts candidates.
    A declared file claims its path however it is spelled.
    """

    RESOURCE_NAME: ClassVar[str | None] = "zap_directory"
    SUPPORTS: ClassVar[frozenset[Capability]] = frozenset(
        {Capability.MATCHER, Capability.FILTER}
    )
    DEFAULT_ENTITY_CLASSES: ClassVar[tuple[str, ...]] = ("file",)

    def __init__(self, name: str, *, path: str | Path | None = None, **kwargs: object) -> None:
        super().__init__(name, **kwargs)  # pyright: ignore[reportArgumentType]
        self.path = Path(path if path is not None else name)

    def collect(self) -> list[str]:
        if not self.path.is_dir():
            return []
        entries = (
            os.path.abspath(entry)
            for entry in sorted(self.path.iterdir())
            if entry.is_file() or entry.is_symlink()
        )
        return [entry for entry in entries if self.filter(entry)]

    def claimed_name(self, resource: Resource) -> str | None:
        return os.path.abspath(resource.name)
