"""Declared resources and the actions they can run.

A resource is one entry of a run's plan: a named entity plus the action the
run wants applied to it. Concrete resource classes implement :meth:`Resource.apply`
and report their side effects through :meth:`RunContext.converge_by` so why-run
observers see them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, ClassVar

from zappy.domain.errors import InvalidActionError

if TYPE_CHECKING:
    from .context import RunContext

NOTHING = "nothing"


class ZapAction(StrEnum):
    """Verbs a zap pass can stamp onto the removals it synthesizes."""

    DELETE = "delete"
    REMOVE = "remove"


@dataclass(frozen=True, slots=True, kw_only=True)
class Provenance:
    """Where in the run's source a resource was declared."""

    cookbook_name: str | None = None
    recipe_name: str | None = None


@dataclass(eq=False, kw_only=True)
class Resource:
    """Base class for everything that can live in a resource collection."""

    RESOURCE_NAME: ClassVar[str | None] = None
    ALLOWED_ACTIONS: ClassVar[frozenset[str]] = frozenset({NOTHING})
    DEFAULT_ACTION: ClassVar[str] = NOTHING

    name: str
    action: str | None = None
    provenance: Provenance = field(default_factory=Provenance)

    def __post_init__(self) -> None:
        if self.action is None:
            self.action = self.DEFAULT_ACTION
        self.validate_action(self.action)

    def __str__(self) -> str:
        return f"{self.RESOURCE_NAME or type(self).__name__}[{self.name}]"

    @classmethod
    def validate_action(cls, action: str) -> str:
        if action not in cls.ALLOWED_ACTIONS:
            allowed = ", ".join(sorted(cls.ALLOWED_ACTIONS))
            raise InvalidActionError(
                f"{cls.__name__} does not allow action {action!r} (allowed: {allowed})"
            )
        return action

    def run_action(self, context: RunContext, action: str | None = None) -> None:
        """Run ``action`` (default: the declared action) against ``context``."""

        verb = self.validate_action(action or self.action or self.DEFAULT_ACTION)
        if verb == NOTHING:
            return
        self.apply(verb, context)

    def apply(self, action: str, context: RunContext) -> None:
        raise NotImplementedError(f"{type(self).__name__} does not implement {action!r}")
