"""Zap declarations: which extraneous entities a run should remove.

A declaration is itself a resource. It sits in the resource collection next to
the resources it polices and runs its pass when the runner reaches it, or, once
promoted to deferred mode, when the runner reaches its queued clone at the end
of the collection.
"""

from __future__ import annotations

import copy
import warnings
from typing import TYPE_CHECKING, ClassVar

from zappy.domain.errors import UnsupportedCapabilityWarning
from zappy.domain.model import NOTHING, Provenance, Resource, ZapAction, default_registry

from .contracts import Capability, SchedulingMode
from .reconciler import Reconciler

if TYPE_CHECKING:
    from collections.abc import Iterable

    from zappy.domain.model import (
        EntityClassRef,
        EntityClassSpec,
        ResourceCollection,
        ResourceRegistry,
        RunContext,
    )

    from .contracts import Enumerator, Matcher, NameFilter


def _accept_all(_name: str) -> bool:
    return True


class ZapDeclaration(Resource):
    """Remove entities of ``entity_classes`` matching ``pattern`` that no declared
    resource claims.

    Subclasses integrate a concrete entity kind by overriding :meth:`collect`
    (and optionally :meth:`prepare_removal`) and narrowing ``SUPPORTS``.
    """

    RESOURCE_NAME: ClassVar[str | None] = "zap"
    ALLOWED_ACTIONS: ClassVar[frozenset[str]] = frozenset(
        {NOTHING, ZapAction.DELETE, ZapAction.REMOVE}
    )
    DEFAULT_ACTION: ClassVar[str] = ZapAction.DELETE
    SUPPORTS: ClassVar[frozenset[Capability]] = frozenset(
        {Capability.ENUMERATOR, Capability.MATCHER}
    )
    DEFAULT_ENTITY_CLASSES: ClassVar[tuple[str, ...]] = ()

    def __init__(
        self,
        name: str,
        *,
        entity_classes: EntityClassSpec | Iterable[EntityClassSpec] | None = None,
        pattern: str = "*",
        enumerator: Enumerator | None = None,
        matcher: Matcher | None = None,
        filter: NameFilter | None = None,  # noqa: A002
        immediately: bool = False,
        deferred: bool = False,
        action: str | None = None,
        provenance: Provenance | None = None,
        registry: ResourceRegistry | None = None,
    ) -> None:
        super().__init__(name=name, action=action, provenance=provenance or Provenance())
        self.registry = registry or default_registry()
        self._entity_classes: tuple[EntityClassRef, ...] = ()
        self._pattern = "*"
        self._enumerator: Enumerator | None = None
        self._matcher: Matcher | None = None
        self._filter: NameFilter = _accept_all
        self._immediately = False
        self._deferred = False
        self._promoted = False

        self.set_entity_classes(
            entity_classes if entity_classes is not None else self.DEFAULT_ENTITY_CLASSES
        )
        self.pattern = pattern
        if enumerator is not None:
            self.enumerator = enumerator
        if matcher is not None:
            self.matcher = matcher
        if filter is not None:
            self.filter = filter
        self.immediately = immediately
        if deferred:
            self._deferred = True

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, pattern={self._pattern!r}, "
            f"mode={self.scheduling_mode.value}, action={self.action!r})"
        )

    @property
    def supports(self) -> frozenset[Capability]:
        return self.SUPPORTS

    @property
    def entity_classes(self) -> tuple[EntityClassRef, ...]:
        return self._entity_classes

    def set_entity_classes(
        self, spec: EntityClassSpec | Iterable[EntityClassSpec]
    ) -> tuple[EntityClassRef, ...]:
        """Resolve ``spec`` (one class/name or several) and store the result.

        Raises ``ClassResolutionError`` naming the first token that does not
        resolve; the previous classes are kept in that case.
        """

        if not isinstance(spec, (str, type)):
            spec = tuple(spec)
        self._entity_classes = self.registry.resolve_all(spec)
        return self._entity_classes

    @property
    def pattern(self) -> str:
        return self._pattern

    @pattern.setter
    def pattern(self, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"pattern must be a string, not {type(value).__name__}")
        self._pattern = value

    @property
    def enumerator(self) -> Enumerator | None:
        return self._enumerator

    @enumerator.setter
    def enumerator(self, value: Enumerator | None) -> None:
        self._enumerator = self._checked_capability(Capability.ENUMERATOR, value)

    @property
    def matcher(self) -> Matcher | None:
        return self._matcher

    @matcher.setter
    def matcher(self, value: Matcher | None) -> None:
        self._matcher = self._checked_capability(Capability.MATCHER, value)

    @property
    def filter(self) -> NameFilter:
        return self._filter

    @filter.setter
    def filter(self, value: NameFilter | None) -> None:
        self._filter = self._checked_capability(Capability.FILTER, value) or _accept_all

    @property
    def immediately(self) -> bool:
        return self._immediately

    @immediately.setter
    def immediately(self, value: bool) -> None:
        if value is not True and value is not False:
            raise TypeError(f"immediately must be True or False, not {value!r}")
        self._immediately = value

    @property
    def scheduling_mode(self) -> SchedulingMode:
        if self._immediately:
            return SchedulingMode.IMMEDIATE
        if self._deferred:
            return SchedulingMode.DEFERRED
        return SchedulingMode.INLINE

    def is_deferred(self) -> bool:
        return self._deferred

    def promote_to_deferred(self, collection: ResourceCollection) -> bool:
        """Queue a deferred clone of this declaration at the end of ``collection``.

        Only the first call on an inline declaration has an effect. Returns
        whether this declaration itself is deferred.
        """

        if self._deferred or self._immediately or self._promoted:
            return self._deferred

        clone = copy.copy(self)
        clone._deferred = True  # noqa: SLF001
        collection.append(clone)
        self._promoted = True
        return self._deferred

    def supports_capability(self, capability: Capability) -> bool:
        return capability in self.supports

    def collect(self) -> Iterable[str]:
        """Entity names believed to exist when no enumerator is supplied."""

        return ()

    def claimed_name(self, resource: Resource) -> str | None:
        """Name ``resource`` claims under the default matcher, spelled like ``collect``."""

        return resource.name

    def prepare_removal(self, resource: Resource) -> None:
        """Adjust a synthesized removal before it is run or queued."""

    def apply(self, action: str, context: RunContext) -> None:
        Reconciler(self, context).run(ZapAction(action))

    def _checked_capability[F](self, capability: Capability, value: F | None) -> F | None:
        if value is None:
            return None
        if not callable(value):
            raise TypeError(f"{capability.value} must be callable, not {type(value).__name__}")
        if capability not in self.supports:
            warnings.warn(
                f"{self} does not support {capability.value}; it will be ignored",
                UnsupportedCapabilityWarning,
                stacklevel=3,
            )
        return value
