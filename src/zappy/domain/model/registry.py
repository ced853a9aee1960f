"""Symbolic resource-class registry and entity-class resolution.

Entity classes are referenced either by a concrete ``Resource`` subclass or by a
symbolic name (``"file"``, ``"sqlalchemy.table"``). Resolution turns either
form into an :data:`EntityClassRef`:

- ``NamedRegistration`` when the class is known to the registry by name; the
  concrete class is looked up again whenever it is needed, so a later
  registration under the same name wins
- ``DirectType`` for an unregistered class, used as-is
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from zappy.domain.errors import ClassResolutionError

from .resource import Resource

if TYPE_CHECKING:
    from collections.abc import Callable

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NamedRegistration:
    name: str


@dataclass(frozen=True, slots=True)
class DirectType:
    handle: type[Resource]


type EntityClassRef = NamedRegistration | DirectType
type EntityClassSpec = str | type[Resource]


def _normalize_name(name: str) -> str:
    return name.strip().replace("::", ".")


class ResourceRegistry:
    """Maps symbolic names to resource classes."""

    def __init__(self) -> None:
        self._classes: dict[str, type[Resource]] = {}

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _normalize_name(name) in self._classes

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._classes)

    def add(self, cls: type[Resource], name: str | None = None) -> type[Resource]:
        key = name or cls.RESOURCE_NAME
        if not key:
            raise ValueError(f"{cls.__name__} has no RESOURCE_NAME; pass a name to register it")
        key = _normalize_name(key)
        previous = self._classes.get(key)
        if previous is not None and previous is not cls:
            log.debug("Resource name %s now maps to %s (was %s)", key, cls, previous)
        self._classes[key] = cls
        return cls

    def register[R: Resource](self, name: str | None = None) -> Callable[[type[R]], type[R]]:
        """Class decorator registering a resource class under ``name``."""

        def decorator(cls: type[R]) -> type[R]:
            self.add(cls, name)
            return cls

        return decorator

    def lookup(self, name: str) -> type[Resource]:
        try:
            return self._classes[_normalize_name(name)]
        except KeyError:
            raise ClassResolutionError(name) from None

    def resolve(self, spec: object) -> EntityClassRef:
        """Resolve one class handle or symbolic name."""

        if isinstance(spec, type) and issubclass(spec, Resource):
            name = spec.RESOURCE_NAME
            if name is not None and self._classes.get(_normalize_name(name)) is spec:
                return NamedRegistration(_normalize_name(name))
            return DirectType(spec)
        if isinstance(spec, str) and _normalize_name(spec) in self._classes:
            return NamedRegistration(_normalize_name(spec))
        raise ClassResolutionError(spec)

    def resolve_all(self, spec: object) -> tuple[EntityClassRef, ...]:
        """Resolve a single class/name or a sequence of them, in order."""

        items = spec if isinstance(spec, Sequence) and not isinstance(spec, str) else (spec,)
        refs = tuple(self.resolve(item) for item in items)
        if not refs:
            raise ClassResolutionError(spec)
        return refs

    def class_for(self, ref: EntityClassRef) -> type[Resource]:
        match ref:
            case NamedRegistration(name=name):
                return self.lookup(name)
            case DirectType(handle=handle):
                return handle

    def build(self, ref: EntityClassRef, name: str, *, action: str) -> Resource:
        """Synthesize a resource of ``ref`` named ``name`` with ``action``."""

        match ref:
            case NamedRegistration(name=registered):
                factory = self.lookup(registered)
            case DirectType(handle=handle):
                factory = handle
        return factory(name=name, action=action)


_DEFAULT_REGISTRY = ResourceRegistry()


def default_registry() -> ResourceRegistry:
    """Process-wide registry populated by adapter imports."""

    return _DEFAULT_REGISTRY


def register_resource[R: Resource](name: str | None = None) -> Callable[[type[R]], type[R]]:
    return _DEFAULT_REGISTRY.register(name)
