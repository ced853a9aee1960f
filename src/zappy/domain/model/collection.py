"""Ordered resource collection shared by one run."""

from __future__ import annotations

from typing import TYPE_CHECKING, overload

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .resource import Resource


class ResourceCollection:
    """Resources in declaration order.

    The collection only grows. Runners traverse it by index so resources
    appended during traversal are still visited, after everything declared
    before them.
    """

    def __init__(self, resources: Iterable[Resource] = ()) -> None:
        self._resources: list[Resource] = list(resources)

    def __len__(self) -> int:
        return len(self._resources)

    def __iter__(self) -> Iterator[Resource]:
        return iter(self.snapshot())

    @overload
    def __getitem__(self, index: int) -> Resource: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Resource, ...]: ...

    def __getitem__(self, index: int | slice) -> Resource | tuple[Resource, ...]:
        if isinstance(index, slice):
            return tuple(self._resources[index])
        return self._resources[index]

    def append(self, resource: Resource) -> None:
        self._resources.append(resource)

    def extend(self, resources: Iterable[Resource]) -> None:
        for resource in resources:
            self.append(resource)

    def snapshot(self) -> tuple[Resource, ...]:
        return tuple(self._resources)

    def find(self, resource_type: type[Resource], name: str) -> Resource | None:
        for resource in self._resources:
            if type(resource) is resource_type and resource.name == name:
                return resource
        return None
