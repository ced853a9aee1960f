"""Shared zap contract components.

This module holds only the enums and capability aliases used by both the
declaration and the reconciler.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import StrEnum

from zappy.domain.model import Resource

type Enumerator = Callable[[], Iterable[str]]
type Matcher = Callable[[Resource], str | None]
type NameFilter = Callable[[str], bool]


class Capability(StrEnum):
    """Optional caller-supplied hooks a declaration class may honour."""

    ENUMERATOR = "enumerator"
    MATCHER = "matcher"
    FILTER = "filter"


class SchedulingMode(StrEnum):
    """When a declaration's removals run.

    ``INLINE`` is the inactive state: a declaration neither immediate nor
    promoted to deferred performs no work when run.
    """

    IMMEDIATE = "immediate"
    DEFERRED = "deferred"
    INLINE = "inline"
