"""Zap reconciliation: remove entities the run does not declare.

Flow:
1) a ``ZapDeclaration`` names entity classes, a glob and capabilities
2) the declaration is promoted to deferred (or marked immediate)
3) the ``Reconciler`` diffs existing entities against declared resources
4) removals are run immediately or appended to the resource collection
"""

from __future__ import annotations

from .contracts import Capability, Enumerator, Matcher, NameFilter, SchedulingMode
from .declaration import ZapDeclaration
from .reconciler import Reconciler, ZapResult, filter_candidates

__all__ = [
    "Capability",
    "Enumerator",
    "Matcher",
    "NameFilter",
    "Reconciler",
    "SchedulingMode",
    "ZapDeclaration",
    "ZapResult",
    "filter_candidates",
]
