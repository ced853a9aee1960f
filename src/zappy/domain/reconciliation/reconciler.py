"""Reconcile a zap declaration against the run's declared resources.

One pass walks these stages, once each and in order:

1) guard: inline (inactive) declarations do nothing
2) collect candidate names from the enumerator
3) keep candidates matching the declaration's glob
4) drop every candidate a declared resource claims
5) synthesize a removal per remaining name and run it now (immediate) or
   append it to the resource collection (deferred)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from fnmatch import fnmatch
from logging import getLogger
from typing import TYPE_CHECKING

from zappy.domain.errors import CapabilityInvocationError, RemovalActionError
from zappy.domain.model import ZapAction

from .contracts import Capability, SchedulingMode

if TYPE_CHECKING:
    from collections.abc import Iterable

    from zappy.domain.model import Resource, RunContext

    from .contracts import Enumerator, Matcher
    from .declaration import ZapDeclaration

log = getLogger(__name__)


@dataclass(slots=True)
class ZapPass:
    """Private bookkeeping for one reconciliation pass."""

    candidates: dict[str, None] = field(default_factory=dict["str", "None"])
    kept: list[str] = field(default_factory=list["str"])
    zapped: list[Resource] = field(default_factory=list["Resource"])


@dataclass(frozen=True, slots=True, kw_only=True)
class ZapResult:
    """Outcome of one pass.

    ``candidates`` are the names left after glob filtering, in enumerator order.
    ``converged`` is true only when the removal batch actually ran (not in
    why-run mode and not for an empty batch).
    """

    mode: SchedulingMode
    action: ZapAction
    candidates: tuple[str, ...] = ()
    kept: tuple[str, ...] = ()
    zapped: tuple[Resource, ...] = ()
    converged: bool = False

    @property
    def extraneous(self) -> tuple[str, ...]:
        return tuple(resource.name for resource in self.zapped)


def filter_candidates(names: Iterable[str], pattern: str) -> dict[str, None]:
    """Names matching ``pattern``, deduplicated, in input order."""

    return {name: None for name in names if fnmatch(name, pattern)}


class Reconciler:
    """Run zap passes for one declaration within one run context."""

    def __init__(self, declaration: ZapDeclaration, context: RunContext) -> None:
        self._declaration = declaration
        self._context = context

    def delete(self) -> ZapResult:
        return self.run(ZapAction.DELETE)

    def remove(self) -> ZapResult:
        return self.run(ZapAction.REMOVE)

    def run(self, action: ZapAction) -> ZapResult:
        declaration = self._declaration
        mode = declaration.scheduling_mode
        if mode is SchedulingMode.INLINE:
            log.debug("%s is neither immediate nor deferred; nothing to do", declaration)
            return ZapResult(mode=mode, action=action)

        state = ZapPass(candidates=self._collect())
        candidates = tuple(state.candidates)
        self._diff(state)

        if not state.candidates:
            log.debug("%s found nothing extraneous", declaration)
            return ZapResult(
                mode=mode, action=action, candidates=candidates, kept=tuple(state.kept)
            )

        converged = self._context.converge_by(
            declaration,
            f"{action} extraneous {', '.join(state.candidates)}",
            lambda: self._schedule(state, action, mode),
        )
        return ZapResult(
            mode=mode,
            action=action,
            candidates=candidates,
            kept=tuple(state.kept),
            zapped=tuple(state.zapped),
            converged=converged,
        )

    def _collect(self) -> dict[str, None]:
        declaration = self._declaration
        collector: Enumerator = declaration.collect
        if declaration.enumerator is not None and declaration.supports_capability(
            Capability.ENUMERATOR
        ):
            collector = declaration.enumerator
        try:
            names = list(collector())
            for name in names:
                if not isinstance(name, str):
                    msg = f"entity names must be strings, not {type(name).__name__}"
                    raise TypeError(msg)  # noqa: TRY301
            return filter_candidates(names, declaration.pattern)
        except Exception as exc:
            raise CapabilityInvocationError("enumerator", str(declaration)) from exc

    def _matcher(self) -> Matcher:
        declaration = self._declaration
        if declaration.matcher is not None and declaration.supports_capability(
            Capability.MATCHER
        ):
            return declaration.matcher

        registry = declaration.registry
        classes = {registry.class_for(ref) for ref in declaration.entity_classes}

        def select(resource: Resource) -> str | None:
            return declaration.claimed_name(resource) if type(resource) in classes else None

        return select

    def _diff(self, state: ZapPass) -> None:
        select = self._matcher()
        for resource in self._context.resource_collection.snapshot():
            try:
                name = select(resource)
            except Exception as exc:
                raise CapabilityInvocationError("matcher", str(self._declaration)) from exc
            if name is not None and name in state.candidates:
                del state.candidates[name]
                state.kept.append(name)
                log.debug("%s keeping %s", self._declaration, name)

    def _schedule(self, state: ZapPass, action: ZapAction, mode: SchedulingMode) -> None:
        for name in state.candidates:
            resource = self._zap(name, action)
            log.debug("%s zapping %s", self._declaration, resource)
            state.zapped.append(resource)
            if mode is SchedulingMode.IMMEDIATE:
                try:
                    resource.run_action(self._context, action)
                except Exception as exc:
                    raise RemovalActionError(str(resource), action) from exc
            else:
                self._context.resource_collection.append(resource)

    def _zap(self, name: str, action: ZapAction) -> Resource:
        declaration = self._declaration
        resource = declaration.registry.build(
            declaration.entity_classes[0], name, action=action
        )
        resource.provenance = declaration.provenance
        declaration.prepare_removal(resource)
        return resource
