"""Error taxonomy for declaring and reconciling zap passes.

Fatal errors derive from ``ZapError``. ``UnsupportedCapabilityWarning`` is a
warning category, emitted through :mod:`warnings` and never raised.
"""

from __future__ import annotations


class ZapError(RuntimeError):
    """Base class for fatal zap errors."""


class ClassResolutionError(ZapError):
    """Raised at declaration time when an entity class cannot be resolved."""

    def __init__(self, token: object) -> None:
        super().__init__(f"Cannot convert {token!r} into a resource class")
        self.token = token


class CapabilityInvocationError(ZapError):
    """Raised when an enumerator or matcher fails during a pass."""

    def __init__(self, capability: str, declaration: str) -> None:
        super().__init__(f"{declaration}: {capability} failed")
        self.capability = capability
        self.declaration = declaration


class RemovalActionError(ZapError):
    """Raised when a synthesized removal fails in immediate mode."""

    def __init__(self, resource: str, action: str) -> None:
        super().__init__(f"{resource}: action {action} failed")
        self.resource = resource
        self.action = action


class InvalidActionError(ValueError):
    """Raised when a resource is asked to run an action it does not allow."""


class UnsupportedCapabilityWarning(UserWarning):
    """Caller supplied a capability the declaration class ignores."""


__all__ = [
    "CapabilityInvocationError",
    "ClassResolutionError",
    "InvalidActionError",
    "RemovalActionError",
    "UnsupportedCapabilityWarning",
    "ZapError",
]
