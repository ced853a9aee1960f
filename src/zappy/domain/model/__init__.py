"""Resource model shared by zap declarations, reconciler and runner."""

from __future__ import annotations

from .collection import ResourceCollection
from .context import ConvergeRecord, ConvergeReport, RunContext
from .registry import (
    DirectType,
    EntityClassRef,
    EntityClassSpec,
    NamedRegistration,
    ResourceRegistry,
    default_registry,
    register_resource,
)
from .resource import NOTHING, Provenance, Resource, ZapAction

__all__ = [
    "NOTHING",
    "ConvergeRecord",
    "ConvergeReport",
    "DirectType",
    "EntityClassRef",
    "EntityClassSpec",
    "NamedRegistration",
    "Provenance",
    "Resource",
    "ResourceCollection",
    "ResourceRegistry",
    "RunContext",
    "ZapAction",
    "default_registry",
    "register_resource",
]
