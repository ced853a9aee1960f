"""JSON run manifests."""

from __future__ import annotations

from .loader import ManifestError, load_manifest, populate
from .schema import Manifest

__all__ = ["Manifest", "ManifestError", "load_manifest", "populate"]
