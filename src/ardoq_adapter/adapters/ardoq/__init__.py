"""Public interface for the Ardoq adapter."""

from __future__ import annotations

from .client import BATCH_PATH, COMPONENTS_PATH, REFERENCES_PATH, ArdoqRemoteStore
from .schema import ComponentSearchResponse, ReferenceSearchResponse

__all__ = [
    "BATCH_PATH",
    "COMPONENTS_PATH",
    "REFERENCES_PATH",
    "ArdoqRemoteStore",
    "ComponentSearchResponse",
    "ReferenceSearchResponse",
]
