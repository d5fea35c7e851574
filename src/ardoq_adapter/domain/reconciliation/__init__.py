"""Reconciliation core for mirroring dependency graphs into a remote store.

Layered flow per report:
1) resolve each dependency to a remote component (cache, search, create)
2) decide the write for each edge (create, version update, nothing)
3) execute the write right away or queue it for one batch submission
"""

from __future__ import annotations

from .batch import (
    BatchCreate,
    BatchUpdate,
    ReferenceBatch,
    ReferenceBody,
    ReferenceOperation,
    build_reference_operation,
    fold_reference_operation,
)
from .cache import ResolutionCache
from .components import ComponentResolution, ComponentResolver
from .errors import (
    ReconciliationError,
    ReferenceWriteError,
    RemoteSearchError,
    VersionConflictError,
)
from .references import ReferenceReconciler

__all__ = [
    "BatchCreate",
    "BatchUpdate",
    "ComponentResolution",
    "ComponentResolver",
    "ReconciliationError",
    "ReferenceBatch",
    "ReferenceBody",
    "ReferenceOperation",
    "ReferenceReconciler",
    "ReferenceWriteError",
    "RemoteSearchError",
    "ResolutionCache",
    "VersionConflictError",
    "build_reference_operation",
    "fold_reference_operation",
]
