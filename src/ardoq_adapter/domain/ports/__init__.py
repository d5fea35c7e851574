"""Domain port definitions for adapters."""

from __future__ import annotations

from .remote_store import (
    ComponentCreateOutcome,
    ComponentMatch,
    ComponentSearchOutcome,
    ComponentsFound,
    Created,
    ExistingReference,
    FindOrCreateComponentStore,
    NotFound,
    OutcomeKind,
    ReferenceFound,
    ReferenceSearchOutcome,
    RemoteStore,
    SearchFailed,
    WriteAccepted,
    WriteOutcome,
    WriteRejected,
)

__all__ = [
    "ComponentCreateOutcome",
    "ComponentMatch",
    "ComponentSearchOutcome",
    "ComponentsFound",
    "Created",
    "ExistingReference",
    "FindOrCreateComponentStore",
    "NotFound",
    "OutcomeKind",
    "ReferenceFound",
    "ReferenceSearchOutcome",
    "RemoteStore",
    "SearchFailed",
    "WriteAccepted",
    "WriteOutcome",
    "WriteRejected",
]
