"""Failures raised by the reconciliation core."""

from __future__ import annotations


class ReconciliationError(RuntimeError):
    """Base class for failures surfaced to reconciliation callers."""


class RemoteSearchError(ReconciliationError):
    """The remote store could not answer a search (distinct from "no results")."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ReferenceWriteError(ReconciliationError):
    """The remote store rejected a reference create, update or batch."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class VersionConflictError(ReferenceWriteError):
    """An update lost its ``ifVersionMatch`` precondition to a concurrent writer."""
