"""Ports for the remote component/reference store.

Every store call answers with a tagged outcome instead of raising, so callers
can tell "nothing matched" apart from "the store could not answer":

- component search: ``ComponentsFound`` | ``NotFound`` | ``SearchFailed``
- reference search: ``ReferenceFound`` | ``NotFound`` | ``SearchFailed``
- component create: ``Created`` | ``WriteRejected``
- reference writes and batches: ``WriteAccepted`` | ``WriteRejected``
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Literal, Protocol, runtime_checkable

from ardoq_adapter.domain.model import VersionPrecondition

if TYPE_CHECKING:
    from ardoq_adapter.domain.model import Relationship, Workspace
    from ardoq_adapter.domain.reconciliation.batch import ReferenceBatch


class OutcomeKind(StrEnum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    SEARCH_FAILED = "search_failed"
    CREATED = "created"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(slots=True, frozen=True)
class ComponentMatch:
    id: str
    name: str | None = None


@dataclass(slots=True, frozen=True)
class ExistingReference:
    id: str
    version: str | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class ComponentsFound:
    matches: tuple[ComponentMatch, ...]
    kind: Literal[OutcomeKind.FOUND] = OutcomeKind.FOUND

    def __post_init__(self) -> None:
        if not self.matches:
            raise ValueError("ComponentsFound requires at least one match; use NotFound")

    @property
    def first(self) -> ComponentMatch:
        return self.matches[0]


@dataclass(slots=True, frozen=True, kw_only=True)
class ReferenceFound:
    reference: ExistingReference
    kind: Literal[OutcomeKind.FOUND] = OutcomeKind.FOUND


@dataclass(slots=True, frozen=True, kw_only=True)
class NotFound:
    kind: Literal[OutcomeKind.NOT_FOUND] = OutcomeKind.NOT_FOUND


@dataclass(slots=True, frozen=True, kw_only=True)
class SearchFailed:
    reason: str
    status_code: int | None = None
    kind: Literal[OutcomeKind.SEARCH_FAILED] = OutcomeKind.SEARCH_FAILED


@dataclass(slots=True, frozen=True, kw_only=True)
class Created:
    id: str
    kind: Literal[OutcomeKind.CREATED] = OutcomeKind.CREATED


@dataclass(slots=True, frozen=True, kw_only=True)
class WriteAccepted:
    kind: Literal[OutcomeKind.ACCEPTED] = OutcomeKind.ACCEPTED


@dataclass(slots=True, frozen=True, kw_only=True)
class WriteRejected:
    reason: str
    status_code: int | None = None
    version_conflict: bool = False
    kind: Literal[OutcomeKind.REJECTED] = OutcomeKind.REJECTED


type ComponentSearchOutcome = ComponentsFound | NotFound | SearchFailed
type ReferenceSearchOutcome = ReferenceFound | NotFound | SearchFailed
type ComponentCreateOutcome = Created | WriteRejected
type WriteOutcome = WriteAccepted | WriteRejected


@runtime_checkable
class RemoteStore(Protocol):
    """Async capability to look up and write components and references."""

    async def search_component(self, workspace: Workspace, name: str) -> ComponentSearchOutcome: ...

    async def create_component(
        self, workspace: Workspace, name: str, type_id: str
    ) -> ComponentCreateOutcome: ...

    async def search_reference(self, source_id: str, target_id: str) -> ReferenceSearchOutcome: ...

    async def create_reference(
        self,
        source_id: str,
        target_id: str,
        relationship: Relationship,
        version: str | None = None,
    ) -> WriteOutcome: ...

    async def update_reference_version(
        self,
        reference_id: str,
        version: str,
        precondition: VersionPrecondition = VersionPrecondition.LATEST,
    ) -> WriteOutcome: ...

    async def submit_batch(self, batch: ReferenceBatch) -> WriteOutcome: ...


@runtime_checkable
class FindOrCreateComponentStore(Protocol):
    """Optional atomic primitive for stores that can find-or-create in one step.

    ``ComponentsFound`` means the record already existed, ``Created`` that the
    store made it during this call.
    """

    async def find_or_create_component(
        self, workspace: Workspace, name: str, type_id: str
    ) -> ComponentsFound | Created | WriteRejected | SearchFailed: ...
