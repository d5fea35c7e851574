"""Declarative create/update descriptors for reference writes.

``build_reference_operation`` holds the whole create/update/no-op decision and
performs no I/O, so the same descriptor can be executed right away or queued in
a ``ReferenceBatch`` for one multi-operation submission.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from ardoq_adapter.domain.model import VersionPrecondition

if TYPE_CHECKING:
    from ardoq_adapter.domain.model import Relationship
    from ardoq_adapter.domain.ports import ExistingReference


@dataclass(slots=True, frozen=True, kw_only=True)
class ReferenceBody:
    source: str
    target: str
    type: Relationship
    version: str | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class BatchCreate:
    body: ReferenceBody


@dataclass(slots=True, frozen=True, kw_only=True)
class BatchUpdate:
    id: str
    body: ReferenceBody
    if_version_match: VersionPrecondition = VersionPrecondition.LATEST

    @property
    def version(self) -> str:
        if self.body.version is None:
            raise ValueError("Reference update without a version")
        return self.body.version


type ReferenceOperation = BatchCreate | BatchUpdate


def build_reference_operation(
    existing: ExistingReference | None,
    source_id: str,
    target_id: str,
    relationship: Relationship,
    version: str | None = None,
) -> ReferenceOperation | None:
    """Decide how an edge must be written, or return ``None`` when it is current.

    - no existing edge -> ``BatchCreate``
    - existing edge, supplied version differs (or edge has none) -> ``BatchUpdate``
    - existing edge, version absent or equal -> ``None``
    """

    body = ReferenceBody(source=source_id, target=target_id, type=relationship, version=version)
    if existing is None:
        return BatchCreate(body=body)
    if version and existing.version != version:
        return BatchUpdate(id=existing.id, body=body)
    return None


def fold_reference_operation(
    pending: ReferenceOperation,
    version: str | None = None,
) -> ReferenceOperation | None:
    """Merge a later decision for an edge that already has a queued operation.

    The queued operation stands for the edge's future remote state, so the same
    rule as ``build_reference_operation`` applies against it: a different
    version replaces the queued version, an absent or equal one changes nothing.
    """

    if not version or pending.body.version == version:
        return None
    return replace(pending, body=replace(pending.body, version=version))


type EdgeKey = tuple[str, str]


@dataclass(slots=True)
class ReferenceBatch:
    """Queue of reference descriptors awaiting a single batch submission.

    At most one operation is queued per (source, target) edge; adding another
    one for the same edge replaces it in place.
    """

    operations: dict[EdgeKey, ReferenceOperation] = field(
        default_factory=dict["EdgeKey", "ReferenceOperation"]
    )

    @property
    def creates(self) -> list[BatchCreate]:
        return [op for op in self.operations.values() if isinstance(op, BatchCreate)]

    @property
    def updates(self) -> list[BatchUpdate]:
        return [op for op in self.operations.values() if isinstance(op, BatchUpdate)]

    def pending(self, source_id: str, target_id: str) -> ReferenceOperation | None:
        return self.operations.get((source_id, target_id))

    def add(self, operation: ReferenceOperation | None) -> None:
        if operation is None:
            return
        self.operations[(operation.body.source, operation.body.target)] = operation

    def __len__(self) -> int:
        return len(self.operations)

    def __bool__(self) -> bool:
        return bool(self.operations)

    def clear(self) -> None:
        self.operations.clear()
