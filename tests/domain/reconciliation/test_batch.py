from __future__ import annotations

from ardoq_adapter.domain.model import Relationship, VersionPrecondition
from ardoq_adapter.domain.ports import ExistingReference
from ardoq_adapter.domain.reconciliation import (
    BatchCreate,
    BatchUpdate,
    ReferenceBatch,
    ReferenceBody,
    build_reference_operation,
    fold_reference_operation,
)


def test_missing_reference_builds_create() -> None:
    operation = build_reference_operation(None, "A", "B", Relationship.DEPENDS_ON, "1.0.0")

    assert operation == BatchCreate(
        body=ReferenceBody(source="A", target="B", type=Relationship.DEPENDS_ON, version="1.0.0")
    )


def test_missing_reference_without_version_builds_create() -> None:
    operation = build_reference_operation(None, "A", "B", Relationship.HOSTED_IN)

    assert isinstance(operation, BatchCreate)
    assert operation.body.version is None


def test_changed_version_builds_update_with_latest_precondition() -> None:
    existing = ExistingReference(id="ref-1", version="1.0.0")

    operation = build_reference_operation(existing, "A", "B", Relationship.DEPENDS_ON, "2.0.0")

    assert isinstance(operation, BatchUpdate)
    assert operation.id == "ref-1"
    assert operation.version == "2.0.0"
    assert operation.if_version_match is VersionPrecondition.LATEST


def test_unversioned_existing_reference_gets_updated() -> None:
    existing = ExistingReference(id="ref-1")

    operation = build_reference_operation(existing, "A", "B", Relationship.DEPENDS_ON, "2.0.0")

    assert isinstance(operation, BatchUpdate)


def test_matching_or_absent_version_is_a_noop() -> None:
    existing = ExistingReference(id="ref-1", version="1.0.0")

    assert build_reference_operation(existing, "A", "B", Relationship.DEPENDS_ON, "1.0.0") is None
    assert build_reference_operation(existing, "A", "B", Relationship.DEPENDS_ON) is None


def test_reference_batch_sorts_operations() -> None:
    batch = ReferenceBatch()
    create = build_reference_operation(None, "A", "B", Relationship.DEPENDS_ON, "1.0.0")
    update = build_reference_operation(
        ExistingReference(id="ref-1", version="1.0.0"), "A", "C", Relationship.DEPENDS_ON, "1.1.0"
    )

    batch.add(create)
    batch.add(update)
    batch.add(None)

    assert len(batch) == 2
    assert batch.creates == [create]
    assert batch.updates == [update]

    batch.clear()
    assert not batch


def test_fold_replaces_version_of_queued_create() -> None:
    pending = build_reference_operation(None, "A", "B", Relationship.DEPENDS_ON, "1.0.0")
    assert pending is not None

    folded = fold_reference_operation(pending, "2.0.0")

    assert isinstance(folded, BatchCreate)
    assert folded.body.version == "2.0.0"
    assert folded.body.type is Relationship.DEPENDS_ON


def test_fold_keeps_update_target_and_precondition() -> None:
    pending = build_reference_operation(
        ExistingReference(id="ref-1", version="1.0.0"), "A", "B", Relationship.DEPENDS_ON, "1.1.0"
    )
    assert pending is not None

    folded = fold_reference_operation(pending, "1.2.0")

    assert isinstance(folded, BatchUpdate)
    assert folded.id == "ref-1"
    assert folded.version == "1.2.0"
    assert folded.if_version_match is VersionPrecondition.LATEST


def test_fold_with_equal_or_absent_version_is_a_noop() -> None:
    pending = build_reference_operation(None, "A", "B", Relationship.DEPENDS_ON, "1.0.0")
    assert pending is not None

    assert fold_reference_operation(pending, "1.0.0") is None
    assert fold_reference_operation(pending) is None


def test_reference_batch_keeps_one_operation_per_edge() -> None:
    batch = ReferenceBatch()
    first = build_reference_operation(None, "A", "B", Relationship.DEPENDS_ON, "1.0.0")
    other = build_reference_operation(None, "A", "C", Relationship.DEPENDS_ON, "1.0.0")
    assert first is not None
    batch.add(first)
    batch.add(other)

    batch.add(fold_reference_operation(first, "2.0.0"))

    assert len(batch) == 2
    assert [op.body.target for op in batch.creates] == ["B", "C"]
    pending = batch.pending("A", "B")
    assert pending is not None
    assert pending.body.version == "2.0.0"
