"""Reference reconciliation against the remote store."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from ardoq_adapter.domain.model import ReferenceAction
from ardoq_adapter.domain.ports import ReferenceFound, SearchFailed, WriteRejected

from .batch import (
    BatchCreate,
    BatchUpdate,
    build_reference_operation,
    fold_reference_operation,
)
from .errors import ReferenceWriteError, RemoteSearchError, VersionConflictError

if TYPE_CHECKING:
    from ardoq_adapter.domain.model import Relationship
    from ardoq_adapter.domain.ports import ExistingReference, RemoteStore, WriteOutcome

    from .batch import ReferenceBatch, ReferenceOperation

log = getLogger(__name__)


class ReferenceReconciler:
    """Create, update or leave alone the edge between two components.

    Edges are looked up by (source, target) only; the relationship kind is not
    part of the search key.
    """

    def __init__(self, store: RemoteStore) -> None:
        self._store = store

    async def reconcile_reference(
        self,
        source_id: str,
        target_id: str,
        relationship: Relationship,
        version: str | None = None,
    ) -> ReferenceAction:
        operation = await self.plan_reference(source_id, target_id, relationship, version)
        if operation is None:
            log.debug("Reference %s -> %s is up to date", source_id, target_id)
            return ReferenceAction.UNCHANGED
        return await self.execute(operation)

    async def plan_reference(
        self,
        source_id: str,
        target_id: str,
        relationship: Relationship,
        version: str | None = None,
    ) -> ReferenceOperation | None:
        existing = await self.find_reference(source_id, target_id)
        return build_reference_operation(existing, source_id, target_id, relationship, version)

    async def queue_reference(
        self,
        batch: ReferenceBatch,
        source_id: str,
        target_id: str,
        relationship: Relationship,
        version: str | None = None,
    ) -> ReferenceAction:
        """Queue the write this edge needs, folding it into one already queued for it."""

        pending = batch.pending(source_id, target_id)
        if pending is not None:
            folded = fold_reference_operation(pending, version)
            batch.add(folded)
            return ReferenceAction.UNCHANGED if folded is None else ReferenceAction.UPDATED
        operation = await self.plan_reference(source_id, target_id, relationship, version)
        batch.add(operation)
        return _action_for(operation)

    async def find_reference(self, source_id: str, target_id: str) -> ExistingReference | None:
        outcome = await self._store.search_reference(source_id, target_id)
        if isinstance(outcome, SearchFailed):
            raise RemoteSearchError(
                f"Reference search failed for {source_id} -> {target_id}: {outcome.reason}",
                status_code=outcome.status_code,
            )
        if isinstance(outcome, ReferenceFound):
            return outcome.reference
        return None

    async def execute(self, operation: ReferenceOperation) -> ReferenceAction:
        body = operation.body
        match operation:
            case BatchCreate():
                outcome = await self._store.create_reference(
                    body.source, body.target, body.type, body.version
                )
                _raise_for_rejection(outcome, f"create {body.source} -> {body.target}")
                log.info("Created reference %s -> %s (%s)", body.source, body.target, body.type)
                return ReferenceAction.CREATED
            case BatchUpdate():
                outcome = await self._store.update_reference_version(
                    operation.id, operation.version, operation.if_version_match
                )
                _raise_for_rejection(outcome, f"update reference {operation.id}")
                log.info("Updated reference %s to version %s", operation.id, operation.version)
                return ReferenceAction.UPDATED

    async def submit(self, batch: ReferenceBatch) -> None:
        if not batch:
            return
        outcome = await self._store.submit_batch(batch)
        _raise_for_rejection(outcome, f"submit batch of {len(batch)} reference operation(s)")
        log.info(
            "Submitted reference batch: created=%s, updated=%s",
            len(batch.creates),
            len(batch.updates),
        )
        batch.clear()


def _action_for(operation: ReferenceOperation | None) -> ReferenceAction:
    match operation:
        case None:
            return ReferenceAction.UNCHANGED
        case BatchCreate():
            return ReferenceAction.CREATED
        case BatchUpdate():
            return ReferenceAction.UPDATED


def _raise_for_rejection(outcome: WriteOutcome, action: str) -> None:
    if not isinstance(outcome, WriteRejected):
        return
    log.error("Unable to %s: %s", action, outcome.reason)
    if outcome.version_conflict:
        raise VersionConflictError(
            f"Unable to {action}: remote copy changed ({outcome.reason})",
            status_code=outcome.status_code,
        )
    raise ReferenceWriteError(
        f"Unable to {action}: {outcome.reason}", status_code=outcome.status_code
    )
