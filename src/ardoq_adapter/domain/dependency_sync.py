"""Application services for mirroring one dependency report into the remote store."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from ardoq_adapter.domain.model import (
    ComponentStatus,
    ReferenceAction,
    Relationship,
    Workspace,
)
from ardoq_adapter.domain.reconciliation import (
    ComponentResolution,
    ReconciliationError,
    RemoteSearchError,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ardoq_adapter.domain.model import Dependency
    from ardoq_adapter.domain.reconciliation import (
        ComponentResolver,
        ReferenceBatch,
        ReferenceReconciler,
    )

log = getLogger(__name__)


@dataclass(slots=True)
class ResolutionTally:
    """Per-status counts of component resolutions."""

    counts: Counter[ComponentStatus] = field(default_factory=Counter["ComponentStatus"])

    def record(self, status: ComponentStatus) -> None:
        self.counts[status] += 1

    @property
    def created(self) -> int:
        return self.counts[ComponentStatus.CREATED]

    @property
    def existing(self) -> int:
        return self.counts[ComponentStatus.EXISTING]

    @property
    def errors(self) -> int:
        return self.counts[ComponentStatus.ERROR]

    def as_dict(self) -> dict[str, int]:
        return {status.value: self.counts[status] for status in ComponentStatus}


@dataclass(slots=True)
class SyncDependenciesResult:
    """Outcome of mirroring one dependency report."""

    code_repository_id: str
    vcs_hosting_id: str | None
    components: ResolutionTally = field(default_factory=ResolutionTally)
    references: Counter[ReferenceAction] = field(default_factory=Counter["ReferenceAction"])
    failed_references: list[str] = field(default_factory=list[str])

    def summary(self) -> dict[str, object]:
        return {
            "components": self.components.as_dict(),
            "references": {action.value: self.references[action] for action in ReferenceAction},
            "failed_references": list(self.failed_references),
        }


async def sync_dependencies(
    *,
    resolver: ComponentResolver,
    reconciler: ReferenceReconciler,
    code_repository: str,
    dependencies: Iterable[Dependency],
    vcs_hosting: str | None = None,
    batch: ReferenceBatch | None = None,
) -> SyncDependenciesResult:
    """Resolve every dependency and link it to the code repository component.

    The repository (and its hosting platform, when given) must resolve; failures
    there abort the sync with ``ReconciliationError``. Per-dependency failures
    are counted and the sync moves on. With ``batch`` the reference writes are
    queued and submitted once at the end instead of one request per edge.
    """

    repository_id = await resolver.create_code_repo_component(code_repository)
    if repository_id is None:
        raise ReconciliationError(f"Unable to resolve code repository {code_repository!r}")

    hosting_id: str | None = None
    if vcs_hosting is not None:
        hosting_id = await resolver.create_vcs_hosting_component(vcs_hosting)
        if hosting_id is None:
            raise ReconciliationError(f"Unable to resolve VCS hosting {vcs_hosting!r}")

    result = SyncDependenciesResult(code_repository_id=repository_id, vcs_hosting_id=hosting_id)
    log.info(
        "Starting dependency sync: repository=%s (%s), hosting=%s",
        code_repository,
        repository_id,
        hosting_id,
    )

    if hosting_id is not None:
        await _link(
            reconciler,
            result,
            batch,
            source_id=repository_id,
            target_id=hosting_id,
            relationship=Relationship.HOSTED_IN,
            label=f"{code_repository} -> {vcs_hosting}",
        )

    for dependency in dependencies:
        resolution = await _resolve_dependency(resolver, dependency)
        result.components.record(resolution.status)
        if resolution.component_id is None:
            continue
        await _link(
            reconciler,
            result,
            batch,
            source_id=repository_id,
            target_id=resolution.component_id,
            relationship=Relationship.DEPENDS_ON,
            version=dependency.version or None,
            label=f"{code_repository} -> {dependency.full_name}",
        )

    if batch is not None:
        await reconciler.submit(batch)

    log.info(
        "Finished dependency sync: components=%s, references=%s, failed_references=%s",
        result.components.as_dict(),
        dict(result.references),
        len(result.failed_references),
    )
    return result


async def _resolve_dependency(
    resolver: ComponentResolver,
    dependency: Dependency,
) -> ComponentResolution:
    try:
        return await resolver.resolve_component(dependency, Workspace.SOFTWARE_FRAMEWORKS)
    except RemoteSearchError:
        log.exception("Search failed while resolving %s", dependency.full_name)
        return ComponentResolution(ComponentStatus.ERROR)


async def _link(
    reconciler: ReferenceReconciler,
    result: SyncDependenciesResult,
    batch: ReferenceBatch | None,
    *,
    source_id: str,
    target_id: str,
    relationship: Relationship,
    label: str,
    version: str | None = None,
) -> None:
    try:
        if batch is None:
            action = await reconciler.reconcile_reference(
                source_id, target_id, relationship, version
            )
        else:
            action = await reconciler.queue_reference(
                batch, source_id, target_id, relationship, version
            )
    except ReconciliationError:
        log.exception("Reference reconciliation failed for %s", label)
        result.failed_references.append(label)
        return
    result.references[action] += 1
