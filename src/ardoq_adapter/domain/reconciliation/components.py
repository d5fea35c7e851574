"""Component resolution against the remote store.

Resolution order for one dependency:
1) cache hit (same name AND version) -> EXISTING, no remote call
2) remote search in the workspace -> first match, EXISTING
3) remote create with the workspace's component type -> CREATED
4) create rejected -> ERROR (never raised, never cached)

A failed search is not "not found": it raises ``RemoteSearchError``.

Search-then-create is not atomic against the store. Two overlapping
resolutions of a never-seen name may both create; stores that implement
``FindOrCreateComponentStore`` are asked to do it in one step instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING

from ardoq_adapter.domain.model import ComponentStatus, Dependency, Workspace
from ardoq_adapter.domain.ports import (
    ComponentsFound,
    Created,
    FindOrCreateComponentStore,
    NotFound,
    SearchFailed,
    WriteRejected,
)

from .cache import ResolutionCache
from .errors import RemoteSearchError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ardoq_adapter.domain.ports import RemoteStore

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ComponentResolution:
    """Status and remote id for one resolved dependency."""

    status: ComponentStatus
    component_id: str | None = None
    dependency: Dependency | None = None

    @property
    def ok(self) -> bool:
        return self.status is not ComponentStatus.ERROR


class ComponentResolver:
    """Find or create remote components, remembering what it already resolved."""

    def __init__(
        self,
        store: RemoteStore,
        *,
        component_types: Mapping[Workspace, str],
        cache: ResolutionCache | None = None,
    ) -> None:
        missing = [workspace for workspace in Workspace if workspace not in component_types]
        if missing:
            names = ", ".join(sorted(missing))
            raise ValueError(f"No component type configured for workspace(s): {names}")
        self._store = store
        self._component_types = MappingProxyType(dict(component_types))
        self._cache = cache if cache is not None else ResolutionCache()

    @property
    def cache(self) -> ResolutionCache:
        return self._cache

    @property
    def component_types(self) -> Mapping[Workspace, str]:
        return self._component_types

    async def resolve_component(
        self,
        dependency: Dependency,
        workspace: Workspace = Workspace.SOFTWARE_FRAMEWORKS,
    ) -> ComponentResolution:
        cached = self._cache.lookup(workspace, dependency)
        if cached is not None:
            log.debug("Found cached result for: %s - %s", dependency.name, cached.component_id)
            return ComponentResolution(ComponentStatus.EXISTING, cached.component_id, cached)

        type_id = self._component_types[workspace]
        if isinstance(self._store, FindOrCreateComponentStore):
            outcome = await self._store.find_or_create_component(
                workspace, dependency.name, type_id
            )
        else:
            outcome = await self._search_then_create(workspace, dependency.name, type_id)
        return self._conclude(dependency, workspace, outcome)

    async def create_vcs_hosting_component(self, name: str) -> str | None:
        return await self._resolve_id(name, Workspace.VCS_HOSTING)

    async def create_code_repo_component(self, name: str) -> str | None:
        return await self._resolve_id(name, Workspace.CODE_REPOSITORY)

    async def _resolve_id(self, name: str, workspace: Workspace) -> str | None:
        if not name.strip():
            log.error("Refusing to resolve a blank %s component name", workspace)
            return None
        resolution = await self.resolve_component(Dependency(name=name), workspace)
        return resolution.component_id if resolution.ok else None

    async def _search_then_create(
        self,
        workspace: Workspace,
        name: str,
        type_id: str,
    ) -> ComponentsFound | Created | WriteRejected | SearchFailed:
        found = await self._store.search_component(workspace, name)
        if not isinstance(found, NotFound):
            return found
        return await self._store.create_component(workspace, name, type_id)

    def _conclude(
        self,
        dependency: Dependency,
        workspace: Workspace,
        outcome: ComponentsFound | Created | WriteRejected | SearchFailed,
    ) -> ComponentResolution:
        match outcome:
            case SearchFailed(reason=reason, status_code=status_code):
                raise RemoteSearchError(
                    f"Component search failed for {dependency.name!r} in {workspace}: {reason}",
                    status_code=status_code,
                )
            case ComponentsFound():
                resolved = dependency.with_component_id(outcome.first.id)
                log.debug("Found component: %s - %s", dependency.name, resolved.component_id)
                self._cache.store(workspace, resolved)
                return ComponentResolution(
                    ComponentStatus.EXISTING, resolved.component_id, resolved
                )
            case Created(id=component_id):
                resolved = dependency.with_component_id(component_id)
                log.info("Created component: %s - %s", dependency.name, component_id)
                self._cache.store(workspace, resolved)
                return ComponentResolution(ComponentStatus.CREATED, component_id, resolved)
            case WriteRejected(reason=reason):
                log.error("Unable to create component: %s (%s)", dependency.name, reason)
                return ComponentResolution(ComponentStatus.ERROR)
