"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from ardoq_adapter.adapters.ardoq import ArdoqRemoteStore
from ardoq_adapter.adapters.http_resilience import ResilientClient
from ardoq_adapter.config import get_ardoq_config
from ardoq_adapter.domain.dependency_sync import SyncDependenciesResult, sync_dependencies
from ardoq_adapter.domain.reconciliation import (
    ComponentResolver,
    ReferenceBatch,
    ReferenceReconciler,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ardoq_adapter.config import ArdoqConfig, ResilienceConfig
    from ardoq_adapter.domain.model import Dependency
    from ardoq_adapter.domain.ports import RemoteStore

ClientFactory = Callable[["ResilienceConfig"], ResilientClient]
StoreFactory = Callable[[ResilientClient, "ArdoqConfig"], "RemoteStore"]


log = getLogger(__name__)


def sync_dependency_report(
    *,
    code_repository: str,
    dependencies: Iterable[Dependency],
    vcs_hosting: str | None = None,
    use_batch: bool = False,
    config: ArdoqConfig | None = None,
    client_factory: ClientFactory | None = None,
    store_factory: StoreFactory | None = None,
) -> SyncDependenciesResult:
    """Mirror one dependency report into Ardoq using the configured adapters."""

    effective_config = config or get_ardoq_config()
    return asyncio.run(
        _sync_dependency_report_async(
            code_repository=code_repository,
            dependencies=list(dependencies),
            vcs_hosting=vcs_hosting,
            use_batch=use_batch,
            config=effective_config,
            client_factory=client_factory or ResilientClient,
            store_factory=store_factory or ArdoqRemoteStore,
        )
    )


async def _sync_dependency_report_async(
    *,
    code_repository: str,
    dependencies: list[Dependency],
    vcs_hosting: str | None,
    use_batch: bool,
    config: ArdoqConfig,
    client_factory: ClientFactory,
    store_factory: StoreFactory,
) -> SyncDependenciesResult:
    log.info(
        "Starting Ardoq sync: repository=%s, hosting=%s, dependencies=%s, batch=%s",
        code_repository,
        vcs_hosting,
        len(dependencies),
        use_batch,
    )
    async with client_factory(config.resilience) as client:
        store = store_factory(client, config)
        result = await sync_dependencies(
            resolver=ComponentResolver(store, component_types=config.component_types),
            reconciler=ReferenceReconciler(store),
            code_repository=code_repository,
            dependencies=dependencies,
            vcs_hosting=vcs_hosting,
            batch=ReferenceBatch() if use_batch else None,
        )

    log.info(
        f"Finished Ardoq sync: created={result.components.created}, "
        f"existing={result.components.existing}, errors={result.components.errors}, "
        f"failed_references={len(result.failed_references)}"
    )
    return result
