from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

import pytest

from ardoq_adapter.config import (
    DEFAULT_COMPONENT_TYPES,
    ArdoqConfig,
    default_resilience_config,
)
from ardoq_adapter.domain.model import Workspace
from ardoq_adapter.domain.reconciliation import ComponentResolver, ReferenceReconciler
from tests.support.remote_store import InMemoryRemoteStore

if TYPE_CHECKING:
    from collections.abc import Mapping

ARDOQ_ENV = {
    "ARDOQ_API_URL": "https://example.ardoq.test/",
    "ARDOQ_API_KEY": "secret-token",
    "ARDOQ_VCS_HOSTING_WORKSPACE": "ws-hosting",
    "ARDOQ_CODE_REPOSITORY_WORKSPACE": "ws-repos",
    "ARDOQ_SOFTWARE_FRAMEWORKS_WORKSPACE": "ws-frameworks",
}


@pytest.fixture
def component_types() -> Mapping[Workspace, str]:
    return DEFAULT_COMPONENT_TYPES


@pytest.fixture
def remote_store() -> InMemoryRemoteStore:
    return InMemoryRemoteStore()


@pytest.fixture
def resolver(
    remote_store: InMemoryRemoteStore,
    component_types: Mapping[Workspace, str],
) -> ComponentResolver:
    return ComponentResolver(remote_store, component_types=component_types)


@pytest.fixture
def reconciler(remote_store: InMemoryRemoteStore) -> ReferenceReconciler:
    return ReferenceReconciler(remote_store)


@pytest.fixture
def ardoq_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    for name, value in ARDOQ_ENV.items():
        monkeypatch.setenv(name, value)
    monkeypatch.delenv("ARDOQ_TIMEOUT_SECONDS", raising=False)
    return dict(ARDOQ_ENV)


@pytest.fixture
def ardoq_config() -> ArdoqConfig:
    api_url = "https://example.ardoq.test"
    return ArdoqConfig(
        api_url=api_url,
        api_key="secret-token",
        workspace_ids=MappingProxyType(
            {
                Workspace.VCS_HOSTING: "ws-hosting",
                Workspace.CODE_REPOSITORY: "ws-repos",
                Workspace.SOFTWARE_FRAMEWORKS: "ws-frameworks",
            }
        ),
        resilience=default_resilience_config(api_url, "secret-token"),
    )
