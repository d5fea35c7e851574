"""Ardoq configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from ardoq_adapter.domain.model import Relationship, Workspace

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

if TYPE_CHECKING:
    from collections.abc import Mapping

ARDOQ_TIMEOUT_SECONDS = 30.0

WORKSPACE_ENV_VARS: Final[Mapping[Workspace, str]] = MappingProxyType(
    {
        Workspace.VCS_HOSTING: "ARDOQ_VCS_HOSTING_WORKSPACE",
        Workspace.CODE_REPOSITORY: "ARDOQ_CODE_REPOSITORY_WORKSPACE",
        Workspace.SOFTWARE_FRAMEWORKS: "ARDOQ_SOFTWARE_FRAMEWORKS_WORKSPACE",
    }
)

DEFAULT_COMPONENT_TYPES: Final[Mapping[Workspace, str]] = MappingProxyType(
    {
        Workspace.VCS_HOSTING: "p1681283498700",
        Workspace.CODE_REPOSITORY: "p1681283498700",
        Workspace.SOFTWARE_FRAMEWORKS: "p1659003743296",
    }
)

DEFAULT_REFERENCE_TYPES: Final[Mapping[Relationship, int]] = MappingProxyType(
    {
        Relationship.DEPENDS_ON: 2,
        Relationship.HOSTED_IN: 4,
    }
)


@dataclass(frozen=True)
class ArdoqConfig:
    """Holds Ardoq API configuration values."""

    api_url: str
    api_key: str
    workspace_ids: Mapping[Workspace, str]
    resilience: ResilienceConfig
    component_types: Mapping[Workspace, str] = field(
        default_factory=lambda: DEFAULT_COMPONENT_TYPES
    )
    reference_types: Mapping[Relationship, int] = field(
        default_factory=lambda: DEFAULT_REFERENCE_TYPES
    )

    def __post_init__(self) -> None:
        for label, table, keys in (
            ("workspace id", self.workspace_ids, tuple(Workspace)),
            ("component type", self.component_types, tuple(Workspace)),
            ("reference type", self.reference_types, tuple(Relationship)),
        ):
            missing = [str(key) for key in keys if key not in table]
            if missing:
                raise ConfigurationError(f"Missing {label} for: {', '.join(sorted(missing))}")

    def workspace_id(self, workspace: Workspace) -> str:
        return self.workspace_ids[workspace]

    def reference_type(self, relationship: Relationship) -> int:
        return self.reference_types[relationship]


def default_resilience_config(
    api_url: str,
    api_key: str,
    *,
    timeout_seconds: float = ARDOQ_TIMEOUT_SECONDS,
) -> ResilienceConfig:
    return ResilienceConfig(
        name="ardoq",
        base_url=api_url,
        timeout_seconds=timeout_seconds,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        default_headers={
            "Authorization": f"Token token={api_key}",
            "Accept": "application/json",
        },
    )


def get_ardoq_config(
    *,
    resilience: ResilienceConfig | None = None,
    component_types: Mapping[Workspace, str] | None = None,
    reference_types: Mapping[Relationship, int] | None = None,
) -> ArdoqConfig:
    names = ("ARDOQ_API_URL", "ARDOQ_API_KEY", *WORKSPACE_ENV_VARS.values())
    values = require_env_vars(names)
    api_url = values["ARDOQ_API_URL"].rstrip("/")
    timeout = optional_env_var("ARDOQ_TIMEOUT_SECONDS")
    try:
        timeout_seconds = float(timeout) if timeout is not None else ARDOQ_TIMEOUT_SECONDS
    except ValueError as exc:
        raise ConfigurationError(f"Invalid ARDOQ_TIMEOUT_SECONDS: {timeout}") from exc

    return ArdoqConfig(
        api_url=api_url,
        api_key=values["ARDOQ_API_KEY"],
        workspace_ids=MappingProxyType(
            {workspace: values[env] for workspace, env in WORKSPACE_ENV_VARS.items()}
        ),
        resilience=resilience
        or default_resilience_config(
            api_url, values["ARDOQ_API_KEY"], timeout_seconds=timeout_seconds
        ),
        component_types=MappingProxyType(dict(component_types or DEFAULT_COMPONENT_TYPES)),
        reference_types=MappingProxyType(dict(reference_types or DEFAULT_REFERENCE_TYPES)),
    )
