"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Workspace(StrEnum):
    """Logical partition of the remote store a component belongs to."""

    VCS_HOSTING = "vcs_hosting"
    CODE_REPOSITORY = "code_repository"
    SOFTWARE_FRAMEWORKS = "software_frameworks"


class Relationship(StrEnum):
    """Semantic kind of an edge between two components."""

    DEPENDS_ON = "depends_on"
    HOSTED_IN = "hosted_in"


class ComponentStatus(StrEnum):
    """Outcome of resolving one dependency against the remote store."""

    CREATED = "CREATED"
    EXISTING = "EXISTING"
    ERROR = "ERROR"


class ReferenceAction(StrEnum):
    """Write performed while reconciling one reference."""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


class VersionPrecondition(StrEnum):
    """Optimistic-concurrency precondition attached to an update."""

    LATEST = "latest"
