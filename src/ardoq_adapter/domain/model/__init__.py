"""Domain model for mirrored dependency graphs."""

from __future__ import annotations

from .dependency import Dependency, MalformedDependencyError, parse_dependency_report
from .enums import (
    ComponentStatus,
    ReferenceAction,
    Relationship,
    VersionPrecondition,
    Workspace,
)

__all__ = [
    "ComponentStatus",
    "Dependency",
    "MalformedDependencyError",
    "ReferenceAction",
    "Relationship",
    "VersionPrecondition",
    "Workspace",
    "parse_dependency_report",
]
