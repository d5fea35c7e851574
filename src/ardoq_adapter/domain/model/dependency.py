"""Dependency value object."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

_DEP_PATTERN = re.compile(r"^\s*(?P<name>\S+)\s+->\s+(?P<version>\S+)\s*$")


class MalformedDependencyError(ValueError):
    """Raised when a dependency line does not match ``<name> -> <version>``."""

    def __init__(self, raw: str) -> None:
        super().__init__(
            f"Dependency string '{raw}' is malformed. Should match <name> -> <version>"
        )
        self.raw = raw


@dataclass(slots=True, frozen=True)
class Dependency:
    """A named artifact at a given version.

    Equality and hashing use ``name`` and ``version`` only; ``component_id`` is
    the remote id attached once resolution succeeded and never takes part in
    comparisons.
    """

    name: str
    version: str = ""
    component_id: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Dependency name must not be blank")

    @classmethod
    def from_dep_string(cls, raw: str) -> Dependency:
        match = _DEP_PATTERN.match(raw)
        if match is None:
            raise MalformedDependencyError(raw)
        return cls(name=match["name"], version=match["version"])

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.version}".rstrip()

    @property
    def is_resolved(self) -> bool:
        return self.component_id is not None

    def with_component_id(self, component_id: str) -> Dependency:
        """Return a copy carrying ``component_id``; the receiver is left untouched."""

        return replace(self, component_id=component_id)


def parse_dependency_report(text: str) -> list[Dependency]:
    """Parse a ``<name> -> <version>`` report, one dependency per line.

    Blank lines are skipped and repeated entries collapse to their first
    occurrence, keeping the report order.
    """

    return _unique(
        Dependency.from_dep_string(line) for line in text.splitlines() if line.strip()
    )


def _unique(dependencies: Iterable[Dependency]) -> list[Dependency]:
    seen: set[Dependency] = set()
    ordered: list[Dependency] = []
    for dependency in dependencies:
        if dependency in seen:
            continue
        seen.add(dependency)
        ordered.append(dependency)
    return ordered
