"""In-memory cache of resolved components."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ardoq_adapter.domain.model import Dependency, Workspace

type CacheKey = tuple[Workspace, str]


class ResolutionCache:
    """Last resolved dependency per workspace and name.

    Individual reads and writes are serialised; the lookup-then-resolve sequence
    performed by the resolver is not, so two concurrent resolutions of an unseen
    name can both miss.
    """

    def __init__(self) -> None:
        self._entries: dict[CacheKey, Dependency] = {}
        self._lock = threading.Lock()

    def lookup(self, workspace: Workspace, dependency: Dependency) -> Dependency | None:
        """Return the cached entry only if it equals ``dependency`` (name and version)."""

        with self._lock:
            cached = self._entries.get((workspace, dependency.name))
        if cached is None or cached != dependency or cached.component_id is None:
            return None
        return cached

    def store(self, workspace: Workspace, dependency: Dependency) -> None:
        if dependency.component_id is None:
            raise ValueError(f"Refusing to cache unresolved dependency {dependency.name!r}")
        with self._lock:
            self._entries[(workspace, dependency.name)] = dependency

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
