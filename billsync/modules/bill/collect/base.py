"""Collaborator contracts used by the closure builder."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from billsync.modules.artifacts.domain import Coordinate


class DependencyCollector(Protocol):
    def resolve_direct_dependencies(self, coordinate: Coordinate, scope: str) -> Sequence[Coordinate]:
        """Return the dependency graph nodes of ``coordinate`` for ``scope``.

        May raise; the closure builder treats any error as a per-artifact failure.
        """
        ...


class ParentResolver(Protocol):
    def parent_of(self, coordinate: Coordinate) -> Optional[Coordinate]:
        ...
