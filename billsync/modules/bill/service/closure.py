"""Transitive closure of artifact coordinates, including parent chains."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, Iterable, List, Optional, Set

from billsync.modules.artifacts.domain import ArtifactSet, Coordinate, artifact_set, sort_coordinates
from billsync.modules.artifacts.domain.constants import COMPILE_SCOPE
from billsync.modules.bill.collect import DependencyCollector, ParentResolver

DEFAULT_MAX_PASSES = 25


@dataclass
class ClosureResult:
    artifacts: ArtifactSet
    failures: Dict[Coordinate, str] = field(default_factory=dict)
    passes: int = 0
    complete: bool = True

    def __len__(self) -> int:
        return len(self.artifacts)


class ClosureBuilder:
    """Grow a seed set until collector output and parents add nothing new.

    Every pass visits the coordinates that entered the working set during the
    previous pass. A visited coordinate contributes its own node plus the
    collector's graph, and every node contributes its declared parent. Errors
    from either collaborator only cost that coordinate its contribution.
    """

    def __init__(self, max_passes: int = DEFAULT_MAX_PASSES, scope: str = COMPILE_SCOPE) -> None:
        if max_passes < 1:
            raise ValueError("max_passes must be at least 1")
        self.max_passes = max_passes
        self.scope = scope
        self.log = logging.getLogger(self.__class__.__name__)

    def build_closure(
        self,
        seed: Iterable[Coordinate],
        collector: DependencyCollector,
        parent_resolver: ParentResolver,
        known: Optional[AbstractSet[Coordinate]] = None,
    ) -> ClosureResult:
        seeds = artifact_set(seed)
        working: Set[Coordinate] = set(seeds)
        failures: Dict[Coordinate, str] = {}
        parents: Dict[Coordinate, Optional[Coordinate]] = {}
        skipped = set(known or ()) & working
        if skipped:
            self.log.info("Skipping transitive collection for %d cached seed(s)", len(skipped))
        frontier = working - skipped
        visited: Set[Coordinate] = set(skipped)
        passes = 0

        while frontier and passes < self.max_passes:
            passes += 1
            pending = sort_coordinates(frontier)
            visited.update(pending)
            discovered: Set[Coordinate] = set()
            for coordinate in pending:
                for node in self._collect(coordinate, collector, failures):
                    discovered.add(node)
                    parent = self._parent(node, parent_resolver, parents, failures)
                    if parent is not None:
                        discovered.add(parent)
            new = discovered - working
            working.update(new)
            frontier = new - visited
            self.log.debug("Closure pass %d visited %d, added %d", passes, len(pending), len(new))

        complete = not frontier
        if not complete:
            self.log.warning(
                "Closure stopped after %d passes with %d coordinates left unexpanded",
                passes,
                len(frontier),
            )
        self.log.info(
            "Closure of %d seed(s): %d artifacts in %d pass(es), %d failure(s)",
            len(seeds),
            len(working),
            passes,
            len(failures),
        )
        return ClosureResult(
            artifacts=artifact_set(working),
            failures=failures,
            passes=passes,
            complete=complete,
        )

    def _collect(
        self,
        coordinate: Coordinate,
        collector: DependencyCollector,
        failures: Dict[Coordinate, str],
    ) -> List[Coordinate]:
        nodes = [coordinate]
        try:
            nodes.extend(collector.resolve_direct_dependencies(coordinate, self.scope))
        except Exception as exc:  # noqa: BLE001
            self.log.warning("Problem resolving %s (%s)", coordinate, exc)
            failures[coordinate] = str(exc)
        return nodes

    def _parent(
        self,
        node: Coordinate,
        parent_resolver: ParentResolver,
        cache: Dict[Coordinate, Optional[Coordinate]],
        failures: Dict[Coordinate, str],
    ) -> Optional[Coordinate]:
        if node in cache:
            return cache[node]
        parent: Optional[Coordinate] = None
        try:
            parent = parent_resolver.parent_of(node)
        except Exception as exc:  # noqa: BLE001
            self.log.warning("Problem building complete graph for %s (%s)", node, exc)
            failures.setdefault(node, str(exc))
        cache[node] = parent
        return parent
