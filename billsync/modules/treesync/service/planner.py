"""Plan and execute the deploy-or-skip sync of a required artifact set."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from billsync.modules.artifacts.domain import Coordinate, Repository, sort_coordinates
from billsync.modules.artifacts.exceptions import DeployFailedError, UnresolvableArtifactError
from billsync.modules.artifacts.transport import ArtifactDeployer, ArtifactResolver
from billsync.modules.treesync.domain import OutcomeStatus, SyncOutcome, SyncPlan, SyncReport

T = TypeVar("T")
R = TypeVar("R")


class SyncPlanner:
    """Best-effort batch: every coordinate gets its own outcome."""

    def __init__(self, max_workers: int = 1) -> None:
        self.max_workers = max(1, int(max_workers))
        self.log = logging.getLogger(self.__class__.__name__)

    def plan(self, required: Iterable[Coordinate], target: Repository, resolver: ArtifactResolver) -> SyncPlan:
        ordered = sort_coordinates(set(required))
        flags = self._map(lambda c: self._probe(c, target, resolver), ordered)
        present = tuple(c for c, found in zip(ordered, flags) if found)
        missing = tuple(c for c, found in zip(ordered, flags) if not found)
        self.log.info("New artifacts: %d (out of %d) for %s", len(missing), len(ordered), target.id)
        return SyncPlan(target=target, present=present, missing=missing)

    def execute(
        self,
        plan: SyncPlan,
        source_repos: Sequence[Repository],
        target: Repository,
        resolver: ArtifactResolver,
        deployer: ArtifactDeployer,
    ) -> SyncReport:
        sources = list(source_repos)
        outcomes: List[SyncOutcome] = [SyncOutcome(c, OutcomeStatus.PRESENT) for c in plan.present]
        outcomes.extend(
            self._map(lambda c: self._sync_one(c, sources, target, resolver, deployer), list(plan.missing))
        )
        outcomes.sort(key=lambda outcome: outcome.coordinate.canonical)
        report = SyncReport(target=target, outcomes=outcomes)
        self.log.info("Sync of %s finished: %s", target.id, report.counts())
        return report

    def _probe(self, coordinate: Coordinate, target: Repository, resolver: ArtifactResolver) -> bool:
        try:
            return resolver.probe(coordinate, [target])
        except Exception as exc:  # noqa: BLE001
            self.log.warning("Probe of %s in %s failed, treating as missing (%s)", coordinate, target.id, exc)
            return False

    def _sync_one(
        self,
        coordinate: Coordinate,
        sources: Sequence[Repository],
        target: Repository,
        resolver: ArtifactResolver,
        deployer: ArtifactDeployer,
    ) -> SyncOutcome:
        try:
            data = resolver.fetch(coordinate, sources)
        except Exception as exc:  # noqa: BLE001
            self.log.error("Cannot resolve artifact %s at all (%s)", coordinate, exc)
            return SyncOutcome(coordinate, OutcomeStatus.UNRESOLVABLE, UnresolvableArtifactError(coordinate, exc))

        self.log.info("+ Deploy: %s (to %s)", coordinate, target.url)
        try:
            deployer.deploy(coordinate, data, target)
        except Exception as exc:  # noqa: BLE001
            self.log.error("Deployment failed for artifact %s (%s)", coordinate, exc)
            return SyncOutcome(coordinate, OutcomeStatus.DEPLOY_FAILED, DeployFailedError(coordinate, exc))
        return SyncOutcome(coordinate, OutcomeStatus.DEPLOYED)

    def _map(self, func: Callable[[T], R], items: List[T]) -> List[R]:
        """Apply ``func`` to ``items`` keeping input order, optionally on a bounded pool."""
        if self.max_workers == 1 or len(items) <= 1:
            return [func(item) for item in items]
        results: List[Optional[R]] = [None] * len(items)
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(items))) as executor:
            future_map = {executor.submit(func, item): idx for idx, item in enumerate(items)}
            for future in as_completed(future_map):
                results[future_map[future]] = future.result()
        return results  # type: ignore[return-value]
