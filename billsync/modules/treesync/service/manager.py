"""Tree sync workflow: select target, load required set, plan, execute."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from billsync.modules.artifacts.domain import Coordinate, Repository
from billsync.modules.artifacts.exceptions import MalformedCoordinateError
from billsync.modules.artifacts.transport import (
    ArtifactDeployer,
    ArtifactResolver,
    MavenHttpTransport,
    RepositoryArtifactDeployer,
    RepositoryArtifactResolver,
)
from billsync.modules.bill.service import ManifestStore
from billsync.modules.treesync.domain import SyncResult
from billsync.settings import Settings

from .planner import SyncPlanner
from .target import select_target_repository


class TreeSyncService:
    """Push every artifact of a bill that the target repository is missing."""

    def __init__(
        self,
        settings: Settings,
        resolver: Optional[ArtifactResolver] = None,
        deployer: Optional[ArtifactDeployer] = None,
        planner: Optional[SyncPlanner] = None,
        store: Optional[ManifestStore] = None,
    ) -> None:
        self.settings = settings
        # one HTTP client serves both resolution and deployment
        self._http: Optional[MavenHttpTransport] = None
        if resolver is None or deployer is None:
            self._http = MavenHttpTransport(timeout=settings.http_timeout)
        self.resolver = resolver or RepositoryArtifactResolver(http=self._http)
        self.deployer = deployer or RepositoryArtifactDeployer(http=self._http)
        self.planner = planner or SyncPlanner(max_workers=settings.sync_workers)
        self.store = store or ManifestStore()
        self.log = logging.getLogger(self.__class__.__name__)

    def close(self) -> None:
        if self._http is not None:
            self._http.close()
            self._http = None

    @property
    def remotes(self) -> List[Repository]:
        return [Repository.from_config(cfg) for cfg in self.settings.remote_repositories]

    def sync(
        self,
        target_name: str,
        *,
        bill_path: Optional[Union[str, Path]] = None,
        required: Optional[Iterable[Coordinate]] = None,
    ) -> SyncResult:
        remotes = self.remotes
        # fail fast, before any resolution work
        target = select_target_repository(target_name, remotes)
        rejected: List[str] = []
        if required is None:
            required, rejected = self._load_required(Path(bill_path or self.settings.bill_path))
        sources = [repo for repo in remotes if repo != target]
        for repo in sources:
            self.log.info("Source repository used: %s", repo)

        plan = self.planner.plan(required, target, self.resolver)
        report = self.planner.execute(plan, sources, target, self.resolver, self.deployer)
        return SyncResult(report=report, rejected=rejected)

    def _load_required(self, path: Path) -> Tuple[List[Coordinate], List[str]]:
        entries = self.store.read(path)
        if not entries:
            self.log.warning("Bill %s is empty or missing, nothing to sync", path)
        required: List[Coordinate] = []
        rejected: List[str] = []
        for line in sorted(entries):
            try:
                required.append(Coordinate.parse(line))
            except MalformedCoordinateError as exc:
                self.log.warning("Skipping bill entry: %s", exc)
                rejected.append(line)
        return required, rejected
