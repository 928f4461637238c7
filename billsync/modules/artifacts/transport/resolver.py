"""Resolver and deployer that dispatch each repository to its transport."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence

from billsync.modules.artifacts.domain import Coordinate, Repository
from billsync.modules.artifacts.exceptions import ArtifactResolutionError

from .base import RepositoryTransport
from .filesystem import FileSystemTransport
from .http import MavenHttpTransport


class _TransportDispatch:
    def __init__(
        self,
        http: Optional[MavenHttpTransport] = None,
        filesystem: Optional[FileSystemTransport] = None,
        *,
        timeout: float = 30.0,
    ) -> None:
        self.http: RepositoryTransport = http or MavenHttpTransport(timeout=timeout)
        self.filesystem: RepositoryTransport = filesystem or FileSystemTransport()
        self.log = logging.getLogger(self.__class__.__name__)

    def transport_for(self, repository: Repository) -> RepositoryTransport:
        return self.filesystem if repository.is_local else self.http


class RepositoryArtifactResolver(_TransportDispatch):
    def probe(self, coordinate: Coordinate, repositories: Sequence[Repository]) -> bool:
        for repository in repositories:
            if self.transport_for(repository).exists(repository, coordinate):
                return True
        return False

    def fetch(self, coordinate: Coordinate, repositories: Sequence[Repository]) -> bytes:
        causes: Dict[str, str] = {}
        for repository in repositories:
            try:
                data = self.transport_for(repository).get(repository, coordinate)
            except ArtifactResolutionError as exc:
                causes.update(exc.causes or {repository.id: str(exc)})
                continue
            self.log.debug("Resolved %s from %s", coordinate, repository.id)
            return data
        raise ArtifactResolutionError(coordinate, causes)


class RepositoryArtifactDeployer(_TransportDispatch):
    def deploy(self, coordinate: Coordinate, data: bytes, repository: Repository) -> None:
        self.transport_for(repository).put(repository, coordinate, data)
