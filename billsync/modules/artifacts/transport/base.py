"""Capabilities consumed by the tree sync planner."""

from __future__ import annotations

import hashlib
from typing import Dict, Protocol, Sequence

from billsync.modules.artifacts.domain import Coordinate, Repository
from billsync.modules.artifacts.domain.constants import CHECKSUM_ALGORITHMS


class ArtifactResolver(Protocol):
    def probe(self, coordinate: Coordinate, repositories: Sequence[Repository]) -> bool:
        """Return True when any repository already holds the artifact."""
        ...

    def fetch(self, coordinate: Coordinate, repositories: Sequence[Repository]) -> bytes:
        """Return artifact bytes from the first repository that has them.

        Raises ArtifactResolutionError when none does.
        """
        ...


class ArtifactDeployer(Protocol):
    def deploy(self, coordinate: Coordinate, data: bytes, repository: Repository) -> None:
        ...


class RepositoryTransport(Protocol):
    """Byte-level access to one kind of repository (HTTP or filesystem)."""

    def exists(self, repository: Repository, coordinate: Coordinate) -> bool:
        ...

    def get(self, repository: Repository, coordinate: Coordinate) -> bytes:
        ...

    def put(self, repository: Repository, coordinate: Coordinate, data: bytes) -> None:
        ...


def checksums(data: bytes) -> Dict[str, str]:
    """Hex digests uploaded next to a deployed artifact (``.sha1``, ``.md5``)."""
    return {algorithm: hashlib.new(algorithm, data).hexdigest() for algorithm in CHECKSUM_ALGORITHMS}
