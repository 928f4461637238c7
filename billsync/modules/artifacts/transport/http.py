"""HTTP client for Maven-2 layout repositories (Nexus, Artifactory, plain web servers)."""

from __future__ import annotations

import logging
import time
from typing import Optional

import httpx

from billsync.modules.artifacts.domain import Coordinate, Repository
from billsync.modules.artifacts.exceptions import ArtifactDeployError, ArtifactResolutionError

from .base import checksums


class MavenHttpTransport:
    """Probe, download and upload artifacts over HTTP."""

    def __init__(self, client: Optional[httpx.Client] = None, *, timeout: float = 30.0) -> None:
        self.log = logging.getLogger(self.__class__.__name__)
        self._client = client or httpx.Client(timeout=timeout, verify=True, follow_redirects=True)

    def _build_artifact_url(self, repository: Repository, coordinate: Coordinate, suffix: str = "") -> str:
        return f"{repository.url.rstrip('/')}/{coordinate.layout_path(suffix)}"

    def exists(self, repository: Repository, coordinate: Coordinate) -> bool:
        url = self._build_artifact_url(repository, coordinate)
        response = self._client.head(url, auth=repository.auth)
        if response.status_code == 404:
            return False
        response.raise_for_status()
        return True

    def get(self, repository: Repository, coordinate: Coordinate) -> bytes:
        url = self._build_artifact_url(repository, coordinate)
        start_time = time.time()
        try:
            response = self._client.get(url, auth=repository.auth)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ArtifactResolutionError(coordinate, {repository.id: str(exc)}) from exc
        data = response.content
        elapsed = max(time.time() - start_time, 1e-3)
        self.log.debug(
            "Downloaded %s from %s (%d bytes, %.2fs)",
            coordinate,
            repository.id,
            len(data),
            elapsed,
        )
        return data

    def put(self, repository: Repository, coordinate: Coordinate, data: bytes) -> None:
        url = self._build_artifact_url(repository, coordinate)
        try:
            response = self._client.put(url, content=data, auth=repository.auth)
            response.raise_for_status()
            for algorithm, digest in checksums(data).items():
                checksum_url = self._build_artifact_url(repository, coordinate, f".{algorithm}")
                self._client.put(checksum_url, content=digest.encode("ascii"), auth=repository.auth).raise_for_status()
        except httpx.HTTPError as exc:
            raise ArtifactDeployError(f"Upload of {coordinate} to {repository.id} failed: {exc}") from exc
        self.log.debug("Uploaded %s to %s (%d bytes)", coordinate, url, len(data))

    def close(self) -> None:
        self._client.close()
