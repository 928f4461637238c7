"""Filesystem-backed repository using the Maven-2 directory layout."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from billsync.modules.artifacts.domain import Coordinate, Repository
from billsync.modules.artifacts.exceptions import ArtifactDeployError, ArtifactResolutionError

from .base import checksums

log = logging.getLogger(__name__)


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def _write_atomic(target: Path, data: bytes) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=target.parent)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class FileSystemTransport:
    def artifact_path(self, repository: Repository, coordinate: Coordinate) -> Path:
        return repository.local_path.joinpath(*coordinate.path_segments)

    def exists(self, repository: Repository, coordinate: Coordinate) -> bool:
        return self.artifact_path(repository, coordinate).is_file()

    def get(self, repository: Repository, coordinate: Coordinate) -> bytes:
        path = self.artifact_path(repository, coordinate)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise ArtifactResolutionError(coordinate, {repository.id: str(exc)}) from exc

    def put(self, repository: Repository, coordinate: Coordinate, data: bytes) -> None:
        path = self.artifact_path(repository, coordinate)
        try:
            _write_atomic(path, data)
            for algorithm, digest in checksums(data).items():
                _write_atomic(path.with_name(f"{path.name}.{algorithm}"), digest.encode("ascii"))
        except OSError as exc:
            raise ArtifactDeployError(f"Cannot write {coordinate} to {path}: {exc}") from exc
        log.debug("Stored %s at %s (%d bytes)", coordinate, path, len(data))
