"""Resolve the logical sync target name to a repository handle."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from billsync.modules.artifacts.domain import Repository
from billsync.modules.artifacts.domain.constants import LOCAL_TARGET_ID
from billsync.modules.artifacts.exceptions import UnknownTargetRepositoryError

log = logging.getLogger(__name__)


def select_target_repository(name: str, remotes: Sequence[Repository]) -> Repository:
    """Exact id match among ``remotes`` first, then an existing local directory."""
    for candidate in remotes:
        log.debug("Candidate for sync: %s", candidate.id)
        if candidate.id == name:
            return candidate
    if name:
        path = Path(name).expanduser()
        if path.is_dir():
            log.info("Using local folder %s as sync target", path)
            return Repository.from_path(path, LOCAL_TARGET_ID)
    raise UnknownTargetRepositoryError(name)
