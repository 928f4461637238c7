"""Persisted bill: read, merge and atomically rewrite the manifest file."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import AbstractSet, Iterable, Optional, Set

from billsync.modules.artifacts.domain import Coordinate
from billsync.modules.artifacts.exceptions import ManifestReadError, ManifestWriteError
from billsync.modules.bill.policy import SnapshotPolicy

log = logging.getLogger(__name__)

ENCODING = "utf-8"


def _target_mode(path: Path) -> int:
    """Permission bits of the existing bill, or the umask default for a new file."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class ManifestStore:
    """Owns the on-disk format: UTF-8, one canonical coordinate per line, sorted, unique."""

    def read(self, path: Path) -> Set[str]:
        path = Path(path)
        try:
            raw = path.read_text(encoding=ENCODING)
        except FileNotFoundError:
            log.info("No existing bill at %s, starting empty", path)
            return set()
        except (OSError, UnicodeDecodeError) as exc:
            raise ManifestReadError(path, f"Problem reading existing bill ({exc})") from exc
        entries = {line.strip() for line in raw.splitlines()}
        entries.discard("")
        log.debug("Read %d entries from %s", len(entries), path)
        return entries

    def merge(
        self,
        existing: AbstractSet[str],
        fresh_closure: Iterable[Coordinate],
        policy: Optional[SnapshotPolicy] = None,
        ignore_snapshots: bool = True,
    ) -> Set[str]:
        policy = policy or SnapshotPolicy()
        merged = {line for line in existing if policy.is_eligible_entry(line, ignore_snapshots)}
        dropped = len(existing) - len(merged)
        if dropped:
            log.info("Dropped %d snapshot entries from the existing bill", dropped)
        merged.update(
            coordinate.canonical
            for coordinate in fresh_closure
            if policy.is_eligible(coordinate, ignore_snapshots)
        )
        return merged

    def render(self, merged: Iterable[str]) -> str:
        return "".join(f"{line}\n" for line in sorted(set(merged)))

    def write(self, path: Path, merged: Iterable[str]) -> None:
        path = Path(path)
        content = self.render(merged).encode(ENCODING)
        tmp_name: Optional[str] = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
            with os.fdopen(fd, "wb") as fh:
                fh.write(content)
                fh.flush()
                os.fsync(fh.fileno())
            # mkstemp creates 0600; keep the bill readable like a plain write would
            os.chmod(tmp_name, _target_mode(path))
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as exc:
            raise ManifestWriteError(path, f"Problem writing bill ({exc})") from exc
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
        log.info("Done. Bill updated: %s", path.resolve())
