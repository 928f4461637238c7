"""Bill generation workflow: closure, snapshot filter, merge, persist."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from billsync.modules.artifacts.domain import Coordinate, ProjectReferences, artifact_set
from billsync.modules.bill.collect import DependencyCollector, ParentResolver
from billsync.modules.bill.domain import GenerateResult
from billsync.modules.bill.policy import SnapshotPolicy
from billsync.settings import Settings

from .closure import ClosureBuilder
from .manifest import ManifestStore


class BillService:
    """Create or update the bill of materials for one project."""

    def __init__(
        self,
        settings: Settings,
        closure_builder: Optional[ClosureBuilder] = None,
        store: Optional[ManifestStore] = None,
        policy: Optional[SnapshotPolicy] = None,
    ) -> None:
        self.settings = settings
        self.closure_builder = closure_builder or ClosureBuilder(max_passes=settings.closure_max_passes)
        self.store = store or ManifestStore()
        self.policy = policy or SnapshotPolicy()
        self.log = logging.getLogger(self.__class__.__name__)

    def generate(
        self,
        seed: Union[ProjectReferences, Iterable[Coordinate]],
        collector: DependencyCollector,
        parent_resolver: ParentResolver,
        *,
        manifest_path: Optional[Union[str, Path]] = None,
        ignore_snapshots: Optional[bool] = None,
        dry_run: bool = False,
    ) -> GenerateResult:
        """Collect the closure of ``seed`` and merge it into the bill.

        With ``dry_run`` the merged bill is rendered into the result instead
        of being written; the existing file is still read.
        """
        path = Path(manifest_path or self.settings.bill_path)
        ignore = self.settings.ignore_snapshots if ignore_snapshots is None else ignore_snapshots
        seeds = seed.seed() if isinstance(seed, ProjectReferences) else artifact_set(seed)

        # a broken bill must abort before any collection work
        existing = self.store.read(path)
        known = self._known_coordinates(existing) if self.settings.skip_cached_seeds else None
        closure = self.closure_builder.build_closure(seeds, collector, parent_resolver, known=known)

        merged = self.store.merge(existing, closure.artifacts, self.policy, ignore)
        content: Optional[str] = None
        if dry_run:
            content = self.store.render(merged)
            self.log.info("Dry run, bill %s left untouched", path)
        else:
            self.store.write(path, merged)
        self.log.info(
            "Total bill size: %d artifacts. This project: %d. Closure: %d.",
            len(merged),
            len(seeds),
            len(closure.artifacts),
        )
        return GenerateResult(
            manifest_path=path,
            count=len(merged),
            added=len(merged - existing),
            closure_size=len(closure.artifacts),
            complete=closure.complete,
            failures={c.canonical: message for c, message in closure.failures.items()},
            content=content,
        )

    def _known_coordinates(self, entries: Iterable[str]) -> set:
        known = set()
        for line in entries:
            try:
                known.add(Coordinate.parse(line))
            except ValueError:
                continue
        return known
