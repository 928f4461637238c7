"""Snapshot eligibility for persisted bills."""

from __future__ import annotations

import logging

from billsync.modules.artifacts.domain import Coordinate
from billsync.modules.artifacts.exceptions import MalformedCoordinateError

log = logging.getLogger(__name__)


class SnapshotPolicy:
    """Decide whether a coordinate may be written to a bill."""

    def is_eligible(self, coordinate: Coordinate, ignore_snapshots: bool) -> bool:
        return not (ignore_snapshots and coordinate.is_snapshot)

    def is_eligible_entry(self, line: str, ignore_snapshots: bool) -> bool:
        if not ignore_snapshots:
            return True
        try:
            coordinate = Coordinate.parse(line)
        except MalformedCoordinateError:
            # unknown lines are carried over untouched
            log.warning("Keeping unparseable bill entry %r", line)
            return True
        return self.is_eligible(coordinate, ignore_snapshots)
