"""Sync plan and per-artifact outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from billsync.modules.artifacts.domain import Coordinate, Repository
from billsync.modules.artifacts.exceptions import BillSyncError


class OutcomeStatus(str, Enum):
    PRESENT = "present"
    DEPLOYED = "resolved-and-deployed"
    UNRESOLVABLE = "unresolvable"
    DEPLOY_FAILED = "deploy-failed"


@dataclass(frozen=True)
class SyncPlan:
    """Split of the required set against what the target already holds."""

    target: Repository
    present: Tuple[Coordinate, ...] = ()
    missing: Tuple[Coordinate, ...] = ()

    @property
    def required(self) -> Tuple[Coordinate, ...]:
        return tuple(sorted(self.present + self.missing))


@dataclass
class SyncOutcome:
    coordinate: Coordinate
    status: OutcomeStatus
    error: Optional[BillSyncError] = None

    @property
    def failed(self) -> bool:
        return self.status in (OutcomeStatus.UNRESOLVABLE, OutcomeStatus.DEPLOY_FAILED)

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"coordinate": self.coordinate.canonical, "status": self.status.value}
        if self.error is not None:
            payload["error"] = str(self.error)
        return payload


@dataclass
class SyncReport:
    target: Repository
    outcomes: List[SyncOutcome] = field(default_factory=list)

    def by_status(self, status: OutcomeStatus) -> List[SyncOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status is status]

    def counts(self) -> Dict[str, int]:
        return {
            "already_present": len(self.by_status(OutcomeStatus.PRESENT)),
            "deployed": len(self.by_status(OutcomeStatus.DEPLOYED)),
            "unresolvable": len(self.by_status(OutcomeStatus.UNRESOLVABLE)),
            "deploy_failed": len(self.by_status(OutcomeStatus.DEPLOY_FAILED)),
        }

    @property
    def failed(self) -> List[SyncOutcome]:
        return [outcome for outcome in self.outcomes if outcome.failed]

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "target": self.target.id,
            "counts": self.counts(),
            "outcomes": [outcome.as_dict() for outcome in self.outcomes],
            "exitCode": self.exit_code,
        }


@dataclass
class SyncResult:
    """Report plus the bill entries that could not be parsed."""

    report: SyncReport
    rejected: List[str] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return self.report.exit_code

    def as_dict(self) -> Dict[str, Any]:
        payload = self.report.as_dict()
        payload["rejected"] = list(self.rejected)
        return payload
