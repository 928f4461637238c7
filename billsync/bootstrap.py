"""Service wiring shared by the HTTP app and the command line."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from billsync.modules.bill import BillService
from billsync.modules.treesync import TreeSyncService

from .settings import Settings

log = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Container that wires plain-Python services with shared settings."""

    settings: Settings
    bill_service: BillService = field(init=False)
    treesync_service: TreeSyncService = field(init=False)

    def __post_init__(self) -> None:
        self.bill_service = BillService(self.settings)
        self.treesync_service = TreeSyncService(self.settings)
        log.debug(
            "Services ready: bill=%s repositories=%s",
            self.settings.bill_path,
            [cfg.id for cfg in self.settings.remote_repositories],
        )

    def close(self) -> None:
        """Release HTTP clients held by the services."""
        self.treesync_service.close()
