"""Tree sync module exports."""

from .controller import router as treesync_router
from .service.manager import TreeSyncService

__all__ = ["TreeSyncService", "treesync_router"]
