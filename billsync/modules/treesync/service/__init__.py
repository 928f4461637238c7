from .manager import TreeSyncService
from .planner import SyncPlanner
from .target import select_target_repository

__all__ = ["SyncPlanner", "TreeSyncService", "select_target_repository"]
