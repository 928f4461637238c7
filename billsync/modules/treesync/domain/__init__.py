from .models import OutcomeStatus, SyncOutcome, SyncPlan, SyncReport, SyncResult

__all__ = ["OutcomeStatus", "SyncOutcome", "SyncPlan", "SyncReport", "SyncResult"]
