"""Bill module exports."""

from .controller import router as bill_router
from .service.manager import BillService

__all__ = ["BillService", "bill_router"]
