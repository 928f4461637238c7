from .closure import ClosureBuilder, ClosureResult
from .manager import BillService
from .manifest import ManifestStore

__all__ = ["BillService", "ClosureBuilder", "ClosureResult", "ManifestStore"]
