"""FastAPI routes for bill generation."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from billsync.api.paths import confine_path
from billsync.modules.artifacts.exceptions import ManifestError
from billsync.modules.bill.collect import GraphDocument, GraphFileCollector
from billsync.modules.bill.service import BillService

router = APIRouter(prefix="/bill", tags=["bill"])


class GenerateRequest(BaseModel):
    graph: GraphDocument
    manifest_path: Optional[str] = None
    ignore_snapshots: Optional[bool] = None
    dry_run: bool = False


def get_service(request: Request) -> BillService:
    container = getattr(request.app.state, "container", None)
    if not container or not getattr(container, "bill_service", None):
        raise HTTPException(status_code=500, detail="Bill service not initialized.")
    return container.bill_service


@router.post("/generate")
def generate(payload: GenerateRequest, svc: BillService = Depends(get_service)) -> Dict[str, Any]:
    manifest_path = confine_path(svc.settings, payload.manifest_path)
    collector = GraphFileCollector(payload.graph)
    try:
        result = svc.generate(
            collector.project_references(),
            collector,
            collector,
            manifest_path=manifest_path,
            ignore_snapshots=payload.ignore_snapshots,
            dry_run=payload.dry_run,
        )
    except ManifestError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return result.as_dict()
