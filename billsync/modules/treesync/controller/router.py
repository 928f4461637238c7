"""FastAPI routes for syncing a bill into a target repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from billsync.api.paths import confine_path, confine_target
from billsync.modules.artifacts.domain import Coordinate
from billsync.modules.artifacts.exceptions import (
    ManifestError,
    MalformedCoordinateError,
    UnknownTargetRepositoryError,
)
from billsync.modules.treesync.service import TreeSyncService

router = APIRouter(prefix="/treesync", tags=["treesync"])


class SyncRequest(BaseModel):
    target: str
    bill_path: Optional[str] = None
    coordinates: Optional[List[str]] = None


def get_service(request: Request) -> TreeSyncService:
    container = getattr(request.app.state, "container", None)
    if not container or not getattr(container, "treesync_service", None):
        raise HTTPException(status_code=500, detail="Tree sync service not initialized.")
    return container.treesync_service


@router.post("/sync")
def sync(payload: SyncRequest, svc: TreeSyncService = Depends(get_service)) -> Dict[str, Any]:
    target = confine_target(svc.settings, payload.target)
    bill_path = confine_path(svc.settings, payload.bill_path)
    try:
        required = None
        if payload.coordinates is not None:
            required = [Coordinate.parse(value) for value in payload.coordinates]
        result = svc.sync(target, bill_path=bill_path, required=required)
    except (UnknownTargetRepositoryError, MalformedCoordinateError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ManifestError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return result.as_dict()
