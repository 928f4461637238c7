"""Health endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health", summary="Health probe")
async def health(request: Request) -> dict[str, object]:
    container = getattr(request.app.state, "container", None)
    repositories = []
    if container is not None:
        repositories = [cfg.id for cfg in container.settings.remote_repositories]
    return {"status": "ok", "repositories": repositories}
