"""Confine filesystem paths supplied by HTTP clients to the configured base directory."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import HTTPException

from billsync.settings import Settings


def confine_path(settings: Settings, value: Optional[str]) -> Optional[str]:
    """Return ``value`` resolved inside ``api_base_dir`` or raise 403."""
    if value is None:
        return None
    if not settings.api_base_dir:
        raise HTTPException(status_code=403, detail="Client supplied paths are disabled (BILLSYNC_API_BASE_DIR unset).")
    base = Path(settings.api_base_dir).expanduser().resolve()
    candidate = (base / value).resolve()
    if not candidate.is_relative_to(base):
        raise HTTPException(status_code=403, detail=f"Path {value!r} is outside the API base directory.")
    return str(candidate)


def confine_target(settings: Settings, target: str) -> str:
    """Configured repository ids pass through; anything else is a folder under ``api_base_dir``."""
    if any(cfg.id == target for cfg in settings.remote_repositories):
        return target
    return confine_path(settings, target) or target
