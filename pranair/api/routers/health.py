"""Health check endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..core.config import Settings, get_settings

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/")
def healthcheck(cfg: Settings = Depends(get_settings)) -> dict:
    return {
        "status": "ok",
        "distress_provider": cfg.distress_provider,
        "providers": cfg.credential_status(),
    }
