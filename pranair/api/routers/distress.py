"""Agent 1: human distress detection from an uploaded image."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from ..core.errors import PranairError, error_response
from ..deps import get_distress_service
from ..schemas.distress import DistressResponse
from ..services.distress_service import DistressService

router = APIRouter(prefix="/api", tags=["agent1"])


@router.post("/agent1-human-distress", response_model=DistressResponse)
async def analyze_distress(
    image: Optional[UploadFile] = File(default=None),
    service: DistressService = Depends(get_distress_service),
):
    try:
        data = await image.read() if image is not None else None
        content_type = (image.content_type if image is not None else None) or ""
        analysis = await service.assess(data, content_type)
    except PranairError as exc:
        return error_response(exc, error="Vision failed")
    return DistressResponse(analysis=analysis)
