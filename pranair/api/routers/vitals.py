"""Agent 2: vitals analysis and clinical decision support."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from ..core.errors import PranairError, error_response
from ..deps import get_vitals_service
from ..schemas.vitals import VitalsReport, VitalsRequest
from ..services.vitals_service import VitalsService

router = APIRouter(prefix="/api", tags=["agent2"])


@router.post("/agent2-medical-analysis", response_model=VitalsReport)
async def analyze_vitals(
    payload: Optional[VitalsRequest] = None,
    service: VitalsService = Depends(get_vitals_service),
):
    try:
        return await service.analyze(payload or VitalsRequest())
    except PranairError as exc:
        return error_response(exc, error="Failed to generate vitals analysis")
