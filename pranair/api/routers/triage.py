"""Text triage endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..core.errors import PranairError, error_response
from ..deps import get_triage_service
from ..schemas.triage import TriageDecision, TriageMessage
from ..services.triage_service import TriageService

router = APIRouter(prefix="/api", tags=["triage"])


@router.post("/pranair-triage", response_model=TriageDecision)
async def triage(payload: TriageMessage, service: TriageService = Depends(get_triage_service)):
    """Classify a free-text report.

    The body is validated before the handler runs, so a malformed body is a
    400 even when ``HF_TOKEN`` is missing. The credential check precedes the
    blank-message check inside the service.
    """
    try:
        return await service.run(payload.message)
    except PranairError as exc:
        return error_response(exc, detail_key="detail", error="Triage AI failed")
