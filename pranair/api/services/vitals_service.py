"""Vitals dashboard report generation."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from ..llm import prompts
from ..llm.client import InferenceGateway, text_part
from ..schemas.vitals import VitalsReport, VitalsRequest

logger = logging.getLogger(__name__)


class VitalsService:
    """Ask Gemini for a doctor-facing report of the submitted vitals."""

    def __init__(self, gateway: InferenceGateway) -> None:
        self.gateway = gateway

    async def analyze(self, data: VitalsRequest) -> VitalsReport:
        report = await self.gateway.gemini_generate(
            [text_part(prompts.build_vitals_prompt(data))],
            system_instruction=prompts.VITALS_SYSTEM_INSTRUCTION,
        )
        logger.info("Vitals report generated (%s chars)", len(report))
        return VitalsReport(analysis=report, timestamp=datetime.now(timezone.utc))
