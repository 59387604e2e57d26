"""Text triage orchestration."""
from __future__ import annotations

import logging
import time

from ..core.errors import InputError
from ..llm import prompts
from ..llm.client import InferenceGateway
from ..llm.parser import ResponseParser, parser as default_parser
from ..schemas.triage import TriageDecision

logger = logging.getLogger(__name__)


class TriageService:
    """Turn a free-text emergency report into a triage decision."""

    def __init__(self, gateway: InferenceGateway, *, parser: ResponseParser = default_parser) -> None:
        self.gateway = gateway
        self.parser = parser

    async def run(self, message: str) -> TriageDecision:
        # Configuration is reported before input validation.
        self.gateway.require_credential("HF_TOKEN")
        if not message or not message.strip():
            raise InputError("Message must not be empty")
        start = time.perf_counter()
        raw = await self.gateway.generate_text(prompts.build_triage_prompt(message))
        logger.debug("Triage raw response: %s", raw)
        decision = self.parser.parse_triage(raw)
        logger.info(
            "Triage decision in %d ms: emergency=%s severity=%s priority=%s",
            int((time.perf_counter() - start) * 1000),
            decision.emergency,
            decision.severity,
            decision.priority,
        )
        return decision
