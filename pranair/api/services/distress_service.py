"""Human-distress assessment from a single uploaded image."""
from __future__ import annotations

import logging
from typing import List, Optional

from ..core.config import Settings
from ..core.errors import InputError
from ..llm import prompts
from ..llm.client import InferenceGateway, image_part, text_part
from ..llm.parser import ResponseParser, parser as default_parser
from ..schemas.distress import Detection, NormalizedAssessment, Posture, VisionObservation
from .severity import classify_detections, classify_posture, life_threat

logger = logging.getLogger(__name__)

PERSON_LABEL = "person"
DEFAULT_CONTENT_TYPE = "image/jpeg"
CREDENTIAL_BY_PROVIDER = {"huggingface": "HF_API_KEY", "gemini": "GEMINI_API_KEY"}


def assessment_from_detections(detections: List[Detection]) -> NormalizedAssessment:
    """Build an assessment from object-detection hits (detection table)."""

    people = [d for d in detections if d.label == PERSON_LABEL]
    confidence = max((p.score for p in people), default=0.0)
    urgency = classify_detections(len(people), confidence)
    return NormalizedAssessment(
        human_visible=bool(people),
        number_of_people=len(people),
        body_posture=Posture.unknown,
        signs_of_distress=["Human detected"] if people else [],
        urgency_level=urgency,
        life_threat=life_threat(urgency),
        summary="Human detected in the scene" if people else "No person detected",
        confidence=confidence,
    )


def assessment_from_observation(obs: VisionObservation) -> NormalizedAssessment:
    """Build an assessment from a described scene (posture table)."""

    people = obs.number_of_people
    urgency = classify_posture(people, obs.body_posture, obs.movement_observed)
    summary = obs.summary
    if not summary:
        summary = f"{people} person(s) detected, posture {obs.body_posture.value}" if people else "No person detected"
    return NormalizedAssessment(
        human_visible=people > 0,
        number_of_people=people,
        body_posture=obs.body_posture,
        visible_blood=obs.visible_blood,
        signs_of_distress=list(obs.signs_of_distress),
        movement_observed=obs.movement_observed,
        person_lying_down=obs.body_posture in (Posture.lying, Posture.collapsed),
        appears_motionless=people > 0 and not obs.movement_observed,
        urgency_level=urgency,
        life_threat=life_threat(urgency),
        summary=summary,
        confidence=obs.confidence,
    )


class DistressService:
    """Run the configured vision provider and normalize its answer."""

    def __init__(self, gateway: InferenceGateway, *, parser: ResponseParser = default_parser) -> None:
        self.gateway = gateway
        self.parser = parser

    @property
    def cfg(self) -> Settings:
        return self.gateway.cfg

    async def assess(self, image: Optional[bytes], content_type: str) -> NormalizedAssessment:
        self.gateway.require_credential(CREDENTIAL_BY_PROVIDER[self.cfg.distress_provider])
        if not image:
            raise InputError("An image file is required in the 'image' field", error="No image")
        if not (content_type or "").startswith("image/"):
            content_type = DEFAULT_CONTENT_TYPE
        if self.cfg.distress_provider == "gemini":
            raw = await self.gateway.gemini_generate(
                [text_part(prompts.DISTRESS_PROMPT), image_part(image, content_type)]
            )
            assessment = assessment_from_observation(self.parser.parse_observation(raw))
        else:
            raw = await self.gateway.detect_objects(image, content_type)
            assessment = assessment_from_detections(self.parser.parse_detections(raw))
        logger.info(
            "Distress assessment via %s: people=%s urgency=%s",
            self.cfg.distress_provider,
            assessment.number_of_people,
            assessment.urgency_level,
        )
        return assessment
