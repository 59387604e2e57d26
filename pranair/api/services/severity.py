"""Deterministic urgency and severity decision tables.

Two tables exist for the human-distress decision. ``classify_posture`` is
used when the provider describes posture and movement (Gemini vision);
``classify_detections`` is used when only person detections with
confidence scores are available (HuggingFace DETR). The distress service
picks one according to ``DISTRESS_PROVIDER``; they are never combined.
"""
from __future__ import annotations

from typing import Dict

from ..schemas.distress import LifeThreat, Posture, UrgencyLevel
from ..schemas.triage import Severity

DETECTION_CONFIDENCE_THRESHOLD = 0.7

PRIORITY_BY_SEVERITY: Dict[str, int] = {
    "CRITICAL": 1,
    "HIGH": 2,
    "MEDIUM": 3,
    "LOW": 4,
}


def classify_posture(people: int, posture: Posture, movement: bool) -> UrgencyLevel:
    if people <= 0:
        return "Low"
    if posture in (Posture.collapsed, Posture.lying):
        return "Critical"
    if posture == Posture.sitting and not movement:
        return "Medium"
    return "Low"


def classify_detections(people: int, confidence: float) -> UrgencyLevel:
    if people <= 0:
        return "Low"
    if confidence > DETECTION_CONFIDENCE_THRESHOLD:
        return "High"
    return "Medium"


def life_threat(urgency: UrgencyLevel) -> LifeThreat:
    """Collapse the four urgency levels onto the three life-threat levels."""

    return "High" if urgency == "Critical" else urgency


def default_priority(severity: Severity) -> int:
    return PRIORITY_BY_SEVERITY[severity]
