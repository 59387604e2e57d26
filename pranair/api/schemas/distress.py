"""Pydantic schemas for the human-distress image agent."""
from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


class Posture(str, Enum):
    standing = "standing"
    sitting = "sitting"
    lying = "lying"
    collapsed = "collapsed"
    unknown = "unknown"


UrgencyLevel = Literal["Low", "Medium", "High", "Critical"]
LifeThreat = Literal["Low", "Medium", "High"]


class Detection(BaseModel):
    """One object-detection hit as returned by the vision provider."""

    label: str
    score: float = Field(ge=0.0, le=1.0, allow_inf_nan=False)
    box: Optional[dict] = None


class VisionObservation(BaseModel):
    """Provider-neutral fields read from a vision model's JSON answer."""

    number_of_people: int = Field(default=0, ge=0)
    body_posture: Posture = Posture.unknown
    movement_observed: bool = False
    visible_blood: bool = False
    signs_of_distress: List[str] = Field(default_factory=list)
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    summary: str = ""

    model_config = ConfigDict(frozen=True)


class NormalizedAssessment(BaseModel):
    human_visible: bool = False
    number_of_people: int = Field(default=0, ge=0)
    body_posture: Posture = Posture.unknown
    visible_blood: bool = False
    signs_of_distress: List[str] = Field(default_factory=list)
    movement_observed: bool = False
    person_lying_down: bool = False
    appears_motionless: bool = False
    urgency_level: UrgencyLevel = "Low"
    life_threat: LifeThreat = "Low"
    summary: str = ""
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class DistressResponse(BaseModel):
    success: bool = True
    analysis: NormalizedAssessment
