"""Pydantic schemas for the text triage agent."""
from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

Severity = Literal["LOW", "MEDIUM", "HIGH", "CRITICAL"]


class TriageMessage(BaseModel):
    message: str = Field(..., description="Free-text description of the emergency")


class TriageDecision(BaseModel):
    emergency: bool = False
    category: str = "unknown"
    severity: Severity = "MEDIUM"
    priority: int = Field(default=3, ge=1)
    suggested_drone_kit: List[str] = Field(default_factory=list)
    recommended_action: str = ""

    model_config = ConfigDict(frozen=True)
