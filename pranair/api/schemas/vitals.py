"""Pydantic schemas for the vitals analysis agent."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class VitalsRequest(BaseModel):
    demographics: Optional[Any] = None
    vitals: Optional[Any] = None
    history: Optional[Any] = None


class VitalsReport(BaseModel):
    success: bool = True
    analysis: str
    timestamp: datetime
