"""Common FastAPI dependencies."""
from __future__ import annotations

from fastapi import Depends

from .core.config import Settings, get_settings
from .llm.client import InferenceGateway
from .services.distress_service import DistressService
from .services.triage_service import TriageService
from .services.vitals_service import VitalsService


def get_gateway(cfg: Settings = Depends(get_settings)) -> InferenceGateway:
    return InferenceGateway(cfg)


def get_distress_service(gateway: InferenceGateway = Depends(get_gateway)) -> DistressService:
    return DistressService(gateway)


def get_vitals_service(gateway: InferenceGateway = Depends(get_gateway)) -> VitalsService:
    return VitalsService(gateway)


def get_triage_service(gateway: InferenceGateway = Depends(get_gateway)) -> TriageService:
    return TriageService(gateway)
