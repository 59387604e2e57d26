"""Helper functions to talk to the FastAPI backend."""
from __future__ import annotations

import os
from typing import Any, Dict

import httpx
from dotenv import load_dotenv

load_dotenv()

API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))
API_BASE = f"http://{API_HOST}:{API_PORT}"


class AgentError(Exception):
    """The backend answered with an error envelope."""

    def __init__(self, status_code: int, payload: Dict[str, Any]):
        self.status_code = status_code
        self.payload = payload
        message = payload.get("error") or "Request failed"
        detail = payload.get("message") or payload.get("detail")
        super().__init__(f"{message}: {detail}" if detail else message)


def _unwrap(response: httpx.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        data = {"error": response.text or f"HTTP {response.status_code}"}
    if response.is_error:
        raise AgentError(response.status_code, data)
    return data


async def analyze_image(filename: str, content: bytes, content_type: str) -> Dict[str, Any]:
    async with httpx.AsyncClient(timeout=60.0) as client:
        response = await client.post(
            f"{API_BASE}/api/agent1-human-distress",
            files={"image": (filename, content, content_type or "image/jpeg")},
        )
    return _unwrap(response)


async def analyze_vitals(payload: Dict[str, Any]) -> Dict[str, Any]:
    async with httpx.AsyncClient(timeout=60.0) as client:
        response = await client.post(f"{API_BASE}/api/agent2-medical-analysis", json=payload)
    return _unwrap(response)


async def triage(message: str) -> Dict[str, Any]:
    async with httpx.AsyncClient(timeout=60.0) as client:
        response = await client.post(f"{API_BASE}/api/pranair-triage", json={"message": message})
    return _unwrap(response)
