"""Inference gateway over the hosted HuggingFace and Gemini providers."""
from __future__ import annotations

import asyncio
import base64
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..core.config import Settings
from ..core.errors import ConfigurationError, InputError, ProviderWarmingUp, UpstreamError

logger = logging.getLogger(__name__)

RETRY_BACKOFF_S = 0.5


def text_part(text: str) -> Dict[str, Any]:
    return {"text": text}


def image_part(image: bytes, content_type: str) -> Dict[str, Any]:
    return {
        "inline_data": {
            "mime_type": content_type or "image/jpeg",
            "data": base64.b64encode(image).decode("ascii"),
        }
    }


def _looks_like_loading(body: str) -> bool:
    lowered = body.lower()
    return "estimated_time" in lowered or "currently loading" in lowered


class InferenceGateway:
    """Build provider requests and perform the outbound call.

    Every call checks its credential and payload before touching the
    network, uses an explicit timeout, and retries transport failures at
    most ``cfg.llm_max_retries`` times. HTTP error statuses are not retried.
    """

    def __init__(self, cfg: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.cfg = cfg
        self.transport = transport

    async def detect_objects(self, image: bytes, content_type: str) -> str:
        """Run object detection on raw image bytes and return the raw body."""

        key = self.require_credential("HF_API_KEY")
        if not image:
            raise InputError("Uploaded image is empty", error="No image")
        url = f"{self.cfg.hf_base_url.rstrip('/')}/{self.cfg.hf_detection_model}"
        headers = {
            "Authorization": f"Bearer {key}",
            "Content-Type": content_type or "image/jpeg",
            "Accept": "application/json",
        }
        response = await self._post("huggingface", url, headers=headers, content=image)
        return response.text

    async def generate_text(self, prompt: str) -> str:
        """Run text generation and return the generated continuation."""

        key = self.require_credential("HF_TOKEN")
        if not prompt.strip():
            raise InputError("Prompt is empty")
        url = f"{self.cfg.hf_base_url.rstrip('/')}/{self.cfg.hf_triage_model}"
        headers = {"Authorization": f"Bearer {key}", "Content-Type": "application/json"}
        payload = {
            "inputs": prompt,
            "parameters": {
                "max_new_tokens": self.cfg.triage_max_new_tokens,
                "return_full_text": False,
            },
        }
        response = await self._post("huggingface", url, headers=headers, json=payload)
        try:
            data = response.json()
        except ValueError:
            return response.text
        if isinstance(data, list) and data and isinstance(data[0], dict):
            return str(data[0].get("generated_text", ""))
        if isinstance(data, dict) and "generated_text" in data:
            return str(data["generated_text"])
        return response.text

    async def gemini_generate(
        self,
        parts: List[Dict[str, Any]],
        *,
        system_instruction: Optional[str] = None,
    ) -> str:
        """Call ``generateContent`` and return the first candidate's text."""

        key = self.require_credential("GEMINI_API_KEY")
        if not parts:
            raise InputError("Nothing to send to Gemini")
        if any("inline_data" in part and not part["inline_data"]["data"] for part in parts):
            raise InputError("Uploaded image is empty", error="No image")
        url = f"{self.cfg.gemini_base_url.rstrip('/')}/models/{self.cfg.gemini_model}:generateContent"
        headers = {"x-goog-api-key": key, "Content-Type": "application/json"}
        payload: Dict[str, Any] = {"contents": [{"role": "user", "parts": parts}]}
        if system_instruction:
            payload["system_instruction"] = {"parts": [text_part(system_instruction)]}
        response = await self._post("gemini", url, headers=headers, json=payload)
        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamError("Gemini returned a non-JSON body", raw=response.text) from exc
        if not isinstance(data, dict):
            raise UpstreamError("Gemini returned an unexpected body", raw=response.text)
        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            raise UpstreamError("No response from Gemini", raw=response.text)
        content = candidates[0].get("content")
        content_parts = content.get("parts") if isinstance(content, dict) else None
        first = content_parts[0] if isinstance(content_parts, list) and content_parts else None
        text = first.get("text") if isinstance(first, dict) else None
        if not isinstance(text, str) or not text:
            raise UpstreamError("Empty response from Gemini", raw=response.text)
        return text

    def require_credential(self, name: str) -> str:
        """Return the named credential or raise before any network call."""

        value = {
            "HF_API_KEY": self.cfg.hf_api_key,
            "HF_TOKEN": self.cfg.triage_token,
            "GEMINI_API_KEY": self.cfg.gemini_api_key,
        }[name]
        if not value:
            raise ConfigurationError(f"{name} is not configured", error=f"{name} missing")
        return value

    async def _post(self, provider: str, url: str, **kwargs: Any) -> httpx.Response:
        attempts = self.cfg.llm_max_retries + 1
        for attempt in range(attempts):
            try:
                async with httpx.AsyncClient(timeout=self.cfg.request_timeout_s, transport=self.transport) as client:
                    response = await client.post(url, **kwargs)
                break
            except httpx.TransportError as exc:
                logger.warning("%s call failed (attempt %s/%s): %s", provider, attempt + 1, attempts, exc)
                if attempt == attempts - 1:
                    raise UpstreamError(f"{provider} unreachable", raw=repr(exc)) from exc
                await asyncio.sleep(RETRY_BACKOFF_S * (2 ** attempt))
        if response.status_code == 503 or (response.is_error and _looks_like_loading(response.text)):
            raise ProviderWarmingUp(
                f"{provider} model is warming up. Try again in 10 seconds.",
                raw=response.text,
                status=response.status_code,
            )
        if response.is_error:
            raise UpstreamError(
                f"{provider} returned HTTP {response.status_code}",
                raw=response.text,
                status=response.status_code,
            )
        return response
