from __future__ import annotations

from typing import Callable, List, Union

import httpx
import pytest
from fastapi.testclient import TestClient

from pranair.api.core.config import Settings, get_settings
from pranair.api.deps import get_gateway
from pranair.api.llm import client as client_module
from pranair.api.llm.client import InferenceGateway
from pranair.api.main import app

Reply = Union[httpx.Response, Exception]


class FakeProvider:
    """Scripted provider behind an ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.replies: List[Reply] = []

    def reply(self, *replies: Reply) -> "FakeProvider":
        self.replies.extend(replies)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.replies:
            raise AssertionError(f"unexpected provider call: {request.method} {request.url}")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def build_settings(**overrides) -> Settings:
    values = {
        "HF_API_KEY": "hf-test-key",
        "HF_TOKEN": "hf-test-token",
        "GEMINI_API_KEY": "gemini-test-key",
        "DISTRESS_PROVIDER": "huggingface",
        "REQUEST_TIMEOUT_S": 5,
        "LLM_MAX_RETRIES": 1,
        "STRICT_CREDENTIALS": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(autouse=True)
def no_backoff(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(client_module, "RETRY_BACKOFF_S", 0)


@pytest.fixture()
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture()
def settings_factory() -> Callable[..., Settings]:
    return build_settings


@pytest.fixture()
def gateway_factory(provider: FakeProvider) -> Callable[..., InferenceGateway]:
    def _make(**overrides) -> InferenceGateway:
        return InferenceGateway(build_settings(**overrides), transport=provider.transport)

    return _make


@pytest.fixture()
def api_client(provider: FakeProvider):
    """Return a factory building a TestClient bound to scripted settings."""

    def _make(**overrides) -> TestClient:
        cfg = build_settings(**overrides)
        app.dependency_overrides[get_settings] = lambda: cfg
        app.dependency_overrides[get_gateway] = lambda: InferenceGateway(cfg, transport=provider.transport)
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
