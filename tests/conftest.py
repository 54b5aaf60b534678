from __future__ import annotations

import os
from typing import Callable

import httpx
import pytest

# app.main reads settings at import time
os.environ.setdefault("OPENAI_API_KEY", "test-key")

from fastapi.testclient import TestClient  # noqa: E402

from app.config.settings import Settings, get_settings  # noqa: E402
from app.main import app  # noqa: E402
from app.relay.services.http import get_http_client  # noqa: E402
from app.relay.services.metrics import metrics  # noqa: E402


AUDIO_URL = "https://example.com/a.mp3"
PROVIDER_URL = "https://api.openai.com/v1/audio/transcriptions"


class FakeUpstreams:
    """Stand-in for the audio host and the provider behind one MockTransport."""

    def __init__(self) -> None:
        self.audio = httpx.Response(200, content=b"ID3-fake-mp3-bytes", headers={"content-type": "audio/mpeg"})
        self.provider = httpx.Response(200, json={"text": "hello world"})
        self.requests: list[httpx.Request] = []

    def provider_calls(self) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url) == PROVIDER_URL]

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        template = self.provider if str(request.url) == PROVIDER_URL else self.audio
        # a fresh copy per call, so repeated requests never share a consumed stream
        return httpx.Response(template.status_code, headers=template.headers, content=template.content)


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="test-key", _env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def upstreams() -> FakeUpstreams:
    return FakeUpstreams()


@pytest.fixture
def make_client(upstreams: FakeUpstreams) -> Callable[[Settings], TestClient]:
    async def _client_override():
        async with httpx.AsyncClient(transport=httpx.MockTransport(upstreams.handler)) as client:
            yield client

    def _make(settings: Settings) -> TestClient:
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_http_client] = _client_override
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, settings: Settings) -> TestClient:
    return make_client(settings)


@pytest.fixture(autouse=True)
def _reset_metrics():
    metrics.reset()
    yield
    metrics.reset()
