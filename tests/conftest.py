"""
Pytest configuration and shared fixtures.
"""

import asyncio
import json

import httpx
import pytest

from ai_compare.config import settings
from ai_compare.errors import ChannelSendError


# ============================================================
# Provider wire fakes
# ============================================================


def gemini_payload(text="Gemini says hi"):
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


def cohere_payload(text="Cohere says hi"):
    return {"generations": [{"id": "gen-1", "text": text}]}


def mistral_payload(text="Mistral says hi"):
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": text}}]}


class ProviderStub:
    """MockTransport handler that answers per provider host and records calls."""

    def __init__(self, overrides: dict | None = None):
        self.routes = {
            "generativelanguage.googleapis.com": httpx.Response(200, json=gemini_payload()),
            "api.cohere.ai": httpx.Response(200, json=cohere_payload()),
            "api.mistral.ai": httpx.Response(200, json=mistral_payload()),
        }
        self.routes.update(overrides or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes[request.url.host]
        if isinstance(route, Exception):
            raise route
        return route

    def body(self, host: str) -> dict:
        for request in self.requests:
            if request.url.host == host:
                return json.loads(request.content)
        raise AssertionError(f"no request to {host}")


def mock_http(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# ============================================================
# Channel sender fake
# ============================================================


class FakeSender:
    def __init__(self, connected=True, error: Exception | None = None, gate: asyncio.Event | None = None):
        self.connected = connected
        self.error = error
        self.gate = gate
        self.sent: list[tuple[str, str]] = []

    async def send(self, channel_id: str, text: str) -> None:
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        self.sent.append((channel_id, text))


@pytest.fixture
def sender():
    return FakeSender()


@pytest.fixture
def broken_sender():
    return FakeSender(error=ChannelSendError("Canal no encontrado"))


# ============================================================
# Settings
# ============================================================


@pytest.fixture
def provider_keys(monkeypatch):
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "gemini-key")
    monkeypatch.setattr(settings, "COHERE_API_KEY", "cohere-key")
    monkeypatch.setattr(settings, "MISTRAL_API_KEY", "mistral-key")
