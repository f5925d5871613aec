"""Pytest configuration and fixtures for DualModel tests."""

from __future__ import annotations

import json
import os
from typing import Any

import httpx
import pytest

from dualmodel.client import BackendClient
from dualmodel.config import Settings
from dualmodel.dispatcher import DualDispatcher
from dualmodel.registry import ToolRegistry

PRIMARY = "anthropic/claude-sonnet-4.5"
SECONDARY = "openai/gpt-5.2"


def completion_body(content: str | None, model: str = PRIMARY) -> dict[str, Any]:
    """Build an OpenRouter-style chat-completions reply."""
    return {
        "id": "gen-123",
        "model": model,
        "choices": [
            {
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 12, "completion_tokens": 34, "total_tokens": 46},
    }


class FakeGateway:
    """Stub OpenRouter gateway recording every request it receives.

    By default each model answers with "<model> says: <prompt>". Per-model
    overrides map a model id to (status_code, json_body) or to an exception
    instance to raise.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.overrides: dict[str, Any] = {}

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = json.loads(request.content)
        model = body["model"]

        override = self.overrides.get(model)
        if isinstance(override, Exception):
            raise override
        if override is not None:
            status, payload = override
            return httpx.Response(status, json=payload)

        prompt = body["messages"][-1]["content"]
        return httpx.Response(200, json=completion_body(f"{model} says: {prompt}", model))

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture(autouse=True)
def isolated_environ(monkeypatch):
    """Give each test its own copy of os.environ so .env loading cannot leak."""
    monkeypatch.setattr(os, "environ", os.environ.copy())


@pytest.fixture
def settings() -> Settings:
    """Settings with a test key and the default backends."""
    return Settings(
        OPENROUTER_API_KEY="sk-or-test",
        PRIMARY_MODEL=PRIMARY,
        SECONDARY_MODEL=SECONDARY,
        PRIMARY_LABEL="CLAUDE SONNET 4.5",
        SECONDARY_LABEL="OPENAI GPT-5.2",
    )


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def client(settings: Settings, gateway: FakeGateway) -> BackendClient:
    return BackendClient(settings, transport=gateway.transport)


@pytest.fixture
def dispatcher(settings: Settings, client: BackendClient) -> DualDispatcher:
    return DualDispatcher(settings, client)


@pytest.fixture
def registry(settings: Settings, dispatcher: DualDispatcher) -> ToolRegistry:
    return ToolRegistry(settings, dispatcher)
