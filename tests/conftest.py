"""Shared fixtures: a scripted LLM gateway and an app wired to it."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import pytest
from fastapi.testclient import TestClient

from lyrics_generator.domain.exceptions import LlmError
from lyrics_generator.interface.app import create_app
from lyrics_generator.interface.dependencies import get_controller
from lyrics_generator.services.generate_lyrics import GenerationController

SAMPLE_LYRICS = "Verse 1:\nConcrete dreams and the city lights\n\nHook:\nWe keep on hustling every night"


@dataclass
class FakeGateway:
    """In-memory ``LlmGateway`` that records calls and replays a scripted reply."""

    reply: str | None = SAMPLE_LYRICS
    error: Exception | None = None
    gate: asyncio.Event | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float,
        max_tokens: int,
    ) -> str | None:
        self.calls.append(
            {
                "messages": messages,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def failing_gateway() -> FakeGateway:
    return FakeGateway(error=LlmError("LLM call failed: connection refused"))


@pytest.fixture
def controller(gateway: FakeGateway) -> GenerationController:
    return GenerationController(gateway)


@pytest.fixture
def blocked_controller() -> GenerationController:
    return GenerationController(None)


def _client_for(controller: GenerationController) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_controller] = lambda: controller
    return TestClient(app)


@pytest.fixture
def client(controller: GenerationController) -> TestClient:
    return _client_for(controller)


@pytest.fixture
def blocked_client(blocked_controller: GenerationController) -> TestClient:
    return _client_for(blocked_controller)
