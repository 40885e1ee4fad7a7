"""Shared pytest fixtures for the completion gateway tests."""

from __future__ import annotations

import base64
from typing import Callable, List, Optional, Tuple, Union

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.routers.completion import get_completion_client
from app.services.completion_client import Attachment

# A scripted response is either completion text or an exception to raise.
Scripted = Union[str, Exception]


class FakeCompletionClient:
    """Deterministic stand-in for GeminiCompletionClient.

    Returns (or raises) the scripted responses in order and records every
    prompt it receives.
    """

    def __init__(self, responses: Optional[List[Scripted]] = None):
        self.responses: List[Scripted] = list(responses or [])
        self.calls: List[Tuple[str, Optional[Attachment]]] = []

    async def generate_completion(self, prompt: str, attachment: Optional[Attachment] = None) -> str:
        self.calls.append((prompt, attachment))
        if not self.responses:
            raise AssertionError(f"Unexpected completion call #{len(self.calls)}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_client() -> FakeCompletionClient:
    """Fake completion client with an empty script; tests fill ``responses``."""
    return FakeCompletionClient()


@pytest.fixture
def test_client(fake_client: FakeCompletionClient):
    """TestClient wired to the fake completion client.

    The lifespan is not entered, so no Gemini client is constructed.
    """
    app.dependency_overrides[get_completion_client] = lambda: fake_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def jpeg_base64() -> str:
    """Base64 of a few bytes standing in for a JPEG."""
    return base64.b64encode(b"\xff\xd8\xff\xe0fake-jpeg\xff\xd9").decode("ascii")


@pytest.fixture
def make_client() -> Callable[..., FakeCompletionClient]:
    """Factory for standalone fake clients used outside the HTTP layer."""
    return lambda *responses: FakeCompletionClient(list(responses))
