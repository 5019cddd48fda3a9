"""Pytest configuration and fixtures."""

from typing import AsyncIterator, Optional
import pytest
from httpx import AsyncClient, ASGITransport

from main import app
from chat.provider import ProviderError, get_completion_provider


class FakeProvider:
    """In-memory CompletionProvider that records the prompts it receives."""

    def __init__(
        self,
        reply: str = "I'm good!",
        fragments: Optional[list[str]] = None,
        error: Optional[Exception] = None,
        fail_after: Optional[int] = None
    ):
        self.reply = reply
        self.fragments = fragments if fragments is not None else [reply]
        self.error = error
        self.fail_after = fail_after
        self.prompts: list[str] = []

    def prepare(self) -> None:
        if self.error and self.fail_after is None:
            raise self.error

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply

    async def stream(self, prompt: str) -> AsyncIterator[str]:
        self.prompts.append(prompt)
        if self.error and self.fail_after is None:
            raise self.error
        for index, fragment in enumerate(self.fragments):
            if self.error and index == self.fail_after:
                raise self.error
            yield fragment
        if self.error:
            raise self.error


@pytest.fixture
def fake_provider():
    """Provider override returning a fixed reply."""
    provider = FakeProvider(fragments=["I'm ", "good", "!"])
    app.dependency_overrides[get_completion_provider] = lambda: provider
    yield provider
    app.dependency_overrides.pop(get_completion_provider, None)


@pytest.fixture
def failing_provider():
    """Provider override that fails like an unreachable upstream."""
    provider = FakeProvider(error=ProviderError("quota exceeded"))
    app.dependency_overrides[get_completion_provider] = lambda: provider
    yield provider
    app.dependency_overrides.pop(get_completion_provider, None)


@pytest.fixture
def interrupted_provider():
    """Provider override that fails after the first fragment has been sent."""
    provider = FakeProvider(
        fragments=["I'm ", "good"], error=ProviderError("connection reset"), fail_after=1
    )
    app.dependency_overrides[get_completion_provider] = lambda: provider
    yield provider
    app.dependency_overrides.pop(get_completion_provider, None)


@pytest.fixture
def override_provider():
    """Install any CompletionProvider for the duration of a test."""
    def install(provider):
        app.dependency_overrides[get_completion_provider] = lambda: provider
        return provider

    yield install
    app.dependency_overrides.pop(get_completion_provider, None)


@pytest.fixture
async def async_client():
    """Async HTTP client for testing API endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
