"""Pytest fixtures and mocks for llmjson tests."""
import pytest
from unittest.mock import MagicMock
from typing import Dict, List, Optional

from llmjson import Completion, CompletionClient, Message, RateLimiter, Translator


class MockClient(CompletionClient):
    """Mock completion client for testing without real API calls."""

    def __init__(
        self,
        responses: Optional[List[str]] = None,
        stop_reason: str = "stop",
        model: str = "mock-model",
    ) -> None:
        self.responses = responses or ['{"name": "Alice"}']
        self.stop_reason = stop_reason
        self.model = model
        self.call_count = 0
        self.calls: List[Dict] = []

    def complete(self, messages, *, model=None, temperature=1.0, n=1):
        self.calls.append(
            {"messages": [dict(m) for m in messages], "model": model, "temperature": temperature, "n": n}
        )
        response = self.responses[min(self.call_count, len(self.responses) - 1)]
        self.call_count += 1
        return Completion(
            message=Message("assistant", response),
            stop_reason=self.stop_reason,
            usage={"prompt_tokens": 10, "completion_tokens": 5},
        )

    @property
    def last_messages(self) -> List[Dict[str, str]]:
        return self.calls[-1]["messages"]


class FakeClock:
    """Manual clock; sleep() advances time instead of blocking."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


PERSON_SCHEMA = {
    "title": "Person",
    "type": "object",
    "properties": {"name": {"type": "string", "description": "Full name"}},
}


@pytest.fixture
def mock_client():
    """Create a mock client instance."""
    return MockClient()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def translator(mock_client, clock):
    """Translator wired to a mock client and a fake clock."""
    limiter = RateLimiter(max_requests=3, window=60.0, margin=0.2, clock=clock, sleep=clock.sleep)
    t = Translator(PERSON_SCHEMA, client=mock_client, rate_limiter=limiter)
    t._mock = mock_client  # Expose mock for test assertions
    return t


@pytest.fixture
def mock_anthropic_env(monkeypatch):
    """Set up environment for Anthropic provider."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


@pytest.fixture
def mock_openai_env(monkeypatch):
    """Set up environment for OpenAI provider."""
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)


@pytest.fixture
def no_api_keys(monkeypatch):
    """Remove all API keys from environment."""
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


@pytest.fixture
def mock_openai_client():
    """Mock OpenAI SDK client returning one finished choice."""
    mock_message = MagicMock()
    mock_message.content = '{"name": "Alice"}'

    mock_choice = MagicMock()
    mock_choice.message = mock_message
    mock_choice.finish_reason = "stop"

    mock_response = MagicMock()
    mock_response.choices = [mock_choice]
    mock_response.usage.model_dump.return_value = {"prompt_tokens": 3, "completion_tokens": 4}

    mock_client = MagicMock()
    mock_client.chat.completions.create.return_value = mock_response

    return mock_client
