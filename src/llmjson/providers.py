"""Chat-completion clients for LLM APIs."""
from __future__ import annotations

import inspect
import os
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .conversation import Message
from .errors import ConfigError, TransportError

DEFAULT_MODELS: dict[str, str] = {"openai": "gpt-3.5-turbo", "anthropic": "claude-3-5-haiku-latest"}
MODEL_PREFIXES: dict[str, str] = {"gpt": "openai", "o1": "openai", "claude": "anthropic"}
API_KEY_VARS: dict[str, str] = {"openai": "OPENAI_API_KEY", "anthropic": "ANTHROPIC_API_KEY"}
API_KEY_URLS: dict[str, str] = {
    "openai": "https://platform.openai.com/api-keys",
    "anthropic": "https://console.anthropic.com/",
}

# Normalized stop reasons.
STOP_COMPLETE = "stop"
STOP_LENGTH = "length"

ANTHROPIC_STOP_REASONS: dict[str, str] = {
    "end_turn": STOP_COMPLETE,
    "stop_sequence": STOP_COMPLETE,
    "max_tokens": STOP_LENGTH,
}


@dataclass(frozen=True)
class Completion:
    message: Message
    stop_reason: str | None
    usage: dict[str, Any] | None = field(default=None)


class CompletionClient(ABC):
    """Abstract chat-completion capability used by the translator.

    ``model`` is optional; the translator falls back to its own default.
    """

    model: str | None = None

    @abstractmethod
    def complete(
        self,
        messages: list[dict[str, str]],
        *,
        model: str | None = None,
        temperature: float = 1.0,
        n: int = 1,
    ) -> Completion:
        """Send messages and return one generated assistant message."""


def _sdk_client(provider: str) -> Any:
    """Build the provider's SDK client from its API key env var."""
    var = API_KEY_VARS[provider]
    api_key = os.environ.get(var)
    if not api_key:
        raise ConfigError(f"{var} not set. Get key at {API_KEY_URLS[provider]}")
    if provider == "openai":
        try:
            import openai
        except ImportError as e:
            raise ConfigError("openai package not installed. Run: pip install openai") from e
        return openai.OpenAI(api_key=api_key)
    try:
        import anthropic
    except ImportError as e:
        raise ConfigError("anthropic package not installed. Run: pip install anthropic") from e
    return anthropic.Anthropic(api_key=api_key)


def _accepts_keyword(func: Callable[..., Any], name: str) -> bool:
    try:
        params = inspect.signature(func).parameters
    except (TypeError, ValueError):
        return True
    return name in params or any(p.kind is inspect.Parameter.VAR_KEYWORD for p in params.values())


def _usage_dict(usage: Any) -> dict[str, Any] | None:
    if usage is None:
        return None
    if hasattr(usage, "model_dump"):
        return usage.model_dump()
    return dict(usage)


class OpenAIClient(CompletionClient):
    """Client for OpenAI's chat completions API."""

    def __init__(self, model: str | None = None, timeout: int = 60) -> None:
        self._client = _sdk_client("openai")
        self.model = model or DEFAULT_MODELS["openai"]
        self._timeout = timeout

    def complete(
        self,
        messages: list[dict[str, str]],
        *,
        model: str | None = None,
        temperature: float = 1.0,
        n: int = 1,
    ) -> Completion:
        try:
            response = self._client.chat.completions.create(
                model=model or self.model,
                messages=messages,  # type: ignore[arg-type]
                temperature=temperature,
                n=n,
                timeout=self._timeout,
            )
        except Exception as e:
            raise TransportError(f"OpenAI API error: {e}") from e
        choice = response.choices[0]
        return Completion(
            message=Message("assistant", choice.message.content or ""),
            stop_reason=choice.finish_reason,
            usage=_usage_dict(response.usage),
        )


class AnthropicClient(CompletionClient):
    """Client for Anthropic's messages API.

    System messages are lifted out of the transcript into the ``system``
    parameter; stop reasons are mapped onto OpenAI's vocabulary.
    ``temperature`` is only sent when the installed SDK's
    ``messages.create`` accepts it.
    """

    def __init__(self, model: str | None = None, timeout: int = 60, max_tokens: int = 4096) -> None:
        self._client = _sdk_client("anthropic")
        self.model = model or DEFAULT_MODELS["anthropic"]
        self._timeout = timeout
        self._max_tokens = max_tokens

    def complete(
        self,
        messages: list[dict[str, str]],
        *,
        model: str | None = None,
        temperature: float = 1.0,
        n: int = 1,
    ) -> Completion:
        if n != 1:
            raise ConfigError("Anthropic messages API returns a single completion (n=1)")
        create = self._client.messages.create
        system = "\n\n".join(m["content"] for m in messages if m["role"] == "system")
        kwargs: dict[str, object] = {
            "model": model or self.model,
            "max_tokens": self._max_tokens,
            "messages": [m for m in messages if m["role"] != "system"],
        }
        if _accepts_keyword(create, "temperature"):
            kwargs["temperature"] = temperature
        if system:
            kwargs["system"] = system
        try:
            response = create(**kwargs, timeout=self._timeout)
        except Exception as e:
            raise TransportError(f"Anthropic API error: {e}") from e
        text = "".join(getattr(block, "text", "") for block in response.content)
        return Completion(
            message=Message("assistant", text),
            stop_reason=ANTHROPIC_STOP_REASONS.get(response.stop_reason, response.stop_reason),
            usage=_usage_dict(response.usage),
        )


CLIENTS: dict[str, type[CompletionClient]] = {"openai": OpenAIClient, "anthropic": AnthropicClient}


def get_client(model: str | None = None, provider: str | None = None) -> CompletionClient:
    """Get client based on config. Priority: explicit > model prefix > env vars."""
    if provider:
        client_cls = CLIENTS.get(provider.lower())
        if client_cls is None:
            raise ConfigError(f"Unknown provider: {provider}. Use 'openai' or 'anthropic'.")
        return client_cls(model)
    if model:
        for prefix, prov in MODEL_PREFIXES.items():
            if model.lower().startswith(prefix):
                return CLIENTS[prov](model)
    for prov, var in API_KEY_VARS.items():
        if os.environ.get(var):
            return CLIENTS[prov](model)
    raise ConfigError("No API key found. Set OPENAI_API_KEY or ANTHROPIC_API_KEY.")
