"""Translator configuration."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any

from .errors import ConfigError

DEFAULT_SYSTEM_INSTRUCTIONS = """You are a translator assistant.
Your goal is to translate user inputs into JSON Objects matching this schema:"""

DEFAULT_CONTEXT_PROMPT = "Complete your last response using this context:"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class TranslatorConfig:
    """Immutable settings for one Translator.

    ``model=None`` means the completion client's own default model.
    ``window_seconds + window_margin`` is the rolling window the request
    quota applies to.
    """

    model: str | None = None
    temperature: float = 1.0
    debug: bool = False
    max_requests_per_window: int = 3
    window_seconds: float = 60.0
    window_margin: float = 0.2
    system_instructions: str = DEFAULT_SYSTEM_INSTRUCTIONS
    context_prompt: str = DEFAULT_CONTEXT_PROMPT
    unsafe_eval: bool = False

    def __post_init__(self) -> None:
        if self.max_requests_per_window < 1:
            raise ConfigError("max_requests_per_window must be at least 1")
        if self.window_seconds < 0 or self.window_margin < 0:
            raise ConfigError("window_seconds and window_margin must be non-negative")

    def with_overrides(self, **changes: Any) -> TranslatorConfig:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_env(cls, prefix: str = "LLMJSON_", **overrides: Any) -> TranslatorConfig:
        """Build a config from ``<prefix>MODEL``, ``TEMPERATURE``, ``DEBUG``, ``MAX_REQUESTS``."""
        values: dict[str, Any] = {}
        model = os.getenv(f"{prefix}MODEL")
        if model:
            values["model"] = model
        temperature = os.getenv(f"{prefix}TEMPERATURE")
        if temperature:
            try:
                values["temperature"] = float(temperature)
            except ValueError as e:
                raise ConfigError(f"{prefix}TEMPERATURE must be a number, got {temperature!r}") from e
        debug = os.getenv(f"{prefix}DEBUG")
        if debug is not None:
            flag = debug.strip().lower()
            if flag not in _TRUTHY | _FALSY:
                raise ConfigError(f"{prefix}DEBUG must be a boolean, got {debug!r}")
            values["debug"] = flag in _TRUTHY
        max_requests = os.getenv(f"{prefix}MAX_REQUESTS")
        if max_requests:
            try:
                values["max_requests_per_window"] = int(max_requests)
            except ValueError as e:
                raise ConfigError(f"{prefix}MAX_REQUESTS must be an integer, got {max_requests!r}") from e
        values.update(overrides)
        return cls(**values)
