"""Core Translator class for llmjson."""
from __future__ import annotations

import copy
import enum
import json
import logging
import warnings
from collections.abc import Callable
from typing import Any, Union

from .config import TranslatorConfig
from .conversation import ConversationState, Message
from .errors import AnomalyWarning, InvalidStateError, ParseError
from .providers import DEFAULT_MODELS, STOP_COMPLETE, CompletionClient, get_client
from .ratelimit import RateLimiter

logger = logging.getLogger(__name__)

JSONValue = Union[dict[str, "JSONValue"], list["JSONValue"], str, int, float, bool, None]
JSONSchema = dict[str, Any]


class TranslatorState(enum.Enum):
    EMPTY = "empty"
    SEEDED = "seeded"
    ANSWERED = "answered"
    EXTENDED = "extended"


class Translator:
    """Translate free text into JSON objects matching a JSON Schema.

    Every mutating method returns the translator so calls can be chained::

        t = Translator(schema)
        t.translate("Alice, 31, lives in Paris").add_context("She moved to Rome")
        data = t.result

    One caller drives one translator at a time; concurrent calls on the same
    instance are unsupported and may interleave transcript appends.

    With ``debug=True`` rate-limit sleeps and completion usage are logged at
    INFO instead of DEBUG. The library adds no handlers, so configure
    logging (e.g. ``logging.basicConfig(level=logging.INFO)``) to see them.
    """

    def __init__(
        self,
        schema: JSONSchema,
        client: CompletionClient | None = None,
        config: TranslatorConfig | None = None,
        *,
        model: str | None = None,
        debug: bool | None = None,
        provider: str | None = None,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        """Initialize translator. The client is auto-detected from env if not given."""
        cfg = config or TranslatorConfig()
        overrides: dict[str, Any] = {}
        if model is not None:
            overrides["model"] = model
        if debug is not None:
            overrides["debug"] = debug
        if overrides:
            cfg = cfg.with_overrides(**overrides)
        self._config = cfg
        self._schema = copy.deepcopy(schema)
        self._client = client if client is not None else get_client(cfg.model, provider)
        self._rate_limiter = rate_limiter or RateLimiter(
            max_requests=cfg.max_requests_per_window,
            window=cfg.window_seconds,
            margin=cfg.window_margin,
            verbose=cfg.debug,
        )
        self._conversation = ConversationState()
        self._log_level = logging.INFO if cfg.debug else logging.DEBUG

    def translate(self, text: str, *, temperature: float | None = None) -> Translator:
        """Translate ``text`` into a JSON object. Discards the previous conversation."""
        self._conversation.reset(self.system_prompt, text)
        return self.process(temperature=temperature)

    def add_context(
        self, text: str, prompt: str | None = None, *, temperature: float | None = None
    ) -> Translator:
        """Ask the model to complete its last response using additional context.

        The new user message looks like::

            {prompt}
            ```
            {text}
            ```
        """
        if not self._conversation.has_assistant_turn():
            raise InvalidStateError("Can't complete if nothing was translated first.")
        if prompt is None:
            prompt = self._config.context_prompt
        self._conversation.append("user", f"{prompt}\n```\n{text}\n```\n")
        return self.process(temperature=temperature)

    def add_example(self, text: str, result: JSONValue) -> Translator:
        """Add a worked example as a user/assistant pair.

        Please note, this may bias later responses toward the example.
        """
        self._conversation.append("user", text)
        self._conversation.append("assistant", json.dumps(result, indent=2))
        return self

    def add_message(self, content: str, role: str) -> Translator:
        """Append a raw message. Role and coherence are not checked."""
        self._conversation.append(role, content)
        return self

    def process(self, *, temperature: float | None = None) -> Translator:
        """Send the whole conversation for completion and append the reply."""
        self._rate_limiter.acquire()
        self._rate_limiter.record()

        model = self.model
        completion = self._client.complete(
            self._conversation.to_dicts(),
            model=model,
            temperature=self._config.temperature if temperature is None else temperature,
            n=1,
        )
        logger.log(
            self._log_level,
            "Completion received",
            extra={
                "model": model,
                "stop_reason": completion.stop_reason,
                "usage": completion.usage,
                "message_count": len(self._conversation),
            },
        )
        if completion.stop_reason != STOP_COMPLETE:
            logger.warning("Bad stop reason from %s: %s", model, completion.stop_reason)
            warnings.warn(
                f"Completion stopped with reason {completion.stop_reason!r}; response may be truncated",
                AnomalyWarning,
                stacklevel=2,
            )
        self._conversation.append(completion.message.role, completion.message.content)
        return self

    def process_result(self, handler: Callable[[JSONValue, Translator], Any]) -> Translator:
        """Call ``handler(result, translator)`` without breaking the chain."""
        handler(self.result, self)
        return self

    @property
    def result(self) -> JSONValue:
        """Parsed JSON of the last assistant response, or None.

        Raises ParseError if the response is not valid JSON.
        """
        content = self._conversation.last_assistant_content()
        if not content:
            return None
        return _parse_json(content, unsafe_eval=self._config.unsafe_eval)

    @property
    def state(self) -> TranslatorState:
        last = self._conversation.last
        if last is None:
            return TranslatorState.EMPTY
        if last.role == "assistant":
            return TranslatorState.ANSWERED
        if self._conversation.has_assistant_turn():
            return TranslatorState.EXTENDED
        return TranslatorState.SEEDED

    @property
    def system_prompt(self) -> str:
        """System message text: instructions followed by the fenced schema."""
        return (
            f"{self._config.system_instructions}\n\n```json\n"
            f"{json.dumps(self._schema, indent=2)}\n```\n"
        )

    @property
    def model(self) -> str:
        """Configured model, else the client's default, else the baseline model."""
        return self._config.model or getattr(self._client, "model", None) or DEFAULT_MODELS["openai"]

    @property
    def config(self) -> TranslatorConfig:
        return self._config

    @property
    def schema(self) -> JSONSchema:
        return copy.deepcopy(self._schema)

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._rate_limiter

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._conversation.messages

    @property
    def history(self) -> list[dict[str, str]]:
        """Full conversation history (returns copy)."""
        return self._conversation.to_dicts()


def _parse_json(content: str, unsafe_eval: bool = False) -> JSONValue:
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        if not unsafe_eval:
            raise ParseError(content, str(e)) from e
    try:
        return _eval_json_like(content)
    except Exception as e:
        raise ParseError(content, f"unsafe eval failed: {e}") from e


def _eval_json_like(content: str) -> JSONValue:
    """Evaluate model output as a Python expression. Runs untrusted code."""
    namespace = {"__builtins__": {}, "true": True, "false": False, "null": None}
    value = eval(content, namespace)  # noqa: S307
    # Rejects values JSON cannot represent (sets, objects, ...).
    return json.loads(json.dumps(value))
