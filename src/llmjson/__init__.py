"""llmjson: Translate free text into JSON matching a schema with an LLM.

Example:
    >>> from llmjson import Translator
    >>> schema = {"type": "object", "properties": {"name": {"type": "string"}}}
    >>> t = Translator(schema)
    >>> t.translate("My name is Alice").result
    {'name': 'Alice'}
"""

from .config import TranslatorConfig
from .conversation import ConversationState, Message
from .errors import (
    AnomalyWarning,
    ConfigError,
    InvalidStateError,
    LLMJsonError,
    ParseError,
    TransportError,
)
from .providers import Completion, CompletionClient, get_client
from .ratelimit import RateLimiter
from .translator import JSONValue, Translator, TranslatorState

__version__ = "0.1.0"
__all__ = [
    "Translator",
    "TranslatorState",
    "TranslatorConfig",
    "ConversationState",
    "Message",
    "RateLimiter",
    "Completion",
    "CompletionClient",
    "JSONValue",
    "InvalidStateError",
    "ParseError",
    "TransportError",
    "ConfigError",
    "LLMJsonError",
    "AnomalyWarning",
    "get_client",
]
