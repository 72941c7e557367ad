"""Custom exceptions for llmjson."""


class LLMJsonError(Exception):
    """Base exception for llmjson."""


class InvalidStateError(LLMJsonError, RuntimeError):
    """Operation not allowed in the current conversation state."""


class ParseError(LLMJsonError, ValueError):
    """Last assistant message is not valid JSON."""

    def __init__(self, content: str, reason: str = "") -> None:
        self.content = content
        self.reason = reason
        snippet = content[:500]
        message = (
            "Last response is not valid JSON"
            f"{f' ({reason})' if reason else ''}.\n\n"
            f"Response was:\n{snippet}"
            f"{'...' if len(content) > 500 else ''}"
        )
        super().__init__(message)


class TransportError(LLMJsonError):
    """Completion request failed (network, auth, provider-side)."""


class ConfigError(LLMJsonError):
    """Configuration/setup error."""


class AnomalyWarning(UserWarning):
    """Provider stopped for a reason other than natural completion."""
