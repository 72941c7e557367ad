"""Tests for llmjson error classes."""
import pytest

from llmjson import (
    AnomalyWarning,
    ConfigError,
    InvalidStateError,
    LLMJsonError,
    ParseError,
    TransportError,
)


class TestParseError:
    """Tests for ParseError exception."""

    def test_keeps_full_content(self):
        """ParseError stores the offending content."""
        err = ParseError("not json", "Expecting value")
        assert err.content == "not json"
        assert err.reason == "Expecting value"

    def test_message_includes_snippet_and_reason(self):
        """Message includes reason and response text."""
        err = ParseError("not json", "Expecting value")
        assert "Expecting value" in str(err)
        assert "not json" in str(err)

    def test_truncates_long_content(self):
        """Message shows at most 500 chars of content."""
        err = ParseError("x" * 1000)
        assert "x" * 501 not in str(err)
        assert "..." in str(err)
        assert len(err.content) == 1000

    def test_is_value_error(self):
        """ParseError can be caught as ValueError."""
        assert isinstance(ParseError("x"), ValueError)


class TestInvalidStateError:
    """Tests for InvalidStateError exception."""

    def test_is_runtime_error(self):
        """InvalidStateError can be caught as RuntimeError."""
        err = InvalidStateError("nothing to complete yet")
        assert isinstance(err, RuntimeError)
        assert "nothing to complete yet" in str(err)


class TestErrorHierarchy:
    """Tests for error hierarchy."""

    def test_all_errors_catchable_by_base(self):
        """All errors can be caught by LLMJsonError."""
        errors = [
            InvalidStateError("state"),
            ParseError("content"),
            TransportError("network"),
            ConfigError("config"),
        ]
        for err in errors:
            with pytest.raises(LLMJsonError):
                raise err

    def test_anomaly_warning_is_a_warning(self):
        """AnomalyWarning is a UserWarning, not an error."""
        assert issubclass(AnomalyWarning, UserWarning)
        assert not issubclass(AnomalyWarning, LLMJsonError)
