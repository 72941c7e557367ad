"""Ordered, role-tagged message transcript."""
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Message:
    role: str
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


class ConversationState:
    """Append-only transcript, cleared only by reset().

    Not safe for concurrent mutation; one caller owns one state.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []

    def reset(self, system_text: str, user_text: str) -> ConversationState:
        """Replace the transcript with one system and one user message."""
        self._messages = [Message("system", system_text), Message("user", user_text)]
        return self

    def append(self, role: str, content: str) -> ConversationState:
        self._messages.append(Message(role, content))
        return self

    def last_assistant_content(self) -> str | None:
        """Content of the final message if it came from the assistant, else None."""
        if not self._messages:
            return None
        last = self._messages[-1]
        if last.role != "assistant":
            return None
        return last.content

    def has_assistant_turn(self) -> bool:
        return any(m.role == "assistant" for m in self._messages)

    @property
    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def to_dicts(self) -> list[dict[str, str]]:
        return [m.to_dict() for m in self._messages]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))
