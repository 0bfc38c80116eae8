"""Ordered message stack with scope/subject filtering.

Filters return new MessageStack instances so they can be chained:

    stack.for_scope("billing_address").for_subject("address1")
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Level(Enum):
    """Message level."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Message:
    """A single diagnostic entry.

    Attributes:
        msgid: Message identifier (e.g., "missing_name_last")
        scope: Scope the message belongs to
        subject: Field or concern the message is about
        level: ERROR, WARNING or INFO
        params: Extra values for rendering (error code, offending value, ...)
        text: Human-readable text, if one was produced
    """

    msgid: str
    scope: str | None = None
    subject: str | None = None
    level: Level = Level.ERROR
    params: dict[str, Any] = field(default_factory=dict)
    text: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "msgid": self.msgid,
            "scope": self.scope,
            "subject": self.subject,
            "level": self.level.value,
            "params": dict(self.params),
            "text": self.text,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Message":
        return cls(
            msgid=data["msgid"],
            scope=data.get("scope"),
            subject=data.get("subject"),
            level=Level(data.get("level", "error")),
            params=dict(data.get("params") or {}),
            text=data.get("text", ""),
        )


class MessageStack:
    """An ordered collection of Message objects."""

    def __init__(self, messages: Iterable[Message] | None = None):
        self._messages: list[Message] = list(messages or [])

    def add(self, message: Message) -> None:
        self._messages.append(message)

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    @property
    def count(self) -> int:
        return len(self._messages)

    @property
    def has_messages(self) -> bool:
        return bool(self._messages)

    @property
    def first(self) -> Message | None:
        return self._messages[0] if self._messages else None

    @property
    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MessageStack):
            return NotImplemented
        return self._messages == other._messages

    def __repr__(self) -> str:
        return f"MessageStack(count={len(self._messages)})"

    # -------------------------------------------------------------------------
    # Filters
    # -------------------------------------------------------------------------

    def for_scope(self, scope: str) -> "MessageStack":
        return MessageStack(m for m in self._messages if m.scope == scope)

    def for_subject(self, subject: str) -> "MessageStack":
        return MessageStack(m for m in self._messages if m.subject == subject)

    def for_level(self, level: Level | str) -> "MessageStack":
        level = Level(level) if isinstance(level, str) else level
        return MessageStack(m for m in self._messages if m.level == level)

    def for_msgid(self, msgid: str) -> "MessageStack":
        return MessageStack(m for m in self._messages if m.msgid == msgid)

    def has_messages_for_scope(self, scope: str) -> bool:
        return any(m.scope == scope for m in self._messages)

    def has_messages_for_subject(self, subject: str) -> bool:
        return any(m.subject == subject for m in self._messages)

    def scopes(self) -> list[str]:
        """Distinct scopes in first-seen order."""
        seen: dict[str, None] = {}
        for m in self._messages:
            if m.scope is not None:
                seen.setdefault(m.scope, None)
        return list(seen)

    def reset(self) -> None:
        self._messages.clear()

    def to_dict(self) -> list[dict[str, Any]]:
        return [m.to_dict() for m in self._messages]

    @classmethod
    def from_dict(cls, data: list[dict[str, Any]]) -> "MessageStack":
        return cls(Message.from_dict(m) for m in data)
