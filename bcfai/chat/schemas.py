"""Typed data structures used by the BCF chat session."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple


@dataclass
class TopicComment:
    """A single comment attached to a BCF topic."""

    guid: str
    comment: str = ""
    date: Optional[str] = None
    author: Optional[str] = None
    modified_date: Optional[str] = None
    modified_author: Optional[str] = None

    def to_payload(self) -> Mapping[str, Any]:
        return _compact(
            {
                "guid": self.guid,
                "date": self.date,
                "author": self.author,
                "comment": self.comment,
                "modified_date": self.modified_date,
                "modified_author": self.modified_author,
            }
        )


@dataclass
class Topic:
    """One issue parsed from a ``markup.bcf`` entry."""

    guid: str
    title: str = ""
    topic_type: Optional[str] = None
    topic_status: Optional[str] = None
    priority: Optional[str] = None
    index: Optional[str] = None
    labels: List[str] = field(default_factory=list)
    creation_date: Optional[str] = None
    creation_author: Optional[str] = None
    modified_date: Optional[str] = None
    modified_author: Optional[str] = None
    assigned_to: Optional[str] = None
    due_date: Optional[str] = None
    stage: Optional[str] = None
    description: Optional[str] = None
    comments: List[TopicComment] = field(default_factory=list)

    def to_payload(self) -> Mapping[str, Any]:
        payload: Dict[str, Any] = {
            "guid": self.guid,
            "title": self.title,
            "topic_type": self.topic_type,
            "topic_status": self.topic_status,
            "priority": self.priority,
            "index": self.index,
            "labels": list(self.labels),
            "creation_date": self.creation_date,
            "creation_author": self.creation_author,
            "modified_date": self.modified_date,
            "modified_author": self.modified_author,
            "assigned_to": self.assigned_to,
            "due_date": self.due_date,
            "stage": self.stage,
            "description": self.description,
            "comments": [comment.to_payload() for comment in self.comments],
        }
        return _compact(payload)


@dataclass(frozen=True)
class KnowledgeContext:
    """Serialized topics of every input file, in discovery order."""

    text: str = ""
    sources: Tuple[str, ...] = ()
    topic_count: int = 0

    def __str__(self) -> str:
        return self.text

    def __len__(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class Message:
    """A question and the answer the model gave to it."""

    user: str
    assistant: str

    def to_payload(self) -> Mapping[str, str]:
        return {"user": self.user, "assistant": self.assistant}


class ConversationHistory:
    """Append-only log of the messages exchanged during a session."""

    def __init__(self) -> None:
        self._messages: List[Message] = []

    def append(self, message: Message) -> None:
        if not isinstance(message, Message):
            raise TypeError(f"Expected Message, got {type(message).__name__}")
        self._messages.append(message)

    @property
    def last(self) -> Optional[Message]:
        return self._messages[-1] if self._messages else None

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]

    def to_payload(self) -> List[Mapping[str, str]]:
        return [message.to_payload() for message in self._messages]


class MenuChoice(Enum):
    """The closed set of actions offered by the session menu."""

    ASK = ("1", "Ask Something")
    EXPORT_LAST = ("2", "Export last message to JSON")
    EXPORT_ALL = ("3", "Export Chat")
    EXIT = ("4", "Exit")

    def __init__(self, key: str, label: str) -> None:
        self.key = key
        self.label = label

    @classmethod
    def from_key(cls, key: str) -> "MenuChoice":
        for choice in cls:
            if choice.key == key.strip():
                return choice
        raise ValueError(f"Unknown menu choice {key!r}")


class SessionState(Enum):
    IDLE = "idle"
    EXITED = "exited"


def _compact(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value not in (None, "", [])}


def dumps_payload(data: Any, *, indent: Optional[int] = 2) -> str:
    """Render ``data`` as JSON for prompts and exports."""

    return json.dumps(data, ensure_ascii=False, indent=indent)


__all__ = [
    "ConversationHistory",
    "KnowledgeContext",
    "MenuChoice",
    "Message",
    "SessionState",
    "Topic",
    "TopicComment",
    "dumps_payload",
]
