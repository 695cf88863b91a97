from __future__ import annotations

import dataclasses

import pytest

from bcfai.chat.schemas import ConversationHistory, KnowledgeContext, MenuChoice, Message


def test_message_is_immutable() -> None:
    message = Message(user="q", assistant="a")

    with pytest.raises(dataclasses.FrozenInstanceError):
        message.user = "changed"  # type: ignore[misc]


def test_knowledge_context_is_immutable() -> None:
    context = KnowledgeContext(text="[]")

    with pytest.raises(dataclasses.FrozenInstanceError):
        context.text = "changed"  # type: ignore[misc]


def test_empty_history() -> None:
    history = ConversationHistory()

    assert len(history) == 0
    assert history.last is None
    assert history.to_payload() == []


def test_history_only_accepts_messages() -> None:
    history = ConversationHistory()

    with pytest.raises(TypeError):
        history.append({"user": "q", "assistant": "a"})  # type: ignore[arg-type]


def test_menu_choices_are_a_closed_set() -> None:
    assert [choice.label for choice in MenuChoice] == [
        "Ask Something",
        "Export last message to JSON",
        "Export Chat",
        "Exit",
    ]
    assert MenuChoice.from_key("3") is MenuChoice.EXPORT_ALL
    with pytest.raises(ValueError):
        MenuChoice.from_key("5")
