"""Prompt templates for answering questions and reshaping exports."""

from __future__ import annotations

from typing import Iterable, Union

from .schemas import ConversationHistory, KnowledgeContext, Message, dumps_payload

EMPTY_QUESTION_REPLY = "I can't process empty questions, please try again."

ASK_PROMPT = """
Based on the following BCF topic data:
{context}

You should only create the response based on the information given.
Information that is not found in the topic data above must not be presented in the result.
Your job is to answer the following question: {question}
If the question is empty, reply exactly with: "{empty_reply}"
""".strip()

EXPORT_PROMPT = """
Based on the following data:
{payload}

Create a JSON structure from these data only. Keep the structure
{{
  "user": "...",
  "assistant": "..."
}}
for every message and do not alter the text of any field.
""".strip()


def build_ask_prompt(context: Union[KnowledgeContext, str], question: str) -> str:
    return ASK_PROMPT.format(
        context=str(context),
        question=question.strip(),
        empty_reply=EMPTY_QUESTION_REPLY,
    )


def build_export_prompt(
    messages: Union[Message, ConversationHistory, Iterable[Message]],
) -> str:
    """Ask the model to restate one message, or several, as JSON."""

    if isinstance(messages, Message):
        payload = messages.to_payload()
    else:
        payload = [message.to_payload() for message in messages]
    return EXPORT_PROMPT.format(payload=dumps_payload(payload))


__all__ = [
    "ASK_PROMPT",
    "EMPTY_QUESTION_REPLY",
    "EXPORT_PROMPT",
    "build_ask_prompt",
    "build_export_prompt",
]
