"""Interactive session loop: ask questions, keep history, export it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from .clients import LLMClient
from .console import ConsoleIO
from .errors import EmptyHistoryError, ModelError, StorageError
from .exporter import ChatExporter
from .prompts import build_ask_prompt
from .schemas import ConversationHistory, KnowledgeContext, MenuChoice, Message, SessionState

logger = logging.getLogger(__name__)

TEXT_PROMPT = "Write your prompt:"
NO_INPUT_NOTICE = "No input given, try writing something."


@dataclass
class ChatSessionManager:
    """Own the conversation history and drive the menu loop."""

    context: KnowledgeContext
    llm_client: LLMClient
    io: ConsoleIO
    exporter: Optional[ChatExporter] = None
    state: SessionState = field(default=SessionState.IDLE, init=False)

    def __post_init__(self) -> None:
        self._history = ConversationHistory()
        if self.exporter is None:
            self.exporter = ChatExporter(llm_client=self.llm_client)
        self._handlers: Dict[MenuChoice, Callable[[], None]] = {
            MenuChoice.ASK: self.handle_ask,
            MenuChoice.EXPORT_LAST: self.handle_export_last,
            MenuChoice.EXPORT_ALL: self.handle_export_all,
        }

    @property
    def history(self) -> ConversationHistory:
        return self._history

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------
    def run(self) -> None:
        while self.state is SessionState.IDLE:
            try:
                choice = self.io.read_choice()
            except (EOFError, KeyboardInterrupt):
                choice = MenuChoice.EXIT
            self.dispatch(choice)

    def dispatch(self, choice: MenuChoice) -> None:
        """Run the handler for ``choice`` and always come back to the menu.

        Ctrl-C or end of input while an action waits for text or for the model
        drops that action and returns to the menu; the history is only
        appended after a completed model call, so it stays untouched.
        """

        if choice is MenuChoice.EXIT:
            self.state = SessionState.EXITED
            return

        handler = self._handlers[choice]
        try:
            handler()
        except ModelError as exc:
            logger.warning("Model request failed: %s", exc)
            self.io.error(f"The model request failed: {exc}")
        except StorageError as exc:
            logger.warning("Export failed: %s", exc)
            self.io.error(str(exc))
        except (EOFError, KeyboardInterrupt):
            self.io.notice("Cancelled.")
        except Exception as exc:
            logger.exception("Unexpected error while handling %s", choice.label)
            self.io.error(f"Unexpected error: {exc}")

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def handle_ask(self) -> None:
        question = self.io.read_text(TEXT_PROMPT)
        message = self.ask(question)
        if message is not None:
            self.io.show(message.assistant)

    def ask(self, question: str) -> Optional[Message]:
        """Answer ``question`` from the knowledge context and record the exchange.

        Blank questions never reach the model and return ``None``.
        """

        if not question or not question.strip():
            self.io.notice(NO_INPUT_NOTICE)
            return None

        prompt = build_ask_prompt(self.context, question)
        answer = self.llm_client.complete(prompt)
        message = Message(user=question, assistant=answer)
        self._history.append(message)
        return message

    def handle_export_last(self) -> None:
        try:
            text = self.exporter.export_last(self._history)
        except EmptyHistoryError as exc:
            self.io.notice(str(exc))
            return
        self.io.show(text)

    def handle_export_all(self) -> None:
        try:
            path = self.exporter.export_all(self._history)
        except EmptyHistoryError as exc:
            self.io.notice(str(exc))
            return
        self.io.notice(f"Chat exported to {path}")


__all__ = ["NO_INPUT_NOTICE", "ChatSessionManager"]
