"""Write the conversation history to disk or have the model restate it."""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .clients import LLMClient
from .errors import EmptyHistoryError, StorageError
from .prompts import build_export_prompt
from .schemas import ConversationHistory, dumps_payload

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "BCFChat.json"


@dataclass
class ChatExporter:
    """Serialize a :class:`ConversationHistory` without ever modifying it."""

    llm_client: LLMClient
    directory: Optional[Union[str, Path]] = None
    filename: str = EXPORT_FILENAME

    @property
    def path(self) -> Path:
        base = Path(self.directory) if self.directory is not None else Path.cwd()
        return (base / self.filename).resolve()

    def export_all(self, history: ConversationHistory) -> Path:
        """Write every message as an indented JSON array, replacing any old export."""

        if not len(history):
            raise EmptyHistoryError("No chat to export.")

        target = self.path
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(dumps_payload(history.to_payload()))
            os.replace(tmp_name, target)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Could not write {target}: {exc}") from exc
        logger.info("Exported %s messages to %s", len(history), target)
        return target

    def export_last(self, history: ConversationHistory) -> str:
        last = history.last
        if last is None:
            raise EmptyHistoryError("No last message to export.")
        return self.llm_client.complete(build_export_prompt(last))


__all__ = ["EXPORT_FILENAME", "ChatExporter"]
