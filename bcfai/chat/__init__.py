"""Chat with a language model about the topics in a directory of BCF files.

The package wires together

* a BCF reader that turns each archive into a list of topics,
* an aggregator that serializes every file's topics into one knowledge context,
* prompt templates for answering questions and reshaping exports,
* an OpenAI-compatible completion client, and
* a session manager that owns the conversation history and exports it.
"""

from .aggregator import aggregate, discover_files, load_directory
from .bcf import parse_bcf
from .clients import LLMClient
from .console import ConsoleIO
from .errors import (
    AuthError,
    ChatError,
    EmptyHistoryError,
    InputError,
    ModelError,
    NetworkError,
    ParseError,
    RateLimitError,
    StorageError,
    UsageError,
)
from .exporter import EXPORT_FILENAME, ChatExporter
from .manager import ChatSessionManager
from .prompts import EMPTY_QUESTION_REPLY, build_ask_prompt, build_export_prompt
from .runtime import ChatRuntime, main as runtime_main
from .schemas import (
    ConversationHistory,
    KnowledgeContext,
    MenuChoice,
    Message,
    SessionState,
    Topic,
    TopicComment,
)

__all__ = [
    "AuthError",
    "ChatError",
    "ChatExporter",
    "ChatRuntime",
    "ChatSessionManager",
    "ConsoleIO",
    "ConversationHistory",
    "EMPTY_QUESTION_REPLY",
    "EXPORT_FILENAME",
    "EmptyHistoryError",
    "InputError",
    "KnowledgeContext",
    "LLMClient",
    "MenuChoice",
    "Message",
    "ModelError",
    "NetworkError",
    "ParseError",
    "RateLimitError",
    "SessionState",
    "StorageError",
    "Topic",
    "TopicComment",
    "UsageError",
    "aggregate",
    "build_ask_prompt",
    "build_export_prompt",
    "discover_files",
    "load_directory",
    "parse_bcf",
    "runtime_main",
]
