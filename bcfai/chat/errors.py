"""Error types raised by the chat session and its collaborators."""

from __future__ import annotations


class ChatError(Exception):
    """Base class for every error raised by :mod:`bcfai.chat`."""


class UsageError(ChatError):
    """The command line was missing its directory argument."""


class InputError(ChatError):
    """The input directory or one of its files could not be used."""


class ParseError(ChatError):
    """A BCF file could not be parsed into topics."""


class ModelError(ChatError):
    """The language model request failed."""


class NetworkError(ModelError):
    pass


class AuthError(ModelError):
    pass


class RateLimitError(ModelError):
    pass


class StorageError(ChatError):
    """Writing the chat export failed."""


class EmptyHistoryError(ChatError):
    """An export was requested before any message was recorded."""


__all__ = [
    "AuthError",
    "ChatError",
    "EmptyHistoryError",
    "InputError",
    "ModelError",
    "NetworkError",
    "ParseError",
    "RateLimitError",
    "StorageError",
    "UsageError",
]
