"""OpenAI-compatible completion client used to answer questions."""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping, MutableMapping, Optional, Sequence

import openai
from openai import OpenAI

from .errors import AuthError, ModelError, NetworkError, RateLimitError

logger = logging.getLogger(__name__)

PROVIDERS = ("openai", "deepseek", "vllm")

DEFAULT_API_KEY_ENV: Mapping[str, str] = {
    "openai": "OPENAI_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
    "vllm": "OPENAI_API_KEY",
}

DEFAULT_BASE_URL: Mapping[str, Optional[str]] = {
    "openai": None,
    "deepseek": "https://api.deepseek.com",
    "vllm": "http://localhost:8000/v1",
}


class LLMClient:
    """Thin wrapper over :class:`openai.OpenAI` exposing ``complete(prompt)``.

    The underlying SDK client is created on the first request, so a missing
    API key only surfaces once the model is actually called.
    """

    def __init__(
        self,
        *,
        model: str,
        provider: str = "openai",
        base_url: str | None = None,
        api_key: str | None = None,
        api_key_env: str | None = None,
    ) -> None:
        provider_key = provider.lower()
        if provider_key not in PROVIDERS:
            raise ValueError(f"Unsupported provider '{provider}'")

        self.model = model
        self.provider = provider_key
        self.base_url = base_url or DEFAULT_BASE_URL[provider_key]
        self.api_key_env = api_key_env or DEFAULT_API_KEY_ENV[provider_key]
        self._api_key = api_key
        self._client: OpenAI | None = None

    def _get_client(self) -> OpenAI:
        if self._client is None:
            api_key = self._api_key or os.environ.get(self.api_key_env)
            if not api_key:
                raise AuthError(f"No API key found; set {self.api_key_env} in the environment or .env file")
            self._client = OpenAI(base_url=self.base_url, api_key=api_key)
        return self._client

    def complete(self, prompt: str) -> str:
        return self.chat([{"role": "user", "content": prompt}])

    def chat(self, messages: Sequence[Mapping[str, object]]) -> str:
        client = self._get_client()
        payload: MutableMapping[str, Any] = {"model": self.model, "messages": list(messages)}

        logger.debug("Dispatching chat request: %s", payload)
        try:
            response = client.chat.completions.create(**payload)
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise AuthError(f"Authentication with {self.provider} failed: {exc}") from exc
        except openai.RateLimitError as exc:
            raise RateLimitError(f"Rate limit reached: {exc}") from exc
        except openai.APIConnectionError as exc:
            raise NetworkError(f"Could not reach {self.provider}: {exc}") from exc
        except openai.APIError as exc:
            raise ModelError(f"Model request failed: {exc}") from exc
        logger.debug("Chat raw response: %s", response)

        if not response.choices:
            raise ModelError("Model returned no choices")
        choice = response.choices[0].message
        return getattr(choice, "content", "") or ""


__all__ = ["DEFAULT_API_KEY_ENV", "LLMClient", "PROVIDERS"]
