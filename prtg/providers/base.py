from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx

from ..config import Config
from ..defaults import MAX_TOKENS, TEMPERATURE
from ..exceptions import LLMError


class BaseDriver(ABC):
    """Abstract base for provider-specific content generation.

    Each driver translates the generic (system prompt, user prompt) pair into
    its provider's request shape and returns the generated text. Drivers
    raise :class:`LLMError` on any failure; the orchestrating
    :class:`prtg.llm.LLMClient` decides how to degrade.
    """

    #: label used in error messages
    name = "provider"

    def __init__(self, config: Config, api_key: str, debug: bool = False) -> None:
        self.config = config
        self.api_key = api_key
        self.debug = debug
        self.max_tokens = MAX_TOKENS
        self.temperature = TEMPERATURE
        self._request_timeout = config.request_timeout

    @abstractmethod
    def generate(self, system_prompt: str, user_prompt: str) -> str:
        """Return the provider's text for the prompt pair."""
        raise NotImplementedError

    def _post_json(
        self,
        url: str,
        payload: dict[str, Any],
        headers: dict[str, str],
    ) -> Any:
        try:
            response = httpx.post(
                url,
                headers=headers,
                json=payload,
                timeout=self._request_timeout,
            )
        except httpx.HTTPError as e:
            raise LLMError(f"{self.name} network error: {e}") from e
        except Exception as e:  # noqa: BLE001
            raise LLMError(f"{self.name} request failed: {e}") from e
        status = getattr(response, "status_code", 200)
        if status and int(status) >= 400:
            raise LLMError(
                "{} error {}: {}".format(
                    self.name, status, getattr(response, "text", "<no body>")
                )
            )
        try:
            return response.json()
        except ValueError as e:
            raise LLMError(f"{self.name} returned invalid JSON: {e}") from e
