from __future__ import annotations

from types import ModuleType
from typing import Any

from ..config import Config
from ..exceptions import LLMError
from .base import BaseDriver

# Optional dependency: import module, not symbols, for easier test stubbing
_openai: ModuleType | None
try:  # pragma: no cover - optional import
    import openai as _openai
except ImportError:  # pragma: no cover
    _openai = None


class OpenAIDriver(BaseDriver):
    """Driver for OpenAI and OpenAI-compatible chat completions."""

    name = "OpenAI"

    def __init__(self, config: Config, api_key: str, debug: bool = False) -> None:
        super().__init__(config, api_key, debug)
        if _openai is None:
            raise LLMError(
                f"{self.name} provider requires the 'openai' package. "
                "Run: pip install openai"
            )
        self._client: Any = _openai.OpenAI(
            base_url=config.llm_endpoint,
            api_key=api_key,
            timeout=self._request_timeout,
        )

    def generate(self, system_prompt: str, user_prompt: str) -> str:
        try:
            resp = self._client.chat.completions.create(
                model=self.config.model,
                max_tokens=self.max_tokens,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except Exception as e:  # noqa: BLE001 - SDK raises many error types
            raise LLMError(f"{self.name} client error: {e}") from e
        try:
            choice0 = resp.choices[0]
        except (AttributeError, IndexError):
            raise LLMError(f"Missing choices in {self.name} response") from None

        # Content may be a string or a list of fragments
        msg_content = getattr(getattr(choice0, "message", None), "content", "")
        if isinstance(msg_content, str):
            return msg_content
        fragments: list[str] = []
        for part in msg_content or []:
            if isinstance(part, dict):
                txt = part.get("text") or part.get("content") or ""
            else:
                txt = getattr(part, "text", "") or getattr(part, "content", "")
            if txt:
                fragments.append(str(txt))
        return "".join(fragments)


class GroqDriver(OpenAIDriver):
    """Groq exposes an OpenAI-compatible endpoint; only the base URL differs."""

    name = "Groq"
