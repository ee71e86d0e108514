from __future__ import annotations

from typing import Any

from ..exceptions import ConfigError, LLMError
from .base import BaseDriver


def _candidate_text(data: Any, provider: str) -> str:
    try:
        parts = data["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        raise LLMError(f"{provider} response has no candidates") from None
    return "".join(str(p.get("text", "")) for p in parts if isinstance(p, dict))


class GoogleDriver(BaseDriver):
    """Gemini via the Generative Language REST API."""

    name = "Google"

    def generate(self, system_prompt: str, user_prompt: str) -> str:
        url = (
            f"{self.config.llm_endpoint.rstrip('/')}/models/"
            f"{self.config.model}:generateContent"
        )
        payload = {
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": system_prompt}, {"text": user_prompt}],
                }
            ],
            "generationConfig": {"maxOutputTokens": self.max_tokens},
        }
        headers = {
            "x-goog-api-key": self.api_key,
            "content-type": "application/json",
        }
        return _candidate_text(self._post_json(url, payload, headers), self.name)


class VertexAIDriver(BaseDriver):
    """Gemini on Vertex AI; needs a project id and a bearer token."""

    name = "Vertex AI"

    def generate(self, system_prompt: str, user_prompt: str) -> str:
        project_id = self.config.project_id
        if not project_id:
            raise ConfigError("PROJECT_ID environment variable is required for Vertex AI")
        location = self.config.location
        base = self.config.llm_endpoint.format(location=location).rstrip("/")
        url = (
            f"{base}/projects/{project_id}/locations/{location}"
            f"/publishers/google/models/{self.config.model}:generateContent"
        )
        payload = {
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": f"{system_prompt}\n\n{user_prompt}"}],
                }
            ],
            "generationConfig": {
                "maxOutputTokens": self.max_tokens,
                "temperature": self.temperature,
            },
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "content-type": "application/json",
        }
        return _candidate_text(self._post_json(url, payload, headers), self.name)
