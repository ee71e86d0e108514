from __future__ import annotations

from .base import BaseDriver


class AnthropicDriver(BaseDriver):
    """Driver handling Anthropic API calls (messages endpoint)."""

    name = "Anthropic"

    def generate(self, system_prompt: str, user_prompt: str) -> str:
        url = self.config.llm_endpoint.rstrip("/") + "/v1/messages"
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": "2023-06-01",
            "content-type": "application/json",
        }
        payload = {
            "model": self.config.model,
            "max_tokens": self.max_tokens,
            "system": system_prompt,
            "messages": [{"role": "user", "content": user_prompt}],
        }
        data = self._post_json(url, payload, headers)
        content = (data.get("content") if isinstance(data, dict) else None) or []
        texts = []
        for chunk in content:
            if isinstance(chunk, dict) and chunk.get("type") == "text":
                texts.append(chunk.get("text", ""))
        return "\n".join(filter(None, texts))
