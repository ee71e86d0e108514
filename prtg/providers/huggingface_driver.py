from __future__ import annotations

from .base import BaseDriver


class HuggingFaceDriver(BaseDriver):
    """Text generation through the Hugging Face inference API."""

    name = "Hugging Face"

    def generate(self, system_prompt: str, user_prompt: str) -> str:
        url = f"{self.config.llm_endpoint.rstrip('/')}/{self.config.model}"
        payload = {
            "inputs": f"{system_prompt}\n\nUser: {user_prompt}",
            "parameters": {"max_length": self.max_tokens},
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "content-type": "application/json",
        }
        data = self._post_json(url, payload, headers)
        # The API answers with either a list of generations or a single one
        if isinstance(data, list) and data and isinstance(data[0], dict):
            return str(data[0].get("generated_text") or "")
        if isinstance(data, dict):
            return str(data.get("generated_text") or "")
        return ""
