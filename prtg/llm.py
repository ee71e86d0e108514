"""Content generation through the configured provider."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Type

from .config import Config, get_active_config
from .defaults import AI_PLACEHOLDER
from .exceptions import LLMError, PRTemplateError
from .providers.anthropic_driver import AnthropicDriver
from .providers.base import BaseDriver
from .providers.google_driver import GoogleDriver, VertexAIDriver
from .providers.huggingface_driver import HuggingFaceDriver
from .providers.openai_driver import GroqDriver, OpenAIDriver

logger = logging.getLogger(__name__)

DRIVERS: Dict[str, Type[BaseDriver]] = {
    "claude": AnthropicDriver,
    "openai": OpenAIDriver,
    "google": GoogleDriver,
    "vertex-ai": VertexAIDriver,
    "groq": GroqDriver,
    "huggingface": HuggingFaceDriver,
}


def build_user_prompt(diff: str, changed_files: list[str], template: str) -> str:
    """Render the user prompt sent alongside the system prompt."""
    files = "\n".join(changed_files)
    return (
        "Analyze the following Git diff and list of changed files, and fill in "
        f"each `{AI_PLACEHOLDER}` section of the PR template following the "
        "system prompt guidelines.\n\n"
        "**Changed files:**\n"
        f"```\n{files}\n```\n\n"
        "**Git Diff:**\n"
        f"```diff\n{diff}\n```\n\n"
        "**PR template (fill in its placeholders):**\n"
        f"{template}\n"
    )


class LLMClient:
    """Provider-aware client producing PR description text."""

    def __init__(self, config: Optional[Config] = None, debug: bool = False) -> None:
        self.config = config or get_active_config()
        self.provider = self.config.provider
        self.model = self.config.model
        self.api_key = self.config.resolve_api_key()
        self.debug = debug

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    def _make_driver(self) -> BaseDriver:
        driver_cls = DRIVERS.get(self.provider)
        if driver_cls is None:
            raise LLMError(f"Unsupported AI provider: {self.provider}")
        return driver_cls(self.config, self.api_key or "", debug=self.debug)

    def generate(self, system_prompt: str, user_prompt: str) -> Optional[str]:
        """Return generated text, or ``None`` when generation is unavailable.

        A missing credential, an unsupported provider, a missing client
        library and any provider error all yield ``None``.
        """
        if not self.api_key:
            logger.info("No API key configured; skipping content generation")
            return None
        logger.info("Using %s with model %s", self.provider, self.model)
        try:
            content = self._make_driver().generate(system_prompt, user_prompt)
        except PRTemplateError as exc:
            logger.error("%s API call failed: %s", self.provider, exc)
            return None
        except Exception as exc:  # noqa: BLE001
            logger.error("%s API call failed unexpectedly: %s", self.provider, exc)
            return None
        if not content or not content.strip():
            logger.error("%s returned an empty response", self.provider)
            return None
        logger.debug("Generated %d characters", len(content))
        return content
