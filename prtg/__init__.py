"""prtg - AI-assisted pull request template generator."""

from importlib import import_module
from typing import TYPE_CHECKING

__version__ = "0.1.0"

# Public API (lazy-exported to avoid import-time side effects)
__all__ = [
    # Config
    "Config", "load_config",
    # Rules and templates
    "TemplateSelector", "TemplateStore", "extract_info_by_rules",
    "apply_rules_to_template",
    # LLM
    "LLMClient",
    # Core workflow
    "PRTemplateWorkflow", "RunResult",
    # Exceptions
    "PRTemplateError", "GitError", "GitHubError", "LLMError", "ConfigError",
]


def __getattr__(name: str):
    """Lazy attribute loader so ``import prtg`` stays cheap."""
    mapping = {
        "Config": ("prtg.config", "Config"),
        "load_config": ("prtg.config", "load_config"),
        "TemplateSelector": ("prtg.rules", "TemplateSelector"),
        "extract_info_by_rules": ("prtg.rules", "extract_info_by_rules"),
        "TemplateStore": ("prtg.templates", "TemplateStore"),
        "apply_rules_to_template": ("prtg.templates", "apply_rules_to_template"),
        "LLMClient": ("prtg.llm", "LLMClient"),
        "PRTemplateWorkflow": ("prtg.core", "PRTemplateWorkflow"),
        "RunResult": ("prtg.core", "RunResult"),
        "PRTemplateError": ("prtg.exceptions", "PRTemplateError"),
        "GitError": ("prtg.exceptions", "GitError"),
        "GitHubError": ("prtg.exceptions", "GitHubError"),
        "LLMError": ("prtg.exceptions", "LLMError"),
        "ConfigError": ("prtg.exceptions", "ConfigError"),
    }
    if name in mapping:
        mod_name, attr = mapping[name]
        mod = import_module(mod_name)
        value = getattr(mod, attr)
        globals()[name] = value  # cache for future access
        return value
    raise AttributeError(f"module 'prtg' has no attribute {name!r}")


if TYPE_CHECKING:
    from .config import Config, load_config
    from .core import PRTemplateWorkflow, RunResult
    from .exceptions import (
        ConfigError,
        GitError,
        GitHubError,
        LLMError,
        PRTemplateError,
    )
    from .llm import LLMClient
    from .rules import TemplateSelector, extract_info_by_rules
    from .templates import TemplateStore, apply_rules_to_template
