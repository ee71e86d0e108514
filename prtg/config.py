"""Configuration management for prtg."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from .defaults import (
    DEFAULT_LOCATION,
    DEFAULT_MAIN_BRANCH,
    DEFAULT_PATHS,
    DEFAULT_PROVIDER,
    DEFAULT_PROVIDERS,
    DEFAULT_SYSTEM_PROMPT,
    DEFAULT_UPDATE_MODE,
    OUTPUT_FILENAME,
)
from .rules import RulesFile

logger = logging.getLogger(__name__)

GENERIC_API_KEY_ENV = "API_KEY"
UPDATE_MODES = ("always", "create-only", "comment-only")


@dataclass
class Config:
    """Runtime configuration for a single prtg run."""

    provider: str
    model: str
    api_key_env: str
    llm_endpoint: str
    template_dir: str
    rules_path: str
    system_prompt_path: str
    update_mode: str = DEFAULT_UPDATE_MODE
    main_branch: str = DEFAULT_MAIN_BRANCH
    project_id: Optional[str] = None
    location: str = DEFAULT_LOCATION
    repo_path: str = "."
    output_path: str = OUTPUT_FILENAME
    request_timeout: float = 60.0

    def resolve_api_key(self) -> Optional[str]:
        """Return the credential for the active provider.

        The generic ``API_KEY`` variable wins over the provider specific one.
        Empty values count as unset.
        """
        return os.environ.get(GENERIC_API_KEY_ENV) or os.environ.get(
            self.api_key_env
        ) or None

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


_CONFIG_STATE: Dict[str, Optional[Config]] = {"active": None}


def _ensure_path(path_like: Optional[Path | str]) -> Path:
    if path_like is None:
        return Path.cwd().resolve(strict=False)
    return Path(path_like).expanduser().resolve(strict=False)


def resolve_path(base: Path, current: str, legacy: str) -> Path:
    """Return ``base/current`` unless it is missing and ``base/legacy`` exists."""
    current_path = base / current
    if current_path.exists():
        return current_path
    legacy_path = base / legacy
    if legacy_path.exists():
        logger.info("Using legacy path %s", legacy_path)
        return legacy_path
    return current_path


def load_config(
    *,
    overrides: Optional[Dict[str, str]] = None,
    env: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path | str] = None,
) -> Config:
    """Build configuration from environment variables and CLI overrides."""

    overrides = {k: v for k, v in (overrides or {}).items() if v is not None}
    env_map: Mapping[str, str] = os.environ if env is None else env
    base = _ensure_path(cwd)

    provider = overrides.get("provider") or env_map.get("AI_PROVIDER") or DEFAULT_PROVIDER
    # Unknown providers keep their name so the generator can report them; model
    # and credential defaults come from the default provider.
    defaults = DEFAULT_PROVIDERS.get(provider, DEFAULT_PROVIDERS[DEFAULT_PROVIDER])

    model = overrides.get("model") or env_map.get("MODEL") or defaults["model"]

    template_override = overrides.get("template_path") or env_map.get("TEMPLATE_PATH")
    if template_override:
        template_dir = base / template_override
    else:
        template_dir = resolve_path(
            base,
            DEFAULT_PATHS["template_dir"],
            DEFAULT_PATHS["legacy_template_dir"],
        )
    rules_path = resolve_path(
        base, DEFAULT_PATHS["rules_path"], DEFAULT_PATHS["legacy_rules_path"]
    )
    system_prompt_path = resolve_path(
        base,
        DEFAULT_PATHS["system_prompt_path"],
        DEFAULT_PATHS["legacy_system_prompt_path"],
    )

    update_mode = (
        overrides.get("update_mode") or env_map.get("UPDATE_MODE") or DEFAULT_UPDATE_MODE
    )
    if update_mode not in UPDATE_MODES:
        logger.warning(
            "Unknown update mode %r; treating it as %s", update_mode, DEFAULT_UPDATE_MODE
        )

    timeout_env = env_map.get("PRTG_LLM_REQUEST_TIMEOUT")
    try:
        request_timeout = float(timeout_env) if timeout_env else 60.0
    except ValueError:
        request_timeout = 60.0

    output_path = overrides.get("output") or OUTPUT_FILENAME
    if not Path(output_path).is_absolute():
        output_path = str(base / output_path)

    config = Config(
        provider=provider,
        model=model,
        api_key_env=defaults["api_key_env"],
        llm_endpoint=defaults["endpoint"],
        template_dir=str(template_dir),
        rules_path=str(rules_path),
        system_prompt_path=str(system_prompt_path),
        update_mode=update_mode,
        main_branch=(
            overrides.get("main_branch")
            or env_map.get("MAIN_BRANCH")
            or DEFAULT_MAIN_BRANCH
        ),
        project_id=env_map.get("PROJECT_ID") or None,
        location=env_map.get("LOCATION") or DEFAULT_LOCATION,
        repo_path=str(_ensure_path(overrides.get("repo_path") or base)),
        output_path=output_path,
        request_timeout=request_timeout,
    )

    set_active_config(config)
    return config


def load_rules(rules_path: Path | str) -> RulesFile:
    """Load the rules JSON file.

    A missing file or one that is not valid JSON yields the default (empty)
    rules; it never aborts the run.
    """
    path = Path(rules_path)
    if not path.exists():
        return RulesFile()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return RulesFile.from_dict(data)
    except (OSError, ValueError, TypeError, KeyError, AttributeError) as exc:
        logger.error("Failed to load or parse rules file %s: %s", path, exc)
        return RulesFile()


def load_system_prompt(system_prompt_path: Path | str) -> str:
    """Return the system prompt file contents or the built-in prompt."""
    path = Path(system_prompt_path)
    if path.exists():
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to load system prompt %s: %s", path, exc)
    return DEFAULT_SYSTEM_PROMPT


def set_active_config(config: Config) -> None:
    _CONFIG_STATE["active"] = config


def get_active_config() -> Config:
    active = _CONFIG_STATE.get("active")
    if active is None:
        return load_config()
    return active


def clear_active_config() -> None:
    _CONFIG_STATE["active"] = None


def describe_provider(provider: str) -> str:
    meta = DEFAULT_PROVIDERS.get(provider)
    if not meta:
        return provider
    return f"{provider} (default model: {meta['model']})"
