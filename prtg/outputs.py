"""GitHub Actions step outputs and PR body update policy."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from .github import GitHubContext

logger = logging.getLogger(__name__)


class ActionOutputs:
    """Writes ``name=value`` pairs for the invoking workflow step.

    Values are appended to the file named by ``GITHUB_OUTPUT``; without it
    (local runs) the legacy ``::set-output`` command is printed instead.
    Every value set is also kept in :attr:`values`.
    """

    def __init__(self, env: Optional[Mapping[str, str]] = None) -> None:
        env_map: Mapping[str, str] = os.environ if env is None else env
        self.output_file = env_map.get("GITHUB_OUTPUT") or None
        self.values: Dict[str, str] = {}

    def set_output(self, name: str, value: str) -> None:
        self.values[name] = value
        if self.output_file:
            with Path(self.output_file).open("a", encoding="utf-8") as fh:
                fh.write(f"{name}={value}\n")
        else:
            print(f"::set-output name={name}::{value}")


def should_update_body(context: GitHubContext, update_mode: str) -> bool:
    """Decide whether the workflow should overwrite the PR body."""
    if context.pull_request is None:
        return False
    if update_mode == "always":
        return True
    if update_mode == "comment-only":
        return False
    # create-only and unknown modes
    return context.action == "opened" or not context.body.strip()
