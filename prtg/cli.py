"""Command line interface for prtg."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from . import __version__
from .config import UPDATE_MODES, load_config
from .core import PRTemplateWorkflow
from .defaults import DEFAULT_PROVIDERS
from .outputs import ActionOutputs

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class CLI:
    """argparse front end for :class:`PRTemplateWorkflow`."""

    def __init__(self) -> None:
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="prtg",
            description=(
                "Draft a pull request description from the branch diff, "
                "an optional AI provider and user-defined rules."
            ),
        )
        parser.add_argument(
            "--provider",
            choices=sorted(DEFAULT_PROVIDERS),
            help="AI provider (default: $AI_PROVIDER or claude)",
        )
        parser.add_argument("--model", help="Model override (default: $MODEL)")
        parser.add_argument(
            "--template-path",
            help="Template directory relative to the repository root",
        )
        parser.add_argument(
            "--update-mode",
            choices=UPDATE_MODES,
            help="When the PR body should be replaced (default: create-only)",
        )
        parser.add_argument("--output", help="Output markdown file")
        parser.add_argument("--repo-path", help="Repository root (default: cwd)")
        parser.add_argument("--main-branch", help="Base branch for local commit range")
        parser.add_argument("--debug", action="store_true", help="Verbose logging")
        parser.add_argument(
            "--version", action="version", version=f"%(prog)s {__version__}"
        )
        return parser

    def run(self, args: Optional[list[str]] = None) -> int:
        try:
            parsed = self.parser.parse_args(args)
        except SystemExit as exc:  # --help / --version / bad args
            return int(exc.code or 0)

        logging.basicConfig(
            level=logging.DEBUG if parsed.debug else logging.INFO,
            format=LOG_FORMAT,
        )

        overrides = {
            "provider": parsed.provider,
            "model": parsed.model,
            "template_path": parsed.template_path,
            "update_mode": parsed.update_mode,
            "output": parsed.output,
            "repo_path": parsed.repo_path,
            "main_branch": parsed.main_branch,
        }
        config = load_config(overrides=overrides, cwd=parsed.repo_path)

        try:
            workflow = PRTemplateWorkflow(config=config, debug=parsed.debug)
        except Exception:  # noqa: BLE001
            logger.exception("Failed to initialise PR template generation")
            ActionOutputs().set_output("content-generated", "false")
            return 1
        try:
            workflow.execute()
        except Exception:  # noqa: BLE001 - logged and reported by the workflow
            return 1
        return 0


def main(argv: Optional[list[str]] = None) -> int:
    return CLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
