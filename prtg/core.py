"""Core workflow: from code changes to a filled PR description."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import Config, get_active_config, load_rules, load_system_prompt
from .git import GitRepo
from .github import GitHubClient, GitHubContext
from .llm import LLMClient, build_user_prompt
from .outputs import ActionOutputs, should_update_body
from .rules import RulesFile, TemplateSelector, extract_info_by_rules
from .sources import CommitSource, DiffSource
from .templates import TemplateStore, apply_rules_to_template, merge_ai_content

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of one workflow run."""

    content_generated: bool
    template_used: Optional[str] = None
    content: Optional[str] = None
    should_update_body: bool = False
    output_path: Optional[str] = None


class PRTemplateWorkflow:
    """Single-pass PR description generation.

    Steps run strictly in order: diff, template selection, content
    generation, rule extraction, injection, output.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        context: Optional[GitHubContext] = None,
        git_repo: Optional[GitRepo] = None,
        github_client: Optional[GitHubClient] = None,
        llm_client: Optional[LLMClient] = None,
        outputs: Optional[ActionOutputs] = None,
        rules: Optional[RulesFile] = None,
        debug: bool = False,
    ) -> None:
        self._config = config or get_active_config()
        self.context = context or GitHubContext.from_env()
        self.git_repo = git_repo or GitRepo(self._config.repo_path)
        if github_client is None:
            token = os.environ.get("GITHUB_TOKEN")
            github_client = GitHubClient(token) if token else None
        self.github_client = github_client
        self.llm_client = llm_client or LLMClient(self._config, debug=debug)
        self.outputs = outputs or ActionOutputs()
        self.rules = rules if rules is not None else load_rules(self._config.rules_path)

        self.diff_source = DiffSource(self.git_repo, self.context, self.github_client)
        self.commit_source = CommitSource(
            self.git_repo,
            self.context,
            self.github_client,
            main_branch=self._config.main_branch,
        )
        self.selector = TemplateSelector(self.rules.template_selection)
        self.store = TemplateStore(self._config.template_dir)

        if not self.llm_client.has_api_key:
            logger.warning(
                "No API key found. Will use basic template without AI generation."
            )

    def execute(self) -> RunResult:
        """Run the workflow, reporting failure through the step outputs.

        Unexpected errors set ``content-generated=false`` and are re-raised.
        """
        try:
            return self._run()
        except Exception:
            logger.exception("PR template generation failed")
            self.outputs.set_output("content-generated", "false")
            raise

    def _run(self) -> RunResult:
        logger.info(
            "Starting PR template generation (provider=%s, model=%s)",
            self._config.provider,
            self._config.model,
        )

        diff_result = self.diff_source.get_diff()
        if diff_result.is_empty:
            logger.info("No changes found.")
            self.outputs.set_output("content-generated", "false")
            return RunResult(content_generated=False)

        pr_title = self.commit_source.pr_title()
        branch_name = self.commit_source.current_branch()
        last_commit = self.commit_source.last_commit_message()

        template_name = self.selector.select_template(pr_title, branch_name, last_commit)
        logger.info("Selected template: %s", template_name)
        self.outputs.set_output("template-used", template_name)

        original_template = self.store.read_template(template_name)

        filled = original_template
        if self.llm_client.has_api_key:
            logger.info("Generating content with AI...")
            system_prompt = load_system_prompt(self._config.system_prompt_path)
            user_prompt = build_user_prompt(
                diff_result.diff, diff_result.changed_files, original_template
            )
            generated = self.llm_client.generate(system_prompt, user_prompt)
            if generated is None:
                logger.warning("AI generation failed, using the basic template only.")
            filled = merge_ai_content(original_template, generated)
        else:
            logger.info("No API key provided, using basic template only.")

        commit_messages = self.commit_source.commit_messages()
        extracted = extract_info_by_rules(
            commit_messages, branch_name, self.rules.rules
        )
        logger.info("Extracted information: %s", json.dumps(extracted, indent=2))
        final_content = apply_rules_to_template(filled, extracted, self.rules.rules)

        should_update = should_update_body(self.context, self._config.update_mode)
        self.outputs.set_output("should-update-body", str(should_update).lower())

        output_path = Path(self._config.output_path)
        output_path.write_text(final_content, encoding="utf-8")

        self.outputs.set_output("content-generated", "true")
        logger.info("Update mode: %s", self._config.update_mode)
        logger.info("Should update PR body: %s", should_update)
        logger.info("PR template written to %s", output_path)

        return RunResult(
            content_generated=True,
            template_used=template_name,
            content=final_content,
            should_update_body=should_update,
            output_path=str(output_path),
        )
