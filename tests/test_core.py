import json

import pytest

from prtg.config import load_config
from prtg.core import PRTemplateWorkflow
from prtg.defaults import DEFAULT_TEMPLATES
from prtg.github import GitHubContext
from prtg.git import GitRepo
from prtg.llm import LLMClient
from prtg.outputs import ActionOutputs
from prtg.sources import DiffResult, DiffSource


class _StubLLM(LLMClient):
    def __init__(self, config, reply):
        super().__init__(config)
        self.api_key = "stub"
        self.reply = reply
        self.prompts = []

    def generate(self, system_prompt, user_prompt):
        self.prompts.append((system_prompt, user_prompt))
        return self.reply


def _write_rules(repo, data):
    rules_dir = repo / ".github" / "ai-pr"
    rules_dir.mkdir(parents=True, exist_ok=True)
    (rules_dir / "rules.json").write_text(json.dumps(data))


def _workflow(repo, **kwargs):
    config = load_config(env={}, cwd=repo)
    kwargs.setdefault("context", GitHubContext())
    kwargs.setdefault("outputs", ActionOutputs(env={}))
    return PRTemplateWorkflow(config=config, github_client=None, **kwargs), config


def test_end_to_end_without_credentials(git_repo):
    _write_rules(
        git_repo,
        {"rules": [{"pattern": "JIRA-\\d+", "targetSection": "## Related Tickets"}]},
    )
    workflow, config = _workflow(git_repo)

    result = workflow.execute()

    expected = DEFAULT_TEMPLATES["feature"] + "\n\n## Related Tickets\n- JIRA-100"
    assert result.content_generated is True
    assert result.template_used == "feature"
    assert result.content == expected
    with open(config.output_path, encoding="utf-8") as fh:
        assert fh.read() == expected
    assert workflow.outputs.values == {
        "template-used": "feature",
        "should-update-body": "false",
        "content-generated": "true",
    }


def test_generated_content_is_merged_before_rules(git_repo):
    _write_rules(
        git_repo,
        {
            "rules": [{"pattern": "JIRA-\\d+", "targetSection": "## Tickets"}],
            "templateSelection": {
                "rules": [{"condition": "commit", "pattern": "login", "template": "default"}],
                "defaultTemplate": "feature",
            },
        },
    )
    config = load_config(env={}, cwd=git_repo)
    reply = "```markdown\n## Summary\n\nAdds a login form.\n\n## Tickets\n-\n\n## Notes\n\n<!-- AI will fill this automatically -->\n```"
    llm = _StubLLM(config, reply)
    workflow, _ = _workflow(git_repo, llm_client=llm)

    result = workflow.execute()

    assert result.template_used == "default"
    assert result.content == (
        "## Summary\n\nAdds a login form.\n\n## Tickets\n- JIRA-100\n\n## Notes\n\nN/A"
    )
    system_prompt, user_prompt = llm.prompts[0]
    assert "Pull Request templates" in system_prompt
    assert "login.py" in user_prompt
    assert DEFAULT_TEMPLATES["default"] in user_prompt


def test_failed_generation_keeps_original_template(git_repo):
    templates = git_repo / ".github" / "ai-pr" / "templates"
    templates.mkdir(parents=True)
    (templates / "feature.md").write_text("## What\n\n<!-- AI will fill this automatically -->\n")
    config = load_config(env={}, cwd=git_repo)
    workflow, _ = _workflow(git_repo, llm_client=_StubLLM(config, None))

    result = workflow.execute()

    assert result.content == "## What\n\n<!-- AI will fill this automatically -->\n"


def test_no_changes_short_circuits(git_repo, monkeypatch):
    monkeypatch.setattr(DiffSource, "get_diff", lambda self: DiffResult())
    workflow, config = _workflow(git_repo)

    result = workflow.execute()

    assert result.content_generated is False
    assert workflow.outputs.values == {"content-generated": "false"}
    assert not (git_repo / "pr-template-output.md").exists()


def test_unexpected_error_reports_and_reraises(git_repo, monkeypatch):
    def boom(self):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(GitRepo, "get_last_commit_message", boom)
    workflow, _ = _workflow(git_repo)

    with pytest.raises(RuntimeError):
        workflow.execute()
    assert workflow.outputs.values["content-generated"] == "false"


def test_should_update_body_for_opened_pr(git_repo):
    context = GitHubContext(
        event={
            "action": "opened",
            "pull_request": {
                "number": 1,
                "title": "Hotfix for login",
                "body": "",
                "base": {"sha": "HEAD~1"},
                "head": {"sha": "HEAD", "ref": "feature/login"},
            },
        },
        repository="acme/app",
    )
    workflow, _ = _workflow(git_repo, context=context)

    result = workflow.execute()

    assert result.should_update_body is True
    assert workflow.outputs.values["should-update-body"] == "true"
