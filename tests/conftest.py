import subprocess
from collections.abc import Generator
from pathlib import Path

import pytest

_ENV_VARS = [
    "AI_PROVIDER",
    "MODEL",
    "API_KEY",
    "ANTHROPIC_API_KEY",
    "OPENAI_API_KEY",
    "GOOGLE_API_KEY",
    "VERTEX_AI_API_KEY",
    "GROQ_API_KEY",
    "HUGGINGFACE_API_KEY",
    "TEMPLATE_PATH",
    "UPDATE_MODE",
    "PROJECT_ID",
    "LOCATION",
    "MAIN_BRANCH",
    "GITHUB_TOKEN",
    "GITHUB_OUTPUT",
    "GITHUB_EVENT_PATH",
    "GITHUB_REPOSITORY",
    "PRTG_LLM_REQUEST_TIMEOUT",
]


@pytest.fixture(autouse=True)
def reset_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    from prtg.config import clear_active_config

    clear_active_config()
    yield
    clear_active_config()


# Ensure no real Anthropic network calls escape during tests that don't
# explicitly mock the endpoint.
@pytest.fixture(autouse=True)
def _mock_anthropic_messages(monkeypatch):
    import httpx

    original_post = httpx.post

    def fake_post(url, *args, **kwargs):  # noqa: D401
        if isinstance(url, str) and "api.anthropic.com" in url and "/v1/messages" in url:

            class _Resp:
                status_code = 200
                text = "ok"

                def json(self):  # noqa: D401
                    return {
                        "content": [
                            {"type": "text", "text": "## Summary\n\nstubbed anthropic text"}
                        ]
                    }

            return _Resp()
        return original_post(url, *args, **kwargs)

    monkeypatch.setattr(httpx, "post", fake_post)


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True
    )
    return result.stdout.strip()


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    """A repository with one commit on ``main`` and a ``feature/login`` branch."""
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    (repo / "app.py").write_text("print('hello')\n")
    _git(repo, "add", "app.py")
    _git(repo, "commit", "-q", "-m", "chore: initial commit")
    _git(repo, "checkout", "-q", "-b", "feature/login")
    (repo / "login.py").write_text("def login():\n    return True\n")
    _git(repo, "add", "login.py")
    _git(repo, "commit", "-q", "-m", "feat: add login form JIRA-100")
    return repo
