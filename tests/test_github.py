import json

import httpx
import pytest

from prtg import github as github_module
from prtg.exceptions import GitHubError
from prtg.github import GitHubClient, GitHubContext


class _Resp:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code
        self.text = "error body"

    def json(self):
        return self._payload


def _write_event(tmp_path, payload):
    path = tmp_path / "event.json"
    path.write_text(json.dumps(payload))
    return str(path)


def test_context_without_event_is_empty():
    ctx = GitHubContext.from_env({})
    assert ctx.pull_request is None
    assert ctx.number is None
    assert ctx.title == ""
    assert ctx.base_sha == ""


def test_context_reads_pull_request_payload(tmp_path):
    event = {
        "action": "opened",
        "pull_request": {
            "number": 7,
            "title": "Add login",
            "body": None,
            "base": {"sha": "abc"},
            "head": {"sha": "def", "ref": "feature/login"},
        },
    }
    ctx = GitHubContext.from_env(
        {"GITHUB_EVENT_PATH": _write_event(tmp_path, event), "GITHUB_REPOSITORY": "acme/app"}
    )

    assert ctx.action == "opened"
    assert ctx.owner == "acme"
    assert ctx.repo == "app"
    assert ctx.number == 7
    assert ctx.title == "Add login"
    assert ctx.body == ""
    assert ctx.base_sha == "abc"
    assert ctx.head_sha == "def"
    assert ctx.head_ref == "feature/login"


def test_context_ignores_unreadable_payload(tmp_path):
    path = tmp_path / "event.json"
    path.write_text("not json")
    assert GitHubContext.from_env({"GITHUB_EVENT_PATH": str(path)}).pull_request is None


def test_paginates_until_short_page(monkeypatch):
    monkeypatch.setattr(github_module, "PER_PAGE", 2)
    pages = {1: [{"n": 1}, {"n": 2}], 2: [{"n": 3}]}
    calls = []

    def fake_get(url, headers=None, params=None, timeout=None):
        calls.append((url, params["page"], headers["Authorization"]))
        return _Resp(pages[params["page"]])

    monkeypatch.setattr(httpx, "get", fake_get)

    items = GitHubClient("tok").list_pull_files("acme", "app", 7)

    assert items == [{"n": 1}, {"n": 2}, {"n": 3}]
    assert [c[1] for c in calls] == [1, 2]
    assert calls[0][0] == "https://api.github.com/repos/acme/app/pulls/7/files"
    assert calls[0][2] == "Bearer tok"


def test_commits_endpoint(monkeypatch):
    seen = []

    def fake_get(url, **kwargs):
        seen.append(url)
        return _Resp([])

    monkeypatch.setattr(httpx, "get", fake_get)
    assert GitHubClient("tok").list_pull_commits("acme", "app", 3) == []
    assert seen == ["https://api.github.com/repos/acme/app/pulls/3/commits"]


def test_error_status_raises(monkeypatch):
    monkeypatch.setattr(httpx, "get", lambda *a, **k: _Resp({}, status_code=403))
    with pytest.raises(GitHubError) as ei:
        GitHubClient("tok").list_pull_files("acme", "app", 1)
    assert "403" in str(ei.value)


def test_network_error_raises(monkeypatch):
    def boom(*args, **kwargs):
        raise httpx.ConnectTimeout("slow")

    monkeypatch.setattr(httpx, "get", boom)
    with pytest.raises(GitHubError):
        GitHubClient("tok").list_pull_commits("acme", "app", 1)
