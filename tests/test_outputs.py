import pytest

from prtg.github import GitHubContext
from prtg.outputs import ActionOutputs, should_update_body


def _ctx(action="opened", body=""):
    return GitHubContext(event={"action": action, "pull_request": {"number": 1, "body": body}})


def test_set_output_appends_to_github_output(tmp_path):
    out_file = tmp_path / "out.txt"
    out_file.write_text("existing=1\n")
    outputs = ActionOutputs(env={"GITHUB_OUTPUT": str(out_file)})

    outputs.set_output("template-used", "feature")
    outputs.set_output("content-generated", "true")

    assert out_file.read_text() == (
        "existing=1\ntemplate-used=feature\ncontent-generated=true\n"
    )
    assert outputs.values == {"template-used": "feature", "content-generated": "true"}


def test_set_output_prints_without_github_output(capsys):
    ActionOutputs(env={}).set_output("content-generated", "false")
    assert "::set-output name=content-generated::false" in capsys.readouterr().out


def test_no_pull_request_never_updates():
    assert should_update_body(GitHubContext(), "always") is False


@pytest.mark.parametrize(
    "mode,action,body,expected",
    [
        ("always", "synchronize", "written by hand", True),
        ("comment-only", "opened", "", False),
        ("create-only", "opened", "has body", True),
        ("create-only", "synchronize", "   ", True),
        ("create-only", "synchronize", "has body", False),
        ("unknown-mode", "edited", "has body", False),
    ],
)
def test_update_modes(mode, action, body, expected):
    assert should_update_body(_ctx(action, body), mode) is expected
