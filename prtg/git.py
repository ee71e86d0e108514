"""Local Git operations for prtg."""

import subprocess
from pathlib import Path
from typing import Optional

from .exceptions import GitError


class GitRepo:
    """Runs read-only Git commands against a working copy."""

    def __init__(self, repo_path: Optional[str] = None) -> None:
        self.repo_path = Path(repo_path or ".")

    def _run_git_command(self, args: list[str]) -> str:
        """Run a Git command and return its stripped output."""
        try:
            result = subprocess.run(
                ["git"] + args,
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                check=True,
            )
            return result.stdout.strip()
        except subprocess.CalledProcessError as e:
            cmd = " ".join(args)
            raise GitError(
                f"Git command failed: {cmd}\n{e.stderr}"
            ) from e
        except FileNotFoundError as exc:
            raise GitError(
                "Git command not found. Please install Git."
            ) from exc

    def get_current_branch(self) -> str:
        return self._run_git_command(["branch", "--show-current"])

    def get_last_commit_subject(self) -> str:
        return self._run_git_command(["log", "-1", "--pretty=%s"])

    def get_last_commit_message(self) -> str:
        return self._run_git_command(["log", "-1", "--pretty=%B"])

    def get_diff(self, base: str, head: str) -> str:
        """Unified diff between two revisions."""
        return self._run_git_command(["diff", f"{base}..{head}"])

    def get_changed_files(self, base: str, head: str) -> list[str]:
        output = self._run_git_command(["diff", "--name-only", f"{base}..{head}"])
        return [line.strip() for line in output.split("\n") if line.strip()]

    def get_merge_base(self, first: str, second: str) -> str:
        return self._run_git_command(["merge-base", first, second])

    def get_commit_messages(self, base: str, head: str) -> str:
        """Full messages of the commits in ``base..head``, newest first."""
        return self._run_git_command(["log", f"{base}..{head}", "--pretty=%B"])
