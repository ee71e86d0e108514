"""Diff, branch and commit sources: GitHub API first, local Git fallback."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, TypeVar

from .exceptions import GitError, GitHubError
from .git import GitRepo
from .github import GitHubClient, GitHubContext

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class DiffResult:
    diff: str = ""
    changed_files: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.diff and not self.changed_files


def with_fallback(
    primary: Optional[Callable[[], T]], secondary: Callable[[], T], label: str
) -> T:
    """Return ``primary()``; on any exception log it and return ``secondary()``.

    A ``None`` primary goes straight to the secondary.
    """
    if primary is None:
        logger.info("%s: using local Git", label)
        return secondary()
    try:
        logger.info("%s: using GitHub API", label)
        return primary()
    except Exception as exc:  # noqa: BLE001 - any remote failure degrades
        logger.warning("%s: GitHub API failed, falling back to local Git: %s", label, exc)
        return secondary()


def build_unified_diff(files: List[dict]) -> DiffResult:
    """Turn GitHub "list pull request files" entries into a DiffResult."""
    changed_files = [
        f["filename"] for f in files if f.get("status") != "removed"
    ]
    chunks: List[str] = []
    for f in files:
        patch = f.get("patch")
        if not patch:
            continue
        name = f["filename"]
        sha = f.get("sha") or ""
        chunks.append(
            f"diff --git a/{name} b/{name}\n"
            f"index {sha}..{sha} 100644\n"
            f"--- a/{name}\n"
            f"+++ b/{name}\n"
            f"{patch}\n"
        )
    return DiffResult(diff="".join(chunks), changed_files=changed_files)


class _RemoteAware:
    def __init__(
        self,
        git_repo: GitRepo,
        context: GitHubContext,
        client: Optional[GitHubClient] = None,
    ) -> None:
        self.git_repo = git_repo
        self.context = context
        self.client = client

    def _remote_enabled(self) -> bool:
        return (
            self.client is not None
            and self.context.pull_request is not None
            and self.context.number is not None
            and bool(self.context.owner)
        )

    def _require_client(self) -> GitHubClient:
        if self.client is None:
            raise GitHubError("GitHub client is not configured")
        return self.client


class DiffSource(_RemoteAware):
    """Produces the pull request diff and its changed files."""

    def get_diff(self) -> DiffResult:
        primary = self._from_github if self._remote_enabled() else None
        return with_fallback(primary, self._from_local, "diff")

    def _from_github(self) -> DiffResult:
        files = self._require_client().list_pull_files(
            self.context.owner, self.context.repo, self.context.number
        )
        logger.info("Fetched changes for %d files from GitHub API", len(files))
        return build_unified_diff(files)

    def _from_local(self) -> DiffResult:
        if self.context.pull_request is not None:
            base, head = self.context.base_sha, self.context.head_sha
        else:
            base, head = "HEAD~1", "HEAD"
        logger.info("Local Git diff: %s..%s", base, head)
        try:
            return DiffResult(
                diff=self.git_repo.get_diff(base, head),
                changed_files=self.git_repo.get_changed_files(base, head),
            )
        except GitError as exc:
            logger.error("Local Git diff failed: %s", exc)
            return DiffResult()


class CommitSource(_RemoteAware):
    """Resolves branch name, PR title and commit messages."""

    def __init__(
        self,
        git_repo: GitRepo,
        context: GitHubContext,
        client: Optional[GitHubClient] = None,
        main_branch: str = "main",
    ) -> None:
        super().__init__(git_repo, context, client)
        self.main_branch = main_branch

    def current_branch(self) -> str:
        try:
            branch = self.git_repo.get_current_branch()
        except GitError as exc:
            logger.warning("Failed to get current branch: %s", exc)
            branch = ""
        # Actions checks out PRs on a detached HEAD
        return branch or self.context.head_ref

    def pr_title(self) -> str:
        if self.context.pull_request is not None:
            return self.context.title
        try:
            return self.git_repo.get_last_commit_subject()
        except GitError as exc:
            logger.warning("Could not determine PR title: %s", exc)
            return ""

    def last_commit_message(self) -> str:
        try:
            return self.git_repo.get_last_commit_message()
        except GitError as exc:
            logger.warning("Could not read last commit message: %s", exc)
            return ""

    def commit_messages(self) -> str:
        primary = self._from_github if self._remote_enabled() else None
        return with_fallback(primary, self._from_local, "commits")

    def _from_github(self) -> str:
        commits = self._require_client().list_pull_commits(
            self.context.owner, self.context.repo, self.context.number
        )
        return "\n".join(c["commit"]["message"] for c in commits)

    def _from_local(self) -> str:
        try:
            branch = self.current_branch() or "HEAD"
            ancestor = self.git_repo.get_merge_base(self.main_branch, branch)
            return self.git_repo.get_commit_messages(ancestor, branch)
        except GitError as exc:
            logger.warning(
                "Failed to read commit range from local Git, using last commit: %s",
                exc,
            )
            return self.last_commit_message()
