"""GitHub Actions event context and REST API access."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import httpx

from .exceptions import GitHubError

logger = logging.getLogger(__name__)

API_URL = "https://api.github.com"
PER_PAGE = 100
# Upper bound on pages fetched per listing (GitHub caps PR files at 3000).
MAX_PAGES = 50


@dataclass
class GitHubContext:
    """The subset of the Actions run context prtg reads."""

    event: Dict[str, Any] = field(default_factory=dict)
    repository: str = ""

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "GitHubContext":
        """Load the event payload named by ``GITHUB_EVENT_PATH``.

        Outside of Actions (or with an unreadable payload) the context is
        empty and :attr:`pull_request` is ``None``.
        """
        env_map: Mapping[str, str] = os.environ if env is None else env
        event: Dict[str, Any] = {}
        event_path = env_map.get("GITHUB_EVENT_PATH")
        if event_path and Path(event_path).is_file():
            try:
                loaded = json.loads(Path(event_path).read_text(encoding="utf-8"))
                if isinstance(loaded, dict):
                    event = loaded
            except (OSError, ValueError) as exc:
                logger.warning("Could not read event payload %s: %s", event_path, exc)
        return cls(event=event, repository=env_map.get("GITHUB_REPOSITORY", ""))

    @property
    def pull_request(self) -> Optional[Dict[str, Any]]:
        pr = self.event.get("pull_request")
        return pr if isinstance(pr, dict) else None

    @property
    def action(self) -> str:
        return str(self.event.get("action") or "")

    @property
    def owner(self) -> str:
        return self.repository.split("/", 1)[0] if "/" in self.repository else ""

    @property
    def repo(self) -> str:
        return self.repository.split("/", 1)[1] if "/" in self.repository else ""

    @property
    def number(self) -> Optional[int]:
        pr = self.pull_request
        return pr.get("number") if pr else None

    @property
    def title(self) -> str:
        pr = self.pull_request
        return (pr.get("title") or "") if pr else ""

    @property
    def body(self) -> str:
        pr = self.pull_request
        return (pr.get("body") or "") if pr else ""

    @property
    def base_sha(self) -> str:
        pr = self.pull_request or {}
        return (pr.get("base") or {}).get("sha") or ""

    @property
    def head_sha(self) -> str:
        pr = self.pull_request or {}
        return (pr.get("head") or {}).get("sha") or ""

    @property
    def head_ref(self) -> str:
        pr = self.pull_request or {}
        return (pr.get("head") or {}).get("ref") or ""


class GitHubClient:
    """Minimal GitHub REST client for pull request files and commits."""

    def __init__(
        self, token: str, base_url: str = API_URL, timeout: float = 30.0
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "prtg",
        }

    def _paginate(self, path: str) -> List[Dict[str, Any]]:
        url = f"{self.base_url}{path}"
        items: List[Dict[str, Any]] = []
        for page in range(1, MAX_PAGES + 1):
            try:
                response = httpx.get(
                    url,
                    headers=self._headers,
                    params={"per_page": PER_PAGE, "page": page},
                    timeout=self.timeout,
                )
            except httpx.HTTPError as e:
                raise GitHubError(f"GitHub request failed: {path}: {e}") from e
            if response.status_code >= 400:
                raise GitHubError(
                    f"GitHub API error {response.status_code} for {path}: "
                    f"{response.text}"
                )
            batch = response.json()
            if not isinstance(batch, list):
                raise GitHubError(f"Unexpected GitHub response for {path}")
            items.extend(batch)
            if len(batch) < PER_PAGE:
                break
        return items

    def list_pull_files(self, owner: str, repo: str, number: int) -> List[Dict[str, Any]]:
        return self._paginate(f"/repos/{owner}/{repo}/pulls/{number}/files")

    def list_pull_commits(
        self, owner: str, repo: str, number: int
    ) -> List[Dict[str, Any]]:
        return self._paginate(f"/repos/{owner}/{repo}/pulls/{number}/commits")
