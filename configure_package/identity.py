"""Best-effort author and vendor identity lookups.

Wraps ``git`` (local configuration and commit history) and the GitHub REST
API. Every lookup degrades to an empty result instead of raising: an empty
string means "unresolved, ask the user".

Typical usage::

    git = GitClient(root)
    username = await guess_github_username(git)
    async with GitHubClient() as github:
        org = await github.get_endpoint(f"orgs/{username}")
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import httpx
from pydantic import BaseModel, Field

from configure_package.utils import run_command

_REMOTE_OWNER_RE = re.compile(r"github\.com[:/]+([^/]+)/")
_NOREPLY_DOMAIN = "@users.noreply.github.com"


# ---------------------------------------------------------------------------
# git
# ---------------------------------------------------------------------------


class GitClient:
    """Runs git commands inside the project root."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    async def run(self, *args: str) -> str:
        """Run ``git <args>`` and return stdout, or ``""`` on any failure."""
        try:
            returncode, stdout, _ = await run_command(["git", *args], cwd=self.root)
        except OSError:
            return ""
        return stdout if returncode == 0 else ""

    async def config(self, key: str) -> str:
        return (await self.run("config", key)).strip()

    async def remote_url(self) -> str:
        return await self.config("remote.origin.url")


def parse_remote_owner(remote_url: str) -> str:
    """Return the owner segment of a GitHub remote URL.

    Handles both ``git@github.com:owner/repo.git`` and
    ``https://github.com/owner/repo`` forms.
    """
    match = _REMOTE_OWNER_RE.search(remote_url.strip())
    return match.group(1) if match else ""


def _noreply_username(email: str) -> str:
    """``12345+octocat@users.noreply.github.com`` -> ``octocat``."""
    local = email.split("@")[0]
    return local.split("+", 1)[1] if "+" in local else local


async def search_commits_for_github_username(git: GitClient) -> str:
    """Find the current user's GitHub handle from noreply commit emails."""
    author_name = (await git.config("user.name")).lower()
    if not author_name:
        return ""

    log = await git.run(
        "log", f"--author={_NOREPLY_DOMAIN}", "--pretty=%an:%ae", "--reverse"
    )
    for line in log.splitlines():
        name, _, email = line.strip().partition(":")
        if not email or "[bot]" in name:
            continue
        if name.lower() == author_name:
            return _noreply_username(email)
    return ""


async def guess_github_username(git: GitClient) -> str:
    """Guess the user's GitHub handle: commit history first, then the remote owner."""
    username = await search_commits_for_github_username(git)
    if username:
        return username
    return parse_remote_owner(await git.remote_url())


# ---------------------------------------------------------------------------
# GitHub API
# ---------------------------------------------------------------------------


class GitHubResponse(BaseModel):
    """Result of a GitHub API lookup."""

    exists: bool = Field(default=False)
    data: dict[str, Any] = Field(default_factory=dict)


class GitHubClient:
    """Minimal async client for unauthenticated GitHub REST lookups."""

    def __init__(
        self,
        base_url: str = "https://api.github.com",
        user_agent: str = "template-configure/1.0",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "User-Agent": user_agent,
                "Accept": "application/json, */*",
            },
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_endpoint(self, endpoint: str) -> GitHubResponse:
        """GET ``/<endpoint>``; any failure or a ``Not Found`` body means "does not exist"."""
        try:
            response = await self._client.get("/" + endpoint.lstrip("/"))
            data = response.json()
        except (httpx.HTTPError, ValueError):
            return GitHubResponse()

        if not isinstance(data, dict) or data.get("message") == "Not Found":
            return GitHubResponse()
        return GitHubResponse(exists=True, data=data)

    async def organization_name(self, login: str) -> str:
        """Display name of the organisation *login*, or ``""`` if it is not an org."""
        if not login:
            return ""
        response = await self.get_endpoint(f"orgs/{login}")
        if not response.exists:
            return ""
        return response.data.get("name") or response.data.get("login") or ""
