"""Package identity metadata collection.

Pre-fills the package name, author and vendor from the project directory, git
configuration and GitHub, then lets the user confirm or override every field.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from configure_package.config import Config
from configure_package.identity import GitClient, GitHubClient, guess_github_username, parse_remote_owner
from configure_package.prompts import Prompter


class AuthorInfo(BaseModel):
    name: str = ""
    email: str = ""
    github: str = ""


class VendorInfo(BaseModel):
    name: str = ""
    github: str = ""


class PackageInfo(BaseModel):
    """Everything the user told us about the package being configured."""

    name: str = ""
    description: str = ""
    package_manager: str = "npm"
    author: AuthorInfo = Field(default_factory=AuthorInfo)
    vendor: VendorInfo = Field(default_factory=VendorInfo)


class MetadataCollector:
    """Fills a ``PackageInfo`` from lookups and prompts."""

    def __init__(
        self,
        config: Config,
        prompter: Prompter,
        git: GitClient,
        github: GitHubClient,
    ) -> None:
        self.config = config
        self.prompter = prompter
        self.git = git
        self.github = github

    async def prefill(self, info: PackageInfo) -> PackageInfo:
        """Populate *info* from best-effort lookups without asking anything."""
        info.name = self.config.root_path.name
        info.author.name = await self.git.config("user.name")
        info.author.email = await self.git.config("user.email")
        info.vendor.name = info.author.name
        info.author.github = await guess_github_username(self.git)
        info.vendor.github = parse_remote_owner(await self.git.remote_url())

        # A vendor that is a GitHub organisation is named after the org.
        org_name = await self.github.organization_name(info.vendor.github)
        if org_name:
            info.vendor.name = org_name
        return info

    def ask(self, info: PackageInfo) -> PackageInfo:
        """Confirm or override each field; vendor fields fall back to the author's."""
        ask = self.prompter.conditional_ask
        ask(info, "name", "package name?")
        ask(info, "description", "package description?")
        ask(info.author, "name", "author name?")
        ask(info.author, "email", "author email?")
        ask(info.author, "github", "author github username?")
        ask(info.vendor, "name", "vendor name (default is author name)?", allow_empty=True)
        ask(
            info.vendor,
            "github",
            "vendor github org/user name (default is author github)?",
            allow_empty=True,
        )

        if not info.vendor.name:
            info.vendor.name = info.author.name
        if not info.vendor.github:
            info.vendor.github = info.author.github
        return info

    async def collect(self, info: PackageInfo | None = None) -> PackageInfo:
        info = info or PackageInfo()
        await self.prefill(info)
        return self.ask(info)
