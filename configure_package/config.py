"""Template configurator configuration.

Centralised, typed configuration for a configuration run. All settings use
Pydantic v2 models so they can be validated at construction time and built
from environment variables without boiler-plate. Every path the configurator
touches is derived from ``root_dir``; nothing depends on the process's
working directory or on where this package is installed.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class Config(BaseModel):
    """Global configurator settings.

    Instances are created once by the CLI entry point (or by tests) and then
    passed through the rest of the system.
    """

    root_dir: Path = Field(default=Path("."), description="Root of the template project")

    # Package managers
    default_package_manager: str = Field(default="npm")
    package_managers: list[str] = Field(
        default_factory=lambda: sorted(["npm", "yarn", "bun", "pnpm"])
    )
    lockfiles: dict[str, str] = Field(
        default_factory=lambda: {
            "bun": "bun.lockb",
            "yarn": "yarn.lock",
            "pnpm": "pnpm-lock.yaml",
            "npm": "package-lock.json",
        },
        description="Lockfile per package manager, in detection order",
    )

    # Template substitution filters
    template_extensions: list[str] = Field(
        default_factory=lambda: [".json", ".md", ".yml", ".js", ".ts", ".cjs"]
    )
    excluded_names: list[str] = Field(
        default_factory=lambda: [
            ".git",
            "node_modules",
            "assets",
            "dist",
            "build.js",
            "bun.lockb",
            "package-lock.json",
            "prettier.config.cjs",
        ],
        description="Path components that are never treated as templates",
    )
    excluded_fragments: list[str] = Field(default_factory=lambda: ["lock", ".log"])
    marker_line: str = Field(default="Template Setup: run `configure-package` to configure.\n")

    # README / cleanup
    readme_start_marker: str = Field(default="<!-- ==START TEMPLATE README== -->")
    readme_end_marker: str = Field(default="<!-- ==END TEMPLATE README== -->")
    assets_dir: str = Field(default="assets")
    entry_point: str = Field(default="configure-package.py")
    commit_message: str = Field(default="commit configured template files")

    # GitHub API
    github_api_url: str = Field(default="https://api.github.com")
    user_agent: str = Field(default="template-configure/1.0")
    github_timeout: float | None = Field(
        default=None, description="Per-request timeout in seconds; None waits indefinitely"
    )

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def root_path(self) -> Path:
        """Absolute project root."""
        return self.root_dir.resolve()

    @property
    def manifest_path(self) -> Path:
        """Path to the project's ``package.json``."""
        return self.root_path / "package.json"

    @property
    def readme_path(self) -> Path:
        return self.root_path / "README.md"

    @property
    def github_dir(self) -> Path:
        return self.root_path / ".github"

    @property
    def workflows_dir(self) -> Path:
        return self.github_dir / "workflows"

    @property
    def entry_point_path(self) -> Path:
        """The configurator script shipped inside the template, removed at the end."""
        return self.root_path / self.entry_point

    @property
    def assets_path(self) -> Path:
        return self.root_path / self.assets_dir

    def workflow_path(self, name: str) -> Path:
        """Return ``.github/workflows/<name>.yml``."""
        return self.workflows_dir / f"{name}.yml"

    def github_config_path(self, name: str) -> Path:
        """Return ``.github/<name>.yml``."""
        return self.github_dir / f"{name}.yml"

    def all_excluded_names(self) -> set[str]:
        """Excluded path components, including the entry point itself."""
        return {*self.excluded_names, self.entry_point}

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CONFIGURE_ROOT, CONFIGURE_PACKAGE_MANAGER, CONFIGURE_GITHUB_API_URL,
            CONFIGURE_GITHUB_TIMEOUT, CONFIGURE_COMMIT_MESSAGE.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CONFIGURE_ROOT"):
            kwargs["root_dir"] = Path(os.environ["CONFIGURE_ROOT"])
        if os.environ.get("CONFIGURE_PACKAGE_MANAGER"):
            kwargs["default_package_manager"] = os.environ["CONFIGURE_PACKAGE_MANAGER"]
        if os.environ.get("CONFIGURE_GITHUB_API_URL"):
            kwargs["github_api_url"] = os.environ["CONFIGURE_GITHUB_API_URL"]
        if os.environ.get("CONFIGURE_GITHUB_TIMEOUT"):
            kwargs["github_timeout"] = float(os.environ["CONFIGURE_GITHUB_TIMEOUT"])
        if os.environ.get("CONFIGURE_COMMIT_MESSAGE"):
            kwargs["commit_message"] = os.environ["CONFIGURE_COMMIT_MESSAGE"]
        return cls(**kwargs)
