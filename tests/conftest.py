"""Shared pytest fixtures for the configurator test suite.

Provides reusable fixtures for:
- A complete template project tree on disk
- The template's ``package.json`` manifest
- A scripted prompter that answers questions from a list
- Mock subprocess helpers
- git and GitHub client doubles
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from configure_package.config import Config
from configure_package.identity import GitClient, GitHubClient
from configure_package.prompts import Prompter


# ---------------------------------------------------------------------------
# Scripted prompts
# ---------------------------------------------------------------------------


class ScriptedPrompter(Prompter):
    """Answers prompts from a queue; an exhausted queue answers blank (the default)."""

    def __init__(self, answers: list[str] | None = None) -> None:
        super().__init__()
        self.answers = list(answers or [])
        self.prompts: list[str] = []

    def _read(self, text: str) -> str:
        self.prompts.append(text)
        if not self.answers:
            return ""
        return self.answers.pop(0)


@pytest.fixture
def scripted_prompter():
    """Factory for ``ScriptedPrompter`` instances.

    Usage:
        def test_something(scripted_prompter):
            prompter = scripted_prompter(["y", "n"])
    """
    return ScriptedPrompter


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------

_TEMPLATE_MANIFEST: dict[str, Any] = {
    "name": "package-skeleton",
    "version": "1.0.0",
    "description": "{{package.description}}",
    "author": "{{package.author.name}} <{{package.author.email}}>",
    "license": "MIT",
    "homepage": "https://github.com/{{vendor.github}}/{{package.name}}",
    "lint-staged": {
        "*.{js,ts}": [
            "./node_modules/.bin/biome lint --apply --no-errors-on-unmatched",
            "./node_modules/.bin/prettier --config prettier.config.cjs --write",
            "./node_modules/.bin/eslint --ext ts,js --fix",
        ],
        "*.json": [
            "./node_modules/.bin/prettier --config prettier.config.cjs --write",
        ],
    },
    "scripts": {
        "analyze:deps": "madge --extensions js,ts --ts-config tsconfig.json src/**",
        "build:api-docs": "typedoc --plugin typedoc-plugin-markdown --out docs/api src/index.ts",
        "build:dev": "BUILD_ENV=development node ./scripts/build.js",
        "fix": "npm run fmt && eslint --fix src",
        "fmt": "prettier --config prettier.config.cjs --write 'src/**/*.{js,ts,json}'",
        "lint:fix": "eslint --ext ts,js --fix src/",
        "lint:staged": "lint-staged",
        "lint": "eslint --ext ts,js src/",
        "test": "vitest --coverage",
    },
    "devDependencies": {
        "@biomejs/biome": "^1.6.0",
        "@typescript-eslint/eslint-plugin": "^7.1.1",
        "@typescript-eslint/parser": "^7.1.1",
        "@vitest/coverage-v8": "^1.3.1",
        "eslint": "^8.57.0",
        "eslint-plugin-node": "^11.1.0",
        "madge": "^8.0.0",
        "prettier": "^3.2.5",
        "typedoc": "^0.26.2",
        "typedoc-plugin-markdown": "^3.17.1",
        "typescript": "^5.4.2",
        "vitest": "^2.1.1",
    },
}


@pytest.fixture
def template_manifest() -> dict[str, Any]:
    """A fresh copy of the template's ``package.json`` contents."""
    return copy.deepcopy(_TEMPLATE_MANIFEST)


# ---------------------------------------------------------------------------
# Template project tree
# ---------------------------------------------------------------------------

MARKER_LINE = "Template Setup: run `configure-package` to configure.\n"

_README = (
    "# package-skeleton\n\n"
    "<!-- ==START TEMPLATE README== -->\n"
    "This is a template. Remove me.\n"
    "<!-- ==END TEMPLATE README== -->\n\n"
    + MARKER_LINE
    + "{{package.description}}\n\n"
    "Copyright {{date.year}} {{package.author.name}} <{{package.author.email}}>\n"
)

_RUN_TESTS_WORKFLOW = (
    "name: run-tests\n"
    "on: [push]\n"
    "env:\n"
    "  USE_CODECOV_SERVICE: yes\n"
    "jobs:\n"
    "  test:\n"
    "    runs-on: ubuntu-latest\n"
    "    steps:\n"
    "      - uses: actions/checkout@v4\n"
)


@pytest.fixture
def template_project(tmp_path: Path, template_manifest: dict[str, Any]) -> Path:
    """A template project directory matching what the configurator expects."""
    root = tmp_path / "my-package"
    root.mkdir()

    files: dict[str, str] = {
        "package.json": json.dumps(template_manifest, indent=4) + "\n",
        "README.md": _README,
        "src/index.ts": "// {{package.name}} by {{vendor.name}}\nexport const name = 'package-skeleton';\n",
        ".github/workflows/run-tests.yml": _RUN_TESTS_WORKFLOW,
        ".github/workflows/format-code.yml": "name: format-code\n",
        ".github/workflows/dependabot-auto-merge.yml": "name: dependabot-auto-merge\n",
        ".github/workflows/codeql-analysis.yml": "name: codeql\n",
        ".github/workflows/update-changelog.yml": "name: update-changelog\n",
        ".github/codecov.yml": "coverage: {}\n",
        ".github/dependabot.yml": "version: 2\n",
        ".madgerc": "{}\n",
        ".eslintrc.cjs": "module.exports = {};\n",
        ".eslintignore": "dist\n",
        "biome.json": "{}\n",
        "assets/logo.md": "{{package.name}}\n",
        "node_modules/dep/index.js": "// package-skeleton\n",
        "package-lock.json": '{"name": "package-skeleton"}\n',
        "configure-package.py": "# entry point\n",
    }
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def template_config(template_project: Path) -> Config:
    """A ``Config`` rooted at the template project."""
    return Config(root_dir=template_project)


# ---------------------------------------------------------------------------
# Mock subprocess
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


# ---------------------------------------------------------------------------
# Identity collaborators
# ---------------------------------------------------------------------------

GIT_IDENTITY: dict[str, str] = {
    "user.name": "Sam Doe",
    "user.email": "sam@example.com",
    "remote.origin.url": "git@github.com:acme/my-package.git",
}


@pytest.fixture
def fake_git() -> MagicMock:
    """A ``GitClient`` double answering from ``GIT_IDENTITY`` with an empty log."""
    git = MagicMock(spec=GitClient)
    git.config = AsyncMock(side_effect=lambda key: GIT_IDENTITY.get(key, ""))
    git.remote_url = AsyncMock(return_value=GIT_IDENTITY["remote.origin.url"])
    git.run = AsyncMock(return_value="")
    return git


@pytest.fixture
def fake_github() -> MagicMock:
    """A ``GitHubClient`` double for which no login is an organisation."""
    github = MagicMock(spec=GitHubClient)
    github.organization_name = AsyncMock(return_value="")
    github.aclose = AsyncMock()
    return github
