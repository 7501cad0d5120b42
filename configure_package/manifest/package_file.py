"""In-memory ``package.json`` with fluent structural edits.

Every edit is a pure in-memory change that returns the ``PackageFile`` for
chaining and silently does nothing when its target section or key is absent.
Nothing reaches the disk until :meth:`PackageFile.save` is called.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from configure_package.manifest.filters import filter_lint_pipeline, filter_script
from configure_package.utils import load_json, save_json

LINT_STAGED_KEY = "lint-staged"
DEPENDENCY_KEYS = ("dependencies", "devDependencies")


class PackageFile:
    """The project manifest plus the operations feature routines need."""

    def __init__(self, path: str | Path, data: dict[str, Any] | None = None) -> None:
        self.path = Path(path)
        self.data: dict[str, Any] = data if data is not None else {}

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: str | Path) -> "PackageFile":
        return cls(path, load_json(path))

    async def save(self) -> "PackageFile":
        """Write the manifest back with 4-space indentation."""
        await save_json(self.data, self.path, indent=4)
        return self

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def scripts(self) -> dict[str, str]:
        return self.data.get("scripts") or {}

    @property
    def lint_staged(self) -> dict[str, list[str]] | None:
        return self.data.get(LINT_STAGED_KEY)

    def has_dependency(self, name: str) -> bool:
        return any(name in (self.data.get(key) or {}) for key in DEPENDENCY_KEYS)

    # ------------------------------------------------------------------
    # Scripts
    # ------------------------------------------------------------------

    def add_script(self, name: str, command: str) -> "PackageFile":
        self.data.setdefault("scripts", {})[name] = command
        return self

    replace_script = add_script

    def delete_scripts(self, *names: str) -> "PackageFile":
        scripts = self.data.get("scripts")
        if scripts:
            for name in names:
                scripts.pop(name, None)
        return self

    def filter_scripts(self, token: str) -> "PackageFile":
        """Remove *token* from every script, deleting scripts left empty."""
        scripts = self.data.get("scripts")
        if not scripts:
            return self

        for name in list(scripts):
            filtered = filter_script(scripts[name], token)
            if filtered:
                scripts[name] = filtered
            else:
                del scripts[name]
        return self

    # ------------------------------------------------------------------
    # Other sections
    # ------------------------------------------------------------------

    def delete(self, *keys: str) -> "PackageFile":
        """Delete top-level manifest keys."""
        for key in keys:
            self.data.pop(key, None)
        return self

    def remove_dependencies(self, *names: str) -> "PackageFile":
        """Remove packages from both runtime and development dependencies."""
        for key in DEPENDENCY_KEYS:
            deps = self.data.get(key)
            if not deps:
                continue
            for name in names:
                deps.pop(name, None)
        return self

    def filter_lint_staged(self, token: str) -> "PackageFile":
        pipeline = self.lint_staged
        if pipeline is None:
            return self
        self.data[LINT_STAGED_KEY] = filter_lint_pipeline(pipeline, token)
        return self
