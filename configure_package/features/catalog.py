"""The catalog of optional template features.

Each feature's disable routine undoes what the template ships for it: it
edits the manifest, schedules files for removal and queues edits that must
wait until the manifest has been saved. Paths are relative to the project
root held by the ``MutationContext``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from configure_package.features.models import FeatureCatalogError, FeatureDescriptor, MutationContext

WORKFLOWS_DIR = ".github/workflows"


def _workflow(name: str) -> str:
    return f"{WORKFLOWS_DIR}/{name}.yml"


def _github_config(name: str) -> str:
    return f".github/{name}.yml"


class FeatureCatalog:
    """Features in declaration order.

    A feature may only depend on features declared before it; this is checked
    here so a bad catalog fails before anything is asked.
    """

    def __init__(self, features: Iterable[FeatureDescriptor]) -> None:
        self._features: list[FeatureDescriptor] = []
        self._by_name: dict[str, FeatureDescriptor] = {}
        for feature in features:
            self._append(feature)

    def _append(self, feature: FeatureDescriptor) -> None:
        if feature.name in self._by_name:
            raise FeatureCatalogError(f"Duplicate feature '{feature.name}'")
        for dep in feature.depends_on:
            if dep not in self._by_name:
                raise FeatureCatalogError(
                    f"Feature '{feature.name}' depends on '{dep}', "
                    "which is not declared before it"
                )
        self._features.append(feature)
        self._by_name[feature.name] = feature

    def __iter__(self) -> Iterator[FeatureDescriptor]:
        return iter(self._features)

    def __len__(self) -> int:
        return len(self._features)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __getitem__(self, name: str) -> FeatureDescriptor:
        try:
            return self._by_name[name]
        except KeyError:
            raise FeatureCatalogError(f"Unknown feature '{name}'") from None

    def names(self) -> list[str]:
        return [feature.name for feature in self._features]


# ---------------------------------------------------------------------------
# Disable routines
# ---------------------------------------------------------------------------


def _replace_in_file(path: Path, old: str, new: str) -> None:
    if not path.is_file():
        return
    contents = path.read_text(encoding="utf-8")
    updated = contents.replace(old, new)
    if updated != contents:
        path.write_text(updated, encoding="utf-8")


def disable_codecov(ctx: MutationContext) -> None:
    run_tests = ctx.root / _workflow("run-tests")
    ctx.callbacks.add(
        lambda: _replace_in_file(run_tests, "USE_CODECOV_SERVICE: yes", "USE_CODECOV_SERVICE: no")
    )
    ctx.remover.add(_github_config("codecov"))


def disable_autoformat(ctx: MutationContext) -> None:
    ctx.remover.add(_workflow("format-code"))


def disable_dependabot(ctx: MutationContext) -> None:
    ctx.remover.add(_github_config("dependabot"))
    ctx.state.disable("automerge")


def disable_automerge(ctx: MutationContext) -> None:
    ctx.remover.add(_workflow("dependabot-auto-merge"))


def disable_codeql(ctx: MutationContext) -> None:
    ctx.remover.add(_workflow("codeql-analysis"))


def disable_update_changelog(ctx: MutationContext) -> None:
    ctx.remover.add(_workflow("update-changelog"))


def disable_madge(ctx: MutationContext) -> None:
    ctx.manifest.remove_dependencies("madge").filter_scripts("madge")
    ctx.remover.add(".madgerc")


def disable_vitest(ctx: MutationContext) -> None:
    ctx.manifest.remove_dependencies("vitest", "@vitest/coverage-v8")
    ctx.manifest.replace_script("test", 'echo "no tests defined" && exit 0')


def disable_eslint(ctx: MutationContext) -> None:
    ctx.manifest.remove_dependencies(
        "eslint",
        "eslint-plugin-node",
        "@typescript-eslint/eslint-plugin",
        "@typescript-eslint/parser",
    ).filter_scripts("eslint").filter_lint_staged("eslint")
    ctx.remover.add(".eslintrc.cjs", ".eslintignore")


def disable_biome(ctx: MutationContext) -> None:
    ctx.manifest.remove_dependencies("@biomejs/biome").filter_scripts("biome").filter_lint_staged("biome")
    ctx.remover.add("biome.json")


def disable_typedoc(ctx: MutationContext) -> None:
    ctx.manifest.remove_dependencies("typedoc", "typedoc-plugin-markdown").filter_scripts("typedoc")


def default_catalog() -> FeatureCatalog:
    """The features offered by the TypeScript package template."""
    return FeatureCatalog(
        [
            FeatureDescriptor("codecov", "Use code coverage service codecov?", disable_codecov),
            FeatureDescriptor(
                "autoformat",
                "Automatically lint & format code on push?",
                disable_autoformat,
                default=True,
            ),
            FeatureDescriptor("dependabot", "Use Dependabot?", disable_dependabot, default=True),
            FeatureDescriptor(
                "automerge",
                "Automerge Dependabot PRs?",
                disable_automerge,
                default=True,
                depends_on=("dependabot",),
            ),
            FeatureDescriptor("codeql", "Use CodeQL Quality Analysis?", disable_codeql, default=True),
            FeatureDescriptor(
                "update_changelog", "Use Changelog Updater Workflow?", disable_update_changelog
            ),
            FeatureDescriptor("madge", "Use madge package for code analysis?", disable_madge),
            FeatureDescriptor(
                "vitest", "Use vitest for js/ts unit testing?", disable_vitest, default=True
            ),
            FeatureDescriptor(
                "eslint", "Use ESLint for js/ts code linting?", disable_eslint, default=True
            ),
            FeatureDescriptor(
                "biome", "Use biome for js/ts code linting/formatting?", disable_biome, default=True
            ),
            FeatureDescriptor(
                "typedoc", "Use typedoc to generate api docs?", disable_typedoc, default=True
            ),
        ]
    )
