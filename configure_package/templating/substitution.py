"""Literal placeholder substitution across the project tree.

Files are selected by extension and by an exclusion list of path components,
then rewritten concurrently: every file is handled in its own worker thread
and a failure in one file is recorded without affecting the others.
"""

from __future__ import annotations

import asyncio
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from rich.markup import escape

from configure_package.config import Config
from configure_package.metadata import PackageInfo
from configure_package.utils import console

SKELETON_NAME = "package-skeleton"


@dataclass(frozen=True)
class TemplateContext:
    """Placeholder token -> replacement, plus the marker line to drop."""

    replacements: Mapping[str, str]
    marker_line: str = ""

    @classmethod
    def from_package_info(
        cls, info: PackageInfo, marker_line: str = "", year: int | None = None
    ) -> "TemplateContext":
        year = year or date.today().year
        replacements = {
            SKELETON_NAME: info.name,
            "{{vendor.name}}": info.vendor.name,
            "{{vendor.github}}": info.vendor.github,
            "{{package.name}}": info.name,
            "{{package.description}}": info.description,
            "{{package.author.name}}": info.author.name,
            "{{package.author.email}}": info.author.email,
            "{{package.author.github}}": info.author.github,
            "{{date.year}}": str(year),
        }
        return cls(replacements=MappingProxyType(replacements), marker_line=marker_line)

    def apply(self, text: str) -> str:
        """Replace every token and every marker line in a single scan.

        Replacement values are never scanned again, so a value that itself
        contains a token is inserted verbatim.
        """
        targets = dict(self.replacements)
        if self.marker_line:
            targets[self.marker_line] = ""
        if not targets:
            return text
        return _pattern_for(tuple(targets)).sub(lambda match: targets[match.group(0)], text)


@lru_cache(maxsize=None)
def _pattern_for(tokens: tuple[str, ...]) -> re.Pattern[str]:
    # Longest first, so a token that prefixes another never wins the match.
    ordered = sorted(tokens, key=len, reverse=True)
    return re.compile("|".join(re.escape(token) for token in ordered))


@dataclass
class SubstitutionResult:
    """Outcome for one file."""

    path: Path
    changed: bool = False
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None


def is_template_file(relative: Path, config: Config) -> bool:
    """Whether a root-relative path is eligible for substitution."""
    excluded = config.all_excluded_names()
    if any(part in excluded for part in relative.parts):
        return False
    text = relative.as_posix()
    if any(fragment in text for fragment in config.excluded_fragments):
        return False
    return relative.suffix in config.template_extensions


def collect_template_files(config: Config) -> list[Path]:
    """Every eligible file under the project root, sorted.

    Excluded directories are pruned during the walk, so dependency trees and
    ``.git`` are never descended into.
    """
    root = config.root_path
    excluded = config.all_excluded_names()
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [name for name in dirnames if name not in excluded]
        base = Path(dirpath)
        for name in filenames:
            path = base / name
            if path.is_file() and is_template_file(path.relative_to(root), config):
                found.append(path)
    return sorted(found)


def substitute_file(path: Path, context: TemplateContext) -> bool:
    """Rewrite *path* in place; returns ``False`` when nothing changed."""
    original = path.read_text(encoding="utf-8")
    content = context.apply(original)
    if content == original:
        return False
    path.write_text(content, encoding="utf-8")
    return True


async def _process(path: Path, context: TemplateContext, root: Path) -> SubstitutionResult:
    relative = path.relative_to(root).as_posix() if path.is_relative_to(root) else str(path)
    try:
        changed = await asyncio.to_thread(substitute_file, path, context)
    except (OSError, UnicodeError) as exc:
        console.print(f"[red]»[/red] failed {escape(relative)}: {escape(str(exc))}")
        return SubstitutionResult(path=path, error=str(exc))

    console.print(f"[green]»[/green] processed [bold]{escape(relative)}[/bold] [green]✓[/green]")
    return SubstitutionResult(path=path, changed=changed)


async def substitute(
    files: list[Path], context: TemplateContext, root: str | Path | None = None
) -> list[SubstitutionResult]:
    """Apply *context* to every file concurrently and wait for all of them."""
    base = Path(root).resolve() if root else Path("/")
    results = await asyncio.gather(
        *(_process(path, context, base) for path in files), return_exceptions=True
    )
    return [
        result if isinstance(result, SubstitutionResult) else SubstitutionResult(path=path, error=str(result))
        for path, result in zip(files, results)
    ]


async def substitute_tree(config: Config, context: TemplateContext) -> list[SubstitutionResult]:
    """Collect the project's template files and substitute into all of them."""
    files = await asyncio.to_thread(collect_template_files, config)
    return await substitute(files, context, config.root_path)
