"""Removal of template-only content once the project is configured."""

from __future__ import annotations

import shutil
from pathlib import Path


def strip_template_block(content: str, start_marker: str, end_marker: str) -> str:
    """Remove everything from the first *start_marker* through the last *end_marker*.

    Content without both markers is returned unchanged.
    """
    start = content.find(start_marker)
    end = content.rfind(end_marker)
    if start == -1 or end == -1 or end < start:
        return content
    return content[:start] + content[end + len(end_marker):]


def remove_template_readme_text(readme: Path, start_marker: str, end_marker: str) -> bool:
    """Strip the template section from *readme*; returns ``True`` if it was rewritten."""
    if not readme.is_file():
        return False

    content = readme.read_text(encoding="utf-8")
    updated = strip_template_block(content, start_marker, end_marker)
    if updated == content or not updated:
        return False
    readme.write_text(updated, encoding="utf-8")
    return True


def remove_directory(path: Path) -> bool:
    """Recursively delete *path*; a missing directory is not an error."""
    if not path.is_dir():
        return False
    shutil.rmtree(path)
    return True
