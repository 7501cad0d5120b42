"""Removal of a capability from script command chains.

A script is a chain of sub-commands joined by ``&&``; that separator is the
only structure recognised. A sub-command references a token when it starts
with the token (at the head of the chain or right after a separator) or
contains it anywhere. Tokens are matched literally.

Examples::

    filter_script("test && eslint --fix src && echo done", "eslint")
        -> "test && echo done"
    filter_lint_pipeline({"*.ts": ["biome lint", "eslint --fix"]}, "eslint")
        -> {"*.ts": ["biome lint"]}
"""

from __future__ import annotations

import re

SEPARATOR = "&&"


def _leading_pattern(token: str) -> re.Pattern[str]:
    return re.compile(rf"^\s*{re.escape(token)}")


def filter_script(command: str, token: str) -> str:
    """Drop every sub-command of *command* that references *token*.

    Remaining sub-commands keep their original spacing around the separator.
    Returns ``""`` when nothing remains.
    """
    if not token:
        return command.strip()

    leading = _leading_pattern(token)
    kept = [
        part
        for part in command.split(SEPARATOR)
        if part.strip() and not leading.match(part) and token not in part
    ]
    return SEPARATOR.join(kept).strip()


def filter_lint_pipeline(pipeline: dict[str, list[str]], token: str) -> dict[str, list[str]]:
    """Drop list entries that contain *token*; every pattern key is kept."""
    return {
        pattern: [command for command in commands if token not in command]
        for pattern, commands in pipeline.items()
    }
