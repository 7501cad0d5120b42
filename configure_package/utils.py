"""Shared helpers for the template configurator.

External commands, manifest JSON I/O and the Rich console every phase prints
through. Commands report failure through their return code; JSON loading
raises, so callers decide what a missing or malformed manifest means.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# External commands
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    capture: bool = True,
) -> tuple[int, str, str]:
    """Run *cmd* and wait for it to exit, however long that takes.

    With ``capture=False`` the child writes straight to the terminal (used for
    installs and formatting so their progress stays visible) and the returned
    output strings are empty.

    Raises:
        OSError: If the executable cannot be started.
    """
    pipe = asyncio.subprocess.PIPE if capture else None
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=pipe,
        stderr=pipe,
        cwd=str(cwd) if cwd else None,
    )
    stdout_bytes, stderr_bytes = await process.communicate()

    stdout = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout, stderr)


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> dict[str, Any]:
    """Load a JSON document whose top level must be an object.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the document is not a JSON object.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(data).__name__}")
    return data


async def save_json(data: dict[str, Any], path: str | Path, indent: int = 4) -> None:
    """Write *data* in key order with a trailing newline, off the event loop."""
    content = json.dumps(data, indent=indent, ensure_ascii=False) + "\n"
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, Path(path).write_text, content, "utf-8")


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """``3.7`` -> ``"3.7s"``, ``65.2`` -> ``"1m 5s"``."""
    if seconds < 0:
        return "0.0s"
    minutes, secs = divmod(seconds, 60)
    if minutes:
        return f"{int(minutes)}m {int(secs)}s"
    return f"{secs:.1f}s"


PHASE_NAMES: dict[int, str] = {
    1: "PACKAGE MANAGER",
    2: "METADATA",
    3: "FEATURES",
    4: "CONFIRM",
    5: "SAVE MANIFEST",
    6: "DEFERRED EDITS",
    7: "REMOVE FILES",
    8: "SUBSTITUTE",
    9: "INSTALL",
    10: "FORMAT",
    11: "CLEAN DOCS",
    12: "SELF DELETE",
    13: "COMMIT",
}

# Questions (1-4), manifest edits (5-7), files (8), tooling (9-13).
_PHASE_COLORS: dict[int, str] = {
    **dict.fromkeys(range(1, 5), "bright_cyan"),
    **dict.fromkeys(range(5, 8), "bright_magenta"),
    8: "bright_yellow",
    **dict.fromkeys(range(9, 14), "bright_green"),
}


# ---------------------------------------------------------------------------
# Console output
# ---------------------------------------------------------------------------


def print_phase_header(phase: int, name: str) -> None:
    color = _PHASE_COLORS.get(phase, "white")
    console.print()
    console.print(Rule(f"[bold {color}]{phase}/{len(PHASE_NAMES)} {name}[/bold {color}]", style=color))


def print_summary_table(rows: dict[str, str], title: str = "Summary") -> None:
    """Two-column table; ``enabled``/``disabled`` values are coloured."""
    table = Table(title=title, header_style="bold bright_cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in rows.items():
        text = str(value)
        if text == "enabled":
            text = "[green]enabled[/green]"
        elif text == "disabled":
            text = "[red]disabled[/red]"
        table.add_row(key, text)

    console.print(table)


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    console.print(f"[bold red]✗ {message}[/bold red]")


def print_warning(message: str) -> None:
    console.print(f"[yellow]{message}[/yellow]")
