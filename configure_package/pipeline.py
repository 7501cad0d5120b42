"""Template configuration pipeline.

Turns a placeholder template project into a concrete package in one run:

Phase 1:  PACKAGE MANAGER -- detect and confirm the package manager.
Phase 2:  METADATA        -- package name, description, author and vendor.
Phase 3:  FEATURES        -- opt in/out of optional features, mutating the manifest in memory.
Phase 4:  CONFIRM         -- last chance to cancel; nothing has been written yet.
Phase 5:  SAVE MANIFEST   -- persist ``package.json``.
Phase 6:  DEFERRED EDITS  -- run edits queued by feature routines.
Phase 7:  REMOVE FILES    -- delete files belonging to disabled features.
Phase 8:  SUBSTITUTE      -- replace placeholders across the project tree.
Phase 9:  INSTALL         -- reinstall dependencies.
Phase 10: FORMAT          -- run the project's ``fix`` script.
Phase 11: CLEAN DOCS      -- strip template README text and the assets directory.
Phase 12: SELF DELETE     -- remove the configurator entry point from the template.
Phase 13: COMMIT          -- commit the configured files.

A failing phase is reported and the run moves on to the next one; only a "no"
at the confirmation gate stops the run early.

Usage::

    configure-package ./my-new-package
    python -m configure_package.pipeline ./my-new-package
"""

from __future__ import annotations

import asyncio
import time
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.markup import escape
from rich.panel import Panel

from configure_package.config import Config
from configure_package.features import (
    FeatureCatalog,
    FeatureResolver,
    FileRemover,
    MutationContext,
    default_catalog,
)
from configure_package.identity import GitClient, GitHubClient
from configure_package.manifest import PackageFile
from configure_package.metadata import MetadataCollector, PackageInfo
from configure_package.package_manager import prompt_for_package_manager
from configure_package.prompts import Prompter, is_answer_no
from configure_package.templating import (
    TemplateContext,
    remove_directory,
    remove_template_readme_text,
    substitute_tree,
)
from configure_package.utils import (
    PHASE_NAMES,
    console,
    format_duration,
    print_error,
    print_phase_header,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
)

CONFIRM_PHASE = 4

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class PipelineError(Exception):
    """Raised when a pipeline phase cannot do its job."""

    def __init__(self, phase: int, message: str) -> None:
        self.phase = phase
        super().__init__(f"Phase {phase} ({PHASE_NAMES.get(phase, '?')}): {message}")


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class ConfigurePipeline:
    """Drives the configuration phases for a single template project.

    Attributes:
        config: Run configuration (project root and template conventions).
        info: Package metadata collected in phase 2.
        context: Manifest, removal set and deferred callbacks shared by the
            feature routines, created in phase 3.
        decisions: ``{feature: enabled}`` from phase 3.
        state: Accumulated phase results and failures.
    """

    _PHASE_METHODS: dict[int, str] = {
        1: "phase1_package_manager",
        2: "phase2_metadata",
        3: "phase3_features",
        5: "phase5_save_manifest",
        6: "phase6_deferred_edits",
        7: "phase7_remove_files",
        8: "phase8_substitute",
        9: "phase9_install",
        10: "phase10_format",
        11: "phase11_clean_docs",
        12: "phase12_self_delete",
        13: "phase13_commit",
    }

    def __init__(
        self,
        config: Config,
        prompter: Prompter | None = None,
        git: GitClient | None = None,
        github: GitHubClient | None = None,
        catalog: FeatureCatalog | None = None,
    ) -> None:
        self.config = config
        self.prompter = prompter or Prompter()
        self.git = git or GitClient(config.root_path)
        self.github = github or GitHubClient(
            base_url=config.github_api_url,
            user_agent=config.user_agent,
            timeout=config.github_timeout,
        )
        self.catalog = catalog or default_catalog()
        self.info = PackageInfo(package_manager=config.default_package_manager)
        self.context: MutationContext | None = None
        self.decisions: dict[str, bool] = {}
        self.state: dict[str, Any] = {
            "started_at": datetime.now(timezone.utc).isoformat(),
            "phases_completed": [],
            "phases_failed": [],
            "aborted": False,
            "success": False,
        }

    # ------------------------------------------------------------------
    # Phase dispatch
    # ------------------------------------------------------------------

    async def run(self) -> dict[str, Any]:
        """Execute every phase in order and return the final state."""
        pipeline_start = time.monotonic()

        console.print(
            Panel(
                f"[bold bright_cyan]Template Configuration[/bold bright_cyan]\n"
                f"Project : {escape(str(self.config.root_path))}",
                title="[bold]Configure Package[/bold]",
                border_style="bright_cyan",
            )
        )

        try:
            for phase_num in (1, 2, 3):
                await self._run_phase(phase_num)

            print_phase_header(CONFIRM_PHASE, PHASE_NAMES[CONFIRM_PHASE])
            if not self.confirm():
                self.state["aborted"] = True
                console.print(
                    "» [yellow]Not processing files: action canceled.  Exiting.[/yellow]"
                )
                return self.state

            for phase_num in range(CONFIRM_PHASE + 1, 14):
                await self._run_phase(phase_num)
        finally:
            await self.github.aclose()

        total_elapsed = time.monotonic() - pipeline_start
        self.state["success"] = not self.state["phases_failed"]
        self.state["total_duration"] = format_duration(total_elapsed)
        self.state["finished_at"] = datetime.now(timezone.utc).isoformat()

        self._print_final_summary()
        console.print("[green]✓[/green] Done.")
        return self.state

    async def _run_phase(self, phase_num: int) -> None:
        phase_name = PHASE_NAMES[phase_num]
        print_phase_header(phase_num, phase_name)

        phase_start = time.monotonic()
        try:
            result = await getattr(self, self._PHASE_METHODS[phase_num])()
        except Exception as exc:
            elapsed = time.monotonic() - phase_start
            self.state["phases_failed"].append(phase_num)
            self.state[f"phase{phase_num}_error"] = str(exc)
            print_error(
                f"Phase {phase_num} ({phase_name}) FAILED after "
                f"{format_duration(elapsed)}: {escape(str(exc))}"
            )
            console.print(f"[dim]{escape(traceback.format_exc())}[/dim]")
            return

        self.state[f"phase{phase_num}"] = result
        self.state["phases_completed"].append(phase_num)

    def confirm(self) -> bool:
        """The only gate: answering "no" ends the run before anything is written."""
        console.print()
        answer = self.prompter.ask(
            "[yellow]Process files[/yellow] (this will modify files) \\[Y/n]?"
        )
        return not is_answer_no(answer)

    def _require_context(self, phase: int) -> MutationContext:
        if self.context is None:
            raise PipelineError(phase, "Feature resolution did not complete; nothing to apply")
        return self.context

    # ------------------------------------------------------------------
    # Phases 1-3: gather answers
    # ------------------------------------------------------------------

    async def phase1_package_manager(self) -> dict[str, Any]:
        self.info.package_manager = prompt_for_package_manager(self.config, self.prompter)
        return {"package_manager": self.info.package_manager}

    async def phase2_metadata(self) -> dict[str, Any]:
        collector = MetadataCollector(self.config, self.prompter, self.git, self.github)
        await collector.collect(self.info)
        return self.info.model_dump()

    async def phase3_features(self) -> dict[str, Any]:
        """Resolve every feature against a freshly loaded manifest."""
        root = self.config.root_path
        manifest_path = self.config.manifest_path
        if not manifest_path.is_file():
            raise PipelineError(3, f"Manifest not found: {manifest_path}")

        self.context = MutationContext(
            root=root,
            manifest=PackageFile.load(manifest_path),
            remover=FileRemover(root),
        )
        resolver = FeatureResolver(self.catalog, self.prompter)
        self.decisions = resolver.resolve(self.context)
        return {"features": dict(self.decisions)}

    # ------------------------------------------------------------------
    # Phases 5-7: apply feature decisions
    # ------------------------------------------------------------------

    async def phase5_save_manifest(self) -> dict[str, Any]:
        ctx = self._require_context(5)
        await ctx.manifest.save()
        console.print(f"  Saved [bold]{escape(ctx.manifest.path.name)}[/bold]")
        return {"manifest": str(ctx.manifest.path)}

    async def phase6_deferred_edits(self) -> dict[str, Any]:
        ctx = self._require_context(6)
        count = await ctx.callbacks.run()
        return {"callbacks_run": count}

    async def phase7_remove_files(self) -> dict[str, Any]:
        ctx = self._require_context(7)
        removed = ctx.remover.remove()
        for path in removed:
            console.print(f"  [red]-[/red] {escape(str(path.relative_to(ctx.root)))}")
        return {"removed": [str(path) for path in removed]}

    # ------------------------------------------------------------------
    # Phase 8: substitution
    # ------------------------------------------------------------------

    async def phase8_substitute(self) -> dict[str, Any]:
        context = TemplateContext.from_package_info(self.info, self.config.marker_line)
        results = await substitute_tree(self.config, context)

        failed = [r for r in results if not r.success]
        if failed:
            print_warning(f"  {len(failed)} file(s) could not be processed.")
        return {
            "files": len(results),
            "changed": sum(1 for r in results if r.changed),
            "failed": [str(r.path) for r in failed],
        }

    # ------------------------------------------------------------------
    # Phases 9-13: best-effort finishing steps
    # ------------------------------------------------------------------

    async def _run_checked(self, phase: int, cmd: list[str], capture: bool = False) -> None:
        returncode, _, stderr = await run_command(cmd, cwd=self.config.root_path, capture=capture)
        if returncode != 0:
            detail = f": {stderr[:200]}" if stderr else ""
            raise PipelineError(phase, f"`{' '.join(cmd)}` exited with {returncode}{detail}")

    async def phase9_install(self) -> dict[str, Any]:
        await self._run_checked(9, [self.info.package_manager, "install"])
        return {"installed": True}

    async def phase10_format(self) -> dict[str, Any]:
        await self._run_checked(10, [self.info.package_manager, "run", "fix"])
        return {"formatted": True}

    async def phase11_clean_docs(self) -> dict[str, Any]:
        readme_changed = remove_template_readme_text(
            self.config.readme_path,
            self.config.readme_start_marker,
            self.config.readme_end_marker,
        )
        assets_removed = remove_directory(self.config.assets_path)
        return {"readme_changed": readme_changed, "assets_removed": assets_removed}

    async def phase12_self_delete(self) -> dict[str, Any]:
        entry_point = self.config.entry_point_path
        if not entry_point.exists():
            print_warning(f"  {escape(self.config.entry_point)} not found; nothing to remove.")
            return {"removed": False}

        console.print("» [yellow]Removing this script...[/yellow]", end="")
        entry_point.unlink()
        console.print("done [green]✓[/green]")
        return {"removed": True}

    async def phase13_commit(self) -> dict[str, Any]:
        await self._run_checked(13, ["git", "add", "."], capture=True)
        await self._run_checked(13, ["git", "commit", "-m", self.config.commit_message], capture=True)
        return {"committed": True}

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def _print_final_summary(self) -> None:
        rows: dict[str, str] = {
            "Package": self.info.name or "-",
            "Package manager": self.info.package_manager,
        }
        for name, enabled in self.decisions.items():
            rows[f"Feature: {name}"] = "enabled" if enabled else "disabled"
        rows["Phases completed"] = ", ".join(str(p) for p in self.state["phases_completed"]) or "-"
        rows["Phases failed"] = ", ".join(str(p) for p in self.state["phases_failed"]) or "-"
        rows["Duration"] = self.state.get("total_duration", "-")

        print_summary_table(rows, title="Configuration Summary")
        if self.state["phases_failed"]:
            print_warning("Some phases failed; review the messages above.")
        else:
            print_success("All phases completed.")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """CLI entry point for ``configure-package``."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Configure a package created from the template",
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=None,
        help="Template project root (default: $CONFIGURE_ROOT or the current directory)",
    )
    args = parser.parse_args()

    config = Config.from_env()
    if args.root:
        config.root_dir = Path(args.root)

    asyncio.run(ConfigurePipeline(config).run())


if __name__ == "__main__":
    main()
