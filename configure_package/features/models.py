"""Data model for optional project features and their shared mutation context."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Union

from configure_package.manifest import PackageFile


class FeatureCatalogError(Exception):
    """Raised when the feature catalog itself is malformed."""


class FeatureState(str, Enum):
    UNRESOLVED = "unresolved"
    ENABLED = "enabled"
    DISABLED = "disabled"


DeferredCallback = Callable[[], Union[None, Awaitable[None]]]


class ResolutionState:
    """Decision per feature name, shared by reference with every disable routine.

    A routine may disable another feature through :meth:`disable`; the
    resolver then runs that feature's own routine and never prompts for it.
    """

    def __init__(self) -> None:
        self._decisions: dict[str, FeatureState] = {}

    def get(self, name: str) -> FeatureState:
        return self._decisions.get(name, FeatureState.UNRESOLVED)

    def record(self, name: str, enabled: bool) -> None:
        self._decisions[name] = FeatureState.ENABLED if enabled else FeatureState.DISABLED

    def disable(self, name: str) -> None:
        self._decisions[name] = FeatureState.DISABLED

    def is_enabled(self, name: str) -> bool:
        state = self.get(name)
        if state is FeatureState.UNRESOLVED:
            raise FeatureCatalogError(f"Feature '{name}' was read before it was resolved")
        return state is FeatureState.ENABLED

    def disabled(self) -> list[str]:
        return [name for name, state in self._decisions.items() if state is FeatureState.DISABLED]

    def as_dict(self) -> dict[str, bool]:
        return {
            name: state is FeatureState.ENABLED
            for name, state in self._decisions.items()
            if state is not FeatureState.UNRESOLVED
        }


class FileRemover:
    """Paths scheduled for deletion, removed together in one pass."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).resolve()
        self._paths: list[Path] = []

    def add(self, *paths: str | Path) -> "FileRemover":
        for path in paths:
            resolved = (self.root / path).resolve()
            if resolved not in self._paths:
                self._paths.append(resolved)
        return self

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    def remove(self) -> list[Path]:
        """Delete every scheduled file that exists and return the removed paths."""
        removed: list[Path] = []
        for path in self._paths:
            if path.is_file() or path.is_symlink():
                path.unlink()
                removed.append(path)
        self._paths = []
        return removed


class CallbackQueue:
    """FIFO of zero-argument actions run after the manifest has been saved."""

    def __init__(self) -> None:
        self._queue: list[DeferredCallback] = []

    def add(self, *callbacks: DeferredCallback) -> "CallbackQueue":
        self._queue.extend(callbacks)
        return self

    def __len__(self) -> int:
        return len(self._queue)

    async def run(self) -> int:
        """Run and discard every queued callback in insertion order."""
        count = 0
        while self._queue:
            callback = self._queue.pop(0)
            result = callback()
            if inspect.isawaitable(result):
                await result
            count += 1
        return count


@dataclass
class MutationContext:
    """Collaborators shared by every feature's disable routine for one run."""

    root: Path
    manifest: PackageFile
    remover: FileRemover
    callbacks: CallbackQueue = field(default_factory=CallbackQueue)
    state: ResolutionState = field(default_factory=ResolutionState)


DisableRoutine = Callable[[MutationContext], None]


@dataclass(frozen=True)
class FeatureDescriptor:
    """An optional capability the user can opt out of.

    ``default`` is ``None`` when the feature declares no default answer; the
    prompt then defaults to yes.
    """

    name: str
    prompt: str
    disable: DisableRoutine
    default: bool | None = None
    depends_on: tuple[str, ...] = ()

    @property
    def prompt_default(self) -> bool:
        return True if self.default is None else self.default
