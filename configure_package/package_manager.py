"""Package-manager detection and selection."""

from __future__ import annotations

from configure_package.config import Config
from configure_package.prompts import Prompter
from configure_package.utils import print_warning


def detect_package_manager(config: Config) -> str:
    """Return the first manager whose lockfile exists in the project root."""
    for name, lockfile in config.lockfiles.items():
        if (config.root_path / lockfile).exists():
            return name
    return config.default_package_manager


def prompt_for_package_manager(config: Config, prompter: Prompter) -> str:
    """Ask for the preferred manager until the answer is one we support."""
    names = sorted(config.package_managers)
    default = detect_package_manager(config)

    while True:
        answer = prompter.ask("preferred package manager:", default).strip()
        if answer in names:
            return answer
        print_warning(f"» Invalid package manager, accepted values: {', '.join(names)}.")
