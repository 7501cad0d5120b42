"""Project manifest editing: command-chain filtering and structured mutation.

Quick usage::

    from configure_package.manifest import PackageFile

    pkg = PackageFile.load("package.json")
    pkg.remove_dependencies("eslint").filter_scripts("eslint").filter_lint_staged("eslint")
    await pkg.save()
"""

from configure_package.manifest.filters import filter_lint_pipeline, filter_script
from configure_package.manifest.package_file import PackageFile

__all__ = [
    "PackageFile",
    "filter_lint_pipeline",
    "filter_script",
]
