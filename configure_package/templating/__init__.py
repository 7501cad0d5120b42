"""Template placeholder substitution and template-only content cleanup."""

from configure_package.templating.cleanup import (
    remove_directory,
    remove_template_readme_text,
    strip_template_block,
)
from configure_package.templating.substitution import (
    SubstitutionResult,
    TemplateContext,
    collect_template_files,
    substitute,
    substitute_tree,
)

__all__ = [
    "SubstitutionResult",
    "TemplateContext",
    "collect_template_files",
    "remove_directory",
    "remove_template_readme_text",
    "strip_template_block",
    "substitute",
    "substitute_tree",
]
