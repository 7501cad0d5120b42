"""Optional template features and their dependency-ordered resolution.

Quick usage::

    from configure_package.features import FeatureResolver, MutationContext, default_catalog

    ctx = MutationContext(root=root, manifest=pkg, remover=FileRemover(root))
    decisions = FeatureResolver(default_catalog(), prompter).resolve(ctx)
"""

from configure_package.features.catalog import FeatureCatalog, default_catalog
from configure_package.features.models import (
    CallbackQueue,
    FeatureCatalogError,
    FeatureDescriptor,
    FeatureState,
    FileRemover,
    MutationContext,
    ResolutionState,
)
from configure_package.features.resolver import FeatureResolver

__all__ = [
    "CallbackQueue",
    "FeatureCatalog",
    "FeatureCatalogError",
    "FeatureDescriptor",
    "FeatureResolver",
    "FeatureState",
    "FileRemover",
    "MutationContext",
    "ResolutionState",
    "default_catalog",
]
