"""Feature resolution: ask about each feature and clean up the ones turned off."""

from __future__ import annotations

from configure_package.features.catalog import FeatureCatalog
from configure_package.features.models import FeatureDescriptor, FeatureState, MutationContext
from configure_package.prompts import Prompter


class FeatureResolver:
    """Walks a ``FeatureCatalog`` in declaration order.

    A feature whose prerequisites are not all enabled is disabled without
    asking. A feature already disabled by another feature's routine is not
    asked either. Every disabled feature has its routine run exactly once,
    so cleanup for dependent features always happens.
    """

    def __init__(self, catalog: FeatureCatalog, prompter: Prompter) -> None:
        self.catalog = catalog
        self.prompter = prompter
        self._cleaned: set[str] = set()

    def resolve(self, ctx: MutationContext) -> dict[str, bool]:
        """Decide every feature and return ``{name: enabled}`` in catalog order."""
        state = ctx.state

        for feature in self.catalog:
            if state.get(feature.name) is FeatureState.DISABLED:
                self._disable(feature, ctx)
                continue

            eligible = all(state.is_enabled(dep) for dep in feature.depends_on)
            enabled = eligible and self.prompter.ask_boolean(feature.prompt, feature.prompt_default)
            state.record(feature.name, enabled)

            if not enabled:
                self._disable(feature, ctx)

        decisions = state.as_dict()
        return {name: decisions[name] for name in self.catalog.names()}

    def _disable(self, feature: FeatureDescriptor, ctx: MutationContext) -> None:
        if feature.name in self._cleaned:
            return
        self._cleaned.add(feature.name)
        ctx.state.disable(feature.name)
        feature.disable(ctx)

        # Features the routine just turned off get their own cleanup now.
        for name in ctx.state.disabled():
            if name in self.catalog:
                self._disable(self.catalog[name], ctx)
