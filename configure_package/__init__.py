"""Interactive configurator for packages created from a template.

Quick usage::

    from configure_package import Config, ConfigurePipeline

    state = await ConfigurePipeline(Config(root_dir=Path("./my-package"))).run()
"""

from configure_package.config import Config
from configure_package.pipeline import ConfigurePipeline, PipelineError

__all__ = [
    "Config",
    "ConfigurePipeline",
    "PipelineError",
]
