"""forgekit scaffolder -- the steps that generate and configure projects.

Quick usage::

    from pathlib import Path

    from forgekit.models import Language
    from forgekit.scaffolder import TemplateRenderer, recipes

    renderer = TemplateRenderer()
    step = recipes.tailwind_vite_step(Path("."), "demo", Language.TS, renderer)
    result = await step.run()
"""

from forgekit.scaffolder import recipes
from forgekit.scaffolder.templates import TemplateRenderer

__all__ = [
    "TemplateRenderer",
    "recipes",
]
