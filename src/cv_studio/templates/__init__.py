"""Template registry for CV rendering."""

from __future__ import annotations

from cv_studio.templates.base import CVTemplate, RenderContext
from cv_studio.templates.classic import (
    Classic2Template,
    Classic3Template,
    Classic4Template,
    ClassicTemplate,
)
from cv_studio.templates.creative import (
    Creative2Template,
    Creative3Template,
    CreativeTemplate,
)
from cv_studio.templates.minimal import (
    Minimal2Template,
    Minimal3Template,
    Minimal4Template,
    MinimalTemplate,
)
from cv_studio.templates.modern import (
    Modern2Template,
    Modern3Template,
    Modern4Template,
    ModernTemplate,
)

__all__ = [
    "DEFAULT_TEMPLATE_ID",
    "CVTemplate",
    "RenderContext",
    "get_template",
    "list_templates",
]

DEFAULT_TEMPLATE_ID = "classic"

_REGISTRY: dict[str, CVTemplate] = {
    template.template_id: template
    for template in (
        ClassicTemplate(),
        Classic2Template(),
        Classic3Template(),
        Classic4Template(),
        ModernTemplate(),
        Modern2Template(),
        Modern3Template(),
        Modern4Template(),
        MinimalTemplate(),
        Minimal2Template(),
        Minimal3Template(),
        Minimal4Template(),
        CreativeTemplate(),
        Creative2Template(),
        Creative3Template(),
    )
}


def get_template(template_id: str) -> CVTemplate:
    """Return the template registered under *template_id*.

    Raises:
        ValueError: If no template with that id exists.
    """
    try:
        return _REGISTRY[template_id]
    except KeyError:
        available = ", ".join(sorted(_REGISTRY))
        msg = f"Unknown template {template_id!r}. Available: {available}"
        raise ValueError(msg) from None


def list_templates() -> list[str]:
    """Return sorted ids of all registered templates."""
    return sorted(_REGISTRY)
