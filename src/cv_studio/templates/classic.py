"""Classic CV templates.

Single column, ruled section headings, name and contacts on top. The
variants differ in typography, alignment and month labels; ``classic-3``
renders one continuous sheet instead of A4 pages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cv_studio.models.style_settings import StyleSettings
from cv_studio.templates.base import CVTemplate

if TYPE_CHECKING:
    from cv_studio.rendering.surface import PageSurface
    from cv_studio.templates.base import RenderContext

__all__ = [
    "Classic2Template",
    "Classic3Template",
    "Classic4Template",
    "ClassicTemplate",
]


class ClassicTemplate(CVTemplate):
    """Inter body, uppercase ruled headings, full month names."""

    template_id = "classic"
    name = "Classic"
    family = "classic"
    default_style = StyleSettings()

    def compose(self, ctx: RenderContext) -> list[PageSurface]:
        return self.compose_single_column(ctx)


class Classic2Template(ClassicTemplate):
    """Serif, centered header, abbreviated months."""

    template_id = "classic-2"
    name = "Classic Serif"
    month_style = "abbreviated"
    default_style = StyleSettings(
        body_font_family="system-serif",
        heading_font_family="system-serif",
        align="center",
        bullet_style="circle",
        heading_font_size_px=18,
    )


class Classic3Template(ClassicTemplate):
    """Compact continuous sheet without page boundaries."""

    template_id = "classic-3"
    name = "Classic Continuous"
    paginated = False
    default_style = StyleSettings(
        heading_font_size_px=18,
        space_between_entries_px=10,
        show_page_numbers=False,
        border_mode="none",
    )


class Classic4Template(ClassicTemplate):
    """Double-framed page, capitalized headings with a square marker."""

    template_id = "classic-4"
    name = "Classic Framed"
    month_style = "abbreviated"
    date_separator = " to "
    default_style = StyleSettings(
        body_font_family="serif",
        heading_font_family="system-serif",
        capitalization="capitalize",
        border_mode="multi",
        border_color="#9ca3af",
        bullet_style="square",
        section_header_icon_style="square",
    )
