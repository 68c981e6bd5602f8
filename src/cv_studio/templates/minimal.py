"""Minimal CV templates: generous whitespace, light headings, no page frame."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cv_studio.models.style_settings import StyleSettings
from cv_studio.rendering.layout import Row
from cv_studio.templates.base import CVTemplate, capitalize_title

if TYPE_CHECKING:
    from cv_studio.rendering.surface import PageSurface
    from cv_studio.templates.base import RenderContext

__all__ = [
    "Minimal2Template",
    "Minimal3Template",
    "Minimal4Template",
    "MinimalTemplate",
]


class MinimalTemplate(CVTemplate):
    template_id = "minimal"
    name = "Minimal"
    family = "minimal"
    default_style = StyleSettings(
        body_font_family="lato",
        heading_font_family="lato",
        border_mode="none",
        headings_line=False,
        name_bold=False,
        capitalization="capitalize",
        margin_left_right_mm=20,
        margin_top_bottom_mm=20,
        space_between_entries_px=16,
    )

    def compose(self, ctx: RenderContext) -> list[PageSurface]:
        return self.compose_single_column(ctx)

    def section_title_rows(self, ctx: RenderContext, title: str, width: float) -> list[Row]:
        # Headings sit a step below the configured heading size.
        font = ctx.heading(size=round(ctx.style.heading_font_size_px * 0.8))
        icon_ops, icon_width = self.section_icon_ops(ctx, font.size * 1.2)
        rows = self.paragraph(
            ctx,
            capitalize_title(title, ctx.style.capitalization),
            width,
            font=font,
            color=ctx.palette.heading,
            indent=icon_width + 6 if icon_width else 0.0,
            line_height=1.2,
        )
        rows = self.with_leading_ops(rows, icon_ops)
        if ctx.style.headings_line:
            rows.append(self.rule_row(ctx.palette.headings_line, width, thickness=0.5, pad=2))
        rows.append(Row(6))
        return rows


class Minimal2Template(MinimalTemplate):
    template_id = "minimal-2"
    name = "Minimal Centered"
    month_style = "abbreviated"
    default_style = StyleSettings(
        body_font_family="open-sans",
        heading_font_family="open-sans",
        border_mode="none",
        headings_line=False,
        align="center",
        capitalization="uppercase",
        heading_font_size_px=16,
    )


class Minimal3Template(MinimalTemplate):
    """Hyphen lists and proficiency bubbles."""

    template_id = "minimal-3"
    name = "Minimal Compact"
    default_style = StyleSettings(
        body_font_family="system-sans",
        heading_font_family="system-sans",
        border_mode="none",
        headings_line=True,
        entry_list_style="hyphen",
        dots_bars_bubbles="bubbles",
        line_height=1.25,
        margin_left_right_mm=12,
        margin_top_bottom_mm=12,
    )


class Minimal4Template(MinimalTemplate):
    template_id = "minimal-4"
    name = "Minimal Mono"
    month_style = "abbreviated"
    default_style = StyleSettings(
        body_font_family="mono",
        heading_font_family="mono",
        body_font_size_px=11,
        border_mode="none",
        headings_line=False,
        name_bold=True,
        section_header_icon_style="dot",
        bullet_style="none",
        description_indent_px=0,
    )
