"""Modern CV templates.

A tinted header band spans the top of the first page with the profile
picture on the right. Section headings carry a short accent rule instead of
a full-width line. The band is always the first thing on the page, so these
variants pin ``personalInfo`` to the front of the section order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cv_studio.models.style_settings import StyleSettings
from cv_studio.rendering.layout import Block, Row
from cv_studio.rendering.surface import PAGE_WIDTH_PX, ImageOp, LineOp, RectOp
from cv_studio.templates.base import CVTemplate, capitalize_title
from cv_studio.utils.colors import tint

if TYPE_CHECKING:
    from cv_studio.rendering.surface import DrawOp, PageSurface
    from cv_studio.templates.base import RenderContext

__all__ = [
    "Modern2Template",
    "Modern3Template",
    "Modern4Template",
    "ModernTemplate",
]

_BAND_PADDING = 20.0
_PHOTO_SIZE = 96.0


class ModernTemplate(CVTemplate):
    """Blue accent band, abbreviated months, outline contact icons."""

    template_id = "modern"
    name = "Modern"
    family = "modern"
    month_style = "abbreviated"
    default_style = StyleSettings(
        accent_color="#2563eb",
        border_mode="none",
        header_icons="outline",
        link_icons="outline",
        apply_accent_to_headings=True,
        heading_font_size_px=18,
    )

    def compose(self, ctx: RenderContext) -> list[PageSurface]:
        sections = ["personalInfo", *(s for s in ctx.sections if s != "personalInfo")]
        return self.compose_single_column(ctx, sections)

    def personal_info_blocks(self, ctx: RenderContext, width: float) -> list[Block]:
        photo = ctx.data.personal_info.profile_picture.strip()
        photo_size = _PHOTO_SIZE if photo else 0.0
        inner = self.header_rows(ctx, width - (photo_size + 16 if photo else 0.0))
        inner_height = sum(row.height for row in inner)
        body_height = max(inner_height, photo_size)
        band_height = ctx.margin_y + 2 * _BAND_PADDING + body_height

        band: list[DrawOp] = [
            RectOp(
                -ctx.margin_x,
                -ctx.margin_y,
                PAGE_WIDTH_PX,
                band_height,
                fill=tint(ctx.palette.accent, 0.12),
            ),
            RectOp(-ctx.margin_x, -ctx.margin_y, 6, band_height, fill=ctx.palette.accent),
        ]
        if photo:
            picture = ImageOp(
                width - photo_size, _BAND_PADDING, photo_size, photo_size, photo, circular=True
            )
            band.append(picture)

        rows = [Row(_BAND_PADDING, tuple(band)), *inner]
        if body_height > inner_height:
            rows.append(Row(body_height - inner_height))
        rows.append(Row(_BAND_PADDING + ctx.style.space_between_entries_px))
        blocks = [Block("personalInfo", tuple(rows))]
        blocks.extend(self.summary_blocks(ctx, width))
        return blocks

    def section_title_rows(self, ctx: RenderContext, title: str, width: float) -> list[Row]:
        font = ctx.heading()
        line = font.size * 1.2
        icon_ops, icon_width = self.section_icon_ops(ctx, line)
        rows = self.paragraph(
            ctx,
            capitalize_title(title, ctx.style.capitalization),
            width,
            font=font,
            color=ctx.palette.heading,
            indent=icon_width + 8 if icon_width else 0.0,
            line_height=1.2,
        )
        rows = self.with_leading_ops(rows, icon_ops)
        if ctx.style.headings_line:
            rows.append(Row(7, (LineOp(0, 4, 48, 4, ctx.palette.headings_line, 3),)))
        rows.append(Row(8))
        return rows


class Modern2Template(ModernTemplate):
    """Teal band on one continuous sheet; bar proficiency markers."""

    template_id = "modern-2"
    name = "Modern Continuous"
    paginated = False
    default_style = StyleSettings(
        accent_color="#0f766e",
        border_mode="none",
        header_icons="filled",
        dots_bars_bubbles="bars",
        apply_accent_to_dots_bars_bubbles=True,
        show_page_numbers=False,
    )


class Modern3Template(ModernTemplate):
    """Violet band, framed icons, bar section markers."""

    template_id = "modern-3"
    name = "Modern Iconic"
    default_style = StyleSettings(
        accent_color="#7c3aed",
        border_mode="none",
        header_icons="filled",
        icon_frame="circle-outline",
        icon_size="md",
        section_header_icon_style="bar",
        apply_accent_to_header_icons=True,
        apply_accent_to_job_title=True,
    )


class Modern4Template(ModernTemplate):
    """Red band, Roboto, full month names."""

    template_id = "modern-4"
    name = "Modern Bold"
    month_style = "full"
    default_style = StyleSettings(
        body_font_family="roboto",
        heading_font_family="roboto",
        accent_color="#b91c1c",
        border_mode="single",
        apply_accent_to_name=True,
        apply_accent_to_dates=True,
        heading_font_size_px=20,
    )
