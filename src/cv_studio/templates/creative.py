"""Creative CV templates with a tinted sidebar.

The sidebar carries the profile picture, contact details, skills, languages
and interests; everything else flows in the main column. Both columns are
paginated independently and the document has as many pages as the longer
of the two.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Literal

from cv_studio.constants.style_constants import ICON_SIZE_PX
from cv_studio.models.style_settings import StyleSettings
from cv_studio.rendering.layout import Block, Row, flow_height, paginate, place_rows, stack_rows
from cv_studio.rendering.surface import PAGE_HEIGHT_PX, PAGE_WIDTH_PX, IconOp, ImageOp, RectOp
from cv_studio.templates.base import CVTemplate
from cv_studio.utils.colors import tint

if TYPE_CHECKING:
    from cv_studio.rendering.layout import PlacedRow
    from cv_studio.rendering.surface import DrawOp, PageSurface
    from cv_studio.templates.base import RenderContext

__all__ = [
    "Creative2Template",
    "Creative3Template",
    "CreativeTemplate",
]

SIDEBAR_SECTIONS = frozenset({"skills", "languages", "interests"})

_SIDEBAR_PADDING = 20.0
_PHOTO_SIZE = 110.0


class CreativeTemplate(CVTemplate):
    """Left pink sidebar, bubble proficiency markers."""

    template_id = "creative"
    name = "Creative"
    family = "creative"
    month_style = "abbreviated"
    sidebar_side: ClassVar[Literal["left", "right"]] = "left"
    sidebar_fraction: ClassVar[float] = 0.34
    sidebar_tint: ClassVar[float] = 0.1
    default_style = StyleSettings(
        accent_color="#db2777",
        border_mode="none",
        dots_bars_bubbles="bubbles",
        apply_accent_to_dots_bars_bubbles=True,
        apply_accent_to_headings_line=True,
        header_icons="filled",
        heading_font_size_px=18,
        margin_left_right_mm=12,
    )

    def compose(self, ctx: RenderContext) -> list[PageSurface]:
        sidebar_width = round(PAGE_WIDTH_PX * self.sidebar_fraction)
        gutter = ctx.margin_x
        if self.sidebar_side == "left":
            sidebar_x = 0.0
            main_x = sidebar_width + gutter
        else:
            sidebar_x = float(PAGE_WIDTH_PX - sidebar_width)
            main_x = gutter
        main_width = PAGE_WIDTH_PX - sidebar_width - 2 * gutter
        side_width = sidebar_width - 2 * _SIDEBAR_PADDING
        side_x = sidebar_x + _SIDEBAR_PADDING

        sections = ctx.sections
        main_blocks = self.flow_blocks(
            ctx, [s for s in sections if s not in SIDEBAR_SECTIONS], main_width
        )
        side_blocks = self.sidebar_profile_blocks(ctx, side_width)
        side_sections = self.flow_blocks(
            ctx, [s for s in sections if s in SIDEBAR_SECTIONS], side_width
        )
        if side_blocks and side_sections:
            side_blocks.append(Block.gap("sidebar-gap", ctx.style.space_between_entries_px + 8))
        side_blocks.extend(side_sections)

        fill = tint(ctx.palette.accent, self.sidebar_tint)

        if not self.paginated:
            height = max(
                float(PAGE_HEIGHT_PX),
                max(flow_height(main_blocks), flow_height(side_blocks)) + 2 * ctx.margin_y,
            )
            ops = place_rows(stack_rows(main_blocks), main_x, ctx.margin_y)
            ops += place_rows(stack_rows(side_blocks), side_x, ctx.margin_y)
            underlay: list[DrawOp] = [RectOp(sidebar_x, 0, sidebar_width, height, fill=fill)]
            return [
                self.page_surface(ctx, ops, height=height, is_page=False, underlay=underlay)
            ]

        main_pages = paginate(main_blocks, ctx.content_height)
        side_pages = paginate(side_blocks, ctx.content_height)
        count = 1 if ctx.is_preview else max(len(main_pages), len(side_pages))

        surfaces: list[PageSurface] = []
        for index in range(count):
            ops = place_rows(_page(main_pages, index), main_x, ctx.margin_y)
            ops += place_rows(_page(side_pages, index), side_x, ctx.margin_y)
            underlay = [RectOp(sidebar_x, 0, sidebar_width, PAGE_HEIGHT_PX, fill=fill)]
            surfaces.append(
                self.page_surface(ctx, ops, index=index, count=count, underlay=underlay)
            )
        return surfaces

    def personal_info_blocks(self, ctx: RenderContext, width: float) -> list[Block]:
        rows = self.header_rows(ctx, width, include_contacts=False)
        if ctx.style.headings_line:
            rows.append(self.rule_row(ctx.palette.headings_line, width, thickness=2, pad=8))
        blocks = [Block("personalInfo", tuple(rows))]
        summary = self.summary_blocks(ctx, width)
        if summary:
            blocks.append(Block.gap("summary-gap", ctx.style.space_between_entries_px))
            blocks.extend(summary)
        return blocks

    def sidebar_profile_blocks(self, ctx: RenderContext, width: float) -> list[Block]:
        """Profile picture and one contact per line."""
        blocks: list[Block] = []
        photo = ctx.data.personal_info.profile_picture.strip()
        if photo:
            x = (width - _PHOTO_SIZE) / 2
            image = ImageOp(x, 0, _PHOTO_SIZE, _PHOTO_SIZE, photo, circular=True)
            blocks.append(Block("photo", (Row(_PHOTO_SIZE + 16, (image,)),)))

        items = self.contact_items(ctx)
        if not items:
            return blocks

        show_icons = ctx.style.header_icons != "none"
        icon_size = float(ICON_SIZE_PX[ctx.style.icon_size])
        indent = icon_size + 6 if show_icons else 0.0
        rows = self.section_title_rows(ctx, "Contact", width)
        for item in items:
            item_rows = self.paragraph(ctx, item.text, width, indent=indent, link=item.link)
            if show_icons and item_rows:
                icon = IconOp(
                    kind=item.kind,  # type: ignore[arg-type]
                    x=0,
                    y=(item_rows[0].height - icon_size) / 2,
                    size=icon_size,
                    color=ctx.palette.header_icons,
                    fill=ctx.style.header_icons,  # type: ignore[arg-type]
                    frame=ctx.style.icon_frame,
                )
                item_rows = self.with_leading_ops(item_rows, (icon,))
            rows += item_rows
            rows.append(Row(4))
        blocks.append(Block("contact", tuple(rows)))
        return blocks


def _page(pages: list[list[PlacedRow]], index: int) -> list[PlacedRow]:
    return pages[index] if index < len(pages) else []


class Creative2Template(CreativeTemplate):
    """Right cyan sidebar, bar markers, full month names."""

    template_id = "creative-2"
    name = "Creative Right"
    month_style = "full"
    sidebar_side = "right"
    sidebar_fraction = 0.32
    default_style = StyleSettings(
        accent_color="#0891b2",
        border_mode="none",
        dots_bars_bubbles="bars",
        apply_accent_to_dots_bars_bubbles=True,
        header_icons="outline",
        link_icons="outline",
        section_header_icon_style="circle-outline",
        heading_font_size_px=18,
        margin_left_right_mm=12,
    )


class Creative3Template(CreativeTemplate):
    """Wide orange sidebar, dot markers, square section icons."""

    template_id = "creative-3"
    name = "Creative Bold"
    sidebar_fraction = 0.36
    sidebar_tint = 0.16
    default_style = StyleSettings(
        body_font_family="open-sans",
        heading_font_family="open-sans",
        accent_color="#ea580c",
        border_mode="single",
        dots_bars_bubbles="dots",
        apply_accent_to_dots_bars_bubbles=True,
        apply_accent_to_name=True,
        header_icons="filled",
        icon_frame="rounded-filled",
        section_header_icon_style="square",
        heading_font_size_px=18,
        margin_left_right_mm=12,
    )
