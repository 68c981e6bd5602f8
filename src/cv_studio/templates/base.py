"""Abstract base class and shared composition helpers for CV layout variants.

A variant turns one :class:`~cv_studio.models.cv_data.CVData` snapshot and a
resolved :class:`~cv_studio.models.style_settings.StyleSettings` into page
surfaces. The base class owns everything the variants agree on (section and
field ordering, palette rules, entry layouts, pagination and page chrome);
variants override the hooks that give them their look.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Literal

from cv_studio.constants.sections import (
    DEFAULT_PERSONAL_INFO_FIELD_ORDER,
    DEFAULT_SECTION_ORDER,
    PERSONAL_INFO_FIELDS,
    PROFICIENCY_LEVELS,
    SECTION_IDS,
    SECTION_TITLES,
)
from cv_studio.constants.style_constants import ICON_SIZE_PX
from cv_studio.models.style_settings import StyleSettings, resolve_style
from cv_studio.rendering.fonts import text_width
from cv_studio.rendering.layout import (
    Alignment,
    Block,
    Row,
    Run,
    flow_height,
    paginate,
    place_rows,
    stack_rows,
    text_rows,
)
from cv_studio.rendering.surface import (
    MM_TO_PX,
    PAGE_HEIGHT_PX,
    PAGE_WIDTH_PX,
    DrawOp,
    EllipseOp,
    FontSpec,
    IconOp,
    LineOp,
    PageBorder,
    PageSurface,
    RectOp,
    TextOp,
)
from cv_studio.utils.colors import tint
from cv_studio.utils.dates import MonthStyle, format_date, format_date_range

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from cv_studio.models.cv_data import CVData

__all__ = [
    "ContactItem",
    "CVTemplate",
    "Palette",
    "RenderContext",
    "capitalize_title",
    "resolve_field_order",
    "resolve_sections",
    "strip_protocol",
]

Family = Literal["classic", "modern", "minimal", "creative"]

_MARKER_TRACK = "#e5e7eb"
_LINK_BLUE = "#3b82f6"
_PAGE_NUMBER_SIZE = 10
_FOOTER_RESERVE = 24.0
_ICON_GAP = 4.0
_INLINE_GAP = 14.0
_PROTOCOL = re.compile(r"^(?:https?://)?(?:www\.)?", re.IGNORECASE)

_CONTACT_FIELDS = ("email", "phone", "location", "address", "linkedin", "github")


# ----------------------------------------------------------------------
# Ordering
# ----------------------------------------------------------------------


def _has_content(data: CVData, section: str) -> bool:
    if section == "personalInfo":
        return True
    if section == "skills":
        return bool(data.skills.technical or data.skills.soft)
    if section == "interests":
        return bool(data.additional.interests)
    return bool(getattr(data, section))


def resolve_sections(data: CVData) -> list[str]:
    """Return the sections to render, in order.

    Unknown ids are ignored and duplicates collapse to their first
    occurrence. An empty order means the default order; otherwise only the
    listed sections render. Hidden sections and sections without content are
    dropped. ``personalInfo`` always renders and leads when it is not listed.
    """
    requested = data.section_order or list(DEFAULT_SECTION_ORDER)
    ordered: list[str] = []
    for section in requested:
        if section in SECTION_IDS and section not in ordered:
            ordered.append(section)
    if "personalInfo" not in ordered:
        ordered.insert(0, "personalInfo")
    hidden = set(data.hidden_sections) - {"personalInfo"}
    return [s for s in ordered if s not in hidden and _has_content(data, s)]


def resolve_field_order(data: CVData) -> list[str]:
    """Personal-info fields in display order; name and job title always lead if unlisted."""
    ordered: list[str] = []
    for field_id in data.personal_info_field_order or DEFAULT_PERSONAL_INFO_FIELD_ORDER:
        if field_id in PERSONAL_INFO_FIELDS and field_id not in ordered:
            ordered.append(field_id)
    for required in ("jobTitle", "fullName"):
        if required not in ordered:
            ordered.insert(0, required)
    return ordered


def strip_protocol(url: str) -> str:
    """``https://www.github.com/x/`` -> ``github.com/x``."""
    return _PROTOCOL.sub("", url.strip()).rstrip("/")


def _absolute_url(url: str) -> str:
    url = url.strip()
    if not url or "://" in url or url.startswith("mailto:"):
        return url
    return f"https://{url}"


def capitalize_title(title: str, capitalization: str) -> str:
    if capitalization == "uppercase":
        return title.upper()
    return " ".join(word[:1].upper() + word[1:] for word in title.split(" "))


# ----------------------------------------------------------------------
# Render context
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class Palette:
    """Colors of every visual target after the accent flags are applied."""

    text: str
    muted: str
    background: str
    accent: str
    border: str
    name: str
    heading: str
    job_title: str
    headings_line: str
    header_icons: str
    markers: str
    marker_track: str
    dates: str
    link_icons: str
    bullets: str

    @classmethod
    def from_style(cls, style: StyleSettings) -> Palette:
        accent = style.accent_color

        def pick(flag: bool, fallback: str) -> str:
            return accent if flag else fallback

        heading = pick(style.apply_accent_to_headings, style.heading_color)
        return cls(
            text=style.text_color,
            muted=style.muted_color,
            background=style.background_color,
            accent=accent,
            border=style.border_color,
            name=pick(style.apply_accent_to_name, heading),
            heading=heading,
            job_title=pick(style.apply_accent_to_job_title, style.text_color),
            headings_line=pick(style.apply_accent_to_headings_line, style.border_color),
            header_icons=pick(style.apply_accent_to_header_icons, style.muted_color),
            markers=pick(style.apply_accent_to_dots_bars_bubbles, style.muted_color),
            marker_track=_MARKER_TRACK,
            dates=pick(style.apply_accent_to_dates, style.muted_color),
            link_icons=pick(style.apply_accent_to_link_icons, _LINK_BLUE),
            bullets=accent,
        )


@dataclass(frozen=True)
class ContactItem:
    kind: str
    text: str
    link: str = ""


@dataclass(frozen=True)
class RenderContext:
    """Everything a variant needs for one render call."""

    data: CVData
    style: StyleSettings
    palette: Palette
    month_style: MonthStyle
    is_preview: bool = False
    date_separator: str = " - "

    @property
    def margin_x(self) -> float:
        return self.style.margin_left_right_mm * MM_TO_PX

    @property
    def margin_y(self) -> float:
        return self.style.margin_top_bottom_mm * MM_TO_PX

    @property
    def content_height(self) -> float:
        reserve = _FOOTER_RESERVE if self.style.show_page_numbers else 0.0
        return PAGE_HEIGHT_PX - 2 * self.margin_y - reserve

    @property
    def line_height(self) -> float:
        return self.style.line_height

    @property
    def sections(self) -> list[str]:
        return resolve_sections(self.data)

    @property
    def field_order(self) -> list[str]:
        return resolve_field_order(self.data)

    def body(self, *, bold: bool = False, size: float | None = None) -> FontSpec:
        return FontSpec(self.style.body_font_family, size or self.style.body_font_size_px, bold)

    def heading(self, *, bold: bool = True, size: float | None = None) -> FontSpec:
        return FontSpec(
            self.style.heading_font_family, size or self.style.heading_font_size_px, bold
        )

    @property
    def name_size(self) -> int:
        return round(self.style.heading_font_size_px * 1.6)

    @property
    def job_title_size(self) -> int:
        return round(self.style.heading_font_size_px * 1.05)

    @property
    def entry_title_size(self) -> int:
        return round(self.style.body_font_size_px * 1.25)

    def date(self, raw: str) -> str:
        return format_date(raw, self.month_style)

    def date_range(self, start: str, end: str, current: bool = False) -> str:
        return format_date_range(start, end, current, self.month_style, self.date_separator)


# ----------------------------------------------------------------------
# Template base
# ----------------------------------------------------------------------


class CVTemplate(ABC):
    """Interface that every CV layout variant implements.

    Subclasses set the class attributes and implement :meth:`compose`.
    """

    template_id: ClassVar[str]
    name: ClassVar[str]
    family: ClassVar[Family]
    paginated: ClassVar[bool] = True
    month_style: ClassVar[MonthStyle] = "full"
    date_separator: ClassVar[str] = " - "
    default_style: ClassVar[StyleSettings] = StyleSettings()

    def render(
        self,
        data: CVData,
        style: StyleSettings | Mapping[str, Any] | None = None,
        is_preview: bool = False,
    ) -> list[PageSurface]:
        """Render *data* into one or more page surfaces.

        *style* wins over ``data.style_settings``; whichever is used only
        overrides the fields it sets explicitly on top of the variant's
        :attr:`default_style`. ``is_preview`` yields just the first page,
        without page numbers.
        """
        ctx = self.build_context(data, style, is_preview)
        surfaces = self.compose(ctx)
        if is_preview:
            surfaces = surfaces[:1]
        return surfaces

    def build_context(
        self,
        data: CVData,
        style: StyleSettings | Mapping[str, Any] | None = None,
        is_preview: bool = False,
    ) -> RenderContext:
        chosen = style if style is not None else data.style_settings
        resolved = resolve_style(self.default_style, chosen)
        return RenderContext(
            data=data,
            style=resolved,
            palette=Palette.from_style(resolved),
            month_style=self.month_style,
            is_preview=is_preview,
            date_separator=self.date_separator,
        )

    @abstractmethod
    def compose(self, ctx: RenderContext) -> list[PageSurface]:
        """Lay out the resolved context into page surfaces."""

    # ------------------------------------------------------------------
    # Page assembly
    # ------------------------------------------------------------------

    def compose_single_column(
        self, ctx: RenderContext, sections: list[str] | None = None
    ) -> list[PageSurface]:
        width = PAGE_WIDTH_PX - 2 * ctx.margin_x
        blocks = self.flow_blocks(ctx, ctx.sections if sections is None else sections, width)
        if not self.paginated:
            height = max(float(PAGE_HEIGHT_PX), flow_height(blocks) + 2 * ctx.margin_y)
            ops = place_rows(stack_rows(blocks), ctx.margin_x, ctx.margin_y)
            return [self.page_surface(ctx, ops, height=height, is_page=False)]

        pages = paginate(blocks, ctx.content_height)
        if ctx.is_preview:
            pages = pages[:1]
        return [
            self.page_surface(
                ctx, place_rows(rows, ctx.margin_x, ctx.margin_y), index=i, count=len(pages)
            )
            for i, rows in enumerate(pages)
        ]

    def page_surface(
        self,
        ctx: RenderContext,
        ops: list[DrawOp],
        *,
        index: int = 0,
        count: int = 1,
        height: float = PAGE_HEIGHT_PX,
        is_page: bool = True,
        underlay: list[DrawOp] | None = None,
    ) -> PageSurface:
        """Wrap *ops* in a surface carrying the background, border and page number."""
        style = ctx.style
        border: PageBorder | None = None
        background_image = ""
        if style.border_mode == "single":
            border = PageBorder(style.accent_color)
        elif style.border_mode == "multi":
            border = PageBorder(style.accent_color, inner_color=style.border_color)
        elif style.border_mode == "image" and style.background_image_url:
            background_image = style.background_image_url

        all_ops = [*(underlay or []), *ops]
        if is_page and style.show_page_numbers and count > 1 and not ctx.is_preview:
            all_ops.append(self._page_number(ctx, index, count, height))
        return PageSurface(
            width=PAGE_WIDTH_PX,
            height=height,
            background_color=style.background_color,
            ops=all_ops,
            background_image_url=background_image,
            border=border,
            index=index,
            count=count,
            is_page=is_page,
        )

    def _page_number(self, ctx: RenderContext, index: int, count: int, height: float) -> TextOp:
        font = ctx.body(size=_PAGE_NUMBER_SIZE)
        label = f"Page {index + 1} of {count}"
        line = font.size * 1.2
        return TextOp(
            x=PAGE_WIDTH_PX - 48 - text_width(label, font),
            y=height - 16 - line,
            text=label,
            font=font,
            color=ctx.palette.muted,
            line_height=line,
        )

    def flow_blocks(self, ctx: RenderContext, sections: list[str], width: float) -> list[Block]:
        """Blocks of *sections*, in order, separated by section gaps."""
        builders: dict[str, Callable[[RenderContext, float], list[Block]]] = {
            "personalInfo": self.personal_info_blocks,
            "skills": self.skills_blocks,
            "experience": self.experience_blocks,
            "projects": self.projects_blocks,
            "education": self.education_blocks,
            "certifications": self.certifications_blocks,
            "languages": self.languages_blocks,
            "interests": self.interests_blocks,
        }
        blocks: list[Block] = []
        for section in sections:
            section_blocks = builders[section](ctx, width)
            if not section_blocks:
                continue
            if blocks:
                blocks.append(Block.gap(f"{section}-gap", ctx.style.space_between_entries_px + 8))
            blocks.extend(section_blocks)
        return blocks

    # ------------------------------------------------------------------
    # Primitive rows
    # ------------------------------------------------------------------

    @staticmethod
    def paragraph(
        ctx: RenderContext,
        text: str,
        width: float,
        *,
        font: FontSpec | None = None,
        color: str | None = None,
        opacity: float = 1.0,
        indent: float = 0.0,
        align: Alignment = "left",
        line_height: float | None = None,
        link: str = "",
    ) -> list[Row]:
        run = Run(text, font or ctx.body(), color or ctx.palette.text, opacity, link)
        return text_rows(
            [run], width, line_height or ctx.line_height, align=align, indent=indent
        )

    @staticmethod
    def rule_row(color: str, width: float, *, thickness: float = 1.0, pad: float = 4.0) -> Row:
        y = pad + thickness / 2
        return Row(height=2 * pad + thickness, ops=(LineOp(0, y, width, y, color, thickness),))

    @staticmethod
    def with_leading_ops(rows: list[Row], ops: tuple[DrawOp, ...]) -> list[Row]:
        if not rows:
            return rows
        first = rows[0]
        return [Row(first.height, ops + first.ops), *rows[1:]]

    def titled_with_date(
        self,
        ctx: RenderContext,
        runs: list[Run],
        date_text: str,
        width: float,
    ) -> list[Row]:
        """Wrap *runs* and pin *date_text* to the right edge of the first line."""
        font = ctx.body()
        date_width = text_width(date_text, font) if date_text else 0.0
        available = width - (date_width + 12 if date_text else 0.0)
        rows = text_rows(runs, available, ctx.line_height)
        if not date_text:
            return rows
        if not rows:
            rows = [Row(height=font.size * ctx.line_height)]
        line = font.size * ctx.line_height
        date_op = TextOp(
            x=width - date_width,
            y=(rows[0].height - line) / 2,
            text=date_text,
            font=font,
            color=ctx.palette.dates,
            line_height=line,
            opacity=ctx.style.dates_opacity,
        )
        return [Row(rows[0].height, rows[0].ops + (date_op,)), *rows[1:]]

    def location_rows(self, ctx: RenderContext, location: str, width: float) -> list[Row]:
        return self.paragraph(
            ctx,
            location,
            width,
            color=ctx.palette.muted,
            opacity=ctx.style.location_opacity,
        )

    def bullet_rows(self, ctx: RenderContext, text: str, width: float) -> list[Row]:
        style = ctx.style
        bullet = style.effective_bullet_style
        marker_width = 0.0 if bullet == "none" else 10.0 + 6.0
        indent = style.description_indent_px
        rows = self.paragraph(ctx, text, width, indent=indent + marker_width)
        if not rows or bullet == "none":
            return rows
        return self.with_leading_ops(rows, self._bullet_ops(ctx, bullet, indent, rows[0].height))

    @staticmethod
    def _bullet_ops(
        ctx: RenderContext, bullet: str, x: float, row_height: float
    ) -> tuple[DrawOp, ...]:
        color = ctx.palette.bullets
        if bullet == "hyphen":
            font = ctx.body(bold=True)
            line = font.size * ctx.line_height
            return (TextOp(x, (row_height - line) / 2, "-", font, color, line),)
        if bullet == "disc":
            return (EllipseOp(x, (row_height - 7) / 2, 7, 7, fill=color),)
        if bullet == "circle":
            return (EllipseOp(x, (row_height - 8) / 2, 8, 8, outline=color, stroke=2),)
        return (RectOp(x, (row_height - 7) / 2, 7, 7, fill=color),)

    def inline_item_rows(
        self,
        ctx: RenderContext,
        items: list[ContactItem],
        width: float,
        *,
        icons: str,
        icon_color: str,
        color: str | None = None,
        align: str = "left",
        font: FontSpec | None = None,
    ) -> list[Row]:
        """Lay *items* out left to right, wrapping between items."""
        font = font or ctx.body()
        color = color or ctx.palette.text
        show_icons = icons != "none"
        icon_size = float(ICON_SIZE_PX[ctx.style.icon_size])
        line = font.size * ctx.line_height
        row_height = max(line, icon_size if show_icons else 0.0)
        icon_space = icon_size + _ICON_GAP if show_icons else 0.0

        lines: list[list[tuple[ContactItem, float]]] = [[]]
        used = 0.0
        for item in items:
            item_width = icon_space + text_width(item.text, font)
            gap = _INLINE_GAP if lines[-1] else 0.0
            if lines[-1] and used + gap + item_width > width:
                lines.append([])
                used, gap = 0.0, 0.0
            lines[-1].append((item, item_width))
            used += gap + item_width

        rows: list[Row] = []
        for entries in lines:
            if not entries:
                continue
            total = sum(w for _, w in entries) + _INLINE_GAP * (len(entries) - 1)
            x = 0.0
            if align == "center":
                x = (width - total) / 2
            elif align == "right":
                x = width - total
            ops: list[DrawOp] = []
            for item, item_width in entries:
                if show_icons:
                    ops.append(
                        IconOp(
                            kind=item.kind,  # type: ignore[arg-type]
                            x=x,
                            y=(row_height - icon_size) / 2,
                            size=icon_size,
                            color=icon_color,
                            fill=icons,  # type: ignore[arg-type]
                            frame=ctx.style.icon_frame,
                        )
                    )
                ops.append(
                    TextOp(
                        x=x + icon_space,
                        y=(row_height - line) / 2,
                        text=item.text,
                        font=font,
                        color=color,
                        line_height=line,
                        link=item.link,
                    )
                )
                x += item_width + _INLINE_GAP
            rows.append(Row(row_height, tuple(ops)))
        return rows

    def proficiency_ops(
        self, ctx: RenderContext, proficiency: str, x: float, row_height: float
    ) -> tuple[tuple[DrawOp, ...], float]:
        """Marker ops for a language level and the width they occupy."""
        level = PROFICIENCY_LEVELS.get(proficiency, 2)
        palette = ctx.palette
        kind = ctx.style.dots_bars_bubbles
        if kind == "dots":
            ops = tuple(
                EllipseOp(
                    x + i * 12,
                    (row_height - 8) / 2,
                    8,
                    8,
                    fill=palette.markers if i < level else palette.marker_track,
                )
                for i in range(5)
            )
            return ops, 56.0
        if kind == "bars":
            track = RectOp(x, (row_height - 6) / 2, 72, 6, fill=palette.marker_track, radius=3)
            filled = RectOp(
                x, (row_height - 6) / 2, 72 * level / 5, 6, fill=palette.markers, radius=3
            )
            return (track, filled), 72.0
        font = ctx.body(size=max(9, ctx.style.body_font_size_px - 2))
        label_width = text_width(proficiency, font)
        pill_height = font.size + 8
        pill = RectOp(
            x,
            (row_height - pill_height) / 2,
            label_width + 16,
            pill_height,
            fill=tint(palette.markers, 0.15),
            radius=pill_height / 2,
        )
        label = TextOp(
            x + 8,
            (row_height - pill_height) / 2 + 4,
            proficiency,
            font,
            palette.markers,
            font.size,
        )
        return (pill, label), label_width + 16

    def section_icon_ops(
        self, ctx: RenderContext, row_height: float
    ) -> tuple[tuple[DrawOp, ...], float]:
        color = ctx.palette.accent
        style = ctx.style.section_header_icon_style
        if style == "dot":
            return (EllipseOp(0, (row_height - 8) / 2, 8, 8, fill=color),), 8.0
        if style == "bar":
            return (RectOp(0, (row_height - 4) / 2, 18, 4, fill=color, radius=2),), 18.0
        if style == "square":
            return (RectOp(0, (row_height - 8) / 2, 8, 8, fill=color),), 8.0
        if style == "circle-outline":
            return (EllipseOp(0, (row_height - 9) / 2, 9, 9, outline=color, stroke=2),), 9.0
        return (), 0.0

    # ------------------------------------------------------------------
    # Overridable look
    # ------------------------------------------------------------------

    def section_title_rows(self, ctx: RenderContext, title: str, width: float) -> list[Row]:
        """Section heading with optional icon and rule."""
        font = ctx.heading()
        line = font.size * 1.2
        icon_ops, icon_width = self.section_icon_ops(ctx, line)
        indent = icon_width + 8 if icon_width else 0.0
        text = capitalize_title(title, ctx.style.capitalization)
        rows = self.paragraph(
            ctx, text, width, font=font, color=ctx.palette.heading, indent=indent, line_height=1.2
        )
        rows = self.with_leading_ops(rows, icon_ops)
        if ctx.style.headings_line:
            rows.append(self.rule_row(ctx.palette.headings_line, width, pad=3))
        rows.append(Row(height=8))
        return rows

    def contact_items(
        self, ctx: RenderContext, fields: list[str] | None = None
    ) -> list[ContactItem]:
        """Contact entries for *fields* (default: the resolved field order)."""
        info = ctx.data.personal_info
        location = info.location
        address = info.address.strip()
        if location and address:
            folded_location, folded_address = location.casefold(), address.casefold()
            if folded_location in folded_address or folded_address in folded_location:
                location = max(location, address, key=len)
                address = ""

        items: list[ContactItem] = []
        for field_id in fields if fields is not None else ctx.field_order:
            email = info.email.strip()
            if field_id == "email" and ctx.style.show_email and email:
                items.append(ContactItem("email", email, f"mailto:{email}"))
            elif field_id == "phone" and info.phone.strip():
                items.append(ContactItem("phone", info.phone.strip()))
            elif field_id == "location" and location:
                items.append(ContactItem("location", location))
            elif field_id == "address" and address:
                items.append(ContactItem("address", address))
            elif field_id in ("linkedin", "github"):
                url = getattr(info, field_id).strip()
                if url:
                    items.append(ContactItem(field_id, strip_protocol(url), _absolute_url(url)))
        return items

    def header_rows(
        self, ctx: RenderContext, width: float, *, include_contacts: bool = True
    ) -> list[Row]:
        """Name, job title and contact lines in personal-info field order."""
        info = ctx.data.personal_info
        style = ctx.style
        rows: list[Row] = []
        pending: list[str] = []

        def flush() -> None:
            items = self.contact_items(ctx, pending)
            if items:
                rows.append(Row(height=4))
                rows.extend(
                    self.inline_item_rows(
                        ctx,
                        items,
                        width,
                        icons=style.header_icons,
                        icon_color=ctx.palette.header_icons,
                        align=style.align,
                    )
                )
            pending.clear()

        for field_id in ctx.field_order:
            if field_id in _CONTACT_FIELDS:
                if include_contacts:
                    pending.append(field_id)
                continue
            flush()
            if field_id == "fullName":
                rows.extend(
                    self.paragraph(
                        ctx,
                        info.full_name,
                        width,
                        font=ctx.heading(bold=style.name_bold, size=ctx.name_size),
                        color=ctx.palette.name,
                        align=style.align,
                        line_height=1.2,
                    )
                )
            elif field_id == "jobTitle":
                rows.extend(
                    self.paragraph(
                        ctx,
                        info.job_title,
                        width,
                        font=ctx.heading(bold=False, size=ctx.job_title_size),
                        color=ctx.palette.job_title,
                        align=style.align,
                        line_height=1.3,
                    )
                )
        flush()
        return rows

    def summary_blocks(self, ctx: RenderContext, width: float) -> list[Block]:
        summary = ctx.data.personal_info.summary.strip()
        if not summary or "summary" not in ctx.field_order:
            return []
        rows = self.section_title_rows(ctx, SECTION_TITLES["summary"], width)
        rows += self.paragraph(ctx, summary, width)
        return [Block("summary", tuple(rows))]

    def personal_info_blocks(self, ctx: RenderContext, width: float) -> list[Block]:
        rows = self.header_rows(ctx, width)
        if ctx.style.headings_line:
            rows.append(self.rule_row(ctx.palette.headings_line, width, thickness=2, pad=8))
        blocks = [Block("personalInfo", tuple(rows))]
        summary = self.summary_blocks(ctx, width)
        if summary:
            blocks.append(Block.gap("summary-gap", ctx.style.space_between_entries_px))
            blocks.extend(summary)
        return blocks

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def titled_section(
        self,
        ctx: RenderContext,
        section: str,
        entries: list[tuple[str, list[Row]]],
        width: float,
    ) -> list[Block]:
        """Section title kept together with its first entry, then one block per entry."""
        entries = [(key, rows) for key, rows in entries if rows]
        if not entries:
            return []
        title_rows = self.section_title_rows(ctx, SECTION_TITLES[section], width)
        first_key, first_rows = entries[0]
        blocks = [Block(f"{section}-{first_key}", tuple(title_rows + first_rows))]
        for index, (key, rows) in enumerate(entries[1:], start=1):
            blocks.append(Block.gap(f"{section}-gap-{index}", ctx.style.space_between_entries_px))
            blocks.append(Block(f"{section}-{key}", tuple(rows)))
        return blocks

    def experience_blocks(self, ctx: RenderContext, width: float) -> list[Block]:
        entries: list[tuple[str, list[Row]]] = []
        for index, entry in enumerate(ctx.data.experience):
            title_font = ctx.heading(size=ctx.entry_title_size)
            runs = [Run(entry.job_title, title_font, ctx.palette.heading)]
            rows = self.titled_with_date(
                ctx, runs, ctx.date_range(entry.start_date, entry.end_date, entry.current), width
            )
            rows += self.paragraph(ctx, entry.company_name, width, font=ctx.body(bold=True))
            rows += self.location_rows(ctx, entry.location, width)
            for item in entry.responsibilities:
                if item.strip():
                    rows += self.bullet_rows(ctx, item.strip(), width)
            entries.append((entry.id or str(index), rows))
        return self.titled_section(ctx, "experience", entries, width)

    def education_blocks(self, ctx: RenderContext, width: float) -> list[Block]:
        small = ctx.body(size=max(10, ctx.style.body_font_size_px - 1))
        entries: list[tuple[str, list[Row]]] = []
        for index, entry in enumerate(ctx.data.education):
            degree_font = ctx.heading(size=ctx.style.body_font_size_px)
            runs = [Run(entry.degree, degree_font, ctx.palette.heading)]
            rows = self.titled_with_date(ctx, runs, ctx.date(entry.graduation_date), width)
            rows += self.paragraph(ctx, entry.institution_name, width)
            rows += self.location_rows(ctx, entry.location, width)
            if entry.gpa.strip():
                gpa = f"GPA: {entry.gpa.strip()}"
                rows += self.paragraph(ctx, gpa, width, color=ctx.palette.muted)
            rows += self.paragraph(ctx, entry.honors, width, color=ctx.palette.muted)
            rows += self.paragraph(
                ctx, entry.additional_info, width, font=small, color=ctx.palette.muted
            )
            entries.append((entry.id or str(index), rows))
        return self.titled_section(ctx, "education", entries, width)

    def link_rows(self, ctx: RenderContext, links: list[ContactItem], width: float) -> list[Row]:
        if not links:
            return []
        return self.inline_item_rows(
            ctx,
            links,
            width,
            icons=ctx.style.link_icons,
            icon_color=ctx.palette.link_icons,
            color=ctx.palette.text,
        )

    def projects_blocks(self, ctx: RenderContext, width: float) -> list[Block]:
        entries: list[tuple[str, list[Row]]] = []
        for index, project in enumerate(ctx.data.projects):
            runs = [Run(project.name, ctx.heading(size=ctx.entry_title_size), ctx.palette.heading)]
            if project.role.strip():
                runs.append(Run(f" | {project.role.strip()}", ctx.body(), ctx.palette.muted))
            rows = text_rows(runs, width, ctx.line_height)
            rows += self.paragraph(ctx, project.description, width)
            technologies = [t for t in project.technologies if t.strip()]
            if technologies:
                rows += text_rows(
                    [
                        Run("Technologies: ", ctx.body(bold=True), ctx.palette.heading),
                        Run(", ".join(technologies), ctx.body(), ctx.palette.muted),
                    ],
                    width,
                    ctx.line_height,
                )
            links = [
                ContactItem("link", strip_protocol(url), _absolute_url(url))
                for url in (project.live_demo_link, project.github_link)
                if url.strip()
            ]
            if project.github_link.strip():
                links[-1] = ContactItem("github", links[-1].text, links[-1].link)
            rows += self.link_rows(ctx, links, width)
            entries.append((project.id or str(index), rows))
        return self.titled_section(ctx, "projects", entries, width)

    def certifications_blocks(self, ctx: RenderContext, width: float) -> list[Block]:
        entries: list[tuple[str, list[Row]]] = []
        for index, cert in enumerate(ctx.data.certifications):
            runs = [Run(cert.title, ctx.body(bold=True), ctx.palette.heading)]
            rows = self.titled_with_date(ctx, runs, ctx.date(cert.date_obtained), width)
            rows += self.paragraph(ctx, cert.issuing_organization, width, color=ctx.palette.muted)
            link = cert.verification_link.strip()
            if link:
                rows += self.link_rows(
                    ctx, [ContactItem("link", strip_protocol(link), _absolute_url(link))], width
                )
            entries.append((cert.id or str(index), rows))
        return self.titled_section(ctx, "certifications", entries, width)

    def languages_blocks(self, ctx: RenderContext, width: float) -> list[Block]:
        entries: list[tuple[str, list[Row]]] = []
        for index, language in enumerate(ctx.data.languages):
            if not language.name.strip():
                continue
            font = ctx.body(bold=True)
            line = font.size * ctx.line_height
            row_height = max(line, 14.0)
            sized_markers, marker_width = self.proficiency_ops(
                ctx, language.proficiency, 0, row_height
            )
            rows = self.paragraph(ctx, language.name, width - marker_width - 10, font=font)
            if rows and sized_markers:
                markers, _ = self.proficiency_ops(
                    ctx, language.proficiency, width - marker_width, max(rows[0].height, row_height)
                )
                first = rows[0]
                rows[0] = Row(max(first.height, row_height), first.ops + markers)
            entries.append((language.id or str(index), rows))
        return self.titled_section(ctx, "languages", entries, width)

    def skills_blocks(self, ctx: RenderContext, width: float) -> list[Block]:
        rows: list[Row] = []
        skills = ctx.data.skills
        label_font = ctx.heading(size=ctx.style.body_font_size_px)
        for label, items in (("Technical Skills", skills.technical), ("Soft Skills", skills.soft)):
            items = [item.strip() for item in items if item.strip()]
            if not items:
                continue
            rows += text_rows(
                [
                    Run(f"{label}: ", label_font, ctx.palette.heading),
                    Run(", ".join(items), ctx.body(), ctx.palette.text),
                ],
                width,
                ctx.line_height,
            )
        return self.titled_section(ctx, "skills", [("all", rows)], width)

    def interests_blocks(self, ctx: RenderContext, width: float) -> list[Block]:
        interests = [item.strip() for item in ctx.data.additional.interests if item.strip()]
        rows = self.paragraph(ctx, ", ".join(interests), width)
        return self.titled_section(ctx, "interests", [("all", rows)], width)
