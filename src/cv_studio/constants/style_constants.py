"""Option sets and numeric ranges for style settings."""

from __future__ import annotations

from typing import Literal

FontFamilyId = Literal[
    "inter",
    "roboto",
    "open-sans",
    "lato",
    "system-sans",
    "system-serif",
    "serif",
    "mono",
]
ColorMode = Literal["basic", "advanced"]
BorderMode = Literal["none", "single", "multi", "image"]
Capitalization = Literal["capitalize", "uppercase"]
Align = Literal["left", "center", "right"]
IconFill = Literal["none", "outline", "filled"]
IconFrame = Literal[
    "none",
    "circle-filled",
    "rounded-filled",
    "square-filled",
    "circle-outline",
    "rounded-outline",
    "square-outline",
]
IconSize = Literal["xs", "sm", "md", "lg", "xl"]
SectionHeaderIconStyle = Literal["none", "dot", "bar", "square", "circle-outline"]
DotsBarsBubbles = Literal["dots", "bars", "bubbles"]
BulletStyle = Literal["disc", "circle", "square", "hyphen", "none"]
EntryListStyle = Literal["bullet", "hyphen"]

# (minimum, maximum) for every numeric style field.
NUMERIC_RANGES: dict[str, tuple[float, float]] = {
    "body_font_size_px": (10, 16),
    "heading_font_size_px": (14, 26),
    "line_height": (1.0, 1.8),
    "margin_left_right_mm": (8, 24),
    "margin_top_bottom_mm": (8, 24),
    "space_between_entries_px": (4, 28),
    "description_indent_px": (0, 32),
    "dates_opacity": (0.2, 1.0),
    "location_opacity": (0.2, 1.0),
}

COLOR_FIELDS: tuple[str, ...] = (
    "text_color",
    "heading_color",
    "muted_color",
    "accent_color",
    "border_color",
    "background_color",
)

ACCENT_FLAGS: tuple[str, ...] = (
    "apply_accent_to_name",
    "apply_accent_to_job_title",
    "apply_accent_to_headings",
    "apply_accent_to_headings_line",
    "apply_accent_to_header_icons",
    "apply_accent_to_dots_bars_bubbles",
    "apply_accent_to_dates",
    "apply_accent_to_link_icons",
)

ICON_SIZE_PX: dict[str, int] = {"xs": 10, "sm": 12, "md": 14, "lg": 16, "xl": 18}
