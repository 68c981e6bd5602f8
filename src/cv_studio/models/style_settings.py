"""Visual configuration for a rendered CV.

``StyleSettings`` mirrors the JSON persisted by the editor (camelCase keys).
Stored values may predate a range tightening or carry garbage, so the model
repairs them on read instead of rejecting them: numbers are clamped, colors
are normalized, and invalid colors or enum values fall back to the default.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any, get_args

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from cv_studio.constants.style_constants import (
    COLOR_FIELDS,
    NUMERIC_RANGES,
    Align,
    BorderMode,
    BulletStyle,
    Capitalization,
    ColorMode,
    DotsBarsBubbles,
    EntryListStyle,
    FontFamilyId,
    IconFill,
    IconFrame,
    IconSize,
    SectionHeaderIconStyle,
)
from cv_studio.utils.colors import normalize_hex

logger = logging.getLogger(__name__)

__all__ = [
    "StyleSettings",
    "apply_style_changes",
    "clamp_number",
    "resolve_style",
]

_INTEGER_FIELDS = frozenset({"body_font_size_px", "heading_font_size_px"})


def clamp_number(value: float, minimum: float, maximum: float) -> float:
    """Clamp *value* into ``[minimum, maximum]``; NaN maps to *minimum*."""
    if math.isnan(value):
        return minimum
    return min(maximum, max(minimum, value))


class StyleSettings(BaseModel):
    """Typography, spacing, color and iconography of a rendered CV."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    # typography
    body_font_family: FontFamilyId = "inter"
    heading_font_family: FontFamilyId = "inter"
    body_font_size_px: int = 12
    heading_font_size_px: int = 20
    line_height: float = 1.35
    capitalization: Capitalization = "uppercase"

    # spacing
    margin_left_right_mm: float = 16
    margin_top_bottom_mm: float = 16
    space_between_entries_px: float = 12
    description_indent_px: float = 16

    # color
    color_mode: ColorMode = "basic"
    border_mode: BorderMode = "single"
    text_color: str = "#374151"
    heading_color: str = "#111827"
    muted_color: str = "#4b5563"
    accent_color: str = "#111827"
    border_color: str = "#1f2937"
    background_color: str = "#ffffff"
    background_image_url: str = ""
    apply_accent_to_name: bool = False
    apply_accent_to_job_title: bool = False
    apply_accent_to_headings: bool = False
    apply_accent_to_headings_line: bool = False
    apply_accent_to_header_icons: bool = False
    apply_accent_to_dots_bars_bubbles: bool = False
    apply_accent_to_dates: bool = False
    apply_accent_to_link_icons: bool = False
    dates_opacity: float = 0.7
    location_opacity: float = 0.7

    # iconography
    header_icons: IconFill = "none"
    link_icons: IconFill = "none"
    icon_frame: IconFrame = "none"
    icon_size: IconSize = "sm"
    section_header_icon_style: SectionHeaderIconStyle = "none"
    dots_bars_bubbles: DotsBarsBubbles = "dots"
    bullet_style: BulletStyle = "disc"
    entry_list_style: EntryListStyle = "bullet"

    # layout
    align: Align = "left"
    headings_line: bool = True
    name_bold: bool = True
    show_page_numbers: bool = True
    show_email: bool = True

    @model_validator(mode="before")
    @classmethod
    def _repair_stored_values(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        repaired: dict[str, Any] = {}
        for key, value in data.items():
            name = _FIELD_BY_KEY.get(key)
            if name is None:
                continue
            if value is None:
                continue
            fixed = _repair_value(name, value)
            if fixed is _DROP:
                logger.warning("Ignoring invalid style value %s=%r", key, value)
                continue
            repaired[name] = fixed
        return repaired

    @property
    def effective_bullet_style(self) -> str:
        """Bullet glyph after the entry-list style override."""
        return "hyphen" if self.entry_list_style == "hyphen" else self.bullet_style


_DROP = object()


def _index_keys() -> dict[str, str]:
    index: dict[str, str] = {}
    for name, field in StyleSettings.model_fields.items():
        index[name] = name
        index[field.alias or to_camel(name)] = name
    return index


_FIELD_BY_KEY = _index_keys()
_BOOL_FIELDS = frozenset(
    name for name, field in StyleSettings.model_fields.items() if field.annotation is bool
)

_ENUM_OPTIONS: dict[str, frozenset[str]] = {
    name: frozenset(get_args(field.annotation))
    for name, field in StyleSettings.model_fields.items()
    if get_args(field.annotation)
}


def _repair_value(name: str, value: Any) -> Any:
    if name in NUMERIC_RANGES:
        if isinstance(value, bool):
            return _DROP
        try:
            number = float(value)
        except (TypeError, ValueError):
            return _DROP
        low, high = NUMERIC_RANGES[name]
        clamped = clamp_number(number, low, high)
        return round(clamped) if name in _INTEGER_FIELDS else clamped
    if name in COLOR_FIELDS:
        return normalize_hex(str(value)) or _DROP
    if name in _ENUM_OPTIONS:
        return value if value in _ENUM_OPTIONS[name] else _DROP
    if name in _BOOL_FIELDS:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("true", "false"):
            return value.lower() == "true"
        return _DROP
    if name == "background_image_url":
        return str(value).strip()
    return value


def resolve_style(
    defaults: StyleSettings,
    style: StyleSettings | Mapping[str, Any] | None,
) -> StyleSettings:
    """Overlay the explicitly provided fields of *style* on *defaults*.

    With ``colorMode="basic"`` the text, heading, muted and background colors
    stay at the variant defaults; only accent and border color are honored.
    """
    if style is None:
        return defaults
    if isinstance(style, StyleSettings):
        overrides = style.model_dump(exclude_unset=True)
    else:
        overrides = StyleSettings.model_validate(style).model_dump(exclude_unset=True)

    merged = {**defaults.model_dump(), **overrides}
    if merged.get("color_mode") == "basic":
        for name in ("text_color", "heading_color", "muted_color", "background_color"):
            merged[name] = getattr(defaults, name)
    return StyleSettings.model_validate(merged)


def apply_style_changes(style: StyleSettings, changes: Mapping[str, Any]) -> StyleSettings:
    """Return a copy of *style* with *changes* applied the way the editor does.

    Numbers are clamped into range and 3-digit colors are expanded. An invalid
    color is rejected and the previous value is kept.
    """
    accepted: dict[str, Any] = {}
    for key, value in changes.items():
        name = _FIELD_BY_KEY.get(key)
        if name is None:
            raise KeyError(f"Unknown style setting {key!r}")
        fixed = _repair_value(name, value)
        if fixed is _DROP:
            logger.warning("Rejected style change %s=%r", key, value)
            continue
        accepted[name] = fixed

    current = style.model_dump(exclude_unset=True)
    return StyleSettings.model_validate({**current, **accepted})
