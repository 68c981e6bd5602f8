"""Tests for the style settings model."""

from __future__ import annotations

import pytest

from cv_studio.models.style_settings import (
    StyleSettings,
    apply_style_changes,
    clamp_number,
    resolve_style,
)


class TestClampOnRead:
    """Stored style data is repaired instead of rejected."""

    def test_numbers_clamped_to_range(self) -> None:
        style = StyleSettings.model_validate(
            {"bodyFontSizePx": 40, "lineHeight": 0.2, "marginLeftRightMm": 100}
        )
        assert style.body_font_size_px == 16
        assert style.line_height == 1.0
        assert style.margin_left_right_mm == 24

    def test_nan_clamps_to_minimum(self) -> None:
        style = StyleSettings.model_validate({"datesOpacity": float("nan")})
        assert style.dates_opacity == 0.2

    def test_numeric_strings_accepted(self) -> None:
        style = StyleSettings.model_validate({"headingFontSizePx": "18"})
        assert style.heading_font_size_px == 18

    def test_invalid_color_falls_back_to_default(self) -> None:
        style = StyleSettings.model_validate({"accentColor": "blue-ish", "textColor": "ABC"})
        assert style.accent_color == StyleSettings().accent_color
        assert style.text_color == "#aabbcc"

    def test_unknown_enum_value_falls_back(self) -> None:
        style = StyleSettings.model_validate({"borderMode": "zigzag", "align": "center"})
        assert style.border_mode == StyleSettings().border_mode
        assert style.align == "center"

    def test_snake_case_keys_accepted(self) -> None:
        style = StyleSettings.model_validate({"show_page_numbers": False})
        assert style.show_page_numbers is False

    def test_none_values_ignored(self) -> None:
        style = StyleSettings.model_validate({"accentColor": None})
        assert style.accent_color == StyleSettings().accent_color

    def test_effective_bullet_style(self) -> None:
        style = StyleSettings(bullet_style="square", entry_list_style="hyphen")
        assert style.effective_bullet_style == "hyphen"
        assert StyleSettings(bullet_style="square").effective_bullet_style == "square"


class TestClampNumber:
    def test_bounds(self) -> None:
        assert clamp_number(5, 10, 16) == 10
        assert clamp_number(20, 10, 16) == 16
        assert clamp_number(12, 10, 16) == 12


class TestApplyStyleChanges:
    def test_clamps_numbers(self) -> None:
        style = apply_style_changes(StyleSettings(), {"spaceBetweenEntriesPx": 99})
        assert style.space_between_entries_px == 28

    def test_expands_shorthand_color(self) -> None:
        style = apply_style_changes(StyleSettings(), {"accentColor": "#f00"})
        assert style.accent_color == "#ff0000"

    def test_invalid_color_keeps_previous_value(self) -> None:
        before = StyleSettings(accent_color="#123456")
        after = apply_style_changes(before, {"accentColor": "not-a-color"})
        assert after.accent_color == "#123456"

    def test_unknown_key_raises(self) -> None:
        with pytest.raises(KeyError):
            apply_style_changes(StyleSettings(), {"glitter": True})


class TestResolveStyle:
    def test_none_returns_defaults(self) -> None:
        defaults = StyleSettings(accent_color="#2563eb")
        assert resolve_style(defaults, None) is defaults

    def test_only_explicit_fields_override(self) -> None:
        defaults = StyleSettings(accent_color="#2563eb", heading_font_size_px=18)
        resolved = resolve_style(defaults, StyleSettings(body_font_size_px=14))
        assert resolved.body_font_size_px == 14
        assert resolved.accent_color == "#2563eb"
        assert resolved.heading_font_size_px == 18

    def test_basic_mode_keeps_variant_text_colors(self) -> None:
        defaults = StyleSettings(text_color="#222222")
        resolved = resolve_style(
            defaults, {"colorMode": "basic", "textColor": "#ff0000", "accentColor": "#00ff00"}
        )
        assert resolved.text_color == "#222222"
        assert resolved.accent_color == "#00ff00"

    def test_advanced_mode_uses_all_colors(self) -> None:
        defaults = StyleSettings(text_color="#222222")
        resolved = resolve_style(defaults, {"colorMode": "advanced", "textColor": "#ff0000"})
        assert resolved.text_color == "#ff0000"
