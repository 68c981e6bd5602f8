"""Tests for hex color helpers."""

from __future__ import annotations

from cv_studio.utils.colors import blend, hex_to_rgb, normalize_hex, tint


class TestNormalizeHex:
    def test_expands_shorthand(self) -> None:
        assert normalize_hex("abc") == "#aabbcc"
        assert normalize_hex("#ABC") == "#aabbcc"

    def test_lowercases_full_form(self) -> None:
        assert normalize_hex("#1F2937") == "#1f2937"
        assert normalize_hex("1f2937") == "#1f2937"

    def test_rejects_non_colors(self) -> None:
        assert normalize_hex("not-a-color") == ""
        assert normalize_hex("#12345") == ""
        assert normalize_hex("") == ""
        assert normalize_hex(None) == ""


class TestBlending:
    def test_hex_to_rgb(self) -> None:
        assert hex_to_rgb("#ff8000") == (255, 128, 0)
        assert hex_to_rgb("garbage") == (0, 0, 0)

    def test_blend_extremes(self) -> None:
        assert blend("#000000", "#ffffff", 1.0) == "#000000"
        assert blend("#000000", "#ffffff", 0.0) == "#ffffff"

    def test_blend_half(self) -> None:
        assert blend("#000000", "#ffffff", 0.5) == "#808080"

    def test_tint_is_lighter_than_color(self) -> None:
        r, g, b = hex_to_rgb(tint("#2563eb", 0.1))
        assert min(r, g, b) > 200
