"""Hex color helpers shared by the style model, renderer and rasterizer."""

from __future__ import annotations

import re

__all__ = ["blend", "hex_to_rgb", "normalize_hex", "tint"]

_HEX6 = re.compile(r"^#[0-9a-fA-F]{6}$")
_HEX3 = re.compile(r"^#[0-9a-fA-F]{3}$")


def normalize_hex(value: str | None) -> str:
    """Return *value* as ``#rrggbb`` (lowercase) or ``""`` if it is not a color.

    The leading ``#`` is optional and 3-digit shorthand is expanded.
    """
    raw = (value or "").strip()
    if not raw:
        return ""
    candidate = raw if raw.startswith("#") else f"#{raw}"
    if _HEX6.match(candidate):
        return candidate.lower()
    if _HEX3.match(candidate):
        r, g, b = candidate[1], candidate[2], candidate[3]
        return f"#{r}{r}{g}{g}{b}{b}".lower()
    return ""


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    """Convert ``#rrggbb`` to an RGB tuple; invalid input maps to black."""
    normalized = normalize_hex(value) or "#000000"
    return (
        int(normalized[1:3], 16),
        int(normalized[3:5], 16),
        int(normalized[5:7], 16),
    )


def _rgb_to_hex(rgb: tuple[int, int, int]) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def blend(foreground: str, background: str, opacity: float) -> str:
    """Composite *foreground* over *background* at *opacity* (0..1)."""
    opacity = max(0.0, min(1.0, opacity))
    fg = hex_to_rgb(foreground)
    bg = hex_to_rgb(background)
    mixed = tuple(round(f * opacity + b * (1 - opacity)) for f, b in zip(fg, bg, strict=True))
    return _rgb_to_hex(mixed)  # type: ignore[arg-type]


def tint(color: str, amount: float = 0.08) -> str:
    """Return a pale tint of *color* over white (used for badges and bubbles)."""
    return blend(color, "#ffffff", amount)
