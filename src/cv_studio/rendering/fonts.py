"""Font resolution and text measurement.

Font-family identifiers from the style settings map to TrueType files that
Pillow looks up in the system font directories. When none of the candidates
is installed the chain falls back to a generic sans face and finally to
Pillow's bundled default font, so measuring never fails.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from PIL import ImageFont

from cv_studio.rendering.surface import FontSpec

logger = logging.getLogger(__name__)

__all__ = ["load_font", "line_box_height", "text_width"]

FontLike = ImageFont.FreeTypeFont | ImageFont.ImageFont

# family id -> (regular candidates, bold candidates)
_FAMILY_FILES: dict[str, tuple[tuple[str, ...], tuple[str, ...]]] = {
    "inter": (("Inter-Regular.ttf", "Inter.ttf"), ("Inter-Bold.ttf",)),
    "roboto": (("Roboto-Regular.ttf",), ("Roboto-Bold.ttf",)),
    "open-sans": (("OpenSans-Regular.ttf",), ("OpenSans-Bold.ttf",)),
    "lato": (("Lato-Regular.ttf",), ("Lato-Bold.ttf",)),
    "system-sans": (
        ("DejaVuSans.ttf", "LiberationSans-Regular.ttf", "Arial.ttf"),
        ("DejaVuSans-Bold.ttf", "LiberationSans-Bold.ttf", "Arial Bold.ttf"),
    ),
    "system-serif": (
        ("DejaVuSerif.ttf", "LiberationSerif-Regular.ttf", "Times New Roman.ttf"),
        ("DejaVuSerif-Bold.ttf", "LiberationSerif-Bold.ttf", "Times New Roman Bold.ttf"),
    ),
    "serif": (
        ("DejaVuSerif.ttf", "LiberationSerif-Regular.ttf"),
        ("DejaVuSerif-Bold.ttf", "LiberationSerif-Bold.ttf"),
    ),
    "mono": (
        ("DejaVuSansMono.ttf", "LiberationMono-Regular.ttf", "Courier New.ttf"),
        ("DejaVuSansMono-Bold.ttf", "LiberationMono-Bold.ttf", "Courier New Bold.ttf"),
    ),
}


def _candidates(family: str, bold: bool) -> list[str]:
    regular, heavy = _FAMILY_FILES.get(family, _FAMILY_FILES["system-sans"])
    names = list(heavy if bold else regular)
    if bold:
        names.extend(regular)
    sans_regular, sans_bold = _FAMILY_FILES["system-sans"]
    names.extend(sans_bold if bold else sans_regular)
    names.extend(sans_regular)
    return names


@lru_cache(maxsize=512)
def load_font(family: str, size: int, bold: bool = False) -> FontLike:
    """Return a Pillow font for *family* at *size* pixels."""
    size = max(1, size)
    for name in _candidates(family, bold):
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    logger.debug("No TrueType face for %s (bold=%s); using Pillow default", family, bold)
    return ImageFont.load_default(size=size)


def text_width(text: str, font_spec: FontSpec) -> float:
    """Advance width of *text* in layout pixels."""
    if not text:
        return 0.0
    font = load_font(font_spec.family, round(font_spec.size), font_spec.bold)
    return float(font.getlength(text))


def line_box_height(font_spec: FontSpec, line_height: float) -> float:
    """Height of one line box for *font_spec* at the CSS-style *line_height* factor."""
    return font_spec.size * line_height
