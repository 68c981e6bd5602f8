"""HTML serialization of a render root.

The markup mirrors the page surfaces one-to-one: every page becomes a
``div.a4-page`` and every draw op an absolutely positioned child. It is the
document handed to the remote DOCX converter.
"""

from __future__ import annotations

from pathlib import Path
from urllib.parse import quote
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from cv_studio.rendering.surface import (
    PAGE_HEIGHT_PX,
    PAGE_WIDTH_PX,
    DrawOp,
    EllipseOp,
    IconOp,
    ImageOp,
    LineOp,
    PageSurface,
    RectOp,
    TextOp,
)

__all__ = ["CSS_FONT_STACKS", "render_markup"]

TEMPLATES_DIR = Path(__file__).resolve().parent / "markup_templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
    trim_blocks=True,
    lstrip_blocks=True,
)

CSS_FONT_STACKS: dict[str, str] = {
    "inter": "'Inter', sans-serif",
    "roboto": "'Roboto', sans-serif",
    "open-sans": "'Open Sans', sans-serif",
    "lato": "'Lato', sans-serif",
    "system-sans": "system-ui, -apple-system, 'Segoe UI', Arial, sans-serif",
    "system-serif": "Georgia, 'Times New Roman', serif",
    "serif": "'Times New Roman', serif",
    "mono": "'Courier New', monospace",
}


def _px(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".") + "px"


_CSS_URL_SAFE = "!#$%&()*+,-./:;<=>?@[]^_`{|}~"


def _css_url(url: str) -> str:
    """Percent-encode quotes, backslashes and whitespace for a quoted CSS ``url()``."""
    return quote(url, safe=_CSS_URL_SAFE)


def _box(x: float, y: float, width: float, height: float) -> str:
    return f"left:{_px(x)};top:{_px(y)};width:{_px(width)};height:{_px(height)}"


def _element(op: DrawOp) -> dict[str, Any]:
    if isinstance(op, TextOp):
        style = (
            f"left:{_px(op.x)};top:{_px(op.y)};line-height:{_px(op.line_height)};"
            f"font-family:{CSS_FONT_STACKS.get(op.font.family, 'sans-serif')};"
            f"font-size:{_px(op.font.size)};font-weight:{700 if op.font.bold else 400};"
            f"color:{op.color}"
        )
        if op.opacity < 1:
            style += f";opacity:{op.opacity:.2f}"
        return {"tag": "text", "text": op.text, "href": op.link, "style": style}
    if isinstance(op, RectOp):
        style = _box(op.x, op.y, op.width, op.height)
        if op.fill:
            style += f";background:{op.fill}"
        if op.outline:
            style += f";border:{_px(op.stroke)} solid {op.outline};box-sizing:border-box"
        if op.radius:
            style += f";border-radius:{_px(op.radius)}"
        return {"tag": "div", "style": style}
    if isinstance(op, LineOp):
        left, top = min(op.x1, op.x2), min(op.y1, op.y2)
        width = abs(op.x2 - op.x1) or op.width
        height = abs(op.y2 - op.y1) or op.width
        if op.y1 == op.y2:
            top -= op.width / 2
        return {"tag": "div", "style": f"{_box(left, top, width, height)};background:{op.color}"}
    if isinstance(op, EllipseOp):
        style = _box(op.x, op.y, op.width, op.height) + ";border-radius:50%"
        if op.fill:
            style += f";background:{op.fill}"
        if op.outline:
            style += f";border:{_px(op.stroke)} solid {op.outline};box-sizing:border-box"
        return {"tag": "div", "style": style}
    if isinstance(op, IconOp):
        return {
            "tag": "div",
            "css_class": f"icon icon-{op.kind} icon-{op.fill} frame-{op.frame}",
            "style": f"{_box(op.x, op.y, op.size, op.size)};color:{op.color}",
        }
    if isinstance(op, ImageOp):
        style = _box(op.x, op.y, op.width, op.height) + ";object-fit:cover"
        if op.circular:
            style += ";border-radius:50%"
        return {"tag": "img", "src": op.source, "style": style}
    raise TypeError(f"Unsupported draw op: {type(op).__name__}")


def _page_context(surface: PageSurface) -> dict[str, Any]:
    style = (
        f"width:{_px(surface.width)};height:{_px(surface.height)};"
        f"background-color:{surface.background_color}"
    )
    if surface.background_image_url:
        style += (
            f";background-image:url('{_css_url(surface.background_image_url)}')"
            ";background-size:cover;background-position:center"
        )
    if surface.border is not None:
        style += f";border:{_px(surface.border.width)} solid {surface.border.color}"
        if surface.border.inner_color:
            style += f";outline:{_px(surface.border.width / 2)} solid {surface.border.inner_color}"
            style += f";outline-offset:-{_px(surface.border.width * 2)}"
    return {
        "css_class": "a4-page" if surface.is_page else "cv-root",
        "number": surface.index + 1 if surface.is_page else None,
        "style": style,
        "elements": [_element(op) for op in surface.ops],
    }


def render_markup(
    surfaces: list[PageSurface],
    *,
    root_id: str = "cv-preview-content",
    title: str = "Resume",
) -> str:
    """Serialize *surfaces* into a standalone HTML document."""
    template = _env.get_template("document.html")
    return template.render(
        root_id=root_id,
        title=title,
        page_width=PAGE_WIDTH_PX,
        page_height=PAGE_HEIGHT_PX,
        pages=[_page_context(surface) for surface in surfaces],
    )
