"""Draw operations and page surfaces produced by templates.

Coordinates are CSS pixels (96 dpi) relative to the surface's top-left
corner. Surfaces are plain data: the rasterizer and the markup serializer are
the only consumers that interpret them.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Literal, Union

__all__ = [
    "A4_HEIGHT_MM",
    "A4_WIDTH_MM",
    "MM_TO_PX",
    "PAGE_HEIGHT_PX",
    "PAGE_WIDTH_PX",
    "DrawOp",
    "EllipseOp",
    "FontSpec",
    "IconOp",
    "ImageOp",
    "LineOp",
    "PageBorder",
    "PageSurface",
    "RectOp",
    "TextOp",
    "stack_surfaces",
    "translate",
]

A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0
MM_TO_PX = 3.7795275591
PAGE_WIDTH_PX = 794
PAGE_HEIGHT_PX = 1123

IconKind = Literal["email", "phone", "location", "address", "link", "linkedin", "github"]


@dataclass(frozen=True)
class FontSpec:
    family: str
    size: float
    bold: bool = False


@dataclass(frozen=True)
class TextOp:
    """A single line of text; ``y`` is the top of its line box."""

    x: float
    y: float
    text: str
    font: FontSpec
    color: str
    line_height: float
    opacity: float = 1.0
    link: str = ""


@dataclass(frozen=True)
class RectOp:
    x: float
    y: float
    width: float
    height: float
    fill: str | None = None
    outline: str | None = None
    stroke: float = 1.0
    radius: float = 0.0


@dataclass(frozen=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    width: float = 1.0


@dataclass(frozen=True)
class EllipseOp:
    x: float
    y: float
    width: float
    height: float
    fill: str | None = None
    outline: str | None = None
    stroke: float = 1.0


@dataclass(frozen=True)
class IconOp:
    """A small pictogram inside an optional frame."""

    kind: IconKind
    x: float
    y: float
    size: float
    color: str
    fill: Literal["outline", "filled"] = "outline"
    frame: str = "none"


@dataclass(frozen=True)
class ImageOp:
    """An externally referenced image (URL, data URI or path)."""

    x: float
    y: float
    width: float
    height: float
    source: str
    circular: bool = False


DrawOp = Union[TextOp, RectOp, LineOp, EllipseOp, IconOp, ImageOp]


def translate(op: DrawOp, dx: float, dy: float) -> DrawOp:
    """Return *op* shifted by ``(dx, dy)``."""
    if isinstance(op, LineOp):
        return dataclasses.replace(op, x1=op.x1 + dx, y1=op.y1 + dy, x2=op.x2 + dx, y2=op.y2 + dy)
    return dataclasses.replace(op, x=op.x + dx, y=op.y + dy)


@dataclass(frozen=True)
class PageBorder:
    """Flat page frame; ``inner_color`` draws a second, inset frame."""

    color: str
    width: float = 6.0
    inner_color: str | None = None


@dataclass
class PageSurface:
    """One rendered unit of a CV document.

    ``is_page`` marks an A4 page boundary. Variants that do not paginate
    return a single unmarked surface sized to their content.
    """

    width: float
    height: float
    background_color: str = "#ffffff"
    ops: list[DrawOp] = field(default_factory=list)
    background_image_url: str = ""
    border: PageBorder | None = None
    index: int = 0
    count: int = 1
    is_page: bool = True

    @property
    def aspect_ratio(self) -> float:
        return self.height / self.width if self.width else 0.0


def stack_surfaces(surfaces: list[PageSurface]) -> PageSurface:
    """Compose *surfaces* top-to-bottom into one unmarked root surface."""
    if len(surfaces) == 1:
        only = surfaces[0]
        return dataclasses.replace(only, ops=list(only.ops), is_page=False)

    width = max((s.width for s in surfaces), default=float(PAGE_WIDTH_PX))
    ops: list[DrawOp] = []
    offset = 0.0
    for surface in surfaces:
        ops.append(
            RectOp(0, offset, surface.width, surface.height, fill=surface.background_color)
        )
        ops.extend(translate(op, 0, offset) for op in surface.ops)
        offset += surface.height
    background = surfaces[0].background_color if surfaces else "#ffffff"
    return PageSurface(
        width=width, height=offset, background_color=background, ops=ops, is_page=False
    )
