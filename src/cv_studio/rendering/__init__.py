"""Layout substrate: draw ops, page surfaces, pagination, rasterization, markup."""

from __future__ import annotations

from cv_studio.rendering.layout import (
    Block,
    PlacedRow,
    Row,
    Run,
    paginate,
    place_rows,
    stack_rows,
    text_rows,
    wrap_runs,
)
from cv_studio.rendering.markup import render_markup
from cv_studio.rendering.rasterize import ImageLoader, rasterize_surface
from cv_studio.rendering.surface import (
    MM_TO_PX,
    PAGE_HEIGHT_PX,
    PAGE_WIDTH_PX,
    DrawOp,
    FontSpec,
    PageBorder,
    PageSurface,
    stack_surfaces,
)

__all__ = [
    "MM_TO_PX",
    "PAGE_HEIGHT_PX",
    "PAGE_WIDTH_PX",
    "Block",
    "DrawOp",
    "FontSpec",
    "ImageLoader",
    "PageBorder",
    "PageSurface",
    "PlacedRow",
    "Row",
    "Run",
    "paginate",
    "place_rows",
    "rasterize_surface",
    "render_markup",
    "stack_rows",
    "stack_surfaces",
    "text_rows",
    "wrap_runs",
]
