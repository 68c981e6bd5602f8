"""Pillow rasterization of page surfaces.

Every surface is drawn at an oversampling factor onto an RGB bitmap with a
forced white base. Text is drawn with antialiasing on; shapes gain their
smoothness from the oversampling itself.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
import threading
from collections import OrderedDict
from pathlib import Path

import httpx
from PIL import Image, ImageDraw, ImageOps

from cv_studio.rendering.fonts import load_font
from cv_studio.rendering.surface import (
    DrawOp,
    EllipseOp,
    IconOp,
    ImageOp,
    LineOp,
    PageBorder,
    PageSurface,
    RectOp,
    TextOp,
)
from cv_studio.utils.colors import hex_to_rgb

logger = logging.getLogger(__name__)

__all__ = ["ImageLoader", "rasterize_surface"]

_WHITE = "#ffffff"


class ImageLoader:
    """Fetch and cache images referenced by surfaces.

    Supports ``http(s)://`` URLs and ``data:`` URIs. Local paths are only
    read when ``allow_local_paths`` is set (the CLI does, the API does not).
    A source that cannot be loaded yields ``None`` and is logged, never
    raised. Failures are not cached, and at most ``max_entries`` decoded
    images are kept, least recently used dropped first.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        timeout: float = 10.0,
        *,
        allow_local_paths: bool = False,
        max_entries: int = 32,
    ) -> None:
        self._client = client
        self._timeout = timeout
        self.allow_local_paths = allow_local_paths
        self.max_entries = max(1, max_entries)
        self._cache: OrderedDict[str, Image.Image] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._cache)

    def load(self, source: str) -> Image.Image | None:
        with self._lock:
            if source in self._cache:
                self._cache.move_to_end(source)
                return self._cache[source]
        try:
            picture = self._open(source)
        except (httpx.HTTPError, OSError, ValueError, binascii.Error) as exc:
            logger.warning("Could not load image %.80s: %s", source, exc)
            return None
        with self._lock:
            self._cache[source] = picture
            self._cache.move_to_end(source)
            while len(self._cache) > self.max_entries:
                self._cache.popitem(last=False)
        return picture

    def _open(self, source: str) -> Image.Image:
        if source.startswith("data:"):
            _, _, payload = source.partition(",")
            raw = base64.b64decode(payload)
        elif source.startswith(("http://", "https://")):
            if self._client is not None:
                response = self._client.get(source, timeout=self._timeout)
            else:
                response = httpx.get(source, timeout=self._timeout, follow_redirects=True)
            response.raise_for_status()
            raw = response.content
        elif self.allow_local_paths:
            raw = Path(source).read_bytes()
        else:
            raise ValueError("local image paths are not allowed")
        picture = Image.open(io.BytesIO(raw))
        picture.load()
        return picture.convert("RGBA")


class _Painter:
    def __init__(
        self,
        image: Image.Image,
        scale: float,
        background: str,
        loader: ImageLoader | None,
    ) -> None:
        self.image = image
        self.draw = ImageDraw.Draw(image)
        self.draw.fontmode = "L"
        self.scale = scale
        self.background = background
        self.loader = loader

    def s(self, value: float) -> int:
        return round(value * self.scale)

    def stroke(self, value: float) -> int:
        return max(1, self.s(value))

    def box(self, x: float, y: float, width: float, height: float) -> tuple[int, int, int, int]:
        left, top = self.s(x), self.s(y)
        return left, top, max(left, self.s(x + width) - 1), max(top, self.s(y + height) - 1)

    def paint(self, op: DrawOp) -> None:
        if isinstance(op, TextOp):
            self._text(op)
        elif isinstance(op, RectOp):
            self._rect(op)
        elif isinstance(op, LineOp):
            self.draw.line(
                [(self.s(op.x1), self.s(op.y1)), (self.s(op.x2), self.s(op.y2))],
                fill=op.color,
                width=self.stroke(op.width),
            )
        elif isinstance(op, EllipseOp):
            self.draw.ellipse(
                self.box(op.x, op.y, op.width, op.height),
                fill=op.fill,
                outline=op.outline,
                width=self.stroke(op.stroke) if op.outline else 0,
            )
        elif isinstance(op, IconOp):
            self._icon(op)
        elif isinstance(op, ImageOp):
            self._image(op)

    def _text(self, op: TextOp) -> None:
        font = load_font(op.font.family, self.s(op.font.size), op.font.bold)
        top = op.y + (op.line_height - op.font.size) / 2
        origin = (self.s(op.x), self.s(top))
        if op.opacity >= 1:
            self.draw.text(origin, op.text, fill=op.color, font=font)
            return
        # Translucent text composites over the pixels already painted beneath it.
        left, top_px, right, bottom = self.draw.textbbox(origin, op.text, font=font)
        if right <= left or bottom <= top_px:
            return
        mask = Image.new("L", (right - left, bottom - top_px), 0)
        mask_draw = ImageDraw.Draw(mask)
        mask_draw.fontmode = "L"
        mask_draw.text(
            (origin[0] - left, origin[1] - top_px),
            op.text,
            fill=round(255 * max(0.0, op.opacity)),
            font=font,
        )
        self.image.paste(hex_to_rgb(op.color), (left, top_px), mask)

    def _rect(self, op: RectOp) -> None:
        box = self.box(op.x, op.y, op.width, op.height)
        width = self.stroke(op.stroke) if op.outline else 0
        if op.radius:
            self.draw.rounded_rectangle(
                box, radius=self.s(op.radius), fill=op.fill, outline=op.outline, width=width
            )
        else:
            self.draw.rectangle(box, fill=op.fill, outline=op.outline, width=width)

    def _image(self, op: ImageOp) -> None:
        if self.loader is None:
            return
        picture = self.loader.load(op.source)
        if picture is None:
            return
        size = (max(1, self.s(op.width)), max(1, self.s(op.height)))
        fitted = ImageOps.fit(picture, size, Image.Resampling.LANCZOS)
        mask = fitted.getchannel("A")
        if op.circular:
            circle = Image.new("L", size, 0)
            ImageDraw.Draw(circle).ellipse((0, 0, size[0] - 1, size[1] - 1), fill=255)
            mask = Image.composite(mask, circle, circle)
        self.image.paste(fitted.convert("RGB"), (self.s(op.x), self.s(op.y)), mask)

    def _icon(self, op: IconOp) -> None:
        x, y, size = op.x, op.y, op.size
        glyph_color = op.color
        frame = op.frame
        if frame != "none":
            shape, _, style = frame.partition("-")
            filled = style == "filled"
            box = self.box(x, y, size, size)
            fill = op.color if filled else None
            outline = None if filled else op.color
            if shape == "circle":
                self.draw.ellipse(box, fill=fill, outline=outline, width=self.stroke(1))
            elif shape == "rounded":
                self.draw.rounded_rectangle(
                    box, radius=self.s(size / 4), fill=fill, outline=outline, width=self.stroke(1)
                )
            else:
                self.draw.rectangle(box, fill=fill, outline=outline, width=self.stroke(1))
            if filled:
                glyph_color = _WHITE
            pad = size * 0.22
            x, y, size = x + pad, y + pad, size - 2 * pad

        solid = op.fill == "filled"
        fill = glyph_color if solid else None
        line = self.stroke(max(1.0, size / 10))
        if op.kind == "email":
            self.draw.rectangle(
                self.box(x, y + size * 0.2, size, size * 0.6),
                fill=fill,
                outline=glyph_color,
                width=line,
            )
            v_color = self.background if solid else glyph_color
            self.draw.line(
                [
                    (self.s(x), self.s(y + size * 0.2)),
                    (self.s(x + size / 2), self.s(y + size * 0.55)),
                    (self.s(x + size), self.s(y + size * 0.2)),
                ],
                fill=v_color,
                width=line,
            )
        elif op.kind == "phone":
            self.draw.rounded_rectangle(
                self.box(x + size * 0.25, y, size * 0.5, size),
                radius=self.s(size * 0.1),
                fill=fill,
                outline=glyph_color,
                width=line,
            )
        elif op.kind in ("location", "address"):
            self.draw.ellipse(
                self.box(x + size * 0.2, y, size * 0.6, size * 0.6),
                fill=fill,
                outline=glyph_color,
                width=line,
            )
            self.draw.polygon(
                [
                    (self.s(x + size * 0.28), self.s(y + size * 0.45)),
                    (self.s(x + size * 0.72), self.s(y + size * 0.45)),
                    (self.s(x + size / 2), self.s(y + size)),
                ],
                fill=glyph_color,
            )
        elif op.kind in ("linkedin", "github"):
            self.draw.rounded_rectangle(
                self.box(x, y, size, size),
                radius=self.s(size * 0.2),
                fill=fill,
                outline=glyph_color,
                width=line,
            )
            label = "in" if op.kind == "linkedin" else "gh"
            font = load_font("system-sans", self.s(size * 0.55), True)
            text_color = self.background if solid else glyph_color
            origin = (self.s(x + size * 0.18), self.s(y + size * 0.18))
            self.draw.text(origin, label, fill=text_color, font=font)
        else:
            self.draw.ellipse(
                self.box(x, y, size * 0.6, size * 0.6), fill=fill, outline=glyph_color, width=line
            )
            self.draw.ellipse(
                self.box(x + size * 0.4, y + size * 0.4, size * 0.6, size * 0.6),
                fill=fill,
                outline=glyph_color,
                width=line,
            )

    def border(self, border: PageBorder, width: int, height: int) -> None:
        stroke = self.stroke(border.width)
        self.draw.rectangle((0, 0, width - 1, height - 1), outline=border.color, width=stroke)
        if border.inner_color:
            inset = stroke * 2
            self.draw.rectangle(
                (inset, inset, width - 1 - inset, height - 1 - inset),
                outline=border.inner_color,
                width=max(1, stroke // 2),
            )


def rasterize_surface(
    surface: PageSurface,
    scale: float = 1.0,
    loader: ImageLoader | None = None,
) -> Image.Image:
    """Draw *surface* at *scale* device pixels per layout pixel."""
    width = max(1, round(surface.width * scale))
    height = max(1, round(surface.height * scale))
    image = Image.new("RGB", (width, height), _WHITE)

    painter = _Painter(image, scale, surface.background_color, loader)
    painter.draw.rectangle((0, 0, width, height), fill=surface.background_color)

    if surface.background_image_url and loader is not None:
        backdrop = loader.load(surface.background_image_url)
        if backdrop is not None:
            fitted = ImageOps.fit(backdrop, (width, height), Image.Resampling.LANCZOS)
            image.paste(fitted.convert("RGB"), (0, 0), fitted.getchannel("A"))

    for op in surface.ops:
        painter.paint(op)

    if surface.border is not None:
        painter.border(surface.border, width, height)
    return image
