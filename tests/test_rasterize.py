"""Tests for Pillow rasterization of page surfaces."""

from __future__ import annotations

import base64
import io
from pathlib import Path

import httpx
from PIL import Image, ImageOps

from cv_studio.rendering.rasterize import ImageLoader, rasterize_surface
from cv_studio.rendering.surface import (
    FontSpec,
    ImageOp,
    PageBorder,
    PageSurface,
    RectOp,
    TextOp,
)


def _png_bytes(color: str, size: tuple[int, int] = (8, 8)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def _data_uri(color: str) -> str:
    return "data:image/png;base64," + base64.b64encode(_png_bytes(color)).decode("ascii")


class TestRasterizeSurface:
    def test_size_scales_with_oversampling(self) -> None:
        image = rasterize_surface(PageSurface(100, 50), 4.0)
        assert image.size == (400, 200)
        assert image.mode == "RGB"

    def test_background_fill(self) -> None:
        image = rasterize_surface(PageSurface(20, 20, background_color="#00ff00"))
        assert image.getpixel((10, 10)) == (0, 255, 0)

    def test_rect_drawn_at_scaled_position(self) -> None:
        surface = PageSurface(40, 40, ops=[RectOp(10, 10, 10, 10, fill="#ff0000")])
        image = rasterize_surface(surface, 2.0)
        assert image.getpixel((30, 30)) == (255, 0, 0)
        assert image.getpixel((5, 5)) == (255, 255, 255)

    def test_border_drawn_on_edges(self) -> None:
        surface = PageSurface(40, 40, border=PageBorder("#0000ff", width=2))
        image = rasterize_surface(surface)
        assert image.getpixel((0, 0)) == (0, 0, 255)
        assert image.getpixel((20, 20)) == (255, 255, 255)

    def test_text_leaves_ink(self) -> None:
        op = TextOp(2, 2, "Hello", FontSpec("inter", 16), "#000000", line_height=20)
        image = rasterize_surface(PageSurface(120, 30, ops=[op]))
        assert ImageOps.invert(image).getbbox() is not None

    def test_translucent_text_blends_with_fill_beneath(self) -> None:
        ops = [
            RectOp(0, 0, 200, 60, fill="#000000"),
            TextOp(4, 4, "MMMM", FontSpec("inter", 40), "#ffffff", line_height=50, opacity=0.5),
        ]
        image = rasterize_surface(PageSurface(200, 60, ops=ops))

        brightest = max(image.convert("L").getdata())
        assert 60 < brightest < 160

    def test_image_op_pasted_from_data_uri(self) -> None:
        op = ImageOp(0, 0, 10, 10, _data_uri("#ff0000"))
        image = rasterize_surface(PageSurface(20, 20, ops=[op]), 1.0, ImageLoader())
        assert image.getpixel((5, 5)) == (255, 0, 0)
        assert image.getpixel((15, 15)) == (255, 255, 255)

    def test_unloadable_image_is_skipped(self) -> None:
        op = ImageOp(0, 0, 10, 10, "/definitely/not/here.png")
        image = rasterize_surface(PageSurface(20, 20, ops=[op]), 1.0, ImageLoader())
        assert image.getpixel((5, 5)) == (255, 255, 255)

    def test_background_image_covers_page(self) -> None:
        surface = PageSurface(20, 20, background_image_url=_data_uri("#00ffff"))
        image = rasterize_surface(surface, 1.0, ImageLoader())
        assert image.getpixel((10, 10)) == (0, 255, 255)


class TestImageLoader:
    def test_http_source_fetched_once(self) -> None:
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(str(request.url))
            return httpx.Response(200, content=_png_bytes("#ff0000"))

        loader = ImageLoader(client=httpx.Client(transport=httpx.MockTransport(handler)))
        first = loader.load("https://example.com/photo.png")
        second = loader.load("https://example.com/photo.png")
        assert first is not None
        assert first is second
        assert first.mode == "RGBA"
        assert len(calls) == 1

    def test_http_error_yields_none(self) -> None:
        loader = ImageLoader(
            client=httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(404)))
        )
        assert loader.load("https://example.com/missing.png") is None

    def test_garbage_bytes_yield_none(self) -> None:
        payload = base64.b64encode(b"not an image").decode("ascii")
        assert ImageLoader().load(f"data:image/png;base64,{payload}") is None

    def test_local_paths_refused_by_default(self, tmp_path: Path) -> None:
        picture = tmp_path / "photo.png"
        picture.write_bytes(_png_bytes("#ff0000"))

        assert ImageLoader().load(str(picture)) is None
        assert ImageLoader(allow_local_paths=True).load(str(picture)) is not None

    def test_failures_are_not_cached(self) -> None:
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            if len(calls) == 1:
                return httpx.Response(503)
            return httpx.Response(200, content=_png_bytes("#00ff00"))

        loader = ImageLoader(client=httpx.Client(transport=httpx.MockTransport(handler)))

        assert loader.load("https://example.com/flaky.png") is None
        assert loader.load("https://example.com/flaky.png") is not None
        assert len(calls) == 2

    def test_cache_keeps_most_recent_entries(self) -> None:
        loader = ImageLoader(max_entries=2)
        red, green, blue = _data_uri("#ff0000"), _data_uri("#00ff00"), _data_uri("#0000ff")
        first_red = loader.load(red)
        loader.load(green)
        loader.load(blue)

        assert len(loader) == 2
        assert loader.load(red) is not first_red
