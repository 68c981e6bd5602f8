"""Tests for the HTML serializer used by the DOCX export."""

from __future__ import annotations

from cv_studio.rendering.markup import render_markup
from cv_studio.rendering.surface import FontSpec, ImageOp, PageBorder, PageSurface, TextOp


def _text(text: str, link: str = "") -> TextOp:
    return TextOp(10, 20, text, FontSpec("inter", 12), "#111111", 16, link=link)


class TestRenderMarkup:
    def test_one_div_per_page(self) -> None:
        pages = [PageSurface(794, 1123, index=i, count=2) for i in range(2)]
        html = render_markup(pages)
        assert html.count('class="a4-page"') == 2
        assert 'id="cv-preview-content"' in html
        assert 'data-page="2"' in html

    def test_unmarked_root(self) -> None:
        html = render_markup([PageSurface(794, 1500, is_page=False)], root_id="root-x")
        assert 'class="cv-root"' in html
        assert "a4-page\"" not in html
        assert 'id="root-x"' in html

    def test_text_is_escaped(self) -> None:
        html = render_markup([PageSurface(794, 1123, ops=[_text("R&D <lead>")])])
        assert "R&amp;D &lt;lead&gt;" in html
        assert "<lead>" not in html

    def test_links_and_images(self) -> None:
        ops = [
            _text("github.com/jane", link="https://github.com/jane"),
            ImageOp(0, 0, 96, 96, "https://example.com/me.png", circular=True),
        ]
        html = render_markup([PageSurface(794, 1123, ops=ops)])
        assert 'href="https://github.com/jane"' in html
        assert 'src="https://example.com/me.png"' in html
        assert "border-radius:50%" in html

    def test_background_and_border(self) -> None:
        page = PageSurface(
            794,
            1123,
            background_image_url="https://example.com/bg.png",
            border=PageBorder("#ff0000"),
        )
        html = render_markup([page], title="Jane Doe")
        assert "background-image:url(&#39;https://example.com/bg.png&#39;)" in html
        assert "solid #ff0000" in html
        assert "<title>Jane Doe</title>" in html

    def test_background_url_cannot_break_out_of_css_string(self) -> None:
        page = PageSurface(
            794, 1123, background_image_url="https://example.com/bg.png');color:red;x:('"
        )
        html = render_markup([page])
        assert "url(&#39;https://example.com/bg.png%27);color:red;x:(%27&#39;)" in html
        assert "bg.png&#39;)" not in html

    def test_data_uri_background_kept_intact(self) -> None:
        uri = "data:image/png;base64,iVBORw0KGgo="
        html = render_markup([PageSurface(794, 1123, background_image_url=uri)])
        assert f"url(&#39;{uri}&#39;)" in html
