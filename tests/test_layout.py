"""Tests for text wrapping and explicit pagination."""

from __future__ import annotations

from cv_studio.rendering.fonts import text_width
from cv_studio.rendering.layout import (
    Block,
    Row,
    Run,
    flow_height,
    paginate,
    place_rows,
    stack_rows,
    text_rows,
    wrap_runs,
)
from cv_studio.rendering.surface import FontSpec, RectOp, TextOp

FONT = FontSpec("inter", 12)


def _block(key: str, *heights: float) -> Block:
    return Block(key, tuple(Row(h) for h in heights))


class TestWrapRuns:
    def test_short_text_single_line(self) -> None:
        lines = wrap_runs([Run("Hello world", FONT, "#000000")], 500)
        assert len(lines) == 1
        assert lines[0][0].text == "Hello world"

    def test_long_text_wraps_within_width(self) -> None:
        text = " ".join(["responsibility"] * 12)
        max_width = 200
        lines = wrap_runs([Run(text, FONT, "#000000")], max_width)
        assert len(lines) > 1
        for spans in lines:
            last = spans[-1]
            assert last.x + last.width <= max_width + 0.5

    def test_newline_forces_break(self) -> None:
        lines = wrap_runs([Run("first\nsecond", FONT, "#000000")], 1000)
        assert [spans[0].text for spans in lines] == ["first", "second"]

    def test_overlong_word_is_split(self) -> None:
        word = "x" * 80
        lines = wrap_runs([Run(word, FONT, "#000000")], 50)
        assert len(lines) > 1
        assert "".join(span.text for spans in lines for span in spans) == word

    def test_mixed_runs_keep_their_fonts(self) -> None:
        bold = FontSpec("inter", 12, bold=True)
        lines = wrap_runs(
            [Run("Skills:", bold, "#111111"), Run(" Python, SQL", FONT, "#333333")], 1000
        )
        assert len(lines) == 1
        assert [span.run.font for span in lines[0]] == [bold, FONT]
        assert lines[0][1].x >= text_width("Skills:", bold)


class TestTextRows:
    def test_blank_text_has_no_rows(self) -> None:
        assert text_rows([Run("   ", FONT, "#000000")], 300, 1.4) == []

    def test_rows_carry_text_ops(self) -> None:
        rows = text_rows([Run("Hello", FONT, "#000000")], 300, 1.4)
        assert len(rows) == 1
        op = rows[0].ops[0]
        assert isinstance(op, TextOp)
        assert op.text == "Hello"
        assert rows[0].height > 0

    def test_right_alignment_shifts_text(self) -> None:
        left = text_rows([Run("Hi", FONT, "#000000")], 300, 1.4)[0].ops[0]
        right = text_rows([Run("Hi", FONT, "#000000")], 300, 1.4, align="right")[0].ops[0]
        assert right.x > left.x


class TestPaginate:
    def test_always_at_least_one_page(self) -> None:
        assert paginate([], 1000) == [[]]

    def test_everything_fits_on_one_page(self) -> None:
        pages = paginate([_block("a", 100), _block("b", 200)], 1000)
        assert len(pages) == 1
        assert [placed.y for placed in pages[0]] == [0, 100]

    def test_block_that_does_not_fit_moves_to_next_page(self) -> None:
        pages = paginate([_block("a", 600), _block("b", 300, 200)], 1000)
        assert len(pages) == 2
        assert len(pages[0]) == 1
        assert [placed.y for placed in pages[1]] == [0, 300]

    def test_oversized_block_splits_between_rows(self) -> None:
        pages = paginate([_block("big", *[300] * 5)], 1000)
        assert [len(page) for page in pages] == [3, 2]

    def test_spacer_never_starts_a_page(self) -> None:
        pages = paginate(
            [_block("a", 900), Block.gap("gap", 200), _block("b", 100)],
            1000,
        )
        assert len(pages) == 2
        assert pages[1][0].y == 0
        assert pages[1][0].row.height == 100

    def test_leading_spacer_dropped(self) -> None:
        pages = paginate([Block.gap("gap", 50), _block("a", 100)], 1000)
        assert pages[0][0].y == 0

    def test_pages_preserve_source_order(self) -> None:
        rows = [Row(400, (RectOp(0, 0, 10, 10, fill=f"#00000{i}"),)) for i in range(5)]
        blocks = [Block(f"b{i}", (row,)) for i, row in enumerate(rows)]
        pages = paginate(blocks, 1000)
        flattened = [placed.row for page in pages for placed in page]
        assert flattened == rows


class TestStacking:
    def test_flow_height_and_stack(self) -> None:
        blocks = [_block("a", 10, 20), _block("b", 30)]
        assert flow_height(blocks) == 60
        assert [placed.y for placed in stack_rows(blocks)] == [0, 10, 30]

    def test_place_rows_offsets_ops(self) -> None:
        row = Row(20, (RectOp(1, 2, 5, 5, fill="#000000"),))
        pages = paginate([Block("a", (row,))], 100)
        (op,) = place_rows(pages[0], 10, 30)
        assert (op.x, op.y) == (11, 32)
