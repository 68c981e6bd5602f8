"""Inline text wrapping, flow blocks and explicit pagination.

Templates describe a document as an ordered flow of :class:`Block` objects.
Each block is a stack of :class:`Row` objects whose heights are known up
front, so :func:`paginate` can report page breaks before anything is drawn.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from cv_studio.rendering.fonts import line_box_height, text_width
from cv_studio.rendering.surface import DrawOp, FontSpec, TextOp, translate

__all__ = [
    "Block",
    "PlacedRow",
    "Row",
    "Run",
    "Span",
    "flow_height",
    "paginate",
    "place_rows",
    "stack_rows",
    "text_rows",
    "wrap_runs",
]

Alignment = Literal["left", "center", "right"]

_EPSILON = 0.01


@dataclass(frozen=True)
class Run:
    """A piece of inline text sharing one font and color."""

    text: str
    font: FontSpec
    color: str
    opacity: float = 1.0
    link: str = ""


@dataclass(frozen=True)
class Span:
    """A laid-out fragment of a :class:`Run` on one line."""

    x: float
    text: str
    run: Run

    @property
    def width(self) -> float:
        return text_width(self.text, self.run.font)


@dataclass(frozen=True)
class Row:
    """A horizontal strip of draw ops; op coordinates are row-relative."""

    height: float
    ops: tuple[DrawOp, ...] = ()


@dataclass(frozen=True)
class Block:
    """Rows that stay together on a page unless the block exceeds a page."""

    key: str
    rows: tuple[Row, ...]
    spacer: bool = False

    @property
    def height(self) -> float:
        return sum(row.height for row in self.rows)

    @classmethod
    def gap(cls, key: str, height: float) -> Block:
        return cls(key=key, rows=(Row(height=height),), spacer=True)


@dataclass(frozen=True)
class PlacedRow:
    y: float
    row: Row


@dataclass
class _Token:
    text: str
    run: Run
    width: float
    space_before: float
    forced_break: bool = False


def _tokenize(runs: list[Run]) -> list[_Token]:
    tokens: list[_Token] = []
    space_pending = False
    for run in runs:
        space_width = text_width(" ", run.font)
        for line_index, line in enumerate(run.text.split("\n")):
            if line_index > 0:
                tokens.append(_Token("", run, 0.0, 0.0, forced_break=True))
                space_pending = False
            if line[:1].isspace():
                space_pending = True
            for word in line.split():
                gap = space_width if space_pending and tokens else 0.0
                tokens.append(_Token(word, run, text_width(word, run.font), gap))
                space_pending = True
            if line:
                space_pending = line[-1].isspace()
    return tokens


def _split_long_word(token: _Token, max_width: float) -> list[_Token]:
    pieces: list[_Token] = []
    current = ""
    for char in token.text:
        candidate = current + char
        if current and text_width(candidate, token.run.font) > max_width:
            pieces.append(_Token(current, token.run, text_width(current, token.run.font), 0.0))
            current = char
        else:
            current = candidate
    if current:
        pieces.append(_Token(current, token.run, text_width(current, token.run.font), 0.0))
    if pieces:
        pieces[0].space_before = token.space_before
    return pieces


def wrap_runs(runs: list[Run], max_width: float) -> list[list[Span]]:
    """Greedy word wrap of mixed-font *runs* into lines no wider than *max_width*.

    Explicit ``\\n`` forces a break. A word wider than the line is broken
    between characters.
    """
    lines: list[list[_Token]] = [[]]
    width = 0.0
    for token in _tokenize(runs):
        if token.forced_break:
            lines.append([])
            width = 0.0
            continue
        candidates = [token]
        if token.width > max_width:
            candidates = _split_long_word(token, max_width)
        for piece in candidates:
            gap = piece.space_before if lines[-1] else 0.0
            if lines[-1] and width + gap + piece.width > max_width + _EPSILON:
                lines.append([])
                width = 0.0
                gap = 0.0
            piece.space_before = gap
            lines[-1].append(piece)
            width += gap + piece.width

    wrapped: list[list[Span]] = []
    for line in lines:
        spans: list[Span] = []
        x = 0.0
        for token in line:
            x += token.space_before
            previous = spans[-1] if spans else None
            if previous is not None and previous.run == token.run:
                joiner = " " if token.space_before else ""
                spans[-1] = Span(previous.x, f"{previous.text}{joiner}{token.text}", token.run)
            else:
                spans.append(Span(x, token.text, token.run))
            x += token.width
        wrapped.append(spans)
    return wrapped


def _line_width(spans: list[Span]) -> float:
    if not spans:
        return 0.0
    last = spans[-1]
    return last.x + last.width


def text_rows(
    runs: list[Run],
    max_width: float,
    line_height: float,
    *,
    align: Alignment = "left",
    indent: float = 0.0,
) -> list[Row]:
    """Wrap *runs* and return one :class:`Row` of text ops per line."""
    if not any(run.text.strip() for run in runs):
        return []
    available = max(1.0, max_width - indent)
    rows: list[Row] = []
    for spans in wrap_runs(runs, available):
        tallest = max((span.run.font for span in spans), key=lambda f: f.size, default=None)
        if tallest is None:
            tallest = runs[0].font if runs else FontSpec("inter", 12)
        height = line_box_height(tallest, line_height)
        offset = indent
        if align != "left":
            slack = available - _line_width(spans)
            offset += slack / 2 if align == "center" else slack
        ops = tuple(
            TextOp(
                x=offset + span.x,
                y=0.0,
                text=span.text,
                font=span.run.font,
                color=span.run.color,
                line_height=height,
                opacity=span.run.opacity,
                link=span.run.link,
            )
            for span in spans
        )
        rows.append(Row(height=height, ops=ops))
    return rows


def flow_height(blocks: list[Block]) -> float:
    return sum(block.height for block in blocks)


def paginate(blocks: list[Block], content_height: float) -> list[list[PlacedRow]]:
    """Assign every row of *blocks* to a page of *content_height* pixels.

    A block that does not fit on the current page moves to the next one; a
    block taller than a whole page is split between rows. Spacers never start
    a page. Always returns at least one (possibly empty) page.
    """
    pages: list[list[PlacedRow]] = [[]]
    cursor = 0.0

    def new_page() -> None:
        nonlocal cursor
        pages.append([])
        cursor = 0.0

    for block in blocks:
        height = block.height
        if block.spacer:
            if not pages[-1]:
                continue
            if cursor + height > content_height + _EPSILON:
                new_page()
                continue
            pages[-1].extend(PlacedRow(cursor, row) for row in block.rows)
            cursor += height
            continue

        fits_here = cursor + height <= content_height + _EPSILON
        if not fits_here and pages[-1] and height <= content_height + _EPSILON:
            new_page()
            fits_here = True

        if fits_here:
            for row in block.rows:
                pages[-1].append(PlacedRow(cursor, row))
                cursor += row.height
            continue

        for row in block.rows:
            if pages[-1] and cursor + row.height > content_height + _EPSILON:
                new_page()
            pages[-1].append(PlacedRow(cursor, row))
            cursor += row.height

    if len(pages) > 1 and not pages[-1]:
        pages.pop()
    return pages


def place_rows(rows: list[PlacedRow], x: float, y: float) -> list[DrawOp]:
    """Translate placed rows into surface coordinates at origin ``(x, y)``."""
    ops: list[DrawOp] = []
    for placed in rows:
        ops.extend(translate(op, x, y + placed.y) for op in placed.row.ops)
    return ops


def stack_rows(blocks: list[Block]) -> list[PlacedRow]:
    """Lay out *blocks* as one unbroken column (no pagination)."""
    placed: list[PlacedRow] = []
    cursor = 0.0
    for block in blocks:
        for row in block.rows:
            placed.append(PlacedRow(cursor, row))
            cursor += row.height
    return placed

