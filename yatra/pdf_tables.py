# pdf_tables.py
"""
Fixed-width bordered tables for the booking receipt.

Every variant shares one algorithm: rows of fixed-height cells laid out from
LEFT, each cell a stroked rectangle with its text left-anchored and clipped
to the cell box. Variants only differ in their column plan and font sizes.
All functions take the top offset of the table and return the offset just
below its last row.
"""
from __future__ import annotations

from typing import Optional, Sequence

from reportlab.pdfgen import canvas

from .pdf_assets import Fonts, DEFAULT_FONTS
from .pdf_layout import (
    LEFT, TEXT, COMPACT_COLUMNS, WIDE_COLUMNS, COST_COLUMNS,
    LayoutStyle, SectionBlock, STANDARD, baseline, flip_y,
)

COMPACT_INSET = 3
GRID_INSET = 2


def _draw_cell(c: canvas.Canvas, x: float, top: float, w: float, h: float, text: str,
               font: str, size: float, inset: float, text_top: float):
    c.saveState()
    c.setLineWidth(1)
    c.setStrokeColor(TEXT)
    c.rect(x, flip_y(top + h), w, h, stroke=1, fill=0)
    if text:
        # long values are cut at the border rather than wrapped
        p = c.beginPath()
        p.rect(x, flip_y(top + h), w, h)
        c.clipPath(p, stroke=0, fill=0)
        c.setFillColor(TEXT)
        c.setFont(font, size)
        c.drawString(x + inset, baseline(top + text_top, size), text)
    c.restoreState()


def draw_table(
    c: canvas.Canvas,
    y: float,
    rows: Sequence[Sequence[object]],
    widths: Sequence[float],
    *,
    style: LayoutStyle = STANDARD,
    font: str = DEFAULT_FONTS.body,
    font_size: float = 7,
    header_font_size: Optional[float] = None,
    inset: float = GRID_INSET,
) -> float:
    """
    Draw ``rows`` starting at top offset ``y``. Short rows still get every
    column's border; cells past the last column are ignored.
    Returns the offset below the last row.
    """
    h = style.cell_height
    cur = y
    for index, row in enumerate(rows):
        size = header_font_size if (index == 0 and header_font_size) else font_size
        x = LEFT
        for col, w in enumerate(widths):
            cell = row[col] if col < len(row) else ""
            text = "" if cell is None else str(cell)
            _draw_cell(c, x, cur, w, h, text, font, size, inset, style.cell_text_top)
            x += w
        cur += h
    return cur


def draw_compact_table(c: canvas.Canvas, y: float, rows: Sequence[Sequence[object]], *,
                       style: LayoutStyle = STANDARD, fonts: Fonts = DEFAULT_FONTS,
                       widths: Sequence[float] = COMPACT_COLUMNS) -> float:
    """Two columns: label | value."""
    return draw_table(c, y, rows, widths, style=style, font=fonts.body,
                      font_size=style.compact_font_size, inset=COMPACT_INSET)


def draw_wide_table(c: canvas.Canvas, y: float, rows: Sequence[Sequence[object]], *,
                    style: LayoutStyle = STANDARD, fonts: Fonts = DEFAULT_FONTS,
                    widths: Sequence[float] = WIDE_COLUMNS) -> float:
    """Six columns: header row of labels, then value rows."""
    return draw_table(c, y, rows, widths, style=style, font=fonts.body,
                      font_size=style.wide_font_size)


def draw_cost_table(c: canvas.Canvas, y: float, rows: Sequence[Sequence[object]], *,
                    style: LayoutStyle = STANDARD, fonts: Fonts = DEFAULT_FONTS,
                    widths: Sequence[float] = COST_COLUMNS) -> float:
    """Four columns: particulars | qty | rate | amount. First row is the header."""
    return draw_table(c, y, rows, widths, style=style, font=fonts.body,
                      font_size=style.cost_font_size, header_font_size=style.cost_header_font_size)


_RENDERERS = {
    "compact": draw_compact_table,
    "wide": draw_wide_table,
    "cost": draw_cost_table,
}


def draw_section_block(c: canvas.Canvas, y: float, block: SectionBlock, *,
                       style: LayoutStyle = STANDARD, fonts: Fonts = DEFAULT_FONTS) -> float:
    renderer = _RENDERERS.get(block.kind)
    if renderer is None:
        raise ValueError(f"unknown table kind: {block.kind!r}")
    return renderer(c, y, block.rows, style=style, fonts=fonts, widths=block.widths)
