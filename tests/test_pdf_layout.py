import pytest

from yatra.pdf_layout import (
    COMPACT, COMPACT_COLUMNS, CONTENT_W, COST_COLUMNS, PAGE_H, STANDARD, WIDE_COLUMNS,
    LayoutCursor, SectionBlock, baseline, flip_y, get_style,
)


def test_column_plans_fill_the_content_width():
    for plan in (COMPACT_COLUMNS, WIDE_COLUMNS, COST_COLUMNS):
        assert sum(plan) == CONTENT_W


def test_cursor_moves_down_only():
    c = LayoutCursor(y=155)
    assert c.advance(12).y == 167
    assert c.at(200).y == 200
    with pytest.raises(ValueError):
        c.advance(-1)
    with pytest.raises(ValueError):
        c.at(100)
    assert c.y == 155


def test_next_page_resets_offset_and_counts_pages():
    c = LayoutCursor(y=700).next_page(STANDARD.top_margin)
    assert (c.y, c.page) == (STANDARD.top_margin, 2)


def test_footer_band_geometry():
    assert STANDARD.footer_height == 270
    assert STANDARD.footer_top == pytest.approx(PAGE_H - 270)
    assert STANDARD.footer_bar_top == pytest.approx(PAGE_H - 115)


def test_coordinate_flip():
    assert flip_y(0) == PAGE_H
    assert baseline(100, 10) == pytest.approx(PAGE_H - 100 - 7.2)


def test_get_style():
    assert get_style("compact") is COMPACT
    assert get_style(" Standard ") is STANDARD
    assert get_style(None) is STANDARD
    assert get_style("glossy") is STANDARD


def test_section_block_stringifies_cells():
    block = SectionBlock.build("X", [["Qty", 8, None]], COST_COLUMNS[:3], "cost")
    assert block.rows == (("Qty", "8", ""),)
    assert block.widths == (250, 60, 90)
