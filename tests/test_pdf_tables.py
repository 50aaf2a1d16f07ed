from unittest import mock

import pytest

from yatra.pdf_layout import LEFT, STANDARD, SectionBlock
from yatra.pdf_tables import (
    COMPACT_INSET, draw_compact_table, draw_cost_table, draw_section_block, draw_table,
)


@pytest.fixture
def canvas():
    return mock.MagicMock(name="canvas")


def test_draw_table_returns_offset_below_last_row(canvas):
    end = draw_table(canvas, 100, [["a", "b"], ["c", "d"], ["e", "f"]], (200, 295))
    assert end == 100 + 3 * STANDARD.cell_height
    assert canvas.rect.call_count == 6
    assert canvas.drawString.call_count == 6


def test_short_rows_still_draw_every_border(canvas):
    draw_table(canvas, 0, [["only"]], (80, 70, 100))
    assert canvas.rect.call_count == 3
    assert canvas.drawString.call_count == 1
    # empty cells are not clipped either
    assert canvas.clipPath.call_count == 1


def test_extra_cells_are_ignored(canvas):
    draw_table(canvas, 0, [["a", "b", "c"]], (200, 295))
    texts = [call.args[2] for call in canvas.drawString.call_args_list]
    assert texts == ["a", "b"]


def test_compact_table_text_inset(canvas):
    draw_compact_table(canvas, 0, [["Invoice No.", "YS/INV/2026/x"]])
    xs = [call.args[0] for call in canvas.drawString.call_args_list]
    assert xs == [LEFT + COMPACT_INSET, LEFT + 200 + COMPACT_INSET]


def test_cost_table_header_row_uses_header_size(canvas):
    draw_cost_table(canvas, 0, [["Particulars", "Qty"], ["Tour", "8"]])
    sizes = [call.args[1] for call in canvas.setFont.call_args_list]
    assert sizes[:2] == [STANDARD.cost_header_font_size] * 2
    assert sizes[2:] == [STANDARD.cost_font_size] * 2


def test_section_block_dispatch(canvas):
    block = SectionBlock.build("CLIENT DETAILS", [["Email", "a@b.c"]], (200, 295), "compact")
    assert draw_section_block(canvas, 10, block) == 10 + STANDARD.cell_height

    with pytest.raises(ValueError):
        draw_section_block(canvas, 10, SectionBlock.build("X", [], (495,), "pie"))
