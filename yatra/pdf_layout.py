# pdf_layout.py
"""
Design tokens, layout presets and the layout cursor shared by the receipt
composer and the table renderer.

All vertical positions in the receipt code are measured from the TOP edge of
the page, growing downwards (the cursor only ever moves down within a page).
reportlab measures from the bottom, so every draw call goes through
``flip_y`` / ``baseline``.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence, Tuple

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4


# =====================================================================
# PAGE GEOMETRY
# =====================================================================

PAGE_W, PAGE_H = A4
MARGIN = 50
LEFT = MARGIN
CONTENT_W = 495           # 50 .. 545
RIGHT = LEFT + CONTENT_W

# Helvetica ascent (718/1000) rounded; top-anchored text sits this far above its baseline
TEXT_ASCENT = 0.72


def flip_y(top: float) -> float:
    """Top-down offset -> reportlab y."""
    return PAGE_H - top


def baseline(top: float, size: float) -> float:
    """reportlab baseline for text whose line box starts at ``top``."""
    return PAGE_H - top - size * TEXT_ASCENT


# =====================================================================
# COLORS
# =====================================================================

def _hex(rgb: str) -> colors.Color:
    rgb = rgb.lstrip("#")
    r, g, b = tuple(int(rgb[i:i+2], 16) / 255 for i in (0, 2, 4))
    return colors.Color(r, g, b)


PRIMARY   = _hex("#1E3A8A")   # header bar
ORANGE    = _hex("#F97316")   # footer bar
SECTION   = _hex("#FBBF24")   # section header bars
WATERMARK = _hex("#E5E7EB")
TEXT      = _hex("#000000")
WHITE     = _hex("#FFFFFF")


# =====================================================================
# TABLE COLUMN PLANS (points, sum to CONTENT_W)
# =====================================================================

COMPACT_COLUMNS: Tuple[float, ...] = (200, 295)
WIDE_COLUMNS: Tuple[float, ...] = (80, 70, 100, 60, 90, 95)
COST_COLUMNS: Tuple[float, ...] = (250, 60, 90, 95)


# =====================================================================
# LAYOUT STYLES
# =====================================================================

@dataclass(frozen=True)
class LayoutStyle:
    name: str

    # header chrome
    header_layout: str = "banner"      # "banner" (centered subtitle) | "inline"
    header_height: float = 140
    content_top: float = 155
    logo_box: Tuple[float, float, float] = (70, 25, 50)   # x, top, size
    company_x: float = 135
    company_top: float = 40
    company_size: float = 20
    subtitle_top: float = 65
    subtitle_size: float = 11
    address_top: float = 90
    address_size: float = 6.5
    address_leading: float = 10

    # continuation pages
    top_margin: float = MARGIN

    # sections
    section_header_height: float = 12
    section_label_size: float = 8
    section_label_inset: float = 5
    section_gap: float = 4

    # tables
    cell_height: float = 12
    cell_text_top: float = 3
    compact_font_size: float = 7
    wide_font_size: float = 6.5
    cost_font_size: float = 6.5
    cost_header_font_size: float = 7

    # terms & signatory
    terms_top_pad: float = 1
    terms_font_size: float = 7
    terms_leading: float = 8
    terms_inset: float = 5
    terms_gap_after: float = 8
    signatory_size: float = 8
    signatory_leading: float = 13
    signatory_lines: int = 3

    # footer chrome (anchored to the page bottom)
    footer_bar_height: float = 45
    footer_bottom_offset: float = 70
    seal_size: float = 150
    seal_right_offset: float = 65
    seal_gap: float = 5
    footer_text_size: float = 7.5
    footer_site_size: float = 8
    footer_company_size: float = 9

    # watermark
    watermark_text: str = "YATRASUTRA"
    watermark_size: float = 70
    watermark_alpha: float = 0.3
    watermark_center: Tuple[float, float] = (300, 400)

    @property
    def footer_height(self) -> float:
        """Vertical space the footer block (seal + bar + company line) reserves at the page bottom."""
        return self.seal_size + self.seal_gap + self.footer_bar_height + self.footer_bottom_offset

    @property
    def footer_top(self) -> float:
        return PAGE_H - self.footer_height

    @property
    def footer_bar_top(self) -> float:
        return PAGE_H - self.footer_bar_height - self.footer_bottom_offset

    @property
    def signatory_height(self) -> float:
        return self.signatory_leading * (self.signatory_lines - 1) + self.signatory_size


STANDARD = LayoutStyle(name="standard")

COMPACT = LayoutStyle(
    name="compact",
    header_layout="inline",
    header_height=100,
    content_top=112,
    logo_box=(60, 18, 40),
    company_x=110,
    company_top=26,
    company_size=16,
    subtitle_top=48,
    subtitle_size=10,
    address_top=70,
    address_size=6,
    address_leading=9,
    section_header_height=11,
    section_label_size=7.5,
    section_gap=3,
    cell_height=11,
    cell_text_top=2.5,
    compact_font_size=6.5,
    wide_font_size=6,
    cost_font_size=6,
    cost_header_font_size=6.5,
    terms_leading=7.5,
    terms_gap_after=6,
    signatory_leading=12,
    seal_size=120,
)

LAYOUT_STYLES = {s.name: s for s in (STANDARD, COMPACT)}


def get_style(name: str | None) -> LayoutStyle:
    """Preset by name; unknown/empty names fall back to STANDARD."""
    return LAYOUT_STYLES.get((name or "").strip().lower(), STANDARD)


# =====================================================================
# CURSOR & SECTION BLOCKS
# =====================================================================

@dataclass(frozen=True)
class LayoutCursor:
    """Vertical offset from the top of the current page, plus the page number."""
    y: float
    page: int = 1

    def advance(self, dy: float) -> "LayoutCursor":
        if dy < 0:
            raise ValueError("cursor cannot move up within a page")
        return replace(self, y=self.y + dy)

    def at(self, y: float) -> "LayoutCursor":
        """Jump to an absolute offset at or below the current one (e.g. a renderer's return value)."""
        if y < self.y:
            raise ValueError(f"cursor cannot move up within a page ({y} < {self.y})")
        return replace(self, y=y)

    def next_page(self, top: float) -> "LayoutCursor":
        return LayoutCursor(y=top, page=self.page + 1)


@dataclass(frozen=True)
class SectionBlock:
    label: str
    rows: Tuple[Tuple[str, ...], ...]
    widths: Tuple[float, ...]
    kind: str = "compact"     # compact | wide | cost

    @classmethod
    def build(cls, label: str, rows: Sequence[Sequence[object]], widths: Sequence[float], kind: str) -> "SectionBlock":
        return cls(
            label=label,
            rows=tuple(tuple("" if cell is None else str(cell) for cell in row) for row in rows),
            widths=tuple(widths),
            kind=kind,
        )
