# pdf.py
"""
Booking confirmation receipt.

    generate_booking_pdf(record, submission_id) -> bytes

The page is composed in a fixed order (header chrome, invoice, client,
booking, cost, terms, signatory, footer chrome). Every drawing step takes
the current LayoutCursor and returns the next one; the only branch is the
footer: if the cursor is already inside the footer band, exactly one new
page is started (watermark redrawn) and the footer goes there.
"""
from __future__ import annotations

import enum
import logging
from datetime import date, datetime
from typing import Any, List, Mapping, Optional, Sequence, Union

from asgiref.sync import sync_to_async
from django.conf import settings
from django.utils import timezone

from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from . import formatting as fmt
from .pricing import FinancialBreakdown, DISCOUNT_PERCENTAGE, compute
from .pdf_assets import (
    AssetProvider, Fonts, asset_names, draw_image, load_asset, load_fonts,
    static_asset_provider,
)
from .pdf_encoder import DocumentEncoder, ReceiptRenderError
from .pdf_layout import (
    CONTENT_W, LEFT, PAGE_W, PAGE_H, RIGHT,
    COMPACT_COLUMNS, COST_COLUMNS, WIDE_COLUMNS,
    ORANGE, PRIMARY, SECTION, TEXT, WATERMARK, WHITE,
    LayoutCursor, LayoutStyle, SectionBlock, baseline, flip_y, get_style,
)
from .pdf_tables import draw_section_block

logger = logging.getLogger(__name__)

__all__ = [
    "BookingRecordError", "ReceiptRenderError", "ComposerState",
    "generate_booking_pdf", "agenerate_booking_pdf", "receipt_filename",
]


class BookingRecordError(ValueError):
    """The caller passed no booking record at all; nothing was drawn."""


class ComposerState(enum.Enum):
    HEADER_CHROME = "header_chrome"
    INVOICE_SECTION = "invoice_section"
    CLIENT_SECTION = "client_section"
    BOOKING_SECTION = "booking_section"
    COST_SECTION = "cost_section"
    TERMS_SECTION = "terms_section"
    SIGNATORY = "signatory"
    FOOTER_CHROME = "footer_chrome"
    FINALIZED = "finalized"


# =====================================================================
# COMPANY / CONFIG
# =====================================================================

DEFAULT_COMPANY = {
    "LEGAL_NAME": "Yatrasutra Holidays Pvt. Ltd.",
    "DISPLAY_NAME": "YATRASUTRA HOLIDAYS PVT. LTD.",
    "FOOTER_NAME": "YATRASUTRA HOLIDAYS PVT LTD",
    "ADDRESS": (
        "Registered Address: 1st Floor, Penta Corner Building, Changampuzha Metro Station, "
        "Edapally, Kochi (Ernakulam) – Kerala, 682024, India"
    ),
    "CONTACT_LINE": (
        "Email: info@yatrasutra.com | Phone: +91 97468 16609 / +91 97468 26609 | "
        "Website: www.yatrasutra.com"
    ),
    "PHONES": ["+91 97468 16609", "+91 97468 26609"],
    "EMAILS": ["info@yatrasutra.com", "bookings@yatrasutra.com"],
    "WEBSITE": "yatrasutra.com",
    "UPI_ID": "yatrasutra@upi",
}

RECEIPT_TITLE = "BOOKING CONFIRMATION RECEIPT"
BALANCE_DUE_NOTE = "Balance Payable (Due 10 Days Before Check-in)"


def company_profile(overrides: Optional[Mapping[str, Any]] = None) -> dict:
    merged = dict(DEFAULT_COMPANY)
    merged.update(getattr(settings, "COMPANY", {}) or {})
    if overrides:
        merged.update(overrides)
    return merged


def configured_style() -> LayoutStyle:
    return get_style((getattr(settings, "BOOKING_PDF", {}) or {}).get("LAYOUT"))


def invoice_number(submission_id: str, now: Union[date, datetime]) -> str:
    prefix = (getattr(settings, "BOOKING_PDF", {}) or {}).get("INVOICE_PREFIX", "YS/INV")
    return f"{prefix}/{now:%Y}/{submission_id}"


def receipt_filename(submission_id: Any) -> str:
    return f"submission-{submission_id}.pdf"


# =====================================================================
# ROW BUILDERS (pure)
# =====================================================================

def _text(record: Mapping[str, Any], key: str) -> str:
    v = record.get(key)
    if v is None:
        return fmt.NA
    s = str(v).strip()
    return s or fmt.NA


def payment_status(fin: FinancialBreakdown) -> str:
    if fin.advance_amount <= 0:
        return "Pending"
    if fin.balance_payable <= 0:
        return "Paid in Full"
    return "Advance Paid"


def payment_mode(record: Mapping[str, Any], company: Mapping[str, Any]) -> str:
    mode = str(record.get("paymentMode") or "").strip()
    if not mode:
        return fmt.NA
    if mode.upper() == "UPI" and company.get("UPI_ID"):
        return f"UPI - {company['UPI_ID']}"
    return mode


def invoice_block(record, fin: FinancialBreakdown, *, submission_id: str, now, company) -> SectionBlock:
    issued = fmt.format_long_date(now)
    return SectionBlock.build("INVOICE DETAILS", [
        ["Invoice No.", invoice_number(submission_id, now)],
        ["Invoice Date", issued],
        ["Payment Status", payment_status(fin)],
        ["Payment Date", issued],
        ["Mode of Payment", payment_mode(record, company)],
    ], COMPACT_COLUMNS, "compact")


def client_block(record) -> SectionBlock:
    return SectionBlock.build("CLIENT DETAILS", [
        ["Client Name", _text(record, "clientName")],
        ["Email", _text(record, "email")],
        ["Contact No.", _text(record, "contactNo")],
        ["Booking Reference", fmt.booking_reference(record)],
    ], COMPACT_COLUMNS, "compact")


def booking_block(record, fin: FinancialBreakdown) -> SectionBlock:
    travel_dates = f"{fmt.format_date(record.get('checkInDate'))} - {fmt.format_date(record.get('checkOutDate'))}"
    rows: List[Sequence[str]] = [
        ["Destination", "Duration", "Travel Dates", "Guests", "Package Type", "Meal Plan"],
        [
            _text(record, "destination"),
            fmt.format_duration(record.get("duration")),
            travel_dates,
            f"{fin.number_of_adults} Adults",
            fmt.package_label(record.get("packageType")),
            _text(record, "mealPlan"),
        ],
    ]
    prop = str(record.get("propertyName") or "").strip()
    if prop:
        rows.append(["Property/Hotel", prop])
    return SectionBlock.build("BOOKING SUMMARY", rows, WIDE_COLUMNS, "wide")


def discount_label(record, fin: FinancialBreakdown) -> str:
    reason = str(record.get("discountReason") or "").strip()
    if reason:
        return f"Discount ({reason})"
    if fin.discount_type == DISCOUNT_PERCENTAGE:
        return f"Discount ({fin.discount_value.normalize():f}%)"
    return "Discount"


def cost_block(record, fin: FinancialBreakdown) -> SectionBlock:
    money = fmt.format_currency
    rows: List[Sequence[str]] = [
        ["Particulars", "Qty", "Rate (INR)", "Amount (INR)"],
        ["Tour Package Cost per Adult", str(fin.number_of_adults), money(fin.cost_per_adult), money(fin.subtotal)],
        ["Additional Services (if any)", "", "", "Included" if record.get("additionalServices") else "-"],
    ]
    if fin.has_discount:
        rows.append([discount_label(record, fin), "", "", f"- {money(fin.discount_amount)}"])
    rows += [
        ["Total Package Value", "", "", money(fin.total_package_value)],
        ["Advance Amount Received", "", "", money(fin.advance_amount)],
        [BALANCE_DUE_NOTE, "", "", money(fin.balance_payable)],
    ]
    return SectionBlock.build("COST BREAKDOWN", rows, COST_COLUMNS, "cost")


def terms_paragraphs(record, fin: FinancialBreakdown, company) -> List[str]:
    """Caller's free text (verbatim, one paragraph per line) or the five default clauses."""
    custom = record.get("termsAndNotes")
    if isinstance(custom, str) and custom.strip():
        return custom.splitlines()
    return [
        "• Advance payment confirms the booking.",
        f"• Balance payment of Rs.{fmt.format_currency(fin.balance_payable)} is due by "
        f"{fmt.format_date(record.get('checkInDate'))} (10 days before check-in).",
        "• Package once confirmed is non-refundable as per the company cancellation policy.",
        "• Any change in travel dates or number of guests is subject to availability and price revision.",
        f"• All communication and receipts are issued under {company['LEGAL_NAME']}.",
    ]


# =====================================================================
# CHROME
# =====================================================================

def _draw_watermark(c: canvas.Canvas, *, style: LayoutStyle, fonts: Fonts):
    cx, cy = style.watermark_center
    c.saveState()
    c.setFillColor(WATERMARK)
    c.setFillAlpha(style.watermark_alpha)
    c.translate(cx, flip_y(cy))
    c.rotate(45)
    c.setFont(fonts.body, style.watermark_size)
    c.drawCentredString(0, -style.watermark_size * 0.35, style.watermark_text)
    c.restoreState()


def _draw_header_chrome(c: canvas.Canvas, *, style: LayoutStyle, fonts: Fonts,
                        company: Mapping[str, Any], logo: Optional[bytes]) -> LayoutCursor:
    """Blue banner with logo, company name, receipt title and address. Returns the first content cursor."""
    c.saveState()
    c.setFillColor(PRIMARY)
    c.rect(0, flip_y(style.header_height), PAGE_W, style.header_height, stroke=0, fill=1)
    c.restoreState()

    lx, ltop, lsize = style.logo_box
    if not draw_image(c, logo, lx, ltop, lsize, lsize, label="logo"):
        logger.warning("logo unavailable; header slot left blank")

    c.saveState()
    c.setFillColor(WHITE)
    c.setFont(fonts.display, style.company_size)
    c.drawString(style.company_x, baseline(style.company_top, style.company_size), company["DISPLAY_NAME"])

    c.setFont(fonts.body, style.subtitle_size)
    if style.header_layout == "inline":
        c.drawRightString(RIGHT, baseline(style.subtitle_top, style.subtitle_size), RECEIPT_TITLE)
    else:
        c.drawCentredString(PAGE_W / 2.0, baseline(style.subtitle_top, style.subtitle_size), RECEIPT_TITLE)

    c.setFont(fonts.body, style.address_size)
    top = style.address_top
    for line in (company["ADDRESS"], company["CONTACT_LINE"]):
        if style.header_layout == "inline":
            c.drawString(style.company_x, baseline(top, style.address_size), line)
        else:
            c.drawCentredString(PAGE_W / 2.0, baseline(top, style.address_size), line)
        top += style.address_leading
    c.restoreState()

    return LayoutCursor(y=style.content_top)


def _draw_footer_chrome(c: canvas.Canvas, cursor: LayoutCursor, *, style: LayoutStyle, fonts: Fonts,
                        company: Mapping[str, Any], seal: Optional[bytes]) -> LayoutCursor:
    """Seal above an orange contact bar, company line below; all pinned to the page bottom."""
    bar_top = style.footer_bar_top
    size = style.seal_size
    seal_x = PAGE_W - size - style.seal_right_offset
    seal_top = bar_top - size - style.seal_gap
    if not draw_image(c, seal, seal_x, seal_top, size, size, label="seal"):
        logger.warning("seal unavailable; footer slot left blank")

    c.saveState()
    c.setFillColor(ORANGE)
    c.rect(LEFT, flip_y(bar_top + style.footer_bar_height), CONTENT_W, style.footer_bar_height, stroke=0, fill=1)

    c.setFillColor(WHITE)
    c.setFont(fonts.body, style.footer_text_size)
    phones = list(company.get("PHONES") or [])[:2]
    for i, phone in enumerate(phones):
        c.drawString(LEFT + 10, baseline(bar_top + 13 + 11 * i, style.footer_text_size), phone)

    emails = list(company.get("EMAILS") or [])[:2]
    for i, email in enumerate(emails):
        text = f"{email} |" if i == 0 and len(emails) > 1 else email
        c.drawRightString(RIGHT - 10, baseline(bar_top + 13 + 11 * i, style.footer_text_size), text)

    c.setFont(fonts.body, style.footer_site_size)
    c.drawCentredString(LEFT + CONTENT_W / 2.0, baseline(bar_top + 18, style.footer_site_size), company["WEBSITE"])

    company_top = bar_top + style.footer_bar_height + 8
    c.setFillColor(TEXT)
    c.setFont(fonts.body, style.footer_company_size)
    c.drawCentredString(PAGE_W / 2.0, baseline(company_top, style.footer_company_size), company["FOOTER_NAME"])
    c.restoreState()

    return cursor.at(max(cursor.y, company_top + style.footer_company_size))


# =====================================================================
# SECTIONS
# =====================================================================

def _draw_section_header(c: canvas.Canvas, cursor: LayoutCursor, label: str, *,
                         style: LayoutStyle, fonts: Fonts) -> LayoutCursor:
    h = style.section_header_height
    c.saveState()
    c.setFillColor(SECTION)
    c.rect(LEFT, flip_y(cursor.y + h), CONTENT_W, h, stroke=0, fill=1)
    c.setFillColor(TEXT)
    c.setFont(fonts.body, style.section_label_size)
    c.drawString(LEFT + style.section_label_inset, baseline(cursor.y + 2, style.section_label_size), label)
    c.restoreState()
    return cursor.advance(h)


def draw_table_section(c: canvas.Canvas, cursor: LayoutCursor, block: SectionBlock, *,
                       style: LayoutStyle, fonts: Fonts) -> LayoutCursor:
    cursor = _draw_section_header(c, cursor, block.label, style=style, fonts=fonts)
    end = draw_section_block(c, cursor.y, block, style=style, fonts=fonts)
    return cursor.at(end).advance(style.section_gap)


def draw_terms_section(c: canvas.Canvas, cursor: LayoutCursor, paragraphs: Sequence[str], *,
                       style: LayoutStyle, fonts: Fonts) -> LayoutCursor:
    cursor = _draw_section_header(c, cursor, "TERMS & NOTES", style=style, fonts=fonts)
    cursor = cursor.advance(style.terms_top_pad)

    x = LEFT + style.terms_inset
    width = CONTENT_W - style.terms_inset
    size = style.terms_font_size

    c.saveState()
    c.setFillColor(TEXT)
    c.setFont(fonts.body, size)
    for para in paragraphs:
        lines = simpleSplit(para, fonts.body, size, width) or [""]
        for line in lines:
            c.drawString(x, baseline(cursor.y, size), line)
            cursor = cursor.advance(style.terms_leading)
    c.restoreState()
    return cursor.advance(style.terms_gap_after)


def draw_signatory(c: canvas.Canvas, cursor: LayoutCursor, *, style: LayoutStyle, fonts: Fonts,
                   company: Mapping[str, Any]) -> LayoutCursor:
    lines = ["Authorized Signatory", "(Seal & Signature)", f"For {company['LEGAL_NAME']}"]
    c.saveState()
    c.setFillColor(TEXT)
    c.setFont(fonts.body, style.signatory_size)
    for i, line in enumerate(lines[:style.signatory_lines]):
        c.drawString(LEFT + style.terms_inset, baseline(cursor.y + i * style.signatory_leading, style.signatory_size), line)
    c.restoreState()
    return cursor.advance(style.signatory_height)


def needs_page_break(cursor: LayoutCursor, style: LayoutStyle) -> bool:
    """The single pagination decision: is the cursor already inside the footer band?"""
    return cursor.y > PAGE_H - style.footer_height


# =====================================================================
# PUBLIC API
# =====================================================================

def generate_booking_pdf(
    record: Mapping[str, Any],
    submission_id: Any,
    *,
    now: Union[date, datetime, None] = None,
    asset_provider: Optional[AssetProvider] = None,
    style: Union[LayoutStyle, str, None] = None,
    company: Optional[Mapping[str, Any]] = None,
) -> bytes:
    """
    Render the booking confirmation receipt for ``record`` and return the PDF bytes.

    ``now`` fixes the invoice/payment date (defaults to the local date);
    ``asset_provider`` supplies logo/seal/font bytes (defaults to static files);
    ``style`` is a LayoutStyle or preset name (defaults to settings.BOOKING_PDF["LAYOUT"]).

    Raises BookingRecordError before drawing if ``record`` is missing, and
    ReceiptRenderError if drawing or finalising fails.
    """
    if record is None or not isinstance(record, Mapping):
        raise BookingRecordError("booking record is required")

    if isinstance(style, str):
        style = get_style(style)
    style = style or configured_style()
    now = now or timezone.localtime()
    provider = asset_provider or static_asset_provider
    profile = company_profile(company)
    sid = str(submission_id).strip() if submission_id not in (None, "") else fmt.NA

    fin = compute(record)
    state = ComposerState.HEADER_CHROME

    try:
        names = asset_names()
        fonts = load_fonts(provider)
        encoder = DocumentEncoder(
            title=f"{RECEIPT_TITLE.title()} {sid}",
            author=profile["LEGAL_NAME"],
            subject=RECEIPT_TITLE.title(),
        )
        c = encoder.canvas

        _draw_watermark(c, style=style, fonts=fonts)
        cursor = _draw_header_chrome(c, style=style, fonts=fonts, company=profile,
                                     logo=load_asset(provider, names["LOGO"]))

        sections = (
            (ComposerState.INVOICE_SECTION,
             lambda: invoice_block(record, fin, submission_id=sid, now=now, company=profile)),
            (ComposerState.CLIENT_SECTION, lambda: client_block(record)),
            (ComposerState.BOOKING_SECTION, lambda: booking_block(record, fin)),
            (ComposerState.COST_SECTION, lambda: cost_block(record, fin)),
        )
        for state, build in sections:
            block = build()
            logger.debug("receipt %s: %s at y=%.1f", sid, state.value, cursor.y)
            cursor = draw_table_section(c, cursor, block, style=style, fonts=fonts)

        state = ComposerState.TERMS_SECTION
        cursor = draw_terms_section(c, cursor, terms_paragraphs(record, fin, profile), style=style, fonts=fonts)

        state = ComposerState.SIGNATORY
        cursor = draw_signatory(c, cursor, style=style, fonts=fonts, company=profile)

        state = ComposerState.FOOTER_CHROME
        if needs_page_break(cursor, style):
            logger.debug("receipt %s: footer does not fit at y=%.1f, new page", sid, cursor.y)
            encoder.new_page()
            cursor = cursor.next_page(style.top_margin)
            _draw_watermark(c, style=style, fonts=fonts)
        cursor = _draw_footer_chrome(c, cursor, style=style, fonts=fonts, company=profile,
                                     seal=load_asset(provider, names["SEAL"]))

        data = encoder.finalize()
        state = ComposerState.FINALIZED
    except ReceiptRenderError:
        logger.exception("receipt %s: finalize failed", sid)
        raise
    except Exception as e:
        logger.exception("receipt %s: render failed in %s", sid, state.value)
        raise ReceiptRenderError(f"receipt render failed in {state.value}: {e}") from e

    logger.info("receipt %s rendered: %d page(s), %d bytes", sid, encoder.page_count, len(data))
    return data


async def agenerate_booking_pdf(record: Mapping[str, Any], submission_id: Any, **kwargs) -> bytes:
    """Awaitable render; resolves once the whole document is in the buffer."""
    return await sync_to_async(generate_booking_pdf, thread_sensitive=False)(record, submission_id, **kwargs)
