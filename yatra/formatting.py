# formatting.py
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Any, Mapping, Optional

NA = "N/A"

PACKAGE_TYPES = {
    "deluxe": "Deluxe",
    "standard": "Standard",
    "premium": "Premium",
    "luxury": "Luxury",
}

_THREE_PLACES = Decimal("0.001")


# =====================================================================
# DATES
# =====================================================================

def _as_date(value: Any) -> Optional[date]:
    """Coerce an ISO string / date / datetime into a date. None when it can't."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    raw = value.strip()
    if not raw:
        return None
    # "2026-05-15", "2026-05-15T00:00:00.000Z", "2026-05-15 10:30"
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        return None


def format_date(value: Any) -> str:
    """15 May 2026, or N/A for anything absent/unparseable."""
    d = _as_date(value)
    return d.strftime("%d %b %Y") if d else NA


def format_long_date(value: Any) -> str:
    """15 May 2026 with the full month name (invoice / payment date)."""
    d = _as_date(value)
    return d.strftime("%d %B %Y") if d else NA


# =====================================================================
# NUMBERS (en-IN grouping)
# =====================================================================

def _group_indian(digits: str) -> str:
    """1234567 -> 12,34,567 (last three, then pairs)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency(amount: Any) -> str:
    """
    Group-separated amount in the en-IN convention.
    Up to three decimals, trailing zeros dropped: 216000 -> 2,16,000; 1234.5 -> 1,234.5
    """
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        value = Decimal(0)
    if not value.is_finite():
        value = Decimal(0)

    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the three places
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        value = value.quantize(_THREE_PLACES, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    whole, _, frac = f"{value.copy_abs():f}".partition(".")
    frac = frac.rstrip("0")
    out = _group_indian(whole)
    if frac:
        out = f"{out}.{frac}"
    return f"{sign}{out}"


def format_duration(nights: Any) -> str:
    """'3 Nights / 4 Days'. Absent, zero or junk input falls back to 3 nights."""
    n = 0
    try:
        n = int(str(nights).strip().split(".")[0]) if nights not in (None, "") else 0
    except ValueError:
        n = 0
    if n <= 0:
        n = 3
    return f"{n} Nights / {n + 1} Days"


# =====================================================================
# RECORD-DERIVED LABELS
# =====================================================================

def package_label(value: Any) -> str:
    if value in (None, ""):
        return NA
    return PACKAGE_TYPES.get(str(value).strip().lower(), str(value))


def booking_reference(record: Mapping[str, Any]) -> str:
    """
    DEST/YEAR/DDMON from destination + check-in, e.g. Lakshadweep, 2026-05-15 -> LAK/2026/15MAY.
    """
    dest = "".join(ch for ch in str(record.get("destination") or "") if ch.isalpha())
    check_in = _as_date(record.get("checkInDate"))
    if not dest or not check_in:
        return NA
    return f"{dest[:3].upper()}/{check_in:%Y}/{check_in:%d%b}".upper()
