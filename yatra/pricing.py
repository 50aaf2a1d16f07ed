# pricing.py
"""
Money for a booking receipt.

Everything here is total: a half-filled form still produces numbers (zeros
where input is missing or junk) so the receipt can be reviewed by a human
instead of failing the whole approval.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, Overflow, localcontext
from typing import Any, Mapping

ZERO = Decimal(0)
HUNDRED = Decimal(100)

# amounts of 10**16 and above are typos or exponent junk, not prices
MAX_AMOUNT_EXPONENT = 15

DISCOUNT_PERCENTAGE = "percentage"
DISCOUNT_FIXED = "fixed"
DISCOUNT_NONE = "none"

_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"^\s*[+-]?\d+")


@dataclass(frozen=True)
class FinancialBreakdown:
    cost_per_adult: Decimal
    number_of_adults: int
    advance_amount: Decimal
    discount_type: str
    discount_value: Decimal
    subtotal: Decimal
    discount_amount: Decimal
    total_package_value: Decimal
    balance_payable: Decimal

    @property
    def has_discount(self) -> bool:
        return self.discount_amount.is_finite() and self.discount_amount > 0


def _non_negative(value: Decimal) -> Decimal:
    if not value.is_finite() or value < 0 or value.adjusted() > MAX_AMOUNT_EXPONENT:
        return ZERO
    return value


def parse_amount(raw: Any) -> Decimal:
    """Leading-number parse ('27000', '27000.50 INR', 27000) -> Decimal; junk/negative -> 0."""
    if raw is None or isinstance(raw, bool):
        return ZERO
    if isinstance(raw, Decimal):
        return _non_negative(raw)
    if isinstance(raw, (int, float)):
        try:
            return _non_negative(Decimal(str(raw)))
        except InvalidOperation:
            return ZERO
    m = _NUMBER_PREFIX.match(str(raw))
    if not m:
        return ZERO
    try:
        return _non_negative(Decimal(m.group(0).strip()))
    except InvalidOperation:
        return ZERO


def parse_count(raw: Any) -> int:
    """Leading-integer parse ('8', '8 adults', 8.9) -> int; junk/negative -> 0."""
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return max(raw, 0)
    if isinstance(raw, (float, Decimal)):
        try:
            return max(int(raw), 0)
        except (ValueError, OverflowError, InvalidOperation):
            return 0
    m = _INT_PREFIX.match(str(raw))
    if not m:
        return 0
    try:
        return max(int(m.group(0)), 0)
    except ValueError:
        # past the interpreter's int string-conversion limit
        return 0


def compute(record: Mapping[str, Any]) -> FinancialBreakdown:
    if not isinstance(record, Mapping):
        record = {}

    cost_per_adult = parse_amount(record.get("costPerAdult"))
    adults = parse_count(record.get("numberOfAdults"))
    discount_type = str(record.get("discountType") or DISCOUNT_NONE).strip()
    discount_value = parse_amount(record.get("discountValue"))
    advance = parse_amount(record.get("advanceAmount"))

    # an absurd head count can still push past the context limits; overflow becomes Infinity
    with localcontext() as ctx:
        ctx.traps[Overflow] = False
        ctx.traps[InvalidOperation] = False
        subtotal = cost_per_adult * adults

        if discount_type == DISCOUNT_PERCENTAGE:
            discount_amount = subtotal * discount_value / HUNDRED
        elif discount_type == DISCOUNT_FIXED:
            discount_amount = discount_value
        else:
            discount_amount = ZERO

        total = subtotal - discount_amount
        balance = total - advance

    return FinancialBreakdown(
        cost_per_adult=cost_per_adult,
        number_of_adults=adults,
        advance_amount=advance,
        discount_type=discount_type,
        discount_value=discount_value,
        subtotal=subtotal,
        discount_amount=discount_amount,
        total_package_value=total,
        balance_payable=balance,
    )
