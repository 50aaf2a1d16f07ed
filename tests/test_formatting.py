from datetime import date, datetime
from decimal import Decimal

import pytest

from yatra import formatting as fmt


@pytest.mark.parametrize("amount, expected", [
    (216000, "2,16,000"),
    (Decimal("194400"), "1,94,400"),
    (1234567.891, "12,34,567.891"),
    (999, "999"),
    (1000, "1,000"),
    (Decimal("1234.50"), "1,234.5"),
    (0, "0"),
    (-1500, "-1,500"),
    ("junk", "0"),
    (None, "0"),
    (Decimal("1" + "0" * 27), "1," + "00," * 12 + "000"),
    (Decimal("1e30"), "10," + "00," * 13 + "000"),
])
def test_format_currency_uses_indian_grouping(amount, expected):
    assert fmt.format_currency(amount) == expected


def test_format_currency_keeps_every_digit_past_default_precision():
    out = fmt.format_currency(Decimal("12345678901234567890123456789.5"))
    assert out.replace(",", "") == "12345678901234567890123456789.5"
    assert out.endswith(",34,56,789.5")


@pytest.mark.parametrize("value, expected", [
    ("2026-05-15", "15 May 2026"),
    ("2026-05-15T00:00:00.000Z", "15 May 2026"),
    (date(2026, 5, 15), "15 May 2026"),
    (datetime(2026, 5, 15, 10, 30), "15 May 2026"),
    ("", "N/A"),
    (None, "N/A"),
    ("not a date", "N/A"),
    (20260515, "N/A"),
])
def test_format_date(value, expected):
    assert fmt.format_date(value) == expected


def test_format_long_date_spells_the_month():
    assert fmt.format_long_date(date(2026, 9, 3)) == "03 September 2026"
    assert fmt.format_long_date(None) == "N/A"


@pytest.mark.parametrize("nights, expected", [
    ("3", "3 Nights / 4 Days"),
    (5, "5 Nights / 6 Days"),
    ("4.0", "4 Nights / 5 Days"),
    ("0", "3 Nights / 4 Days"),
    (None, "3 Nights / 4 Days"),
    ("abc", "3 Nights / 4 Days"),
])
def test_format_duration(nights, expected):
    assert fmt.format_duration(nights) == expected


def test_package_label():
    assert fmt.package_label("deluxe") == "Deluxe"
    assert fmt.package_label("LUXURY") == "Luxury"
    assert fmt.package_label("houseboat") == "houseboat"
    assert fmt.package_label(None) == "N/A"


def test_booking_reference():
    assert fmt.booking_reference({"destination": "Lakshadweep", "checkInDate": "2026-05-15"}) == "LAK/2026/15MAY"
    assert fmt.booking_reference({"destination": "Lakshadweep"}) == "N/A"
    assert fmt.booking_reference({"checkInDate": "2026-05-15"}) == "N/A"
