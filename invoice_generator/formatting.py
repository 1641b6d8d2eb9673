"""
Indonesian (id-ID) display formatting for invoice fields.

Numbers use "." for thousands and "," for decimals: 1.500.000 / 1.234,5.
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext

_MONTHS: tuple[str, ...] = (
    "Januari",
    "Februari",
    "Maret",
    "April",
    "Mei",
    "Juni",
    "Juli",
    "Agustus",
    "September",
    "Oktober",
    "November",
    "Desember",
)

CURRENCY_SYMBOL = "Rp"


def _to_decimal(value: int | float | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _round(amount: Decimal, exponent: Decimal) -> Decimal:
    # quantize fails once the result needs more digits than the context precision
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() - exponent.as_tuple().exponent + 2)
        return amount.quantize(exponent, rounding=ROUND_HALF_UP)


def _group_thousands(integer: int) -> str:
    return f"{integer:,}".replace(",", ".")


def format_number(value: int | float | Decimal) -> str:
    """Format a number with id-ID separators and at most 3 fraction digits.

    Examples:
        1500000            → "1.500.000"
        Decimal("1234.50") → "1.234,5"
        0.1234             → "0,123"
    """
    amount = _round(_to_decimal(value), Decimal("0.001"))
    sign = "-" if amount < 0 else ""
    integer, _, fraction = f"{amount.copy_abs():f}".partition(".")
    fraction = fraction.rstrip("0")
    text = _group_thousands(int(integer))
    if fraction:
        text += "," + fraction
    return sign + text


def format_currency(value: int | float | Decimal) -> str:
    """Format a whole-rupiah amount: 1500000 → "Rp 1.500.000"."""
    amount = _round(_to_decimal(value), Decimal(1))
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL} {_group_thousands(int(amount.copy_abs()))}"


def format_date(value: date | str) -> str:
    """Format a date the Indonesian long way: 2024-01-05 → "05 Januari 2024"."""
    if isinstance(value, str):
        value = date.fromisoformat(value)
    return f"{value.day:02d} {_MONTHS[value.month - 1]} {value.year}"
