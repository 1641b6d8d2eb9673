"""
Convert a monetary amount to Indonesian words ("terbilang").

THIS IS A CRITICAL FINANCIAL COMPONENT.

The spelled-out total is printed on every invoice next to the numeric total,
so it must never disagree with it. The converter is a pure function over
immutable lookup tables: no I/O, no state, safe to call from any thread.

Supported patterns:
    0                  → "Nol rupiah"
    11                 → "Sebelas rupiah"
    100                → "Seratus rupiah"
    1000               → "Seribu rupiah"
    1_500_000          → "Satu juta lima ratus ribu rupiah"
    -250               → "Minus Dua ratus lima puluh rupiah"
    1250.75            → "Seribu dua ratus lima puluh rupiah"  (fraction dropped)

Amounts of 10^15 or more have no scale word and raise OutOfRangeError
instead of being silently truncated.
"""

from __future__ import annotations

import math
from decimal import Decimal

from .exceptions import OutOfRangeError

# ─── Word Lookup Tables ──────────────────────────────────────────────

# 0..19; teens are irregular and never composed from tens + ones
ONES: tuple[str, ...] = (
    "",
    "satu",
    "dua",
    "tiga",
    "empat",
    "lima",
    "enam",
    "tujuh",
    "delapan",
    "sembilan",
    "sepuluh",
    "sebelas",
    "dua belas",
    "tiga belas",
    "empat belas",
    "lima belas",
    "enam belas",
    "tujuh belas",
    "delapan belas",
    "sembilan belas",
)

# Tens digit for 20..99; indices 0 and 1 are never used
TENS: tuple[str, ...] = (
    "",
    "",
    "dua puluh",
    "tiga puluh",
    "empat puluh",
    "lima puluh",
    "enam puluh",
    "tujuh puluh",
    "delapan puluh",
    "sembilan puluh",
)

# One entry per 3-digit group: 10^0, 10^3, 10^6, 10^9, 10^12
SCALES: tuple[str, ...] = ("", "ribu", "juta", "miliar", "triliun")

HUNDRED = "ratus"
ONE_HUNDRED = "seratus"
ONE_THOUSAND = "seribu"
ZERO = "nol"
MINUS = "minus"
CURRENCY_UNIT = "rupiah"

# Largest magnitude the scale table can spell: 999 triliun ... 999
MAX_AMOUNT = 1000 ** len(SCALES) - 1


# ─── Group Renderer ──────────────────────────────────────────────────


def render_group(n: int) -> str:
    """Render a single 3-digit group (1..999) without any scale word.

    Examples:
        render_group(7)   → "tujuh"
        render_group(100) → "seratus"
        render_group(215) → "dua ratus lima belas"
        render_group(999) → "sembilan ratus sembilan puluh sembilan"

    Raises:
        ValueError: If n is outside 1..999.
    """
    if not 1 <= n <= 999:
        raise ValueError(f"Group value must be between 1 and 999, got {n!r}")

    hundreds, remainder = divmod(n, 100)
    parts: list[str] = []

    if hundreds == 1:
        parts.append(ONE_HUNDRED)
    elif hundreds:
        parts.append(f"{ONES[hundreds]} {HUNDRED}")

    if 1 <= remainder <= 19:
        parts.append(ONES[remainder])
    elif remainder >= 20:
        tens, ones = divmod(remainder, 10)
        parts.append(TENS[tens] + (" " + ONES[ones] if ones else ""))

    return " ".join(parts).strip()


def _render_tier(group: int, tier: int) -> str:
    """Render one non-zero group together with its scale word."""
    # 1.000 is the contraction "seribu", not "satu ribu"
    if tier == 1 and group == 1:
        return ONE_THOUSAND
    words = render_group(group)
    if tier == 0:
        return words
    return f"{words} {SCALES[tier]}"


# ─── Input Normalisation ─────────────────────────────────────────────


def _out_of_range(message: str) -> OutOfRangeError:
    # The amount itself is left out: huge ints cannot be turned into text cheaply
    return OutOfRangeError(message, details={"max_amount": MAX_AMOUNT})


def _truncate(amount: int | float | Decimal) -> int:
    """Drop the fractional part (toward zero) and return a plain int.

    Decimals are range-checked before the conversion, so an input such as
    Decimal("1E+999999999") never becomes a billion-digit int.

    Raises:
        TypeError: If amount is not a real number (bool is rejected too).
        ValueError: If amount is NaN.
        OutOfRangeError: If amount is infinite or its magnitude is 10^15 or more.
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        raise TypeError(f"Amount must be a number, got {type(amount).__name__}")

    if isinstance(amount, int):
        return amount

    if isinstance(amount, float):
        if math.isnan(amount):
            raise ValueError("Amount must not be NaN")
        if math.isinf(amount):
            raise _out_of_range("Infinite amount cannot be spelled out")
        # Truncate the value the float prints as, not its binary expansion
        amount = Decimal(str(amount))

    if amount.is_nan():
        raise ValueError("Amount must not be NaN")
    if amount.is_infinite():
        raise _out_of_range("Infinite amount cannot be spelled out")
    if amount.copy_abs() >= MAX_AMOUNT + 1:
        raise _out_of_range(f"Amount exceeds the largest supported amount {MAX_AMOUNT}")
    return int(amount)


# ─── Main Converter ─────────────────────────────────────────────────


def convert(amount: int | float | Decimal) -> str:
    """Convert a monetary amount to capitalised Indonesian words plus "rupiah".

    Args:
        amount: e.g. 1500000, Decimal("1500000.00"), -250.5

    Returns:
        "Satu juta lima ratus ribu rupiah"

    Raises:
        OutOfRangeError: If |amount| >= 10^15 (beyond "triliun").
        TypeError: If amount is not a number.
        ValueError: If amount is NaN.

    Algorithm:
        The integer part is split into 3-digit groups, lowest first
        (n % 1000, then n // 1000), each group tied to one scale tier.
        Every non-zero group becomes one fragment; the fragments are then
        joined highest tier first. Zero groups contribute nothing, so
        1_000_001 reads "Satu juta satu rupiah".
    """
    value = _truncate(amount)

    if value == 0:
        return f"{ZERO.capitalize()} {CURRENCY_UNIT}"

    if value < 0:
        return f"{MINUS.capitalize()} " + convert(-value)

    if value > MAX_AMOUNT:
        raise _out_of_range(f"Amount exceeds the largest supported amount {MAX_AMOUNT}")

    fragments: list[str] = []  # lowest tier first
    remaining = value
    tier = 0
    while remaining > 0:
        group = remaining % 1000
        if group:
            fragments.append(_render_tier(group, tier))
        remaining //= 1000
        tier += 1

    words = " ".join(reversed(fragments))
    words = " ".join(words.split())

    return f"{words[:1].upper()}{words[1:]} {CURRENCY_UNIT}"
