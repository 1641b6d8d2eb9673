"""
Test suite for the terbilang (number-to-words) converter.

The converter is the one piece of the service whose output is legally
meaningful: the spelled-out total must match the numeric total exactly.

Run: pytest tests/ -v
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from invoice_generator.exceptions import InvoiceError, OutOfRangeError
from invoice_generator.terbilang import MAX_AMOUNT, SCALES, convert, render_group

NINES = "sembilan ratus sembilan puluh sembilan"

SAMPLE_AMOUNTS = [
    1, 7, 10, 11, 19, 20, 21, 99, 100, 101, 110, 111, 999, 1000, 1001, 1999,
    2000, 10_000, 11_000, 100_000, 101_000, 999_999, 1_000_000, 1_000_001,
    1_500_000, 2_300_000_000, 999_999_999_999, 1_000_000_000_000, MAX_AMOUNT,
]


# ═══════════════════════════════════════════════════════════════════
#  Group Renderer
# ═══════════════════════════════════════════════════════════════════


class TestRenderGroup:
    """3-digit groups without scale words."""

    def test_single_digit(self):
        assert render_group(7) == "tujuh"

    def test_ten_is_sepuluh(self):
        assert render_group(10) == "sepuluh"

    def test_teens_are_irregular(self):
        assert render_group(11) == "sebelas"
        assert render_group(17) == "tujuh belas"

    def test_round_tens(self):
        assert render_group(40) == "empat puluh"

    def test_tens_with_ones(self):
        assert render_group(58) == "lima puluh delapan"

    def test_one_hundred_is_seratus(self):
        assert render_group(100) == "seratus"

    def test_hundreds_with_teen(self):
        assert render_group(215) == "dua ratus lima belas"

    def test_seratus_with_remainder(self):
        assert render_group(101) == "seratus satu"
        assert render_group(111) == "seratus sebelas"

    def test_largest_group(self):
        assert render_group(999) == NINES

    def test_zero_rejected(self):
        with pytest.raises(ValueError, match="between 1 and 999"):
            render_group(0)

    def test_four_digits_rejected(self):
        with pytest.raises(ValueError, match="between 1 and 999"):
            render_group(1000)


# ═══════════════════════════════════════════════════════════════════
#  Converter — Small Amounts
# ═══════════════════════════════════════════════════════════════════


class TestSmallAmounts:
    def test_zero(self):
        assert convert(0) == "Nol rupiah"

    def test_one(self):
        assert convert(1) == "Satu rupiah"

    def test_eleven_is_not_ten_plus_one(self):
        assert convert(11) == "Sebelas rupiah"

    def test_twelve(self):
        assert convert(12) == "Dua belas rupiah"

    def test_twenty_five(self):
        assert convert(25) == "Dua puluh lima rupiah"

    def test_hundred_is_not_one_plus_hundred(self):
        assert convert(100) == "Seratus rupiah"

    def test_two_hundred(self):
        assert convert(200) == "Dua ratus rupiah"


# ═══════════════════════════════════════════════════════════════════
#  Converter — Scale Tiers
# ═══════════════════════════════════════════════════════════════════


class TestScales:
    def test_one_thousand_is_seribu(self):
        assert convert(1000) == "Seribu rupiah"

    def test_seribu_with_remainder(self):
        assert convert(1001) == "Seribu satu rupiah"
        assert convert(1500) == "Seribu lima ratus rupiah"

    def test_two_thousand(self):
        assert convert(2000) == "Dua ribu rupiah"

    def test_eleven_thousand(self):
        assert convert(11_000) == "Sebelas ribu rupiah"

    def test_only_exact_one_gets_seribu_form(self):
        assert convert(101_000) == "Seratus satu ribu rupiah"

    def test_seratus_ribu(self):
        assert convert(100_000) == "Seratus ribu rupiah"

    def test_one_million_is_satu_juta(self):
        assert convert(1_000_000) == "Satu juta rupiah"

    def test_million_with_thousands(self):
        assert convert(1_500_000) == "Satu juta lima ratus ribu rupiah"

    def test_million_with_seribu(self):
        assert convert(1_001_000) == "Satu juta seribu rupiah"

    def test_zero_groups_are_skipped(self):
        assert convert(1_000_001) == "Satu juta satu rupiah"

    def test_billion(self):
        assert convert(1_500_000_000) == "Satu miliar lima ratus juta rupiah"

    def test_trillion(self):
        assert convert(1_000_000_000_000) == "Satu triliun rupiah"

    def test_four_tiers_in_order(self):
        expected = (
            f"{NINES.capitalize()} miliar {NINES} juta {NINES} ribu {NINES} rupiah"
        )
        assert convert(999_999_999_999) == expected

    def test_largest_supported_amount(self):
        result = convert(MAX_AMOUNT)
        assert result.startswith(f"{NINES.capitalize()} triliun {NINES} miliar")
        assert result.endswith(f"{NINES} ribu {NINES} rupiah")

    def test_max_amount_matches_scale_table(self):
        assert MAX_AMOUNT == 10**15 - 1
        assert len(SCALES) == 5


# ═══════════════════════════════════════════════════════════════════
#  Converter — Negative & Fractional Input
# ═══════════════════════════════════════════════════════════════════


class TestSignAndFractions:
    def test_negative_prefix(self):
        assert convert(-250) == "Minus Dua ratus lima puluh rupiah"

    def test_negative_matches_positive(self):
        for n in (1, 11, 1000, 1_500_000, 999_999_999_999):
            assert convert(-n) == "Minus " + convert(n)

    def test_fraction_is_truncated_not_rounded(self):
        assert convert(1250.75) == "Seribu dua ratus lima puluh rupiah"
        assert convert(Decimal("1999.99")) == "Seribu sembilan ratus sembilan puluh sembilan rupiah"

    def test_sub_unit_amounts_are_zero(self):
        assert convert(0.99) == "Nol rupiah"
        assert convert(Decimal("0.5")) == "Nol rupiah"

    def test_small_negative_fraction_is_zero(self):
        assert convert(-0.5) == "Nol rupiah"

    def test_negative_fraction_truncates_toward_zero(self):
        assert convert(-1000.9) == "Minus Seribu rupiah"

    def test_decimal_total_from_invoice(self):
        assert convert(Decimal("1500000.00")) == "Satu juta lima ratus ribu rupiah"


# ═══════════════════════════════════════════════════════════════════
#  Converter — Errors
# ═══════════════════════════════════════════════════════════════════


class TestErrors:
    def test_ceiling_raises(self):
        with pytest.raises(OutOfRangeError, match="exceeds"):
            convert(10**15)

    def test_negative_ceiling_raises(self):
        with pytest.raises(OutOfRangeError):
            convert(-(10**15))

    def test_huge_float_raises(self):
        with pytest.raises(OutOfRangeError):
            convert(1e20)

    def test_int_too_long_for_str_raises_out_of_range(self):
        with pytest.raises(OutOfRangeError) as excinfo:
            convert(10**5000)
        assert "amount" not in excinfo.value.details

    def test_huge_decimal_raises_out_of_range(self):
        with pytest.raises(OutOfRangeError):
            convert(Decimal("1E+5000"))
        with pytest.raises(OutOfRangeError):
            convert(Decimal("-1E+999999999"))

    def test_fraction_just_below_ceiling(self):
        words = convert(Decimal("999999999999999.9"))
        assert words.startswith("Sembilan ratus sembilan puluh sembilan triliun")

    def test_infinity_raises_out_of_range(self):
        with pytest.raises(OutOfRangeError):
            convert(float("inf"))
        with pytest.raises(OutOfRangeError):
            convert(Decimal("-Infinity"))

    def test_nan_rejected(self):
        with pytest.raises(ValueError, match="NaN"):
            convert(float("nan"))
        with pytest.raises(ValueError, match="NaN"):
            convert(Decimal("NaN"))

    def test_error_is_typed_and_coded(self):
        with pytest.raises(OutOfRangeError) as excinfo:
            convert(10**18)
        err = excinfo.value
        assert isinstance(err, InvoiceError)
        assert isinstance(err, ValueError)
        assert err.code == "AMOUNT_OUT_OF_RANGE"
        assert err.details["max_amount"] == MAX_AMOUNT

    def test_string_rejected(self):
        with pytest.raises(TypeError):
            convert("1000")  # type: ignore[arg-type]

    def test_bool_rejected(self):
        with pytest.raises(TypeError):
            convert(True)

    def test_none_rejected(self):
        with pytest.raises(TypeError):
            convert(None)  # type: ignore[arg-type]


# ═══════════════════════════════════════════════════════════════════
#  Output Shape
# ═══════════════════════════════════════════════════════════════════


class TestOutputShape:
    def test_no_double_spaces(self):
        for n in SAMPLE_AMOUNTS:
            assert "  " not in convert(n), n

    def test_starts_with_single_capital(self):
        for n in SAMPLE_AMOUNTS:
            result = convert(n)
            assert result[0].isupper(), n
            assert result[1].islower(), n
            assert result == result.strip()

    def test_ends_with_currency_unit(self):
        for n in SAMPLE_AMOUNTS:
            assert convert(n).endswith(" rupiah")

    def test_deterministic(self):
        assert convert(123_456_789) == convert(123_456_789)

    def test_concurrent_calls_agree(self):
        expected = [convert(n) for n in SAMPLE_AMOUNTS]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(convert, SAMPLE_AMOUNTS * 4))
        assert results == expected * 4
