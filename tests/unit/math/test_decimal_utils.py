"""Tests for high-precision Decimal helpers."""

from decimal import Decimal

import pytest

from radiswap.math.decimal_utils import fits_divisibility, quantize_amount, to_decimal


class TestToDecimal:
    """Tests for amount parsing."""

    def test_accepts_decimal_int_and_str(self):
        assert to_decimal(Decimal("1.5")) == Decimal("1.5")
        assert to_decimal(3) == Decimal(3)
        assert to_decimal("0.003") == Decimal("0.003")

    def test_rejects_float(self):
        """Floats would leak binary rounding error into amounts."""
        with pytest.raises(TypeError):
            to_decimal(0.1)  # type: ignore[arg-type]

    def test_rejects_bool(self):
        with pytest.raises(TypeError):
            to_decimal(True)  # type: ignore[arg-type]

    def test_rejects_garbage_string(self):
        with pytest.raises(ValueError):
            to_decimal("one hundred")

    def test_rejects_non_finite(self):
        with pytest.raises(ValueError):
            to_decimal("Infinity")
        with pytest.raises(ValueError):
            to_decimal("NaN")


class TestQuantizeAmount:
    """Tests for truncation to ledger precision."""

    def test_truncates_extra_digits(self):
        value = Decimal("1.1234567890123456789999")
        assert quantize_amount(value) == Decimal("1.123456789012345678")

    def test_large_values_keep_all_integer_digits(self):
        value = Decimal("123456789012345678901234567890.5")
        assert quantize_amount(value, 0) == Decimal("123456789012345678901234567890")

    def test_never_rounds_up(self):
        assert quantize_amount(Decimal("0.99"), 1) == Decimal("0.9")


class TestFitsDivisibility:
    def test_whole_numbers_fit_everywhere(self):
        assert fits_divisibility(Decimal("5"), 0)
        assert fits_divisibility(Decimal("5.000"), 0)

    def test_fraction_does_not_fit_indivisible(self):
        assert not fits_divisibility(Decimal("0.5"), 0)

    def test_eighteen_places(self):
        assert fits_divisibility(Decimal("0.000000000000000001"), 18)
        assert not fits_divisibility(Decimal("0.0000000000000000001"), 18)
