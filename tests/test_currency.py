import sys
import os
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from currency import Currency, PreciseCurrency


class TestFormatting:
    def test_full(self):
        assert str(Currency(123444)) == "12.3444"
        assert str(Currency(-123444)) == "-12.3444"

    def test_big(self):
        assert str(Currency(9876543210)) == "987654.3210"
        assert str(Currency(-9876543210)) == "-987654.3210"

    def test_integer(self):
        assert str(Currency(140000)) == "14.0000"
        assert str(Currency(-140000)) == "-14.0000"

    def test_partial_fraction_is_zero_padded(self):
        assert str(Currency(1234)) == "0.1234"
        assert str(Currency(-123)) == "-0.0123"
        assert str(Currency(10)) == "0.0010"

    def test_zero(self):
        assert str(Currency(0)) == "0.0000"
        assert str(Currency.zero()) == "0.0000"

    def test_repr(self):
        assert repr(Currency(15000)) == "PreciseCurrency('1.5000')"


class TestParsing:
    def test_parse_fixed_point(self):
        assert Currency.parse("12.3444") == Currency(123444)
        assert Currency.parse("-12.3444") == Currency(-123444)
        assert Currency.parse("0.0010") == Currency(10)

    def test_parse_short_forms(self):
        assert Currency.parse("14") == Currency(140000)
        assert Currency.parse("1.5") == Currency(15000)
        assert Currency.parse(".5") == Currency(5000)
        assert Currency.parse("1e2") == Currency(1000000)

    def test_parse_strips_whitespace(self):
        assert Currency.parse("  2.5 ") == Currency(25000)

    def test_parse_truncates_extra_digits_toward_zero(self):
        assert Currency.parse("1.23456789") == Currency(12345)
        assert Currency.parse("-1.23456789") == Currency(-12345)
        assert Currency.parse("0.00009") == Currency(0)

    def test_parse_tiny_exponent(self):
        assert Currency.parse("1e-50") == Currency(0)

    def test_parse_saturates_huge_values(self):
        assert Currency.parse("1e30").raw == PreciseCurrency.MAX_RAW
        assert Currency.parse("-1e30").raw == PreciseCurrency.MIN_RAW
        assert Currency.parse("Infinity").raw == PreciseCurrency.MAX_RAW
        assert Currency.parse("-Infinity").raw == PreciseCurrency.MIN_RAW

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            Currency.parse("abc")
        with pytest.raises(ValueError):
            Currency.parse("")
        with pytest.raises(ValueError):
            Currency.parse("NaN")

    def test_parse_accepts_leading_plus(self):
        assert Currency.parse("+1.5") == Currency(15000)

    def test_parse_rejects_non_literals(self):
        for text in ["1_000", "1,5", "0x10", "١٢", "1.0.0", "- 1"]:
            with pytest.raises(ValueError):
                Currency.parse(text)

    def test_parse_very_long_literals(self):
        assert Currency.parse("1" + "0" * 5000 + "e-5000") == Currency(10000)
        assert Currency.parse("0." + "1" * 5000) == Currency(1111)
        assert Currency.parse("9" * 5000).raw == PreciseCurrency.MAX_RAW
        assert Currency.parse("0" * 5000 + "2.5") == Currency(25000)

    def test_round_trip(self):
        values = [
            0, 1, -1, 10, 9999, 123444, -123444, 9876543210,
            PreciseCurrency.MAX_RAW, PreciseCurrency.MIN_RAW,
        ]
        for raw in values:
            assert Currency.parse(str(Currency(raw))).raw == raw, raw


class TestArithmetic:
    def test_add_and_subtract(self):
        assert Currency(15000) + Currency(5000) == Currency(20000)
        assert Currency(15000) - Currency(20000) == Currency(-5000)

    def test_values_are_immutable(self):
        a = Currency(10)
        b = a
        b += Currency(5)
        assert a == Currency(10)
        assert b == Currency(15)

    def test_add_saturates_at_max(self):
        top = Currency(PreciseCurrency.MAX_RAW)
        assert (top + Currency(1)).raw == PreciseCurrency.MAX_RAW
        assert (top + top).raw == PreciseCurrency.MAX_RAW

    def test_subtract_saturates_at_min(self):
        bottom = Currency(PreciseCurrency.MIN_RAW)
        assert (bottom - Currency(1)).raw == PreciseCurrency.MIN_RAW
        assert (bottom - Currency(PreciseCurrency.MAX_RAW)).raw == PreciseCurrency.MIN_RAW

    def test_construction_clamps(self):
        assert Currency(2 ** 80).raw == PreciseCurrency.MAX_RAW
        assert Currency(-(2 ** 80)).raw == PreciseCurrency.MIN_RAW

    def test_construction_requires_int(self):
        with pytest.raises(TypeError):
            Currency(1.5)
        with pytest.raises(TypeError):
            Currency("1")

    def test_ordering(self):
        assert Currency(-1) < Currency(0) < Currency(1)
        assert Currency(5) <= Currency(5)
        assert Currency(6) > Currency(5)
        assert max(Currency(3), Currency(7), Currency(2)) == Currency(7)

    def test_equality_and_hash(self):
        assert Currency(42) == Currency(42)
        assert Currency(42) != Currency(43)
        assert len({Currency(42), Currency(42), Currency(1)}) == 2
        assert Currency(42) != 42

    def test_to_decimal(self):
        assert Currency(123444).to_decimal() == Decimal("12.3444")


class TestPrecision:
    def test_default_precision(self):
        assert Currency.PRECISION == 4
        assert PreciseCurrency.with_precision(4) is Currency

    def test_other_precision(self):
        Cents = PreciseCurrency.with_precision(2)
        assert PreciseCurrency.with_precision(2) is Cents
        assert str(Cents(1234)) == "12.34"
        assert Cents.parse("12.345") == Cents(1234)

    def test_zero_precision(self):
        Whole = PreciseCurrency.with_precision(0)
        assert str(Whole(-17)) == "-17"
        assert Whole.parse("17.9") == Whole(17)

    def test_mixed_precision_is_rejected(self):
        Cents = PreciseCurrency.with_precision(2)
        with pytest.raises(TypeError):
            Cents(1) + Currency(1)
        with pytest.raises(TypeError):
            Cents(1) < Currency(1)
        assert Cents(1) != Currency(1)
