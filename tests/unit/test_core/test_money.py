#!/usr/bin/env python3
"""Tests for Money primitive type."""

from decimal import Decimal

import pytest

from famfinance.core.exceptions import CurrencyMismatch, DivisionByZero
from famfinance.core.money import Money


class TestMoneyConstruction:
    """Test Money class construction."""

    @pytest.mark.currency
    def test_of_string_keeps_exact_decimal(self):
        """Test creating Money from a decimal string."""
        m = Money.of("12.34")
        assert m.amount == Decimal("12.34")
        assert m.currency == "USD"

    @pytest.mark.currency
    def test_of_int_and_decimal(self):
        assert Money.of(12).amount == Decimal("12")
        assert Money.of(Decimal("0.10"), "EUR").currency == "EUR"

    @pytest.mark.currency
    def test_currency_is_normalized(self):
        assert Money.of("1", "eur").currency == "EUR"

    @pytest.mark.currency
    def test_float_is_rejected(self):
        """Test that floats cannot sneak in binary rounding errors."""
        with pytest.raises(TypeError):
            Money.of(0.1)

    @pytest.mark.currency
    def test_invalid_currency_code_rejected(self):
        with pytest.raises(ValueError):
            Money.of("1", "DOLLARS")

    @pytest.mark.currency
    def test_from_minor_units(self):
        """Test creating Money from cents and yen."""
        assert Money.from_minor_units(1234).amount == Decimal("12.34")
        assert Money.from_minor_units(500, "JPY").amount == Decimal("500")

    @pytest.mark.currency
    def test_sum_starts_from_zero(self):
        assert Money.sum([], "USD") == Money.zero("USD")
        assert Money.sum([Money.of("1.50"), Money.of("2.25")]) == Money.of("3.75")


class TestMoneyArithmetic:
    """Test Money arithmetic operations."""

    @pytest.mark.currency
    def test_addition(self):
        """Test adding Money objects."""
        result = Money.of("100.10") + Money.of("50.05")
        assert result == Money.of("150.15")

    @pytest.mark.currency
    def test_subtraction_can_go_negative(self):
        result = Money.of("30") - Money.of("100")
        assert result == Money.of("-70")
        assert result.is_negative()

    @pytest.mark.currency
    @pytest.mark.parametrize(
        "a,b",
        [("0.10", "0.20"), ("1234.56", "-999.99"), ("0", "0.01"), ("-5.005", "12")],
        ids=["small", "mixed-sign", "from-zero", "sub-cent"],
    )
    def test_add_then_subtract_round_trips(self, a, b):
        """Test that adding then subtracting returns the original value exactly."""
        start = Money.of(a)
        assert start.add(Money.of(b)).subtract(Money.of(b)) == start

    @pytest.mark.currency
    def test_no_floating_point_drift(self):
        total = Money.sum(Money.of("0.10") for _ in range(10))
        assert total == Money.of("1.00")

    @pytest.mark.currency
    def test_negate_and_abs(self):
        m = Money.of("-12.50")
        assert m.negate() == Money.of("12.50")
        assert -m == Money.of("12.50")
        assert m.abs() == Money.of("12.50")

    @pytest.mark.currency
    def test_multiplication(self):
        """Test multiplying Money by scalar."""
        assert Money.of("50") * 3 == Money.of("150")
        assert 3 * Money.of("50") == Money.of("150")
        assert Money.of("10.00").multiply("0.5") == Money.of("5.00")

    @pytest.mark.currency
    def test_division(self):
        assert Money.of("10").divide(4) == Money.of("2.5")
        assert Money.of("9") / 3 == Money.of("3")

    @pytest.mark.currency
    def test_division_by_zero(self):
        with pytest.raises(DivisionByZero):
            Money.of("10").divide(0)

    @pytest.mark.currency
    def test_division_by_zero_is_a_zero_division_error(self):
        with pytest.raises(ZeroDivisionError):
            Money.of("10") / 0

    @pytest.mark.currency
    def test_ratio(self):
        assert Money.of("25").ratio(Money.of("100")) == Decimal("0.25")
        with pytest.raises(DivisionByZero):
            Money.of("25").ratio(Money.zero())


class TestCurrencyMismatch:
    """Test that currencies are never silently mixed."""

    @pytest.mark.currency
    @pytest.mark.parametrize("operation", ["add", "subtract", "compare"])
    def test_mixed_currency_operations_raise(self, operation):
        usd = Money.of("5", "USD")
        eur = Money.of("5", "EUR")
        with pytest.raises(CurrencyMismatch) as exc_info:
            getattr(usd, operation)(eur)
        assert exc_info.value.left == "USD"
        assert exc_info.value.right == "EUR"

    @pytest.mark.currency
    def test_ordering_across_currencies_raises(self):
        with pytest.raises(CurrencyMismatch):
            _ = Money.of("1", "USD") < Money.of("2", "EUR")

    @pytest.mark.currency
    def test_sum_in_wrong_currency_raises(self):
        with pytest.raises(CurrencyMismatch):
            Money.sum([Money.of("1", "EUR")], "USD")

    @pytest.mark.currency
    def test_equality_across_currencies_is_false(self):
        """Test that == compares structurally instead of raising."""
        assert Money.of("5", "USD") != Money.of("5", "EUR")


class TestMoneyComparison:
    """Test Money comparison operations."""

    @pytest.mark.currency
    def test_equality_ignores_trailing_zeros(self):
        assert Money.of("1.10") == Money.of("1.1")

    @pytest.mark.currency
    def test_compare(self):
        assert Money.of("1").compare(Money.of("2")) == -1
        assert Money.of("2").compare(Money.of("2.00")) == 0
        assert Money.of("3").compare(Money.of("2")) == 1

    @pytest.mark.currency
    def test_ordering_operators(self):
        assert Money.of("1") < Money.of("2")
        assert Money.of("2") <= Money.of("2")
        assert Money.of("3") > Money.of("2")
        assert Money.of("3") >= Money.of("3")

    @pytest.mark.currency
    def test_sign_predicates(self):
        assert Money.zero().is_zero()
        assert Money.of("0.01").is_positive()
        assert not Money.zero().is_positive()


class TestMoneyFormatting:
    """Test Money display formatting."""

    @pytest.mark.currency
    @pytest.mark.parametrize(
        "amount,currency,expected",
        [
            ("1234.5", "USD", "$1,234.50"),
            ("-1234.56", "USD", "-$1,234.56"),
            ("0", "USD", "$0.00"),
            ("0.005", "USD", "$0.01"),
            ("1500", "JPY", "¥1,500"),
            ("10", "EUR", "€10.00"),
            ("1.2345", "BHD", "BHD 1.235"),
        ],
        ids=["usd", "negative", "zero", "half-up", "jpy-no-minor-units", "eur", "three-places"],
    )
    def test_format(self, amount, currency, expected):
        assert Money.of(amount, currency).format() == expected

    @pytest.mark.currency
    def test_str_uses_format(self):
        assert str(Money.of("45.99")) == "$45.99"

    @pytest.mark.currency
    def test_to_minor_units_rounds_half_up(self):
        assert Money.of("12.345").to_minor_units() == 1235
        assert Money.of("-12.345").to_minor_units() == -1235

    @pytest.mark.currency
    def test_percent_of(self):
        assert Money.of("1000").percent_of(Money.of("1300")) == Decimal("76.9")
        assert Money.of("125").percent_of(Money.of("500")) == Decimal("25.0")
        assert Money.of("125").percent_of(Money.zero()) == Decimal("0")
