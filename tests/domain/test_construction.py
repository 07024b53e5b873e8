"""
Tests for Money construction and currency-code validation.

Verifies:
- Either argument order yields the same canonical value
- Amounts of every accepted kind become Decimal without float drift
- Unknown codes and unparsable amounts fail with typed errors
- Result and raising forms carry the same error
"""

from decimal import Decimal

import pytest

from money_kernel.domain.construction import (
    from_pair,
    new,
    try_from_pair,
    try_new,
    try_validate_currency_code,
    validate_currency_code,
)
from money_kernel.domain.currency import CurrencyRegistry
from money_kernel.domain.values import Money
from money_kernel.exceptions import InvalidOperandError, UnknownCurrencyError


class TestNew:
    """Tests for new/try_new."""

    def test_amount_then_code(self):
        money = new(100, "USD")
        assert money.amount == Decimal("100")
        assert money.currency == "USD"

    def test_code_then_amount(self):
        """Arguments may be given in either order."""
        assert new("USD", 100) == new(100, "USD")

    def test_lower_case_code_is_canonicalized(self):
        money = new("thb", 500)
        assert money.currency == "THB"
        assert money.amount == Decimal("500")

    def test_float_amount_uses_decimal_text(self):
        """0.1 must be Decimal('0.1'), not the binary approximation."""
        assert new(0.1, "USD").amount == Decimal("0.1")

    def test_decimal_amount_is_kept(self):
        assert new(Decimal("12.345"), "EUR").amount == Decimal("12.345")

    def test_string_amount(self):
        assert new("123.45", "USD").amount == Decimal("123.45")

    def test_both_strings_canonical_order(self):
        assert new("10.50", "usd") == Money(Decimal("10.50"), "USD")

    def test_both_strings_reversed_order(self):
        """Only the first string is a known code, so it is the currency."""
        assert new("usd", "10.50") == Money(Decimal("10.50"), "USD")

    def test_currency_info_token(self):
        info = CurrencyRegistry.iso4217().lookup("JPY")
        assert new(500, info) == Money(Decimal("500"), "JPY")

    def test_unknown_code_fails(self):
        result = try_new(100, "XYZZ")
        assert not result
        assert isinstance(result.error, UnknownCurrencyError)
        assert result.error.code == "UNKNOWN_CURRENCY"

    def test_unknown_code_raises(self):
        with pytest.raises(UnknownCurrencyError):
            new(100, "XYZZ")

    def test_unparsable_amount_fails(self):
        result = try_new("abc", "USD")
        assert not result
        assert isinstance(result.error, InvalidOperandError)

    def test_non_finite_amount_fails(self):
        with pytest.raises(InvalidOperandError):
            new(float("nan"), "USD")

    def test_bool_is_not_an_amount(self):
        with pytest.raises(InvalidOperandError):
            new(True, "USD")

    def test_raising_form_carries_result_error(self):
        result = try_new(100, "XYZZ")
        with pytest.raises(UnknownCurrencyError) as exc_info:
            result.unwrap()
        assert exc_info.value is result.error

    def test_fixture_provider_rejects_codes_it_does_not_know(self, fixture_context):
        """Validation consults the injected provider, not the bundled table."""
        assert not try_new(100, "EUR", context=fixture_context)
        assert try_new(100, "CHF", context=fixture_context)


class TestMoneyOf:
    """Tests for the Money.of/Money.zero shortcuts."""

    def test_of_validates(self):
        with pytest.raises(UnknownCurrencyError):
            Money.of(1, "NOPE")

    def test_zero(self):
        zero = Money.zero("EUR")
        assert zero.is_zero
        assert zero.currency == "EUR"


class TestFromPair:
    """Tests for from_pair/try_from_pair."""

    def test_amount_code_pair(self):
        assert from_pair((Decimal("5.25"), "gbp")) == Money(Decimal("5.25"), "GBP")

    def test_code_amount_pair(self):
        assert from_pair(("GBP", 5)) == Money(Decimal("5"), "GBP")

    def test_wrong_arity_fails(self):
        result = try_from_pair((1, "USD", "extra"))
        assert isinstance(result.error, InvalidOperandError)

    def test_non_pair_fails(self):
        assert not try_from_pair("USD")


class TestValidateCurrencyCode:
    """Tests for validate_currency_code."""

    def test_known_code_any_case(self):
        assert validate_currency_code("eur") == "EUR"

    def test_unknown_code(self):
        result = try_validate_currency_code("ABC")
        assert isinstance(result.error, UnknownCurrencyError)
        assert result.error.currency == "ABC"

    def test_non_string_code(self):
        with pytest.raises(UnknownCurrencyError):
            validate_currency_code(840)
