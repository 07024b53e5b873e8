"""
Tests for Money equality and ordering.

Equality is total; ordering requires a common currency.
"""

from decimal import Decimal

import pytest

from money_kernel.domain.comparison import (
    Ordering,
    cmp,
    compare,
    equal,
    try_cmp,
    try_compare,
)
from money_kernel.domain.values import Money
from money_kernel.exceptions import CurrencyMismatchError


class TestEqual:
    """Tests for equal."""

    def test_same_currency_same_amount(self):
        assert equal(Money.of(1, "USD"), Money.of("1.00", "USD"))

    def test_different_amount(self):
        assert not equal(Money.of(1, "USD"), Money.of(2, "USD"))

    def test_different_currency_is_false_not_error(self):
        assert not equal(Money.of(1, "USD"), Money.of(1, "AUD"))

    def test_non_money(self):
        assert not equal(Money.of(1, "USD"), Decimal("1"))
        assert Money.of(1, "USD") != 1

    def test_equal_values_hash_alike(self):
        assert hash(Money.of("1.0", "USD")) == hash(Money.of("1.00", "USD"))
        assert len({Money.of("1.0", "USD"), Money.of("1.00", "USD")}) == 1


class TestCmp:
    """Tests for cmp/compare."""

    def test_orderings(self):
        one, two = Money.of(1, "EUR"), Money.of(2, "EUR")
        assert cmp(one, two) is Ordering.LT
        assert cmp(two, one) is Ordering.GT
        assert cmp(one, Money.of("1.000", "EUR")) is Ordering.EQ

    def test_compare_as_int(self):
        assert compare(Money.of(1, "EUR"), Money.of(2, "EUR")) == -1
        assert compare(Money.of(2, "EUR"), Money.of(2, "EUR")) == 0
        assert compare(Money.of(3, "EUR"), Money.of(2, "EUR")) == 1

    def test_mismatch_fails(self):
        result = try_cmp(Money.of(1, "EUR"), Money.of(1, "USD"))
        assert isinstance(result.error, CurrencyMismatchError)
        assert result.error.operation == "compare"

    def test_try_compare_propagates_mismatch(self):
        assert isinstance(
            try_compare(Money.of(1, "EUR"), Money.of(1, "USD")).error,
            CurrencyMismatchError,
        )

    def test_rich_comparison_operators(self):
        assert Money.of(1, "USD") < Money.of(2, "USD")
        assert Money.of(2, "USD") >= Money.of(2, "USD")
        assert sorted([Money.of(3, "USD"), Money.of(1, "USD")]) == [
            Money.of(1, "USD"),
            Money.of(3, "USD"),
        ]

    def test_rich_comparison_mismatch_raises(self):
        with pytest.raises(CurrencyMismatchError):
            Money.of(1, "USD") < Money.of(2, "JPY")
