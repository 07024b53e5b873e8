"""
Tests for the Money value object and MoneyContext.

Verifies:
- The canonical constructor normalizes amount and code
- Money is immutable
- Context validation and defaults
"""

import dataclasses
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal

import pytest

from money_kernel.domain.context import MoneyContext, resolve_context
from money_kernel.domain.currency import CurrencyInfo, CurrencyRegistry
from money_kernel.domain.exchange_rates import LatestRates
from money_kernel.domain.values import Money, is_numeric, to_decimal
from money_kernel.exceptions import UnknownCurrencyError


class TestCanonicalConstructor:
    """Tests for Money(amount, currency)."""

    def test_normalizes(self):
        money = Money("10.5", " usd ")
        assert money.amount == Decimal("10.5")
        assert money.currency == "USD"

    def test_rejects_non_finite(self):
        with pytest.raises(ValueError):
            Money(Decimal("NaN"), "USD")

    def test_rejects_empty_code(self):
        with pytest.raises(ValueError):
            Money(1, "  ")

    def test_rejects_non_string_code(self):
        with pytest.raises(TypeError):
            Money(1, 840)

    def test_rejects_unknown_code(self):
        with pytest.raises(UnknownCurrencyError):
            Money(1, "ZZZ")

    def test_private_code_only_through_its_context(self):
        ctx = MoneyContext(
            currencies=CurrencyRegistry.iso4217().extended(CurrencyInfo("XBT", "Bitcoin", 8))
        )
        money = Money.of("0.00000001", "xbt", context=ctx)
        assert money.currency == "XBT"
        assert money.round(context=ctx) == money
        with pytest.raises(UnknownCurrencyError):
            Money(1, "XBT")

    def test_operations_keep_the_context_code(self):
        ctx = MoneyContext(
            currencies=CurrencyRegistry.iso4217().extended(CurrencyInfo("XBT", "Bitcoin", 8))
        )
        money = Money.of(1, "XBT", context=ctx)
        assert (-(money + money) * 3).as_pair() == (Decimal("-6"), "XBT")

    def test_immutable(self):
        money = Money.of(1, "USD")
        with pytest.raises(dataclasses.FrozenInstanceError):
            money.amount = Decimal("2")

    def test_str_and_repr(self):
        money = Money.of("1.50", "EUR")
        assert str(money) == "1.50 EUR"
        assert repr(money) == "Money(Decimal('1.50'), 'EUR')"

    def test_predicates(self):
        assert Money.of(1, "USD").is_positive
        assert Money.of(-1, "USD").is_negative
        assert Money.of(0, "USD").is_zero

    def test_as_pair(self):
        assert Money.of("2.5", "GBP").as_pair() == (Decimal("2.5"), "GBP")


class TestNumericHelpers:
    """Tests for is_numeric/to_decimal."""

    @pytest.mark.parametrize("value", [1, 1.5, Decimal("2")])
    def test_numeric(self, value):
        assert is_numeric(value)

    @pytest.mark.parametrize("value", [True, "1", None, float("inf"), Decimal("NaN")])
    def test_not_numeric(self, value):
        assert not is_numeric(value)

    def test_to_decimal_strips_underscores(self):
        assert to_decimal(" 1_000.25 ") == Decimal("1000.25")

    def test_to_decimal_rejects_bool(self):
        with pytest.raises(TypeError):
            to_decimal(False)


class TestMoneyContext:
    """Tests for MoneyContext."""

    def test_defaults(self):
        ctx = MoneyContext()
        assert ctx.rounding_mode == ROUND_HALF_EVEN
        assert ctx.precision == 28
        assert ctx.currencies is CurrencyRegistry.iso4217()
        assert ctx.rate_source is None

    def test_resolve_context(self):
        ctx = MoneyContext(rounding_mode=ROUND_HALF_UP)
        assert resolve_context(ctx) is ctx
        assert resolve_context(None).rounding_mode == ROUND_HALF_EVEN

    @pytest.mark.parametrize("kwargs", [{"rounding_mode": "up"}, {"precision": 0}, {"precision": True}])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            MoneyContext(**kwargs)

    def test_with_rate_source(self):
        rates = LatestRates()
        ctx = MoneyContext().with_rate_source(rates)
        assert ctx.rate_source is rates

    def test_division_context(self):
        assert MoneyContext(precision=10).division_context().prec == 10
