"""
Rounding -- two-phase currency rounding.

Responsibility:
    Rounds a Money amount into the acceptable range for its currency:

    1. Digit rounding: quantize to the currency's fractional digits (or
       cash fractional digits when ``cash=True``).
    2. Increment rounding: when the currency defines a rounding increment
       (or cash increment), snap to the nearest multiple of it:
       ``round(amount / increment, 0) * increment``.

    Most currencies have no increment and stop after phase 1. CHF, CAD and
    AUD cash amounts round to 0.05, DKK cash to 0.50.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - The rounding mode defaults to ``MoneyContext.rounding_mode``
      (banker's rounding unless configured otherwise).
    - Total for any validly constructed Money.
    - Idempotent: rounding a rounded value with the same options is a no-op.

Failure modes:
    - UnknownCurrencyError if the injected provider no longer knows the
      currency (only possible when a value built under one provider is
      rounded under another).
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass
from decimal import Decimal

from money_kernel.domain.context import MoneyContext, resolve_context, validate_rounding_mode
from money_kernel.domain.currency import CurrencyInfo
from money_kernel.domain.values import Money
from money_kernel.exceptions import UnknownCurrencyError

_ONE = Decimal(1)


@dataclass(frozen=True)
class RoundingOptions:
    """Options for ``round_money``: mode (None = context default) and cash policy."""

    rounding_mode: str | None = None
    cash: bool = False


def _wide_context(amount: Decimal, digits: int, precision: int) -> decimal.Context:
    # Quantize fails if the result would exceed the context precision.
    needed = max(amount.adjusted(), 0) + digits + 2
    return decimal.Context(prec=max(precision, needed))


def round_to_digits(
    amount: Decimal, info: CurrencyInfo, rounding_mode: str, *, cash: bool = False, precision: int = 28
) -> Decimal:
    """Phase 1: quantize to the currency's (cash) fractional digits."""
    digits = info.digits_for(cash)
    ctx = _wide_context(amount, digits, precision)
    return amount.quantize(info.quantum_for(cash), rounding=rounding_mode, context=ctx)


def round_to_increment(
    amount: Decimal, info: CurrencyInfo, rounding_mode: str, *, cash: bool = False, precision: int = 28
) -> Decimal:
    """Phase 2: snap to the nearest multiple of the (cash) rounding increment."""
    increment = info.increment_for(cash)
    if increment.is_zero():
        return amount
    digits = info.digits_for(cash)
    ctx = _wide_context(amount, digits + max(-increment.adjusted(), 0), precision)
    units = ctx.divide(amount, increment).quantize(_ONE, rounding=rounding_mode, context=ctx)
    snapped = ctx.multiply(units, increment)
    # Express the result at the currency's digit exponent when the
    # increment is a whole number of minor units.
    if increment.as_tuple().exponent >= -digits:
        snapped = snapped.quantize(info.quantum_for(cash), context=ctx)
    return snapped


def round_money(
    money: Money,
    *,
    rounding_mode: str | None = None,
    cash: bool = False,
    context: MoneyContext | None = None,
) -> Money:
    """
    Round a Money value to its currency's precision and increment.

    Args:
        money: The value to round.
        rounding_mode: A ``decimal`` rounding constant. Defaults to the
            context's rounding mode.
        cash: Apply cash digits and cash increment instead of the
            accounting ones.
        context: Injected provider and policy.

    Examples:
        round_money(Money.of(123.7456, "CHF")) -> CHF 123.75
        round_money(Money.of(123.7456, "CHF"), cash=True) -> CHF 123.75
        round_money(Money.of(123.7456, "JPY")) -> JPY 124
        round_money(Money.of(1234, "USD")) -> USD 1234.00
    """
    ctx = resolve_context(context)
    mode = validate_rounding_mode(rounding_mode) if rounding_mode is not None else ctx.rounding_mode

    info = ctx.currencies.lookup(money.currency)
    if info is None:
        raise UnknownCurrencyError(money.currency)

    amount = round_to_digits(money.amount, info, mode, cash=cash, precision=ctx.precision)
    amount = round_to_increment(amount, info, mode, cash=cash, precision=ctx.precision)
    return Money._from_validated(amount, money.currency)


def round_with(money: Money, options: RoundingOptions, *, context: MoneyContext | None = None) -> Money:
    """``round_money`` driven by a RoundingOptions value."""
    return round_money(
        money, rounding_mode=options.rounding_mode, cash=options.cash, context=context
    )
