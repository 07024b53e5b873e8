"""
Arithmetic -- currency-safe operations on Money.

Responsibility:
    add/sub between two Money values of the same currency, and mult/div of
    a Money by a numeric scalar. Each operation has a ``try_*`` form
    returning ``MoneyResult`` and a raising form that unwraps it.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - add/sub require identical currencies; there is no implicit
      conversion.
    - add, sub and mult are exact: the decimal context is widened to fit
      the operands, so nothing is silently truncated.
    - div is bounded by ``MoneyContext.precision`` significant digits.
    - Money x Money and Money / Money are not defined.

Failure modes:
    - CurrencyMismatchError on add/sub with differing currencies.
    - InvalidOperandError on a non-numeric scalar or a zero divisor.
"""

from __future__ import annotations

from typing import Any

from money_kernel.domain.context import MoneyContext, resolve_context
from money_kernel.domain.result import MoneyResult
from money_kernel.domain.values import Money, exact_context, is_numeric, to_decimal
from money_kernel.exceptions import CurrencyMismatchError, InvalidOperandError


def try_add(a: Money, b: Money) -> MoneyResult[Money]:
    """
    Add two Money values.

    Examples:
        try_add(USD 200, USD 100) -> ok(USD 300)
        try_add(USD 200, AUD 100) -> fail(CurrencyMismatchError('USD', 'AUD'))
    """
    if a.currency != b.currency:
        return MoneyResult.fail(CurrencyMismatchError(a.currency, b.currency, "add"))
    amount = exact_context(a.amount, b.amount).add(a.amount, b.amount)
    return MoneyResult.ok(Money._from_validated(amount, a.currency))


def add(a: Money, b: Money) -> Money:
    """Add two Money values and raise on error."""
    return try_add(a, b).unwrap()


def try_sub(a: Money, b: Money) -> MoneyResult[Money]:
    """Subtract ``b`` from ``a``."""
    if a.currency != b.currency:
        return MoneyResult.fail(CurrencyMismatchError(a.currency, b.currency, "subtract"))
    amount = exact_context(a.amount, b.amount).subtract(a.amount, b.amount)
    return MoneyResult.ok(Money._from_validated(amount, a.currency))


def sub(a: Money, b: Money) -> Money:
    """Subtract ``b`` from ``a`` and raise on error."""
    return try_sub(a, b).unwrap()


def try_mult(money: Money, factor: Any) -> MoneyResult[Money]:
    """
    Multiply a Money value by a number.

    Multiplying one Money by another is not supported.
    """
    if not is_numeric(factor):
        return MoneyResult.fail(
            InvalidOperandError(factor, f"Cannot multiply money by {factor!r}")
        )
    scalar = to_decimal(factor)
    amount = exact_context(money.amount, scalar).multiply(money.amount, scalar)
    return MoneyResult.ok(Money._from_validated(amount, money.currency))


def mult(money: Money, factor: Any) -> Money:
    """Multiply a Money value by a number and raise on error."""
    return try_mult(money, factor).unwrap()


def try_div(
    money: Money, divisor: Any, *, context: MoneyContext | None = None
) -> MoneyResult[Money]:
    """
    Divide a Money value by a number.

    Dividing one Money by another is not supported. The quotient carries at
    most ``context.precision`` significant digits.
    """
    if not is_numeric(divisor):
        return MoneyResult.fail(
            InvalidOperandError(divisor, f"Cannot divide money by {divisor!r}")
        )
    scalar = to_decimal(divisor)
    if scalar.is_zero():
        return MoneyResult.fail(InvalidOperandError(divisor, "Cannot divide money by zero"))
    ctx = resolve_context(context)
    amount = ctx.division_context().divide(money.amount, scalar)
    return MoneyResult.ok(Money._from_validated(amount, money.currency))


def div(money: Money, divisor: Any, *, context: MoneyContext | None = None) -> Money:
    """Divide a Money value by a number and raise on error."""
    return try_div(money, divisor, context=context).unwrap()
