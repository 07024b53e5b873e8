"""Comparison -- equality and ordering of Money values.

Equality is total: values of different currencies are simply unequal.
Ordering is partial: comparing amounts of different currencies is an
error, because no ordering exists without an exchange rate.
"""

from __future__ import annotations

from enum import Enum

from money_kernel.domain.result import MoneyResult
from money_kernel.domain.values import Money
from money_kernel.exceptions import CurrencyMismatchError


class Ordering(str, Enum):
    """Result of ``cmp``."""

    LT = "lt"
    EQ = "eq"
    GT = "gt"

    @property
    def as_int(self) -> int:
        return _ORDERING_TO_INT[self]


_ORDERING_TO_INT = {Ordering.LT: -1, Ordering.EQ: 0, Ordering.GT: 1}


def equal(a: object, b: object) -> bool:
    """True iff both are Money with the same currency and equal amounts."""
    if not isinstance(a, Money) or not isinstance(b, Money):
        return False
    return a.currency == b.currency and a.amount == b.amount


def try_cmp(a: Money, b: Money) -> MoneyResult[Ordering]:
    """Order two Money values of the same currency."""
    if a.currency != b.currency:
        return MoneyResult.fail(CurrencyMismatchError(a.currency, b.currency, "compare"))
    if a.amount < b.amount:
        return MoneyResult.ok(Ordering.LT)
    if a.amount > b.amount:
        return MoneyResult.ok(Ordering.GT)
    return MoneyResult.ok(Ordering.EQ)


def cmp(a: Money, b: Money) -> Ordering:
    """Raising form of ``try_cmp``."""
    return try_cmp(a, b).unwrap()


def try_compare(a: Money, b: Money) -> MoneyResult[int]:
    """Like ``try_cmp`` but yields -1, 0 or 1."""
    result = try_cmp(a, b)
    if not result:
        return MoneyResult.fail(result.error)  # type: ignore[arg-type]
    return MoneyResult.ok(result.value.as_int)  # type: ignore[union-attr]


def compare(a: Money, b: Money) -> int:
    """Raising form of ``try_compare``."""
    return try_compare(a, b).unwrap()
