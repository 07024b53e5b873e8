"""
Module: money_kernel.domain.split
Responsibility:
    Divide a Money value into equal parts without creating or destroying
    value.

Architecture position:
    Kernel > Domain -- pure calculation built on the rounding engine and
    arithmetic, zero I/O.

Invariants enforced:
    - ``per_part * parts + remainder == round(money)`` exactly.
    - ``sum(distribute(money, parts)) == round(money)`` exactly.
    - Every returned amount is rounded to the currency's precision.

Failure modes:
    - ValueError when ``parts`` is not a positive int (caller error).

Usage:
    per_part, remainder = split(Money.of("123.5", "JPY"), 3)
    # per_part == JPY 41, remainder == JPY 1
"""

from __future__ import annotations

from decimal import Decimal

from money_kernel.domain.arithmetic import div, mult, sub
from money_kernel.domain.context import MoneyContext, resolve_context
from money_kernel.domain.rounding import round_money
from money_kernel.domain.tracer import traced_operation
from money_kernel.domain.values import Money, exact_context
from money_kernel.exceptions import UnknownCurrencyError
from money_kernel.logging_config import get_logger

logger = get_logger("domain.split")


def _check_parts(parts: object) -> int:
    if isinstance(parts, bool) or not isinstance(parts, int):
        raise ValueError(f"parts must be a positive int, got {parts!r}")
    if parts <= 0:
        raise ValueError(f"parts must be a positive int, got {parts}")
    return parts


@traced_operation("split", "1.0", fingerprint_fields=("money", "parts"))
def split(money: Money, parts: int, *, context: MoneyContext | None = None) -> tuple[Money, Money]:
    """
    Split ``money`` into ``parts`` equal parts and a remainder.

    1. Round the amount to the currency's precision.
    2. Divide by ``parts`` and round the quotient.
    3. The remainder is whatever the rounded parts could not absorb.

    Examples:
        split(JPY 123.5, 3) -> (JPY 41, JPY 1)
        split(JPY 123.4, 3) -> (JPY 41, JPY 0)
        split(USD 123.7, 9) -> (USD 13.74, USD 0.04)

    Raises:
        ValueError: If ``parts`` is not a positive int.
    """
    _check_parts(parts)
    ctx = resolve_context(context)

    rounded = round_money(money, context=ctx)
    per_part = round_money(div(rounded, parts, context=ctx), context=ctx)
    remainder = sub(rounded, mult(per_part, parts))

    logger.debug(
        "money_split_completed",
        extra={
            "currency": money.currency,
            "parts": parts,
            "per_part": per_part.amount,
            "remainder": remainder.amount,
        },
    )
    return per_part, remainder


def distribute(money: Money, parts: int, *, context: MoneyContext | None = None) -> list[Money]:
    """
    Split ``money`` into ``parts`` amounts that sum exactly to ``round(money)``.

    The remainder left by ``split`` is handed out one minimum unit at a time
    to the leading parts, so no two parts differ by more than one unit.

    Examples:
        distribute(USD 100, 3) -> [USD 33.34, USD 33.33, USD 33.33]
        distribute(USD -100, 3) -> [USD -33.34, USD -33.33, USD -33.33]
    """
    ctx = resolve_context(context)
    per_part, remainder = split(money, parts, context=ctx)

    info = ctx.currencies.lookup(money.currency)
    if info is None:
        raise UnknownCurrencyError(money.currency)
    unit = info.minimum_unit()
    if remainder.is_negative:
        unit = -unit

    shares = [per_part.amount] * parts
    left = remainder.amount
    index = 0
    # The remainder is a whole number of units smaller than parts * unit.
    while left != Decimal(0) and index < parts:
        shares[index] = exact_context(shares[index], unit).add(shares[index], unit)
        left = exact_context(left, unit).subtract(left, unit)
        index += 1
    if left != Decimal(0):
        # Remainder not expressible in whole units; keep it on the first share.
        shares[0] = exact_context(shares[0], left).add(shares[0], left)

    return [Money._from_validated(share, money.currency) for share in shares]
