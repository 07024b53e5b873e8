"""
Construction -- validated creation of Money values.

Responsibility:
    The only public path that turns caller input into a ``Money``. Resolves
    argument order once, parses the amount, validates the currency code
    against the injected metadata provider, then builds the value with
    ``Money._from_validated``.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - No Money is built with a code the provider does not recognize.
    - Amounts are Decimal; floats are converted via ``str()``.
    - ``new`` and ``try_new`` share one validation path.

Failure modes:
    - UnknownCurrencyError for unrecognized codes.
    - InvalidOperandError for non-finite or unparsable amounts.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from money_kernel.domain.context import MoneyContext, resolve_context
from money_kernel.domain.currency import CurrencyInfo, normalize_code
from money_kernel.domain.result import MoneyResult
from money_kernel.domain.values import Money, is_numeric, to_decimal
from money_kernel.exceptions import (
    InvalidOperandError,
    MoneyKernelError,
    UnknownCurrencyError,
)


def _is_currency_token(value: object) -> bool:
    return isinstance(value, (str, CurrencyInfo))


def try_validate_currency_code(
    code: Any, *, context: MoneyContext | None = None
) -> MoneyResult[str]:
    """
    Validate a currency code (any case) or CurrencyInfo token.

    Returns:
        MoneyResult carrying the canonical upper-case code.
    """
    ctx = resolve_context(context)
    try:
        normalized = normalize_code(code)
    except UnknownCurrencyError as e:
        return MoneyResult.fail(e)
    if ctx.currencies.lookup(normalized) is None:
        return MoneyResult.fail(UnknownCurrencyError(code))
    return MoneyResult.ok(normalized)


def validate_currency_code(code: Any, *, context: MoneyContext | None = None) -> str:
    """Raising form of ``try_validate_currency_code``."""
    return try_validate_currency_code(code, context=context).unwrap()


def _order_arguments(
    first: Any, second: Any, ctx: MoneyContext
) -> tuple[Any, Any]:
    """Return ``(amount, currency)`` for arguments given in either order."""
    if _is_currency_token(second) and not _is_currency_token(first):
        return first, second
    if _is_currency_token(first) and not _is_currency_token(second):
        return second, first
    if isinstance(first, str) and isinstance(second, str):
        # Both text: canonical order wins unless only the first is a known code.
        if ctx.currencies.lookup(second.upper().strip()) is None and (
            ctx.currencies.lookup(first.upper().strip()) is not None
        ):
            return second, first
    return first, second


def _parse_amount(amount: Any) -> Decimal:
    if isinstance(amount, str) or is_numeric(amount):
        try:
            return to_decimal(amount)
        except (InvalidOperation, ValueError, TypeError) as e:
            raise InvalidOperandError(
                amount, f"Amount {amount!r} is not a decimal number"
            ) from e
    raise InvalidOperandError(amount, f"Amount {amount!r} is not a number")


def try_new(
    first: Any, second: Any, *, context: MoneyContext | None = None
) -> MoneyResult[Money]:
    """
    Build a Money from an amount and a currency given in either order.

    Examples:
        try_new(100, "USD") -> ok(Money(Decimal('100'), 'USD'))
        try_new("thb", 500) -> ok(Money(Decimal('500'), 'THB'))
        try_new("XYZZ", 100) -> fail(UnknownCurrencyError('XYZZ'))
    """
    ctx = resolve_context(context)
    amount, currency = _order_arguments(first, second, ctx)

    code_result = try_validate_currency_code(currency, context=ctx)
    if not code_result:
        return MoneyResult.fail(code_result.error)  # type: ignore[arg-type]

    try:
        decimal_amount = _parse_amount(amount)
    except MoneyKernelError as e:
        return MoneyResult.fail(e)

    return MoneyResult.ok(Money._from_validated(decimal_amount, code_result.value))  # type: ignore[arg-type]


def new(first: Any, second: Any, *, context: MoneyContext | None = None) -> Money:
    """
    Raising form of ``try_new``.

    Raises:
        UnknownCurrencyError: If the currency code is not known.
        InvalidOperandError: If the amount is not a finite number.
    """
    return try_new(first, second, context=context).unwrap()


def try_from_pair(
    pair: tuple[Any, Any], *, context: MoneyContext | None = None
) -> MoneyResult[Money]:
    """Build a Money from a 2-tuple ``(amount, code)`` or ``(code, amount)``."""
    if not isinstance(pair, (tuple, list)) or len(pair) != 2:
        return MoneyResult.fail(
            InvalidOperandError(pair, f"Expected an (amount, currency) pair, got {pair!r}")
        )
    return try_new(pair[0], pair[1], context=context)


def from_pair(pair: tuple[Any, Any], *, context: MoneyContext | None = None) -> Money:
    """Raising form of ``try_from_pair``."""
    return try_from_pair(pair, context=context).unwrap()
