"""
Conversion -- currency conversion against an exchange-rate snapshot.

Responsibility:
    Convert a Money value into another currency using a caller-supplied
    rate snapshot, or the latest snapshot published to the context's
    ``rate_source`` when the caller supplies none.

    Rates are quoted against a common base currency, so the cross rate is
    ``rates[target] / rates[source]``. The engine computes
    ``amount / rates[source] * rates[target]`` and applies NO rounding;
    callers round explicitly when they need a currency-precise amount.

Architecture position:
    Kernel > Domain -- pure functional core. The kernel never fetches
    rates; it reads exactly one snapshot per call.

Invariants enforced:
    - Same-currency conversion returns the input unchanged, without
      consulting any rates.
    - A missing rate is an error, never an implicit zero or one.
    - The source rate is checked before the target rate; only the first
      missing rate is reported.
    - Every call reads a single snapshot, so a concurrent publish never
      yields a mixed result.

Failure modes:
    - UnknownCurrencyError if the target code is not known.
    - ExchangeRateUnavailableError naming the first currency without a
      rate (or the source currency when no snapshot exists at all).
    - InvalidOperandError if ``rates`` is not a mapping, or if the source or
      target entry of a plain mapping is not a positive rate. Entries for
      other currencies are never read.

Audit relevance:
    Each successful conversion logs ``currency_conversion_completed`` with
    the rates used and the snapshot id, so a converted amount can be
    reproduced from the rate table it was computed against.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from money_kernel.domain.construction import try_validate_currency_code
from money_kernel.domain.context import MoneyContext, resolve_context
from money_kernel.domain.currency import CurrencyInfo
from money_kernel.domain.exchange_rates import ExchangeRateSnapshot, lookup_rate
from money_kernel.domain.result import MoneyResult
from money_kernel.domain.tracer import traced_operation
from money_kernel.domain.values import Money
from money_kernel.exceptions import ExchangeRateUnavailableError, InvalidOperandError
from money_kernel.logging_config import get_logger

logger = get_logger("domain.conversion")


def _is_same_currency(money: Money, to_currency: Any) -> bool:
    if isinstance(to_currency, CurrencyInfo):
        return to_currency.code == money.currency
    return isinstance(to_currency, str) and to_currency.upper().strip() == money.currency


def _resolve_rates(
    rates: ExchangeRateSnapshot | Mapping[str, Any] | None, ctx: MoneyContext
) -> Mapping[Any, Any] | None:
    if rates is not None:
        return rates
    if ctx.rate_source is not None:
        return ctx.rate_source.latest()
    return None


def _rate(table: Mapping[Any, Any], code: str) -> MoneyResult[Decimal]:
    try:
        rate = lookup_rate(table, code)
    except ValueError as e:
        return MoneyResult.fail(InvalidOperandError(code, f"Unusable exchange rate: {e}"))
    if rate is None:
        return MoneyResult.fail(ExchangeRateUnavailableError(code))
    return MoneyResult.ok(rate)


def _failed(money: Money, target: Any, result: MoneyResult[Money]) -> MoneyResult[Money]:
    error = result.error
    logger.warning(
        "money_operation_failed",
        extra={
            "operation": "to_currency",
            "error_code": getattr(error, "code", None),
            "from_currency": money.currency,
            "to_currency": str(target),
        },
    )
    return result


@traced_operation("to_currency", "1.0", fingerprint_fields=("money", "to_currency"))
def try_to_currency(
    money: Money,
    to_currency: Any,
    rates: ExchangeRateSnapshot | Mapping[str, Any] | None = None,
    *,
    context: MoneyContext | None = None,
) -> MoneyResult[Money]:
    """
    Convert ``money`` into ``to_currency``.

    Args:
        money: The value to convert.
        to_currency: Target currency code (any case) or CurrencyInfo.
        rates: Rate snapshot or plain ``{code: rate}`` mapping. Defaults
            to ``context.rate_source.latest()``.
        context: Injected provider, precision and rate source.

    Examples:
        try_to_currency(USD 100, "AUD", {"USD": 1, "AUD": "0.7345"})
            -> ok(AUD 73.4500)
        try_to_currency(USD 100, "USD") -> ok(USD 100)
    """
    ctx = resolve_context(context)

    if _is_same_currency(money, to_currency):
        return MoneyResult.ok(money)

    code_result = try_validate_currency_code(to_currency, context=ctx)
    if not code_result:
        return _failed(money, to_currency, MoneyResult.fail(code_result.error))  # type: ignore[arg-type]
    target: str = code_result.value  # type: ignore[assignment]

    table = _resolve_rates(rates, ctx)
    if table is None:
        return _failed(
            money, target, MoneyResult.fail(ExchangeRateUnavailableError(money.currency))
        )
    if not isinstance(table, Mapping):
        return _failed(
            money,
            target,
            MoneyResult.fail(InvalidOperandError(table, f"Rates must be a mapping, got {table!r}")),
        )

    source_result = _rate(table, money.currency)
    if not source_result:
        return _failed(money, target, MoneyResult.fail(source_result.error))  # type: ignore[arg-type]
    target_result = _rate(table, target)
    if not target_result:
        return _failed(money, target, MoneyResult.fail(target_result.error))  # type: ignore[arg-type]
    source_rate: Decimal = source_result.value  # type: ignore[assignment]
    target_rate: Decimal = target_result.value  # type: ignore[assignment]

    dctx = ctx.division_context()
    amount = dctx.multiply(dctx.divide(money.amount, source_rate), target_rate)

    logger.info(
        "currency_conversion_completed",
        extra={
            "from_currency": money.currency,
            "to_currency": target,
            "source_rate": source_rate,
            "target_rate": target_rate,
            "snapshot_id": getattr(table, "snapshot_id", None),
        },
    )
    return MoneyResult.ok(Money._from_validated(amount, target))


def to_currency(
    money: Money,
    to_currency: Any,
    rates: ExchangeRateSnapshot | Mapping[str, Any] | None = None,
    *,
    context: MoneyContext | None = None,
) -> Money:
    """
    Raising form of ``try_to_currency``.

    Raises:
        UnknownCurrencyError: If the target currency is not known.
        ExchangeRateUnavailableError: If a required rate is missing.
        InvalidOperandError: If a required rate is not a positive number.
    """
    return try_to_currency(money, to_currency, rates, context=context).unwrap()
