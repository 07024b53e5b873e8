"""
Module: money_kernel.db.types
Responsibility: Annotated column types and the composite adapter that maps a
    pair of columns (amount, currency code) onto the Money value object.
Architecture position: Kernel > DB.  Imports the pure domain layer; the
    domain layer never imports from here.

Invariants enforced:
    - Every Money loaded from storage is validated against the injected
      currency metadata provider, exactly like Money built from caller
      input.  Storage never bypasses construction.
    - Amounts are stored as Numeric(38, 9).  No floats.
    - Both columns NULL maps to None; a half-NULL pair is rejected.
    - ``dump`` re-checks the code of a Money against the adapter's provider
      before it is written.

Failure modes:
    - load/dump/cast return MoneyResult failures (UnknownCurrencyError,
      InvalidOperandError) instead of raising.
    - The composite loader raises the carried error, so a corrupted row
      surfaces as a typed kernel error when it is loaded.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Annotated, Any

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Composite, composite

from money_kernel.domain.construction import try_from_pair, try_new, try_validate_currency_code
from money_kernel.domain.context import MoneyContext, resolve_context
from money_kernel.domain.result import MoneyResult
from money_kernel.domain.values import Money, is_numeric
from money_kernel.exceptions import InvalidOperandError

# Monetary amount: 38 digits total, 9 decimal places
Amount = Annotated[Decimal, Numeric(38, 9)]

# ISO 4217 style currency code (e.g., "USD", "EUR", "JPY")
CurrencyCode = Annotated[str, String(3)]


class MoneyCompositeAdapter:
    """
    Converts between stored ``(amount, code)`` pairs and Money values.

    Contract:
        Mirrors a composite database type with an amount field and a
        currency field.  ``load`` reads a stored pair, ``dump`` produces the
        pair to store, ``cast`` accepts loosely-typed application input.
    """

    def __init__(self, context: MoneyContext | None = None):
        self._context = resolve_context(context)

    @property
    def context(self) -> MoneyContext:
        return self._context

    def load(self, pair: Any) -> MoneyResult[Money]:
        """Build a validated Money from a stored ``(amount, code)`` pair."""
        if not isinstance(pair, (tuple, list)) or len(pair) != 2:
            return MoneyResult.fail(
                InvalidOperandError(pair, f"Expected a stored (amount, currency) pair, got {pair!r}")
            )
        amount, code = pair
        if amount is None or code is None:
            return MoneyResult.fail(
                InvalidOperandError(pair, "Stored money has a NULL amount or currency")
            )
        return try_new(amount, code, context=self._context)

    def dump(self, value: Any) -> MoneyResult[tuple[Decimal, str]]:
        """The ``(amount, code)`` pair to store for a Money or a valid pair."""
        if isinstance(value, Money):
            # Only codes known to this adapter's provider are written.
            code_result = try_validate_currency_code(value.currency, context=self._context)
            if not code_result:
                return MoneyResult.fail(code_result.error)  # type: ignore[arg-type]
            return MoneyResult.ok(value.as_pair())
        if isinstance(value, (tuple, list)):
            result = try_from_pair(value, context=self._context)  # type: ignore[arg-type]
            if not result:
                return MoneyResult.fail(result.error)  # type: ignore[arg-type]
            return MoneyResult.ok(result.value.as_pair())  # type: ignore[union-attr]
        return MoneyResult.fail(
            InvalidOperandError(value, f"Cannot store {type(value).__name__} as money")
        )

    def cast(self, value: Any) -> MoneyResult[Money]:
        """
        Coerce application input into Money.

        Accepts a Money, an ``(amount, code)`` pair, or a mapping with
        ``"amount"`` and ``"currency"`` keys.
        """
        if isinstance(value, Money):
            return MoneyResult.ok(value)
        if isinstance(value, (tuple, list)):
            return try_from_pair(value, context=self._context)  # type: ignore[arg-type]
        if isinstance(value, Mapping) and "amount" in value and "currency" in value:
            amount = value["amount"]
            if not (isinstance(amount, str) or is_numeric(amount)):
                return MoneyResult.fail(
                    InvalidOperandError(amount, f"Amount {amount!r} is not a number")
                )
            return try_new(amount, value["currency"], context=self._context)
        return MoneyResult.fail(
            InvalidOperandError(value, f"Cannot cast {type(value).__name__} to money")
        )


def money_composite(
    amount_column: Any,
    currency_column: Any,
    *,
    context: MoneyContext | None = None,
    **kwargs: Any,
) -> Composite:
    """
    Map an amount column and a currency column onto one Money attribute.

    Loaded values are validated through ``MoneyCompositeAdapter.load``.
    When both columns are NULL the attribute is None.

    Usage:
        class Invoice(Base):
            __tablename__ = "invoices"

            id: Mapped[int] = mapped_column(primary_key=True)
            total_amount: Mapped[Amount | None]
            total_currency: Mapped[CurrencyCode | None]
            total: Mapped[Money | None] = money_composite(
                "total_amount", "total_currency"
            )
    """
    adapter = MoneyCompositeAdapter(context)

    def _load(amount: Any, currency: Any) -> Money | None:
        if amount is None and currency is None:
            return None
        return adapter.load((amount, currency)).unwrap()

    return composite(_load, amount_column, currency_column, **kwargs)
