"""
Values -- the immutable Money value object.

Responsibility:
    Provides the single monetary value type used by every operation in the
    kernel: a Decimal amount paired with a currency code. Amounts and
    currencies are NEVER separated.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Operations live in sibling modules (construction, arithmetic,
    comparison, rounding, split, conversion); Money's operators and
    convenience methods delegate to them.

Invariants enforced:
    - amount is always a Decimal (never float).
    - currency is always an upper-case code string.
    - Money is immutable; every operation returns a new instance.
    - ``Money(amount, currency)`` validates the code against the bundled
      ISO 4217 table. ``construction.new``/``Money.of`` validate against the
      injected metadata provider instead, so private codes from an extended
      registry are only reachable through them.
    - Kernel operations build results with ``Money._from_validated``; the
      code there always comes from a value or provider check already made.

Failure modes:
    - TypeError/ValueError when the canonical constructor receives a
      non-Decimal-convertible amount or an empty code.
    - UnknownCurrencyError when the code is not an ISO 4217 code.
    - Operator failures raise the typed kernel errors of the delegated
      operation (CurrencyMismatchError, InvalidOperandError).
"""

from __future__ import annotations

import decimal
import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from money_kernel.domain.currency import CurrencyRegistry

if TYPE_CHECKING:
    from money_kernel.domain.context import MoneyContext
    from money_kernel.domain.exchange_rates import ExchangeRateSnapshot

Numeric = int | float | Decimal

_ZERO = Decimal("0")


def is_numeric(value: object) -> bool:
    """True for finite int, float or Decimal values (bool excluded)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, Decimal):
        return value.is_finite()
    return False


def to_decimal(value: Any) -> Decimal:
    """
    Convert an amount or scalar to Decimal without binary float drift.

    Floats go through ``str()`` so ``0.1`` becomes ``Decimal("0.1")``.

    Raises:
        InvalidOperation/ValueError/TypeError: If the value is not a finite
            number or decimal-formatted string.
    """
    if isinstance(value, bool):
        raise TypeError(f"bool is not an amount: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        result = Decimal(value.strip().replace("_", ""))
    else:
        raise TypeError(f"Cannot convert {type(value).__name__} to Decimal")
    if not result.is_finite():
        raise InvalidOperation(f"Amount must be finite: {value!r}")
    return result


def exact_context(*operands: Decimal) -> decimal.Context:
    """Decimal context wide enough that add/sub/mul of ``operands`` is exact."""
    digits = sum(len(op.as_tuple().digits) for op in operands)
    spread = max(op.adjusted() for op in operands) - min(int(op.as_tuple().exponent) for op in operands)
    return decimal.Context(prec=max(digits + max(spread, 0) + 2, 1), rounding=decimal.ROUND_HALF_EVEN)


@dataclass(frozen=True, slots=True, eq=False)
class Money:
    """
    Monetary amount value object.

    Contract:
        Pairs a Decimal amount with a currency code. Equality is the total
        ``equal`` predicate (same currency, numerically equal amount);
        ordering requires the same currency.

    Guarantees:
        - Immutable and hashable
        - amount is always a Decimal
        - No silent currency mixing in arithmetic or ordering

    Non-goals:
        - Does NOT auto-round -- callers must explicitly call .round()
        - Does NOT format for display
    """

    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            try:
                object.__setattr__(self, "amount", to_decimal(self.amount))
            except (InvalidOperation, ValueError, TypeError) as e:
                raise ValueError(f"Invalid amount: {self.amount!r}") from e
        elif not self.amount.is_finite():
            raise ValueError(f"Invalid amount: {self.amount!r}")

        if not isinstance(self.currency, str):
            raise TypeError(f"currency must be a str code, got {type(self.currency).__name__}")
        if not self.currency.strip():
            raise ValueError("currency code is required")
        object.__setattr__(self, "currency", CurrencyRegistry.iso4217().validate(self.currency))

    @classmethod
    def _from_validated(cls, amount: Decimal, currency: str) -> Money:
        # No checks: amount is a finite Decimal and currency an upper-case
        # code the caller's provider already accepted.
        money = object.__new__(cls)
        object.__setattr__(money, "amount", amount)
        object.__setattr__(money, "currency", currency)
        return money

    # ------------------------------------------------------------------
    # Construction shortcuts
    # ------------------------------------------------------------------

    @classmethod
    def of(cls, amount: Any, currency: Any, *, context: MoneyContext | None = None) -> Money:
        """
        Validated factory; arguments may be given in either order.

        Raises:
            UnknownCurrencyError: If the currency code is not known.
            InvalidOperandError: If the amount is not a finite number.
        """
        from money_kernel.domain.construction import new

        return new(amount, currency, context=context)

    @classmethod
    def zero(cls, currency: Any, *, context: MoneyContext | None = None) -> Money:
        """Create a zero amount in the given currency."""
        from money_kernel.domain.construction import new

        return new(_ZERO, currency, context=context)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def is_zero(self) -> bool:
        return self.amount == _ZERO

    @property
    def is_positive(self) -> bool:
        return self.amount > _ZERO

    @property
    def is_negative(self) -> bool:
        return self.amount < _ZERO

    def to_decimal(self) -> Decimal:
        """The amount as a Decimal."""
        return self.amount

    def as_pair(self) -> tuple[Decimal, str]:
        """The plain ``(amount, code)`` pair used by persistence adapters."""
        return (self.amount, self.currency)

    def __composite_values__(self) -> tuple[Decimal, str]:
        # Column values for ORM composite mappings, in column order.
        return self.as_pair()

    # ------------------------------------------------------------------
    # Engine shortcuts
    # ------------------------------------------------------------------

    def round(
        self,
        rounding_mode: str | None = None,
        *,
        cash: bool = False,
        context: MoneyContext | None = None,
    ) -> Money:
        """Round to the currency's precision and increment rules."""
        from money_kernel.domain.rounding import round_money

        return round_money(self, rounding_mode=rounding_mode, cash=cash, context=context)

    def split(self, parts: int, *, context: MoneyContext | None = None) -> tuple[Money, Money]:
        """Split into ``parts`` equal rounded parts plus a remainder."""
        from money_kernel.domain.split import split

        return split(self, parts, context=context)

    def to_currency(
        self,
        to_currency: Any,
        rates: ExchangeRateSnapshot | dict[str, Any] | None = None,
        *,
        context: MoneyContext | None = None,
    ) -> Money:
        """Convert into another currency using a rate snapshot."""
        from money_kernel.domain.conversion import to_currency as convert

        return convert(self, to_currency, rates, context=context)

    # ------------------------------------------------------------------
    # Arithmetic operators
    # ------------------------------------------------------------------

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        from money_kernel.domain.arithmetic import add

        return add(self, other)

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        from money_kernel.domain.arithmetic import sub

        return sub(self, other)

    def __mul__(self, factor: Numeric) -> Money:
        from money_kernel.domain.arithmetic import mult

        return mult(self, factor)

    def __rmul__(self, factor: Numeric) -> Money:
        return self.__mul__(factor)

    def __truediv__(self, divisor: Numeric) -> Money:
        from money_kernel.domain.arithmetic import div

        return div(self, divisor)

    def __neg__(self) -> Money:
        return Money._from_validated(-self.amount, self.currency)

    def __pos__(self) -> Money:
        return self

    def __abs__(self) -> Money:
        return Money._from_validated(abs(self.amount), self.currency)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        from money_kernel.domain.comparison import equal

        return equal(self, other)

    def __hash__(self) -> int:
        # Decimal hashes are numeric, so 1.0 and 1.00 hash alike.
        return hash((self.currency, self.amount))

    def __lt__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        from money_kernel.domain.comparison import compare

        return compare(self, other) < 0

    def __le__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        from money_kernel.domain.comparison import compare

        return compare(self, other) <= 0

    def __gt__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        from money_kernel.domain.comparison import compare

        return compare(self, other) > 0

    def __ge__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        from money_kernel.domain.comparison import compare

        return compare(self, other) >= 0

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def __repr__(self) -> str:
        return f"Money({self.amount!r}, {self.currency!r})"
