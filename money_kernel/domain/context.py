"""
MoneyContext -- the capabilities and policy injected into money operations.

Every operation that needs currency metadata, a rounding policy, a
division precision or a rate source takes an optional ``context``. When
omitted, ``MoneyContext()`` is used: the bundled ISO 4217 registry,
banker's rounding and 28 significant digits. Nothing here is global
mutable state; a context is a frozen value that tests replace freely.
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass, field, replace

from money_kernel.domain.currency import CurrencyMetadataProvider, CurrencyRegistry
from money_kernel.domain.exchange_rates import LatestRates

ROUNDING_MODES: frozenset[str] = frozenset({
    decimal.ROUND_CEILING,
    decimal.ROUND_DOWN,
    decimal.ROUND_FLOOR,
    decimal.ROUND_HALF_DOWN,
    decimal.ROUND_HALF_EVEN,
    decimal.ROUND_HALF_UP,
    decimal.ROUND_UP,
    decimal.ROUND_05UP,
})

DEFAULT_ROUNDING_MODE = decimal.ROUND_HALF_EVEN
DEFAULT_PRECISION = 28


def validate_rounding_mode(mode: str) -> str:
    """Return ``mode`` if it is a ``decimal`` rounding constant."""
    if mode not in ROUNDING_MODES:
        raise ValueError(
            f"Unknown rounding mode {mode!r}; expected one of {sorted(ROUNDING_MODES)}"
        )
    return mode


@dataclass(frozen=True)
class MoneyContext:
    """
    Injected collaborators and policy for money operations.

    Attributes:
        currencies: Currency metadata provider used for validation,
            rounding and conversion target checks.
        rounding_mode: Default rounding mode for the rounding engine.
        precision: Significant digits for division and conversion.
        rate_source: Where conversions read the latest snapshot when the
            caller passes no explicit rates.
    """

    currencies: CurrencyMetadataProvider = field(default_factory=CurrencyRegistry.iso4217)
    rounding_mode: str = DEFAULT_ROUNDING_MODE
    precision: int = DEFAULT_PRECISION
    rate_source: LatestRates | None = None

    def __post_init__(self) -> None:
        validate_rounding_mode(self.rounding_mode)
        if not isinstance(self.precision, int) or isinstance(self.precision, bool) or self.precision < 1:
            raise ValueError(f"precision must be a positive int, got {self.precision!r}")

    def with_rate_source(self, rate_source: LatestRates | None) -> MoneyContext:
        """Copy of this context reading rates from ``rate_source``."""
        return replace(self, rate_source=rate_source)

    def division_context(self) -> decimal.Context:
        """Decimal context for precision-bounded operations."""
        return decimal.Context(prec=self.precision, rounding=decimal.ROUND_HALF_EVEN)


def resolve_context(context: MoneyContext | None) -> MoneyContext:
    """Return ``context`` or a default one."""
    return context if context is not None else MoneyContext()
