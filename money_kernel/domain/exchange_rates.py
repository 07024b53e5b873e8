"""
Exchange rates -- immutable rate snapshots and the latest-rates holder.

Responsibility:
    Defines the interface boundary between the conversion engine and the
    (external) exchange-rate retrieval service. A snapshot maps currency
    codes to Decimal rates expressed against a common base currency.

Architecture position:
    Kernel > Domain -- pure, zero I/O. The kernel never fetches, caches or
    refreshes rates; a retrieval service publishes snapshots into a
    ``LatestRates`` holder and conversions read one snapshot per call.

Invariants enforced:
    - Snapshots are immutable once built.
    - Every rate is a positive, finite Decimal (never float, never zero).
    - Absence of a key signals unavailability, never zero.
    - ``LatestRates.publish`` swaps the snapshot reference atomically, so a
      reader never observes a partially updated table.

Failure modes:
    - ValueError on a non-positive, non-finite or unparsable rate.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator, Mapping
from datetime import datetime
from decimal import Decimal, InvalidOperation
from types import MappingProxyType

from money_kernel.domain.currency import normalize_code
from money_kernel.logging_config import get_logger

logger = get_logger("domain.exchange_rates")

_ZERO = Decimal("0")


def _to_rate(code: str, value: object) -> Decimal:
    if isinstance(value, bool):
        raise ValueError(f"Invalid exchange rate for {code}: {value!r}")
    if isinstance(value, Decimal):
        rate = value
    else:
        try:
            rate = Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise ValueError(f"Invalid exchange rate for {code}: {value!r}") from e
    if not rate.is_finite() or rate <= _ZERO:
        raise ValueError(f"Exchange rate must be positive: {code}={rate}")
    return rate


class ExchangeRateSnapshot(Mapping[str, Decimal]):
    """
    Point-in-time table of rates against a common base currency.

    Contract:
        Read-only mapping ``code -> Decimal``. Keys are upper-case codes.
        ``base``, ``as_of`` and ``snapshot_id`` are descriptive metadata used
        in logs; they do not affect conversion arithmetic.
    """

    __slots__ = ("_rates", "base", "as_of", "snapshot_id")

    def __init__(
        self,
        rates: Mapping[str, Decimal | int | float | str],
        *,
        base: str | None = None,
        as_of: datetime | None = None,
        snapshot_id: str | None = None,
    ):
        normalized: dict[str, Decimal] = {}
        for code, value in rates.items():
            key = normalize_code(code)
            normalized[key] = _to_rate(key, value)
        self._rates: Mapping[str, Decimal] = MappingProxyType(normalized)
        self.base = normalize_code(base) if base is not None else None
        self.as_of = as_of
        self.snapshot_id = snapshot_id

    def rate_for(self, code: str) -> Decimal | None:
        """Rate for ``code`` or None when unavailable."""
        return self._rates.get(code.upper().strip())

    def __getitem__(self, code: str) -> Decimal:
        return self._rates[code.upper().strip()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rates)

    def __len__(self) -> int:
        return len(self._rates)

    def __repr__(self) -> str:
        return (
            f"ExchangeRateSnapshot(base={self.base!r}, rates={len(self._rates)}, "
            f"as_of={self.as_of!r})"
        )


def lookup_rate(rates: Mapping[object, object], code: str) -> Decimal | None:
    """
    Rate for the upper-case ``code`` in a snapshot or a plain mapping.

    Only the matching entry of a plain mapping is parsed; other entries,
    including keys that are not strings, are never looked at.

    Returns:
        The rate, or None when the table has no entry for ``code``.

    Raises:
        ValueError: If the entry exists but is not a positive, finite rate.
    """
    if isinstance(rates, ExchangeRateSnapshot):
        return rates.rate_for(code)
    for key, value in rates.items():
        if isinstance(key, str) and key.upper().strip() == code:
            return _to_rate(code, value)
    return None


class LatestRates:
    """Holder of the most recently published snapshot."""

    def __init__(self, snapshot: ExchangeRateSnapshot | None = None):
        self._lock = threading.Lock()
        self._snapshot = snapshot

    def publish(self, snapshot: ExchangeRateSnapshot) -> None:
        """Replace the current snapshot with ``snapshot``."""
        if not isinstance(snapshot, ExchangeRateSnapshot):
            raise TypeError(
                f"snapshot must be an ExchangeRateSnapshot, got {type(snapshot).__name__}"
            )
        with self._lock:
            self._snapshot = snapshot
        logger.info(
            "exchange_rates_published",
            extra={
                "snapshot_id": snapshot.snapshot_id,
                "base_currency": snapshot.base,
                "rate_count": len(snapshot),
            },
        )

    def latest(self) -> ExchangeRateSnapshot | None:
        """The current snapshot, or None if nothing has been published."""
        with self._lock:
            return self._snapshot
