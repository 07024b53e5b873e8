"""
Pure domain layer.

This module contains the Money value object and the operations on it,
with NO dependencies on:
- ORM (SQLAlchemy)
- Configuration files
- Rate retrieval
- I/O beyond structured logging

All domain objects are immutable and deterministic.
"""

from money_kernel.domain.arithmetic import (
    add,
    div,
    mult,
    sub,
    try_add,
    try_div,
    try_mult,
    try_sub,
)
from money_kernel.domain.comparison import (
    Ordering,
    cmp,
    compare,
    equal,
    try_cmp,
    try_compare,
)
from money_kernel.domain.construction import (
    from_pair,
    new,
    try_from_pair,
    try_new,
    try_validate_currency_code,
    validate_currency_code,
)
from money_kernel.domain.context import MoneyContext
from money_kernel.domain.conversion import to_currency, try_to_currency
from money_kernel.domain.currency import (
    CurrencyInfo,
    CurrencyMetadataProvider,
    CurrencyRegistry,
)
from money_kernel.domain.exchange_rates import ExchangeRateSnapshot, LatestRates
from money_kernel.domain.result import MoneyResult
from money_kernel.domain.rounding import RoundingOptions, round_money, round_with
from money_kernel.domain.split import distribute, split
from money_kernel.domain.values import Money

__all__ = [
    # Values
    "Money",
    "MoneyResult",
    "MoneyContext",
    # Currency metadata
    "CurrencyInfo",
    "CurrencyMetadataProvider",
    "CurrencyRegistry",
    # Construction
    "new",
    "try_new",
    "from_pair",
    "try_from_pair",
    "validate_currency_code",
    "try_validate_currency_code",
    # Arithmetic
    "add",
    "try_add",
    "sub",
    "try_sub",
    "mult",
    "try_mult",
    "div",
    "try_div",
    # Comparison
    "Ordering",
    "equal",
    "cmp",
    "try_cmp",
    "compare",
    "try_compare",
    # Rounding and split
    "RoundingOptions",
    "round_money",
    "round_with",
    "split",
    "distribute",
    # Conversion
    "ExchangeRateSnapshot",
    "LatestRates",
    "to_currency",
    "try_to_currency",
]
