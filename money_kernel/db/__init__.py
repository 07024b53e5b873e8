"""Persistence adapter - declarative base, column types, and the Money composite."""

from money_kernel.db.base import Base
from money_kernel.db.types import (
    Amount,
    CurrencyCode,
    MoneyCompositeAdapter,
    money_composite,
)

__all__ = [
    "Base",
    "Amount",
    "CurrencyCode",
    "MoneyCompositeAdapter",
    "money_composite",
]
