"""
Module: money_kernel.db.base
Responsibility: Declarative base for SQLAlchemy models that store Money
    values.  Provides the type annotation map for consistent column types.
Architecture position: Kernel > DB.  Lowest-level import target within the
    persistence adapter.  MUST NOT import from money_config or outer layers;
    the pure domain layer MUST NOT import from here.

Invariants enforced:
    - Decimal precision: type_annotation_map maps Python Decimal to
      Numeric(38, 9).  NEVER use float for monetary amounts.
    - Currency codes are stored as String(3).
"""

from decimal import Decimal
from typing import ClassVar

from sqlalchemy import Numeric, String
from sqlalchemy.orm import DeclarativeBase

from money_kernel.db.types import Amount, CurrencyCode


class Base(DeclarativeBase):
    """
    Declarative base for models holding monetary columns.

    Guarantees:
        - Decimal and Amount map to Numeric(38, 9) -- financial-grade precision.
        - CurrencyCode maps to String(3).
    """

    type_annotation_map: ClassVar[dict] = {
        # 38 digits total, 9 decimal places
        Decimal: Numeric(38, 9),
        Amount: Numeric(38, 9),
        CurrencyCode: String(3),
    }
