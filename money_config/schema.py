"""
Money configuration schema.

Defines the human-authored source artifact for money-kernel policy: the
default rounding mode, the division precision and any currencies that
extend or override the bundled ISO 4217 table. YAML files are parsed into
these types by the loader and turned into a kernel ``MoneyContext`` by
``money_config.bridges``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CurrencyDef:
    """Currency metadata as authored in configuration.

    Increments are kept as decimal strings so that the configuration
    checksum never depends on float formatting.
    """

    code: str
    name: str
    fractional_digits: int
    cash_fractional_digits: int | None = None
    rounding_increment: str = "0"
    cash_rounding_increment: str = "0"


@dataclass(frozen=True)
class MoneyConfig:
    """Money-kernel configuration set.

    Attributes:
        config_id: Unique identifier (e.g., "default")
        version: Configuration version number
        rounding_mode: ``decimal`` rounding constant (e.g., "ROUND_HALF_EVEN")
        precision: Significant digits for division and conversion
        currencies: Currencies added to (or replacing entries of) ISO 4217
        checksum: SHA-256 of the canonical source serialization
    """

    config_id: str
    version: int
    rounding_mode: str
    precision: int
    currencies: tuple[CurrencyDef, ...] = ()
    checksum: str = ""
