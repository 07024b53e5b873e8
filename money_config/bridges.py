"""
Config -> Kernel Bridges.

Functions that convert a ``MoneyConfig`` into kernel inputs. These live in
money_config (the producer) because the kernel must NEVER import
money_config.

Usage:
    from money_config import get_active_config
    from money_config.bridges import build_money_context

    config = get_active_config()
    context = build_money_context(config, rate_source=latest_rates)
"""

from __future__ import annotations

from decimal import Decimal

from money_config.schema import CurrencyDef, MoneyConfig
from money_kernel.domain.context import MoneyContext
from money_kernel.domain.currency import CurrencyInfo, CurrencyRegistry
from money_kernel.domain.exchange_rates import LatestRates


def build_currency_info(definition: CurrencyDef) -> CurrencyInfo:
    """Kernel ``CurrencyInfo`` for a configured currency."""
    return CurrencyInfo(
        code=definition.code,
        name=definition.name,
        fractional_digits=definition.fractional_digits,
        cash_fractional_digits=definition.cash_fractional_digits,
        rounding_increment=Decimal(definition.rounding_increment),
        cash_rounding_increment=Decimal(definition.cash_rounding_increment),
    )


def build_currency_registry(config: MoneyConfig) -> CurrencyRegistry:
    """ISO 4217 registry extended with (or overridden by) configured currencies."""
    return CurrencyRegistry.iso4217().extended(
        *(build_currency_info(c) for c in config.currencies)
    )


def build_money_context(
    config: MoneyConfig, rate_source: LatestRates | None = None
) -> MoneyContext:
    """Build the ``MoneyContext`` described by ``config``."""
    return MoneyContext(
        currencies=build_currency_registry(config),
        rounding_mode=config.rounding_mode,
        precision=config.precision,
        rate_source=rate_source,
    )
