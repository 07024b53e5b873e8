"""
Shared fixtures: JSON log capture, money contexts over the bundled and a
small fixture currency table, and exchange-rate snapshots.
"""

import json
import logging
from decimal import Decimal
from io import StringIO

import pytest

from money_kernel.domain.context import MoneyContext
from money_kernel.domain.currency import CurrencyInfo, CurrencyRegistry
from money_kernel.domain.exchange_rates import ExchangeRateSnapshot, LatestRates
from money_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _json_logging_for_suite():
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _fresh_log_context():
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Records emitted under ``money_kernel`` during the test, as dicts.

    Call the fixture value to read what has been logged so far::

        split(Money.of(10, "USD"), 3)
        assert "money_split_completed" in [r["message"] for r in captured_logs()]
    """
    buffer = StringIO()
    capture = logging.StreamHandler(buffer)
    capture.setFormatter(StructuredFormatter())
    kernel_logger = logging.getLogger("money_kernel")
    saved_level = kernel_logger.level
    kernel_logger.setLevel(logging.DEBUG)
    kernel_logger.addHandler(capture)
    try:
        yield lambda: [json.loads(line) for line in buffer.getvalue().splitlines() if line]
    finally:
        kernel_logger.removeHandler(capture)
        kernel_logger.setLevel(saved_level)


# =============================================================================
# Context fixtures
# =============================================================================


@pytest.fixture
def iso_context() -> MoneyContext:
    """Default context: bundled ISO 4217 table, banker's rounding."""
    return MoneyContext()


@pytest.fixture
def fixture_registry() -> CurrencyRegistry:
    """
    Small deterministic currency table.

    CHF here rounds cash to whole units of 5 at 0 cash digits, unlike the
    bundled table where CHF cash rounds to 0.05.
    """
    return CurrencyRegistry([
        CurrencyInfo("USD", "US Dollar", 2),
        CurrencyInfo("AUD", "Australian Dollar", 2),
        CurrencyInfo("JPY", "Japanese Yen", 0),
        CurrencyInfo(
            "CHF",
            "Swiss Franc",
            2,
            cash_fractional_digits=0,
            cash_rounding_increment=Decimal("5"),
        ),
    ])


@pytest.fixture
def fixture_context(fixture_registry) -> MoneyContext:
    """Context over the fixture currency table."""
    return MoneyContext(currencies=fixture_registry)


# =============================================================================
# Exchange-rate fixtures
# =============================================================================


@pytest.fixture
def usd_aud_rates() -> ExchangeRateSnapshot:
    """USD-based snapshot with AUD only."""
    return ExchangeRateSnapshot(
        {"USD": Decimal("1"), "AUD": Decimal("0.7345")},
        base="USD",
        snapshot_id="snap-usd-aud",
    )


@pytest.fixture
def latest_rates(usd_aud_rates) -> LatestRates:
    """Rate holder with the USD/AUD snapshot already published."""
    return LatestRates(usd_aud_rates)
