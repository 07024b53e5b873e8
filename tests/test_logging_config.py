"""
Tests for money_kernel/logging_config.py.

Each test installs its own in-memory handler through configure_logging();
the suite-wide DEBUG configuration is restored afterwards.
"""

import asyncio
import json
import logging
from decimal import Decimal
from io import StringIO

import pytest

from money_kernel.exceptions import CurrencyMismatchError
from money_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _isolated_logging():
    reset_logging()
    yield
    reset_logging()
    configure_logging(level=logging.DEBUG)


@pytest.fixture
def json_lines():
    """Install a JSON handler at the given level and return a reader."""
    stream = StringIO()

    def install(level=logging.INFO):
        handler = logging.StreamHandler(stream)
        handler.setFormatter(StructuredFormatter())
        configure_logging(handler=handler, level=level)
        return handler

    def read() -> list[dict]:
        return [json.loads(line) for line in stream.getvalue().splitlines() if line]

    read.install = install
    return read


class TestRecordShape:
    def test_core_keys(self, json_lines):
        json_lines.install()
        get_logger("domain.split").info("money_split_completed")

        (record,) = json_lines()
        assert record["message"] == "money_split_completed"
        assert record["level"] == "INFO"
        assert record["logger"] == "money_kernel.domain.split"
        assert record["ts"].endswith("+00:00")

    def test_extra_fields_are_top_level(self, json_lines):
        json_lines.install()
        get_logger("domain.split").info(
            "money_split_completed", extra={"parts": 3, "currency": "JPY"}
        )

        (record,) = json_lines()
        assert (record["parts"], record["currency"]) == (3, "JPY")

    @pytest.mark.parametrize(
        "value, rendered",
        [
            (Decimal("0.7345"), "0.7345"),
            (Decimal("1E+3"), "1E+3"),
            (("USD", "AUD"), ["USD", "AUD"]),
        ],
    )
    def test_value_rendering(self, json_lines, value, rendered):
        json_lines.install()
        get_logger("t").info("rendered", extra={"value": value})

        assert json_lines()[0]["value"] == rendered

    def test_level_filtering(self, json_lines):
        json_lines.install(level=logging.WARNING)
        logger = get_logger("t")
        logger.info("dropped")
        logger.warning("kept")

        assert [r["message"] for r in json_lines()] == ["kept"]


class TestExceptionRendering:
    def test_plain_exception(self, json_lines):
        json_lines.install()
        try:
            raise ZeroDivisionError("nope")
        except ZeroDivisionError:
            get_logger("t").exception("division_failed")

        (record,) = json_lines()
        assert record["level"] == "ERROR"
        assert record["exc_type"] == "ZeroDivisionError"
        assert record["exc_message"] == "nope"
        assert "ZeroDivisionError" in record["traceback"]
        assert "exc_code" not in record

    def test_kernel_error_details(self, json_lines):
        json_lines.install()
        try:
            raise CurrencyMismatchError("USD", "AUD", "add")
        except CurrencyMismatchError:
            get_logger("t").exception("add_failed")

        (record,) = json_lines()
        assert record["exc_code"] == "CURRENCY_MISMATCH"
        assert (record["exc_left"], record["exc_right"]) == ("USD", "AUD")


class TestLogContext:
    def test_fields_merge_into_records(self, json_lines):
        json_lines.install()
        LogContext.set(correlation_id="req-7", rate_snapshot_id="snap-1")
        get_logger("t").info("with_context")

        record = json_lines()[0]
        assert record["correlation_id"] == "req-7"
        assert record["rate_snapshot_id"] == "snap-1"
        assert "actor_id" not in record

    def test_none_leaves_value(self):
        LogContext.set(actor_id="alice")
        LogContext.set(actor_id=None, trace_id="t-1")
        assert LogContext.get_all() == {"actor_id": "alice", "trace_id": "t-1"}

    def test_unknown_field_rejected(self):
        with pytest.raises(TypeError, match="journal_entry_id"):
            LogContext.set(journal_entry_id="x")

    def test_bind_nests_and_restores(self):
        LogContext.set(rate_snapshot_id="outer")
        with LogContext.bind(rate_snapshot_id="middle", trace_id="t"):
            with LogContext.bind(rate_snapshot_id="inner"):
                assert LogContext.get_all()["rate_snapshot_id"] == "inner"
            assert LogContext.get_all() == {"rate_snapshot_id": "middle", "trace_id": "t"}
        assert LogContext.get_all() == {"rate_snapshot_id": "outer"}

    def test_bind_restores_on_error(self):
        with pytest.raises(RuntimeError):
            with LogContext.bind(correlation_id="temp"):
                raise RuntimeError
        assert LogContext.get_all() == {}

    def test_tasks_do_not_share_context(self):
        async def tagged(name):
            LogContext.set(correlation_id=name)
            await asyncio.sleep(0)
            return LogContext.get_all()["correlation_id"]

        async def main():
            return await asyncio.gather(tagged("a"), tagged("b"))

        assert asyncio.run(main()) == ["a", "b"]
        assert LogContext.get_all() == {}


class TestConfigureLogging:
    def test_first_call_wins(self, json_lines):
        installed = json_lines.install()
        ignored = logging.NullHandler()
        configure_logging(handler=ignored)

        handlers = logging.getLogger("money_kernel").handlers
        assert installed in handlers
        assert ignored not in handlers
        assert isinstance(installed.formatter, StructuredFormatter)

    def test_does_not_propagate(self, json_lines):
        json_lines.install()
        assert logging.getLogger("money_kernel").propagate is False

    def test_reset_removes_only_its_handler(self, json_lines):
        foreign = logging.NullHandler()
        kernel_logger = logging.getLogger("money_kernel")
        kernel_logger.addHandler(foreign)
        try:
            installed = json_lines.install()
            reset_logging()
            assert installed not in kernel_logger.handlers
            assert foreign in kernel_logger.handlers
        finally:
            kernel_logger.removeHandler(foreign)
