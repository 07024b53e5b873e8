"""
Configuration Loader (``money_config.loader``).

Responsibility
--------------
Loads YAML configuration files and parses them into typed
``money_config.schema`` dataclass instances.  The single public entry
point for runtime config is ``money_config.get_active_config()``.

Architecture position
---------------------
**Config layer** -- sits above ``money_kernel``.  Reads the kernel's
rounding-mode vocabulary; the kernel never imports from here.

Invariants enforced
-------------------
* All parse errors raise ``ValueError`` or ``KeyError`` with descriptive
  messages; no silent defaults for required fields.
* Every parsed object is a frozen dataclass from ``schema.py``.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Unknown rounding mode, bad digits or increments  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from money_config.schema import CurrencyDef, MoneyConfig
from money_kernel.domain.context import (
    DEFAULT_PRECISION,
    DEFAULT_ROUNDING_MODE,
    validate_rounding_mode,
)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_rounding_mode(value: Any) -> str:
    """
    Parse a rounding mode name into a ``decimal`` rounding constant.

    Accepts the constant itself ("ROUND_HALF_EVEN") or its short form in
    any case ("half_even", "HALF-UP").

    Raises:
        ValueError: if ``value`` names no ``decimal`` rounding mode.
    """
    if not isinstance(value, str):
        raise ValueError(f"Rounding mode must be a string, got {value!r}")
    name = value.strip().upper().replace("-", "_")
    if not name.startswith("ROUND_"):
        name = f"ROUND_{name}"
    return validate_rounding_mode(name)


def _parse_digits(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{field} must be a non-negative integer, got {value!r}")
    return value


def _parse_increment(value: Any, field: str) -> str:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a decimal number, got {value!r}")
    try:
        increment = Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"{field} must be a decimal number, got {value!r}") from e
    if not increment.is_finite() or increment < 0:
        raise ValueError(f"{field} must be a non-negative number, got {value!r}")
    return str(increment)


def parse_currency(data: dict[str, Any]) -> CurrencyDef:
    """
    Parse a ``CurrencyDef`` from a dict.

    Required keys: ``code``, ``fractional_digits``.  ``name`` defaults to
    the code; cash digits default to the accounting digits; increments
    default to "0" (none).
    """
    code = str(data["code"]).strip().upper()
    if not code:
        raise ValueError("Currency code must not be empty")
    digits = _parse_digits(data["fractional_digits"], f"{code}.fractional_digits")
    cash_digits = data.get("cash_fractional_digits")
    return CurrencyDef(
        code=code,
        name=str(data.get("name", code)),
        fractional_digits=digits,
        cash_fractional_digits=(
            _parse_digits(cash_digits, f"{code}.cash_fractional_digits")
            if cash_digits is not None
            else None
        ),
        rounding_increment=_parse_increment(
            data.get("rounding_increment", "0"), f"{code}.rounding_increment"
        ),
        cash_rounding_increment=_parse_increment(
            data.get("cash_rounding_increment", "0"), f"{code}.cash_rounding_increment"
        ),
    )


def parse_money_config(data: dict[str, Any], checksum: str | None = None) -> MoneyConfig:
    """
    Parse a ``MoneyConfig`` from a dict.

    Preconditions:
        - ``data`` has a ``config_id`` key.
    Postconditions:
        - Returns a frozen ``MoneyConfig`` whose checksum is ``checksum``
          or, when omitted, ``compute_checksum(data)``.
    Raises:
        KeyError: if ``config_id`` or a required currency key is missing.
        ValueError: on an invalid rounding mode, precision or currency, or
            when a currency code appears twice.
    """
    precision = data.get("precision", DEFAULT_PRECISION)
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 1:
        raise ValueError(f"precision must be a positive integer, got {precision!r}")

    currencies = tuple(parse_currency(c) for c in data.get("currencies") or [])
    seen: set[str] = set()
    for currency in currencies:
        if currency.code in seen:
            raise ValueError(f"Duplicate currency definition: {currency.code}")
        seen.add(currency.code)

    return MoneyConfig(
        config_id=str(data["config_id"]),
        version=int(data.get("version", 1)),
        rounding_mode=parse_rounding_mode(data.get("rounding_mode", DEFAULT_ROUNDING_MODE)),
        precision=precision,
        currencies=currencies,
        checksum=checksum if checksum is not None else compute_checksum(data),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
