"""
``@traced_operation``: one MONEY_OPERATION_TRACE log record per call.

The record names the operation and its version, the call duration, and an
input fingerprint: a 16-hex SHA-256 prefix over a canonical rendering of
the chosen arguments. Two calls with equal inputs share a fingerprint
however the arguments were passed, and 1.0 and 1.00 render alike.

A call that raises emits no trace; the exception passes through untouched.

    @traced_operation("split", "1.0", fingerprint_fields=("money", "parts"))
    def split(money, parts, *, context=None):
        ...
"""

from __future__ import annotations

import functools
import hashlib
import inspect
import time
from collections.abc import Callable, Mapping
from decimal import Decimal
from typing import Any

from money_kernel.logging_config import get_logger

_logger = get_logger("domain.tracer")

TRACE_TYPE = "MONEY_OPERATION_TRACE"


def _canonicalize(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, Decimal) and value.is_finite():
        return str(value.normalize())
    if isinstance(value, Mapping):
        body = ",".join(f"{k}:{_canonicalize(v)}" for k, v in sorted(value.items()))
        return "{" + body + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(map(_canonicalize, value)) + "]"
    # Money and other pair-like values
    if callable(getattr(value, "as_pair", None)):
        return _canonicalize(value.as_pair())
    return str(value)


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    arguments: Mapping[str, Any],
) -> str:
    """Fingerprint of ``arguments`` restricted to ``fingerprint_fields``."""
    canonical = "|".join(
        f"{name}={_canonicalize(arguments.get(name))}" for name in fingerprint_fields
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def traced_operation(
    operation_name: str,
    operation_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        bind = inspect.signature(func).bind_partial
        static_fields = {
            "trace_type": TRACE_TYPE,
            "operation_name": operation_name,
            "operation_version": operation_version,
            "function": func.__qualname__,
        }

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            fingerprint = (
                compute_input_fingerprint(
                    fingerprint_fields, bind(*args, **kwargs).arguments
                )
                if fingerprint_fields
                else ""
            )
            started = time.perf_counter()
            result = func(*args, **kwargs)
            elapsed_ms = (time.perf_counter() - started) * 1000

            _logger.info(
                TRACE_TYPE,
                extra={
                    **static_fields,
                    "input_fingerprint": fingerprint,
                    "duration_ms": round(elapsed_ms, 2),
                },
            )
            return result

        return wrapper

    return decorator
