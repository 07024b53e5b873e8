"""
Exception types raised by the money kernel.

Callers branch on the exception class or on its ``code`` attribute, never
on the message text. The values that caused the failure are kept as
attributes (``left``/``right`` on a mismatch, ``currency`` on a missing
rate) and show up as ``exc_*`` fields in structured logs.

    MoneyKernelError
        CurrencyError
            UnknownCurrencyError          UNKNOWN_CURRENCY
            CurrencyMismatchError         CURRENCY_MISMATCH
        OperandError
            InvalidOperandError           INVALID_OPERAND
        ExchangeRateError
            ExchangeRateUnavailableError  EXCHANGE_RATE_UNAVAILABLE

``try_*`` operations return these inside a ``MoneyResult``; the raising
forms re-raise the same instance. A misused API (for example a split into
zero parts) is a plain ValueError or TypeError and is raised directly.
"""


class MoneyKernelError(Exception):
    """
    Base exception for all money kernel errors.

    All subclasses must have a `code` class attribute for
    machine-readable error identification.
    """

    code: str = "MONEY_KERNEL_ERROR"


# Currency-related exceptions


class CurrencyError(MoneyKernelError):
    """Base exception for currency-related errors."""

    code: str = "CURRENCY_ERROR"


class UnknownCurrencyError(CurrencyError):
    """Currency code is not recognized by the metadata provider."""

    code: str = "UNKNOWN_CURRENCY"

    def __init__(self, currency: object):
        self.currency = currency
        super().__init__(f"Currency {currency!r} is not known")


class CurrencyMismatchError(CurrencyError):
    """Binary operation attempted on values of different currencies."""

    code: str = "CURRENCY_MISMATCH"

    def __init__(self, left: str, right: str, operation: str = "operate on"):
        self.left = left
        self.right = right
        self.operation = operation
        super().__init__(
            f"Cannot {operation} monies with different currencies. "
            f"Received {left} and {right}."
        )


# Operand-related exceptions


class OperandError(MoneyKernelError):
    """Base exception for operand errors."""

    code: str = "OPERAND_ERROR"


class InvalidOperandError(OperandError):
    """Scalar or amount is not an acceptable number."""

    code: str = "INVALID_OPERAND"

    def __init__(self, value: object, reason: str | None = None):
        self.value = value
        self.reason = reason
        message = reason or f"Invalid operand {value!r}"
        super().__init__(message)


# Exchange-rate exceptions


class ExchangeRateError(MoneyKernelError):
    """Base exception for exchange-rate errors."""

    code: str = "EXCHANGE_RATE_ERROR"


class ExchangeRateUnavailableError(ExchangeRateError):
    """The rate snapshot has no entry for a required currency."""

    code: str = "EXCHANGE_RATE_UNAVAILABLE"

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(f"No exchange rate is available for currency {currency}")
