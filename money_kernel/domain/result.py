"""
Result -- tagged success/error outcome for fallible money operations.

Every fallible kernel operation is implemented once, as a ``try_*``
function returning a ``MoneyResult``. The raising form is a thin wrapper
calling ``unwrap()``, so both forms share one code path and carry the
same exception instance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from money_kernel.exceptions import MoneyKernelError

T = TypeVar("T")


@dataclass(frozen=True)
class MoneyResult(Generic[T]):
    """
    Outcome of a fallible money operation.

    Guarantees:
        - Exactly one of ``value`` / ``error`` is meaningful; ``is_ok``
          says which.
        - bool(result) == result.is_ok for convenience.
    """

    is_ok: bool
    value: T | None = None
    error: MoneyKernelError | None = None

    def __post_init__(self) -> None:
        if self.is_ok == (self.error is not None):
            raise ValueError(
                "MoneyResult must carry an error exactly when it is not ok"
            )

    @classmethod
    def ok(cls, value: T) -> MoneyResult[T]:
        """Successful outcome."""
        return cls(is_ok=True, value=value)

    @classmethod
    def fail(cls, error: MoneyKernelError) -> MoneyResult[T]:
        """Failed outcome carrying a typed kernel error."""
        return cls(is_ok=False, error=error)

    def unwrap(self) -> T:
        """Return the value or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def __bool__(self) -> bool:
        return self.is_ok
