"""Generic Result type for explicit error handling."""

from typing import Generic

from typing_extensions import TypeVar

ValueT = TypeVar("ValueT")
ErrorT = TypeVar("ErrorT", bound=BaseException, default=Exception)


class Result(Generic[ValueT, ErrorT]):
    """
    Ok value or error, returned by the service layer instead of raising.

    Missing history or baseline is a steady state for new users, so callers
    branch on is_err() and render a degraded message from unwrap_err().
    """

    __slots__ = ("_value", "_error")

    def __init__(self, value: ValueT | None = None, error: ErrorT | None = None) -> None:
        if (value is None) == (error is None):
            raise ValueError("Result needs exactly one of value or error")
        self._value = value
        self._error = error

    @classmethod
    def ok(cls, value: ValueT) -> "Result[ValueT, ErrorT]":
        return cls(value=value)

    @classmethod
    def err(cls, error: ErrorT) -> "Result[ValueT, ErrorT]":
        return cls(error=error)

    def is_err(self) -> bool:
        return self._error is not None

    def unwrap(self) -> ValueT:
        """Return the value, re-raising the stored error on an Err result."""
        if self._error is not None:
            raise self._error
        return self._value  # type: ignore[return-value]

    def unwrap_err(self) -> ErrorT:
        if self._error is None:
            raise ValueError("Called unwrap_err() on an Ok value")
        return self._error
