"""Result type for operations whose failure must not look like a value."""

from typing import Generic, Optional, TypeVar

from .errors import PlaceholderClientError

T = TypeVar("T")


class Result(Generic[T]):
    """
    Either a decoded value or the typed error that prevented it.

    Use ``Result.success`` and ``Result.failure`` rather than the constructor.
    """

    __slots__ = ("_value", "_error")

    def __init__(self, value: Optional[T] = None, error: Optional[PlaceholderClientError] = None):
        if error is not None and value is not None:
            raise ValueError("A result cannot carry both a value and an error")
        self._value = value
        self._error = error

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: PlaceholderClientError) -> "Result[T]":
        if error is None:
            raise ValueError("A failed result needs an error")
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self._error is None

    @property
    def value(self) -> Optional[T]:
        return self._value

    @property
    def error(self) -> Optional[PlaceholderClientError]:
        return self._error

    def unwrap(self) -> T:
        """Return the value, or raise the carried error."""
        if self._error is not None:
            raise self._error
        return self._value

    def value_or(self, default: T) -> T:
        return self._value if self._error is None else default

    def __bool__(self) -> bool:
        return self.ok

    def __repr__(self) -> str:
        if self.ok:
            return f"Result.success({self._value!r})"
        return f"Result.failure({self._error!r})"
