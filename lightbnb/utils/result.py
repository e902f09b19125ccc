"""
Result type returned by every repository operation.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from lightbnb.utils.exceptions import DataAccessError

T = TypeVar("T")


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """
    Outcome of a single store round trip.

    A successful result holds the value, which may be None or an empty list
    when nothing matched. A failed result holds the classified error and no
    value, so callers can tell "no data" apart from "the query failed".
    """

    value: Optional[T] = None
    error: Optional[DataAccessError] = None

    @classmethod
    def success(cls, value: Optional[T]) -> "QueryResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: DataAccessError) -> "QueryResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """True when the statement ran, whether or not rows matched."""
        return self.error is None

    @property
    def found(self) -> bool:
        """True when the statement ran and produced a non-empty value."""
        if not self.ok or self.value is None:
            return False
        if isinstance(self.value, list):
            return len(self.value) > 0
        return True

    def unwrap(self) -> Optional[T]:
        """Return the value, raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Return the value, or default when the query failed or matched nothing."""
        if self.error is not None or self.value is None:
            return default
        return self.value
