"""
Exception classes for the LightBnB data access layer.
Store failures are classified into a small taxonomy and carried inside a
QueryResult rather than raised across the repository boundary.
"""

from typing import Optional
from sqlalchemy.exc import (
    SQLAlchemyError,
    IntegrityError,
    OperationalError,
    InterfaceError,
    DisconnectionError,
    TimeoutError as PoolTimeoutError,
)


class DataAccessError(Exception):
    """Base data access error."""

    error_code = "DATA_ACCESS_ERROR"

    def __init__(
        self,
        operation: str,
        detail: str,
        original: Optional[BaseException] = None
    ):
        super().__init__(f"{operation} failed: {detail}")
        self.operation = operation
        self.detail = detail
        self.original = original


class QueryExecutionError(DataAccessError):
    """The store rejected or could not run the statement."""

    error_code = "QUERY_EXECUTION_ERROR"


class RecordConflictError(DataAccessError):
    """A constraint (unique key, foreign key, check) was violated."""

    error_code = "RECORD_CONFLICT"


class StoreUnavailableError(DataAccessError):
    """The store could not be reached or no connection was available."""

    error_code = "STORE_UNAVAILABLE"


def _describe(exc: BaseException) -> str:
    # DBAPI errors carry the driver message on .orig; the wrapper adds the SQL
    orig = getattr(exc, "orig", None)
    if orig is not None:
        return str(orig).strip() or orig.__class__.__name__
    return str(exc).strip() or exc.__class__.__name__


def classify_store_error(operation: str, exc: BaseException) -> DataAccessError:
    """
    Map a store exception onto the data access taxonomy.

    Args:
        operation: Name of the operation that failed
        exc: Exception raised by SQLAlchemy or the driver

    Returns:
        The matching DataAccessError instance
    """
    detail = _describe(exc)

    if isinstance(exc, IntegrityError):
        return RecordConflictError(operation, detail, exc)

    if isinstance(exc, (OperationalError, InterfaceError, DisconnectionError, PoolTimeoutError, OSError)):
        return StoreUnavailableError(operation, detail, exc)

    if isinstance(exc, SQLAlchemyError):
        return QueryExecutionError(operation, detail, exc)

    return DataAccessError(operation, detail, exc)
