"""
Utility modules for the LightBnB data access layer.
"""

from lightbnb.utils.exceptions import (
    DataAccessError,
    QueryExecutionError,
    RecordConflictError,
    StoreUnavailableError,
    classify_store_error,
)
from lightbnb.utils.result import QueryResult

__all__ = [
    "DataAccessError",
    "QueryExecutionError",
    "RecordConflictError",
    "StoreUnavailableError",
    "classify_store_error",
    "QueryResult",
]
