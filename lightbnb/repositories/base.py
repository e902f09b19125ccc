"""
Base repository with the shared execute-and-project steps.
Every operation runs one statement, projects the rows into pydantic records
and reports store failures as a failed QueryResult instead of raising.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.expression import Executable
from pydantic import BaseModel
from lightbnb.utils.exceptions import classify_store_error
from lightbnb.utils.result import QueryResult
from typing import List, Optional, Type, TypeVar
import logging

logger = logging.getLogger(__name__)

RecordType = TypeVar("RecordType", bound=BaseModel)

# Exceptions that mean the statement did not complete
STORE_ERRORS = (SQLAlchemyError, OSError)


class BaseRepository:
    """
    Base repository bound to one async session.
    The session (and the pool behind it) is supplied by the caller.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize repository with a database session.

        Args:
            db: Async database session
        """
        self.db = db

    async def fetch_one(
        self,
        operation: str,
        statement: Executable,
        record_type: Type[RecordType]
    ) -> QueryResult[Optional[RecordType]]:
        """
        Run a query and project its first row.

        Args:
            operation: Operation name used in logs and errors
            statement: SELECT to execute
            record_type: Schema the row is validated into

        Returns:
            Success with the record, or with None when no row matched
        """
        try:
            result = await self.db.execute(statement)
            row = result.mappings().first()
        except STORE_ERRORS as e:
            return await self._failure(operation, e)

        if row is None:
            logger.debug(f"{operation}: no matching row")
            return QueryResult.success(None)

        logger.debug(f"{operation}: retrieved 1 row")
        return QueryResult.success(record_type.model_validate(dict(row)))

    async def fetch_all(
        self,
        operation: str,
        statement: Executable,
        record_type: Type[RecordType]
    ) -> QueryResult[List[RecordType]]:
        """
        Run a query and project every returned row.

        Returns:
            Success with a list of records, possibly empty
        """
        try:
            result = await self.db.execute(statement)
            rows = result.mappings().all()
        except STORE_ERRORS as e:
            return await self._failure(operation, e)

        logger.debug(f"{operation}: retrieved {len(rows)} rows")
        return QueryResult.success([record_type.model_validate(dict(row)) for row in rows])

    async def insert_returning(
        self,
        operation: str,
        statement: Executable,
        record_type: Type[RecordType]
    ) -> QueryResult[RecordType]:
        """
        Run an INSERT ... RETURNING, commit, and project the inserted row.

        Returns:
            Success with the inserted record including generated columns
        """
        try:
            result = await self.db.execute(statement)
            row = result.mappings().one()
            await self.db.commit()
        except STORE_ERRORS as e:
            return await self._failure(operation, e)

        record = record_type.model_validate(dict(row))
        logger.debug(f"{operation}: inserted row with id {row.get('id')}")
        return QueryResult.success(record)

    @staticmethod
    def _check_limit(limit: int) -> int:
        """
        Validate a row limit before it reaches the store.

        Raises:
            ValueError: If limit is not a non-negative integer
        """
        if not isinstance(limit, int) or limit < 0:
            raise ValueError(f"limit must be a non-negative integer, got {limit!r}")
        return limit

    async def _failure(self, operation: str, exc: BaseException) -> QueryResult:
        """Roll back the session and wrap the classified error in a result."""
        error = classify_store_error(operation, exc)
        logger.warning(f"{operation} failed [{error.error_code}]: {error.detail}")

        # A failed statement leaves the transaction aborted; reset it for the next call
        try:
            await self.db.rollback()
        except STORE_ERRORS as rollback_error:
            logger.warning(f"{operation}: rollback after failure also failed: {rollback_error}")

        return QueryResult.failure(error)
