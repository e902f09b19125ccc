"""
Error handling service for failed query results.
Logs data access failures at the caller boundary and formats them into
structured dictionaries.
"""

from typing import Dict, Any, Optional
from lightbnb.utils.exceptions import DataAccessError
from lightbnb.utils.result import QueryResult
from datetime import datetime, timezone
import logging
import uuid

logger = logging.getLogger(__name__)


class ErrorHandlerService:
    """
    Service for reporting data access failures consistently.
    """

    @staticmethod
    def format_error(
        error: DataAccessError,
        request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Format a data access error in a consistent structure.

        Args:
            error: Classified data access error
            request_id: Optional identifier for correlating log lines

        Returns:
            Formatted error dictionary
        """
        response = {
            "error": {
                "code": error.error_code,
                "operation": error.operation,
                "message": error.detail,
                "timestamp": ErrorHandlerService._get_current_timestamp(),
            }
        }

        if request_id:
            response["error"]["request_id"] = request_id

        return response

    @staticmethod
    def log_failure(result: QueryResult, request_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """
        Log a failed result.

        Args:
            result: Result returned by a repository operation
            request_id: Optional identifier, generated when missing

        Returns:
            The formatted error, or None when the result succeeded
        """
        if result.ok:
            return None

        error = result.error
        request_id = request_id or ErrorHandlerService._generate_request_id()

        logger.error(
            f"Data access error [{request_id}]: {error.error_code} - {error}",
            extra={
                "error_code": error.error_code,
                "operation": error.operation,
                "request_id": request_id,
                "exception_type": type(error.original).__name__ if error.original else None,
            }
        )
        return ErrorHandlerService.format_error(error, request_id)

    @staticmethod
    def _generate_request_id() -> str:
        """Generate a short identifier for a failure report."""
        return str(uuid.uuid4())[:8]

    @staticmethod
    def _get_current_timestamp() -> str:
        """Get current timestamp in ISO format."""
        return datetime.now(timezone.utc).isoformat()
