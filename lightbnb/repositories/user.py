"""
User repository: lookups by email or id, and inserts.
"""

from sqlalchemy import select, insert
from lightbnb.repositories.base import BaseRepository
from lightbnb.models.user import User
from lightbnb.schemas.user import UserCreate, UserRecord
from lightbnb.utils.result import QueryResult
from typing import Optional
import logging

logger = logging.getLogger(__name__)

USER_COLUMNS = (User.id, User.name, User.email, User.password)


class UserRepository(BaseRepository):
    """
    Repository for the users table.
    Emails are matched exactly and passwords are stored as supplied.
    """

    async def get_user_by_email(self, email: str) -> QueryResult[Optional[UserRecord]]:
        """
        Get a single user given their email.

        Args:
            email: Email to match exactly (case-sensitive)

        Returns:
            Success with the first matching user, or None if there is none
        """
        query = select(*USER_COLUMNS).where(User.email == email)
        return await self.fetch_one("get_user_by_email", query, UserRecord)

    async def get_user_by_id(self, user_id: int) -> QueryResult[Optional[UserRecord]]:
        """
        Get a single user given their id.

        Returns:
            Success with the user, or None if there is none
        """
        query = select(*USER_COLUMNS).where(User.id == user_id)
        return await self.fetch_one("get_user_by_id", query, UserRecord)

    async def create_user(self, user: UserCreate) -> QueryResult[UserRecord]:
        """
        Add a new user.

        No uniqueness check is made first; a duplicate email comes back as
        a failed result holding a RecordConflictError.

        Args:
            user: Name, email and password of the new user

        Returns:
            Success with the inserted user including its generated id
        """
        stmt = (
            insert(User)
            .values(name=user.name, email=user.email, password=user.password)
            .returning(*USER_COLUMNS)
        )
        result = await self.insert_returning("create_user", stmt, UserRecord)

        if result.ok:
            logger.info(f"Created user {result.value.id}")
        return result
