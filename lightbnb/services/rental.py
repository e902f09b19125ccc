"""
Rental service: the caller-facing LightBnB query functions.
Delegates to the repositories and resolves failures to empty results after
logging them, so callers that do not inspect QueryResult see None or [].
"""

from typing import Dict, Any, List, Optional, Union
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from lightbnb.config import Settings, get_settings
from lightbnb.repositories.property import PropertyRepository
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.repositories.user import UserRepository
from lightbnb.schemas.property import PropertyCreate, PropertyListing, PropertyRecord, PropertySearchFilters
from lightbnb.schemas.reservation import ReservationListing
from lightbnb.schemas.user import UserCreate, UserRecord
from lightbnb.services.error_handler import ErrorHandlerService
from lightbnb.utils.result import QueryResult
from contextlib import asynccontextmanager


class RentalService:
    """
    LightBnB query functions over one session.
    Single-record operations return None and list operations return [] when
    nothing matched or the query failed; the failure is logged here.
    """

    def __init__(self, db_session: AsyncSession, settings: Optional[Settings] = None):
        self.db = db_session
        self.settings = settings or get_settings()
        self.user_repo = UserRepository(db_session)
        self.reservation_repo = ReservationRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    @classmethod
    @asynccontextmanager
    async def from_session_factory(
        cls,
        session_factory: async_sessionmaker[AsyncSession],
        settings: Optional[Settings] = None
    ):
        """Open a session from the factory and yield a service bound to it."""
        async with session_factory() as session:
            yield cls(session, settings)

    # Users

    async def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        """Get a single user given their email, or None."""
        return self._resolve(await self.user_repo.get_user_by_email(email), None)

    async def get_user_by_id(self, user_id: int) -> Optional[UserRecord]:
        """Get a single user given their id, or None."""
        return self._resolve(await self.user_repo.get_user_by_id(user_id), None)

    async def create_user(self, user: Union[UserCreate, Dict[str, Any]]) -> Optional[UserRecord]:
        """Add a new user and return it, or None if the insert failed."""
        if not isinstance(user, UserCreate):
            user = UserCreate.model_validate(user)
        return self._resolve(await self.user_repo.create_user(user), None)

    # Reservations

    async def list_reservations_for_guest(
        self,
        guest_id: int,
        limit: Optional[int] = None
    ) -> List[ReservationListing]:
        """Get all reservations for a single guest, or []."""
        if limit is None:
            limit = self.settings.default_reservation_limit
        result = await self.reservation_repo.list_reservations_for_guest(guest_id, limit)
        return self._resolve(result, [])

    # Properties

    async def search_properties(
        self,
        options: Union[PropertySearchFilters, Dict[str, Any], None] = None,
        limit: Optional[int] = None
    ) -> List[PropertyListing]:
        """
        Get properties matching the search options, cheapest first, or [].

        Args:
            options: Filter set or a mapping of filter names (e.g. query string values)
            limit: Maximum number of results, the configured default if omitted
        """
        if options is not None and not isinstance(options, PropertySearchFilters):
            options = PropertySearchFilters.model_validate(options)
        if limit is None:
            limit = self.settings.default_property_limit
        result = await self.property_repo.search_properties(options, limit)
        return self._resolve(result, [])

    async def create_property(
        self,
        property_data: Union[PropertyCreate, Dict[str, Any]]
    ) -> Optional[PropertyRecord]:
        """Add a property and return it, or None if the insert failed."""
        if not isinstance(property_data, PropertyCreate):
            property_data = PropertyCreate.model_validate(property_data)
        return self._resolve(await self.property_repo.create_property(property_data), None)

    @staticmethod
    def _resolve(result: QueryResult, default):
        if not result.ok:
            ErrorHandlerService.log_failure(result)
            return default
        return result.unwrap_or(default)
