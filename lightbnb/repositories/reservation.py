"""
Reservation repository: a guest's reservations joined with their properties.
"""

from sqlalchemy import select
from lightbnb.repositories.base import BaseRepository
from lightbnb.models.property import Property
from lightbnb.models.reservation import Reservation
from lightbnb.schemas.reservation import ReservationListing
from lightbnb.utils.query_builder import PROPERTY_FIELDS
from lightbnb.utils.result import QueryResult
from typing import List

RESERVATION_COLUMNS = (
    Reservation.id,
    Reservation.guest_id,
    Reservation.property_id,
    Reservation.start_date,
    Reservation.end_date,
)


class ReservationRepository(BaseRepository):
    """Repository for reading reservations. It never writes."""

    async def list_reservations_for_guest(
        self,
        guest_id: int,
        limit: int
    ) -> QueryResult[List[ReservationListing]]:
        """
        Get reservations for a single guest, with the reserved property's details.

        The order is whatever the store returns; no ORDER BY is applied.

        Args:
            guest_id: ID of the guest
            limit: Maximum number of reservations to return

        Returns:
            Success with the reservation listings, possibly empty

        Raises:
            ValueError: If limit is negative
        """
        self._check_limit(limit)

        # Property.id is left out: it duplicates reservations.property_id
        property_columns = [getattr(Property, name) for name in PROPERTY_FIELDS]

        query = (
            select(*RESERVATION_COLUMNS, *property_columns)
            .join(Property, Reservation.property_id == Property.id)
            .where(Reservation.guest_id == guest_id)
            .limit(limit)
        )
        return await self.fetch_all("list_reservations_for_guest", query, ReservationListing)
