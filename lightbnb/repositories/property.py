"""
Property repository with the filtered search and property inserts.
"""

from sqlalchemy import insert
from lightbnb.repositories.base import BaseRepository
from lightbnb.models.property import Property
from lightbnb.schemas.property import PropertyCreate, PropertyRecord, PropertyListing, PropertySearchFilters
from lightbnb.utils.query_builder import (
    PROPERTY_COLUMNS,
    PROPERTY_FIELDS,
    build_property_search_query,
    describe_statement,
)
from lightbnb.utils.result import QueryResult
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository):
    """
    Repository for property search and creation.
    """

    async def search_properties(
        self,
        filters: Optional[PropertySearchFilters],
        limit: int
    ) -> QueryResult[List[PropertyListing]]:
        """
        Search properties with optional filters.

        Every filter that is set narrows the result (AND). Results carry the
        average review rating and are ordered by nightly cost, cheapest first.
        Only properties with at least one review are returned.

        Args:
            filters: City, owner, price range (whole units) and minimum rating
            limit: Maximum number of properties to return

        Returns:
            Success with the matching listings, possibly empty

        Raises:
            ValueError: If limit is negative
        """
        self._check_limit(limit)
        filters = filters or PropertySearchFilters()
        query = build_property_search_query(filters, limit)

        if logger.isEnabledFor(logging.DEBUG):
            sql, params = describe_statement(query)
            logger.debug(f"search_properties: {sql} {params}")

        return await self.fetch_all("search_properties", query, PropertyListing)

    async def create_property(self, property_data: PropertyCreate) -> QueryResult[PropertyRecord]:
        """
        Add a property.

        Args:
            property_data: All property details except the id

        Returns:
            Success with the inserted property including its generated id
        """
        values = {name: getattr(property_data, name) for name in PROPERTY_FIELDS}
        stmt = insert(Property).values(**values).returning(*PROPERTY_COLUMNS)
        result = await self.insert_returning("create_property", stmt, PropertyRecord)

        if result.ok:
            logger.info(f"Created property: {result.value.title} (ID: {result.value.id})")
        return result
