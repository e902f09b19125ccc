"""
Tests for the table definitions behind the query layer.
"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError

from lightbnb.database import Base
from lightbnb.models import Property, PropertyReview, Reservation, User
from lightbnb.utils.query_builder import PROPERTY_FIELDS


class TestSchema:
    """Test the tables and columns the queries rely on."""

    def test_tables(self):
        assert {"users", "properties", "reservations", "property_reviews"} <= set(Base.metadata.tables)

    def test_user_columns(self):
        columns = Base.metadata.tables["users"].c
        assert {"id", "name", "email", "password"} <= set(columns.keys())
        assert columns.email.unique

    def test_property_columns(self):
        columns = set(Base.metadata.tables["properties"].c.keys())
        assert {"id", *PROPERTY_FIELDS} <= columns
        assert len(PROPERTY_FIELDS) == 14

    def test_foreign_keys(self):
        tables = Base.metadata.tables
        owner_fk = next(iter(tables["properties"].c.owner_id.foreign_keys))
        guest_fk = next(iter(tables["reservations"].c.guest_id.foreign_keys))
        property_fk = next(iter(tables["reservations"].c.property_id.foreign_keys))

        assert owner_fk.target_fullname == "users.id"
        assert guest_fk.target_fullname == "users.id"
        assert property_fk.target_fullname == "properties.id"

    def test_mappers_are_column_only(self):
        """Test no model declares relationships; queries join explicitly."""
        for model in (User, Property, PropertyReview, Reservation):
            assert list(inspect(model).relationships) == [], model.__name__


class TestConstraints:
    """Test store-level constraints that surface as conflicts."""

    @pytest.mark.asyncio
    async def test_rating_range(self, db_session, listings, test_guest):
        db_session.add(PropertyReview(guest_id=test_guest.id, property_id=listings["cabin"].id, rating=9))

        with pytest.raises(IntegrityError):
            await db_session.commit()
