"""
Test configuration and fixtures for the LightBnB data access layer.
Provides database fixtures, test data factories, and common test utilities.
"""

import pytest
import os
from datetime import date
from typing import AsyncGenerator, Optional
from unittest.mock import MagicMock
from sqlalchemy import event
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.pool import StaticPool

from lightbnb.config import Settings
from lightbnb.database import Base, create_engine_from_settings, create_session_factory
from lightbnb.models import PropertyReview, Reservation
from lightbnb.repositories.user import UserRepository
from lightbnb.repositories.property import PropertyRepository
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.schemas.user import UserCreate, UserRecord
from lightbnb.schemas.property import PropertyCreate, PropertyRecord
from lightbnb.services.rental import RentalService


# Test database configuration
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


def _enable_sqlite_pragmas(dbapi_connection, connection_record):
    """Match PostgreSQL semantics: case-sensitive LIKE and enforced foreign keys."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA case_sensitive_like = ON")
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


@pytest.fixture
def test_settings() -> Settings:
    """Settings pointing at the test store."""
    return Settings(
        environment="testing",
        database_url=TEST_DATABASE_URL,
        default_property_limit=10,
        default_reservation_limit=10,
    )


@pytest.fixture
async def engine(test_settings: Settings) -> AsyncGenerator[AsyncEngine, None]:
    """Create a test engine with a fresh schema."""
    if test_settings.is_sqlite:
        engine = create_engine_from_settings(test_settings, poolclass=StaticPool)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_pragmas)
    else:
        engine = create_engine_from_settings(test_settings)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine):
    """Session factory bound to the test engine."""
    return create_session_factory(engine)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest.fixture
def failing_session() -> MagicMock:
    """A session whose every statement fails as if the store went away."""
    session = MagicMock(spec=AsyncSession)
    session.execute.side_effect = OperationalError(
        "SELECT 1", {}, ConnectionRefusedError("connection refused")
    )
    return session


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    """Create a user repository instance."""
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    """Create a property repository instance."""
    return PropertyRepository(db_session)


@pytest.fixture
def reservation_repository(db_session: AsyncSession) -> ReservationRepository:
    """Create a reservation repository instance."""
    return ReservationRepository(db_session)


# Service fixtures
@pytest.fixture
def rental_service(db_session: AsyncSession, test_settings: Settings) -> RentalService:
    """Create a rental service instance."""
    return RentalService(db_session, test_settings)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    _counter = 0

    @staticmethod
    def create_user_data(
        email: Optional[str] = None,
        name: str = "Test User",
        password: str = "password"
    ) -> UserCreate:
        """Create a user payload."""
        if email is None:
            UserFactory._counter += 1
            email = f"user{UserFactory._counter}@example.com"
        return UserCreate(name=name, email=email, password=password)

    @staticmethod
    async def create_user(user_repo: UserRepository, **kwargs) -> UserRecord:
        """Create a test user in the database."""
        result = await user_repo.create_user(UserFactory.create_user_data(**kwargs))
        return result.unwrap()


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        owner_id: int,
        title: str = "Test Property",
        cost_per_night: int = 10000,
        city: str = "Vancouver",
        description: str = "description",
        parking_spaces: int = 1,
        number_of_bathrooms: int = 1,
        number_of_bedrooms: int = 2,
        country: str = "Canada",
        street: str = "123 Main Street",
        province: str = "British Columbia",
        post_code: str = "V5K 0A1"
    ) -> PropertyCreate:
        """Create a property payload."""
        return PropertyCreate(
            owner_id=owner_id,
            title=title,
            description=description,
            thumbnail_photo_url="https://images.example.com/thumb.jpg",
            cover_photo_url="https://images.example.com/cover.jpg",
            cost_per_night=cost_per_night,
            parking_spaces=parking_spaces,
            number_of_bathrooms=number_of_bathrooms,
            number_of_bedrooms=number_of_bedrooms,
            country=country,
            street=street,
            city=city,
            province=province,
            post_code=post_code,
        )

    @staticmethod
    async def create_property(property_repo: PropertyRepository, owner_id: int, **kwargs) -> PropertyRecord:
        """Create a test property in the database."""
        data = PropertyFactory.create_property_data(owner_id, **kwargs)
        result = await property_repo.create_property(data)
        return result.unwrap()


async def add_reviews(session: AsyncSession, property_id: int, guest_id: int, *ratings: int) -> None:
    """Add one review per rating for a property."""
    session.add_all([
        PropertyReview(guest_id=guest_id, property_id=property_id, rating=rating)
        for rating in ratings
    ])
    await session.commit()


async def add_reservation(
    session: AsyncSession,
    guest_id: int,
    property_id: int,
    start_date: date = date(2026, 6, 1),
    end_date: date = date(2026, 6, 8)
) -> int:
    """Add a reservation and return its id."""
    reservation = Reservation(
        guest_id=guest_id,
        property_id=property_id,
        start_date=start_date,
        end_date=end_date,
    )
    session.add(reservation)
    await session.commit()
    return reservation.id


# Common test fixtures
@pytest.fixture
async def test_owner(user_repository: UserRepository) -> UserRecord:
    """Create a property owner."""
    return await UserFactory.create_user(user_repository, name="Olive Owner", email="owner@test.com")


@pytest.fixture
async def test_guest(user_repository: UserRepository) -> UserRecord:
    """Create a guest."""
    return await UserFactory.create_user(user_repository, name="Gary Guest", email="guest@test.com")


@pytest.fixture
async def listings(
    db_session: AsyncSession,
    property_repository: PropertyRepository,
    user_repository: UserRepository,
    test_owner: UserRecord,
    test_guest: UserRecord
) -> dict:
    """
    A small catalogue of reviewed properties:

    title        city          cents   owner      ratings (avg)
    cabin        Vancouver      4999   owner      5, 4 (4.5)
    loft         Vancouver      5000   owner      3     (3.0)
    condo        North Vancouver 7500  other      4, 5 (4.5)
    villa        Victoria      10000   other      2     (2.0)
    chalet       vancouver     10001   owner      5     (5.0)
    bungalow     Vancouver     20000   owner      (none, never listed by search)
    """
    other_owner = await UserFactory.create_user(user_repository, name="Otto Other", email="other@test.com")

    specs = [
        ("cabin", "Vancouver", 4999, test_owner.id, (5, 4)),
        ("loft", "Vancouver", 5000, test_owner.id, (3,)),
        ("condo", "North Vancouver", 7500, other_owner.id, (4, 5)),
        ("villa", "Victoria", 10000, other_owner.id, (2,)),
        ("chalet", "vancouver", 10001, test_owner.id, (5,)),
        ("bungalow", "Vancouver", 20000, test_owner.id, ()),
    ]

    created = {}
    for title, city, cost, owner_id, ratings in specs:
        record = await PropertyFactory.create_property(
            property_repository, owner_id, title=title, city=city, cost_per_night=cost
        )
        if ratings:
            await add_reviews(db_session, record.id, test_guest.id, *ratings)
        created[title] = record

    created["other_owner"] = other_owner
    return created


# Utility functions for tests
def assert_property_matches(record: PropertyRecord, payload: PropertyCreate):
    """Assert that a stored property carries every field of its payload."""
    for field, value in payload.model_dump().items():
        assert getattr(record, field) == value, field
