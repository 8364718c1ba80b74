"""
Test configuration and fixtures for the listing service.
Provides database fixtures, test data factories, and common test utilities.
"""

import os

# Must be set before listing_service reads its settings
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("LOCALE", "pt_BR")

import pytest
import uuid
from decimal import Decimal
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from listing_service.database import Base
from listing_service.models import User, Property, PropertyImage
from listing_service.repositories.user import UserRepository
from listing_service.repositories.property import PropertyRepository
from listing_service.services.property import PropertyService
from listing_service.services.user import UserService


# Test database configuration
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh schema for each test."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        test_engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    else:
        test_engine = create_async_engine(TEST_DATABASE_URL)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


# Service fixtures
@pytest.fixture
def user_service(db_session: AsyncSession) -> UserService:
    return UserService.from_session(db_session)


@pytest.fixture
def property_service(db_session: AsyncSession) -> PropertyService:
    return PropertyService.from_session(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: str = None,
        username: str = "maria",
        password: str = "testpassword123"
    ) -> dict:
        return {
            "username": username,
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
        }

    @staticmethod
    async def create_user(user_repo: UserRepository, **kwargs) -> User:
        """Create a test user in the database."""
        return await user_repo.create_user(UserFactory.create_user_data(**kwargs))


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        title: str = "Casa na praia",
        address: str = "Rua das Flores, 100",
        latitude: Decimal = Decimal("10.0"),
        longitude: Decimal = Decimal("20.0"),
        price: Decimal = Decimal("100000.00")
    ) -> dict:
        return {
            "title": title,
            "address": address,
            "latitude": latitude,
            "longitude": longitude,
            "price": price,
        }

    @staticmethod
    async def create_property(property_repo: PropertyRepository, owner_id: uuid.UUID, **kwargs) -> Property:
        """Create a test property in the database."""
        property_data = PropertyFactory.create_property_data(**kwargs)
        property_data["owner_id"] = owner_id
        return await property_repo.create_property(property_data)


class ImageFactory:
    """Factory for attaching images to a property."""

    @staticmethod
    async def create_image(db_session: AsyncSession, property_id: uuid.UUID, path: str = None) -> PropertyImage:
        image = PropertyImage(property_id=property_id, path=path or f"{uuid.uuid4().hex}.jpg")
        db_session.add(image)
        await db_session.commit()
        await db_session.refresh(image)
        return image


# Common test fixtures
@pytest.fixture
async def owner(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(user_repository, email="owner@test.com", username="owner")


@pytest.fixture
async def other_user(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(user_repository, email="other@test.com", username="other")


@pytest.fixture
async def test_property(property_repository: PropertyRepository, owner: User) -> Property:
    return await PropertyFactory.create_property(property_repository, owner_id=owner.id)


def assert_property_equal(prop1: Property, prop2: Property):
    """Assert that two properties are equal."""
    assert prop1.id == prop2.id
    assert prop1.title == prop2.title
    assert prop1.address == prop2.address
    assert prop1.latitude == prop2.latitude
    assert prop1.longitude == prop2.longitude
    assert prop1.price == prop2.price
    assert prop1.owner_id == prop2.owner_id
