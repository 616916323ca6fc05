"""Pytest fixtures for the rental marketplace API tests."""
import logging
import os
from datetime import date
from typing import AsyncGenerator, Dict

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

for _name in ("sqlalchemy", "sqlalchemy.engine", "aiosqlite", "httpx", "asyncio"):
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app import app
from core.get_db import Base, engine_options, get_db_async
from models.enums import PetPolicy, PropertyStatus, PropertyTypes, UserRole
from models.models import Property, User
from security.security_generate import token_generate

TEST_DATABASE_URL = "sqlite+aiosqlite://"
TEST_PASSWORD = "secret123"
TEST_PHONE = "+442083661177"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory database shared by every session of one test."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        **engine_options(TEST_DATABASE_URL),
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app with the database swapped for the test engine."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_async] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session_factory):
    async def _make_user(
        email: str,
        name: str,
        role: UserRole = UserRole.TENANT,
        avatar: str | None = None,
    ) -> User:
        async with session_factory() as session:
            user = User(email=email, name=name, role=role, avatar=avatar)
            user.set_password(TEST_PASSWORD)
            session.add(user)
            await session.commit()
            await session.refresh(user)
            return user

    return _make_user


@pytest.fixture
async def tenant(make_user) -> User:
    return await make_user("tenant@example.com", "Tina Tenant")


@pytest.fixture
async def other_tenant(make_user) -> User:
    return await make_user("other@example.com", "Oscar Other")


@pytest.fixture
async def landlord(make_user) -> User:
    return await make_user(
        "landlord@example.com",
        "Larry Landlord",
        role=UserRole.LANDLORD,
        avatar="https://img.example.com/larry.png",
    )


@pytest.fixture
async def manager(make_user) -> User:
    return await make_user(
        "manager@example.com", "Mia Manager", role=UserRole.PROPERTY_MANAGER
    )


def auth_headers(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token_generate.access_token(user.id)}"}


@pytest.fixture
def headers_for():
    """Bearer headers carrying a fresh access token for the given user."""
    return auth_headers


@pytest.fixture
def make_property(session_factory):
    async def _make_property(owner: User, **overrides) -> Property:
        fields = {
            "title": "Sunny two bedroom",
            "description": "Bright flat close to the park",
            "street": "1 Main Street",
            "city": "Springfield",
            "state": "IL",
            "zip_code": "62701",
            "property_type": PropertyTypes.APARTMENT,
            "bedrooms": 2,
            "bathrooms": 1.0,
            "square_feet": 850,
            "price": 1500.0,
            "deposit": 1500.0,
            "amenities": ["parking"],
            "images": ["https://img.example.com/flat-1.jpg"],
            "available_from": date(2026, 11, 1),
            "pet_policy": PetPolicy.ALLOWED,
            "status": PropertyStatus.AVAILABLE,
        }
        fields.update(overrides)
        async with session_factory() as session:
            prop = Property(owner_id=owner.id, **fields)
            session.add(prop)
            await session.commit()
            await session.refresh(prop)
            return prop

    return _make_property


@pytest.fixture
def property_payload() -> Dict:
    return {
        "title": "Loft near the river",
        "description": "Open plan loft with exposed brick",
        "address": {
            "street": "22 River Road",
            "city": "Portland",
            "state": "OR",
            "zipCode": "97201",
            "latitude": 45.52,
            "longitude": -122.68,
        },
        "propertyType": "condo",
        "bedrooms": 1,
        "bathrooms": 1.5,
        "squareFeet": 700,
        "price": 2100,
        "deposit": 2100,
        "amenities": ["gym", "laundry"],
        "images": ["https://img.example.com/loft.jpg"],
        "availableFrom": "2026-12-01",
        "petPolicy": "case_by_case",
    }


@pytest.fixture
def application_payload():
    def _payload(property_id) -> Dict:
        return {
            "propertyId": str(property_id),
            "personalInfo": {
                "fullName": "Tina Tenant",
                "dateOfBirth": "1994-05-17",
                "phoneNumber": TEST_PHONE,
                "ssn": "123-45-6789",
            },
            "employment": {
                "employer": "Acme Corp",
                "position": "Engineer",
                "income": 85000,
                "duration": "3 years",
            },
            "rentalHistory": {
                "currentAddress": "9 Old Lane, Springfield",
                "landlordName": "Previous Owner",
                "monthlyRent": 1200,
                "duration": "2 years",
            },
            "documents": ["https://docs.example.com/payslip.pdf"],
        }

    return _payload
