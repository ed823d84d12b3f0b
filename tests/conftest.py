"""Shared test fixtures and helpers."""

import os

# settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REDIS_URL"] = ""
os.environ["BUSINESS_TIMEZONE"] = "Indian/Antananarivo"
os.environ["CANCELLED_FREES_SLOT"] = "false"

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rovart.database import enable_sqlite_fk, get_db
from rovart.dependencies import get_identity_provider, get_now
from rovart.main import app
from rovart.models import Base
from rovart.services.identity import Actor, IdentityProvider

BUSINESS_TZ = ZoneInfo("Indian/Antananarivo")

# Tuesday 2025-05-20, 10:30 in the studio
FIXED_NOW = datetime(2025, 5, 20, 10, 30, tzinfo=BUSINESS_TZ)

ADMIN_USER_ID = "user_admin"
STAFF_USER_ID = "user_staff"
CUSTOMER_USER_ID = "user_jane"


class FakeIdentityProvider(IdentityProvider):
    """Serves actors from a dict instead of the provider's API."""

    def __init__(self, users: dict[str, Actor], admin_emails: frozenset[str] = frozenset()):
        super().__init__(
            base_url="http://identity.test",
            secret_key="sk_test",
            admin_emails=admin_emails,
        )
        self.users = users

    async def fetch_actor(self, user_id: str) -> Actor:
        return self.users.get(user_id, Actor(user_id=user_id))


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", enable_sqlite_fk)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def identity():
    return FakeIdentityProvider(
        users={
            ADMIN_USER_ID: Actor(user_id=ADMIN_USER_ID, email="owner@rovart.test", role="admin"),
            STAFF_USER_ID: Actor(user_id=STAFF_USER_ID, email="staff@rovart.test"),
            CUSTOMER_USER_ID: Actor(user_id=CUSTOMER_USER_ID, email="jane@x.com"),
        },
        admin_emails=frozenset({"staff@rovart.test"}),
    )


@pytest.fixture
def client(session_factory, identity):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    app.dependency_overrides[get_identity_provider] = lambda: identity

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


def booking_payload(
    date: str = "2025-06-01",
    time: str = "09:00 - 10:00",
    name: str = "Jane",
    email: str = "jane@x.com",
    phone: Optional[str] = "123456789",
    service_id: str = "bridal-trial",
    price: float = 150.0,
    duration="1h",
    **customer_extra,
) -> dict:
    """Helper to build a POST /bookings body with sensible defaults."""
    customer = {
        "name": name,
        "email": email,
        "address": "12 Rue Rainandriamampandry",
        **customer_extra,
    }
    if phone is not None:
        customer["phone"] = phone
    return {
        "service": {
            "id": service_id,
            "name": "Bridal trial makeup",
            "price": price,
            "duration": duration,
        },
        "date": date,
        "time": time,
        "customer": customer,
    }
