"""Shared fixtures: in-memory SQLite, one session per test, bearer tokens."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient

from shared.core.auth import create_access_token
from shared.core.database import Base, GrocerySessionLocal, get_grocery_db, grocery_engine
from shared.models.users import Users
from grocery_service.app.crud.family import family_crud
from grocery_service.app.main import app
from grocery_service.app.schemas.family.family_schemas import FamilyCreate


@pytest.fixture
def db():
    """Fresh schema and a session the app shares for the whole test."""
    Base.metadata.drop_all(bind=grocery_engine)
    Base.metadata.create_all(bind=grocery_engine)

    session = GrocerySessionLocal()
    app.dependency_overrides[get_grocery_db] = lambda: session
    try:
        yield session
    finally:
        app.dependency_overrides.pop(get_grocery_db, None)
        session.close()


@pytest.fixture
def client(db):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(name: str = None, phone: str = None) -> Users:
        counter["n"] += 1
        user = Users(
            name=name or f"User {counter['n']}",
            phone=phone or f"+1555000{counter['n']:04d}",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


def auth_headers(user: Users) -> dict:
    token = create_access_token({"user_id": user.id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def owner(make_user):
    return make_user("Alice Owner")


@pytest.fixture
def family(db, owner):
    return family_crud.create_family(db, owner.id, FamilyCreate(name="The Owners"))


@pytest.fixture
def owner_headers(owner, family):
    return auth_headers(owner)
