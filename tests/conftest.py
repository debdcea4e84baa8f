from datetime import datetime
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from app import models  # noqa: F401  registers the tables
from app.auth import create_access_token, hash_password
from app.db import get_session
from app.legacy_users import JsonUserStore, get_user_store
from app.main import app
from app.repository import Store


@pytest.fixture()
def engine():
    """
    Fresh in-memory SQLite database per test.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture()
def store(session) -> Store:
    return Store(session)


@pytest.fixture()
def user_store(tmp_path) -> JsonUserStore:
    return JsonUserStore(tmp_path / "users.json")


@pytest.fixture()
def client(session, user_store) -> Generator[TestClient, None, None]:
    """In-process TestClient wired to the test database and a temp users file."""
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_user_store] = lambda: user_store

    # no context manager: the lifespan (real database init) is skipped
    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(store):
    counter = {"n": 0}

    def _make_user(role="USER", password="pw123456", **fields):
        counter["n"] += 1
        n = counter["n"]
        data = {
            "name": f"User {n}",
            "email": f"user{n}@example.com",
            "phone": f"+1 555-{1000 + n}",
            "password_hash": hash_password(password),
            "role": role,
        }
        data.update(fields)
        return store.create_user(**data)

    return _make_user


def auth_header(user) -> dict:
    token = create_access_token({"sub": str(user.id), "id": user.id, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(make_user) -> dict:
    return auth_header(make_user(role="ADMIN"))


@pytest.fixture()
def time_block(store):
    return store.create_time_block(datetime(2030, 1, 1, 9, 0), datetime(2030, 1, 1, 17, 0))


@pytest.fixture()
def headers_for():
    return auth_header
