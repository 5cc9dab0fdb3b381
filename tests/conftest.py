"""
Shared pytest fixtures.

Uses a file-backed SQLite database so no Postgres is required for tests.
Each test gets its own principal, so rows written by other tests are
invisible to it.
"""
import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from habitlog.core.config import settings
from habitlog.db.base import Base, get_db
from habitlog.main import app
import habitlog.models  # noqa: F401  registers every table on Base.metadata

SQLITE_URL = "sqlite:///./test_habitlog.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def principal():
    return f"user-{uuid.uuid4().hex}"


@pytest.fixture()
def headers(principal):
    return {settings.PRINCIPAL_HEADER: principal}


@pytest.fixture()
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
