# tests/conftest.py

import os

import pytest
from starlette.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy_utils import create_database, database_exists, drop_database

from samyukta.main import app
from samyukta.db.session import _engine_kwargs, get_db
from samyukta.models import Base
from samyukta.core.config import settings
from samyukta.core.limiter import limiter
from samyukta.services.check_in.qr_generator import QRCodeService


# --- E2E Test Database Setup ---
# Never derived from DATABASE_URL: the database is dropped after the run
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./samyukta_test.db")
engine = create_engine(TEST_DATABASE_URL, **_engine_kwargs(TEST_DATABASE_URL))
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    if database_exists(engine.url):
        drop_database(engine.url)
    create_database(engine.url)
    Base.metadata.create_all(bind=engine)
    yield
    engine.dispose()
    drop_database(engine.url)


@pytest.fixture(scope="function")
def db():
    """
    Session bound to a connection whose outer transaction is rolled back
    after the test, so commits made by the code under test never persist.
    """
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)
    yield session
    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db):
    """
    Provides a TestClient that uses the test database. Authentication is
    real: send headers from tests.utils.auth.
    """

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    limiter.reset()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def qr_service() -> QRCodeService:
    return QRCodeService(settings.QR_SIGNING_SECRET, require_signature=True, ttl_days=30)
