# /tests/conftest.py

import os
import tempfile

# Configuration is read at import time, so the environment is fixed before
# any `app` module is imported.
_TEST_ROOT = tempfile.mkdtemp(prefix="sahayak-tests-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["MEDIA_ROOT"] = os.path.join(_TEST_ROOT, "media")
os.environ["OFFLINE_STORE_DIR"] = os.path.join(_TEST_ROOT, "offline_store")
os.environ["READING_ASSESSMENT_DELAY_SECONDS"] = "0"
os.environ["JWT_SECRET_KEY"] = "test-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.deps import get_offline_store
from app.db.base import Base
from app.db.database import get_db
from app.main import app
from app.services.data_service import DataService
from app.services.database_service import DatabaseService
from app.services.database_helpers.offline_repository import OfflineStore
from app.services.database_helpers.teacher_repository_sql import TeacherRepositorySQL


@pytest.fixture
def connection_refused():
    """An OperationalError shaped like the one a dropped database connection raises."""
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


@pytest.fixture
def engine():
    """A fresh in-memory SQLite database per test, shared across connections."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def store(tmp_path):
    """An empty offline store in a per-test directory."""
    return OfflineStore(str(tmp_path / "offline"))


@pytest.fixture
def make_teacher(db_session):
    """Factory that inserts a teacher row and returns it."""
    def _make(email="asha.teacher@example.com", name="Asha Teacher"):
        return TeacherRepositorySQL(db_session).add_teacher({
            "email": email,
            "hashed_password": "not-used",
            "name": name,
            "subjects": ["math"],
            "preferences": {},
        })
    return _make


@pytest.fixture
def teacher(make_teacher):
    return make_teacher()


@pytest.fixture
def data_service(db_session, store, teacher):
    """A DataService bound to the default test teacher."""
    return DataService(DatabaseService(db_session, teacher.id), store)


@pytest.fixture
def client(engine, store):
    """
    A TestClient whose database and offline store point at the per-test
    fixtures. Dependency overrides are cleared afterwards.
    """
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_offline_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    """Registers a teacher through the API and returns a bearer header for them."""
    def _headers(email="priya@example.com", password="secret123", name="Priya"):
        response = client.post("/api/auth/register", json={"email": email, "password": password, "name": name})
        assert response.status_code == 201, response.text
        token = client.post("/api/auth/token", data={"username": email, "password": password}).json()["access_token"]
        return {"Authorization": f"Bearer {token}"}
    return _headers
