import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from jobtracker.database import get_db, init_db
from jobtracker.main import app
from jobtracker.config import settings
from jobtracker.services.session_service import session_service


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def tmp_data_dir(tmp_path):
    data_dir = tmp_path / "TestTracker"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def test_db(tmp_data_dir):
    db_path = tmp_data_dir / "tracker.sqlite"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    init_db(db_path)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def fresh_session_service():
    """Reset session state for each test."""
    original = session_service.__dict__.copy()
    session_service._active_tokens = {}
    yield session_service
    session_service.__dict__.update(original)


@pytest.fixture
def client(tmp_data_dir, test_db, fresh_session_service):
    original_data_dir = settings.data_dir
    settings.data_dir = tmp_data_dir
    c = TestClient(app)
    yield c
    settings.data_dir = original_data_dir


@pytest.fixture
def signin(client):
    """Sign up and sign in a user, returning its auth headers."""
    def _signin(username="alice", password="correct-horse-1"):
        client.post("/api/auth/signup", json={"username": username, "password": password})
        r = client.post("/api/auth/signin", json={"username": username, "password": password})
        return {"Authorization": f"Bearer {r.json()['token']}"}
    return _signin


@pytest.fixture
def auth(signin):
    return signin()
