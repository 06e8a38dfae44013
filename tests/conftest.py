import os
import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker


# Ensure `import backend.app...` works regardless of where pytest is run from.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Must be set before anything imports backend.app.config.
os.environ["DISABLE_DOTENV"] = "1"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
# Cheap bcrypt so the suite stays fast; still a real salted hash.
os.environ["BCRYPT_ROUNDS"] = "4"


@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return tmp_path_factory.mktemp("db") / "test.sqlite3"


@pytest.fixture()
def app(test_db_path: Path) -> FastAPI:
    """
    Create a FastAPI app wired to a temporary SQLite DB.

    We intentionally do NOT import `app.main` to avoid its startup hook touching the dev DB.
    """
    from backend.app import database as db

    engine = create_engine(
        f"sqlite+pysqlite:///{test_db_path}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON;")
        cursor.close()

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    # Patch the shared database module so router dependencies use the test DB.
    db.engine = engine
    db.SessionLocal = TestingSessionLocal

    # Import models so Base metadata is populated, then create tables.
    from backend.app import models  # noqa: F401

    db.Base.metadata.drop_all(bind=engine)
    db.Base.metadata.create_all(bind=engine)

    from backend.app.api import application as application_api
    from backend.app.api import auth as auth_api
    from backend.app.api import job as job_api
    from backend.app.api import users as users_api
    from backend.app.utils.error_handlers import register_exception_handlers

    fastapi_app = FastAPI()
    fastapi_app.include_router(auth_api.router)
    fastapi_app.include_router(job_api.router)
    fastapi_app.include_router(application_api.router)
    fastapi_app.include_router(users_api.router)
    register_exception_handlers(fastapi_app)

    return fastapi_app


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def db_session(app: FastAPI):
    """
    Direct SQLAlchemy session bound to the same temporary SQLite DB used by the test app.
    """
    from backend.app.database import SessionLocal

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def session_factory(app: FastAPI):
    """Factory for extra sessions, e.g. one per thread in concurrency tests."""
    from backend.app import database as db

    return db.SessionLocal


def _register(client, *, email: str, password: str = "Testpass123!", name: str = "Test User", **extra):
    return client.post(
        "/auth/register",
        json={"name": name, "email": email, "password": password, **extra},
    )


def _auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def token(client) -> str:
    r = _register(client, email="member@example.com", name="Member")
    assert r.status_code == 201, r.text
    return r.json()["token"]


@pytest.fixture()
def job(client, token) -> dict:
    r = client.post(
        "/jobs",
        headers=_auth_headers(token),
        json={"jobTitle": "Backend Developer", "location": "Remote", "description": "Python and SQL"},
    )
    assert r.status_code == 201, r.text
    return r.json()["job"]
