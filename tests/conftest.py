import sys
from pathlib import Path

import pytest
from databases import Database
from fastapi.testclient import TestClient

# Keep the flat top-level packages importable when pytest runs from elsewhere.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import Settings  # noqa: E402
from database.connection import create_tables  # noqa: E402
from repositories.board_repository import BoardRepository  # noqa: E402
from security.passwords import PasswordHasher  # noqa: E402
from services.board_service import BoardService  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings(tmp_path):
    """Test settings: throwaway SQLite file, cheapest bcrypt cost, production-style errors."""
    return Settings(
        node_env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'board.sqlite3'}",
        bcrypt_rounds=4,
        log_level="warning",
    )


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
async def database(settings):
    db = Database(settings.database_url)
    await db.connect()
    await create_tables(db)
    yield db
    await db.disconnect()


@pytest.fixture
def repository(database, hasher):
    return BoardRepository(database, hasher)


@pytest.fixture
def service(repository, hasher):
    return BoardService(repository, hasher)


def _make_client(settings, **kwargs):
    from main import create_app

    return TestClient(create_app(settings), **kwargs)


@pytest.fixture
def make_client():
    """Factory for clients built from custom settings; use as a context manager."""
    return _make_client


@pytest.fixture
def client(settings):
    """TestClient with the lifespan running (database connected, table created)."""
    with _make_client(settings) as c:
        yield c


@pytest.fixture
def insert_post(client):
    """POST /api/insert and return the new id."""

    def _insert(title="t", content="c", writer="w", password="p"):
        response = client.post("/api/insert", json={
            "title": title, "content": content, "writer": writer, "password": password,
        })
        assert response.status_code == 201
        return response.json()["result"]

    return _insert
