"""
Fixtures for integration tests
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.database import Database
from app.core.dependencies import get_registered_lgd_code
from app.services.village_service import get_village_directory


@pytest.fixture
async def client(seeded_db, village_directory):
    """
    HTTP client for testing API endpoints.

    Points the Database singleton at the seeded test database and injects
    the sample village directory.
    """
    # Store original engine
    original_engine = Database.engine
    Database.engine = seeded_db
    app.dependency_overrides[get_village_directory] = lambda: village_directory

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    # Restore original engine
    app.dependency_overrides.clear()
    Database.engine = original_engine


@pytest.fixture
def as_user():
    """
    Simulates the auth collaborator: as_user("1001") makes the request come
    from a user registered in village 1001 (None = token without location).
    """
    def _as_user(lgd_code):
        app.dependency_overrides[get_registered_lgd_code] = lambda: lgd_code
    return _as_user
