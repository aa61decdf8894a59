"""
Shared fixtures.

Every test gets its own application instance backed by a fresh SQLite
file in ``tmp_path``.  The ``TestClient`` context manager runs the
application's startup and shutdown, which opens the database, applies
migrations and closes it again.
"""

from typing import Dict, Optional

import pytest
from fastapi.testclient import TestClient

from expense_tracker_api.app.core.config import Settings
from expense_tracker_api.app.core.db import Database
from expense_tracker_api.app.main import create_app


PASSWORD = "Passw0rd!"
ADMIN_EMAIL = "admin@expense.com"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(database_url=str(tmp_path / "test.db"), admin_email=ADMIN_EMAIL)


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(tmp_path):
    database = Database(str(tmp_path / "unit.db")).connect()
    database.init_db()
    yield database
    database.close()


def register(
    client: TestClient,
    name: str,
    email: str,
    password: str = PASSWORD,
    role: Optional[str] = None,
) -> Dict:
    body = {"name": name, "email": email, "password": password}
    if role is not None:
        body["role"] = role
    response = client.post("/api/auth/register", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def bob(client) -> Dict:
    return register(client, "Bob Smith", "bob@x.com")


@pytest.fixture
def alice(client) -> Dict:
    return register(client, "Alice Jones", "alice@x.com")


@pytest.fixture
def admin(client) -> Dict:
    return register(client, "Site Admin", ADMIN_EMAIL)
