import os
import tempfile

import pytest

# Point the app at a throwaway SQLite file before anything imports settings
TEST_DB_DIR = tempfile.mkdtemp(prefix="moneymigo-tests-")
TEST_DB_PATH = os.path.join(TEST_DB_DIR, "moneymigo.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["SEED_DEFAULT_PAYMENT_TYPES"] = "true"

from fastapi.testclient import TestClient

from moneymigo.config import settings
from moneymigo.main import app

def _reset_database():
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)

@pytest.fixture
def client():
    """App client on a fresh database with the default payment types seeded"""
    _reset_database()
    with TestClient(app) as test_client:
        yield test_client

@pytest.fixture
def unseeded_client(monkeypatch):
    """App client on a fresh, empty payment_types table"""
    monkeypatch.setattr(settings, "SEED_DEFAULT_PAYMENT_TYPES", False)
    _reset_database()
    with TestClient(app) as test_client:
        yield test_client

@pytest.fixture
def api_http():
    """TestClient rooted at the API prefix, for MoneyMigoClient"""
    _reset_database()
    with TestClient(app, base_url=f"http://testserver{settings.API_PREFIX}") as test_client:
        yield test_client

@pytest.fixture
def make_transaction(client):
    def _make(**overrides):
        payload = {
            "type": "expense",
            "amount": 100,
            "transaction_date": "2024-03-05",
            "purpose": "groceries",
            "description": None,
            "payment_type": "cash",
        }
        payload.update(overrides)
        response = client.post("/api/transactions", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
