import asyncio
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient
from pymongo.errors import PyMongoError

from iain import database
from iain.main import app
from iain.utils.auth import APPLICANT_ROLE, STAFF_ROLE, create_access_token
from iain.utils.security import get_password_hash

STAFF_EMAIL = "staff@example.com"
STAFF_PASSWORD = "secret123"


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def db(monkeypatch):
    mock_db = AsyncMongoMockClient()["iain_test"]
    monkeypatch.setattr(database, "db", mock_db)
    return mock_db


@pytest.fixture
def client(db):
    # No context manager: startup would try to reach a real MongoDB
    return TestClient(app)


@pytest.fixture
def staff_user(db):
    user = {
        "email": STAFF_EMAIL,
        "password": get_password_hash(STAFF_PASSWORD),
        "role": STAFF_ROLE,
        "name": "Staff Member",
        "created_at": datetime.utcnow(),
        "last_login": None,
    }
    run(db[database.USERS].insert_one(user))
    return user


@pytest.fixture
def auth_headers(staff_user):
    token = create_access_token({"sub": STAFF_EMAIL})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def applicant_headers(db):
    run(db[database.USERS].insert_one({
        "email": "applicant@example.com",
        "password": get_password_hash("applicant1"),
        "role": APPLICANT_ROLE,
    }))
    token = create_access_token({"sub": "applicant@example.com"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed(db):
    """Insert raw documents into a collection."""
    def _seed(collection, *docs):
        run(db[collection].insert_many(list(docs)))
        return docs
    return _seed


@pytest.fixture
def fetch(db):
    """Read raw documents back out of a collection."""
    def _fetch(collection, query=None):
        return run(db[collection].find(query or {}).to_list(None))
    return _fetch


@pytest.fixture
def db_failure(db, monkeypatch):
    """Make one method of one collection raise as if the server were unreachable."""
    def _fail(collection, method):
        collection_cls = type(db[collection])
        original = getattr(collection_cls, method)

        async def failing(self, *args, **kwargs):
            if self.name == collection:
                raise PyMongoError("connection refused")
            return await original(self, *args, **kwargs)

        monkeypatch.setattr(collection_cls, method, failing)
    return _fail
