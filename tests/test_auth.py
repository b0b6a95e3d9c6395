import asyncio

import pytest

from iain import config
from iain.database import USERS, ensure_indexes
from iain.utils.auth import STAFF_ROLE, create_credential
from iain.utils.security import EMAIL_ALREADY_IN_USE, AuthError

from conftest import STAFF_EMAIL, STAFF_PASSWORD


def test_signup_creates_staff_account(client, fetch):
    resp = client.post("/auth/signup", json={"name": "Ana", "email": "Ana@Example.com", "password": "hunter22"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["email"] == "ana@example.com"
    assert body["role"] == "admin"

    users = fetch(USERS)
    assert len(users) == 1
    assert users[0]["password"] != "hunter22"


def test_signup_duplicate_email(client, staff_user):
    resp = client.post("/auth/signup", json={"email": STAFF_EMAIL, "password": "another1"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "This email is already registered."


def test_signup_weak_password(client):
    resp = client.post("/auth/signup", json={"email": "new@example.com", "password": "123"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Password must be at least 6 characters."


def test_signin_returns_token_and_stamps_last_login(client, staff_user, fetch):
    resp = client.post("/auth/signin", json={"email": STAFF_EMAIL, "password": STAFF_PASSWORD})
    assert resp.status_code == 200
    token = resp.json()["access_token"]
    assert resp.json()["token_type"] == "bearer"

    assert fetch(USERS, {"email": STAFF_EMAIL})[0]["last_login"] is not None

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == STAFF_EMAIL


def test_signin_wrong_password(client, staff_user):
    resp = client.post("/auth/signin", json={"email": STAFF_EMAIL, "password": "nope-nope"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid credentials"


def test_dashboard_routes_require_token(client):
    assert client.get("/accounts").status_code == 401
    assert client.get("/dashboard", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_applicants_cannot_use_dashboard(client, applicant_headers):
    resp = client.get("/accounts", headers=applicant_headers)
    assert resp.status_code == 403


def test_signup_closed_after_first_admin(client, staff_user, monkeypatch):
    monkeypatch.setattr(config, "ALLOW_STAFF_SIGNUP", False)

    resp = client.post("/auth/signup", json={"email": "new@example.com", "password": "hunter22"})
    assert resp.status_code == 403


def test_signup_closed_still_bootstraps_first_admin(client, fetch, monkeypatch):
    monkeypatch.setattr(config, "ALLOW_STAFF_SIGNUP", False)

    resp = client.post("/auth/signup", json={"email": "first@example.com", "password": "hunter22"})
    assert resp.status_code == 200
    assert fetch(USERS)[0]["role"] == STAFF_ROLE


def test_concurrent_duplicate_is_rejected_by_index(db, staff_user, monkeypatch):
    asyncio.run(ensure_indexes(db))

    # Both requests passed the lookup before either inserted
    collection_cls = type(db[USERS])

    async def nothing_found(self, *args, **kwargs):
        return None

    monkeypatch.setattr(collection_cls, "find_one", nothing_found)

    with pytest.raises(AuthError) as excinfo:
        asyncio.run(create_credential(db, STAFF_EMAIL.upper(), "another1", STAFF_ROLE))
    assert excinfo.value.code == EMAIL_ALREADY_IN_USE
