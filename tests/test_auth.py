from conftest import auth_headers
from learnhub.services.auth import create_tokens

REGISTRATION = {"name": "Ada Lovelace", "email": "Ada@Example.com", "password": "engine42"}


def register(client, **overrides):
    return client.post("/api/auth/register", json={**REGISTRATION, **overrides})


def login(client, email="ada@example.com", password="engine42"):
    return client.post("/api/auth/login", data={"username": email, "password": password})


def test_register_returns_working_tokens(client):
    response = register(client)

    assert response.status_code == 201
    tokens = response.json()
    assert tokens["token_type"] == "bearer"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {tokens['access_token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "ada@example.com"
    assert me.json()["role"] == "student"
    assert me.json()["stats"]["interviews_completed"] == 0


def test_register_rejects_duplicate_email(client):
    register(client)

    response = register(client, email="ada@example.com")

    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"


def test_register_validates_input(client):
    response = register(client, name="A", email="not-an-email", password="123", role="owner")

    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["errors"]}
    assert fields == {"name", "email", "password", "role"}


def test_login_with_email_and_password(client):
    register(client)

    assert login(client).status_code == 200
    assert login(client, password="wrong-password").status_code == 401
    assert login(client, email="nobody@example.com").status_code == 401


def test_refresh_requires_a_refresh_token(client):
    tokens = register(client).json()

    refreshed = client.post("/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    rejected = client.post("/api/auth/refresh", json={"refresh_token": tokens["access_token"]})

    assert refreshed.status_code == 200
    assert rejected.status_code == 401


def test_refresh_token_cannot_authenticate_requests(client, user):
    refresh = create_tokens(user.id)["refresh_token"]

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {refresh}"})

    assert response.status_code == 401


def test_invalid_and_missing_tokens_are_rejected(client):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_inactive_users_are_locked_out(client, make_user):
    inactive = make_user(is_active=False)

    response = client.get("/api/auth/me", headers=auth_headers(inactive))

    assert response.status_code == 401


def test_update_details(client, headers, make_user):
    taken = make_user()

    clash = client.put("/api/auth/details", json={"email": taken.email}, headers=headers)
    assert clash.status_code == 400

    response = client.put(
        "/api/auth/details", json={"name": "Grace Hopper", "email": "grace@example.com"}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Grace Hopper"
    assert response.json()["email"] == "grace@example.com"


def test_change_password(client):
    tokens = register(client).json()
    headers = {"Authorization": f"Bearer {tokens['access_token']}"}

    wrong = client.put(
        "/api/auth/password", json={"current_password": "nope", "new_password": "babbage99"}, headers=headers
    )
    assert wrong.status_code == 400

    changed = client.put(
        "/api/auth/password", json={"current_password": "engine42", "new_password": "babbage99"}, headers=headers
    )
    assert changed.status_code == 200
    assert login(client).status_code == 401
    assert login(client, password="babbage99").status_code == 200


def test_logout_acknowledges(client, headers):
    response = client.get("/api/auth/logout", headers=headers)

    assert response.status_code == 200
