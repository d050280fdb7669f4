"""
Name: Auth Endpoint Tests

Responsibilities:
  - Login issues a prefixed token usable on protected routes
  - Non-enumerating failures and disabled accounts
  - Change password end to end
  - Gate rejections as problem+json with stable codes
"""

import pytest

from quickbite.identity.roles import Role

pytestmark = pytest.mark.unit


def test_healthz_is_public(api_client):
    response = api_client.get("/healthz")
    assert response.status_code == 200
    assert response.json()["ok"] is True


def test_metrics_is_public(api_client):
    response = api_client.get("/metrics")
    assert response.status_code == 200
    assert "quickbite_requests_total" in response.text


def test_login_returns_bearer_token(api_client, seed_user):
    seed_user("alice")

    response = api_client.post("/api/login", json={"username": "alice", "password": "secret1"})

    assert response.status_code == 200
    body = response.json()
    assert body["token"].startswith("Bearer ")
    assert body["username"] == "alice"
    assert body["expires_at"]


def test_login_failures_look_the_same(api_client, seed_user):
    seed_user("alice")

    wrong_password = api_client.post("/api/login", json={"username": "alice", "password": "nope"})
    unknown_user = api_client.post("/api/login", json={"username": "ghost", "password": "nope"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json()["code"] == unknown_user.json()["code"] == "INVALID_CREDENTIALS"
    assert wrong_password.json()["detail"] == unknown_user.json()["detail"]


def test_disabled_account(api_client, seed_user):
    seed_user("mallory", enabled=False)

    response = api_client.post("/api/login", json={"username": "mallory", "password": "secret1"})

    assert response.status_code == 401
    assert response.json()["code"] == "ACCOUNT_DISABLED"


def test_change_password_flow(api_client, seed_user, auth_header):
    seed_user("alice")

    response = api_client.post(
        "/api/change-password",
        json={"username": "alice", "current_password": "secret1", "new_password": "secret2"},
    )

    assert response.status_code == 200
    assert api_client.post("/api/login", json={"username": "alice", "password": "secret1"}).status_code == 401
    assert auth_header("alice", "secret2")["Authorization"].startswith("Bearer ")


def test_change_password_rejects_short_password(api_client, seed_user):
    seed_user("alice")

    response = api_client.post(
        "/api/change-password",
        json={"username": "alice", "current_password": "secret1", "new_password": "abc"},
    )

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_protected_route_requires_token(api_client):
    response = api_client.get("/api/restaurants")

    assert response.status_code == 401
    assert response.headers["content-type"].startswith("application/problem+json")
    assert response.json()["code"] == "UNAUTHORIZED"


def test_malformed_token(api_client):
    response = api_client.get("/api/restaurants", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json()["code"] == "TOKEN_MALFORMED"


def test_wrong_prefix(api_client, seed_user, auth_header):
    seed_user("alice")
    token = auth_header("alice")["Authorization"].split(" ", 1)[1]

    response = api_client.get("/api/restaurants", headers={"Authorization": f"Token {token}"})

    assert response.status_code == 401
    assert response.json()["code"] == "TOKEN_INVALID_PREFIX"


def test_token_grants_access(api_client, seed_user, auth_header):
    seed_user("alice", roles=(Role.USER,))

    response = api_client.get("/api/restaurants", headers=auth_header("alice"))

    assert response.status_code == 200
    assert response.json()["total_elements"] == 0


def test_request_id_is_echoed(api_client):
    response = api_client.get("/healthz", headers={"X-Request-Id": "req-123"})
    assert response.headers["X-Request-Id"] == "req-123"
