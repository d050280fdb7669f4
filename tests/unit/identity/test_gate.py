"""
Name: Authentication Gate + Authorization Middleware Tests

Responsibilities:
  - Anonymous requests pass through the gate without identity
  - Valid tokens install the identity before routing
  - Every parse failure is rejected with 401 + specific code, before routing
  - Authorization middleware maps decisions to 401 / 403 problem+json
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from quickbite.identity.gate import AuthenticationGate
from quickbite.identity.policy import AuthorizationMiddleware, AuthorizationPolicy
from quickbite.identity.roles import Role
from quickbite.identity.token_codec import TokenCodec


def _build_app(codec: TokenCodec, *, with_policy: bool = False):
    app = FastAPI()
    calls: list[str] = []

    @app.get("/api/whoami")
    def whoami(request: Request):
        calls.append("whoami")
        identity = getattr(request.state, "identity", None)
        return {"subject": identity.subject if identity else None}

    @app.delete("/api/restaurants/{rid}")
    def delete_restaurant(rid: int):
        calls.append("delete")
        return {"deleted": rid}

    if with_policy:
        app.add_middleware(AuthorizationMiddleware, policy=AuthorizationPolicy())
    app.add_middleware(AuthenticationGate, codec=codec)
    return app, calls


@pytest.mark.unit
class TestAuthenticationGate:
    def test_anonymous_request_continues_without_identity(self, codec):
        app, calls = _build_app(codec)
        response = TestClient(app).get("/api/whoami")
        assert response.status_code == 200
        assert response.json() == {"subject": None}
        assert calls == ["whoami"]

    def test_blank_header_is_anonymous(self, codec):
        app, _ = _build_app(codec)
        response = TestClient(app).get("/api/whoami", headers={"Authorization": "   "})
        assert response.json() == {"subject": None}

    def test_valid_token_installs_identity(self, codec):
        app, _ = _build_app(codec)
        token, _ = codec.issue_for("alice", [Role.USER])
        response = TestClient(app).get("/api/whoami", headers={"Authorization": token})
        assert response.json() == {"subject": "alice"}

    def test_expired_token_is_rejected_before_routing(self, codec, token_settings):
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        token, _ = TokenCodec(token_settings, clock=lambda: past).issue_for("alice", [Role.USER])
        app, calls = _build_app(codec)

        response = TestClient(app).get("/api/whoami", headers={"Authorization": token})

        assert response.status_code == 401
        assert response.headers["content-type"].startswith("application/problem+json")
        assert response.json()["code"] == "TOKEN_EXPIRED"
        assert calls == []

    @pytest.mark.parametrize(
        "header,code",
        [
            ("Bearer garbage", "TOKEN_MALFORMED"),
            ("Basic dXNlcjpwYXNz", "TOKEN_INVALID_PREFIX"),
        ],
    )
    def test_parse_failures_map_to_specific_codes(self, codec, header, code):
        app, calls = _build_app(codec)
        response = TestClient(app).get("/api/whoami", headers={"Authorization": header})
        assert response.status_code == 401
        assert response.json()["code"] == code
        assert calls == []

    def test_bad_signature_never_reaches_route(self, codec):
        token, _ = codec.issue_for("alice", [Role.ADMIN])
        forged = token[:-6] + ("AAAAAA" if not token.endswith("AAAAAA") else "BBBBBB")
        app, calls = _build_app(codec, with_policy=True)

        response = TestClient(app).delete(
            "/api/restaurants/1", headers={"Authorization": forged}
        )

        assert response.status_code == 401
        assert response.json()["code"] == "TOKEN_BAD_SIGNATURE"
        assert calls == []

    def test_token_is_not_echoed_in_problem_body(self, codec):
        app, _ = _build_app(codec)
        response = TestClient(app).get(
            "/api/whoami", headers={"Authorization": "Bearer very-secret-looking"}
        )
        assert "very-secret-looking" not in response.text


@pytest.mark.unit
class TestAuthorizationMiddleware:
    def test_anonymous_on_protected_route_is_401(self, codec):
        app, calls = _build_app(codec, with_policy=True)
        response = TestClient(app).delete("/api/restaurants/1")
        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHORIZED"
        assert calls == []

    def test_insufficient_role_is_403(self, codec):
        token, _ = codec.issue_for("olga", [Role.OWNER])
        app, calls = _build_app(codec, with_policy=True)
        response = TestClient(app).delete(
            "/api/restaurants/1", headers={"Authorization": token}
        )
        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"
        assert calls == []

    def test_admin_reaches_route(self, codec):
        token, _ = codec.issue_for("root", [Role.ADMIN])
        app, calls = _build_app(codec, with_policy=True)
        response = TestClient(app).delete(
            "/api/restaurants/1", headers={"Authorization": token}
        )
        assert response.status_code == 200
        assert calls == ["delete"]
