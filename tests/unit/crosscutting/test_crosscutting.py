"""
Name: Crosscutting Tests (config, logging, request context, error handlers)

Responsibilities:
  - Settings validators and production secret guard
  - Log redaction of sensitive keys
  - Request id adoption/generation
  - Internal errors mapped to problem+json with error_id
"""

import json
import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import ValidationError

from quickbite.api.exception_handlers import register_exception_handlers
from quickbite.context import clear_context, get_context_dict, set_request_context
from quickbite.crosscutting.config import Settings
from quickbite.crosscutting.exceptions import DatabaseError
from quickbite.crosscutting.logger import MASK, JSONFormatter, redact
from quickbite.crosscutting.middleware import RequestContextMiddleware, resolve_request_id

pytestmark = pytest.mark.unit


class TestSettings:
    def test_token_settings_snapshot(self):
        settings = Settings(jwt_prefix="Token", jwt_secret="s" * 40, jwt_expiration_ms=5000)
        snapshot = settings.token_settings()
        assert (snapshot.prefix, snapshot.expiration_ms) == ("Token", 5000)

    @pytest.mark.parametrize("prefix", ["", "Two Words"])
    def test_prefix_must_be_single_token(self, prefix):
        with pytest.raises(ValidationError):
            Settings(jwt_prefix=prefix)

    def test_expiration_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(jwt_expiration_ms=0)

    def test_unknown_backend(self):
        with pytest.raises(ValidationError):
            Settings(repository_backend="mongo")

    def test_pool_sizes_coherent(self):
        with pytest.raises(ValidationError):
            Settings(db_pool_min_size=5, db_pool_max_size=2)

    def test_production_rejects_weak_secret(self):
        with pytest.raises(ValidationError):
            Settings(app_env="production", jwt_secret="dev-secret")
        with pytest.raises(ValidationError):
            Settings(app_env="production", jwt_secret="short-but-custom")

    def test_production_accepts_strong_secret(self):
        settings = Settings(app_env="production", jwt_secret="k" * 48)
        assert settings.is_production()

    def test_allowed_origins_list(self):
        settings = Settings(allowed_origins=" https://a.example , ,https://b.example")
        assert settings.get_allowed_origins_list() == ["https://a.example", "https://b.example"]


class TestLogging:
    def test_redact_masks_nested_sensitive_keys(self):
        cleaned = redact({"username": "alice", "auth": {"password": "p", "Authorization": "Bearer x"}})
        assert cleaned["username"] == "alice"
        assert cleaned["auth"] == {"password": MASK, "Authorization": MASK}

    def test_formatter_includes_context_and_extras(self):
        set_request_context(request_id="rid-1", method="GET", path="/api/x")
        try:
            record = logging.makeLogRecord(
                {"name": "quickbite", "levelname": "INFO", "msg": "hola", "token": "Bearer abc", "user_id": 3}
            )
            line = json.loads(JSONFormatter().format(record))
        finally:
            clear_context()

        assert line["message"] == "hola"
        assert line["request_id"] == "rid-1"
        assert line["user_id"] == 3
        assert line["token"] == MASK

    def test_clear_context(self):
        set_request_context(request_id="rid-2")
        clear_context()
        assert get_context_dict() == {}


class TestRequestId:
    def test_adopts_reasonable_incoming_id(self):
        assert resolve_request_id("  abc-123 ") == "abc-123"

    @pytest.mark.parametrize("raw", [None, "", "x" * 129, "bad\nid"])
    def test_generates_when_missing_or_unreasonable(self, raw):
        generated = resolve_request_id(raw)
        assert generated != raw
        assert len(generated) == 32


class TestInternalErrorHandlers:
    @pytest.fixture
    def client(self):
        app = FastAPI()
        app.add_middleware(RequestContextMiddleware)
        register_exception_handlers(app)

        @app.get("/db")
        def db_down():
            raise DatabaseError("SELECT falló: relation users does not exist")

        return TestClient(app)

    def test_database_error_is_503_without_detail_leak(self, client):
        response = client.get("/db", headers={"X-Request-Id": "rid-db"})

        assert response.status_code == 503
        body = response.json()
        assert body["code"] == "DATABASE_ERROR"
        assert body["request_id"] == "rid-db"
        assert body["errors"][0]["error_id"]
        assert "relation users" not in response.text
