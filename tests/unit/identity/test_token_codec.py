"""
Name: Token Codec Tests

Responsibilities:
  - Issue/parse with prefix, subject and authorities
  - Classify each parse failure (expired, malformed, unsupported,
    bad signature, missing prefix)
  - Drop unknown authorities without failing the parse
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from quickbite.crosscutting.config import TokenSettings
from quickbite.identity.errors import (
    TokenBadSignature,
    TokenExpired,
    TokenIssueError,
    TokenMalformed,
    TokenMissingPrefix,
    TokenUnsupported,
)
from quickbite.identity.roles import Role
from quickbite.identity.token_codec import TokenCodec

TEST_SECRET = "test-secret-with-enough-length-0123456789"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _tamper_signature(token: str) -> str:
    prefix, compact = token.split(" ", 1)
    header, payload, signature = compact.split(".")
    middle = len(signature) // 2
    replacement = "A" if signature[middle] != "A" else "B"
    signature = signature[:middle] + replacement + signature[middle + 1 :]
    return f"{prefix} {header}.{payload}.{signature}"


def _raw(payload: dict, *, headers: dict | None = None, key: str = TEST_SECRET) -> str:
    return "Bearer " + jwt.encode(payload, key, algorithm="HS256", headers=headers)


@pytest.mark.unit
class TestTokenIssue:
    def test_issue_for_prefixes_token_with_single_space(self, codec):
        token, _ = codec.issue_for("alice", [Role.USER])
        assert token.startswith("Bearer ")
        assert " " not in token[len("Bearer ") :]

    def test_issue_for_uses_configured_lifetime(self, token_settings):
        fixed = datetime(2030, 1, 1, tzinfo=timezone.utc)
        codec = TokenCodec(token_settings, clock=lambda: fixed)
        _, expires_at = codec.issue_for("alice", [Role.USER])
        assert expires_at == fixed + timedelta(milliseconds=token_settings.expiration_ms)

    def test_issue_rejects_blank_subject(self, codec):
        with pytest.raises(TokenIssueError):
            codec.issue_for("  ", [Role.USER])

    def test_codec_rejects_empty_secret(self):
        with pytest.raises(TokenIssueError):
            TokenCodec(TokenSettings(prefix="Bearer", secret="", expiration_ms=1000))

    def test_codec_rejects_non_positive_lifetime(self):
        with pytest.raises(TokenIssueError):
            TokenCodec(TokenSettings(prefix="Bearer", secret=TEST_SECRET, expiration_ms=0))


@pytest.mark.unit
class TestTokenParse:
    def test_round_trip_keeps_subject_and_roles(self, codec):
        token, _ = codec.issue_for("alice", [Role.USER, Role.OWNER])
        identity = codec.parse(token)
        assert identity.subject == "alice"
        assert identity.roles == {Role.USER, Role.OWNER}
        assert identity.authorities == {"ROLE_USER", "ROLE_OWNER"}

    def test_roles_without_authorities_yield_empty_identity_roles(self, codec):
        token, _ = codec.issue_for("alice", [])
        assert codec.parse(token).authorities == frozenset()

    def test_expired_token(self, token_settings):
        past = _now() - timedelta(hours=2)
        issuer = TokenCodec(token_settings, clock=lambda: past)
        token, _ = issuer.issue_for("alice", [Role.USER])
        with pytest.raises(TokenExpired):
            TokenCodec(token_settings).parse(token)

    def test_tampered_signature(self, codec):
        token, _ = codec.issue_for("alice", [Role.ADMIN])
        with pytest.raises(TokenBadSignature):
            codec.parse(_tamper_signature(token))

    def test_token_signed_with_other_secret(self, codec):
        now = int(_now().timestamp())
        token = _raw({"sub": "alice", "iat": now, "exp": now + 60}, key="x" * 40)
        with pytest.raises(TokenBadSignature):
            codec.parse(token)

    @pytest.mark.parametrize("token", ["Bearer not-a-jwt", "Bearer a.b", "Bearer "])
    def test_malformed_token(self, codec, token):
        with pytest.raises(TokenMalformed):
            codec.parse(token)

    def test_missing_required_claim_is_malformed(self, codec):
        now = int(_now().timestamp())
        with pytest.raises(TokenMalformed):
            codec.parse(_raw({"iat": now, "exp": now + 60}))

    def test_unsupported_typ(self, codec):
        now = int(_now().timestamp())
        token = _raw({"sub": "alice", "iat": now, "exp": now + 60}, headers={"typ": "JWE"})
        with pytest.raises(TokenUnsupported):
            codec.parse(token)

    def test_unsigned_token_is_unsupported(self, codec):
        now = int(_now().timestamp())
        compact = jwt.encode(
            {"sub": "alice", "iat": now, "exp": now + 60}, None, algorithm="none"
        )
        with pytest.raises(TokenUnsupported):
            codec.parse(f"Bearer {compact}")

    @pytest.mark.parametrize("prefix", ["", "bearer ", "Token ", "Bearer"])
    def test_wrong_prefix(self, codec, prefix):
        token, _ = codec.issue_for("alice", [Role.USER])
        compact = token.split(" ", 1)[1]
        with pytest.raises(TokenMissingPrefix):
            codec.parse(prefix + compact)

    def test_unknown_authorities_are_dropped(self, codec):
        now = int(_now().timestamp())
        token = _raw(
            {
                "sub": "alice",
                "iat": now,
                "exp": now + 60,
                "authorities": ["ROLE_USER", "ROLE_SUPERUSER", "ADMIN", 42],
            }
        )
        identity = codec.parse(token)
        assert identity.authorities == {"ROLE_USER"}

    def test_non_list_authorities_yield_no_roles(self, codec):
        now = int(_now().timestamp())
        token = _raw({"sub": "alice", "iat": now, "exp": now + 60, "authorities": "ROLE_ADMIN"})
        assert codec.parse(token).roles == frozenset()

    def test_numeric_string_iat_is_coerced(self, codec):
        now = int(_now().timestamp())
        token = _raw({"sub": "alice", "iat": str(now), "exp": now + 60})

        identity = codec.parse(token)

        assert identity.issued_at == datetime.fromtimestamp(now, tz=timezone.utc)
