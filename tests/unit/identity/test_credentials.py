"""
Name: Credential Verifier Tests

Responsibilities:
  - Hash/verify round trip with argon2
  - Salted digests (same password, different digests)
  - Garbage digests never raise
"""

import pytest


@pytest.mark.unit
class TestCredentialVerifier:
    def test_matches_accepts_correct_password(self, verifier):
        digest = verifier.hash("s3cret")
        assert verifier.matches("s3cret", digest) is True

    def test_matches_rejects_wrong_password(self, verifier):
        digest = verifier.hash("s3cret")
        assert verifier.matches("S3cret", digest) is False

    def test_hash_is_salted(self, verifier):
        assert verifier.hash("same") != verifier.hash("same")

    def test_digest_never_contains_plaintext(self, verifier):
        assert "hunter2" not in verifier.hash("hunter2")

    @pytest.mark.parametrize("digest", [None, "", "not-a-hash", "$argon2id$broken"])
    def test_invalid_digest_is_a_mismatch(self, verifier, digest):
        assert verifier.matches("whatever", digest) is False
