"""
Name: Auth Use Case Tests

Responsibilities:
  - Login success returns a parseable token
  - Login failures map to stable error codes
  - Change password verifies the current password and persists the new hash
"""

import pytest

from quickbite.application.usecases.auth import (
    AuthErrorCode,
    ChangePasswordInput,
    ChangePasswordUseCase,
    LoginInput,
    LoginUseCase,
)
from quickbite.identity.roles import Role
from quickbite.identity.sessions import SessionManager


@pytest.fixture
def sessions(user_repo, verifier, codec) -> SessionManager:
    return SessionManager(user_repo, verifier, codec)


@pytest.mark.unit
class TestLoginUseCase:
    def test_success(self, sessions, make_user, codec):
        make_user("alice", roles=(Role.OWNER,))
        result = LoginUseCase(sessions).execute(LoginInput("alice", "secret1"))

        assert result.error is None
        assert result.username == "alice"
        assert codec.parse(result.token).roles == {Role.OWNER}

    @pytest.mark.parametrize("username,password", [("", "x"), ("  ", "x"), ("alice", "")])
    def test_blank_input_is_validation_error(self, sessions, username, password):
        result = LoginUseCase(sessions).execute(LoginInput(username, password))
        assert result.error.code == AuthErrorCode.VALIDATION_ERROR
        assert result.token is None

    def test_unknown_user(self, sessions):
        result = LoginUseCase(sessions).execute(LoginInput("ghost", "secret1"))
        assert result.error.code == AuthErrorCode.INVALID_CREDENTIALS

    def test_disabled_account(self, sessions, make_user):
        make_user("carol", enabled=False)
        result = LoginUseCase(sessions).execute(LoginInput("carol", "secret1"))
        assert result.error.code == AuthErrorCode.ACCOUNT_DISABLED


@pytest.mark.unit
class TestChangePasswordUseCase:
    def _use_case(self, sessions, user_repo, verifier) -> ChangePasswordUseCase:
        return ChangePasswordUseCase(sessions, user_repo, verifier)

    def test_changes_password(self, sessions, user_repo, verifier, make_user):
        make_user("alice")
        result = self._use_case(sessions, user_repo, verifier).execute(
            ChangePasswordInput("alice", "secret1", "newpass")
        )

        assert result.changed is True
        stored = user_repo.find_by_username("alice")
        assert verifier.matches("newpass", stored.password_hash)
        assert not verifier.matches("secret1", stored.password_hash)

    def test_wrong_current_password(self, sessions, user_repo, verifier, make_user):
        make_user("alice")
        result = self._use_case(sessions, user_repo, verifier).execute(
            ChangePasswordInput("alice", "bad", "newpass")
        )
        assert result.error.code == AuthErrorCode.INVALID_CREDENTIALS
        assert verifier.matches("secret1", user_repo.find_by_username("alice").password_hash)

    def test_short_new_password(self, sessions, user_repo, verifier, make_user):
        make_user("alice")
        result = self._use_case(sessions, user_repo, verifier).execute(
            ChangePasswordInput("alice", "secret1", "abc")
        )
        assert result.error.code == AuthErrorCode.VALIDATION_ERROR
        assert result.error.field == "new_password"
