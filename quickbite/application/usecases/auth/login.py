"""
===============================================================================
USE CASE: Login
===============================================================================

Business Goal:
    Canjear username + password por un token firmado con los roles vigentes
    del usuario al momento de emitirlo.

Collaborators:
    - identity.sessions.SessionManager (authenticate / issue_session)

Error Mapping:
    - VALIDATION_ERROR: username o password vacíos
    - INVALID_CREDENTIALS: usuario inexistente o password incorrecto
    - ACCOUNT_DISABLED: credenciales correctas sobre una cuenta deshabilitada
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.logger import logger
from ....identity.errors import AccountDisabled, InvalidCredentials
from ....identity.sessions import SessionManager
from .auth_results import AuthErrorCode, AuthUseCaseError, LoginResult


@dataclass(frozen=True)
class LoginInput:
    username: str
    password: str


class LoginUseCase:
    def __init__(self, sessions: SessionManager) -> None:
        self._sessions = sessions

    def execute(self, input_data: LoginInput) -> LoginResult:
        if not (input_data.username or "").strip() or not input_data.password:
            return LoginResult(
                error=AuthUseCaseError(
                    AuthErrorCode.VALIDATION_ERROR,
                    "username y password son requeridos.",
                )
            )

        try:
            user = self._sessions.authenticate(input_data.username, input_data.password)
        except InvalidCredentials as exc:
            return LoginResult(
                error=AuthUseCaseError(AuthErrorCode.INVALID_CREDENTIALS, exc.message)
            )
        except AccountDisabled as exc:
            return LoginResult(
                error=AuthUseCaseError(AuthErrorCode.ACCOUNT_DISABLED, exc.message)
            )

        token, expires_at = self._sessions.issue_session(user.username, user.roles)
        logger.info("Login exitoso", extra={"username": user.username})
        return LoginResult(token=token, username=user.username, expires_at=expires_at)
