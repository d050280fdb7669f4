"""
===============================================================================
USE CASE: Change Password
===============================================================================

Business Goal:
    Permitir que un usuario cambie su password presentando el actual (ruta
    pública, sin token).

Rules:
    - La verificación del password actual usa el mismo camino que el login:
      usuario inexistente y password incorrecto son indistinguibles.
    - El nuevo password se valida en texto plano y solo se persiste su hash.

Error Mapping:
    - VALIDATION_ERROR: nuevo password demasiado corto / campos vacíos
    - INVALID_CREDENTIALS: usuario inexistente o password actual incorrecto
    - ACCOUNT_DISABLED: cuenta deshabilitada
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.logger import logger
from ....domain.entities import validate_plain_password
from ....domain.errors import ValidationFailed
from ....domain.repositories import UserRepository
from ....identity.credentials import CredentialVerifier
from ....identity.errors import AccountDisabled, InvalidCredentials
from ....identity.sessions import SessionManager
from .auth_results import AuthErrorCode, AuthUseCaseError, ChangePasswordResult


@dataclass(frozen=True)
class ChangePasswordInput:
    username: str
    current_password: str
    new_password: str


class ChangePasswordUseCase:
    def __init__(
        self,
        sessions: SessionManager,
        users: UserRepository,
        verifier: CredentialVerifier,
    ) -> None:
        self._sessions = sessions
        self._users = users
        self._verifier = verifier

    def execute(self, input_data: ChangePasswordInput) -> ChangePasswordResult:
        try:
            validate_plain_password(input_data.new_password)
        except ValidationFailed as exc:
            return ChangePasswordResult(
                error=AuthUseCaseError(
                    AuthErrorCode.VALIDATION_ERROR, exc.message, field="new_password"
                )
            )

        try:
            user = self._sessions.authenticate(
                input_data.username, input_data.current_password
            )
        except InvalidCredentials as exc:
            return ChangePasswordResult(
                error=AuthUseCaseError(AuthErrorCode.INVALID_CREDENTIALS, exc.message)
            )
        except AccountDisabled as exc:
            return ChangePasswordResult(
                error=AuthUseCaseError(AuthErrorCode.ACCOUNT_DISABLED, exc.message)
            )

        user.change_password(self._verifier.hash(input_data.new_password))
        self._users.save(user)
        logger.info("Password actualizado", extra={"user_id": user.id})
        return ChangePasswordResult(changed=True)
