"""
===============================================================================
USE CASE: Register User (auto-registro público)
===============================================================================

Business Goal:
    Alta de cuenta sin autenticación. La cuenta nace SIEMPRE con rol USER
    y habilitada: el auto-registro nunca otorga OWNER ni ADMIN.

Error Mapping:
    - VALIDATION_ERROR: password corto, email/username inválidos, dirección
      incompleta
    - DUPLICATE_IDENTITY: username o email ya registrados
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.logger import logger
from ....domain.entities import User, validate_plain_password
from ....domain.errors import DuplicateIdentity, ValidationFailed
from ....domain.repositories import UserRepository
from ....identity.credentials import CredentialVerifier
from ..common import AddressInput, build_address
from .uniqueness import ensure_unique_identity
from .user_results import UserResult, duplicate_error, validation_error


@dataclass(frozen=True)
class RegisterUserInput:
    name: str
    email: str
    username: str
    password: str
    address: AddressInput | None = None


class RegisterUserUseCase:
    def __init__(self, users: UserRepository, verifier: CredentialVerifier) -> None:
        self._users = users
        self._verifier = verifier

    def execute(self, input_data: RegisterUserInput) -> UserResult:
        try:
            validate_plain_password(input_data.password)
            user = User.create_new(
                name=input_data.name,
                email=input_data.email,
                username=input_data.username,
                password_hash=self._verifier.hash(input_data.password),
                address=build_address(input_data.address),
            )
            ensure_unique_identity(
                self._users, username=user.username, email=user.email
            )
            saved = self._users.save(user)
        except ValidationFailed as exc:
            return UserResult(error=validation_error(exc))
        except DuplicateIdentity as exc:
            return UserResult(error=duplicate_error(exc))

        logger.info("Usuario registrado", extra={"user_id": saved.id})
        return UserResult(user=saved)
