"""
===============================================================================
USE CASE: Update User (administrativo)
===============================================================================

Business Goal:
    Modificar perfil, dirección, roles, estado y (opcionalmente) password de
    un usuario existente.

Rules:
    - Campos ausentes se mantienen.
    - Si cambia username o email se vuelve a chequear unicidad.
    - role_ids presente y no vacío reemplaza el set completo de roles.

Error Mapping:
    - NOT_FOUND: id inexistente
    - VALIDATION_ERROR / DUPLICATE_IDENTITY
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ....crosscutting.logger import logger
from ....domain.entities import validate_plain_password
from ....domain.errors import DuplicateIdentity, ValidationFailed
from ....domain.repositories import UserRepository
from ....identity.credentials import CredentialVerifier
from ..common import AddressInput, build_address
from .create_user import resolve_roles
from .uniqueness import ensure_unique_identity
from .user_results import UserResult, duplicate_error, not_found, validation_error


@dataclass(frozen=True)
class UpdateUserInput:
    user_id: int
    name: str | None = None
    email: str | None = None
    username: str | None = None
    password: str | None = None
    address: AddressInput | None = None
    role_ids: Sequence[int] | None = None
    enabled: bool | None = None


class UpdateUserUseCase:
    def __init__(self, users: UserRepository, verifier: CredentialVerifier) -> None:
        self._users = users
        self._verifier = verifier

    def execute(self, input_data: UpdateUserInput) -> UserResult:
        user = self._users.find_by_id(input_data.user_id)
        if user is None:
            return UserResult(error=not_found(input_data.user_id))

        previous_username, previous_email = user.username, user.email
        try:
            user.update_profile(
                name=input_data.name,
                email=input_data.email,
                username=input_data.username,
                address=build_address(input_data.address),
            )
            # R: Solo se chequean los campos que efectivamente cambiaron.
            ensure_unique_identity(
                self._users,
                username=user.username if user.username != previous_username else None,
                email=user.email if user.email != previous_email else None,
            )
            if input_data.password:
                validate_plain_password(input_data.password)
                user.change_password(self._verifier.hash(input_data.password))
            if input_data.role_ids:
                user.replace_roles(resolve_roles(input_data.role_ids))
            if input_data.enabled is True and not user.enabled:
                user.enable()
            elif input_data.enabled is False and user.enabled:
                user.disable()
            saved = self._users.save(user)
        except ValidationFailed as exc:
            return UserResult(error=validation_error(exc))
        except DuplicateIdentity as exc:
            return UserResult(error=duplicate_error(exc))

        logger.info("Usuario actualizado", extra={"user_id": saved.id})
        return UserResult(user=saved)
