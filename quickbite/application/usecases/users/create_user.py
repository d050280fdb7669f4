"""
===============================================================================
USE CASE: Create User (administrativo)
===============================================================================

Business Goal:
    Alta de usuarios por un ADMIN, con roles explícitos (por id) y estado
    habilitado configurable. Es el único camino de alta que puede asignar
    OWNER / ADMIN.

Rules:
    - role_ids vacío o ausente -> {USER}.
    - role id desconocido -> VALIDATION_ERROR.
    - enabled ausente -> True.

Error Mapping:
    - VALIDATION_ERROR / DUPLICATE_IDENTITY (igual que el registro)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from ....crosscutting.logger import logger
from ....domain.entities import User, validate_plain_password
from ....domain.errors import DuplicateIdentity, ValidationFailed
from ....domain.repositories import UserRepository
from ....identity.credentials import CredentialVerifier
from ....identity.roles import Role
from ..common import AddressInput, build_address
from .uniqueness import ensure_unique_identity
from .user_results import UserResult, duplicate_error, validation_error


def resolve_roles(role_ids: Sequence[int] | None) -> set[Role]:
    """Raises ValidationFailed si algún id no corresponde a un rol."""
    try:
        roles = {Role.from_id(role_id) for role_id in role_ids or ()}
    except ValueError as exc:
        raise ValidationFailed(str(exc), field="role_ids") from exc
    return roles or {Role.USER}


@dataclass(frozen=True)
class CreateUserInput:
    name: str
    email: str
    username: str
    password: str
    address: AddressInput | None = None
    role_ids: Sequence[int] = field(default_factory=tuple)
    enabled: bool | None = None


class CreateUserUseCase:
    def __init__(self, users: UserRepository, verifier: CredentialVerifier) -> None:
        self._users = users
        self._verifier = verifier

    def execute(self, input_data: CreateUserInput) -> UserResult:
        try:
            validate_plain_password(input_data.password)
            user = User.reconstruct(
                id=None,
                name=input_data.name,
                email=input_data.email,
                username=input_data.username,
                password_hash=self._verifier.hash(input_data.password),
                address=build_address(input_data.address),
                roles=resolve_roles(input_data.role_ids),
                enabled=True if input_data.enabled is None else input_data.enabled,
            )
            ensure_unique_identity(
                self._users, username=user.username, email=user.email
            )
            saved = self._users.save(user)
        except ValidationFailed as exc:
            return UserResult(error=validation_error(exc))
        except DuplicateIdentity as exc:
            return UserResult(error=duplicate_error(exc))

        logger.info(
            "Usuario creado por admin",
            extra={"user_id": saved.id, "roles": sorted(r.value for r in saved.roles)},
        )
        return UserResult(user=saved)
