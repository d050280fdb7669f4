"""
===============================================================================
USER USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Responsibilities:
    - UserErrorCode: categorías estables para los casos de uso de usuarios.
    - UserError: code + message (+ field / count según el caso).
    - UserResult, UserPageResult, DeleteUserResult.
    - Traducir fallas de dominio (ValidationFailed, DuplicateIdentity,
      UserHasDependents) a UserError.

Collaborators:
    - domain.entities.User
    - domain.errors
    - crosscutting.pagination.PageSlice
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ....crosscutting.pagination import PageSlice
from ....domain.entities import User
from ....domain.errors import DuplicateIdentity, UserHasDependents, ValidationFailed


class UserErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_IDENTITY = "DUPLICATE_IDENTITY"
    HAS_DEPENDENTS = "HAS_DEPENDENTS"


@dataclass(frozen=True)
class UserError:
    code: UserErrorCode
    message: str
    field: str | None = None
    count: int | None = None


@dataclass
class UserResult:
    user: User | None = None
    error: UserError | None = None


@dataclass
class UserPageResult:
    page: PageSlice[User] | None = None
    error: UserError | None = None


@dataclass
class DeleteUserResult:
    deleted: bool = False
    error: UserError | None = None


def validation_error(exc: ValidationFailed) -> UserError:
    return UserError(UserErrorCode.VALIDATION_ERROR, exc.message, field=exc.field)


def duplicate_error(exc: DuplicateIdentity) -> UserError:
    return UserError(UserErrorCode.DUPLICATE_IDENTITY, exc.message, field=exc.field)


def dependents_error(exc: UserHasDependents) -> UserError:
    return UserError(UserErrorCode.HAS_DEPENDENTS, exc.message, count=exc.count)


def not_found(user_id: int) -> UserError:
    return UserError(UserErrorCode.NOT_FOUND, f"Usuario {user_id} no encontrado.")
