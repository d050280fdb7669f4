"""
===============================================================================
USE CASE: Delete User (administrativo, con guard de agregado)
===============================================================================

Business Goal:
    Borrar un usuario junto con sus roles y su dirección. Si el usuario es
    dueño de algún restaurante, el borrado se bloquea y se informa cuántos
    restaurantes lo referencian; nada se modifica.

Error Mapping:
    - NOT_FOUND: id inexistente
    - HAS_DEPENDENTS: el usuario es dueño de >= 1 restaurante (count exacto)
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.errors import UserHasDependents
from ....domain.repositories import UserRepository
from .user_results import DeleteUserResult, dependents_error, not_found


class DeleteUserUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int) -> DeleteUserResult:
        try:
            deleted = self._users.delete(user_id)
        except UserHasDependents as exc:
            return DeleteUserResult(error=dependents_error(exc))

        if not deleted:
            return DeleteUserResult(error=not_found(user_id))

        logger.info("Usuario eliminado", extra={"user_id": user_id})
        return DeleteUserResult(deleted=True)
