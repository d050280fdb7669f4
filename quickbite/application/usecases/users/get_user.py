"""Use case: obtener un usuario por id."""

from __future__ import annotations

from ....domain.repositories import UserRepository
from .user_results import UserResult, not_found


class GetUserUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int) -> UserResult:
        user = self._users.find_by_id(user_id)
        if user is None:
            return UserResult(error=not_found(user_id))
        return UserResult(user=user)
