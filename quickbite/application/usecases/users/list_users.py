"""
===============================================================================
USE CASE: List Users (paginado, filtro opcional por rol)
===============================================================================

Rules:
    - page >= 0, 0 < size <= max_page_size.
    - role_id presente filtra por ese rol (id desconocido -> VALIDATION_ERROR).
    - La página siempre incluye el total de elementos que matchean.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.pagination import PageSlice
from ....domain.repositories import UserRepository
from ....identity.roles import Role
from ..common import page_request
from .user_results import UserError, UserErrorCode, UserPageResult


@dataclass(frozen=True)
class ListUsersInput:
    page: int = 0
    size: int = 10
    role_id: int | None = None


class ListUsersUseCase:
    def __init__(self, users: UserRepository, *, max_page_size: int) -> None:
        self._users = users
        self._max_page_size = max_page_size

    def execute(self, input_data: ListUsersInput) -> UserPageResult:
        page, problem = page_request(input_data.page, input_data.size, self._max_page_size)
        if problem:
            return UserPageResult(
                error=UserError(UserErrorCode.VALIDATION_ERROR, problem, field="size")
            )

        if input_data.role_id is None:
            items = self._users.find_all(page)
            total = self._users.count()
        else:
            try:
                role = Role.from_id(input_data.role_id)
            except ValueError as exc:
                return UserPageResult(
                    error=UserError(
                        UserErrorCode.VALIDATION_ERROR, str(exc), field="role_id"
                    )
                )
            items = self._users.find_by_role(role, page)
            total = self._users.count_by_role(role)

        return UserPageResult(
            page=PageSlice(items=items, page=page.page, size=page.size, total=total)
        )
