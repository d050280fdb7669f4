"""User use cases."""

from .create_user import CreateUserInput, CreateUserUseCase, resolve_roles
from .delete_user import DeleteUserUseCase
from .get_user import GetUserUseCase
from .list_users import ListUsersInput, ListUsersUseCase
from .register_user import RegisterUserInput, RegisterUserUseCase
from .update_user import UpdateUserInput, UpdateUserUseCase
from .user_results import (
    DeleteUserResult,
    UserError,
    UserErrorCode,
    UserPageResult,
    UserResult,
)

__all__ = [
    "CreateUserInput",
    "CreateUserUseCase",
    "DeleteUserResult",
    "DeleteUserUseCase",
    "GetUserUseCase",
    "ListUsersInput",
    "ListUsersUseCase",
    "RegisterUserInput",
    "RegisterUserUseCase",
    "UpdateUserInput",
    "UpdateUserUseCase",
    "UserError",
    "UserErrorCode",
    "UserPageResult",
    "UserResult",
    "resolve_roles",
]
