"""Casos de uso de autenticación (login y cambio de password)."""

from .auth_results import (
    AuthErrorCode,
    AuthUseCaseError,
    ChangePasswordResult,
    LoginResult,
)
from .change_password import ChangePasswordInput, ChangePasswordUseCase
from .login import LoginInput, LoginUseCase

__all__ = [
    "AuthErrorCode",
    "AuthUseCaseError",
    "LoginResult",
    "ChangePasswordResult",
    "LoginInput",
    "LoginUseCase",
    "ChangePasswordInput",
    "ChangePasswordUseCase",
]
