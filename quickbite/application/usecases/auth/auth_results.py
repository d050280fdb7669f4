"""
===============================================================================
AUTH USE CASE RESULTS
===============================================================================

Responsibilities:
    - AuthErrorCode: categorías estables de falla de login / cambio de password.
    - AuthUseCaseError: code + message.
    - LoginResult / ChangePasswordResult.

Notas:
    - INVALID_CREDENTIALS cubre usuario inexistente y password incorrecto
      (mismo resultado externo).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AuthErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_DISABLED = "ACCOUNT_DISABLED"


@dataclass(frozen=True)
class AuthUseCaseError:
    code: AuthErrorCode
    message: str
    field: str | None = None


@dataclass
class LoginResult:
    token: str | None = None
    username: str | None = None
    expires_at: datetime | None = None
    error: AuthUseCaseError | None = None


@dataclass
class ChangePasswordResult:
    changed: bool = False
    error: AuthUseCaseError | None = None
