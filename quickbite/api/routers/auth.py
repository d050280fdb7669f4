"""
===============================================================================
TARJETA CRC — api/routers/auth.py
===============================================================================

Responsabilidades:
  - POST /api/login: credenciales -> token firmado.
  - POST /api/change-password: público; exige el password actual.

Colaboradores:
  - application.usecases.auth (LoginUseCase, ChangePasswordUseCase)
  - api.error_mapping.raise_auth_error
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...application.usecases.auth import (
    ChangePasswordInput,
    ChangePasswordUseCase,
    LoginInput,
    LoginUseCase,
)
from ...container import get_change_password_use_case, get_login_use_case
from ...crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ..error_mapping import raise_auth_error
from ..schemas.auth import ChangePasswordReq, ChangePasswordRes, LoginReq, LoginRes

router = APIRouter(prefix="/api", tags=["auth"], responses=OPENAPI_ERROR_RESPONSES)


@router.post("/login", response_model=LoginRes)
def login(
    req: LoginReq,
    use_case: LoginUseCase = Depends(get_login_use_case),
):
    result = use_case.execute(LoginInput(username=req.username, password=req.password))
    if result.error is not None:
        raise_auth_error(result.error)
    return LoginRes(
        token=result.token, username=result.username, expires_at=result.expires_at
    )


@router.post("/change-password", response_model=ChangePasswordRes)
def change_password(
    req: ChangePasswordReq,
    use_case: ChangePasswordUseCase = Depends(get_change_password_use_case),
):
    result = use_case.execute(
        ChangePasswordInput(
            username=req.username,
            current_password=req.current_password,
            new_password=req.new_password,
        )
    )
    if result.error is not None:
        raise_auth_error(result.error)
    return ChangePasswordRes(message="Password actualizado.")
