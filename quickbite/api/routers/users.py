"""
===============================================================================
TARJETA CRC — api/routers/users.py
===============================================================================

Responsabilidades:
  - POST /api/users/register (público, siempre rol USER).
  - POST /api/users (ADMIN, roles explícitos).
  - GET /api/users, GET /api/users/{id} (USER / ADMIN por política).
  - PUT / DELETE /api/users/{id}: la política solo exige autenticación,
    el rol ADMIN se exige acá con require_admin().

Colaboradores:
  - application.usecases.users
  - identity.dependencies.require_admin
  - api.error_mapping.raise_user_error
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response

from ...application.usecases.users import (
    CreateUserInput,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersInput,
    ListUsersUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
    UpdateUserInput,
    UpdateUserUseCase,
)
from ...container import (
    get_create_user_use_case,
    get_delete_user_use_case,
    get_get_user_use_case,
    get_list_users_use_case,
    get_register_user_use_case,
    get_update_user_use_case,
)
from ...crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ...crosscutting.pagination import DEFAULT_PAGE_SIZE, Page, to_page
from ...identity.dependencies import require_admin
from ...identity.principal import Identity
from ..error_mapping import raise_user_error
from ..schemas.common import address_input
from ..schemas.users import CreateUserReq, RegisterUserReq, UpdateUserReq, UserRes

router = APIRouter(prefix="/api/users", tags=["users"], responses=OPENAPI_ERROR_RESPONSES)


@router.post("/register", response_model=UserRes, status_code=201)
def register_user(
    req: RegisterUserReq,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    result = use_case.execute(
        RegisterUserInput(
            name=req.name,
            email=req.email,
            username=req.username,
            password=req.password,
            address=address_input(req.address),
        )
    )
    if result.error is not None:
        raise_user_error(result.error)
    return UserRes.from_domain(result.user)


@router.post("", response_model=UserRes, status_code=201)
def create_user(
    req: CreateUserReq,
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
):
    result = use_case.execute(
        CreateUserInput(
            name=req.name,
            email=req.email,
            username=req.username,
            password=req.password,
            address=address_input(req.address),
            role_ids=tuple(req.role_ids),
            enabled=req.enabled,
        )
    )
    if result.error is not None:
        raise_user_error(result.error)
    return UserRes.from_domain(result.user)


@router.get("", response_model=Page[UserRes])
def list_users(
    page: int = Query(0),
    size: int = Query(DEFAULT_PAGE_SIZE),
    role_id: int | None = Query(None),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
):
    result = use_case.execute(ListUsersInput(page=page, size=size, role_id=role_id))
    if result.error is not None:
        raise_user_error(result.error)
    return to_page(result.page.map(UserRes.from_domain))


@router.get("/{user_id}", response_model=UserRes)
def get_user(
    user_id: int,
    use_case: GetUserUseCase = Depends(get_get_user_use_case),
):
    result = use_case.execute(user_id)
    if result.error is not None:
        raise_user_error(result.error)
    return UserRes.from_domain(result.user)


@router.put("/{user_id}", response_model=UserRes)
def update_user(
    user_id: int,
    req: UpdateUserReq,
    use_case: UpdateUserUseCase = Depends(get_update_user_use_case),
    _admin: Identity = Depends(require_admin()),
):
    result = use_case.execute(
        UpdateUserInput(
            user_id=user_id,
            name=req.name,
            email=req.email,
            username=req.username,
            password=req.password,
            address=address_input(req.address),
            role_ids=tuple(req.role_ids) if req.role_ids is not None else None,
            enabled=req.enabled,
        )
    )
    if result.error is not None:
        raise_user_error(result.error)
    return UserRes.from_domain(result.user)


@router.delete("/{user_id}", status_code=204)
def delete_user(
    user_id: int,
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
    _admin: Identity = Depends(require_admin()),
):
    result = use_case.execute(user_id)
    if result.error is not None:
        raise_user_error(result.error)
    return Response(status_code=204)
