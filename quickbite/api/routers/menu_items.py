"""
===============================================================================
TARJETA CRC — api/routers/menu_items.py
===============================================================================

Responsabilidades:
  - CRUD de ítems de menú bajo /api/menu-items.
  - GET /api/menu-items?restaurant_id=...&available=...|name=...
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response

from ...application.usecases.menu_items import (
    CreateMenuItemInput,
    CreateMenuItemUseCase,
    DeleteMenuItemUseCase,
    GetMenuItemUseCase,
    ListMenuItemsInput,
    ListMenuItemsUseCase,
    UpdateMenuItemInput,
    UpdateMenuItemUseCase,
)
from ...container import (
    get_create_menu_item_use_case,
    get_delete_menu_item_use_case,
    get_get_menu_item_use_case,
    get_list_menu_items_use_case,
    get_update_menu_item_use_case,
)
from ...crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ...crosscutting.pagination import DEFAULT_PAGE_SIZE, Page, to_page
from ..error_mapping import raise_menu_item_error
from ..schemas.menu_items import CreateMenuItemReq, MenuItemRes, UpdateMenuItemReq

router = APIRouter(prefix="/api/menu-items", tags=["menu-items"], responses=OPENAPI_ERROR_RESPONSES)


@router.get("", response_model=Page[MenuItemRes])
def list_menu_items(
    restaurant_id: int = Query(...),
    page: int = Query(0),
    size: int = Query(DEFAULT_PAGE_SIZE),
    available: bool | None = Query(None),
    name: str | None = Query(None, max_length=100),
    use_case: ListMenuItemsUseCase = Depends(get_list_menu_items_use_case),
):
    result = use_case.execute(
        ListMenuItemsInput(
            restaurant_id=restaurant_id,
            page=page,
            size=size,
            available=available,
            name=name,
        )
    )
    if result.error is not None:
        raise_menu_item_error(result.error)
    return to_page(result.page.map(MenuItemRes.from_domain))


@router.get("/{item_id}", response_model=MenuItemRes)
def get_menu_item(
    item_id: int,
    use_case: GetMenuItemUseCase = Depends(get_get_menu_item_use_case),
):
    result = use_case.execute(item_id)
    if result.error is not None:
        raise_menu_item_error(result.error)
    return MenuItemRes.from_domain(result.item)


@router.post("", response_model=MenuItemRes, status_code=201)
def create_menu_item(
    req: CreateMenuItemReq,
    use_case: CreateMenuItemUseCase = Depends(get_create_menu_item_use_case),
):
    result = use_case.execute(
        CreateMenuItemInput(
            restaurant_id=req.restaurant_id,
            name=req.name,
            price=req.price,
            description=req.description,
            image_url=req.image_url,
            is_available=req.is_available,
        )
    )
    if result.error is not None:
        raise_menu_item_error(result.error)
    return MenuItemRes.from_domain(result.item)


@router.put("/{item_id}", response_model=MenuItemRes)
def update_menu_item(
    item_id: int,
    req: UpdateMenuItemReq,
    use_case: UpdateMenuItemUseCase = Depends(get_update_menu_item_use_case),
):
    result = use_case.execute(
        UpdateMenuItemInput(
            item_id=item_id,
            name=req.name,
            description=req.description,
            price=req.price,
            image_url=req.image_url,
            is_available=req.is_available,
        )
    )
    if result.error is not None:
        raise_menu_item_error(result.error)
    return MenuItemRes.from_domain(result.item)


@router.delete("/{item_id}", status_code=204)
def delete_menu_item(
    item_id: int,
    use_case: DeleteMenuItemUseCase = Depends(get_delete_menu_item_use_case),
):
    result = use_case.execute(item_id)
    if result.error is not None:
        raise_menu_item_error(result.error)
    return Response(status_code=204)
