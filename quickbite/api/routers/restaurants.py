"""
===============================================================================
TARJETA CRC — api/routers/restaurants.py
===============================================================================

Responsabilidades:
  - CRUD de restaurantes bajo /api/restaurants.
  - Listado paginado con filtros cuisine | min_rating.

Notas:
  - Los roles se resuelven en AuthorizationMiddleware (GET lectores,
    POST/PUT owners y admins, DELETE solo admins).
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response

from ...application.usecases.restaurants import (
    CreateRestaurantInput,
    CreateRestaurantUseCase,
    DeleteRestaurantUseCase,
    GetRestaurantUseCase,
    ListRestaurantsInput,
    ListRestaurantsUseCase,
    UpdateRestaurantInput,
    UpdateRestaurantUseCase,
)
from ...container import (
    get_create_restaurant_use_case,
    get_delete_restaurant_use_case,
    get_get_restaurant_use_case,
    get_list_restaurants_use_case,
    get_update_restaurant_use_case,
)
from ...crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ...crosscutting.pagination import DEFAULT_PAGE_SIZE, Page, to_page
from ..error_mapping import raise_restaurant_error
from ..schemas.common import address_input
from ..schemas.restaurants import (
    CreateRestaurantReq,
    RestaurantRes,
    UpdateRestaurantReq,
)

router = APIRouter(prefix="/api/restaurants", tags=["restaurants"], responses=OPENAPI_ERROR_RESPONSES)


@router.get("", response_model=Page[RestaurantRes])
def list_restaurants(
    page: int = Query(0),
    size: int = Query(DEFAULT_PAGE_SIZE),
    cuisine: str | None = Query(None, max_length=50),
    min_rating: float | None = Query(None),
    use_case: ListRestaurantsUseCase = Depends(get_list_restaurants_use_case),
):
    result = use_case.execute(
        ListRestaurantsInput(page=page, size=size, cuisine=cuisine, min_rating=min_rating)
    )
    if result.error is not None:
        raise_restaurant_error(result.error)
    return to_page(result.page.map(RestaurantRes.from_domain))


@router.get("/{restaurant_id}", response_model=RestaurantRes)
def get_restaurant(
    restaurant_id: int,
    use_case: GetRestaurantUseCase = Depends(get_get_restaurant_use_case),
):
    result = use_case.execute(restaurant_id)
    if result.error is not None:
        raise_restaurant_error(result.error)
    return RestaurantRes.from_domain(result.restaurant)


@router.post("", response_model=RestaurantRes, status_code=201)
def create_restaurant(
    req: CreateRestaurantReq,
    use_case: CreateRestaurantUseCase = Depends(get_create_restaurant_use_case),
):
    result = use_case.execute(
        CreateRestaurantInput(
            owner_id=req.owner_id,
            name=req.name,
            cuisine=req.cuisine,
            address=address_input(req.address),
            opening_hours=req.opening_hours,
            rating=req.rating,
            is_open=req.is_open,
        )
    )
    if result.error is not None:
        raise_restaurant_error(result.error)
    return RestaurantRes.from_domain(result.restaurant)


@router.put("/{restaurant_id}", response_model=RestaurantRes)
def update_restaurant(
    restaurant_id: int,
    req: UpdateRestaurantReq,
    use_case: UpdateRestaurantUseCase = Depends(get_update_restaurant_use_case),
):
    result = use_case.execute(
        UpdateRestaurantInput(
            restaurant_id=restaurant_id,
            name=req.name,
            cuisine=req.cuisine,
            address=address_input(req.address),
            opening_hours=req.opening_hours,
            rating=req.rating,
            is_open=req.is_open,
        )
    )
    if result.error is not None:
        raise_restaurant_error(result.error)
    return RestaurantRes.from_domain(result.restaurant)


@router.delete("/{restaurant_id}", status_code=204)
def delete_restaurant(
    restaurant_id: int,
    use_case: DeleteRestaurantUseCase = Depends(get_delete_restaurant_use_case),
):
    result = use_case.execute(restaurant_id)
    if result.error is not None:
        raise_restaurant_error(result.error)
    return Response(status_code=204)
