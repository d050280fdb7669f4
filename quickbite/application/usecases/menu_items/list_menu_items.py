"""
===============================================================================
USE CASE: List Menu Items (por restaurante)
===============================================================================

Rules:
    - restaurant_id obligatorio; el restaurante debe existir.
    - name presente: búsqueda substring case-insensitive, ordenada por nombre.
    - Si no, available presente filtra por el flag exacto.
    - Sin filtros: todos los ítems del restaurante, más recientes primero.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.pagination import PageSlice
from ....domain.repositories import MenuItemRepository, RestaurantRepository
from ..common import page_request
from .menu_item_results import (
    MenuItemError,
    MenuItemErrorCode,
    MenuItemPageResult,
    restaurant_not_found,
)


@dataclass(frozen=True)
class ListMenuItemsInput:
    restaurant_id: int
    page: int = 0
    size: int = 10
    available: bool | None = None
    name: str | None = None


class ListMenuItemsUseCase:
    def __init__(
        self,
        items: MenuItemRepository,
        restaurants: RestaurantRepository,
        *,
        max_page_size: int,
    ) -> None:
        self._items = items
        self._restaurants = restaurants
        self._max_page_size = max_page_size

    def execute(self, input_data: ListMenuItemsInput) -> MenuItemPageResult:
        page, problem = page_request(input_data.page, input_data.size, self._max_page_size)
        if problem:
            return MenuItemPageResult(
                error=MenuItemError(MenuItemErrorCode.VALIDATION_ERROR, problem, field="size")
            )

        restaurant_id = input_data.restaurant_id
        if not self._restaurants.exists_by_id(restaurant_id):
            return MenuItemPageResult(error=restaurant_not_found(restaurant_id))

        name = (input_data.name or "").strip()
        if name:
            items = self._items.search_by_name(restaurant_id, name, page)
            total = self._items.count_by_name(restaurant_id, name)
        elif input_data.available is not None:
            items = self._items.find_by_restaurant_and_availability(
                restaurant_id, input_data.available, page
            )
            total = self._items.count_by_restaurant_and_availability(
                restaurant_id, input_data.available
            )
        else:
            items = self._items.find_by_restaurant(restaurant_id, page)
            total = self._items.count_by_restaurant(restaurant_id)

        return MenuItemPageResult(
            page=PageSlice(items=items, page=page.page, size=page.size, total=total)
        )
