"""
===============================================================================
USE CASE: Create Menu Item
===============================================================================

Rules:
    - El restaurante debe existir (RESTAURANT_NOT_FOUND).
    - Precio en [0, 999999.99]; is_available default True.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ....crosscutting.logger import logger
from ....domain.entities import MenuItem
from ....domain.errors import ValidationFailed
from ....domain.repositories import MenuItemRepository, RestaurantRepository
from .menu_item_results import MenuItemResult, restaurant_not_found, validation_error


@dataclass(frozen=True)
class CreateMenuItemInput:
    restaurant_id: int
    name: str
    price: Decimal
    description: str | None = None
    image_url: str | None = None
    is_available: bool | None = None


class CreateMenuItemUseCase:
    def __init__(
        self, items: MenuItemRepository, restaurants: RestaurantRepository
    ) -> None:
        self._items = items
        self._restaurants = restaurants

    def execute(self, input_data: CreateMenuItemInput) -> MenuItemResult:
        if not self._restaurants.exists_by_id(input_data.restaurant_id):
            return MenuItemResult(error=restaurant_not_found(input_data.restaurant_id))

        try:
            item = MenuItem.create_new(
                restaurant_id=input_data.restaurant_id,
                name=input_data.name,
                price=input_data.price,
                description=input_data.description,
                image_url=input_data.image_url,
                is_available=input_data.is_available,
            )
        except ValidationFailed as exc:
            return MenuItemResult(error=validation_error(exc))

        saved = self._items.save(item)
        logger.info(
            "Ítem de menú creado",
            extra={"item_id": saved.id, "restaurant_id": saved.restaurant_id},
        )
        return MenuItemResult(item=saved)
