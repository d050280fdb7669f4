"""
===============================================================================
USE CASE: Update Restaurant
===============================================================================

Rules:
    - Campos ausentes se mantienen; rating e is_open son opcionales.
    - El owner no cambia por esta vía.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.logger import logger
from ....domain.errors import ValidationFailed
from ....domain.repositories import RestaurantRepository
from ..common import AddressInput, build_address
from .restaurant_results import RestaurantResult, not_found, validation_error


@dataclass(frozen=True)
class UpdateRestaurantInput:
    restaurant_id: int
    name: str | None = None
    cuisine: str | None = None
    address: AddressInput | None = None
    opening_hours: str | None = None
    rating: float | None = None
    is_open: bool | None = None


class UpdateRestaurantUseCase:
    def __init__(self, restaurants: RestaurantRepository) -> None:
        self._restaurants = restaurants

    def execute(self, input_data: UpdateRestaurantInput) -> RestaurantResult:
        restaurant = self._restaurants.find_by_id(input_data.restaurant_id)
        if restaurant is None:
            return RestaurantResult(error=not_found(input_data.restaurant_id))

        try:
            restaurant.update_info(
                name=input_data.name,
                cuisine=input_data.cuisine,
                address=build_address(input_data.address),
                opening_hours=input_data.opening_hours,
            )
            if input_data.rating is not None:
                restaurant.update_rating(input_data.rating)
        except ValidationFailed as exc:
            return RestaurantResult(error=validation_error(exc))

        if input_data.is_open is True:
            restaurant.open()
        elif input_data.is_open is False:
            restaurant.close()

        saved = self._restaurants.save(restaurant)
        logger.info("Restaurante actualizado", extra={"restaurant_id": saved.id})
        return RestaurantResult(restaurant=saved)
