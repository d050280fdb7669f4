"""Use case: borrar un restaurante (su dirección y sus ítems de menú van con él)."""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.repositories import RestaurantRepository
from .restaurant_results import DeleteRestaurantResult, not_found


class DeleteRestaurantUseCase:
    def __init__(self, restaurants: RestaurantRepository) -> None:
        self._restaurants = restaurants

    def execute(self, restaurant_id: int) -> DeleteRestaurantResult:
        if not self._restaurants.delete(restaurant_id):
            return DeleteRestaurantResult(error=not_found(restaurant_id))
        logger.info("Restaurante eliminado", extra={"restaurant_id": restaurant_id})
        return DeleteRestaurantResult(deleted=True)
