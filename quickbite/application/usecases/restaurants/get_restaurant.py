from __future__ import annotations

from ....domain.repositories import RestaurantRepository
from .restaurant_results import RestaurantResult, not_found


class GetRestaurantUseCase:
    def __init__(self, restaurants: RestaurantRepository) -> None:
        self._restaurants = restaurants

    def execute(self, restaurant_id: int) -> RestaurantResult:
        restaurant = self._restaurants.find_by_id(restaurant_id)
        if restaurant is None:
            return RestaurantResult(error=not_found(restaurant_id))
        return RestaurantResult(restaurant=restaurant)
