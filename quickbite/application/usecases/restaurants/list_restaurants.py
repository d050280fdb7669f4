"""
===============================================================================
USE CASE: List Restaurants
===============================================================================

Rules:
    - page >= 0, 0 < size <= max_page_size.
    - Filtros excluyentes, con prioridad: cuisine > min_rating > todos.
    - cuisine matchea case-insensitive; min_rating ordena por rating desc.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.pagination import PageSlice
from ....domain.entities import MAX_RATING, MIN_RATING
from ....domain.repositories import RestaurantRepository
from ..common import page_request
from .restaurant_results import (
    RestaurantError,
    RestaurantErrorCode,
    RestaurantPageResult,
)


@dataclass(frozen=True)
class ListRestaurantsInput:
    page: int = 0
    size: int = 10
    cuisine: str | None = None
    min_rating: float | None = None


class ListRestaurantsUseCase:
    def __init__(self, restaurants: RestaurantRepository, *, max_page_size: int) -> None:
        self._restaurants = restaurants
        self._max_page_size = max_page_size

    def _invalid(self, message: str, field: str) -> RestaurantPageResult:
        return RestaurantPageResult(
            error=RestaurantError(RestaurantErrorCode.VALIDATION_ERROR, message, field=field)
        )

    def execute(self, input_data: ListRestaurantsInput) -> RestaurantPageResult:
        page, problem = page_request(input_data.page, input_data.size, self._max_page_size)
        if problem:
            return self._invalid(problem, "size")

        cuisine = (input_data.cuisine or "").strip()
        if cuisine:
            items = self._restaurants.find_by_cuisine(cuisine, page)
            total = self._restaurants.count_by_cuisine(cuisine)
        elif input_data.min_rating is not None:
            if not MIN_RATING <= input_data.min_rating <= MAX_RATING:
                return self._invalid(
                    f"min_rating debe estar entre {MIN_RATING} y {MAX_RATING}.",
                    "min_rating",
                )
            items = self._restaurants.find_by_min_rating(input_data.min_rating, page)
            total = self._restaurants.count_by_min_rating(input_data.min_rating)
        else:
            items = self._restaurants.find_all(page)
            total = self._restaurants.count()

        return RestaurantPageResult(
            page=PageSlice(items=items, page=page.page, size=page.size, total=total)
        )
