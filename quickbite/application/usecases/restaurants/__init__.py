"""Restaurant use cases."""

from .create_restaurant import (
    OWNER_ROLES,
    CreateRestaurantInput,
    CreateRestaurantUseCase,
)
from .delete_restaurant import DeleteRestaurantUseCase
from .get_restaurant import GetRestaurantUseCase
from .list_restaurants import ListRestaurantsInput, ListRestaurantsUseCase
from .restaurant_results import (
    DeleteRestaurantResult,
    RestaurantError,
    RestaurantErrorCode,
    RestaurantPageResult,
    RestaurantResult,
)
from .update_restaurant import UpdateRestaurantInput, UpdateRestaurantUseCase

__all__ = [
    "OWNER_ROLES",
    "CreateRestaurantInput",
    "CreateRestaurantUseCase",
    "DeleteRestaurantResult",
    "DeleteRestaurantUseCase",
    "GetRestaurantUseCase",
    "ListRestaurantsInput",
    "ListRestaurantsUseCase",
    "RestaurantError",
    "RestaurantErrorCode",
    "RestaurantPageResult",
    "RestaurantResult",
    "UpdateRestaurantInput",
    "UpdateRestaurantUseCase",
]
