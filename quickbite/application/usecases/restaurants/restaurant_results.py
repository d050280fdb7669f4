"""
===============================================================================
RESTAURANT USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Responsibilities:
    - RestaurantErrorCode: categorías estables para los casos de uso.
    - RestaurantError + RestaurantResult / RestaurantPageResult /
      DeleteRestaurantResult.

Notes:
    - UNAUTHORIZED_OWNER: el owner indicado existe pero no tiene rol OWNER
      ni ADMIN (la API lo traduce a 403).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ....crosscutting.pagination import PageSlice
from ....domain.entities import Restaurant
from ....domain.errors import ValidationFailed


class RestaurantErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    OWNER_NOT_FOUND = "OWNER_NOT_FOUND"
    UNAUTHORIZED_OWNER = "UNAUTHORIZED_OWNER"


@dataclass(frozen=True)
class RestaurantError:
    code: RestaurantErrorCode
    message: str
    field: str | None = None


@dataclass
class RestaurantResult:
    restaurant: Restaurant | None = None
    error: RestaurantError | None = None


@dataclass
class RestaurantPageResult:
    page: PageSlice[Restaurant] | None = None
    error: RestaurantError | None = None


@dataclass
class DeleteRestaurantResult:
    deleted: bool = False
    error: RestaurantError | None = None


def validation_error(exc: ValidationFailed) -> RestaurantError:
    return RestaurantError(
        RestaurantErrorCode.VALIDATION_ERROR, exc.message, field=exc.field
    )


def not_found(restaurant_id: int) -> RestaurantError:
    return RestaurantError(
        RestaurantErrorCode.NOT_FOUND, f"Restaurante {restaurant_id} no encontrado."
    )
