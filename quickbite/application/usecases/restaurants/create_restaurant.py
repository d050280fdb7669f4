"""
===============================================================================
USE CASE: Create Restaurant
===============================================================================

Business Goal:
    Dar de alta un restaurante asociado a un owner existente.

Rules:
    - El owner debe existir (OWNER_NOT_FOUND), también al persistir: un
      borrado concurrente del owner no deja un restaurante huérfano.
    - El owner debe tener rol OWNER o ADMIN (UNAUTHORIZED_OWNER).
    - rating default 0.0, is_open default True, dirección opcional.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.logger import logger
from ....domain.entities import Restaurant
from ....domain.errors import OwnerNotFound, ValidationFailed
from ....domain.repositories import RestaurantRepository, UserRepository
from ....identity.roles import Role
from ..common import AddressInput, build_address
from .restaurant_results import (
    RestaurantError,
    RestaurantErrorCode,
    RestaurantResult,
    validation_error,
)

OWNER_ROLES = (Role.OWNER, Role.ADMIN)


def _owner_not_found(owner_id: int) -> RestaurantResult:
    return RestaurantResult(
        error=RestaurantError(
            RestaurantErrorCode.OWNER_NOT_FOUND,
            f"Usuario {owner_id} no encontrado.",
            field="owner_id",
        )
    )


@dataclass(frozen=True)
class CreateRestaurantInput:
    owner_id: int
    name: str
    cuisine: str
    address: AddressInput | None = None
    opening_hours: str | None = None
    rating: float | None = None
    is_open: bool | None = None


class CreateRestaurantUseCase:
    def __init__(
        self, restaurants: RestaurantRepository, users: UserRepository
    ) -> None:
        self._restaurants = restaurants
        self._users = users

    def execute(self, input_data: CreateRestaurantInput) -> RestaurantResult:
        owner = self._users.find_by_id(input_data.owner_id)
        if owner is None:
            return _owner_not_found(input_data.owner_id)
        if not owner.has_any_role(OWNER_ROLES):
            logger.warning(
                "Owner sin rol habilitante", extra={"owner_id": input_data.owner_id}
            )
            return RestaurantResult(
                error=RestaurantError(
                    RestaurantErrorCode.UNAUTHORIZED_OWNER,
                    "El usuario no tiene rol OWNER ni ADMIN.",
                    field="owner_id",
                )
            )

        try:
            restaurant = Restaurant.create_new(
                owner_id=owner.id,
                name=input_data.name,
                cuisine=input_data.cuisine,
                address=build_address(input_data.address),
                opening_hours=input_data.opening_hours,
                rating=input_data.rating,
                is_open=input_data.is_open,
            )
        except ValidationFailed as exc:
            return RestaurantResult(error=validation_error(exc))

        try:
            saved = self._restaurants.save(restaurant)
        except OwnerNotFound as exc:
            logger.warning(
                "Owner eliminado antes del alta", extra={"owner_id": exc.owner_id}
            )
            return _owner_not_found(exc.owner_id)
        logger.info(
            "Restaurante creado",
            extra={"restaurant_id": saved.id, "owner_id": saved.owner_id},
        )
        return RestaurantResult(restaurant=saved)
