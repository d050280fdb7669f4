"""
===============================================================================
MENU ITEM USE CASE RESULTS (Shared Result / Error Models)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ....crosscutting.pagination import PageSlice
from ....domain.entities import MenuItem
from ....domain.errors import ValidationFailed


class MenuItemErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    RESTAURANT_NOT_FOUND = "RESTAURANT_NOT_FOUND"


@dataclass(frozen=True)
class MenuItemError:
    code: MenuItemErrorCode
    message: str
    field: str | None = None


@dataclass
class MenuItemResult:
    item: MenuItem | None = None
    error: MenuItemError | None = None


@dataclass
class MenuItemPageResult:
    page: PageSlice[MenuItem] | None = None
    error: MenuItemError | None = None


@dataclass
class DeleteMenuItemResult:
    deleted: bool = False
    error: MenuItemError | None = None


def validation_error(exc: ValidationFailed) -> MenuItemError:
    return MenuItemError(MenuItemErrorCode.VALIDATION_ERROR, exc.message, field=exc.field)


def not_found(item_id: int) -> MenuItemError:
    return MenuItemError(
        MenuItemErrorCode.NOT_FOUND, f"Ítem de menú {item_id} no encontrado."
    )


def restaurant_not_found(restaurant_id: int) -> MenuItemError:
    return MenuItemError(
        MenuItemErrorCode.RESTAURANT_NOT_FOUND,
        f"Restaurante {restaurant_id} no encontrado.",
        field="restaurant_id",
    )
