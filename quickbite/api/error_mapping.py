"""
===============================================================================
TARJETA CRC — api/error_mapping.py (UseCase Error -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir los códigos de error de los casos de uso a AppHTTPException.
  - Centralizar el mapeo para que los routers no repitan la tabla.

Reglas:
  - INVALID_CREDENTIALS / ACCOUNT_DISABLED -> 401
  - UNAUTHORIZED_OWNER -> 403
  - *NOT_FOUND -> 404
  - DUPLICATE_IDENTITY / HAS_DEPENDENTS -> 409 (este último con el conteo)
  - VALIDATION_ERROR -> 422
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn

from ..application.usecases.auth import AuthErrorCode, AuthUseCaseError
from ..application.usecases.menu_items import MenuItemError, MenuItemErrorCode
from ..application.usecases.restaurants import RestaurantError, RestaurantErrorCode
from ..application.usecases.users import UserError, UserErrorCode
from ..crosscutting.error_responses import (
    ErrorCode,
    conflict,
    forbidden,
    internal_error,
    not_found,
    unauthorized,
    validation_error,
)


def _field_errors(field: str | None) -> list[dict] | None:
    return [{"field": field}] if field else None


def raise_auth_error(error: AuthUseCaseError) -> NoReturn:
    if error.code == AuthErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message, _field_errors(error.field))
    if error.code == AuthErrorCode.ACCOUNT_DISABLED:
        raise unauthorized(error.message, ErrorCode.ACCOUNT_DISABLED)
    raise unauthorized(error.message, ErrorCode.INVALID_CREDENTIALS)


def raise_user_error(error: UserError) -> NoReturn:
    if error.code == UserErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message, _field_errors(error.field))
    if error.code == UserErrorCode.NOT_FOUND:
        raise not_found(error.message)
    if error.code == UserErrorCode.DUPLICATE_IDENTITY:
        raise conflict(
            error.message, ErrorCode.DUPLICATE_IDENTITY, _field_errors(error.field)
        )
    if error.code == UserErrorCode.HAS_DEPENDENTS:
        raise conflict(
            error.message,
            ErrorCode.USER_HAS_DEPENDENTS,
            [{"restaurant_count": error.count}],
        )
    raise internal_error(error.message)


def raise_restaurant_error(error: RestaurantError) -> NoReturn:
    if error.code == RestaurantErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message, _field_errors(error.field))
    if error.code in (RestaurantErrorCode.NOT_FOUND, RestaurantErrorCode.OWNER_NOT_FOUND):
        raise not_found(error.message)
    if error.code == RestaurantErrorCode.UNAUTHORIZED_OWNER:
        raise forbidden(error.message)
    raise internal_error(error.message)


def raise_menu_item_error(error: MenuItemError) -> NoReturn:
    if error.code == MenuItemErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message, _field_errors(error.field))
    if error.code in (MenuItemErrorCode.NOT_FOUND, MenuItemErrorCode.RESTAURANT_NOT_FOUND):
        raise not_found(error.message)
    raise internal_error(error.message)
