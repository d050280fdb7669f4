"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la capa de dominio

Reglas:
    - Solo re-exporta entidades, errores y contratos del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import Address, MenuItem, Restaurant, User
from .errors import DomainError, DuplicateIdentity, UserHasDependents, ValidationFailed
from .repositories import MenuItemRepository, RestaurantRepository, UserRepository

__all__ = [
    "Address",
    "User",
    "Restaurant",
    "MenuItem",
    "DomainError",
    "ValidationFailed",
    "DuplicateIdentity",
    "UserHasDependents",
    "UserRepository",
    "RestaurantRepository",
    "MenuItemRepository",
]
