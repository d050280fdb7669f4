"""Repositorios PostgreSQL (SQL crudo vía psycopg)."""

from .menu_item import PostgresMenuItemRepository
from .restaurant import PostgresRestaurantRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresRestaurantRepository",
    "PostgresMenuItemRepository",
]
