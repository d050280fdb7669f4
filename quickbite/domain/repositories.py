"""
===============================================================================
TARJETA CRC — domain/repositories.py
===============================================================================

Módulo:
    Contratos de persistencia (Protocols / puertos)

Responsabilidades:
    - Definir lo que la capa de aplicación necesita de storage, sin SQL.
    - Permitir implementaciones Postgres e in-memory intercambiables.

Colaboradores:
    - domain.entities: User, Restaurant, MenuItem
    - crosscutting.pagination: PageRequest
    - infrastructure.repositories.postgres / in_memory

Restricciones:
    - UserRepository.save persiste usuario + dirección + roles como una unidad.
    - UserRepository.delete es el guard de agregado: si el usuario es dueño de
      algún restaurante levanta UserHasDependents y no borra nada.
    - save levanta DuplicateIdentity ante username/email repetidos.
    - RestaurantRepository.save levanta OwnerNotFound si el owner ya no
      existe al persistir.
===============================================================================
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from ..crosscutting.pagination import PageRequest
from ..identity.roles import Role
from .entities import MenuItem, Restaurant, User


class UserRepository(Protocol):
    def save(self, user: User) -> User:
        """R: Alta (id None) o actualización. Devuelve el agregado con id y timestamps."""
        ...

    def find_by_id(self, user_id: int) -> Optional[User]: ...

    def find_by_username(self, username: str) -> Optional[User]: ...

    def find_by_email(self, email: str) -> Optional[User]: ...

    def find_all(self, page: PageRequest) -> List[User]: ...

    def find_by_role(self, role: Role, page: PageRequest) -> List[User]: ...

    def count(self) -> int: ...

    def count_by_role(self, role: Role) -> int: ...

    def exists_by_username(self, username: str) -> bool: ...

    def exists_by_email(self, email: str) -> bool: ...

    def delete(self, user_id: int) -> bool:
        """
        R: Borra usuario, roles y dirección en una sola transacción.

        Returns:
            False si el usuario no existe.

        Raises:
            UserHasDependents: el usuario es dueño de >= 1 restaurante.
        """
        ...


class RestaurantRepository(Protocol):
    def save(self, restaurant: Restaurant) -> Restaurant:
        """
        Raises:
            OwnerNotFound: owner_id no referencia a un usuario existente.
        """
        ...

    def find_by_id(self, restaurant_id: int) -> Optional[Restaurant]: ...

    def exists_by_id(self, restaurant_id: int) -> bool: ...

    def find_all(self, page: PageRequest) -> List[Restaurant]: ...

    def count(self) -> int: ...

    def find_by_owner(self, owner_id: int, page: PageRequest) -> List[Restaurant]: ...

    def count_by_owner(self, owner_id: int) -> int: ...

    def find_by_cuisine(self, cuisine: str, page: PageRequest) -> List[Restaurant]:
        """R: Match case-insensitive sobre cuisine."""
        ...

    def count_by_cuisine(self, cuisine: str) -> int: ...

    def find_by_min_rating(
        self, min_rating: float, page: PageRequest
    ) -> List[Restaurant]:
        """R: rating >= min_rating, ordenado por rating descendente."""
        ...

    def count_by_min_rating(self, min_rating: float) -> int: ...

    def delete(self, restaurant_id: int) -> bool: ...


class MenuItemRepository(Protocol):
    def save(self, item: MenuItem) -> MenuItem: ...

    def find_by_id(self, item_id: int) -> Optional[MenuItem]: ...

    def find_by_restaurant(
        self, restaurant_id: int, page: PageRequest
    ) -> List[MenuItem]: ...

    def count_by_restaurant(self, restaurant_id: int) -> int: ...

    def find_by_restaurant_and_availability(
        self, restaurant_id: int, available: bool, page: PageRequest
    ) -> List[MenuItem]: ...

    def count_by_restaurant_and_availability(
        self, restaurant_id: int, available: bool
    ) -> int: ...

    def search_by_name(
        self, restaurant_id: int, name: str, page: PageRequest
    ) -> List[MenuItem]:
        """R: Substring case-insensitive dentro del restaurante, ordenado por nombre."""
        ...

    def count_by_name(self, restaurant_id: int, name: str) -> int: ...

    def delete(self, item_id: int) -> bool: ...
