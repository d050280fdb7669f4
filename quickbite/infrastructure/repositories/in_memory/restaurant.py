"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/restaurant.py
============================================================
Class: InMemoryRestaurantRepository

Responsibilities:
  - Implementar RestaurantRepository sobre InMemoryStore.
  - Ordenamientos alineados con Postgres: created_at DESC; por rating
    mínimo, rating DESC.
  - Borrar un restaurante arrastra sus ítems de menú.
  - Nunca guarda un restaurante cuyo owner ya no existe (OwnerNotFound).
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, List, Optional

from ....crosscutting.pagination import PageRequest
from ....domain.entities import Restaurant
from ....domain.errors import OwnerNotFound
from .store import InMemoryStore, newest_first, paginate


class InMemoryRestaurantRepository:
    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    def _page(
        self,
        predicate: Callable[[Restaurant], bool],
        page: PageRequest,
        *,
        by_rating: bool = False,
    ) -> List[Restaurant]:
        with self._store.lock:
            matches = newest_first(
                r for r in self._store.restaurants.values() if predicate(r)
            )
            if by_rating:
                matches.sort(key=lambda r: r.rating, reverse=True)
            return [replace(r) for r in paginate(matches, page)]

    def _count(self, predicate: Callable[[Restaurant], bool]) -> int:
        with self._store.lock:
            return sum(1 for r in self._store.restaurants.values() if predicate(r))

    def find_by_id(self, restaurant_id: int) -> Optional[Restaurant]:
        with self._store.lock:
            restaurant = self._store.restaurants.get(restaurant_id)
            return replace(restaurant) if restaurant else None

    def exists_by_id(self, restaurant_id: int) -> bool:
        with self._store.lock:
            return restaurant_id in self._store.restaurants

    def find_all(self, page: PageRequest) -> List[Restaurant]:
        return self._page(lambda r: True, page)

    def count(self) -> int:
        return self._count(lambda r: True)

    def find_by_owner(self, owner_id: int, page: PageRequest) -> List[Restaurant]:
        return self._page(lambda r: r.owner_id == owner_id, page)

    def count_by_owner(self, owner_id: int) -> int:
        return self._count(lambda r: r.owner_id == owner_id)

    def find_by_cuisine(self, cuisine: str, page: PageRequest) -> List[Restaurant]:
        wanted = cuisine.lower()
        return self._page(lambda r: r.cuisine.lower() == wanted, page)

    def count_by_cuisine(self, cuisine: str) -> int:
        wanted = cuisine.lower()
        return self._count(lambda r: r.cuisine.lower() == wanted)

    def find_by_min_rating(self, min_rating: float, page: PageRequest) -> List[Restaurant]:
        return self._page(lambda r: r.rating >= min_rating, page, by_rating=True)

    def count_by_min_rating(self, min_rating: float) -> int:
        return self._count(lambda r: r.rating >= min_rating)

    def save(self, restaurant: Restaurant) -> Restaurant:
        with self._store.lock:
            if restaurant.owner_id not in self._store.users:
                raise OwnerNotFound(restaurant.owner_id)
            now = self._store.now()
            if restaurant.id is None:
                restaurant.id = self._store.next_id("restaurants")
                restaurant.created_at = now
            elif restaurant.id not in self._store.restaurants:
                raise KeyError(f"Restaurante {restaurant.id} inexistente al actualizar.")
            restaurant.updated_at = now
            self._store.restaurants[restaurant.id] = replace(restaurant)
            return restaurant

    def delete(self, restaurant_id: int) -> bool:
        with self._store.lock:
            if self._store.restaurants.pop(restaurant_id, None) is None:
                return False
            for item_id in [
                i.id
                for i in self._store.menu_items.values()
                if i.restaurant_id == restaurant_id
            ]:
                del self._store.menu_items[item_id]
            return True
