"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/menu_item.py
============================================================
Class: InMemoryMenuItemRepository

Responsibilities:
  - Implementar MenuItemRepository sobre InMemoryStore.
  - Filtros dentro de un restaurante: disponibilidad y búsqueda por nombre
    (substring case-insensitive, ordenada por nombre).
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, List, Optional

from ....crosscutting.pagination import PageRequest
from ....domain.entities import MenuItem
from .store import InMemoryStore, newest_first, paginate


class InMemoryMenuItemRepository:
    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    def _page(
        self,
        predicate: Callable[[MenuItem], bool],
        page: PageRequest,
        *,
        by_name: bool = False,
    ) -> List[MenuItem]:
        with self._store.lock:
            matches = [i for i in self._store.menu_items.values() if predicate(i)]
            if by_name:
                matches.sort(key=lambda i: (i.name, i.id))
            else:
                matches = newest_first(matches)
            return [replace(i) for i in paginate(matches, page)]

    def _count(self, predicate: Callable[[MenuItem], bool]) -> int:
        with self._store.lock:
            return sum(1 for i in self._store.menu_items.values() if predicate(i))

    def find_by_id(self, item_id: int) -> Optional[MenuItem]:
        with self._store.lock:
            item = self._store.menu_items.get(item_id)
            return replace(item) if item else None

    def find_by_restaurant(self, restaurant_id: int, page: PageRequest) -> List[MenuItem]:
        return self._page(lambda i: i.restaurant_id == restaurant_id, page)

    def count_by_restaurant(self, restaurant_id: int) -> int:
        return self._count(lambda i: i.restaurant_id == restaurant_id)

    def find_by_restaurant_and_availability(
        self, restaurant_id: int, available: bool, page: PageRequest
    ) -> List[MenuItem]:
        return self._page(
            lambda i: i.restaurant_id == restaurant_id and i.is_available == available,
            page,
        )

    def count_by_restaurant_and_availability(
        self, restaurant_id: int, available: bool
    ) -> int:
        return self._count(
            lambda i: i.restaurant_id == restaurant_id and i.is_available == available
        )

    def search_by_name(
        self, restaurant_id: int, name: str, page: PageRequest
    ) -> List[MenuItem]:
        needle = name.lower()
        return self._page(
            lambda i: i.restaurant_id == restaurant_id and needle in i.name.lower(),
            page,
            by_name=True,
        )

    def count_by_name(self, restaurant_id: int, name: str) -> int:
        needle = name.lower()
        return self._count(
            lambda i: i.restaurant_id == restaurant_id and needle in i.name.lower()
        )

    def save(self, item: MenuItem) -> MenuItem:
        with self._store.lock:
            now = self._store.now()
            if item.id is None:
                item.id = self._store.next_id("menu_items")
                item.created_at = now
            elif item.id not in self._store.menu_items:
                raise KeyError(f"Ítem {item.id} inexistente al actualizar.")
            item.updated_at = now
            self._store.menu_items[item.id] = replace(item)
            return item

    def delete(self, item_id: int) -> bool:
        with self._store.lock:
            return self._store.menu_items.pop(item_id, None) is not None
