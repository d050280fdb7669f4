"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/store.py
============================================================
Class: InMemoryStore

Responsibilities:
  - Hacer de "base de datos" compartida por los repos in-memory:
    tablas (dicts por id), secuencias y un único lock.
  - Proveer helpers de ordenamiento y paginado alineados con Postgres.

Notes:
  - El lock es reentrante: un repo puede consultar otra tabla dentro
    de su propia sección crítica (guard de borrado de usuarios).
============================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from itertools import count
from threading import RLock
from typing import Dict, Iterable, List, TypeVar

from ....crosscutting.pagination import PageRequest
from ....domain.entities import MenuItem, Restaurant, User

T = TypeVar("T")

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class InMemoryStore:
    def __init__(self) -> None:
        self.lock = RLock()
        self.users: Dict[int, User] = {}
        self.restaurants: Dict[int, Restaurant] = {}
        self.menu_items: Dict[int, MenuItem] = {}
        self._sequences = {
            "users": count(1),
            "restaurants": count(1),
            "menu_items": count(1),
        }

    def next_id(self, table: str) -> int:
        return next(self._sequences[table])

    @staticmethod
    def now() -> datetime:
        return datetime.now(timezone.utc)


def newest_first(items: Iterable[T]) -> List[T]:
    """ORDER BY created_at DESC, id DESC."""
    return sorted(
        items,
        key=lambda e: (e.created_at or _EPOCH, e.id or 0),
        reverse=True,
    )


def paginate(items: List[T], page: PageRequest) -> List[T]:
    return items[page.offset : page.offset + page.size]
