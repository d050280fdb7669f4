"""
===============================================================================
TARJETA CRC — infrastructure/repositories/postgres/menu_item.py
===============================================================================
Class: PostgresMenuItemRepository

Responsibilities:
  - CRUD de ítems de menú (tabla menu_items).
  - Listados por restaurante: todos, por disponibilidad y búsqueda por
    nombre (substring case-insensitive, ordenada por nombre).

Collaborators:
  - psycopg_pool.ConnectionPool
  - domain.entities.MenuItem
  - crosscutting.exceptions.DatabaseError
===============================================================================
"""

from __future__ import annotations

from typing import List, Optional

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.pagination import PageRequest
from ....domain.entities import MenuItem
from .base import PostgresRepository

_COLUMNS = """
    id, restaurant_id, name, description, price, image_url, is_available,
    created_at, updated_at
"""

_ORDER_BY_RECENT = "ORDER BY created_at DESC, id DESC"


def _like_pattern(name: str) -> str:
    escaped = name.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class PostgresMenuItemRepository(PostgresRepository):
    @staticmethod
    def _row_to_item(row: tuple) -> MenuItem:
        (
            item_id,
            restaurant_id,
            name,
            description,
            price,
            image_url,
            is_available,
            created_at,
            updated_at,
        ) = row
        return MenuItem(
            id=item_id,
            restaurant_id=restaurant_id,
            name=name,
            description=description,
            price=price,
            image_url=image_url,
            is_available=is_available,
            created_at=created_at,
            updated_at=updated_at,
        )

    def _select_page(
        self, *, where: str, order_by: str, params: tuple, page: PageRequest, context_msg: str
    ) -> List[MenuItem]:
        rows = self._fetchall(
            query=f"SELECT {_COLUMNS} FROM menu_items {where} {order_by} LIMIT %s OFFSET %s",
            params=(*params, page.size, page.offset),
            context_msg=context_msg,
            extra={"page": page.page, "size": page.size},
        )
        return [self._row_to_item(r) for r in rows]

    def find_by_id(self, item_id: int) -> Optional[MenuItem]:
        row = self._fetchone(
            query=f"SELECT {_COLUMNS} FROM menu_items WHERE id = %s",
            params=(item_id,),
            context_msg="PostgresMenuItemRepository: find_by_id failed",
            extra={"item_id": item_id},
        )
        return self._row_to_item(row) if row else None

    def find_by_restaurant(self, restaurant_id: int, page: PageRequest) -> List[MenuItem]:
        return self._select_page(
            where="WHERE restaurant_id = %s",
            order_by=_ORDER_BY_RECENT,
            params=(restaurant_id,),
            page=page,
            context_msg="PostgresMenuItemRepository: find_by_restaurant failed",
        )

    def count_by_restaurant(self, restaurant_id: int) -> int:
        return self._count(
            query="SELECT COUNT(*) FROM menu_items WHERE restaurant_id = %s",
            params=(restaurant_id,),
            context_msg="PostgresMenuItemRepository: count_by_restaurant failed",
            extra={"restaurant_id": restaurant_id},
        )

    def find_by_restaurant_and_availability(
        self, restaurant_id: int, available: bool, page: PageRequest
    ) -> List[MenuItem]:
        return self._select_page(
            where="WHERE restaurant_id = %s AND is_available = %s",
            order_by=_ORDER_BY_RECENT,
            params=(restaurant_id, available),
            page=page,
            context_msg="PostgresMenuItemRepository: find_by_restaurant_and_availability failed",
        )

    def count_by_restaurant_and_availability(
        self, restaurant_id: int, available: bool
    ) -> int:
        return self._count(
            query="SELECT COUNT(*) FROM menu_items WHERE restaurant_id = %s AND is_available = %s",
            params=(restaurant_id, available),
            context_msg="PostgresMenuItemRepository: count_by_restaurant_and_availability failed",
            extra={"restaurant_id": restaurant_id, "available": available},
        )

    def search_by_name(
        self, restaurant_id: int, name: str, page: PageRequest
    ) -> List[MenuItem]:
        return self._select_page(
            where="WHERE restaurant_id = %s AND LOWER(name) LIKE LOWER(%s)",
            order_by="ORDER BY name ASC, id ASC",
            params=(restaurant_id, _like_pattern(name)),
            page=page,
            context_msg="PostgresMenuItemRepository: search_by_name failed",
        )

    def count_by_name(self, restaurant_id: int, name: str) -> int:
        return self._count(
            query="""
                SELECT COUNT(*) FROM menu_items
                WHERE restaurant_id = %s AND LOWER(name) LIKE LOWER(%s)
            """,
            params=(restaurant_id, _like_pattern(name)),
            context_msg="PostgresMenuItemRepository: count_by_name failed",
            extra={"restaurant_id": restaurant_id, "search": name},
        )

    def save(self, item: MenuItem) -> MenuItem:
        if item.id is None:
            row = self._fetchone(
                query="""
                    INSERT INTO menu_items
                        (restaurant_id, name, description, price, image_url, is_available)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    RETURNING id, created_at, updated_at
                """,
                params=(
                    item.restaurant_id,
                    item.name,
                    item.description,
                    item.price,
                    item.image_url,
                    item.is_available,
                ),
                context_msg="PostgresMenuItemRepository: insert failed",
                extra={"restaurant_id": item.restaurant_id},
            )
            item.id, item.created_at, item.updated_at = row
            return item

        row = self._fetchone(
            query="""
                UPDATE menu_items
                SET name = %s, description = %s, price = %s, image_url = %s,
                    is_available = %s, updated_at = now()
                WHERE id = %s
                RETURNING created_at, updated_at
            """,
            params=(
                item.name,
                item.description,
                item.price,
                item.image_url,
                item.is_available,
                item.id,
            ),
            context_msg="PostgresMenuItemRepository: update failed",
            extra={"item_id": item.id},
        )
        if row is None:
            raise DatabaseError(f"Ítem {item.id} inexistente al actualizar.")
        item.created_at, item.updated_at = row
        return item

    def delete(self, item_id: int) -> bool:
        row = self._fetchone(
            query="DELETE FROM menu_items WHERE id = %s RETURNING id",
            params=(item_id,),
            context_msg="PostgresMenuItemRepository: delete failed",
            extra={"item_id": item_id},
        )
        return row is not None
