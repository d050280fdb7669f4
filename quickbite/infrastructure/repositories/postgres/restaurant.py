"""
===============================================================================
TARJETA CRC — infrastructure/repositories/postgres/restaurant.py
===============================================================================
Class: PostgresRestaurantRepository

Responsibilities:
  - CRUD de restaurantes (restaurants + addresses) en SQL parametrizado.
  - Listados paginados: todos, por owner, por cocina (case-insensitive) y
    por rating mínimo (ordenado por rating).
  - ForeignKeyViolation sobre owner_id -> OwnerNotFound.

Collaborators:
  - psycopg_pool.ConnectionPool
  - domain.entities.Restaurant
  - domain.errors.OwnerNotFound
  - crosscutting.exceptions.DatabaseError
===============================================================================
"""

from __future__ import annotations

from typing import List, Optional

from psycopg import errors as pg_errors

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....crosscutting.pagination import PageRequest
from ....domain.entities import Restaurant
from ....domain.errors import OwnerNotFound
from .base import PostgresRepository

_RESTAURANT_SELECT = """
    SELECT r.id, r.owner_id, r.name, r.cuisine, r.opening_hours, r.rating,
           r.is_open, r.created_at, r.updated_at,
           a.street, a.city, a.state, a.zip_code
    FROM restaurants r
    LEFT JOIN addresses a ON a.id = r.address_id
"""

_ORDER_BY_RECENT = "ORDER BY r.created_at DESC, r.id DESC"
_ORDER_BY_RATING = "ORDER BY r.rating DESC, r.id DESC"


class PostgresRestaurantRepository(PostgresRepository):
    def _row_to_restaurant(self, row: tuple) -> Restaurant:
        (
            restaurant_id,
            owner_id,
            name,
            cuisine,
            opening_hours,
            rating,
            is_open,
            created_at,
            updated_at,
            street,
            city,
            state,
            zip_code,
        ) = row
        return Restaurant(
            id=restaurant_id,
            owner_id=owner_id,
            name=name,
            cuisine=cuisine,
            address=self._row_to_address(street, city, state, zip_code),
            opening_hours=opening_hours,
            rating=float(rating or 0),
            is_open=is_open,
            created_at=created_at,
            updated_at=updated_at,
        )

    def _select_page(
        self, *, where: str, order_by: str, params: tuple, page: PageRequest, context_msg: str
    ) -> List[Restaurant]:
        rows = self._fetchall(
            query=f"{_RESTAURANT_SELECT} {where} {order_by} LIMIT %s OFFSET %s",
            params=(*params, page.size, page.offset),
            context_msg=context_msg,
            extra={"page": page.page, "size": page.size},
        )
        return [self._row_to_restaurant(r) for r in rows]

    # =========================================================
    # Lecturas
    # =========================================================
    def find_by_id(self, restaurant_id: int) -> Optional[Restaurant]:
        row = self._fetchone(
            query=f"{_RESTAURANT_SELECT} WHERE r.id = %s",
            params=(restaurant_id,),
            context_msg="PostgresRestaurantRepository: find_by_id failed",
            extra={"restaurant_id": restaurant_id},
        )
        return self._row_to_restaurant(row) if row else None

    def exists_by_id(self, restaurant_id: int) -> bool:
        row = self._fetchone(
            query="SELECT 1 FROM restaurants WHERE id = %s",
            params=(restaurant_id,),
            context_msg="PostgresRestaurantRepository: exists_by_id failed",
            extra={"restaurant_id": restaurant_id},
        )
        return row is not None

    def find_all(self, page: PageRequest) -> List[Restaurant]:
        return self._select_page(
            where="",
            order_by=_ORDER_BY_RECENT,
            params=(),
            page=page,
            context_msg="PostgresRestaurantRepository: find_all failed",
        )

    def count(self) -> int:
        return self._count(
            query="SELECT COUNT(*) FROM restaurants",
            params=(),
            context_msg="PostgresRestaurantRepository: count failed",
            extra={},
        )

    def find_by_owner(self, owner_id: int, page: PageRequest) -> List[Restaurant]:
        return self._select_page(
            where="WHERE r.owner_id = %s",
            order_by=_ORDER_BY_RECENT,
            params=(owner_id,),
            page=page,
            context_msg="PostgresRestaurantRepository: find_by_owner failed",
        )

    def count_by_owner(self, owner_id: int) -> int:
        return self._count(
            query="SELECT COUNT(*) FROM restaurants WHERE owner_id = %s",
            params=(owner_id,),
            context_msg="PostgresRestaurantRepository: count_by_owner failed",
            extra={"owner_id": owner_id},
        )

    def find_by_cuisine(self, cuisine: str, page: PageRequest) -> List[Restaurant]:
        return self._select_page(
            where="WHERE LOWER(r.cuisine) = LOWER(%s)",
            order_by=_ORDER_BY_RECENT,
            params=(cuisine,),
            page=page,
            context_msg="PostgresRestaurantRepository: find_by_cuisine failed",
        )

    def count_by_cuisine(self, cuisine: str) -> int:
        return self._count(
            query="SELECT COUNT(*) FROM restaurants WHERE LOWER(cuisine) = LOWER(%s)",
            params=(cuisine,),
            context_msg="PostgresRestaurantRepository: count_by_cuisine failed",
            extra={"cuisine": cuisine},
        )

    def find_by_min_rating(self, min_rating: float, page: PageRequest) -> List[Restaurant]:
        return self._select_page(
            where="WHERE r.rating >= %s",
            order_by=_ORDER_BY_RATING,
            params=(min_rating,),
            page=page,
            context_msg="PostgresRestaurantRepository: find_by_min_rating failed",
        )

    def count_by_min_rating(self, min_rating: float) -> int:
        return self._count(
            query="SELECT COUNT(*) FROM restaurants WHERE rating >= %s",
            params=(min_rating,),
            context_msg="PostgresRestaurantRepository: count_by_min_rating failed",
            extra={"min_rating": min_rating},
        )

    # =========================================================
    # Escrituras
    # =========================================================
    def save(self, restaurant: Restaurant) -> Restaurant:
        try:
            with self._get_pool().connection() as conn:
                with conn.transaction():
                    if restaurant.id is None:
                        stamp = self._insert(conn, restaurant)
                    else:
                        stamp = (restaurant.id, *self._update(conn, restaurant))
        except pg_errors.ForeignKeyViolation as exc:
            logger.info(
                "Alta de restaurante rechazada: owner inexistente",
                extra={"owner_id": restaurant.owner_id},
            )
            raise OwnerNotFound(restaurant.owner_id) from exc
        except DatabaseError:
            raise
        except Exception as exc:
            logger.exception(
                "PostgresRestaurantRepository: save failed",
                extra={"restaurant_id": restaurant.id, "error": str(exc)},
            )
            raise DatabaseError(f"No se pudo guardar el restaurante: {exc}") from exc
        restaurant.id, restaurant.created_at, restaurant.updated_at = stamp
        return restaurant

    def _insert(self, conn, restaurant: Restaurant) -> tuple:
        address_id = self._save_address(conn, restaurant.address, None)
        row = conn.execute(
            """
            INSERT INTO restaurants
                (owner_id, name, cuisine, address_id, opening_hours, rating, is_open)
            VALUES (%s, %s, %s, %s, %s, %s, %s)
            RETURNING id, created_at, updated_at
            """,
            (
                restaurant.owner_id,
                restaurant.name,
                restaurant.cuisine,
                address_id,
                restaurant.opening_hours,
                restaurant.rating,
                restaurant.is_open,
            ),
        ).fetchone()
        return tuple(row)

    def _update(self, conn, restaurant: Restaurant) -> tuple:
        current = conn.execute(
            "SELECT address_id FROM restaurants WHERE id = %s FOR UPDATE",
            (restaurant.id,),
        ).fetchone()
        if current is None:
            raise DatabaseError(f"Restaurante {restaurant.id} inexistente al actualizar.")

        old_address_id = current[0]
        address_id = self._save_address(conn, restaurant.address, old_address_id)
        row = conn.execute(
            """
            UPDATE restaurants
            SET name = %s, cuisine = %s, address_id = %s, opening_hours = %s,
                rating = %s, is_open = %s, updated_at = now()
            WHERE id = %s
            RETURNING created_at, updated_at
            """,
            (
                restaurant.name,
                restaurant.cuisine,
                address_id,
                restaurant.opening_hours,
                restaurant.rating,
                restaurant.is_open,
                restaurant.id,
            ),
        ).fetchone()
        self._drop_orphan_address(conn, old_address_id, address_id)
        return tuple(row)

    def delete(self, restaurant_id: int) -> bool:
        """R: Borra el restaurante, sus ítems de menú y su dirección."""
        try:
            with self._get_pool().connection() as conn:
                with conn.transaction():
                    current = conn.execute(
                        "SELECT address_id FROM restaurants WHERE id = %s FOR UPDATE",
                        (restaurant_id,),
                    ).fetchone()
                    if current is None:
                        return False
                    conn.execute(
                        "DELETE FROM menu_items WHERE restaurant_id = %s",
                        (restaurant_id,),
                    )
                    conn.execute(
                        "DELETE FROM restaurants WHERE id = %s", (restaurant_id,)
                    )
                    if current[0] is not None:
                        conn.execute(
                            "DELETE FROM addresses WHERE id = %s", (current[0],)
                        )
        except Exception as exc:
            logger.exception(
                "PostgresRestaurantRepository: delete failed",
                extra={"restaurant_id": restaurant_id, "error": str(exc)},
            )
            raise DatabaseError(f"No se pudo borrar el restaurante: {exc}") from exc
        return True
