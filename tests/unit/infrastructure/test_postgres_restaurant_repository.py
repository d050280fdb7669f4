"""
Name: Postgres Restaurant Repository Tests

Responsibilities:
  - Insert assigns id and timestamps only after the transaction
  - ForeignKeyViolation on owner_id -> OwnerNotFound
  - Driver failures -> DatabaseError

Notes:
  - Offline: the pool is a MagicMock, no real DB
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from psycopg import errors as pg_errors

from quickbite.crosscutting.exceptions import DatabaseError
from quickbite.domain.entities import Restaurant
from quickbite.domain.errors import OwnerNotFound
from quickbite.infrastructure.repositories.postgres import PostgresRestaurantRepository

NOW = datetime(2024, 5, 1, tzinfo=timezone.utc)


def _cursor(fetchone=None):
    cursor = MagicMock()
    cursor.fetchone.return_value = fetchone
    return cursor


@pytest.fixture
def pool():
    return MagicMock()


@pytest.fixture
def conn(pool):
    return pool.connection.return_value.__enter__.return_value


@pytest.fixture
def repo(pool):
    return PostgresRestaurantRepository(pool=pool)


def _new_restaurant(owner_id: int = 4) -> Restaurant:
    return Restaurant.create_new(owner_id=owner_id, name="Don Julio", cuisine="Parrilla")


@pytest.mark.unit
class TestSave:
    def test_insert_assigns_id(self, repo, conn):
        conn.execute.return_value = _cursor(fetchone=(21, NOW, NOW))

        saved = repo.save(_new_restaurant())

        assert saved.id == 21
        assert saved.created_at == NOW
        assert conn.execute.call_args.args[1][0] == 4
        conn.transaction.assert_called_once()

    def test_vanished_owner_is_owner_not_found(self, repo, conn):
        conn.execute.side_effect = pg_errors.ForeignKeyViolation("owner_id fk")
        restaurant = _new_restaurant(owner_id=9)

        with pytest.raises(OwnerNotFound) as exc_info:
            repo.save(restaurant)

        assert exc_info.value.owner_id == 9
        assert restaurant.id is None

    def test_driver_failure_wrapped(self, repo, conn):
        conn.execute.side_effect = pg_errors.OperationalError("conexión perdida")
        restaurant = _new_restaurant()

        with pytest.raises(DatabaseError):
            repo.save(restaurant)

        assert restaurant.id is None
