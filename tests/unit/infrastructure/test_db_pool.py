"""
Name: Database Pool Tests

Responsibilities:
  - Test pool lifecycle (init, get, close, reset)
  - Test connection instrumentation (timing proxy, acquisition errors)

Notes:
  - Uses mocking for ConnectionPool, no real DB
"""

from unittest.mock import MagicMock, patch

import pytest

from quickbite.infrastructure.db import (
    DatabaseConnectionError,
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
    close_pool,
    get_pool,
    init_pool,
    reset_pool,
)
from quickbite.infrastructure.db.instrumentation import (
    InstrumentedConnectionPool,
    TimedConnection,
    statement_kind,
)


@pytest.fixture(autouse=True)
def clean_pool():
    reset_pool()
    yield
    reset_pool()


@pytest.mark.unit
class TestPoolLifecycle:
    def test_init_pool_wraps_connection_pool(self):
        with patch("quickbite.infrastructure.db.pool.ConnectionPool") as MockPool:
            result = init_pool("postgresql://test", min_size=2, max_size=10)

            MockPool.assert_called_once()
            kwargs = MockPool.call_args.kwargs
            assert kwargs["min_size"] == 2
            assert kwargs["max_size"] == 10
            assert isinstance(result, InstrumentedConnectionPool)
            assert get_pool() is result

    def test_init_pool_twice_raises_error(self):
        with patch("quickbite.infrastructure.db.pool.ConnectionPool"):
            init_pool("postgresql://test", min_size=1, max_size=2)
            with pytest.raises(PoolAlreadyInitializedError):
                init_pool("postgresql://test", min_size=1, max_size=2)

    def test_get_pool_without_init_raises_error(self):
        with pytest.raises(PoolNotInitializedError):
            get_pool()

    def test_close_pool_clears_singleton(self):
        with patch("quickbite.infrastructure.db.pool.ConnectionPool") as MockPool:
            init_pool("postgresql://test", min_size=1, max_size=2)
            close_pool()

            MockPool.return_value.close.assert_called_once()
            with pytest.raises(PoolNotInitializedError):
                get_pool()

    def test_close_pool_is_idempotent(self):
        close_pool()
        close_pool()


@pytest.mark.unit
class TestInstrumentation:
    def test_statement_kind(self):
        assert statement_kind("  select 1") == "SELECT"
        assert statement_kind("\n DELETE FROM users") == "DELETE"
        assert statement_kind("") == "UNKNOWN"

    def test_timed_connection_delegates(self):
        inner = MagicMock()
        conn = TimedConnection(inner, slow_query_seconds=10)

        result = conn.execute("SELECT 1", (1,))
        conn.commit()

        inner.execute.assert_called_once_with("SELECT 1", (1,))
        inner.commit.assert_called_once()
        assert result is inner.execute.return_value

    def test_timed_connection_propagates_errors(self):
        inner = MagicMock()
        inner.execute.side_effect = ValueError("boom")
        conn = TimedConnection(inner, slow_query_seconds=10)

        with pytest.raises(ValueError):
            conn.execute("UPDATE users SET name = %s", ("x",))

    def test_acquisition_failure_is_typed(self):
        inner_pool = MagicMock()
        inner_pool.connection.return_value.__enter__.side_effect = OSError("refused")
        pool = InstrumentedConnectionPool(inner_pool)

        with pytest.raises(DatabaseConnectionError):
            with pool.connection():
                pass

    def test_failed_healthcheck_releases_connection(self):
        inner_pool = MagicMock()
        inner_ctx = inner_pool.connection.return_value
        inner_ctx.__enter__.return_value.execute.side_effect = OSError("gone")
        pool = InstrumentedConnectionPool(inner_pool, healthcheck=True)

        with pytest.raises(DatabaseConnectionError):
            with pool.connection():
                pass

        inner_ctx.__exit__.assert_called_once()

    def test_connection_yields_timed_proxy(self):
        inner_pool = MagicMock()
        pool = InstrumentedConnectionPool(inner_pool)

        with pool.connection() as conn:
            assert isinstance(conn, TimedConnection)
