"""
Name: Database Pool Tests

Responsibilities:
  - Test pool lifecycle (init, get, close, reset)
  - Test pool settings passed to psycopg_pool (bounds, timeouts, sslmode)
  - Test instrumentation (acquire failures, slow queries)
  - Offline unit tests (no real DB)

Notes:
  - Uses mocking for ConnectionPool
  - Tests pool singleton behavior
"""

from unittest.mock import MagicMock, patch

import pytest


@pytest.mark.unit
class TestPoolLifecycle:
    """Test pool initialization and cleanup."""

    def test_init_pool_creates_pool(self):
        """init_pool should create a ConnectionPool wrapped in instrumentation."""
        from salesbot.infrastructure.db.instrumentation import (
            InstrumentedConnectionPool,
        )
        from salesbot.infrastructure.db.pool import get_pool, init_pool, reset_pool

        reset_pool()

        with patch("salesbot.infrastructure.db.pool.ConnectionPool") as MockPool:
            MockPool.return_value = MagicMock()

            result = init_pool("postgresql://test", min_size=1, max_size=10)

            MockPool.assert_called_once()
            assert isinstance(result, InstrumentedConnectionPool)
            assert get_pool() is result

        reset_pool()

    def test_init_pool_passes_limits_and_sslmode(self):
        from salesbot.infrastructure.db.pool import init_pool, reset_pool

        reset_pool()

        with patch("salesbot.infrastructure.db.pool.ConnectionPool") as MockPool:
            init_pool(
                "postgresql://test",
                min_size=1,
                max_size=10,
                timeout=10.0,
                max_idle=30.0,
                sslmode="require",
            )

            kwargs = MockPool.call_args.kwargs
            assert kwargs["conninfo"] == "postgresql://test"
            assert kwargs["max_size"] == 10
            assert kwargs["timeout"] == 10.0
            assert kwargs["max_idle"] == 30.0
            assert kwargs["kwargs"] == {"sslmode": "require"}

        reset_pool()

    def test_configure_sets_statement_timeout(self):
        from salesbot.infrastructure.db.pool import init_pool, reset_pool

        reset_pool()

        with patch("salesbot.infrastructure.db.pool.ConnectionPool") as MockPool:
            init_pool("postgresql://test", 1, 10, statement_timeout_ms=5000)
            configure = MockPool.call_args.kwargs["configure"]

        conn = MagicMock()
        configure(conn)

        conn.execute.assert_called_once_with("SET statement_timeout = 5000")
        conn.commit.assert_called_once()

        reset_pool()

    def test_init_pool_twice_raises_error(self):
        from salesbot.infrastructure.db.errors import PoolAlreadyInitializedError
        from salesbot.infrastructure.db.pool import init_pool, reset_pool

        reset_pool()

        with patch("salesbot.infrastructure.db.pool.ConnectionPool"):
            init_pool("postgresql://test", min_size=1, max_size=10)

            with pytest.raises(PoolAlreadyInitializedError):
                init_pool("postgresql://test", min_size=1, max_size=10)

        reset_pool()

    def test_get_pool_without_init_raises_error(self):
        from salesbot.infrastructure.db.errors import PoolNotInitializedError
        from salesbot.infrastructure.db.pool import get_pool, reset_pool

        reset_pool()

        with pytest.raises(PoolNotInitializedError):
            get_pool()

    def test_close_pool_clears_singleton_and_is_idempotent(self):
        from salesbot.infrastructure.db.errors import PoolNotInitializedError
        from salesbot.infrastructure.db.pool import (
            close_pool,
            get_pool,
            init_pool,
            reset_pool,
        )

        reset_pool()

        with patch("salesbot.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool

            init_pool("postgresql://test", min_size=1, max_size=10)
            close_pool()
            close_pool()

            mock_pool.close.assert_called_once()
            with pytest.raises(PoolNotInitializedError):
                get_pool()

        reset_pool()


@pytest.mark.unit
class TestInstrumentation:
    def test_acquire_failure_is_connection_error(self):
        from salesbot.infrastructure.db.errors import DatabaseConnectionError
        from salesbot.infrastructure.db.instrumentation import (
            InstrumentedConnectionPool,
        )

        inner = MagicMock()
        inner.connection.return_value.__enter__.side_effect = TimeoutError("pool timeout")
        pool = InstrumentedConnectionPool(inner)

        with pytest.raises(DatabaseConnectionError):
            with pool.connection():
                pass

    def test_slow_query_is_logged_and_counted(self):
        from salesbot.infrastructure.db.instrumentation import (
            InstrumentedConnectionPool,
        )

        pool = InstrumentedConnectionPool(MagicMock(), slow_query_seconds=0.0)

        with patch("salesbot.infrastructure.db.instrumentation.logger") as mock_logger:
            with pool.connection() as conn:
                conn.execute("SELECT 1", (1,))

        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.kwargs["extra"]["kind"] == "SELECT"
        assert pool.slow_query_count == 1

    def test_fast_query_is_not_logged(self):
        from salesbot.infrastructure.db.instrumentation import QueryTimer

        on_slow = MagicMock()
        conn = QueryTimer(MagicMock(), threshold_s=60.0, on_slow=on_slow)

        conn.execute("SELECT 1")

        on_slow.assert_not_called()

    def test_other_attributes_are_delegated(self):
        from salesbot.infrastructure.db.instrumentation import QueryTimer

        inner = MagicMock()
        conn = QueryTimer(inner, threshold_s=1.0, on_slow=MagicMock())

        conn.commit()

        inner.commit.assert_called_once()
