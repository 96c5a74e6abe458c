"""Unit tests for database connection management."""
import pytest
from unittest.mock import Mock, patch
import psycopg2

from scripture_api import database
from scripture_api.database import (
    close_connection_pool,
    connect_direct,
    get_db_connection,
    initialize_connection_pool,
)


@pytest.fixture(autouse=True)
def reset_pool():
    database._connection_pool = None
    yield
    database._connection_pool = None


class TestDirectConnection:
    """Connections opened when the pool is not initialized."""

    @patch('scripture_api.database.psycopg2.connect')
    def test_get_db_connection_success(self, mock_connect):
        mock_conn = Mock()
        mock_connect.return_value = mock_conn

        with get_db_connection() as conn:
            assert conn == mock_conn

        mock_connect.assert_called_once()
        mock_conn.close.assert_called_once()

    @patch('scripture_api.database.psycopg2.connect')
    def test_get_db_connection_error_with_rollback(self, mock_connect):
        mock_conn = Mock()
        mock_connect.return_value = mock_conn

        with pytest.raises(psycopg2.Error):
            with get_db_connection():
                raise psycopg2.Error("Test database error")

        mock_conn.rollback.assert_called_once()
        mock_conn.close.assert_called_once()

    @patch('scripture_api.database.psycopg2.connect')
    def test_get_db_connection_connection_error(self, mock_connect):
        mock_connect.side_effect = psycopg2.Error("Connection failed")

        with pytest.raises(psycopg2.Error, match="Connection failed"):
            with get_db_connection():
                pass

    @patch('scripture_api.database.psycopg2.connect')
    def test_connect_direct_autocommit(self, mock_connect):
        conn = connect_direct(autocommit=True)

        assert conn is mock_connect.return_value
        assert conn.autocommit is True


class TestConnectionPool:
    """Pooled connections are borrowed and returned."""

    @patch('scripture_api.database.pool.ThreadedConnectionPool')
    def test_initialize_uses_explicit_sizes(self, mock_pool_class):
        initialize_connection_pool(minconn=2, maxconn=5)

        args = mock_pool_class.call_args[0]
        assert args[:2] == (2, 5)
        assert database._connection_pool is mock_pool_class.return_value

    @patch('scripture_api.database.pool.ThreadedConnectionPool')
    def test_initialize_twice_is_noop(self, mock_pool_class):
        initialize_connection_pool()
        initialize_connection_pool()

        mock_pool_class.assert_called_once()

    @patch('scripture_api.database.pool.ThreadedConnectionPool')
    def test_initialize_failure_propagates(self, mock_pool_class):
        mock_pool_class.side_effect = psycopg2.OperationalError("refused")

        with pytest.raises(psycopg2.OperationalError):
            initialize_connection_pool()
        assert database._connection_pool is None

    def test_connection_returned_to_pool(self):
        mock_pool = Mock()
        database._connection_pool = mock_pool

        with get_db_connection() as conn:
            assert conn is mock_pool.getconn.return_value

        mock_pool.putconn.assert_called_once_with(conn)

    def test_pooled_error_rolls_back(self):
        mock_pool = Mock()
        database._connection_pool = mock_pool

        with pytest.raises(psycopg2.Error):
            with get_db_connection():
                raise psycopg2.Error("boom")

        mock_pool.getconn.return_value.rollback.assert_called_once()
        mock_pool.putconn.assert_called_once()

    def test_close_pool(self):
        mock_pool = Mock()
        database._connection_pool = mock_pool

        close_connection_pool()

        mock_pool.closeall.assert_called_once()
        assert database._connection_pool is None
