"""Tests for HighlightsRepository."""
from unittest.mock import patch, MagicMock

import pytest

from scripture_api.repositories.highlights import HighlightsRepository, clean_note


def _setup_db(mock_get_conn):
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


class TestCleanNote:

    def test_trims(self):
        assert clean_note("  remember this  ") == "remember this"

    def test_blank_becomes_none(self):
        assert clean_note("   ") is None

    def test_none(self):
        assert clean_note(None) is None


class TestHighlightsRepository:

    @patch("scripture_api.repositories.highlights.get_db_connection")
    def test_list_for_user(self, mock_get_conn):
        conn, cur = _setup_db(mock_get_conn)
        cur.fetchall.return_value = [{"id": 1, "verse_id": 10, "book": "John"}]

        result = HighlightsRepository.list_for_user(5)

        assert result[0]["book"] == "John"
        assert cur.execute.call_args[0][1] == (5,)
        assert "ORDER BY h.created_at DESC" in cur.execute.call_args[0][0]

    @patch("scripture_api.repositories.highlights.get_db_connection")
    def test_verse_exists(self, mock_get_conn):
        conn, cur = _setup_db(mock_get_conn)
        cur.fetchone.return_value = {"id": 10}

        assert HighlightsRepository.verse_exists(10) is True

    @patch("scripture_api.repositories.highlights.get_db_connection")
    def test_verse_missing(self, mock_get_conn):
        conn, cur = _setup_db(mock_get_conn)
        cur.fetchone.return_value = None

        assert HighlightsRepository.verse_exists(10) is False

    @patch("scripture_api.repositories.highlights.get_db_connection")
    def test_create_defaults_offsets_and_cleans_note(self, mock_get_conn):
        conn, cur = _setup_db(mock_get_conn)
        cur.fetchone.return_value = {"id": 3, "note": None}

        result = HighlightsRepository.create(1, 10, "#FFFF00", note="   ")

        assert result == {"id": 3, "note": None}
        params = cur.execute.call_args[0][1]
        assert params == (1, 10, "#FFFF00", None, 0, 0, None)
        conn.commit.assert_called_once()

    @patch("scripture_api.repositories.highlights.get_db_connection")
    def test_update_only_given_fields(self, mock_get_conn):
        conn, cur = _setup_db(mock_get_conn)
        cur.rowcount = 1

        updated = HighlightsRepository.update(3, 1, {"note": "  new note ", "color_hex": "#00FF00"})

        assert updated is True
        sql, params = cur.execute.call_args[0]
        assert "color_hex = %s" in sql
        assert "note = %s" in sql
        assert "highlighted_text" not in sql
        assert "updated_at = NOW()" in sql
        assert params == ("#00FF00", "new note", 3, 1)

    @patch("scripture_api.repositories.highlights.get_db_connection")
    def test_update_not_owned(self, mock_get_conn):
        conn, cur = _setup_db(mock_get_conn)
        cur.rowcount = 0

        assert HighlightsRepository.update(3, 2, {"color_hex": "#000000"}) is False

    def test_update_without_fields_raises(self):
        with pytest.raises(ValueError):
            HighlightsRepository.update(3, 1, {"verse_id": 9})

    @patch("scripture_api.repositories.highlights.get_db_connection")
    def test_delete(self, mock_get_conn):
        conn, cur = _setup_db(mock_get_conn)
        cur.rowcount = 1

        assert HighlightsRepository.delete(3, 1) is True
        assert cur.execute.call_args[0][1] == (3, 1)
