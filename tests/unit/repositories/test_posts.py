"""Tests for PostsRepository and PostInteractionsRepository."""
from unittest.mock import patch, MagicMock

from scripture_api.repositories.posts import PostInteractionsRepository, PostsRepository


def _setup_db(mock_get_conn):
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


class TestPostsRepository:

    @patch("scripture_api.repositories.posts.get_db_connection")
    def test_list_posts_newest_first(self, mock_get_conn):
        conn, cur = _setup_db(mock_get_conn)
        cur.fetchall.return_value = [{"id": 2}, {"id": 1}]

        result = PostsRepository.list_posts()

        assert [row["id"] for row in result] == [2, 1]
        sql, params = cur.execute.call_args[0]
        assert "ORDER BY p.created_at DESC" in sql
        assert "LIMIT" not in sql
        assert params == ()

    @patch("scripture_api.repositories.posts.get_db_connection")
    def test_list_posts_with_limit(self, mock_get_conn):
        conn, cur = _setup_db(mock_get_conn)
        cur.fetchall.return_value = [{"id": 2}]

        PostsRepository.list_posts(limit=1)

        sql, params = cur.execute.call_args[0]
        assert sql.endswith("LIMIT %s")
        assert params == (1,)

    @patch("scripture_api.repositories.posts.get_db_connection")
    def test_create_post_returns_joined_row(self, mock_get_conn):
        conn, cur = _setup_db(mock_get_conn)
        cur.fetchone.side_effect = [{"id": 4}, {"id": 4, "title": "Hello", "author_name": "Ruth"}]

        result = PostsRepository.create_post(7, "Hello", "World")

        assert result["author_name"] == "Ruth"
        assert cur.execute.call_args_list[0][0][1] == ("Hello", "World", 7)
        assert cur.execute.call_args_list[1][0][1] == (4,)
        conn.commit.assert_called_once()

    @patch("scripture_api.repositories.posts.get_db_connection")
    def test_get_post_missing(self, mock_get_conn):
        conn, cur = _setup_db(mock_get_conn)
        cur.fetchone.return_value = None

        assert PostsRepository.get_post(99) is None

    @patch("scripture_api.repositories.posts.get_db_connection")
    def test_update_post(self, mock_get_conn):
        conn, cur = _setup_db(mock_get_conn)
        cur.fetchone.return_value = {"id": 4, "title": "New"}

        result = PostsRepository.update_post(4, "New", "Body")

        assert result["title"] == "New"
        assert cur.execute.call_args_list[0][0][1] == ("New", "Body", 4)

    @patch("scripture_api.repositories.posts.get_db_connection")
    def test_delete_post(self, mock_get_conn):
        conn, cur = _setup_db(mock_get_conn)
        cur.rowcount = 1

        assert PostsRepository.delete_post(4) is True


class TestPostInteractionsRepository:

    @patch("scripture_api.repositories.posts.get_db_connection")
    def test_get_stats(self, mock_get_conn):
        conn, cur = _setup_db(mock_get_conn)
        cur.fetchone.return_value = {"likes": 3, "comments": 2}

        assert PostInteractionsRepository.get_stats(1) == {"likes": 3, "comments": 2}
        assert cur.execute.call_args[0][1] == (1, 1)

    @patch("scripture_api.repositories.posts.get_db_connection")
    def test_has_liked(self, mock_get_conn):
        conn, cur = _setup_db(mock_get_conn)
        cur.fetchone.return_value = None

        assert PostInteractionsRepository.has_liked(1, 2) is False

    @patch("scripture_api.repositories.posts.get_db_connection")
    def test_toggle_like_removes_existing(self, mock_get_conn):
        conn, cur = _setup_db(mock_get_conn)
        cur.rowcount = 1

        assert PostInteractionsRepository.toggle_like(1, 2) is False
        assert cur.execute.call_count == 1
        assert cur.execute.call_args[0][0].startswith("DELETE")

    @patch("scripture_api.repositories.posts.get_db_connection")
    def test_toggle_like_inserts_when_absent(self, mock_get_conn):
        conn, cur = _setup_db(mock_get_conn)
        cur.rowcount = 0

        assert PostInteractionsRepository.toggle_like(1, 2) is True
        assert cur.execute.call_count == 2
        assert "ON CONFLICT DO NOTHING" in cur.execute.call_args[0][0]

    @patch("scripture_api.repositories.posts.get_db_connection")
    def test_list_comments(self, mock_get_conn):
        conn, cur = _setup_db(mock_get_conn)
        cur.fetchall.return_value = [{"id": 1, "comment": "Amen", "author_name": "Ruth"}]

        result = PostInteractionsRepository.list_comments(1)

        assert result[0]["comment"] == "Amen"
        assert "ORDER BY c.created_at DESC" in cur.execute.call_args[0][0]

    @patch("scripture_api.repositories.posts.get_db_connection")
    def test_add_comment(self, mock_get_conn):
        conn, cur = _setup_db(mock_get_conn)
        cur.fetchone.side_effect = [{"id": 8}, {"id": 8, "comment": "Amen", "author_name": "Ruth"}]

        result = PostInteractionsRepository.add_comment(1, 2, "Amen")

        assert result["id"] == 8
        assert cur.execute.call_args_list[0][0][1] == (1, 2, "Amen")
