"""Repository for community posts, likes and comments."""
from typing import Optional

from scripture_api.database import get_db_connection

POST_SELECT = """
    SELECT p.id, p.title, p.content, p.author_id, p.created_at, p.updated_at, u.name AS author_name
    FROM posts p
    LEFT JOIN users u ON p.author_id = u.id
"""

COMMENT_SELECT = """
    SELECT c.id, c.comment, c.created_at, u.name AS author_name
    FROM post_comments c
    JOIN users u ON c.user_id = u.id
"""


class PostsRepository:
    @staticmethod
    def list_posts(limit: Optional[int] = None) -> list:
        """Posts newest first, each with its author's name."""
        query = POST_SELECT + " ORDER BY p.created_at DESC"
        params: tuple = ()
        if limit is not None:
            query += " LIMIT %s"
            params = (limit,)

        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                return cur.fetchall()

    @staticmethod
    def get_post(post_id: int) -> Optional[dict]:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(POST_SELECT + " WHERE p.id = %s", (post_id,))
                return cur.fetchone()

    @staticmethod
    def create_post(author_id: int, title: str, content: str) -> Optional[dict]:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "INSERT INTO posts (title, content, author_id) VALUES (%s, %s, %s) RETURNING id",
                    (title, content, author_id),
                )
                post_id = cur.fetchone()["id"]
                conn.commit()
                cur.execute(POST_SELECT + " WHERE p.id = %s", (post_id,))
                return cur.fetchone()

    @staticmethod
    def update_post(post_id: int, title: str, content: str) -> Optional[dict]:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "UPDATE posts SET title = %s, content = %s, updated_at = NOW() WHERE id = %s",
                    (title, content, post_id),
                )
                conn.commit()
                cur.execute(POST_SELECT + " WHERE p.id = %s", (post_id,))
                return cur.fetchone()

    @staticmethod
    def delete_post(post_id: int) -> bool:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM posts WHERE id = %s", (post_id,))
                deleted = cur.rowcount > 0
                conn.commit()
                return deleted


class PostInteractionsRepository:
    """Likes are a unique (post, user) pair; toggling removes or inserts it."""

    @staticmethod
    def get_stats(post_id: int) -> dict:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT
                        (SELECT COUNT(*) FROM post_likes WHERE post_id = %s) AS likes,
                        (SELECT COUNT(*) FROM post_comments WHERE post_id = %s) AS comments
                    """,
                    (post_id, post_id),
                )
                row = cur.fetchone()
                return {"likes": row["likes"], "comments": row["comments"]}

    @staticmethod
    def has_liked(post_id: int, user_id: int) -> bool:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT id FROM post_likes WHERE post_id = %s AND user_id = %s",
                    (post_id, user_id),
                )
                return cur.fetchone() is not None

    @staticmethod
    def toggle_like(post_id: int, user_id: int) -> bool:
        """Returns True when the post is now liked."""
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "DELETE FROM post_likes WHERE post_id = %s AND user_id = %s",
                    (post_id, user_id),
                )
                if cur.rowcount > 0:
                    conn.commit()
                    return False

                cur.execute(
                    "INSERT INTO post_likes (post_id, user_id) VALUES (%s, %s) ON CONFLICT DO NOTHING",
                    (post_id, user_id),
                )
                conn.commit()
                return True

    @staticmethod
    def list_comments(post_id: int) -> list:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    COMMENT_SELECT + " WHERE c.post_id = %s ORDER BY c.created_at DESC",
                    (post_id,),
                )
                return cur.fetchall()

    @staticmethod
    def add_comment(post_id: int, user_id: int, comment: str) -> Optional[dict]:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "INSERT INTO post_comments (post_id, user_id, comment) VALUES (%s, %s, %s) RETURNING id",
                    (post_id, user_id, comment),
                )
                comment_id = cur.fetchone()["id"]
                conn.commit()
                cur.execute(COMMENT_SELECT + " WHERE c.id = %s", (comment_id,))
                return cur.fetchone()
