"""User presence tracking and the admin user listing."""
from typing import Optional

from scripture_api.database import get_db_connection

ADMIN_USER_COLUMNS = "id, name, email, role, created_at, last_seen, COALESCE(is_online, FALSE) AS is_online"


class PresenceRepository:
    """Online state lives on the users row (is_online, last_seen)."""

    @staticmethod
    def mark_online(user_id: int) -> None:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "UPDATE users SET last_seen = NOW(), is_online = TRUE WHERE id = %s",
                    (user_id,),
                )
                conn.commit()

    @staticmethod
    def mark_offline(user_id: int) -> None:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("UPDATE users SET is_online = FALSE WHERE id = %s", (user_id,))
                conn.commit()

    @staticmethod
    def sweep_stale(timeout_minutes: int) -> int:
        """Mark users not seen within ``timeout_minutes`` offline; returns rows changed."""
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE users SET is_online = FALSE
                    WHERE is_online = TRUE AND last_seen < NOW() - make_interval(mins => %s)
                    """,
                    (timeout_minutes,),
                )
                swept = cur.rowcount
                conn.commit()
                return swept

    @staticmethod
    def online_count() -> int:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT COUNT(*) AS count FROM users WHERE is_online = TRUE")
                row = cur.fetchone()
                return row["count"] if row else 0

    @staticmethod
    def list_users() -> list:
        """All users, online ones first, then by most recently seen."""
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"SELECT {ADMIN_USER_COLUMNS} FROM users "
                    "ORDER BY is_online DESC, last_seen DESC NULLS LAST"
                )
                return cur.fetchall()

    @staticmethod
    def update_user(user_id: int, name: str, email: str, role: str) -> Optional[dict]:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    UPDATE users SET name = %s, email = %s, role = %s
                    WHERE id = %s
                    RETURNING {ADMIN_USER_COLUMNS}
                    """,
                    (name, email, role or "user", user_id),
                )
                user = cur.fetchone()
                conn.commit()
                return user
