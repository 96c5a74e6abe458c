"""Repository for support chat messages between users and admins."""
from typing import Optional

from scripture_api.database import get_db_connection

MESSAGE_COLUMNS = "id, message, sender, sender_name, user_id, timestamp"


class ChatRepository:
    """A NULL user_id on an admin message means it was broadcast to everyone."""

    @staticmethod
    def messages_for_user(user_id: int) -> list:
        """The user's own messages plus admin messages addressed to them or broadcast."""
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    SELECT {MESSAGE_COLUMNS}
                    FROM chat_messages
                    WHERE user_id = %s OR (sender = 'admin' AND (user_id = %s OR user_id IS NULL))
                    ORDER BY timestamp ASC
                    """,
                    (user_id, user_id),
                )
                return cur.fetchall()

    @staticmethod
    def conversation(user_id: int) -> list:
        """Admin view of one user's conversation (broadcasts excluded)."""
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    SELECT {MESSAGE_COLUMNS}
                    FROM chat_messages
                    WHERE user_id = %s OR (sender = 'admin' AND user_id = %s)
                    ORDER BY timestamp ASC
                    """,
                    (user_id, user_id),
                )
                return cur.fetchall()

    @staticmethod
    def create_message(message: str, sender: str, sender_name: Optional[str], user_id: Optional[int]) -> dict:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    INSERT INTO chat_messages (message, sender, sender_name, user_id)
                    VALUES (%s, %s, %s, %s)
                    RETURNING {MESSAGE_COLUMNS}
                    """,
                    (message, sender, sender_name, user_id),
                )
                row = cur.fetchone()
                conn.commit()
                return row
