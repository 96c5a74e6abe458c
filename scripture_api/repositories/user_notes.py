"""Repository for storing and retrieving user-authored study notes."""
import json
from typing import List, Optional

from scripture_api.database import get_db_connection

NOTE_COLUMNS = "id, title, content, verse_reference, tags, created_at, updated_at"


def _decode_tags(note: Optional[dict]) -> Optional[dict]:
    if note is None:
        return None
    tags = note.get("tags")
    if isinstance(tags, str):
        tags = json.loads(tags)
    note["tags"] = tags or []
    return note


class UserNotesRepository:
    """Repository for storing and retrieving user-authored study notes."""

    @staticmethod
    def list_notes(user_id: int) -> list:
        """Return a user's notes, most recently edited first."""
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"SELECT {NOTE_COLUMNS} FROM user_notes WHERE user_id = %s ORDER BY updated_at DESC",
                    (user_id,),
                )
                return [_decode_tags(row) for row in cur.fetchall()]

    @staticmethod
    def create_note(
        user_id: int,
        title: str,
        content: str,
        verse_reference: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> dict:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    INSERT INTO user_notes (user_id, title, content, verse_reference, tags)
                    VALUES (%s, %s, %s, %s, %s::jsonb)
                    RETURNING {NOTE_COLUMNS}
                    """,
                    (user_id, title, content, verse_reference or None, json.dumps(tags or [])),
                )
                note = cur.fetchone()
                conn.commit()
                return _decode_tags(note)

    @staticmethod
    def update_note(
        note_id: int,
        user_id: int,
        title: str,
        content: str,
        verse_reference: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> Optional[dict]:
        """Replace a note's fields; None when the note is missing or owned by someone else."""
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    UPDATE user_notes
                    SET title = %s, content = %s, verse_reference = %s, tags = %s::jsonb, updated_at = NOW()
                    WHERE id = %s AND user_id = %s
                    RETURNING {NOTE_COLUMNS}
                    """,
                    (title, content, verse_reference or None, json.dumps(tags or []), note_id, user_id),
                )
                note = cur.fetchone()
                conn.commit()
                return _decode_tags(note)

    @staticmethod
    def delete_note(note_id: int, user_id: int) -> bool:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM user_notes WHERE id = %s AND user_id = %s", (note_id, user_id))
                deleted = cur.rowcount > 0
                conn.commit()
                return deleted
