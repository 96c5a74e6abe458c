"""Repository for per-user verse highlights."""
from typing import Any, Optional

from scripture_api.database import get_db_connection

UPDATABLE_FIELDS = ("color_hex", "highlighted_text", "note")


def clean_note(note: Optional[str]) -> Optional[str]:
    """Trim a highlight note; blank notes are stored as NULL."""
    if note is None:
        return None
    trimmed = str(note).strip()
    return trimmed or None


class HighlightsRepository:
    """Highlights are always scoped to the owning user."""

    @staticmethod
    def list_for_user(user_id: int) -> list:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT
                        h.id, h.user_id, h.verse_id, h.color_hex, h.highlighted_text,
                        h.start_offset, h.end_offset, h.note, h.created_at, h.updated_at,
                        v.book, v.chapter, v.verse_number, v.text, v.version_id,
                        bv.version_name, bv.version_code
                    FROM highlights h
                    LEFT JOIN bible_verses v ON h.verse_id = v.id
                    LEFT JOIN bible_versions bv ON v.version_id = bv.id
                    WHERE h.user_id = %s
                    ORDER BY h.created_at DESC
                    """,
                    (user_id,),
                )
                return cur.fetchall()

    @staticmethod
    def verse_exists(verse_id: int) -> bool:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT id FROM bible_verses WHERE id = %s", (verse_id,))
                return cur.fetchone() is not None

    @staticmethod
    def create(
        user_id: int,
        verse_id: int,
        color_hex: str,
        highlighted_text: Optional[str] = None,
        start_offset: Optional[int] = None,
        end_offset: Optional[int] = None,
        note: Optional[str] = None,
    ) -> dict:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO highlights
                        (user_id, verse_id, color_hex, highlighted_text, start_offset, end_offset, note)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    RETURNING id, note
                    """,
                    (
                        user_id,
                        verse_id,
                        color_hex,
                        highlighted_text,
                        start_offset or 0,
                        end_offset or 0,
                        clean_note(note),
                    ),
                )
                row = cur.fetchone()
                conn.commit()
                return row

    @staticmethod
    def update(highlight_id: int, user_id: int, fields: dict[str, Any]) -> bool:
        """Apply a partial update; returns False when nothing owned by the user matched.

        ``fields`` may only contain the keys in UPDATABLE_FIELDS.
        """
        assignments = []
        params: list[Any] = []
        for name in UPDATABLE_FIELDS:
            if name not in fields:
                continue
            value = clean_note(fields[name]) if name == "note" else fields[name]
            assignments.append(f"{name} = %s")
            params.append(value)

        if not assignments:
            raise ValueError("No fields to update")

        assignments.append("updated_at = NOW()")
        params.extend([highlight_id, user_id])

        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"UPDATE highlights SET {', '.join(assignments)} WHERE id = %s AND user_id = %s",
                    tuple(params),
                )
                updated = cur.rowcount > 0
                conn.commit()
                return updated

    @staticmethod
    def delete(highlight_id: int, user_id: int) -> bool:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "DELETE FROM highlights WHERE id = %s AND user_id = %s",
                    (highlight_id, user_id),
                )
                deleted = cur.rowcount > 0
                conn.commit()
                return deleted
