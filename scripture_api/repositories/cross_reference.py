"""Read-only access to verse cross references."""
from typing import Any, List, Sequence

from scripture_api.database import get_db_connection


def _edge_query(near: str, far: str, limit: int) -> str:
    """Edges whose ``near`` endpoint matches, joined with the ``far`` verse text."""
    return "\n".join([
        "SELECT",
        f"    cr.{far}_book AS book,",
        f"    cr.{far}_chapter AS chapter,",
        f"    cr.{far}_verse AS verse,",
        "    cr.relation_text,",
        "    v.text AS verse_text,",
        "    v.version_id",
        "FROM cross_references cr",
        "LEFT JOIN bible_verses v ON (",
        f"    v.book = cr.{far}_book",
        f"    AND v.chapter = cr.{far}_chapter",
        f"    AND v.verse_number = cr.{far}_verse",
        "    AND v.version_id = (SELECT id FROM bible_versions WHERE version_code = %s)",
        ")",
        f"WHERE cr.{near}_book = ANY(%s) AND cr.{near}_chapter = %s AND cr.{near}_verse = %s",
        f"ORDER BY cr.{far}_book, cr.{far}_chapter, cr.{far}_verse",
        f"LIMIT {limit}",
    ])


class CrossReferenceRepository:
    """Queries over the directional cross_references edge table."""

    OUTGOING_LIMIT = 20
    INCOMING_LIMIT = 10

    @staticmethod
    def get_outgoing(
        book_variants: Sequence[str], chapter: int, verse: int, version_code: str
    ) -> List[dict[str, Any]]:
        """References from the given verse to other verses."""
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    _edge_query("from", "to", CrossReferenceRepository.OUTGOING_LIMIT),
                    (version_code, list(book_variants), chapter, verse),
                )
                return cur.fetchall()

    @staticmethod
    def get_incoming(
        book_variants: Sequence[str], chapter: int, verse: int, version_code: str
    ) -> List[dict[str, Any]]:
        """References from other verses pointing at the given verse."""
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    _edge_query("to", "from", CrossReferenceRepository.INCOMING_LIMIT),
                    (version_code, list(book_variants), chapter, verse),
                )
                return cur.fetchall()

    @staticmethod
    def get_totals() -> dict[str, Any]:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT
                        COUNT(*) AS total_references,
                        COUNT(DISTINCT CONCAT(from_book, '-', from_chapter, '-', from_verse)) AS unique_source_verses,
                        COUNT(DISTINCT CONCAT(to_book, '-', to_chapter, '-', to_verse)) AS unique_target_verses
                    FROM cross_references
                    """
                )
                return cur.fetchone()

    @staticmethod
    def get_top_source_books(limit: int = 10) -> List[dict[str, Any]]:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT from_book, COUNT(*) AS reference_count
                    FROM cross_references
                    GROUP BY from_book
                    ORDER BY reference_count DESC
                    LIMIT %s
                    """,
                    (limit,),
                )
                return cur.fetchall()
