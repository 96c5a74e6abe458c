"""Database writes used by the offline importers.

The import scripts hold one autocommit connection for their whole run. Each
statement stands alone: a failed write is reported to the caller as
``ImportWriteError`` and nothing earlier is rolled back.
"""
import logging
from collections import defaultdict
from typing import Dict, Optional, Set, Tuple

import psycopg2

from scripture_api.importers.version_detector import VersionInfo

logger = logging.getLogger(__name__)


class ImportWriteError(Exception):
    """A single import write failed; the record is skipped."""


class ImportDatabaseWriter:
    """Writes versions, verses and cross references over a single connection."""

    def __init__(self, conn):
        self.conn = conn
        self.conn.autocommit = True

    def close(self) -> None:
        self.conn.close()

    def get_or_create_version(self, info: VersionInfo) -> int:
        """Return the id of the version row for ``info.code``, creating it if needed."""
        try:
            with self.conn.cursor() as cur:
                cur.execute("SELECT id FROM bible_versions WHERE version_code = %s", (info.code,))
                row = cur.fetchone()
                if row:
                    logger.info("Version %s already exists with id %s", info.code, row["id"])
                    return row["id"]

                cur.execute(
                    """
                    INSERT INTO bible_versions (version_code, version_name, language_code, is_active)
                    VALUES (%s, %s, %s, TRUE)
                    ON CONFLICT (version_code) DO UPDATE SET version_code = EXCLUDED.version_code
                    RETURNING id
                    """,
                    (info.code, info.name, info.language),
                )
                version_id = cur.fetchone()["id"]
                logger.info("Created version %s (%s) with id %s", info.code, info.name, version_id)
                return version_id
        except psycopg2.Error as e:
            logger.error("Failed to get or create version %s: %s", info.code, e)
            raise ImportWriteError(f"Could not resolve version {info.code}") from e

    def upsert_verse(self, book: str, chapter: int, verse_number: int, text: str, version_id: int) -> None:
        """Insert a verse or overwrite the text of the existing row with the same natural key."""
        try:
            with self.conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO bible_verses (book, chapter, verse_number, text, version_id)
                    VALUES (%s, %s, %s, %s, %s)
                    ON CONFLICT (book, chapter, verse_number, version_id)
                    DO UPDATE SET text = EXCLUDED.text
                    """,
                    (book, chapter, verse_number, text, version_id),
                )
        except psycopg2.Error as e:
            logger.error("Failed to upsert %s %s:%s (version %s): %s", book, chapter, verse_number, version_id, e)
            raise ImportWriteError(f"Could not store {book} {chapter}:{verse_number}") from e

    def insert_cross_reference(
        self,
        from_ref: Tuple[str, int, int],
        to_ref: Tuple[str, int, int],
        relation_text: Optional[str] = None,
    ) -> bool:
        """Insert one edge; returns False when the edge already existed."""
        try:
            with self.conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO cross_references
                        (from_book, from_chapter, from_verse, to_book, to_chapter, to_verse, relation_text)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    ON CONFLICT DO NOTHING
                    """,
                    (*from_ref, *to_ref, relation_text),
                )
                return cur.rowcount > 0
        except psycopg2.Error as e:
            logger.error("Failed to insert cross reference %s -> %s: %s", from_ref, to_ref, e)
            raise ImportWriteError("Could not store cross reference") from e

    def verse_statistics(self) -> dict:
        """Totals across all verses plus a per-version verse count."""
        try:
            with self.conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT
                        COUNT(*) AS total_verses,
                        COUNT(DISTINCT book) AS total_books,
                        COUNT(DISTINCT version_id) AS total_versions
                    FROM bible_verses
                    """
                )
                totals = dict(cur.fetchone())
                cur.execute(
                    """
                    SELECT bv.version_code, bv.version_name, bv.language_code, COUNT(v.id) AS verse_count
                    FROM bible_versions bv
                    LEFT JOIN bible_verses v ON bv.id = v.version_id
                    GROUP BY bv.id, bv.version_code, bv.version_name, bv.language_code
                    ORDER BY verse_count DESC
                    """
                )
                totals["versions"] = [dict(row) for row in cur.fetchall()]
                return totals
        except psycopg2.Error as e:
            logger.error("Failed to read verse statistics: %s", e)
            raise ImportWriteError("Could not read verse statistics") from e

    def cross_reference_count(self) -> int:
        try:
            with self.conn.cursor() as cur:
                cur.execute("SELECT COUNT(*) AS total FROM cross_references")
                return cur.fetchone()["total"]
        except psycopg2.Error as e:
            logger.error("Failed to count cross references: %s", e)
            raise ImportWriteError("Could not count cross references") from e


class DryRunWriter:
    """In-memory stand-in for ``ImportDatabaseWriter`` used by ``--dry-run``.

    Rows are keyed exactly like the database constraints, so repeated imports
    behave the same way they would against PostgreSQL.
    """

    def __init__(self):
        self.versions: Dict[str, Tuple[int, VersionInfo]] = {}
        self.verses: Dict[Tuple[str, int, int, int], str] = {}
        self.cross_references: Set[Tuple[str, int, int, str, int, int]] = set()

    def close(self) -> None:
        pass

    def get_or_create_version(self, info: VersionInfo) -> int:
        if info.code not in self.versions:
            self.versions[info.code] = (len(self.versions) + 1, info)
        return self.versions[info.code][0]

    def upsert_verse(self, book: str, chapter: int, verse_number: int, text: str, version_id: int) -> None:
        self.verses[(book, chapter, verse_number, version_id)] = text

    def insert_cross_reference(self, from_ref, to_ref, relation_text=None) -> bool:
        key = (*from_ref, *to_ref)
        if key in self.cross_references:
            return False
        self.cross_references.add(key)
        return True

    def verse_statistics(self) -> dict:
        counts: Dict[int, int] = defaultdict(int)
        for (_, _, _, version_id) in self.verses:
            counts[version_id] += 1
        versions = [
            {
                "version_code": info.code,
                "version_name": info.name,
                "language_code": info.language,
                "verse_count": counts[version_id],
            }
            for version_id, info in self.versions.values()
        ]
        versions.sort(key=lambda row: row["verse_count"], reverse=True)
        return {
            "total_verses": len(self.verses),
            "total_books": len({key[0] for key in self.verses}),
            "total_versions": len(counts),
            "versions": versions,
        }

    def cross_reference_count(self) -> int:
        return len(self.cross_references)
