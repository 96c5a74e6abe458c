"""Service for retrieving Bible versions, books and verses from the database."""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import psycopg2

from scripture_api.books import BookNameNormalizer, default_normalizer
from scripture_api.config import get_settings
from scripture_api.database import get_db_connection
from scripture_api.services.cache_service import CacheService
from scripture_api.utils.exceptions import DatabaseError, ValidationError

LOGGER = logging.getLogger(__name__)

SEARCH_LIMIT = 100

VERSE_SELECT = [
    "SELECT v.id, v.book, v.chapter, v.verse_number, v.text, v.version_id,",
    "       bv.version_code, bv.version_name, bv.language_code",
    "FROM bible_verses v",
    "JOIN bible_versions bv ON bv.id = v.version_id",
]

SEARCH_FILTER = [
    "(LOWER(v.text) LIKE %s",
    " OR LOWER(v.book) LIKE %s",
    " OR v.chapter::text LIKE %s",
    " OR v.verse_number::text LIKE %s)",
]


class BibleService:
    """Encapsulates verse retrieval across versions.

    Book parameters are normalised and matched against every stored alias of
    the book, so rows imported under a short form are still found.
    """

    def __init__(self, normalizer: BookNameNormalizer = default_normalizer):
        self.normalizer = normalizer

    def _book_variants(self, book: str) -> List[str]:
        if not book or not book.strip():
            raise ValidationError("Book name cannot be empty")
        return list(self.normalizer.aliases_for(book.strip()))

    @staticmethod
    def _fetch_all(sql: str, params: tuple, failure: str) -> list:
        try:
            with get_db_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, params)
                    return cur.fetchall()
        except psycopg2.Error as exc:
            LOGGER.error("%s: %s", failure, exc)
            raise DatabaseError(failure) from exc

    def list_versions(self, language_code: Optional[str] = None) -> list[dict]:
        """Active versions that have at least one verse, with verse counts."""
        cached = CacheService.get_versions(language_code)
        if cached is not None:
            return cached

        query = [
            "SELECT bv.id, bv.version_code, bv.version_name, bv.language_code,",
            "       bv.description, bv.is_active, COUNT(v.id) AS verse_count",
            "FROM bible_versions bv",
            "LEFT JOIN bible_verses v ON v.version_id = bv.id",
            "WHERE bv.is_active = TRUE",
        ]
        params: list = []
        if language_code:
            query.append("AND bv.language_code = %s")
            params.append(language_code)
        query.extend([
            "GROUP BY bv.id, bv.version_code, bv.version_name, bv.language_code, bv.description, bv.is_active",
            "HAVING COUNT(v.id) > 0",
            "ORDER BY bv.language_code, bv.version_name",
        ])

        rows = self._fetch_all("\n".join(query), tuple(params), "Failed to fetch Bible versions")
        versions = [dict(row) for row in rows]
        CacheService.set_versions(language_code, versions)
        return versions

    def list_books(self) -> list[dict]:
        """Every book present in the dataset, in canonical order."""
        cached = CacheService.get_books()
        if cached is not None:
            return cached

        rows = self._fetch_all("SELECT DISTINCT book FROM bible_verses", (), "Failed to fetch books")
        books = [{"book": name} for name in sorted((row["book"] for row in rows), key=self.normalizer.sort_key)]
        CacheService.set_books(books)
        return books

    def list_chapters(self, book: str) -> list[dict]:
        rows = self._fetch_all(
            "SELECT DISTINCT chapter FROM bible_verses WHERE book = ANY(%s) ORDER BY chapter",
            (self._book_variants(book),),
            "Failed to fetch chapters",
        )
        return [{"chapter": row["chapter"]} for row in rows]

    def version_books(self, version_code: str) -> list[str]:
        rows = self._fetch_all(
            "\n".join([
                "SELECT DISTINCT v.book",
                "FROM bible_verses v",
                "JOIN bible_versions bv ON bv.id = v.version_id",
                "WHERE bv.version_code = %s",
            ]),
            (version_code,),
            "Failed to fetch books",
        )
        return sorted((row["book"] for row in rows), key=self.normalizer.sort_key)

    def version_chapters(self, version_code: str, book: str) -> list[int]:
        rows = self._fetch_all(
            "\n".join([
                "SELECT DISTINCT v.chapter",
                "FROM bible_verses v",
                "JOIN bible_versions bv ON bv.id = v.version_id",
                "WHERE v.book = ANY(%s) AND bv.version_code = %s",
                "ORDER BY v.chapter",
            ]),
            (self._book_variants(book), version_code),
            "Failed to fetch chapters",
        )
        return [row["chapter"] for row in rows]

    def version_verses(self, version_code: str, book: str, chapter: int) -> list[dict]:
        query = VERSE_SELECT + [
            "WHERE v.book = ANY(%s) AND v.chapter = %s AND bv.version_code = %s",
            "ORDER BY v.verse_number",
        ]
        return self._fetch_all(
            "\n".join(query),
            (self._book_variants(book), chapter, version_code),
            "Failed to fetch verses",
        )

    def parallel_verses(self, book: str, chapter: int, version_codes: List[str]) -> dict:
        """Verses of one chapter grouped by verse number, then by version code."""
        codes = [code.strip() for code in version_codes if code and code.strip()]
        if not codes:
            raise ValidationError("Version codes are required")

        rows = self._fetch_all(
            "\n".join([
                "SELECT v.verse_number, v.text, bv.version_code, bv.version_name, bv.language_code",
                "FROM bible_verses v",
                "JOIN bible_versions bv ON bv.id = v.version_id",
                "WHERE v.book = ANY(%s) AND v.chapter = %s AND bv.version_code = ANY(%s)",
                "ORDER BY v.verse_number, bv.version_code",
            ]),
            (self._book_variants(book), chapter, codes),
            "Failed to fetch parallel verses",
        )

        grouped: dict[int, dict] = {}
        for row in rows:
            grouped.setdefault(row["verse_number"], {})[row["version_code"]] = {
                "text": row["text"],
                "version_name": row["version_name"],
                "language_code": row["language_code"],
            }
        return grouped

    def chapter_verses(self, book: str, chapter: int, version_code: str) -> Tuple[list[dict], bool]:
        """Return (verses, fell_back); falls back to the default version when empty."""
        variants = self._book_variants(book)
        query = "\n".join(VERSE_SELECT + [
            "WHERE v.book = ANY(%s) AND v.chapter = %s AND bv.version_code = %s",
            "ORDER BY v.verse_number",
        ])

        rows = self._fetch_all(query, (variants, chapter, version_code), "Failed to fetch verses")
        default_code = get_settings().default_version_code
        if rows or version_code == default_code:
            return rows, False

        LOGGER.info("No %s verses for %s %s, using %s", version_code, book, chapter, default_code)
        rows = self._fetch_all(query, (variants, chapter, default_code), "Failed to fetch verses")
        return rows, bool(rows)

    def verse_of_day(self, version_code: str) -> Tuple[Optional[dict], bool]:
        """Random verse of the requested version, else of any version."""
        base = VERSE_SELECT + ["WHERE bv.version_code = %s", "ORDER BY RANDOM()", "LIMIT 1"]
        rows = self._fetch_all("\n".join(base), (version_code,), "Failed to fetch verse of day")
        if rows:
            return rows[0], False

        fallback = VERSE_SELECT + ["ORDER BY RANDOM()", "LIMIT 1"]
        rows = self._fetch_all("\n".join(fallback), (), "Failed to fetch verse of day")
        if rows:
            LOGGER.info("No verses for version %s, returning a verse from another version", version_code)
            return rows[0], True
        return None, False

    def search(self, query_text: str, version_code: str) -> Tuple[list[dict], bool]:
        """Substring search over text, book and numbers; falls back to all versions."""
        if not query_text or not query_text.strip():
            return [], False

        term = f"%{query_text.strip().lower()}%"
        terms = (term, term, term, term)
        order = ["ORDER BY v.book, v.chapter, v.verse_number", f"LIMIT {SEARCH_LIMIT}"]

        scoped = VERSE_SELECT + ["WHERE"] + SEARCH_FILTER + ["AND bv.version_code = %s"] + order
        rows = self._fetch_all("\n".join(scoped), terms + (version_code,), "Failed to search verses")
        if rows:
            return rows, False

        unscoped = VERSE_SELECT + ["WHERE"] + SEARCH_FILTER + order
        rows = self._fetch_all("\n".join(unscoped), terms, "Failed to search verses")
        return rows, bool(rows)


bible_service = BibleService()


def get_bible_service() -> BibleService:
    """Dependency injector for Bible service."""
    return bible_service
