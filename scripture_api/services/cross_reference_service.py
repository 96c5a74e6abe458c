"""Bidirectional cross reference lookup and statistics."""
import logging
from typing import Optional

import psycopg2

from scripture_api.books import BookNameNormalizer, default_normalizer
from scripture_api.config import get_settings
from scripture_api.repositories.cross_reference import CrossReferenceRepository
from scripture_api.utils.exceptions import DatabaseError, ValidationError

LOGGER = logging.getLogger(__name__)


class CrossReferenceService:
    def __init__(self, normalizer: BookNameNormalizer = default_normalizer):
        self.normalizer = normalizer

    def get_for_verse(self, book: str, chapter: int, verse: int, version_code: Optional[str] = None) -> list[dict]:
        """Outgoing then incoming references, de-duplicated by target verse."""
        if not book or not book.strip():
            raise ValidationError("Book name cannot be empty")

        variants = self.normalizer.aliases_for(book.strip())
        version_code = version_code or get_settings().default_version_code

        try:
            outgoing = CrossReferenceRepository.get_outgoing(variants, chapter, verse, version_code)
            incoming = CrossReferenceRepository.get_incoming(variants, chapter, verse, version_code)
        except psycopg2.Error as exc:
            LOGGER.error("Database error fetching cross references for %s %s:%s: %s", book, chapter, verse, exc)
            raise DatabaseError("Failed to fetch cross-references") from exc

        seen = set()
        references = []
        for row in list(outgoing) + list(incoming):
            key = (row["book"], row["chapter"], row["verse"])
            if key in seen:
                continue
            seen.add(key)
            references.append({
                "book": row["book"],
                "chapter": row["chapter"],
                "verse": row["verse"],
                "reference": f"{row['book']} {row['chapter']}:{row['verse']}",
                "text": row.get("verse_text") or "",
                "relation_text": row.get("relation_text"),
                "version_id": row.get("version_id"),
            })

        LOGGER.info("Found %d cross references for %s %s:%s", len(references), book, chapter, verse)
        return references

    def get_statistics(self) -> dict:
        try:
            totals = CrossReferenceRepository.get_totals()
            top_books = CrossReferenceRepository.get_top_source_books()
        except psycopg2.Error as exc:
            LOGGER.error("Database error fetching cross reference statistics: %s", exc)
            raise DatabaseError("Failed to fetch statistics") from exc

        return {
            "statistics": {
                "total_references": totals["total_references"] if totals else 0,
                "unique_source_verses": totals["unique_source_verses"] if totals else 0,
                "unique_target_verses": totals["unique_target_verses"] if totals else 0,
            },
            "top_books": [dict(row) for row in top_books],
        }


cross_reference_service = CrossReferenceService()


def get_cross_reference_service() -> CrossReferenceService:
    """Dependency injector for the cross reference service."""
    return cross_reference_service
