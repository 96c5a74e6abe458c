"""Import Zefania-style ``XMLBIBLE`` files into the verse table."""
import logging
import re
from pathlib import Path
from typing import Any, Optional, Union

from scripture_api.books import CANONICAL_BOOK_NAMES, BookNameNormalizer, default_normalizer
from scripture_api.importers.database import ImportWriteError
from scripture_api.importers.results import ImportResult
from scripture_api.importers.sources import list_xml_files
from scripture_api.importers.text_extractor import extract_verse_text
from scripture_api.importers.version_detector import detect_version
from scripture_api.importers.xml_parser import XMLParseError, as_list, parse_xml_file

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL = 1000
_LEADING_NUMBER = re.compile(r"\s*(\d+)")


def parse_position(value: Any, fallback: int) -> int:
    """Read a chapter/verse number attribute, falling back to the element's position."""
    if value is None:
        return fallback
    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return fallback
    number = int(match.group(1))
    return number if number > 0 else fallback


def resolve_book_name(book: dict, normalizer: BookNameNormalizer) -> str:
    """Canonical book name from ``bname``, else from the 1-based ``bnumber``."""
    bname = book.get("bname")
    if isinstance(bname, str) and bname.strip():
        return normalizer.normalize(bname.strip())

    bnumber = book.get("bnumber")
    if bnumber is not None:
        number = parse_position(bnumber, 0)
        if 1 <= number <= len(CANONICAL_BOOK_NAMES):
            return CANONICAL_BOOK_NAMES[number - 1]
        return str(bnumber).strip() or "Unknown"
    return "Unknown"


class VerseImporter:
    """Walks parsed Bible documents and upserts every verse through ``writer``."""

    def __init__(
        self,
        writer,
        normalizer: BookNameNormalizer = default_normalizer,
        progress_interval: int = PROGRESS_INTERVAL,
    ):
        self.writer = writer
        self.normalizer = normalizer
        self.progress_interval = progress_interval

    def import_document(self, document: dict, filename: str) -> ImportResult:
        result = ImportResult()
        bible = document.get("XMLBIBLE")
        if not isinstance(bible, dict) or not bible.get("BIBLEBOOK"):
            logger.warning("No BIBLEBOOK data found in %s", filename)
            return result

        bible_name = bible.get("biblename") if isinstance(bible.get("biblename"), str) else filename
        info = detect_version(filename, bible_name)
        logger.info("Detected version %s (%s), language %s for %s", info.code, info.name, info.language, filename)
        version_id = self.writer.get_or_create_version(info)

        for book in as_list(bible.get("BIBLEBOOK")):
            if not isinstance(book, dict):
                logger.warning("Skipping malformed BIBLEBOOK entry in %s", filename)
                result.skipped += 1
                continue
            self._import_book(book, version_id, result)
        return result

    def _import_book(self, book: dict, version_id: int, result: ImportResult) -> None:
        book_name = resolve_book_name(book, self.normalizer)
        chapters = as_list(book.get("CHAPTER"))
        if not chapters:
            logger.info("No chapters found for book %s", book_name)
            return
        logger.info("Processing book %s", book_name)

        for chapter_index, chapter in enumerate(chapters):
            if not isinstance(chapter, dict):
                logger.warning("Skipping malformed chapter %d of %s", chapter_index + 1, book_name)
                result.skipped += 1
                continue
            chapter_number = parse_position(chapter.get("cnumber"), chapter_index + 1)
            verses = as_list(chapter.get("VERS"))
            if not verses:
                logger.info("No verses found in chapter %d of %s", chapter_number, book_name)
                continue

            for verse_index, node in enumerate(verses):
                verse_number = verse_index + 1
                if isinstance(node, dict):
                    verse_number = parse_position(node.get("vnumber"), verse_index + 1)
                self._import_verse(node, book_name, chapter_number, verse_number, version_id, result)

    def _import_verse(
        self,
        node: Any,
        book_name: str,
        chapter_number: int,
        verse_number: int,
        version_id: int,
        result: ImportResult,
    ) -> None:
        raw_text = extract_verse_text(node)
        if raw_text is None:
            logger.warning(
                "Unrecognised verse content for %s %d:%d, skipping", book_name, chapter_number, verse_number
            )
            result.skipped += 1
            return

        text = raw_text.strip()
        if not text:
            result.skipped += 1
            return

        try:
            self.writer.upsert_verse(book_name, chapter_number, verse_number, text, version_id)
        except ImportWriteError:
            result.failed += 1
            return

        result.inserted += 1
        if self.progress_interval and result.inserted % self.progress_interval == 0:
            logger.info("Inserted %d verses...", result.inserted)

    def import_file(self, path: Union[str, Path]) -> ImportResult:
        """Import one file; parse or version failures skip the whole file."""
        path = Path(path)
        logger.info("Processing %s...", path.name)
        try:
            document = parse_xml_file(path)
            result = self.import_document(document, path.name)
        except (XMLParseError, ImportWriteError) as e:
            logger.error("Skipping %s: %s", path.name, e)
            return ImportResult(files_skipped=1)

        result.files_processed = 1
        logger.info(
            "Processed %s - %d verses (%d skipped, %d failed)",
            path.name,
            result.inserted,
            result.skipped,
            result.failed,
        )
        return result

    def import_directory(self, directory: Union[str, Path]) -> ImportResult:
        """Import every XML file in ``directory`` in name order.

        Raises:
            ImportSourceError: if the directory is missing or empty of XML files
        """
        files = list_xml_files(directory)
        total = ImportResult()
        for path in files:
            total.merge(self.import_file(path))

        try:
            total.statistics = self.writer.verse_statistics()
        except ImportWriteError as e:
            logger.warning("Import finished but statistics are unavailable: %s", e)
            return total

        log_verse_statistics(total.statistics)
        return total


def log_verse_statistics(statistics: Optional[dict]) -> None:
    if not statistics:
        return
    logger.info("Version statistics:")
    for row in statistics.get("versions", []):
        logger.info(
            "  %s (%s) [%s]: %s verses",
            row["version_code"],
            row["version_name"],
            row["language_code"],
            row["verse_count"],
        )
    logger.info("Total verses: %s", statistics.get("total_verses"))
    logger.info("Total books: %s", statistics.get("total_books"))
    logger.info("Total versions: %s", statistics.get("total_versions"))
