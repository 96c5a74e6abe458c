"""Import ``crossReferences`` XML files into the cross_references table."""
import logging
import re
from pathlib import Path
from typing import Any, NamedTuple, Optional, Union

from scripture_api.books import BookNameNormalizer, default_normalizer
from scripture_api.importers.database import ImportWriteError
from scripture_api.importers.results import ImportResult
from scripture_api.importers.sources import list_xml_files
from scripture_api.importers.xml_parser import XMLParseError, as_list, parse_xml_file

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL = 100


class ParsedReference(NamedTuple):
    book: str
    chapter: int
    verse: int


# Tried in order; the first pattern that matches wins.
REFERENCE_PATTERNS = (
    # Gen.1.1, Ps.104.30, 1John.3.16
    re.compile(r"^([1-3]?[A-Za-z]+)\.(\d+)\.(\d+)$"),
    # John 3:16, 1 John 3:16, Song of Solomon 2:1
    re.compile(r"^([1-3]?\s*[A-Za-z]+(?:\s+[A-Za-z]+)*)\s+(\d+):(\d+)$"),
    # Jn3:16
    re.compile(r"^([1-3]?[A-Za-z]+)\s*(\d+):(\d+)$"),
)


def parse_reference(text: Any) -> Optional[ParsedReference]:
    """Split a reference string into book, chapter and verse, or None if unrecognised."""
    if not isinstance(text, str):
        return None
    candidate = text.strip()
    for pattern in REFERENCE_PATTERNS:
        match = pattern.match(candidate)
        if match:
            return ParsedReference(match.group(1).strip(), int(match.group(2)), int(match.group(3)))
    return None


def reference_text(ref: Any) -> Optional[str]:
    if isinstance(ref, str):
        return ref
    if isinstance(ref, dict):
        for key in ("_", "$t", "#text"):
            value = ref.get(key)
            if isinstance(value, str) and value.strip():
                return value
    return None


class CrossReferenceImporter:
    """Inserts every source/target pair found under ``crossReferences/verse``."""

    def __init__(
        self,
        writer,
        normalizer: BookNameNormalizer = default_normalizer,
        progress_interval: int = PROGRESS_INTERVAL,
    ):
        self.writer = writer
        self.normalizer = normalizer
        self.progress_interval = progress_interval

    def _canonical(self, ref: ParsedReference) -> tuple:
        return (self.normalizer.normalize(ref.book), ref.chapter, ref.verse)

    def import_document(self, document: dict) -> ImportResult:
        result = ImportResult()
        root = document.get("crossReferences")
        if not isinstance(root, dict):
            logger.warning("No crossReferences root element found")
            return result

        entries = as_list(root.get("verse"))
        if not entries:
            logger.warning("No verse elements found")
            return result
        logger.info("Processing %d verses...", len(entries))

        for entry in entries:
            source_id = entry.get("id") if isinstance(entry, dict) else None
            if not source_id:
                logger.warning("Skipping verse entry without an id")
                result.skipped += 1
                continue

            source = parse_reference(source_id)
            if source is None:
                logger.warning("Could not parse source verse %r", source_id)
                result.skipped += 1
                continue

            refs = as_list(entry.get("ref"))
            if not refs:
                logger.debug("No refs found for %s", source_id)
                continue

            for ref in refs:
                self._import_ref(source, source_id, ref, result)
        return result

    def _import_ref(self, source: ParsedReference, source_id: str, ref: Any, result: ImportResult) -> None:
        text = reference_text(ref)
        target = parse_reference(text) if text is not None else None
        if target is None:
            logger.warning("Could not parse target reference %r for %s", ref, source_id)
            result.skipped += 1
            return

        try:
            inserted = self.writer.insert_cross_reference(self._canonical(source), self._canonical(target))
        except ImportWriteError:
            result.failed += 1
            return

        if not inserted:
            result.skipped += 1
            return

        result.inserted += 1
        if self.progress_interval and result.inserted % self.progress_interval == 0:
            logger.info("Inserted %d cross-references so far...", result.inserted)

    def import_file(self, path: Union[str, Path]) -> ImportResult:
        path = Path(path)
        logger.info("Processing %s...", path.name)
        try:
            document = parse_xml_file(path)
        except XMLParseError as e:
            logger.error("Skipping %s: %s", path.name, e)
            return ImportResult(files_skipped=1)

        result = self.import_document(document)
        result.files_processed = 1
        logger.info("Processed %s - %d cross-references inserted", path.name, result.inserted)
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
            stored = self.writer.cross_reference_count()
        except ImportWriteError as e:
            logger.warning("Import finished but the stored total is unavailable: %s", e)
        else:
            total.statistics = {"total_cross_references": stored, "inserted": total.inserted}
            logger.info("Total cross-references in database: %d", stored)

        logger.info("New cross-references inserted: %d", total.inserted)
        if total.inserted == 0:
            logger.warning("No cross-references were inserted; check the log above for skipped entries")
        return total
