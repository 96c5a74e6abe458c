"""Offline importers for Bible text and cross-reference XML files."""
from scripture_api.importers.cross_reference_importer import (
    CrossReferenceImporter,
    ParsedReference,
    parse_reference,
)
from scripture_api.importers.database import DryRunWriter, ImportDatabaseWriter, ImportWriteError
from scripture_api.importers.results import ImportResult
from scripture_api.importers.sources import ImportSourceError, list_xml_files
from scripture_api.importers.text_extractor import extract_verse_text
from scripture_api.importers.verse_importer import VerseImporter
from scripture_api.importers.version_detector import VersionInfo, detect_version
from scripture_api.importers.xml_parser import XMLParseError, as_list, parse_xml, parse_xml_file

__all__ = [
    "CrossReferenceImporter",
    "DryRunWriter",
    "ImportDatabaseWriter",
    "ImportResult",
    "ImportSourceError",
    "ImportWriteError",
    "ParsedReference",
    "VerseImporter",
    "VersionInfo",
    "XMLParseError",
    "as_list",
    "detect_version",
    "extract_verse_text",
    "list_xml_files",
    "parse_reference",
    "parse_xml",
    "parse_xml_file",
]
