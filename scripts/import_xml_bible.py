#!/usr/bin/env python3
"""Import Bible translations from a directory of XMLBIBLE files."""
import argparse
import logging
import sys
from pathlib import Path

import psycopg2

# Ensure the backend package is importable when the script is run directly.
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from scripture_api.config import get_settings  # noqa: E402
from scripture_api.database import connect_direct  # noqa: E402
from scripture_api.services.cache_service import CacheService, close_redis, initialize_redis  # noqa: E402
from scripture_api.importers import (  # noqa: E402
    DryRunWriter,
    ImportDatabaseWriter,
    ImportSourceError,
    VerseImporter,
)

LOGGER = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Import Bible verses from XMLBIBLE files")
    parser.add_argument(
        "--xml-dir",
        type=Path,
        default=Path(settings.xml_bible_dir),
        help="Directory containing the translation XML files (default: %(default)s)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse the files without writing to the database",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    args = parse_args(argv)
    settings = get_settings()

    if args.dry_run:
        LOGGER.info("Dry run enabled; skipping database writes")
        writer = DryRunWriter()
    else:
        try:
            writer = ImportDatabaseWriter(connect_direct(autocommit=True))
        except psycopg2.Error as exc:
            LOGGER.error("Could not connect to the database: %s", exc)
            return 1

    LOGGER.info("Starting Bible XML import from %s", args.xml_dir)
    importer = VerseImporter(writer, progress_interval=settings.import_progress_interval)
    try:
        result = importer.import_directory(args.xml_dir)
    except ImportSourceError as exc:
        LOGGER.error("%s", exc)
        return 1
    finally:
        writer.close()

    LOGGER.info(
        "Import complete: %d files, %d verses written, %d skipped, %d failed, %d files skipped",
        result.files_processed,
        result.inserted,
        result.skipped,
        result.failed,
        result.files_skipped,
    )

    if not args.dry_run:
        # API book and version lists are cached; drop them so the new data shows up
        initialize_redis()
        CacheService.invalidate_bible_content()
        close_redis()
    return 0


if __name__ == "__main__":
    sys.exit(main())
