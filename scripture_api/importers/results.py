"""Counters reported by the import pipelines."""
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ImportResult:
    inserted: int = 0
    skipped: int = 0
    failed: int = 0
    files_processed: int = 0
    files_skipped: int = 0
    statistics: Optional[dict] = field(default=None, compare=False)

    def merge(self, other: "ImportResult") -> "ImportResult":
        self.inserted += other.inserted
        self.skipped += other.skipped
        self.failed += other.failed
        self.files_processed += other.files_processed
        self.files_skipped += other.files_skipped
        return self
