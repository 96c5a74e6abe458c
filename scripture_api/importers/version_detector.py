"""Work out which translation an imported Bible file holds."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple


@dataclass(frozen=True)
class VersionInfo:
    code: str
    name: str
    language: str


DEFAULT_VERSION = VersionInfo("KJV", "King James Version", "en")

Predicate = Callable[[str, str], bool]


def _language(keyword: str, script: Optional[str] = None) -> Predicate:
    """Keyword in the filename or declared bible name, or text in the language's script."""
    script_pattern = re.compile(script) if script else None

    def predicate(filename: str, bible_name: str) -> bool:
        if keyword in filename.lower() or keyword in bible_name.lower():
            return True
        return bool(script_pattern and script_pattern.search(bible_name))

    return predicate


def _filename(*keywords: str) -> Predicate:
    def predicate(filename: str, bible_name: str) -> bool:
        lowered = filename.lower()
        return any(keyword in lowered for keyword in keywords)

    return predicate


# Ordered: non-Latin languages first, then English translations. First match wins.
# AKJV sits ahead of KJV because "akjv" also contains "kjv".
VERSION_RULES: Sequence[Tuple[Predicate, VersionInfo]] = (
    (_language("telugu", r"[ఀ-౿]"), VersionInfo("TEV", "Telugu Bible", "te")),
    (_language("tamil", r"[஀-௿]"), VersionInfo("TAB", "Tamil Bible", "ta")),
    (_language("malayalam", r"[ഀ-ൿ]"), VersionInfo("MLB", "Malayalam Bible", "ml")),
    (_language("kannada", r"[ಀ-೿]"), VersionInfo("KNB", "Kannada Bible", "kn")),
    (_language("hindi", r"[ऀ-ॿ]"), VersionInfo("HIB", "Hindi Bible", "hi")),
    (_language("bengali"), VersionInfo("BEB", "Bengali Bible", "bn")),
    (_filename("american king james", "akjv"), VersionInfo("AKJV", "American King James Version", "en")),
    (_filename("king james", "kjv"), VersionInfo("KJV", "King James Version", "en")),
    (_filename("new international", "niv"), VersionInfo("NIV", "New International Version", "en")),
    (_filename("new living", "nlt"), VersionInfo("NLT", "New Living Translation", "en")),
    (_filename("english standard", "esv"), VersionInfo("ESV", "English Standard Version", "en")),
    (_filename("amplified"), VersionInfo("AMP", "Amplified Bible", "en")),
    (_filename("apostles"), VersionInfo("ABC", "Apostles' Bible Complete", "en")),
    (_filename("geneva"), VersionInfo("GNV", "Geneva Bible", "en")),
    (_filename("hebrew names"), VersionInfo("HNV", "Hebrew Names Version", "en")),
    (_filename("literal translation"), VersionInfo("LITV", "Literal Translation of Holy Bible", "en")),
)


def detect_version(filename: str, bible_name: Optional[str] = None) -> VersionInfo:
    """Return the version for a source file; unmatched files default to KJV."""
    filename = filename or ""
    bible_name = bible_name if isinstance(bible_name, str) else ""
    for predicate, info in VERSION_RULES:
        if predicate(filename, bible_name):
            return info
    return DEFAULT_VERSION
