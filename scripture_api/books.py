"""Canonical Bible book names and the short-form alias table."""
from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

CANONICAL_BOOK_NAMES = (
    "Genesis",
    "Exodus",
    "Leviticus",
    "Numbers",
    "Deuteronomy",
    "Joshua",
    "Judges",
    "Ruth",
    "1 Samuel",
    "2 Samuel",
    "1 Kings",
    "2 Kings",
    "1 Chronicles",
    "2 Chronicles",
    "Ezra",
    "Nehemiah",
    "Esther",
    "Job",
    "Psalms",
    "Proverbs",
    "Ecclesiastes",
    "Song of Solomon",
    "Isaiah",
    "Jeremiah",
    "Lamentations",
    "Ezekiel",
    "Daniel",
    "Hosea",
    "Joel",
    "Amos",
    "Obadiah",
    "Jonah",
    "Micah",
    "Nahum",
    "Habakkuk",
    "Zephaniah",
    "Haggai",
    "Zechariah",
    "Malachi",
    "Matthew",
    "Mark",
    "Luke",
    "John",
    "Acts",
    "Romans",
    "1 Corinthians",
    "2 Corinthians",
    "Galatians",
    "Ephesians",
    "Philippians",
    "Colossians",
    "1 Thessalonians",
    "2 Thessalonians",
    "1 Timothy",
    "2 Timothy",
    "Titus",
    "Philemon",
    "Hebrews",
    "James",
    "1 Peter",
    "2 Peter",
    "1 John",
    "2 John",
    "3 John",
    "Jude",
    "Revelation",
)

# Short forms found in cross-reference sources (OSIS style ids and common abbreviations)
BOOK_ALIASES = {
    # Old Testament
    "Gen": "Genesis",
    "Exod": "Exodus",
    "Exo": "Exodus",
    "Lev": "Leviticus",
    "Num": "Numbers",
    "Deut": "Deuteronomy",
    "Deu": "Deuteronomy",
    "Josh": "Joshua",
    "Jos": "Joshua",
    "Judg": "Judges",
    "Jdg": "Judges",
    "1Sam": "1 Samuel",
    "1Sa": "1 Samuel",
    "2Sam": "2 Samuel",
    "2Sa": "2 Samuel",
    "1Kgs": "1 Kings",
    "1Ki": "1 Kings",
    "2Kgs": "2 Kings",
    "2Ki": "2 Kings",
    "1Chr": "1 Chronicles",
    "1Ch": "1 Chronicles",
    "2Chr": "2 Chronicles",
    "2Ch": "2 Chronicles",
    "Ezr": "Ezra",
    "Neh": "Nehemiah",
    "Esth": "Esther",
    "Est": "Esther",
    "Ps": "Psalms",
    "Psa": "Psalms",
    "Psalm": "Psalms",
    "Prov": "Proverbs",
    "Pro": "Proverbs",
    "Eccl": "Ecclesiastes",
    "Ecc": "Ecclesiastes",
    "Song": "Song of Solomon",
    "Sol": "Song of Solomon",
    "Song of Songs": "Song of Solomon",
    "Isa": "Isaiah",
    "Jer": "Jeremiah",
    "Lam": "Lamentations",
    "Ezek": "Ezekiel",
    "Eze": "Ezekiel",
    "Dan": "Daniel",
    "Hos": "Hosea",
    "Obad": "Obadiah",
    "Oba": "Obadiah",
    "Jon": "Jonah",
    "Mic": "Micah",
    "Nah": "Nahum",
    "Hab": "Habakkuk",
    "Zeph": "Zephaniah",
    "Zep": "Zephaniah",
    "Hag": "Haggai",
    "Zech": "Zechariah",
    "Zec": "Zechariah",
    "Mal": "Malachi",
    # New Testament
    "Matt": "Matthew",
    "Mat": "Matthew",
    "Mar": "Mark",
    "Luk": "Luke",
    "Joh": "John",
    "Jn": "John",
    "Act": "Acts",
    "Rom": "Romans",
    "1Cor": "1 Corinthians",
    "1Co": "1 Corinthians",
    "2Cor": "2 Corinthians",
    "2Co": "2 Corinthians",
    "Gal": "Galatians",
    "Eph": "Ephesians",
    "Phil": "Philippians",
    "Phi": "Philippians",
    "Col": "Colossians",
    "1Thess": "1 Thessalonians",
    "1Th": "1 Thessalonians",
    "2Thess": "2 Thessalonians",
    "2Th": "2 Thessalonians",
    "1Tim": "1 Timothy",
    "1Ti": "1 Timothy",
    "2Tim": "2 Timothy",
    "2Ti": "2 Timothy",
    "Tit": "Titus",
    "Phlm": "Philemon",
    "Phm": "Philemon",
    "Heb": "Hebrews",
    "Jas": "James",
    "Jam": "James",
    "1Pet": "1 Peter",
    "1Pe": "1 Peter",
    "2Pet": "2 Peter",
    "2Pe": "2 Peter",
    "1John": "1 John",
    "1Jn": "1 John",
    "2John": "2 John",
    "2Jn": "2 John",
    "3John": "3 John",
    "3Jn": "3 John",
    "Rev": "Revelation",
    "Revelations": "Revelation",
}

ROMAN_NUMERALS = {"1": "I", "2": "II", "3": "III"}

# I Samuel, II Kings, III John
BOOK_ALIASES.update({
    f"{ROMAN_NUMERALS[name[0]]} {name[2:]}": name
    for name in CANONICAL_BOOK_NAMES
    if name[0] in ROMAN_NUMERALS
})


class BookNameNormalizer:
    """Read-only lookup between book aliases and canonical book names.

    Build one instance at process start and hand it to whatever needs
    lookups; the tables are frozen after construction.
    """

    def __init__(
        self,
        aliases: Mapping[str, str] = BOOK_ALIASES,
        canonical_names: Iterable[str] = CANONICAL_BOOK_NAMES,
    ):
        canonical = tuple(canonical_names)
        exact = {name: name for name in canonical}
        exact.update(aliases)

        folded = {key.lower(): value for key, value in exact.items()}

        reverse: dict[str, list[str]] = {name: [name] for name in canonical}
        for short_name, full_name in aliases.items():
            variations = reverse.setdefault(full_name, [full_name])
            if short_name not in variations:
                variations.append(short_name)

        self._exact = MappingProxyType(exact)
        self._folded = MappingProxyType(folded)
        self._reverse = MappingProxyType({key: tuple(value) for key, value in reverse.items()})
        self._order = MappingProxyType({name: index for index, name in enumerate(canonical)})
        self.canonical_names: Tuple[str, ...] = canonical

    def lookup(self, token: str) -> Optional[str]:
        """Return the canonical name for ``token`` or None when it is unknown."""
        if not isinstance(token, str):
            return None
        key = token.strip()
        if not key:
            return None
        return self._exact.get(key) or self._folded.get(key.lower())

    def normalize(self, token: str) -> str:
        """Map a raw book token to its canonical name, or return it unchanged."""
        canonical = self.lookup(token)
        return canonical if canonical is not None else token

    def aliases_for(self, name: str) -> Tuple[str, ...]:
        """Every stored form of a book: the canonical name first, then its aliases."""
        canonical = self.normalize(name)
        variations = list(self._reverse.get(canonical, (canonical,)))
        if name not in variations:
            variations.append(name)
        return tuple(variations)

    def is_canonical(self, name: str) -> bool:
        return name in self._order

    def sort_key(self, name: str) -> Tuple[int, str]:
        """Canonical book order; unknown books sort after Revelation by name."""
        return (self._order.get(self.normalize(name), len(self._order)), name)


default_normalizer = BookNameNormalizer()


def get_book_normalizer() -> BookNameNormalizer:
    """Dependency injector for the process-wide book normalizer."""
    return default_normalizer
