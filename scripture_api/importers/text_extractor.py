"""Pull verse text out of the shapes a parsed verse node can take."""
from typing import Any, Optional

TEXT_KEYS = ("_", "#text", "text", "content")


def _scalar_text(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value if value.strip() else None
    if isinstance(value, (int, float)):
        return str(value)
    return None


def extract_verse_text(node: Any) -> Optional[str]:
    """Return the verse text, or None when the node has no recoverable text.

    A plain string is returned as is. For a record, the first of ``_``,
    ``#text``, ``text`` and ``content`` holding a non-empty scalar wins.
    """
    if isinstance(node, str):
        return node
    if isinstance(node, dict):
        for key in TEXT_KEYS:
            text = _scalar_text(node.get(key))
            if text is not None:
                return text
    return None
