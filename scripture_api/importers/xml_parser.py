"""Turn XML documents into plain nested dict records.

Attributes are merged into the element's record, a child tag that occurs
once becomes a scalar value and a repeated one becomes a list. Elements that
hold nothing but text collapse to that string; text inside an element that
also carries attributes or children is kept under the ``"_"`` key.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Union

from lxml import etree

TEXT_KEY = "_"

# Annotation children whose text is not part of the running text
NOTE_TAGS = frozenset({"NOTE", "XREF"})


class XMLParseError(Exception):
    """Raised when a document is not well-formed XML."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


def _parser() -> etree.XMLParser:
    return etree.XMLParser(remove_comments=True, remove_pis=True, resolve_entities=False, huge_tree=True)


def _local_name(name: str) -> str:
    return etree.QName(name).localname


def _add_value(record: dict, key: str, value: Any) -> None:
    if key not in record:
        record[key] = value
    elif isinstance(record[key], list):
        record[key].append(value)
    else:
        record[key] = [record[key], value]


def _running_text(element) -> str:
    """Text of ``element`` and its inline children, leaving out footnotes and cross references."""
    parts = [element.text or ""]
    for child in element:
        if isinstance(child.tag, str) and _local_name(child.tag).upper() not in NOTE_TAGS:
            parts.append(_running_text(child))
        parts.append(child.tail or "")
    return "".join(parts)


def _element_to_record(element) -> Union[str, dict]:
    children = [child for child in element if isinstance(child.tag, str)]
    attributes = {_local_name(key): value for key, value in element.attrib.items()}

    if not children and not attributes:
        return element.text or ""

    record: dict[str, Any] = {}
    for key, value in attributes.items():
        _add_value(record, key, value)

    direct_text = (element.text or "") + "".join(child.tail or "" for child in children)
    if direct_text.strip():
        # Mixed content keeps inline markup text (e.g. styled words inside a verse).
        record[TEXT_KEY] = _running_text(element)

    for child in children:
        _add_value(record, _local_name(child.tag), _element_to_record(child))
    return record


def parse_xml(content: Union[str, bytes], source: str | None = None) -> dict:
    """Parse an XML string into ``{root_tag: record}``."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    try:
        root = etree.fromstring(content, parser=_parser())
    except etree.XMLSyntaxError as exc:
        raise XMLParseError(f"Malformed XML: {exc}", source=source) from exc
    if root is None:
        raise XMLParseError("Empty XML document", source=source)
    return {_local_name(root.tag): _element_to_record(root)}


def parse_xml_file(path: Union[str, Path]) -> dict:
    """Parse an XML file from disk, honouring its declared encoding."""
    try:
        tree = etree.parse(str(path), parser=_parser())
    except etree.XMLSyntaxError as exc:
        raise XMLParseError(f"Malformed XML in {path}: {exc}", source=str(path)) from exc
    except OSError as exc:
        raise XMLParseError(f"Could not read {path}: {exc}", source=str(path)) from exc
    root = tree.getroot()
    return {_local_name(root.tag): _element_to_record(root)}


def as_list(value: Any) -> list:
    """Normalise a scalar-or-list record value; ``None`` becomes an empty list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]
