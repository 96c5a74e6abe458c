"""Tests for the XML to record parser."""
import pytest

from scripture_api.importers.xml_parser import XMLParseError, as_list, parse_xml, parse_xml_file

pytestmark = pytest.mark.importer


class TestParseXml:

    def test_repeated_children_become_list(self):
        result = parse_xml('<root x="1"><item>a</item><item>b</item><single>c</single></root>')

        assert result == {"root": {"x": "1", "item": ["a", "b"], "single": "c"}}

    def test_text_only_element_collapses_to_string(self):
        assert parse_xml("<VERS>In the beginning</VERS>") == {"VERS": "In the beginning"}

    def test_empty_element_is_empty_string(self):
        assert parse_xml("<root><empty/></root>") == {"root": {"empty": ""}}

    def test_text_with_attributes_kept_under_underscore(self):
        result = parse_xml('<VERS vnumber="1">In the beginning</VERS>')

        assert result == {"VERS": {"vnumber": "1", "_": "In the beginning"}}

    def test_mixed_content_keeps_inline_text(self):
        result = parse_xml('<VERS vnumber="1">In the <STYLE>beginning</STYLE> God</VERS>')

        record = result["VERS"]
        assert record["_"] == "In the beginning God"
        assert record["STYLE"] == "beginning"

    def test_mixed_content_leaves_out_footnotes(self):
        result = parse_xml(
            '<VERS vnumber="1">In the beginning God created the <STYLE>heaven</STYLE>'
            ' and the earth.<NOTE>Or, the heavens</NOTE></VERS>'
        )

        record = result["VERS"]
        assert record["_"] == "In the beginning God created the heaven and the earth."
        assert record["NOTE"] == "Or, the heavens"

    def test_mixed_content_keeps_text_after_cross_reference(self):
        result = parse_xml('<VERS vnumber="3">Let there be light<XREF mscope="2;1;1"/>: and there was light.</VERS>')

        assert result["VERS"]["_"] == "Let there be light: and there was light."

    def test_nested_inline_markup_text_is_kept(self):
        result = parse_xml('<VERS vnumber="1">For <STYLE>God <gr str="2316">so</gr></STYLE> loved</VERS>')

        assert result["VERS"]["_"] == "For God so loved"

    def test_attributes_only_element_has_no_text_key(self):
        result = parse_xml('<VERS vnumber="2"/>')

        assert result == {"VERS": {"vnumber": "2"}}

    def test_whitespace_between_children_is_ignored(self):
        result = parse_xml("<root>\n  <a>1</a>\n  <b>2</b>\n</root>")

        assert result == {"root": {"a": "1", "b": "2"}}

    def test_comments_are_dropped(self):
        result = parse_xml("<root><!-- note --><a>1</a></root>")

        assert result == {"root": {"a": "1"}}

    def test_accepts_bytes(self):
        assert parse_xml(b"<root>x</root>") == {"root": "x"}

    def test_malformed_xml_raises(self):
        with pytest.raises(XMLParseError) as exc_info:
            parse_xml("<root><unclosed></root>", source="broken.xml")

        assert exc_info.value.source == "broken.xml"


class TestParseXmlFile:

    def test_reads_file(self, tmp_path):
        path = tmp_path / "doc.xml"
        path.write_text('<?xml version="1.0" encoding="UTF-8"?><root><a>తెలుగు</a></root>', encoding="utf-8")

        assert parse_xml_file(path) == {"root": {"a": "తెలుగు"}}

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(XMLParseError):
            parse_xml_file(tmp_path / "missing.xml")

    def test_malformed_file_raises(self, tmp_path):
        path = tmp_path / "bad.xml"
        path.write_text("<root>", encoding="utf-8")

        with pytest.raises(XMLParseError):
            parse_xml_file(path)


class TestAsList:

    def test_none(self):
        assert as_list(None) == []

    def test_scalar(self):
        assert as_list("a") == ["a"]

    def test_list_passthrough(self):
        value = [1, 2]
        assert as_list(value) is value
