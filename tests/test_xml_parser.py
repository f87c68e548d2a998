"""Tests for XML decoding utilities."""

import pytest
from lxml import etree

from navconnector.utils.xml_parser import parse_xml, strip_namespace_prefixes


class TestStripNamespacePrefixes:
    """Tests for strip_namespace_prefixes function."""

    def test_strips_ns2_and_ns3(self) -> None:
        """Test that both prefixes are removed everywhere."""
        xml = '<ns2:a><ns3:b>ns2:text</ns3:b></ns2:a>'
        assert strip_namespace_prefixes(xml) == '<a><b>text</b></a>'

    def test_keeps_namespace_declarations(self) -> None:
        """Test that xmlns:ns2 declarations are not touched."""
        xml = '<a xmlns:ns2="urn:x"/>'
        assert strip_namespace_prefixes(xml) == xml

    def test_keeps_other_prefixes(self) -> None:
        """Test that unrelated prefixes survive."""
        xml = '<ns4:a><common:b/></ns4:a>'
        assert strip_namespace_prefixes(xml) == xml


class TestParseXml:
    """Tests for parse_xml function."""

    def test_root_tag_is_top_level_key(self) -> None:
        """Test that the root element name wraps the decoded value."""
        assert parse_xml('<root><value>1</value></root>') == {'root': {'value': '1'}}

    def test_leaf_decodes_to_text(self) -> None:
        """Test that a leaf element becomes its text."""
        assert parse_xml('<root>hello</root>') == {'root': 'hello'}

    def test_empty_element_decodes_to_empty_string(self) -> None:
        """Test that empty elements become ''."""
        assert parse_xml('<root><empty/><blank>   </blank></root>') == {
            'root': {'empty': '', 'blank': ''}
        }

    def test_single_child_is_not_a_list(self) -> None:
        """Test that a non-repeated child stays scalar."""
        result = parse_xml('<root><item><id>1</id></item></root>')
        assert result == {'root': {'item': {'id': '1'}}}

    def test_repeated_children_become_list(self) -> None:
        """Test that repeated siblings are collected in document order."""
        result = parse_xml('<root><item>a</item><other/><item>b</item><item>c</item></root>')
        assert result == {'root': {'item': ['a', 'b', 'c'], 'other': ''}}

    def test_attributes_and_text(self) -> None:
        """Test that attributes go under '$' and text under '_'."""
        result = parse_xml('<root><hash cryptoType="SHA-512">ABC</hash></root>')
        assert result == {'root': {'hash': {'$': {'cryptoType': 'SHA-512'}, '_': 'ABC'}}}

    def test_namespace_declarations_reported_as_attributes(self) -> None:
        """Test that xmlns declarations appear once, on the declaring element."""
        xml = '<root xmlns="urn:api" xmlns:common="urn:common"><common:header><id>1</id></common:header></root>'
        result = parse_xml(xml)
        assert result == {
            'root': {
                '$': {'xmlns': 'urn:api', 'xmlns:common': 'urn:common'},
                'common:header': {'id': '1'},
            }
        }

    def test_prefixed_attribute_keeps_prefix(self) -> None:
        """Test that namespaced attributes map back to prefix:name."""
        xml = (
            '<root xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">'
            '<value xsi:nil="true"/></root>'
        )
        result = parse_xml(xml)
        assert result['root']['value'] == {'$': {'xsi:nil': 'true'}}

    def test_whitespace_between_children_is_ignored(self) -> None:
        """Test that formatting whitespace does not produce a '_' key."""
        xml = """<root>
            <a>1</a>
            <b>2</b>
        </root>"""
        assert parse_xml(xml) == {'root': {'a': '1', 'b': '2'}}

    def test_comments_are_ignored(self) -> None:
        """Test that comments do not become children."""
        assert parse_xml('<root><!-- note --><a>1</a></root>') == {'root': {'a': '1'}}

    def test_xml_declaration_is_accepted(self) -> None:
        """Test parsing a document with an encoding declaration."""
        xml = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?><root>árvíztűrő</root>'
        assert parse_xml(xml) == {'root': 'árvíztűrő'}

    def test_malformed_xml_raises_error(self) -> None:
        """Test that malformed XML raises XMLSyntaxError."""
        with pytest.raises(etree.XMLSyntaxError):
            parse_xml('<invalid><xml>')

    def test_empty_string_raises_error(self) -> None:
        """Test that an empty document raises XMLSyntaxError."""
        with pytest.raises(etree.XMLSyntaxError):
            parse_xml('')

    def test_stripped_response_decodes_without_prefixes(
        self, query_taxpayer_response_xml: str
    ) -> None:
        """Test decoding a prefixed NAV response after stripping."""
        result = parse_xml(strip_namespace_prefixes(query_taxpayer_response_xml))
        body = result['QueryTaxpayerResponse']

        assert body['result'] == {'funcCode': 'OK'}
        assert body['header']['requestId'] == 'RID5493029384'
        assert body['taxpayerValidity'] == 'true'

        addresses = body['taxpayerData']['taxpayerAddressList']['taxpayerAddressItem']
        assert [address['city'] for address in addresses] == ['Budapest', 'Debrecen']
