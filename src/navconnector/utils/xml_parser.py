# navconnector/utils/xml_parser.py
"""
XML decoding utilities for NAV service responses.

NAV answers with namespaced XML whose prefixes vary between responses
(``ns2:result`` in one, ``result`` in another). These helpers strip the
volatile prefixes and turn the document into plain dicts, lists and strings:

- ``{root_tag: value}`` at the top level
- a leaf element without attributes becomes its text ('' when empty)
- any other element becomes a dict; attributes live under ``'$'`` and
  non-blank text under ``'_'``
- a tag repeated among siblings becomes a list, a single child stays scalar

Tag names keep whatever prefix is left in the document (``common:header``).
"""

import re
from typing import Any

from lxml import etree

ATTRIBUTES_KEY: str = '$'
TEXT_KEY: str = '_'

NAMESPACE_PREFIX_PATTERN: re.Pattern[str] = re.compile(r'ns2:|ns3:')

XML_NAMESPACE: str = 'http://www.w3.org/XML/1998/namespace'


def strip_namespace_prefixes(xml_string: str) -> str:
    """
    Remove every literal 'ns2:' and 'ns3:' from an XML string.

    The replacement is purely textual, so it also applies to attribute
    values and text content.
    """
    return NAMESPACE_PREFIX_PATTERN.sub('', xml_string)


def _build_parser() -> etree.XMLParser:
    # No DTD entity expansion or network access for documents we did not write
    return etree.XMLParser(resolve_entities=False, no_network=True)


def _qualified_tag(element: etree._Element) -> str:
    """Return the element name as written in the document (prefix:local)."""
    local_name: str = etree.QName(element).localname
    if element.prefix:
        return f'{element.prefix}:{local_name}'
    return local_name


def _qualified_attribute(element: etree._Element, attribute_name: str) -> str:
    """Map lxml's '{uri}local' attribute keys back to 'prefix:local'."""
    if not attribute_name.startswith('{'):
        return attribute_name

    qname: etree.QName = etree.QName(attribute_name)
    if qname.namespace == XML_NAMESPACE:
        return f'xml:{qname.localname}'

    for prefix, uri in element.nsmap.items():
        if prefix and uri == qname.namespace:
            return f'{prefix}:{qname.localname}'

    return qname.localname


def _collect_attributes(
    element: etree._Element,
    parent_nsmap: dict[str | None, str],
) -> dict[str, str]:
    """
    Collect attributes the way they appear in the source document.

    Namespace declarations are reported as 'xmlns' / 'xmlns:prefix'
    attributes on the element that introduces them.
    """
    attributes: dict[str, str] = {}

    for prefix, uri in element.nsmap.items():
        if parent_nsmap.get(prefix) != uri:
            attributes[f'xmlns:{prefix}' if prefix else 'xmlns'] = uri

    for name, value in element.attrib.items():
        attributes[_qualified_attribute(element, str(name))] = str(value)

    return attributes


def _element_to_value(
    element: etree._Element,
    parent_nsmap: dict[str | None, str],
) -> str | dict[str, Any]:
    """Recursively convert one element into a string or dict."""
    attributes: dict[str, str] = _collect_attributes(element, parent_nsmap)

    text_parts: list[str] = [element.text or '']
    children: list[etree._Element] = []
    for child in element:
        # Comments and processing instructions carry a non-string tag
        if isinstance(child.tag, str):
            children.append(child)
        text_parts.append(child.tail or '')

    text: str = ''.join(text_parts)
    has_text: bool = bool(text.strip())

    if not attributes and not children:
        return text if has_text else ''

    value: dict[str, Any] = {}
    if attributes:
        value[ATTRIBUTES_KEY] = attributes

    element_nsmap: dict[str | None, str] = dict(element.nsmap)
    for child in children:
        key: str = _qualified_tag(child)
        child_value: str | dict[str, Any] = _element_to_value(child, element_nsmap)

        if key not in value:
            value[key] = child_value
        elif isinstance(value[key], list):
            value[key].append(child_value)
        else:
            value[key] = [value[key], child_value]

    if has_text:
        value[TEXT_KEY] = text

    return value


def parse_xml(xml_string: str) -> dict[str, Any]:
    """
    Decode an XML document into nested plain Python data.

    Args:
        xml_string: The raw XML document.

    Returns:
        A single-key dict mapping the root tag to its decoded value.

    Raises:
        etree.XMLSyntaxError: If the XML is malformed or empty.

    Example:
        >>> parse_xml('<a><b>1</b><b>2</b><c/></a>')
        {'a': {'b': ['1', '2'], 'c': ''}}
    """
    root: etree._Element = etree.fromstring(
        xml_string.encode('utf-8'), parser=_build_parser()
    )
    return {_qualified_tag(root): _element_to_value(root, {})}
