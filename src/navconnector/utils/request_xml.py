# navconnector/utils/request_xml.py
"""
Request XML builder for the NAV Online Invoice service.

A request is a mapping with a single root key naming the request element:

    {
        'QueryTaxpayerRequest': {
            'common:header': {...},
            'common:user': {...},
            'software': {...},
            'taxNumber': '12345678',
        }
    }

The mapping is rendered through the ``request.xml`` Jinja2 template using the
same conventions the response decoder produces ('$' attributes, '_' text,
lists as repeated elements), so decoded data can be fed back as a request.
"""

import logging
from collections.abc import Mapping
from functools import cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template

from .xml_parser import ATTRIBUTES_KEY

logger: logging.Logger = logging.getLogger(__name__)

REQUEST_TEMPLATE_NAME: str = 'request.xml'

# Declared on the root element of every request
DEFAULT_NAMESPACES: dict[str, str] = {
    'xmlns': 'http://schemas.nav.gov.hu/OSA/3.0/api',
    'xmlns:common': 'http://schemas.nav.gov.hu/NTCA/1.0/common',
}


@cache
def _get_environment() -> Environment:
    """Build the Jinja2 environment for the packaged templates directory."""
    templates_dir: Path = Path(__file__).resolve().parent.parent / 'templates'

    if not templates_dir.exists():
        error_message: str = f'Templates directory not found at: {templates_dir}'
        logger.error(error_message)
        raise FileNotFoundError(error_message)

    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _prepare_value(value: Any) -> Any:
    """
    Normalize a request value for the template.

    Scalars become strings (booleans as 'true'/'false'); None is kept so the
    template can emit an empty element. Attributes set to None are left out.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, Mapping):
        prepared: dict[str, Any] = {}
        for key, child in value.items():
            if key == ATTRIBUTES_KEY:
                prepared[key] = {
                    str(name): _prepare_value(attr)
                    for name, attr in child.items()
                    if attr is not None
                }
            else:
                prepared[str(key)] = _prepare_value(child)
        return prepared
    if isinstance(value, (list, tuple)):
        return [_prepare_value(item) for item in value]
    return str(value)


def create_request_xml(request: Mapping[str, Any]) -> str:
    """
    Serialize a NAV request mapping into an XML document.

    Args:
        request: Mapping with exactly one key, the request element name.

    Returns:
        The XML document, starting with the XML declaration.

    Raises:
        ValueError: If the request does not have exactly one root element,
                    or the root content is a list.

    Example:
        >>> create_request_xml({'TokenExchangeRequest': {'software': {'softwareId': 'X'}}})
        '<?xml version="1.0" encoding="UTF-8"?>\\n<TokenExchangeRequest xmlns=...'
    """
    if not isinstance(request, Mapping) or len(request) != 1:
        raise ValueError('Request must be a mapping with exactly one root element')

    root_name: str
    root_content: Any
    root_name, root_content = next(iter(request.items()))

    if isinstance(root_content, (list, tuple)):
        raise ValueError(f'Root element {root_name!r} cannot be a list')

    root_value: dict[str, Any]
    if isinstance(root_content, Mapping):
        root_value = _prepare_value(root_content)
    elif root_content is None:
        root_value = {}
    else:
        root_value = {'_': _prepare_value(root_content)}

    root_value[ATTRIBUTES_KEY] = {
        **DEFAULT_NAMESPACES,
        **root_value.get(ATTRIBUTES_KEY, {}),
    }

    template: Template = _get_environment().get_template(REQUEST_TEMPLATE_NAME)
    request_xml: str = template.render(root_name=root_name, root_value=root_value)

    logger.debug('Built %r request XML (%d characters)', root_name, len(request_xml))
    return request_xml
