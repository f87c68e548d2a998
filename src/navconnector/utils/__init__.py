# navconnector/utils/__init__.py

from .config_loader import LoggingSection, NavConnectorConfig, load_config
from .logger import setup_logger, setup_logger_from_config
from .request_xml import create_request_xml
from .xml_parser import parse_xml, strip_namespace_prefixes

__all__: list[str] = [
    # config_loader.py
    'LoggingSection',
    'NavConnectorConfig',
    # request_xml.py
    'create_request_xml',
    'load_config',
    # xml_parser.py
    'parse_xml',
    # logger.py
    'setup_logger',
    'setup_logger_from_config',
    'strip_namespace_prefixes',
]
