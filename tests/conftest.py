"""Pytest configuration and shared fixtures for navconnector tests."""

from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest
import yaml
from requests import Response

from navconnector.utils import NavConnectorConfig

API_NAMESPACE = 'http://schemas.nav.gov.hu/OSA/3.0/api'
COMMON_NAMESPACE = 'http://schemas.nav.gov.hu/NTCA/1.0/common'
BASE_NAMESPACE = 'http://schemas.nav.gov.hu/OSA/3.0/base'


@pytest.fixture
def sample_config() -> NavConnectorConfig:
    """Create a sample NavConnectorConfig for testing."""
    config_dict: dict[str, Any] = {
        'nav': {
            'base_url': 'https://api-test.example.com/invoiceService/v3',
        },
        'client': {
            'request_timeout': [5, 60],
            'verify_ssl': True,
        },
        'logging': {
            'console_level': 'INFO',
            'file_level': 'DEBUG',
            'file_path': 'test_navconnector.log',
        },
    }
    return NavConnectorConfig.model_validate(config_dict)


@pytest.fixture
def temp_config_file(tmp_path: Path, sample_config: NavConnectorConfig) -> Path:
    """Create a temporary config file for testing."""
    config_path: Path = tmp_path / 'config.yaml'
    config_dict: dict[str, Any] = sample_config.model_dump(mode='json')
    config_path.write_text(yaml.safe_dump(config_dict, sort_keys=False))
    return config_path


@pytest.fixture
def sample_request() -> dict[str, Any]:
    """Create a queryTaxpayer request mapping."""
    return {
        'QueryTaxpayerRequest': {
            'common:header': {
                'common:requestId': 'RID5493029384',
                'common:timestamp': '2026-10-19T10:00:00.000Z',
                'common:requestVersion': '3.0',
                'common:headerVersion': '1.0',
            },
            'common:user': {
                'common:login': 'technicalUser',
                'common:passwordHash': {
                    '$': {'cryptoType': 'SHA-512'},
                    '_': 'PASSWORDHASH',
                },
                'common:taxNumber': '11111111',
                'common:requestSignature': {
                    '$': {'cryptoType': 'SHA3-512'},
                    '_': 'SIGNATURE',
                },
            },
            'software': {
                'softwareId': '123456789123456789',
                'softwareName': 'navconnector',
            },
            'taxNumber': '12345678',
        }
    }


@pytest.fixture
def query_taxpayer_response_xml() -> str:
    """Create a successful NAV response using ns2/ns3 prefixes."""
    return f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<QueryTaxpayerResponse xmlns="{API_NAMESPACE}" xmlns:ns2="{COMMON_NAMESPACE}" xmlns:ns3="{BASE_NAMESPACE}">
    <ns2:header>
        <ns2:requestId>RID5493029384</ns2:requestId>
        <ns2:timestamp>2026-10-19T10:00:00.000Z</ns2:timestamp>
    </ns2:header>
    <ns2:result>
        <ns2:funcCode>OK</ns2:funcCode>
    </ns2:result>
    <taxpayerValidity>true</taxpayerValidity>
    <taxpayerData>
        <taxpayerName>Example Kft.</taxpayerName>
        <taxpayerAddressList>
            <taxpayerAddressItem>
                <taxpayerAddressType>HQ</taxpayerAddressType>
                <ns3:city>Budapest</ns3:city>
            </taxpayerAddressItem>
            <taxpayerAddressItem>
                <taxpayerAddressType>SITE</taxpayerAddressType>
                <ns3:city>Debrecen</ns3:city>
            </taxpayerAddressItem>
        </taxpayerAddressList>
    </taxpayerData>
</QueryTaxpayerResponse>"""


@pytest.fixture
def general_exception_response_xml() -> str:
    """Create a GeneralExceptionResponse body."""
    return f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<ns2:GeneralExceptionResponse xmlns="{API_NAMESPACE}" xmlns:ns2="{COMMON_NAMESPACE}">
    <ns2:funcCode>ERROR</ns2:funcCode>
    <ns2:errorCode>OPERATION_FAILED</ns2:errorCode>
    <ns2:message>Operation failed</ns2:message>
    <ns2:requestId>RID5493029384</ns2:requestId>
</ns2:GeneralExceptionResponse>"""


@pytest.fixture
def build_general_error_response() -> Callable[[str], str]:
    """Return a factory for GeneralErrorResponse bodies with custom validation blocks."""

    def _build(validation_xml: str = '') -> str:
        return f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<GeneralErrorResponse xmlns="{API_NAMESPACE}" xmlns:ns2="{COMMON_NAMESPACE}">
    <ns2:header>
        <ns2:requestId>RID5493029384</ns2:requestId>
    </ns2:header>
    <ns2:result>
        <ns2:funcCode>ERROR</ns2:funcCode>
        <ns2:errorCode>INVALID_REQUEST</ns2:errorCode>
        <ns2:message>Invalid request</ns2:message>
    </ns2:result>
    {validation_xml}
</GeneralErrorResponse>"""

    return _build


@pytest.fixture
def technical_validation_message_xml() -> str:
    """Create a single technicalValidationMessages block."""
    return """<ns2:technicalValidationMessages>
        <ns2:validationResultCode>ERROR</ns2:validationResultCode>
        <ns2:validationErrorCode>INVALID_SECURITY_USER</ns2:validationErrorCode>
        <ns2:message>Invalid security user</ns2:message>
    </ns2:technicalValidationMessages>"""


@pytest.fixture
def make_response() -> Callable[..., Mock]:
    """Return a factory for mock requests.Response objects."""

    def _make(text: str = '', status_code: int = 200) -> Mock:
        response = Mock(spec=Response)
        response.status_code = status_code
        response.text = text
        response.headers = {'Content-Type': 'application/xml'}
        response.request = None
        return response

    return _make
