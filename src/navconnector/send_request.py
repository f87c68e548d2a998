# navconnector/send_request.py
"""
Send a request to a NAV service resource and normalize the answer.

send_request() is the single entry point: it serializes the request, posts
it, and returns the decoded response merged with the request XML. When NAV
answers with an error, the body is reduced to the fixed NormalizedError shape
and the failure is re-raised as NavServiceError.
"""

import logging
from collections.abc import Mapping
from typing import Any, Protocol

import requests

from navconnector.exceptions import NavServiceError
from navconnector.models import NormalizedError, ResponseKind, detect_response_kind
from navconnector.utils import create_request_xml, parse_xml, strip_namespace_prefixes

logger: logging.Logger = logging.getLogger(__name__)


class HttpClient(Protocol):
    """Anything that can POST a body to a path and return a requests.Response."""

    def post(self, path: str, body: str) -> requests.Response: ...


def decode_response(xml_string: str) -> dict[str, Any]:
    """Strip the volatile ns2:/ns3: prefixes and decode the XML."""
    return parse_xml(strip_namespace_prefixes(xml_string))


def normalize_error_body(body: str | None) -> dict[str, Any]:
    """
    Reduce a NAV error body to the NormalizedError payload.

    Args:
        body: The raw response text, possibly empty.

    Returns:
        {'result': {...}, 'technicalValidationMessages': [...]}, plus
        'schemaValidationMessages' for GeneralErrorResponse bodies carrying it.

    Raises:
        lxml.etree.XMLSyntaxError: A recognized body is not well-formed XML.
    """
    kind: ResponseKind = detect_response_kind(body)
    logger.debug('Normalizing %s error response', kind.value)

    normalized: NormalizedError
    if kind is ResponseKind.EMPTY:
        normalized = NormalizedError.empty()
    elif kind is ResponseKind.EXCEPTION:
        normalized = NormalizedError.from_exception_response(decode_response(body))
    elif kind is ResponseKind.ERROR:
        normalized = NormalizedError.from_error_response(decode_response(body))
    else:
        normalized = NormalizedError.from_unrecognized(body)

    return normalized.to_payload()


def send_request(
    request: Mapping[str, Any],
    http_client: HttpClient,
    path: str,
) -> dict[str, Any]:
    """
    Convert a request to XML and send it to the given NAV service resource.

    Args:
        request: Request mapping for XML conversion (one root element).
        http_client: Transport exposing post(path, body), e.g. NavHttpClient.
        path: NAV service resource path, e.g. '/queryTaxpayer'.

    Returns:
        The decoded response fields plus 'requestXml', the XML that was sent.

    Raises:
        NavServiceError: NAV answered with an error. ``data`` holds the
                         normalized payload; the original error is chained.
        requests.exceptions.RequestException: Network failure without a
                         response, re-raised unchanged.
        lxml.etree.XMLSyntaxError: A response body could not be decoded.

    Example:
        >>> with NavHttpClient(load_config()) as http_client:
        >>>     data = send_request(request, http_client, '/queryTaxpayer')
        >>>     data['QueryTaxpayerResponse']['result']['funcCode']
        'OK'
    """
    request_xml: str = create_request_xml(request)
    logger.info('Sending NAV request to %r', path)

    try:
        response: requests.Response = http_client.post(path, request_xml)
    except requests.exceptions.RequestException as error:
        if error.response is None:
            logger.debug('No response from NAV for %r: %r', path, error)
            raise

        data: dict[str, Any] = normalize_error_body(error.response.text)
        logger.debug(
            'NAV returned an error for %r: %r', path, data['result']
        )
        raise NavServiceError(
            *error.args,
            data=data,
            response=error.response,
            request=error.request,
        ) from error

    decoded: dict[str, Any] = decode_response(response.text)
    logger.info('NAV request to %r completed successfully', path)

    return {**decoded, 'requestXml': request_xml}
