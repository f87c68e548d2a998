# navconnector/http_client.py
"""
HTTP transport for the NAV Online Invoice service.

NavHttpClient is the collaborator send_request() posts through. It owns a
requests.Session preconfigured with the NAV base URL, XML headers, timeouts
and SSL verification, and raises requests exceptions unchanged so the
adapter can tell server errors (response attached) from network errors
(no response).
"""

import logging
from types import TracebackType

import requests

from navconnector.utils import NavConnectorConfig

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_HEADERS: dict[str, str] = {
    'Content-Type': 'application/xml',
    'Accept': 'application/xml',
    'encoding': 'UTF-8',
}


class NavHttpClient:
    """
    Thin requests.Session wrapper bound to one NAV environment.

    Attributes:
        base_url: Service base URL without a trailing slash.
        timeout: (connect, read) timeout pair passed to every request.
        verify_ssl: Whether SSL certificates are verified.
        session: The underlying requests.Session.

    Usage:
        >>> with NavHttpClient(config) as http_client:
        >>>     response = http_client.post('/queryTaxpayer', request_xml)
    """

    def __init__(
        self,
        config: NavConnectorConfig,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url: str = str(config.nav.base_url).rstrip('/')
        self.timeout: tuple[float, float] = config.client.request_timeout
        self.verify_ssl: bool = config.client.verify_ssl

        self.session: requests.Session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)

        logger.debug('NavHttpClient initialized for %r', self.base_url)

    def build_url(self, path: str) -> str:
        """Join the base URL and a resource path such as '/manageInvoice'."""
        return f'{self.base_url}/{path.lstrip("/")}'

    def post(self, path: str, body: str) -> requests.Response:
        """
        POST an XML body to a NAV resource.

        Args:
            path: Resource path relative to the base URL.
            body: XML document to send.

        Returns:
            The successful HTTP response.

        Raises:
            requests.exceptions.HTTPError: NAV answered with a 4xx/5xx status.
                                           The response is attached.
            requests.exceptions.Timeout: The request timed out.
            requests.exceptions.RequestException: Other network-level errors.
        """
        url: str = self.build_url(path)

        try:
            logger.debug(
                'POST %r (connect/read timeout=%r)', url, self.timeout
            )

            response: requests.Response = self.session.post(
                url,
                data=body.encode('utf-8'),
                timeout=self.timeout,
                verify=self.verify_ssl,
            )

            logger.debug('Received HTTP %r from %r', response.status_code, url)

            response.raise_for_status()
            return response

        except requests.exceptions.Timeout as timeout_error:
            logger.error(
                'Request timeout for %r after %r: %r', url, self.timeout, timeout_error
            )
            raise

        except requests.exceptions.HTTPError as http_error:
            logger.error('HTTP error for %r: %r', url, http_error)

            logger.debug('***REQUEST BODY (XML)***')
            logger.debug(body)

            if http_error.response is not None:
                logger.debug('***RESPONSE BODY (XML)***')
                logger.debug(http_error.response.text)

            raise

        except requests.exceptions.RequestException as request_error:
            logger.error('Network error for %r: %r', url, request_error)
            raise

    def close(self) -> None:
        """Close the underlying session."""
        logger.debug('Closing NavHttpClient session')
        self.session.close()

    def __enter__(self) -> 'NavHttpClient':
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        _exc_value: BaseException | None,
        _traceback: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f'NavHttpClient(base_url={self.base_url})'
