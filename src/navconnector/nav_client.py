# navconnector/nav_client.py
"""
NAV Online Invoice Client

High-level entry point that ties configuration, the HTTP transport and the
request adapter together. Callers build request mappings and pick the
resource path; the client returns normalized responses or raises
NavServiceError with a normalized payload.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from types import TracebackType
from typing import Any

from navconnector.http_client import NavHttpClient
from navconnector.send_request import send_request
from navconnector.utils import NavConnectorConfig, load_config, setup_logger_from_config

logger: logging.Logger = logging.getLogger(__name__)


class NavClient:
    """
    Client for the NAV Online Invoice XML API.

    Attributes:
        config: The validated configuration.
        http_client: Transport used for every request.

    Usage:
        Context Manager (Recommended):
            >>> with NavClient() as client:
            >>>     data = client.send(request, '/queryTaxpayer')
            >>> # Session closed when the with block exits

        Manual Management:
            >>> client = NavClient(config_path=Path('nav.yaml'))
            >>> try:
            >>>     data = client.send(request, '/queryTaxpayer')
            >>> finally:
            >>>     client.close()
    """

    def __init__(
        self,
        config_path: Path | str | None = None,
        config: NavConnectorConfig | None = None,
        http_client: NavHttpClient | None = None,
        configure_logging: bool = False,
    ) -> None:
        """
        Initialize the client.

        Args:
            config_path: Optional path to a config file. Ignored if config is given.
            config: Optional pre-loaded configuration.
            http_client: Optional transport; built from config when omitted.
            configure_logging: Apply the config's logging section to the
                               package logger.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            pydantic.ValidationError: If the config file is invalid.
        """
        if config is not None:
            self.config: NavConnectorConfig = config
            logger.debug('Initializing NavClient with injected configuration')
        elif config_path is not None:
            logger.info('Loading NAV configuration from: %r', config_path)
            self.config = load_config(config_path)
        else:
            logger.info('Loading NAV configuration from default location')
            self.config = load_config()

        if configure_logging:
            setup_logger_from_config(self.config.logging)

        self.http_client: NavHttpClient = http_client or NavHttpClient(self.config)
        logger.info('NavClient ready for %r', str(self.config.nav.base_url))

    def send(self, request: Mapping[str, Any], path: str) -> dict[str, Any]:
        """
        Send a request mapping to a NAV resource path.

        See send_request() for the returned shape and the errors raised.
        """
        return send_request(request, self.http_client, path)

    def close(self) -> None:
        """Release the HTTP session."""
        self.http_client.close()

    def __enter__(self) -> 'NavClient':
        logger.debug('Entering NavClient context manager')
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        _exc_value: BaseException | None,
        _traceback: TracebackType | None,
    ) -> None:
        logger.debug(
            'Exiting NavClient context manager (exception occurred: %s)',
            exc_type is not None,
        )
        self.close()

    def __repr__(self) -> str:
        return f'NavClient(base_url={self.config.nav.base_url})'
