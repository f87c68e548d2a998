# navconnector/utils/config_loader.py
"""
NAV Connector Configuration Loader with Pydantic Validation

This module loads and validates configuration from a YAML file using Pydantic.
Every section mirrors the structure of config.yaml and rejects unknown keys,
so a typo in the file fails at load time instead of at request time.

Key Design Decisions:
- The service base URL is validated as an HttpUrl
- Timeouts are a (connect, read) pair handed straight to requests
- Log levels support both string names ("DEBUG") and numeric values (10)
- File logging is optional; console logging is always available
"""

import logging
from pathlib import Path
from typing import Any, Literal, cast

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    field_validator,
    model_validator,
)

logger: logging.Logger = logging.getLogger(__name__)

# =============================================================================
# Type Aliases
# =============================================================================

LogLevelName = Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

# =============================================================================
# Configuration Models (Schema)
# =============================================================================


class NavSection(BaseModel):
    """
    Schema for the 'nav' section of config.yaml.

    Points the connector at either the NAV test or production environment.
    Request paths such as '/queryTaxpayer' are resolved against base_url.
    """

    model_config = ConfigDict(extra='forbid')
    base_url: HttpUrl = Field(
        ...,
        description='Base URL of the NAV Online Invoice service, e.g. '
        'https://api-test.onlineszamla.nav.gov.hu/invoiceService/v3',
    )


class ClientSection(BaseModel):
    """
    Schema for the 'client' section of config.yaml.

    Controls HTTP client behavior. The connector never retries; these
    values are passed unchanged to every request.
    """

    model_config = ConfigDict(extra='forbid')
    request_timeout: tuple[float, float] = Field(
        default=(10.0, 70.0),
        description='HTTP timeouts in seconds: [connect_timeout, read_timeout].',
    )

    verify_ssl: bool = Field(
        default=True,
        description='Whether to verify SSL certificates. Should always be True '
        'against the NAV endpoints.',
    )

    @field_validator('request_timeout')
    @classmethod
    def validate_timeout_values(cls, v: tuple[float, float]) -> tuple[float, float]:
        """Ensure both timeouts are positive and connect does not exceed read."""
        connect_timeout: float
        read_timeout: float
        connect_timeout, read_timeout = v

        if connect_timeout <= 0:
            raise ValueError(f'Connect timeout must be positive, got {connect_timeout}')

        if read_timeout <= 0:
            raise ValueError(f'Read timeout must be positive, got {read_timeout}')

        if connect_timeout > read_timeout:
            raise ValueError(
                f'Connect timeout ({connect_timeout}s) should not exceed '
                f'read timeout ({read_timeout}s)'
            )

        return v


class LoggingSection(BaseModel):
    """
    Schema for the 'logging' section of config.yaml.

    Log levels accept either the standard names or their numeric values
    (DEBUG=10, INFO=20, WARNING=30, ERROR=40, CRITICAL=50).
    """

    model_config = ConfigDict(extra='forbid')
    console_level: LogLevelName | int = Field(
        default='INFO',
        description='Logging level for console output.',
    )

    file_path: Path | None = Field(
        default=None,
        description='Optional path to a log file. If None, file logging is disabled.',
    )

    file_level: LogLevelName | int | None = Field(
        default=None,
        description='Logging level for file output. Only relevant with file_path.',
    )

    @field_validator('console_level', 'file_level')
    @classmethod
    def validate_log_level(
        cls, v: LogLevelName | int | None
    ) -> LogLevelName | int | None:
        """Accept level names as-is and only the five standard numeric levels."""
        if v is None or isinstance(v, str):
            return v

        valid_levels: set[int] = {10, 20, 30, 40, 50}
        if v not in valid_levels:
            raise ValueError(
                f'Numeric log level must be one of {valid_levels}, got {v}'
            )
        return v

    @model_validator(mode='after')
    def validate_file_logging_consistency(self) -> 'LoggingSection':
        """
        Keep file_path and file_level consistent.

        A path without a level defaults to DEBUG; a level without a path
        is rejected.
        """
        has_file_path: bool = self.file_path is not None
        has_file_level: bool = self.file_level is not None

        if has_file_path and not has_file_level:
            self.file_level = 'DEBUG'
            logger.warning(
                'file_path provided without file_level. Defaulting to DEBUG for file logging.'
            )

        if has_file_level and not has_file_path:
            raise ValueError(
                'file_level is specified but file_path is missing. '
                'Both must be provided to enable file logging.'
            )

        return self

    def get_console_level_int(self) -> int:
        """Return console_level as a logging module integer."""
        if isinstance(self.console_level, int):
            return self.console_level
        return cast(int, getattr(logging, self.console_level))

    def get_file_level_int(self) -> int | None:
        """Return file_level as a logging module integer, or None if disabled."""
        if self.file_level is None:
            return None
        if isinstance(self.file_level, int):
            return self.file_level
        return cast(int, getattr(logging, self.file_level))


class NavConnectorConfig(BaseModel):
    """
    Root configuration model.

    Usage:
        config = load_config()
        base_url = config.nav.base_url
        timeout = config.client.request_timeout
    """

    model_config = ConfigDict(extra='forbid')
    nav: NavSection
    client: ClientSection = Field(default_factory=ClientSection)
    logging: LoggingSection = Field(default_factory=LoggingSection)


# =============================================================================
# Loader Logic
# =============================================================================


def _get_default_config_path() -> Path:
    """
    Resolve the packaged default config file.

    Layout:
        navconnector/
        ├── config/
        │   └── config.yaml       <-- Target file
        └── utils/
            └── config_loader.py  <-- This file
    """
    package_root: Path = Path(__file__).resolve().parent.parent
    return package_root / 'config' / 'config.yaml'


def load_config(config_path: Path | str | None = None) -> NavConnectorConfig:
    """
    Load, parse, and validate the configuration file.

    Args:
        config_path: Optional explicit path to a config file. If None, the
                     packaged default config.yaml is used.

    Returns:
        A validated NavConnectorConfig.

    Raises:
        FileNotFoundError: The config file does not exist.
        yaml.YAMLError: The file is not valid YAML.
        ValidationError: The YAML is valid but the configuration is not.

    Example:
        >>> config = load_config()
        >>> test_config = load_config('/tmp/test_config.yaml')
    """
    path_obj: Path = Path(config_path) if config_path else _get_default_config_path()
    logger.debug('Resolving configuration from: %s', path_obj)

    if not path_obj.exists():
        error_msg: str = f'Configuration file not found at: {path_obj}'
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    try:
        with open(path_obj, encoding='utf-8') as f:
            raw_config: dict[str, Any] = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.error('Failed to parse YAML config file: %s', e)
        raise

    try:
        config: NavConnectorConfig = NavConnectorConfig.model_validate(raw_config)
    except ValidationError as e:
        logger.error('Configuration validation failed: %s', e)
        raise

    logger.debug('Configuration validated successfully.')
    return config
