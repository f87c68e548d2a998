# navconnector/exceptions.py
"""
Exceptions raised by the NAV connector.

Failures without a server response (connection errors, timeouts) surface as
the original ``requests`` exceptions. Failures where NAV did answer are
re-raised as NavServiceError, which is still a ``requests.HTTPError`` so
existing handlers keep working.
"""

from collections.abc import Mapping
from typing import Any

import requests


class NavServiceError(requests.HTTPError):
    """
    NAV answered with an error; ``data`` holds the normalized payload.

    Attributes:
        data: {'result': {...}, 'technicalValidationMessages': [...]}
              (plus 'schemaValidationMessages' when present).
        response: The requests.Response NAV returned.
        request: The prepared request that was sent.
    """

    def __init__(self, *args: Any, data: dict[str, Any], **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.data: dict[str, Any] = data

    @property
    def result(self) -> Any:
        """Shortcut to the normalized result block."""
        return self.data.get('result', {})

    @property
    def technical_validation_messages(self) -> list[Any]:
        """Shortcut to the normalized technical validation messages."""
        return self.data.get('technicalValidationMessages', [])

    def __str__(self) -> str:
        message: str = super().__str__()
        error_code: Any = (
            self.result.get('errorCode') if isinstance(self.result, Mapping) else None
        )
        if error_code:
            return f'{message} [{error_code}]'
        return message
