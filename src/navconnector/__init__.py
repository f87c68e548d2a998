# navconnector/__init__.py

from .exceptions import NavServiceError
from .http_client import NavHttpClient
from .nav_client import NavClient
from .send_request import send_request

__all__: list[str] = [
    # nav_client.py
    'NavClient',
    # http_client.py
    'NavHttpClient',
    # exceptions.py
    'NavServiceError',
    # send_request.py
    'send_request',
]
