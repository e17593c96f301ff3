"""Failures raised by the Sleeper client.

Transport problems (DNS, refused connections, resets) are not wrapped: they
reach callers as the ``requests`` exception that produced them.
"""

from typing import Optional

import requests

TransportError = requests.RequestException


class SleeperAPIError(Exception):
    """Base class for errors raised by this package."""


class RemoteRequestError(SleeperAPIError):
    """The Sleeper API answered with a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str, url: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason
        self.url = url
        super().__init__(f"API Error: {status_code} {reason}".rstrip())
