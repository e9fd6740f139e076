"""
HTTP transport for the Sangfor AC client.
"""

import logging
from typing import Optional

import requests

from .constants import DEFAULT_TIMEOUT
from .exceptions import EmptyResponseError, TransportError
from .request import TransportRequest

logger = logging.getLogger(__name__)


class Transport:
    """Sends built requests over a ``requests.Session`` with a fixed timeout."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def execute(self, request: TransportRequest) -> bytes:
        """
        Send a request and return the raw response body.

        The HTTP status is not interpreted: the appliance reports failures
        inside the JSON envelope.

        Args:
            request: Signed request from the builder

        Returns:
            Raw response body

        Raises:
            TransportError: On connection failure, timeout or read error
            EmptyResponseError: If the body is empty
        """
        logger.debug("%s %s", request.method, request.url)
        try:
            response = self.session.request(
                request.method,
                request.url,
                data=request.body,
                headers=request.headers,
                timeout=self.timeout,
            )
            body = response.content
        except requests.RequestException as e:
            raise TransportError(f"HTTP request failed: {e}") from e

        if not response.ok:
            logger.warning("%s %s returned HTTP %s", request.method, request.url, response.status_code)
        logger.debug("response body: %r", body)

        if not body:
            raise EmptyResponseError("No data in body")
        return body

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()
