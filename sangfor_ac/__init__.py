"""
Sangfor AC Client Library

A Python client for the HTTP management API of Sangfor network access
control appliances. Requests are signed with a random nonce and the MD5
digest of the shared secret plus that nonce.

Example usage:
    from sangfor_ac import ACClient

    client = ACClient("192.168.1.1:9999", "your-secret-key")
    version = client.get_version()
"""

from .client import ACClient
from .envelope import Envelope, decode, normalize
from .exceptions import (
    ACClientError,
    ArgumentError,
    ConfigurationError,
    DecodeError,
    EmptyResponseError,
    RemoteError,
    TransportError
)
from .constants import (
    DEFAULT_CONFIG,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    EMPTY_ARRAY_FIELDS
)
from .request import LogicalRequest, RequestBuilder, TransportRequest
from .signer import Signer
from .transport import Transport

__version__ = "1.0.0"
__all__ = [
    "ACClient",
    "ACClientError",
    "ArgumentError",
    "ConfigurationError",
    "DecodeError",
    "EmptyResponseError",
    "RemoteError",
    "TransportError",
    "Envelope",
    "decode",
    "normalize",
    "LogicalRequest",
    "RequestBuilder",
    "TransportRequest",
    "Signer",
    "Transport",
    "DEFAULT_CONFIG",
    "DEFAULT_PORT",
    "DEFAULT_TIMEOUT",
    "EMPTY_ARRAY_FIELDS"
]
