"""
Custom exceptions for the Sangfor AC client library.
"""


class ACClientError(Exception):
    """Base exception for AC client errors."""
    pass


class ConfigurationError(ACClientError):
    """Raised when client configuration is invalid."""
    pass


class ArgumentError(ACClientError, ValueError):
    """Raised when caller arguments fail validation before a request is built."""
    pass


class TransportError(ACClientError):
    """Raised when the HTTP request fails (connection, timeout, I/O)."""
    pass


class EmptyResponseError(ACClientError):
    """Raised when the appliance answers with a zero-length body."""
    pass


class DecodeError(ACClientError):
    """Raised when the response is not a well-formed envelope of the expected shape."""
    pass


class RemoteError(ACClientError):
    """
    Raised when the appliance reports a failure (non-zero envelope code).

    The message is the appliance's own text, localized when the client asks
    for zh-CN, and is meant to be shown to users as is.
    """

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self):
        return f"RemoteError(code={self.code!r}, message={self.message!r})"
