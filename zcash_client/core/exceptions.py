"""Error types raised by the Zcash client."""

from typing import Optional


class ZcashClientError(Exception):
    """Base class for all client errors."""
    pass


class ConversionError(ZcashClientError):
    """A value cannot be represented as a zatoshi amount."""
    pass


class SerializationError(ZcashClientError):
    """A transaction value could not be serialized for submission."""
    pass


class NotFoundError(ZcashClientError):
    """The requested item is well-defined as absent (e.g. not in the mempool)."""
    pass


class RPCError(ZcashClientError):
    """A remote call failed. ``cause`` holds the underlying exception, if any."""

    def __init__(self, message: str, method: Optional[str] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message)
        self.method = method
        self.cause = cause


class TransportError(RPCError):
    """Connectivity, timeout, HTTP or authentication failure."""

    def __init__(self, message: str, method: Optional[str] = None,
                 cause: Optional[BaseException] = None,
                 status_code: Optional[int] = None):
        super().__init__(message, method=method, cause=cause)
        self.status_code = status_code


class DecodeError(RPCError):
    """The response does not match the expected shape."""
    pass


class RPCServerError(RPCError):
    """The node answered with an error payload."""

    def __init__(self, message: str, method: Optional[str] = None,
                 code: int = -1):
        super().__init__(message, method=method)
        self.code = code
