"""Error taxonomy for the placeholder client.

Errors are raised by the transport, the request builder and the codecs,
and caught at the operation boundary of the API client and the workflows,
where they are logged and carried inside a ``Result``.
"""

from typing import Optional


class PlaceholderClientError(Exception):
    """Base exception for placeholder client errors."""

    pass


class TransportError(PlaceholderClientError):
    """Connection failure, timeout or malformed response at the network layer."""

    pass


class DecodeError(PlaceholderClientError):
    """Response body is not valid JSON or does not match the expected shape."""

    pass


class InvalidArgument(PlaceholderClientError):
    """A caller supplied precondition was violated."""

    pass


class UnsupportedMethod(PlaceholderClientError):
    """The request builder received an HTTP verb it cannot dispatch."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Unsupported HTTP method: {method}")


class HttpStatusFailure(PlaceholderClientError):
    """The service answered, but with a status outside [200, 300)."""

    def __init__(self, status: int, url: Optional[str] = None):
        self.status = status
        self.url = url
        message = f"Unexpected status code: {status}"
        if url:
            message = f"{message} for {url}"
        super().__init__(message)


class IoError(PlaceholderClientError):
    """Writing a local file failed."""

    def __init__(self, path, reason: str):
        self.path = path
        super().__init__(f"Failed to write {path}: {reason}")


class NoDataError(PlaceholderClientError):
    """A workflow prerequisite returned nothing to work with."""

    pass
