from typing import ClassVar, Dict, Optional, Set

from pydantic import BaseModel, ConfigDict, Field

from . import __version__
from .errors import UnsupportedMethod

DEFAULT_USER_AGENT = f"placeholder-client/{__version__}"

DEFAULT_HEADERS: Dict[str, str] = {
    "Accept": "application/json",
    "Content-Type": "application/json",
    "User-Agent": DEFAULT_USER_AGENT,
}


class OutboundRequest(BaseModel):
    """A fully built request, ready to hand to a transport."""

    url: str
    method: str
    headers: Dict[str, str] = Field(default_factory=lambda: DEFAULT_HEADERS.copy())
    body: Optional[str] = None

    BODYLESS_METHODS: ClassVar[Set[str]] = {"GET", "DELETE"}
    BODY_METHODS: ClassVar[Set[str]] = {"POST", "PATCH"}

    model_config = ConfigDict(frozen=True)

    @property
    def has_body(self) -> bool:
        return self.body is not None


def build_request(url: str, method: str, body: Optional[str] = None) -> OutboundRequest:
    """Build a JSON request for ``method`` against ``url``.

    ``Content-Type: application/json`` is set on every request, including
    the bodyless ones. For GET and DELETE any body is dropped; for POST and
    PATCH the body is attached verbatim.

    Args:
        url: Absolute target URL
        method: HTTP method token, case insensitive
        body: JSON-encoded payload

    Returns:
        The outbound request

    Raises:
        UnsupportedMethod: If the method is not GET, POST, PATCH or DELETE
    """
    method = method.upper()
    if method in OutboundRequest.BODYLESS_METHODS:
        return OutboundRequest(url=url, method=method)
    if method in OutboundRequest.BODY_METHODS:
        return OutboundRequest(url=url, method=method, body=body)
    raise UnsupportedMethod(method)
