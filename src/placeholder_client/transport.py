"""aiohttp transport for sending built requests to the resource service."""

import asyncio
import math
from contextlib import AsyncExitStack
from typing import AsyncContextManager, Optional, Protocol, runtime_checkable

import aiohttp
from aiohttp import ClientSession, ClientTimeout
from pydantic import BaseModel, ConfigDict

from .errors import TransportError
from .logging import DefaultLogger, Logger
from .request_builder import OutboundRequest


def _check_timeout(timeout) -> None:
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise ValueError("Timeout must be a positive number")
    if not math.isfinite(timeout) or timeout <= 0:
        raise ValueError("Timeout must be a positive number")


class TransportResponse(BaseModel):
    """Status code and decoded text body of a response."""

    status: int
    body: str = ""

    model_config = ConfigDict(frozen=True)


@runtime_checkable
class Transport(Protocol):
    """Anything able to send an OutboundRequest and return its response."""

    async def send(self, request: OutboundRequest, read_body: bool = True) -> TransportResponse:
        """
        Send a request and wait for the response.

        Args:
            request: The request to send
            read_body: When False the response body is discarded

        Returns:
            The response status and body

        Raises:
            TransportError: If the request could not be completed
        """
        ...


class AiohttpTransport(AsyncContextManager["AiohttpTransport"]):
    """Transport backed by a single reusable aiohttp ClientSession."""

    DEFAULT_TIMEOUT = 30

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[ClientSession] = None,
        logger: Optional[Logger] = None,
    ):
        _check_timeout(timeout)

        self.timeout = timeout
        self.timeout_obj = ClientTimeout(total=timeout)
        self.session = session
        self.logger = logger or DefaultLogger(name="placeholder-client-transport")
        self._external_session = session is not None
        self._exit_stack: Optional[AsyncExitStack] = None

    async def __aenter__(self) -> "AiohttpTransport":
        self._exit_stack = AsyncExitStack()
        if self.session is None:
            self.session = await self._exit_stack.enter_async_context(
                ClientSession(timeout=self.timeout_obj)
            )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            if self._exit_stack:
                await self._exit_stack.aclose()
        finally:
            self._exit_stack = None
            # An injected session belongs to the caller
            if not self._external_session:
                self.session = None

    async def send(self, request: OutboundRequest, read_body: bool = True) -> TransportResponse:
        if self.session is None:
            raise TransportError("Session not initialized. Use async with context.")
        if self.session.closed:
            raise TransportError("Session is closed")

        self.logger.debug(f"Sending {request.method} request to {request.url}")

        try:
            response = await self.session.request(
                method=request.method,
                url=request.url,
                headers=request.headers,
                data=request.body,
                timeout=self.timeout_obj,
            )
            try:
                body = await response.text() if read_body else ""
            finally:
                response.release()
        except asyncio.TimeoutError as e:
            raise TransportError(f"Request to {request.url} timed out") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"Request to {request.url} failed: {e}") from e
        except UnicodeDecodeError as e:
            raise TransportError(f"Response from {request.url} is not valid text: {e}") from e

        self.logger.debug(f"Received response: status={response.status}")
        return TransportResponse(status=response.status, body=body)

    def update_timeout(self, timeout: float) -> None:
        """Update the timeout used for subsequent requests.

        Args:
            timeout: New timeout value in seconds
        """
        _check_timeout(timeout)

        self.timeout = timeout
        self.timeout_obj = ClientTimeout(total=timeout)
        self.logger.debug(f"Updated timeout to {timeout}s")
