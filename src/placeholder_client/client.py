from contextlib import AsyncExitStack
from typing import (
    AsyncContextManager,
    Callable,
    List,
    Optional,
    Protocol,
    TypeVar,
    runtime_checkable,
)

from aiohttp import ClientSession

from .config import ClientConfig
from .errors import HttpStatusFailure, InvalidArgument, PlaceholderClientError
from .logging import DefaultLogger, Logger
from .models import Comment, Post, Todo, User, decode_list
from .request_builder import build_request
from .result import Result
from .transport import AiohttpTransport, Transport, TransportResponse

T = TypeVar("T")


def is_successful(status: int) -> bool:
    """Return True for 2xx status codes."""
    return 200 <= status < 300


@runtime_checkable
class ResourceApi(Protocol):
    """Operations offered by the resource service client."""

    async def create_user(self, user: User) -> Result[User]: ...

    async def update_user(self, user: User) -> Result[User]: ...

    async def delete_user(self, user_id: int) -> bool: ...

    async def get_all_users(self) -> List[User]: ...

    async def get_user_posts(self, user_id: int) -> Result[List[Post]]: ...

    async def get_post_comments(self, post_id: int) -> Result[List[Comment]]: ...

    async def get_user_todos(self, user_id: int) -> Result[List[Todo]]: ...


class ApiClient(AsyncContextManager["ApiClient"]):
    """Client for the users, posts, comments and todos collections.

    Every operation sends exactly one request and waits for its response.
    Failures are logged and returned as empty results; they are never raised
    to the caller.

    Example:
        async with ApiClient(ClientConfig(base_url=url)) as api:
            users = await api.get_all_users()
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[Transport] = None,
        logger: Optional[Logger] = None,
        session: Optional[ClientSession] = None,
    ):
        """Initialize the client.

        Args:
            config: Connection settings (defaults to ClientConfig())
            transport: Transport to send requests with; an AiohttpTransport
                is built from the config when None
            logger: Logger for reporting failures
            session: Shared aiohttp session for the default transport; it is
                not closed by the client
        """
        self.config = config or ClientConfig()
        self.logger = logger or DefaultLogger(level=self.config.log_level)
        if transport is None:
            transport = AiohttpTransport(
                timeout=self.config.timeout, session=session, logger=self.logger
            )
        self.transport = transport
        self._exit_stack: Optional[AsyncExitStack] = None

    async def __aenter__(self) -> "ApiClient":
        self._exit_stack = AsyncExitStack()
        if hasattr(self.transport, "__aenter__"):
            await self._exit_stack.enter_async_context(self.transport)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            if self._exit_stack:
                await self._exit_stack.aclose()
        finally:
            self._exit_stack = None

    def _user_url(self, user_id: int) -> str:
        return f"{self.config.users_url}/{user_id}"

    async def _send(
        self, method: str, url: str, body: Optional[str] = None, read_body: bool = True
    ) -> TransportResponse:
        request = build_request(url, method, body)
        return await self.transport.send(request, read_body=read_body)

    async def _call(
        self,
        action: str,
        method: str,
        url: str,
        decode: Callable[[str], T],
        body: Optional[str] = None,
    ) -> Result[T]:
        """Send one request and decode a successful response.

        Args:
            action: Description used in failure messages, e.g. "create user"
            method: HTTP method
            url: Target URL
            decode: Callable turning the response text into the result value
            body: JSON request body

        Returns:
            Success with the decoded value, or failure with the error that
            occurred (transport, status or decode)
        """
        try:
            response = await self._send(method, url, body)
            if not is_successful(response.status):
                raise HttpStatusFailure(response.status, url)
            return Result.success(decode(response.body))
        except HttpStatusFailure as e:
            self.logger.error(f"Failed to {action}", status=e.status)
            return Result.failure(e)
        except PlaceholderClientError as e:
            self.logger.error(f"Error trying to {action}: {e}")
            return Result.failure(e)

    async def create_user(self, user: User) -> Result[User]:
        """Create ``user`` on the service and return the stored record."""
        return await self._call(
            "create user", "POST", self.config.users_url, User.from_json, body=user.to_json()
        )

    async def update_user(self, user: User) -> Result[User]:
        """Patch an existing user. Users with a non-positive id are rejected locally."""
        if user.id <= 0:
            error = InvalidArgument(f"Invalid user id for update: {user.id}")
            self.logger.error(str(error))
            return Result.failure(error)

        return await self._call(
            "update user", "PATCH", self._user_url(user.id), User.from_json, body=user.to_json()
        )

    async def delete_user(self, user_id: int) -> bool:
        """Delete a user. The response body is discarded.

        Returns:
            True if the service answered with a 2xx status
        """
        try:
            response = await self._send("DELETE", self._user_url(user_id), read_body=False)
        except PlaceholderClientError as e:
            self.logger.error(f"Error deleting user: {e}", user_id=user_id)
            return False

        if not is_successful(response.status):
            self.logger.error("Failed to delete user", status=response.status, user_id=user_id)
        return is_successful(response.status)

    async def get_all_users(self) -> List[User]:
        """Fetch every user. Returns an empty list when the fetch fails."""
        result = await self._call(
            "fetch users",
            "GET",
            self.config.users_url,
            lambda text: decode_list(User, text),
        )
        return result.value_or([])

    async def get_user_posts(self, user_id: int) -> Result[List[Post]]:
        return await self._call(
            f"fetch posts for user {user_id}",
            "GET",
            f"{self._user_url(user_id)}/posts",
            lambda text: decode_list(Post, text),
        )

    async def get_post_comments(self, post_id: int) -> Result[List[Comment]]:
        return await self._call(
            f"fetch comments for post {post_id}",
            "GET",
            self.config.url_for("posts", post_id, "comments"),
            lambda text: decode_list(Comment, text),
        )

    async def get_user_todos(self, user_id: int) -> Result[List[Todo]]:
        return await self._call(
            f"fetch todos for user {user_id}",
            "GET",
            f"{self._user_url(user_id)}/todos",
            lambda text: decode_list(Todo, text),
        )
