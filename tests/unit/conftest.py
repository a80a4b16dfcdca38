import io
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp import ClientSession

from placeholder_client.config import ClientConfig
from placeholder_client.logging import Logger
from placeholder_client.result import Result
from placeholder_client.transport import TransportResponse


@pytest.fixture
def base_url():
    return "https://api.example.com"


@pytest.fixture
def config(base_url):
    return ClientConfig(base_url=base_url, timeout=5)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for var in ClientConfig.ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def log_stream():
    return io.StringIO()


@pytest.fixture
def logger(log_stream):
    """Debug level logger writing into ``log_stream``."""
    return Logger(name="placeholder-client-test", level=logging.DEBUG, stream=log_stream)


class FakeTransport:
    """Transport returning canned responses and recording what was sent."""

    def __init__(self, responses=None, error=None):
        self.responses = list(responses or [])
        self.error = error
        self.requests = []

    async def send(self, request, read_body=True):
        self.requests.append((request, read_body))
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


@pytest.fixture
def fake_transport_factory():
    """
    Factory fixture creating a FakeTransport.

    Responses may be given as TransportResponse objects or (status, body) tuples.
    """

    def _create_transport(*responses, error=None):
        prepared = [
            r if isinstance(r, TransportResponse) else TransportResponse(status=r[0], body=r[1])
            for r in responses
        ]
        return FakeTransport(prepared, error=error)

    return _create_transport


class FakeApi:
    """In-memory ResourceApi used to drive the workflows and the CLI."""

    def __init__(
        self,
        users=None,
        created=None,
        updated=None,
        deleted=True,
        posts=None,
        comments=None,
        todos=None,
    ):
        self.users = users or []
        self.created = created
        self.updated = updated
        self.deleted = deleted
        self.posts = posts if posts is not None else Result.success([])
        self.comments = comments if comments is not None else Result.success([])
        self.todos = todos if todos is not None else Result.success([])
        self.calls = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None

    async def create_user(self, user):
        self.calls.append(("create_user", user.id))
        return self.created

    async def update_user(self, user):
        self.calls.append(("update_user", user.id))
        return self.updated

    async def delete_user(self, user_id):
        self.calls.append(("delete_user", user_id))
        return self.deleted

    async def get_all_users(self):
        self.calls.append(("get_all_users",))
        return self.users

    async def get_user_posts(self, user_id):
        self.calls.append(("get_user_posts", user_id))
        return self.posts

    async def get_post_comments(self, post_id):
        self.calls.append(("get_post_comments", post_id))
        return self.comments

    async def get_user_todos(self, user_id):
        self.calls.append(("get_user_todos", user_id))
        return self.todos


@pytest.fixture
def fake_api_factory():
    def _create_api(**kwargs):
        return FakeApi(**kwargs)

    return _create_api


@pytest.fixture
def mock_response_factory():
    """
    Factory fixture to create mock aiohttp responses.
    """

    def _create_response(status=200, text="", raise_error=None):
        mock_response = MagicMock()
        mock_response.status = status
        if raise_error:
            mock_response.text = AsyncMock(side_effect=raise_error)
        else:
            mock_response.text = AsyncMock(return_value=text)
        mock_response.release = MagicMock()
        return mock_response

    return _create_response


@pytest.fixture
def mock_client_session():
    def _create_session(response=None, side_effect=None):
        mock_session = MagicMock(spec=ClientSession)
        mock_session.closed = False
        mock_session.close = AsyncMock()

        if side_effect:
            mock_session.request = AsyncMock(side_effect=side_effect)
        else:
            mock_session.request = AsyncMock(return_value=response)

        return mock_session

    return _create_session
