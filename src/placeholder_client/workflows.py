"""Multi-step read workflows built on the API client.

Both workflows report progress and failures through the logger and
return a ``Result``; printing is left to the caller.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict

from .client import ResourceApi
from .errors import IoError, NoDataError
from .logging import DefaultLogger, Logger
from .models import Comment, Post, Todo, encode_list
from .result import Result

PathLike = Union[str, Path]
WORKFLOW_LOGGER_NAME = "placeholder-client-workflows"


class CommentsDownload(BaseModel):
    """Where the comments of a user's latest post were saved."""

    path: Path
    user_id: int
    post_id: int
    count: int

    model_config = ConfigDict(frozen=True)


def _workflow_logger(api: ResourceApi, logger: Optional[Logger]) -> Logger:
    """Use the given logger, else the client's own, else a workflow-scoped default."""
    if logger is not None:
        return logger
    api_logger = getattr(api, "logger", None)
    if isinstance(api_logger, Logger):
        return api_logger
    return DefaultLogger(name=WORKFLOW_LOGGER_NAME)


def select_latest_post(posts: Iterable[Post]) -> Optional[Post]:
    """Return the post with the highest id, the first one seen on ties."""
    latest = None
    for post in posts:
        if latest is None or post.id > latest.id:
            latest = post
    return latest


def comments_filename(user_id: int, post_id: int) -> str:
    return f"user-{user_id}-post-{post_id}-comments.json"


def save_comments(comments: Sequence[Comment], path: PathLike) -> Path:
    """Write comments as a pretty-printed JSON array, replacing any existing file.

    Raises:
        IoError: If the file cannot be written
    """
    path = Path(path)
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(encode_list(comments, indent=2))
            f.write("\n")
    except OSError as e:
        raise IoError(path, e.strerror or str(e)) from e
    return path


async def download_latest_post_comments(
    api: ResourceApi,
    user_id: int,
    directory: Optional[PathLike] = None,
    logger: Optional[Logger] = None,
) -> Result[CommentsDownload]:
    """Save the comments of a user's most recent post to disk.

    The most recent post is the one with the highest id. Comments are written
    to ``user-{user_id}-post-{post_id}-comments.json`` in ``directory``.

    Args:
        api: Client used for the posts and comments requests
        user_id: Owner of the posts
        directory: Output directory (current working directory when None)
        logger: Logger for progress and failures

    Returns:
        The saved download on success. A failure carries NoDataError when
        the user has no posts, the fetch error when comments are unavailable,
        or IoError when the file could not be written.
    """
    logger = _workflow_logger(api, logger)

    posts = await api.get_user_posts(user_id)
    latest = select_latest_post(posts.value_or([]))
    if latest is None:
        error = posts.error or NoDataError(f"No posts found for user with id={user_id}")
        logger.warning(f"No posts found for user with id={user_id}")
        return Result.failure(error)

    logger.debug(f"Latest post for user {user_id}", post_id=latest.id)

    comments = await api.get_post_comments(latest.id)
    if not comments.ok:
        logger.error(f"Failed to fetch comments for post id={latest.id}")
        return Result.failure(comments.error)

    path = Path(directory or Path.cwd()) / comments_filename(user_id, latest.id)
    try:
        save_comments(comments.value, path)
    except IoError as e:
        logger.error(f"Failed to save comments to file {path.name}: {e}")
        return Result.failure(e)

    logger.info(f"Saved to file: {path.name}", comments=len(comments.value))
    return Result.success(
        CommentsDownload(
            path=path, user_id=user_id, post_id=latest.id, count=len(comments.value)
        )
    )


def select_open_todos(todos: Iterable[Todo]) -> List[Todo]:
    """Keep the todos that are not completed, in their original order."""
    return [todo for todo in todos if not todo.completed]


async def fetch_open_todos(
    api: ResourceApi, user_id: int, logger: Optional[Logger] = None
) -> Result[List[Todo]]:
    """Fetch a user's todos and keep the open ones.

    An empty success means the user has no open todos.
    """
    logger = _workflow_logger(api, logger)

    todos = await api.get_user_todos(user_id)
    if not todos.ok:
        logger.error(f"Failed to fetch todos for user {user_id}")
        return todos

    open_todos = select_open_todos(todos.value)
    logger.debug(f"Found {len(open_todos)} open todos", user_id=user_id)
    return Result.success(open_todos)
