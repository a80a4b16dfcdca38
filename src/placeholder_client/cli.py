"""Command line driver for the placeholder client demonstrations."""

import argparse
import asyncio
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from . import __version__
from .client import ApiClient, ResourceApi
from .config import ClientConfig
from .logging import DefaultLogger, Logger
from .models import User
from .workflows import download_latest_post_comments, fetch_open_todos

SEPARATOR = "#" * 100


def print_separator() -> None:
    print(SEPARATOR)
    print()


async def run_users_demo(api: ResourceApi) -> None:
    """List, create, update and delete users, stopping after a failed create."""
    print("List of users:")
    for user in await api.get_all_users():
        print(user)

    print_separator()

    created = await api.create_user(
        User(id=0, name="John Smith", username="John.Smith", email="smith@example.com")
    )
    print(f"Created: {created.value}")
    if not created.ok:
        print("User creation failed, skipping update and delete.")
        return

    print_separator()

    user = created.value
    user.name = "Steve Goldman"
    updated = await api.update_user(user)
    print(f"Updated: {updated.value}")

    print_separator()

    deleted = await api.delete_user(user.id)
    print(f"Deleted successfully: {deleted}")


async def run_comments_demo(
    api: ResourceApi, user_id: int, output_dir: Optional[Path], logger: Logger
) -> None:
    result = await download_latest_post_comments(api, user_id, output_dir, logger=logger)
    if result.ok:
        download = result.value
        print(f"Saved to file: {download.path} ({download.count} comments)")
    else:
        print(f"Could not save comments for user with id={user_id}: {result.error}")


async def run_todos_demo(api: ResourceApi, user_id: int, logger: Logger) -> None:
    result = await fetch_open_todos(api, user_id, logger=logger)
    if not result.ok:
        return
    if not result.value:
        print(f"No open todos for user with id={user_id}")
        return
    print(f"Open todos for user with id={user_id}:")
    for todo in result.value:
        print(todo)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="placeholder-client",
        description="Demonstration client for the JSONPlaceholder REST service",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--base-url", help="Base URL of the resource service")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Directory for saved comment files (default: current directory)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("users", help="Run the create/update/delete user sequence")

    comments = subparsers.add_parser(
        "comments", help="Save the comments of a user's latest post"
    )
    comments.add_argument("user_id", type=int)

    todos = subparsers.add_parser("todos", help="List a user's open todos")
    todos.add_argument("user_id", type=int)

    run_all = subparsers.add_parser("all", help="Run every demonstration")
    run_all.add_argument("--user-id", type=int, default=1)

    return parser


async def run(args: argparse.Namespace, config: ClientConfig, logger: Logger) -> None:
    async with ApiClient(config, logger=logger) as api:
        if args.command in ("users", "all"):
            await run_users_demo(api)
        if args.command == "all":
            print_separator()
        if args.command in ("comments", "all"):
            await run_comments_demo(api, args.user_id, args.output_dir, logger)
        if args.command == "all":
            print_separator()
        if args.command in ("todos", "all"):
            await run_todos_demo(api, args.user_id, logger)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = ClientConfig.from_env(
            base_url=args.base_url,
            timeout=args.timeout,
            log_level="DEBUG" if args.verbose else None,
        )
    except ValidationError as e:
        parser.error(str(e))

    logger = DefaultLogger(level=config.log_level)
    asyncio.run(run(args, config, logger))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
