import asyncio

from aiohttp import ClientSession, TCPConnector

from placeholder_client.client import ApiClient
from placeholder_client.config import ClientConfig
from placeholder_client.workflows import download_latest_post_comments, fetch_open_todos


async def main():
    # One shared session for both clients
    # - Limit connection pool size
    # - Cache DNS lookups
    shared_session = ClientSession(
        connector=TCPConnector(
            limit=10,  # Maximum number of connections
            ttl_dns_cache=300,  # DNS cache TTL in seconds
        ),
    )

    async with shared_session:
        config = ClientConfig(base_url="https://jsonplaceholder.typicode.com")

        # The client won't close a session it was given
        async with ApiClient(config, session=shared_session) as client:
            download = await download_latest_post_comments(client, user_id=1)
            if download.ok:
                print(f"Saved {download.value.count} comments to {download.value.path}")

        async with ApiClient(config, session=shared_session) as client:
            todos = await fetch_open_todos(client, user_id=1)
            for todo in todos.value_or([]):
                print(todo)


# Run the example
asyncio.run(main())
