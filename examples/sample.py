import asyncio

from placeholder_client.client import ApiClient
from placeholder_client.config import ClientConfig
from placeholder_client.models import User

BASE_URL = "https://jsonplaceholder.typicode.com"


async def main():
    async with ApiClient(ClientConfig(base_url=BASE_URL, timeout=10)) as client:
        for user in await client.get_all_users():
            print(user)

        created = await client.create_user(User(name="Jane Doe", username="jdoe", email="jane@example.com"))
        if created.ok:
            print(f"Created: {created.value}")


# Run the async code
asyncio.run(main())
