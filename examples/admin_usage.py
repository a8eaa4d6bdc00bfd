"""Administration examples for Socketlink Python SDK."""

import asyncio

from socketlink import MessagingAction
from socketlink import SocketlinkClient
from socketlink import SocketlinkHTTPError
from socketlink import SocketlinkValidationError


def admin_client() -> SocketlinkClient:
    # Admin calls do not need the live socket
    return SocketlinkClient(
        admin_api_key="your_admin_api_key",
        connection_url="https://your-instance.socketlink.io",
        auto_connect=False,
    )


async def inspect_the_server():
    """Print metrics, rooms and subscriptions."""

    async with admin_client() as client:
        print(await client.ping_the_server())
        print(await client.get_usage_metrics())

        rooms = await client.fetch_all_rooms()
        print(f"Rooms: {rooms}")

        users = await client.get_all_users_in_given_rooms(["pub-chatroom"])
        print(f"Users in pub-chatroom: {users}")

        print(await client.get_subscriptions_for_all_users())
        print(await client.get_orphan_users())


async def moderate():
    """Broadcast, ban and mute users."""

    async with admin_client() as client:
        await client.broadcast_message_to_everyone("Maintenance in 10 minutes")
        await client.broadcast_message_to_given_rooms("Please stay on topic", ["pub-chatroom"])
        await client.broadcast_message_to_given_users("Welcome back", ["alice"])

        # Ban in one room, then across the whole server
        await client.ban_users_in_given_rooms("pub-chatroom", ["spammer"])
        await client.ban_users_from_the_server(["spammer"])
        print(await client.get_banned_users())

        await client.enable_disable_messaging_in_rooms_for_given_users(
            MessagingAction.DISABLE, "pub-chatroom", ["noisy"]
        )
        await client.enable_disable_messaging_globally_for_given_users(MessagingAction.DISABLE, ["noisy"])
        print(await client.get_users_with_messaging_disabled())

        await client.unban_users_from_the_server(["spammer"])


async def error_handling():
    """Validation errors are raised before any request is sent."""

    async with admin_client() as client:
        try:
            await client.ban_users_from_the_server([])
        except SocketlinkValidationError as e:
            print(f"Invalid argument {e.field}: {e.message}")

        try:
            await client.enable_disable_messaging_in_server("pause")
        except SocketlinkValidationError as e:
            print(e.message)

        try:
            await client.sync_mysql()
        except SocketlinkHTTPError as e:
            print(f"Request failed with status {e.status_code}: {e.message}")


if __name__ == "__main__":
    print("=== Inspect the server ===")
    asyncio.run(inspect_the_server())

    # print("\n=== Moderate ===")
    # asyncio.run(moderate())

    # print("\n=== Error handling ===")
    # asyncio.run(error_handling())
