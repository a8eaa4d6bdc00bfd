"""Basic usage examples for Socketlink Python SDK."""

import asyncio

from socketlink import SocketlinkClient
from socketlink import SocketlinkConfig
from socketlink import SocketlinkError


async def chat_in_a_room():
    """Join a room, send a message and print what arrives."""

    client = SocketlinkClient(
        client_api_key="your_client_api_key",
        connection_url="https://your-instance.socketlink.io",
        uid="alice",
    )

    @client.on_open
    async def on_open():
        print("Connection is open")
        await client.subscribe_to_room("pub-chatroom")
        await client.send("Hello from alice", "pub-chatroom")

    @client.on_message
    def on_message(data, rid):
        print(f"Message received for room {rid}: {data}")

    @client.on_server_broadcast
    def on_server_broadcast(data):
        print(f"Server broadcast: {data}")

    @client.on_admin_broadcast
    def on_admin_broadcast(data, rid):
        print(f"Admin broadcast for room {rid}: {data}")

    @client.on_error
    def on_error(error):
        print(f"Connection error: {error}")

    @client.on_close
    def on_close():
        print("Connection closed")

    async with client:
        await asyncio.sleep(30)


async def send_in_a_loop():
    """Send a message every second once the socket is open."""

    config = SocketlinkConfig(
        client_api_key="your_client_api_key",
        connection_url="https://your-instance.socketlink.io",
        uid="user2",
        auto_connect=False,
        reconnect_interval=1000,
    )

    async with SocketlinkClient(config=config) as client:
        opened = asyncio.Event()
        client.on_open(opened.set)

        client.connect()
        await opened.wait()
        await client.subscribe_to_room("pub-chatroom")

        for count in range(10):
            if not await client.send(f"Hello #{count} from user2", "pub-chatroom"):
                print("Socket not open, message dropped")
            await asyncio.sleep(1)


async def configuration_from_environment():
    """Read every setting from SOCKETLINK_* variables or a .env file."""

    try:
        client = SocketlinkClient()
    except SocketlinkError as e:
        print(f"Configuration problem: {e}")
        return

    async with client:
        print(client.get_status())
        print(await client.ping_the_server())


if __name__ == "__main__":
    print("=== Chat in a room ===")
    asyncio.run(chat_in_a_room())

    # Uncomment to run other examples
    # print("\n=== Send in a loop ===")
    # asyncio.run(send_in_a_loop())

    # print("\n=== Configuration from environment ===")
    # asyncio.run(configuration_from_environment())
