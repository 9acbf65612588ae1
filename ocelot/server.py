"""A small protocol server that walks clients through login and configuration."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import enum
import io
import sys
import uuid
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from .codec import VARINT, CodecError, display_name
from .configuration import (
    ClientboundFinishConfigurationPacket,
    ClientboundKnownPacksPacket,
    KnownPack,
    ServerboundAcknowledgeFinishConfigurationPacket,
    ServerboundClientInformationPacket,
    ServerboundKnownPacksPacket,
    ServerboundPluginMessagePacket,
)
from .handshaking import Intent, ServerboundHandshakePacket
from .login import (
    ClientboundLoginSuccessPacket,
    ServerboundLoginAcknowledgedPacket,
    ServerboundLoginStartPacket,
)
from .packet import Packet
from .play import ClientboundLoginPacket
from .types import Identifier

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 25565
_MAX_VARINT_BYTES = 5


class ConnectionState(enum.Enum):
    """The protocol state a connection is in."""

    HANDSHAKING = enum.auto()
    STATUS = enum.auto()
    LOGIN = enum.auto()
    CONFIGURATION = enum.auto()
    PLAY = enum.auto()

    def __str__(self) -> str:
        return display_name(self.name)


@dataclass
class Player:
    """What the server knows about the client on one connection."""

    username: str | None = None
    uuid: uuid.UUID | None = None
    state: ConnectionState = ConnectionState.HANDSHAKING


def format_packet_name(full_packet_name: str) -> str:
    """Turn a packet class name into words, dropping direction and suffix."""
    name = full_packet_name.split("::")[-1].split(".")[-1]
    name = name.removeprefix("Clientbound").removeprefix("Serverbound")
    if not name.endswith("Packet"):
        raise ValueError(f"{full_packet_name!r} is not a packet name")
    name = name.removesuffix("Packet")
    return "".join(
        f" {char}" if position and char.isupper() else char
        for position, char in enumerate(name)
    )


def frame_packet(packet: Packet) -> bytes:
    """Return the serialized packet prefixed by its length as a VarInt."""
    data = packet.serialize()
    return VARINT.pack(len(data)) + data


async def read_frame(reader: asyncio.StreamReader) -> bytes:
    """Read one length-prefixed frame and return its contents."""
    prefix = bytearray()
    while True:
        try:
            byte = await reader.readexactly(1)
        except asyncio.IncompleteReadError as error:
            raise CodecError("Unexpected end of data") from error
        prefix += byte
        if not byte[0] & 0x80:
            break
        if len(prefix) >= _MAX_VARINT_BYTES:
            raise CodecError("VarInt is too big!")
    size = VARINT.unpack(bytes(prefix))
    if size < 0:
        raise CodecError(f"Negative frame length {size}")
    try:
        return await reader.readexactly(size)
    except asyncio.IncompleteReadError as error:
        raise CodecError("Unexpected end of data") from error


def _flag(value: bool) -> str:
    return str(bool(value)).lower()


class Connection:
    """Serves one client over a stream pair."""

    def __init__(self, reader: asyncio.StreamReader, writer: Any) -> None:
        self.reader = reader
        self.writer = writer
        self.player = Player()
        self._handlers: dict[
            tuple[ConnectionState, int], Callable[[bytes], Awaitable[None]]
        ] = {
            (ConnectionState.HANDSHAKING, 0x00): self._handshake,
            (ConnectionState.LOGIN, 0x00): self._login_start,
            (ConnectionState.LOGIN, 0x03): self._login_acknowledged,
            (ConnectionState.CONFIGURATION, 0x00): self._client_information,
            (ConnectionState.CONFIGURATION, 0x02): self._plugin_message,
            (ConnectionState.CONFIGURATION, 0x07): self._known_packs,
            (ConnectionState.CONFIGURATION, 0x03): self._acknowledge_finish_configuration,
        }

    async def send_packet(self, packet: Packet) -> None:
        """Frame and send ``packet`` to the client."""
        self.writer.write(frame_packet(packet))
        await self.writer.drain()
        print(
            f"[Server -> Client] {format_packet_name(type(packet).__name__)} "
            f"(State: {self.player.state}, ID: {packet.packet_id})"
        )

    def _read(self, packet_type: type[Packet], payload: bytes) -> Any:
        packet = packet_type.deserialize(payload)
        print(
            f"[Client -> Server] {format_packet_name(packet_type.__name__)} "
            f"(State: {self.player.state}, ID: {packet.packet_id})"
        )
        return packet

    async def handle_packet(self, packet_id: int, payload: bytes) -> None:
        """Act on one packet whose id has already been read."""
        handler = self._handlers.get((self.player.state, packet_id))
        if handler is None:
            print(
                f"[Client -> Server] ??? (State: {self.player.state}, ID: {packet_id})",
                file=sys.stderr,
            )
            return
        await handler(payload)

    async def run(self) -> None:
        """Handle frames until the stream ends or a frame cannot be read."""
        while True:
            try:
                frame = await read_frame(self.reader)
            except CodecError:
                print("An error occured!", file=sys.stderr)
                break
            buffer = io.BytesIO(frame)
            packet_id = VARINT.decode(buffer)
            await self.handle_packet(packet_id, buffer.read())

    async def _handshake(self, payload: bytes) -> None:
        packet = self._read(ServerboundHandshakePacket, payload)
        print("Packet Data:")
        print(f"Protocol Version: {packet.protocol_version}")
        print(f"Server Address: {packet.server_address}")
        print(f"Server Port: {packet.server_port}")
        print(f"Intent: {packet.intent}")
        print()
        self.player.state = (
            ConnectionState.STATUS if packet.intent is Intent.STATUS else ConnectionState.LOGIN
        )

    async def _login_start(self, payload: bytes) -> None:
        packet = self._read(ServerboundLoginStartPacket, payload)
        print("Packet Data:")
        print(f"Name: {packet.name}")
        print(f"Player UUID: {packet.player_uuid}")
        print()
        self.player.username = packet.name
        self.player.uuid = packet.player_uuid
        await self.send_packet(
            ClientboundLoginSuccessPacket(
                uuid=packet.player_uuid, username=packet.name, properties=[]
            )
        )

    async def _login_acknowledged(self, payload: bytes) -> None:
        self._read(ServerboundLoginAcknowledgedPacket, payload)
        self.player.state = ConnectionState.CONFIGURATION

    async def _client_information(self, payload: bytes) -> None:
        packet = self._read(ServerboundClientInformationPacket, payload)
        print("Packet Data:")
        print(f"Locale: {packet.locale}")
        print(f"View Distance: {packet.view_distance}")
        print(f"Chat Mode: {packet.chat_mode}")
        print(f"Chat Colors: {_flag(packet.chat_colors)}")
        print(f"Displayed Skin Parts: {packet.displayed_skin_parts}")
        print(f"Main Hand: {packet.main_hand}")
        print(f"Enable text filtering: {_flag(packet.enable_text_filtering)}")
        print(f"Allow server listings: {_flag(packet.allow_server_listings)}")
        print(f"Particle Status: {packet.particle_status}")
        await self.send_packet(
            ClientboundKnownPacksPacket(
                known_packs=[KnownPack(namespace="minecraft", id="core", version="1.21.11")]
            )
        )

    async def _plugin_message(self, payload: bytes) -> None:
        packet = self._read(ServerboundPluginMessagePacket, payload)
        print(f"Channel: {packet.channel}")
        print(f"Data: {list(packet.data)}")

    async def _known_packs(self, payload: bytes) -> None:
        packet = self._read(ServerboundKnownPacksPacket, payload)
        print("Packet Data:")
        print("Known Packs:")
        for pack in packet.known_packs:
            print(f"Namespace: {pack.namespace}")
            print(f"ID: {pack.id}")
            print(f"Version: {pack.version}")
        await self.send_packet(ClientboundFinishConfigurationPacket())

    async def _acknowledge_finish_configuration(self, payload: bytes) -> None:
        self._read(ServerboundAcknowledgeFinishConfigurationPacket, payload)
        self.player.state = ConnectionState.PLAY
        await self.send_packet(
            ClientboundLoginPacket(
                entity_id=0,
                hardcore=False,
                dimensions=[],
                max_players=1,
                view_distance=8,
                simulation_distance=8,
                reduced_debug_info=False,
                enable_respawn_screen=False,
                do_limited_crafting=False,
                dimension_type=0,
                dimension_name=Identifier("minecraft:overworld"),
                hashed_seed=0,
                game_mode=0,
                previous_game_mode=-1,
                is_debug=False,
                is_flat=False,
                death_location=None,
                portal_cooldown=0,
                sea_level=60,
                enforces_secure_chat=False,
            )
        )


async def _handle_client(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
    try:
        await Connection(reader, writer).run()
    except (CodecError, ValueError) as error:
        print(f"Connection failed: {error}", file=sys.stderr)
    finally:
        writer.close()
        with contextlib.suppress(OSError, ConnectionError):
            await writer.wait_closed()


async def serve(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Accept clients on ``host``:``port`` until cancelled."""
    server = await asyncio.start_server(_handle_client, host, port)
    print(f"Listening on {host}:{port}")
    async with server:
        await server.serve_forever()


def main(argv: list[str] | None = None) -> int:
    """Run the server from the command line."""
    parser = argparse.ArgumentParser(description="Run the protocol server.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)
    try:
        asyncio.run(serve(args.host, args.port))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())