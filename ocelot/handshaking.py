"""Packets of the handshaking state."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .codec import U16, VARINT, BoundedString, EnumCodec, display_name, wire
from .packet import Packet


class Intent(enum.Enum):
    """What the client wants to do after the handshake."""

    STATUS = 1
    LOGIN = 2
    TRANSFER = 3

    def __str__(self) -> str:
        return display_name(self.name.replace("_", ""))


@dataclass
class ServerboundHandshakePacket(Packet, packet_id=0x00):
    """The first packet a client sends."""

    protocol_version: int = wire(VARINT)
    server_address: str = wire(BoundedString(255))
    server_port: int = wire(U16)
    intent: Intent = wire(EnumCodec(Intent, VARINT))