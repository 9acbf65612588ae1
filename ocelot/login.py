"""Packets of the login state."""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from .codec import (
    STRING,
    UUID,
    BoundedPrefixedArray,
    BoundedString,
    StructCodec,
    wire,
)
from .packet import Packet


@dataclass
class Properties:
    """A signed profile property such as a skin texture."""

    name: str = wire(BoundedString(64))
    value: str = wire(STRING)


PROPERTIES = StructCodec(Properties)


@dataclass
class ServerboundLoginStartPacket(Packet, packet_id=0x00):
    """The client's name and UUID at the start of login."""

    name: str = wire(BoundedString(16))
    player_uuid: uuid.UUID = wire(UUID)


@dataclass
class ServerboundLoginAcknowledgedPacket(Packet, packet_id=0x03):
    """The client accepts the login success and moves to configuration."""


@dataclass
class ClientboundLoginSuccessPacket(Packet, packet_id=0x02):
    """The server accepts the login."""

    uuid: uuid.UUID = wire(UUID)
    username: str = wire(BoundedString(16))
    properties: list = wire(BoundedPrefixedArray(PROPERTIES, 16), default_factory=list)