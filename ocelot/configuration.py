"""Packets of the configuration state."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .codec import (
    BOOL,
    I8,
    REMAINING_BYTES,
    STRING,
    U8,
    VARINT,
    BoundedString,
    EnumCodec,
    PrefixedArray,
    StructCodec,
    display_name,
    wire,
)
from .packet import Packet


class _Displayed(enum.Enum):
    def __str__(self) -> str:
        return display_name(self.name.replace("_", ""))


class ChatMode(_Displayed):
    """Which chat messages the client wants to see."""

    ENABLED = 0
    COMMANDS_ONLY = 1
    HIDDEN = 2


class MainHand(_Displayed):
    """The player's main hand."""

    LEFT = 0
    RIGHT = 1


class ParticleStatus(_Displayed):
    """How many particles the client shows."""

    ALL = 0
    DECREASED = 1
    MINIMAL = 2


@dataclass
class KnownPack:
    """A data pack both sides may share."""

    namespace: str = wire(STRING)
    id: str = wire(STRING)
    version: str = wire(STRING)


KNOWN_PACK = StructCodec(KnownPack)


@dataclass
class ClientboundFinishConfigurationPacket(Packet, packet_id=0x03):
    """The server ends the configuration state."""


@dataclass
class ServerboundClientInformationPacket(Packet, packet_id=0x00):
    """The client's settings."""

    locale: str = wire(BoundedString(16))
    view_distance: int = wire(I8)
    chat_mode: ChatMode = wire(EnumCodec(ChatMode, VARINT))
    chat_colors: bool = wire(BOOL)
    displayed_skin_parts: int = wire(U8)
    main_hand: MainHand = wire(EnumCodec(MainHand, VARINT))
    enable_text_filtering: bool = wire(BOOL)
    allow_server_listings: bool = wire(BOOL)
    particle_status: ParticleStatus = wire(EnumCodec(ParticleStatus, VARINT))


@dataclass
class ServerboundPluginMessagePacket(Packet, packet_id=0x02):
    """A message on a plugin channel; the data runs to the end of the packet."""

    channel: str = wire(STRING)
    data: bytes = wire(REMAINING_BYTES)


@dataclass
class ServerboundAcknowledgeFinishConfigurationPacket(Packet, packet_id=0x03):
    """The client accepts the end of configuration and moves to play."""


@dataclass
class ClientboundKnownPacksPacket(Packet, packet_id=0x0E):
    """The data packs the server knows."""

    known_packs: list = wire(PrefixedArray(KNOWN_PACK))


@dataclass
class ServerboundKnownPacksPacket(Packet, packet_id=0x07):
    """The data packs the client knows."""

    known_packs: list = wire(PrefixedArray(KNOWN_PACK))