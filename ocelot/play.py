"""Packets of the play state."""

from __future__ import annotations

from dataclasses import dataclass

from .codec import (
    BOOL,
    I8,
    I32,
    I64,
    U8,
    VARINT,
    Optional,
    PrefixedArray,
    StructCodec,
    wire,
)
from .packet import Packet
from .types import IDENTIFIER, POSITION, Identifier, Position


@dataclass(frozen=True)
class DeathLocation:
    """Where the player last died."""

    dimension_name: Identifier = wire(IDENTIFIER)
    location: Position = wire(POSITION)


DEATH_LOCATION = StructCodec(DeathLocation)


@dataclass
class ClientboundLoginPacket(Packet, packet_id=0x30):
    """The server puts the player into the world."""

    entity_id: int = wire(I32)
    hardcore: bool = wire(BOOL)
    dimensions: list = wire(PrefixedArray(IDENTIFIER))
    max_players: int = wire(VARINT)
    view_distance: int = wire(VARINT)
    simulation_distance: int = wire(VARINT)
    reduced_debug_info: bool = wire(BOOL)
    enable_respawn_screen: bool = wire(BOOL)
    do_limited_crafting: bool = wire(BOOL)
    # Index into the dimension types sent in the registry data.
    dimension_type: int = wire(VARINT)
    dimension_name: Identifier = wire(IDENTIFIER)
    hashed_seed: int = wire(I64)
    game_mode: int = wire(U8)
    # -1 when undefined; used by the game mode switcher.
    previous_game_mode: int = wire(I8)
    is_debug: bool = wire(BOOL)
    is_flat: bool = wire(BOOL)
    death_location: DeathLocation | None = wire(Optional(DEATH_LOCATION))
    portal_cooldown: int = wire(VARINT)
    sea_level: int = wire(VARINT)
    enforces_secure_chat: bool = wire(BOOL)