"""Packets of the status state and the server list response document."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any

from .codec import CodecError, Json, wire
from .packet import Packet

_MISSING = object()


def _get(data: Any, key: str, kind: type, optional: bool = False) -> Any:
    if not isinstance(data, dict):
        raise CodecError(f"Expected a JSON object, got {type(data).__name__}")
    value = data.get(key, _MISSING)
    if value is _MISSING or value is None:
        if optional:
            return None
        raise CodecError(f"Missing field {key!r}")
    if kind is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise CodecError(f"Field {key!r} must be an integer")
        if not -(1 << 31) <= value < (1 << 31):
            raise CodecError(f"Field {key!r} does not fit in 32 bits")
    elif not isinstance(value, kind):
        raise CodecError(f"Field {key!r} must be of type {kind.__name__}")
    return value


@dataclass
class StatusResponsePlayer:
    """One player shown in the server list sample."""

    name: str
    id: uuid.UUID

    def to_data(self) -> dict[str, Any]:
        """Return the JSON object for this player."""
        return {"name": self.name, "id": str(self.id)}

    @classmethod
    def from_data(cls, data: Any) -> StatusResponsePlayer:
        """Build a player from its JSON object."""
        name = _get(data, "name", str)
        raw_id = _get(data, "id", str)
        try:
            player_id = uuid.UUID(raw_id)
        except ValueError as error:
            raise CodecError(f"Invalid UUID {raw_id!r}") from error
        return cls(name=name, id=player_id)


@dataclass
class StatusResponsePlayers:
    """Player counts and an optional sample of names."""

    max: int
    online: int
    sample: list[StatusResponsePlayer] | None = None

    def to_data(self) -> dict[str, Any]:
        """Return the JSON object for the player counts."""
        data: dict[str, Any] = {"max": self.max, "online": self.online}
        if self.sample is not None:
            data["sample"] = [player.to_data() for player in self.sample]
        return data

    @classmethod
    def from_data(cls, data: Any) -> StatusResponsePlayers:
        """Build the player counts from their JSON object."""
        sample = _get(data, "sample", list, optional=True)
        return cls(
            max=_get(data, "max", int),
            online=_get(data, "online", int),
            sample=None if sample is None else [StatusResponsePlayer.from_data(p) for p in sample],
        )


@dataclass
class StatusResponseVersion:
    """The server's version name and protocol number."""

    name: str
    protocol: int

    def to_data(self) -> dict[str, Any]:
        """Return the JSON object for the version."""
        return {"name": self.name, "protocol": self.protocol}

    @classmethod
    def from_data(cls, data: Any) -> StatusResponseVersion:
        """Build the version from its JSON object."""
        return cls(name=_get(data, "name", str), protocol=_get(data, "protocol", int))


@dataclass
class StatusResponse:
    """The document shown in the client's server list."""

    version: StatusResponseVersion
    enforces_secure_chat: bool
    players: StatusResponsePlayers | None = None

    def to_data(self) -> dict[str, Any]:
        """Return the JSON object for the response."""
        data: dict[str, Any] = {"version": self.version.to_data()}
        if self.players is not None:
            data["players"] = self.players.to_data()
        data["enforcesSecureChat"] = self.enforces_secure_chat
        return data

    @classmethod
    def from_data(cls, data: Any) -> StatusResponse:
        """Build the response from its JSON object."""
        players = _get(data, "players", dict, optional=True)
        return cls(
            version=StatusResponseVersion.from_data(_get(data, "version", dict)),
            enforces_secure_chat=_get(data, "enforcesSecureChat", bool),
            players=None if players is None else StatusResponsePlayers.from_data(players),
        )


@dataclass
class ClientboundStatusResponsePacket(Packet, packet_id=0x00):
    """The server's answer to a status request."""

    response: StatusResponse = wire(Json(StatusResponse.from_data, StatusResponse.to_data))