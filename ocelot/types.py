"""Composite protocol types: identifiers and block positions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from .codec import Codec, CodecError, BoundedString, read_exact

_IDENTIFIER_STRING = BoundedString(32767)


@dataclass(frozen=True)
class Identifier:
    """A namespaced identifier such as ``minecraft:overworld``."""

    value: str

    NAMESPACE_PATTERN: ClassVar[str] = "[a-z0-9.-_]"
    VALUE_PATTERN: ClassVar[str] = "[a-z0-9.-_/]"
    TOTAL_PATTERN: ClassVar[str] = "[a-z0-9.-_]:[a-z0-9.-_/]"

    def __post_init__(self) -> None:
        _IDENTIFIER_STRING.validate(self.value)

    def __str__(self) -> str:
        return self.value


class IdentifierCodec(Codec[Identifier]):
    """An identifier carried as a bounded string."""

    def encode(self, value: Identifier, writer: Any) -> None:
        _IDENTIFIER_STRING.encode(value.value, writer)

    def decode(self, reader: Any) -> Identifier:
        return Identifier(_IDENTIFIER_STRING.decode(reader))


@dataclass(frozen=True)
class Position:
    """A block position with 26-bit x and z and a 12-bit y."""

    x: int
    y: int
    z: int


def _sign_extend(value: int, bits: int) -> int:
    return value - (1 << bits) if value >> (bits - 1) else value


class PositionCodec(Codec[Position]):
    """A position packed into one 64-bit integer as x, z, y."""

    def encode(self, value: Position, writer: Any) -> None:
        if not all(isinstance(part, int) for part in (value.x, value.y, value.z)):
            raise CodecError("Position coordinates must be integers")
        packed = (
            ((value.x & 0x3FFFFFF) << 38)
            | ((value.z & 0x3FFFFFF) << 12)
            | (value.y & 0xFFF)
        )
        writer.write(packed.to_bytes(8, "big"))

    def decode(self, reader: Any) -> Position:
        packed = int.from_bytes(read_exact(reader, 8), "big")
        return Position(
            x=_sign_extend(packed >> 38, 26),
            y=_sign_extend(packed & 0xFFF, 12),
            z=_sign_extend((packed >> 12) & 0x3FFFFFF, 26),
        )


IDENTIFIER = IdentifierCodec()
POSITION = PositionCodec()