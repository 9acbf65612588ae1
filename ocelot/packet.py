"""Base class for protocol packets built from dataclasses."""

from __future__ import annotations

import io
from typing import Any, ClassVar, TypeVar

from .codec import VARINT, StructCodec

P = TypeVar("P", bound="Packet")


class Packet:
    """A protocol packet whose dataclass fields are declared with ``wire``.

    Subclasses name their id when they are defined::

        @dataclass
        class Ping(Packet, packet_id=0x01):
            payload: int = wire(I64)
    """

    packet_id: ClassVar[int]

    def __init_subclass__(cls, *, packet_id: int | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if packet_id is None:
            raise TypeError(f"{cls.__name__} must be defined with a packet_id")
        cls.packet_id = packet_id

    @classmethod
    def _struct(cls) -> StructCodec:
        codec = cls.__dict__.get("_struct_codec")
        if codec is None:
            codec = StructCodec(cls)
            cls._struct_codec = codec
        return codec

    def serialize(self) -> bytes:
        """Return the packet id as a VarInt followed by the encoded fields."""
        buffer = io.BytesIO()
        VARINT.encode(self.packet_id, buffer)
        self._struct().encode(self, buffer)
        return buffer.getvalue()

    @classmethod
    def deserialize(cls: type[P], data: Any) -> P:
        """Decode the fields of a packet from the payload that follows its id.

        ``data`` may be bytes or a readable object positioned after the id.
        """
        if isinstance(data, (bytes, bytearray, memoryview)):
            data = io.BytesIO(bytes(data))
        return cls._struct().decode(data)