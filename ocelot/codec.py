"""Wire codecs for the data types of the Minecraft Java Edition protocol.

A codec writes values to any object with a ``write(bytes)`` method and reads
them from any object with a ``read(size)`` method, such as ``io.BytesIO``.
"""

from __future__ import annotations

import abc
import dataclasses
import enum
import io
import json
import uuid
from typing import Any, Callable, Generic, Sequence, TypeVar

T = TypeVar("T")

MAX_STRING_LENGTH = 32767
CODEC_KEY = "codec"


class CodecError(ValueError):
    """Raised when a value cannot be encoded or wire data is invalid."""


def read_exact(reader: Any, size: int) -> bytes:
    """Read exactly ``size`` bytes from ``reader`` or raise CodecError."""
    if size < 0:
        raise CodecError(f"Invalid read size {size}")
    buffer = bytearray()
    while len(buffer) < size:
        chunk = reader.read(size - len(buffer))
        if not chunk:
            raise CodecError("Unexpected end of data")
        buffer += chunk
    return bytes(buffer)


def _check_integer(value: Any, bits: int, signed: bool) -> int:
    if not isinstance(value, int):
        raise CodecError(f"Expected an integer, got {type(value).__name__}")
    low, high = (-(1 << (bits - 1)), (1 << (bits - 1)) - 1) if signed else (0, (1 << bits) - 1)
    if not low <= value <= high:
        raise CodecError(f"Integer {value} does not fit in {bits} bits")
    return value


def _to_signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    return value - (1 << bits) if value >> (bits - 1) else value


class Codec(abc.ABC, Generic[T]):
    """Encodes values of one protocol type to bytes and back."""

    @abc.abstractmethod
    def encode(self, value: T, writer: Any) -> None:
        """Write ``value`` to ``writer``."""

    @abc.abstractmethod
    def decode(self, reader: Any) -> T:
        """Read one value from ``reader``."""

    def pack(self, value: T) -> bytes:
        """Return the encoded bytes of ``value``."""
        buffer = io.BytesIO()
        self.encode(value, buffer)
        return buffer.getvalue()

    def unpack(self, data: bytes) -> T:
        """Decode one value from the start of ``data``."""
        return self.decode(io.BytesIO(data))


class Integer(Codec[int]):
    """Fixed-size big-endian integer."""

    def __init__(self, size: int, signed: bool) -> None:
        self.size = size
        self.signed = signed

    def encode(self, value: int, writer: Any) -> None:
        _check_integer(value, self.size * 8, self.signed)
        writer.write(value.to_bytes(self.size, "big", signed=self.signed))

    def decode(self, reader: Any) -> int:
        return int.from_bytes(read_exact(reader, self.size), "big", signed=self.signed)


class Boolean(Codec[bool]):
    """A single byte that is 0 or 1."""

    def encode(self, value: bool, writer: Any) -> None:
        writer.write(b"\x01" if value else b"\x00")

    def decode(self, reader: Any) -> bool:
        byte = read_exact(reader, 1)[0]
        if byte == 0:
            return False
        if byte == 1:
            return True
        raise CodecError("Invalid boolean value!")


class _VariableLength(Codec[int]):
    _bits = 32

    def encode(self, value: int, writer: Any) -> None:
        _check_integer(value, self._bits, True)
        remaining = value & ((1 << self._bits) - 1)
        out = bytearray()
        while remaining & ~0x7F:
            out.append((remaining & 0x7F) | 0x80)
            remaining >>= 7
        out.append(remaining)
        writer.write(bytes(out))

    def decode(self, reader: Any) -> int:
        value = 0
        position = 0
        while True:
            byte = read_exact(reader, 1)[0]
            value |= (byte & 0x7F) << position
            if not byte & 0x80:
                break
            position += 7
            if position >= self._bits:
                raise CodecError(f"{type(self).__name__} is too big!")
        return _to_signed(value, self._bits)


class VarInt(_VariableLength):
    """Variable-length 32-bit signed integer."""

    _bits = 32

    def encode(self, value: int, writer: Any) -> None:
        super().encode(value, writer)

    def decode(self, reader: Any) -> int:
        return super().decode(reader)


class VarLong(_VariableLength):
    """Variable-length 64-bit signed integer."""

    _bits = 64

    def encode(self, value: int, writer: Any) -> None:
        super().encode(value, writer)

    def decode(self, reader: Any) -> int:
        return super().decode(reader)


U8 = Integer(1, signed=False)
I8 = Integer(1, signed=True)
U16 = Integer(2, signed=False)
I16 = Integer(2, signed=True)
U32 = Integer(4, signed=False)
I32 = Integer(4, signed=True)
U64 = Integer(8, signed=False)
I64 = Integer(8, signed=True)
BOOL = Boolean()
VARINT = VarInt()
VARLONG = VarLong()


class BoundedString(Codec[str]):
    """UTF-8 string prefixed by its byte length, limited in UTF-16 units."""

    def __init__(self, max_length: int = MAX_STRING_LENGTH) -> None:
        self.max_length = max_length

    def validate(self, value: str) -> str:
        """Return ``value`` if it fits the bound, else raise CodecError."""
        if not isinstance(value, str):
            raise CodecError(f"Expected a string, got {type(value).__name__}")
        try:
            utf16_length = len(value.encode("utf-16-le")) // 2
            utf8_length = len(value.encode("utf-8"))
        except UnicodeEncodeError as error:
            raise CodecError(str(error)) from error
        if (
            utf16_length > self.max_length
            or utf16_length > MAX_STRING_LENGTH
            or utf8_length > self.max_length * 3 + 3
        ):
            raise CodecError("String too long!")
        return value

    def encode(self, value: str, writer: Any) -> None:
        data = self.validate(value).encode("utf-8")
        VARINT.encode(len(data), writer)
        writer.write(data)

    def decode(self, reader: Any) -> str:
        length = VARINT.decode(reader)
        if length < 0:
            raise CodecError(f"Negative string length {length}")
        try:
            text = read_exact(reader, length).decode("utf-8")
        except UnicodeDecodeError as error:
            raise CodecError(str(error)) from error
        return self.validate(text)


STRING = BoundedString()


class Json(Codec[Any]):
    """A value carried as a JSON document inside a bounded string."""

    def __init__(
        self,
        from_data: Callable[[Any], Any] | None = None,
        to_data: Callable[[Any], Any] | None = None,
    ) -> None:
        self.from_data = from_data
        self.to_data = to_data

    def encode(self, value: Any, writer: Any) -> None:
        data = self.to_data(value) if self.to_data is not None else value
        try:
            text = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError) as error:
            raise CodecError(str(error)) from error
        STRING.encode(text, writer)

    def decode(self, reader: Any) -> Any:
        text = STRING.decode(reader)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as error:
            raise CodecError(str(error)) from error
        return self.from_data(data) if self.from_data is not None else data


class PrefixedArray(Codec[list]):
    """A list of items prefixed by its length as a VarInt."""

    def __init__(self, item: Codec) -> None:
        self.item = item

    def encode(self, value: Sequence[Any], writer: Any) -> None:
        VARINT.encode(len(value), writer)
        for element in value:
            self.item.encode(element, writer)

    def decode(self, reader: Any) -> list:
        return self._decode_items(reader, VARINT.decode(reader))

    def _decode_items(self, reader: Any, size: int) -> list:
        if size < 0:
            raise CodecError(f"Negative array length {size}")
        return [self.item.decode(reader) for _ in range(size)]


class BoundedPrefixedArray(PrefixedArray):
    """A prefixed array holding at most ``max_length`` items."""

    def __init__(self, item: Codec, max_length: int) -> None:
        super().__init__(item)
        self.max_length = max_length

    def encode(self, value: Sequence[Any], writer: Any) -> None:
        if len(value) > self.max_length:
            raise CodecError("Array is too long!")
        super().encode(value, writer)

    def decode(self, reader: Any) -> list:
        size = VARINT.decode(reader)
        if size > self.max_length:
            raise CodecError("Array is too long!")
        return self._decode_items(reader, size)


class Optional(Codec[Any]):
    """A value preceded by a boolean telling whether it is present."""

    def __init__(self, item: Codec) -> None:
        self.item = item

    def encode(self, value: Any, writer: Any) -> None:
        if value is None:
            BOOL.encode(False, writer)
        else:
            BOOL.encode(True, writer)
            self.item.encode(value, writer)

    def decode(self, reader: Any) -> Any:
        return self.item.decode(reader) if BOOL.decode(reader) else None


class Uuid(Codec[uuid.UUID]):
    """A UUID as 16 big-endian bytes."""

    def encode(self, value: uuid.UUID, writer: Any) -> None:
        writer.write(value.bytes)

    def decode(self, reader: Any) -> uuid.UUID:
        return uuid.UUID(bytes=read_exact(reader, 16))


class RemainingBytes(Codec[bytes]):
    """Raw bytes running to the end of the data."""

    def encode(self, value: bytes, writer: Any) -> None:
        writer.write(bytes(value))

    def decode(self, reader: Any) -> bytes:
        return bytes(reader.read() or b"")


UUID = Uuid()
REMAINING_BYTES = RemainingBytes()


def display_name(name: str) -> str:
    """Return an enum member name lower-cased with its first letter upper-cased."""
    lowered = name.lower()
    return lowered[:1].upper() + lowered[1:]


class EnumCodec(Codec[enum.Enum]):
    """An enum carried as its value through another codec."""

    def __init__(self, enum_type: type[enum.Enum], via: Codec) -> None:
        self.enum_type = enum_type
        self.via = via

    def encode(self, value: enum.Enum, writer: Any) -> None:
        if not isinstance(value, self.enum_type):
            raise CodecError(f"Expected a member of {self.enum_type.__name__}")
        self.via.encode(value.value, writer)

    def decode(self, reader: Any) -> enum.Enum:
        raw = self.via.decode(reader)
        try:
            return self.enum_type(raw)
        except ValueError:
            raise CodecError(f"Unknown id for enum {self.enum_type.__name__}") from None


def wire(codec: Codec, **kwargs: Any) -> Any:
    """Declare a dataclass field carried on the wire by ``codec``."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[CODEC_KEY] = codec
    return dataclasses.field(metadata=metadata, **kwargs)


class StructCodec(Codec[Any]):
    """A dataclass whose fields, declared with ``wire``, are coded in order."""

    def __init__(self, struct_type: type) -> None:
        if not dataclasses.is_dataclass(struct_type):
            raise TypeError(f"{struct_type.__name__} is not a dataclass")
        self.struct_type = struct_type
        self.fields: list[tuple[str, Codec]] = []
        for field in dataclasses.fields(struct_type):
            codec = field.metadata.get(CODEC_KEY)
            if codec is None:
                raise TypeError(f"Field {field.name!r} of {struct_type.__name__} has no codec")
            self.fields.append((field.name, codec))

    def encode(self, value: Any, writer: Any) -> None:
        for name, codec in self.fields:
            codec.encode(getattr(value, name), writer)

    def decode(self, reader: Any) -> Any:
        return self.struct_type(**{name: codec.decode(reader) for name, codec in self.fields})