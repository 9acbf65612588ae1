import dataclasses
import enum
import io
import uuid

import pytest

from ocelot.codec import (
    BOOL,
    I16,
    I32,
    U8,
    U16,
    VARINT,
    VARLONG,
    BoundedPrefixedArray,
    BoundedString,
    CodecError,
    EnumCodec,
    Json,
    Optional,
    PrefixedArray,
    RemainingBytes,
    StructCodec,
    Uuid,
    display_name,
    read_exact,
    wire,
)

VARINT_CASES = [
    (0, [0x00]),
    (1, [0x01]),
    (2, [0x02]),
    (127, [0x7F]),
    (128, [0x80, 0x01]),
    (255, [0xFF, 0x01]),
    (25565, [0xDD, 0xC7, 0x01]),
    (2097151, [0xFF, 0xFF, 0x7F]),
    (2147483647, [0xFF, 0xFF, 0xFF, 0xFF, 0x07]),
    (-1, [0xFF, 0xFF, 0xFF, 0xFF, 0x0F]),
    (-2147483648, [0x80, 0x80, 0x80, 0x80, 0x08]),
]

VARLONG_CASES = [
    (0, [0x00]),
    (1, [0x01]),
    (2, [0x02]),
    (127, [0x7F]),
    (128, [0x80, 0x01]),
    (255, [0xFF, 0x01]),
    (2147483647, [0xFF, 0xFF, 0xFF, 0xFF, 0x07]),
    (9223372036854775807, [0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0x7F]),
    (-1, [0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0x01]),
    (-2147483648, [0x80, 0x80, 0x80, 0x80, 0xF8, 0xFF, 0xFF, 0xFF, 0xFF, 0x01]),
    (-9223372036854775808, [0x80, 0x80, 0x80, 0x80, 0x80, 0x80, 0x80, 0x80, 0x80, 0x01]),
]


@pytest.mark.parametrize("value, expected", VARINT_CASES)
def test_encode_varint(value, expected):
    assert VARINT.pack(value) == bytes(expected)


@pytest.mark.parametrize("value, data", VARINT_CASES)
def test_decode_varint(value, data):
    assert VARINT.unpack(bytes(data)) == value


@pytest.mark.parametrize("value, expected", VARLONG_CASES)
def test_encode_varlong(value, expected):
    assert VARLONG.pack(value) == bytes(expected)


@pytest.mark.parametrize("value, data", VARLONG_CASES)
def test_decode_varlong(value, data):
    assert VARLONG.unpack(bytes(data)) == value


def test_varint_too_big():
    with pytest.raises(CodecError):
        VARINT.unpack(bytes([0x80, 0x80, 0x80, 0x80, 0x80, 0x01]))


def test_varlong_too_big():
    with pytest.raises(CodecError):
        VARLONG.unpack(bytes([0x80] * 10 + [0x01]))


def test_varint_out_of_range():
    with pytest.raises(CodecError):
        VARINT.pack(2147483648)


def test_varint_truncated():
    with pytest.raises(CodecError):
        VARINT.unpack(bytes([0x80]))


def test_decode_leaves_rest_of_stream():
    stream = io.BytesIO(bytes([0xDD, 0xC7, 0x01, 0x7F]))
    assert VARINT.decode(stream) == 25565
    assert VARINT.decode(stream) == 127


def test_read_exact_short():
    with pytest.raises(CodecError):
        read_exact(io.BytesIO(b"ab"), 3)


def test_read_exact_returns_bytes():
    assert read_exact(io.BytesIO(b"abcd"), 3) == b"abc"


def test_integers_are_big_endian():
    assert U16.pack(25565) == bytes([0x63, 0xDD])
    assert I32.unpack(I32.pack(-5)) == -5
    assert I16.pack(-1) == b"\xff\xff"


def test_integer_out_of_range():
    with pytest.raises(CodecError):
        U8.pack(256)
    with pytest.raises(CodecError):
        U8.pack(-1)


def test_boolean():
    assert BOOL.pack(True) == b"\x01"
    assert BOOL.pack(False) == b"\x00"
    assert BOOL.unpack(b"\x01") is True
    assert BOOL.unpack(b"\x00") is False


def test_boolean_invalid():
    with pytest.raises(CodecError):
        BOOL.unpack(b"\x02")


def test_bounded_string_round_trip():
    codec = BoundedString(16)
    assert codec.pack("core") == b"\x04core"
    assert codec.unpack(codec.pack("héllo wörld")) == "héllo wörld"


def test_bounded_string_too_long():
    codec = BoundedString(16)
    with pytest.raises(CodecError):
        codec.pack("a" * 17)
    assert codec.validate("a" * 16) == "a" * 16


def test_bounded_string_decode_too_long():
    data = BoundedString(32).pack("a" * 20)
    with pytest.raises(CodecError):
        BoundedString(16).unpack(data)


def test_bounded_string_global_limit():
    with pytest.raises(CodecError):
        BoundedString(40000).validate("a" * 32768)


def test_bounded_string_invalid_utf8():
    with pytest.raises(CodecError):
        BoundedString(16).unpack(b"\x02\xff\xfe")


def test_json_round_trip():
    codec = Json()
    document = {"version": {"name": "1.21.11", "protocol": 774}, "enforcesSecureChat": False}
    assert codec.unpack(codec.pack(document)) == document
    assert codec.pack([1, 2]) == b"\x05[1,2]"


def test_json_conversions():
    codec = Json(from_data=tuple, to_data=list)
    assert codec.unpack(codec.pack((1, 2, 3))) == (1, 2, 3)


def test_json_invalid():
    with pytest.raises(CodecError):
        Json().unpack(BoundedString().pack("{not json"))


def test_prefixed_array():
    codec = PrefixedArray(VARINT)
    assert codec.pack([1, 128]) == bytes([0x02, 0x01, 0x80, 0x01])
    assert codec.unpack(bytes([0x02, 0x01, 0x80, 0x01])) == [1, 128]
    assert codec.unpack(b"\x00") == []


def test_prefixed_array_negative_length():
    with pytest.raises(CodecError):
        PrefixedArray(U8).unpack(VARINT.pack(-1))


def test_bounded_prefixed_array():
    codec = BoundedPrefixedArray(U8, 2)
    assert codec.unpack(codec.pack([3, 4])) == [3, 4]
    with pytest.raises(CodecError):
        codec.pack([1, 2, 3])
    with pytest.raises(CodecError):
        codec.unpack(bytes([0x03, 1, 2, 3]))


def test_optional():
    codec = Optional(U8)
    assert codec.pack(None) == b"\x00"
    assert codec.pack(7) == b"\x01\x07"
    assert codec.unpack(b"\x00") is None
    assert codec.unpack(b"\x01\x07") == 7


def test_uuid():
    value = uuid.UUID("00112233-4455-6677-8899-aabbccddeeff")
    assert Uuid().pack(value) == bytes.fromhex("00112233445566778899aabbccddeeff")
    assert Uuid().unpack(Uuid().pack(value)) == value


def test_remaining_bytes():
    codec = RemainingBytes()
    stream = io.BytesIO(b"\x05rest of data")
    assert U8.decode(stream) == 5
    assert codec.decode(stream) == b"rest of data"
    assert codec.pack(b"abc") == b"abc"


class Intent(enum.Enum):
    STATUS = 1
    LOGIN = 2
    TRANSFER = 3


def test_enum_codec():
    codec = EnumCodec(Intent, VARINT)
    assert codec.pack(Intent.LOGIN) == b"\x02"
    assert codec.unpack(b"\x03") is Intent.TRANSFER


def test_enum_codec_unknown():
    with pytest.raises(CodecError, match="Intent"):
        EnumCodec(Intent, VARINT).unpack(b"\x09")


def test_display_name():
    assert display_name("STATUS") == "Status"
    assert display_name("CommandsOnly") == "Commandsonly"
    assert display_name("") == ""


@dataclasses.dataclass
class Pack:
    namespace: str = wire(BoundedString())
    id: str = wire(BoundedString())
    version: int = wire(VARINT)


def test_struct_codec():
    codec = StructCodec(Pack)
    value = Pack("minecraft", "core", 300)
    data = codec.pack(value)
    assert data == b"\x09minecraft\x04core\xac\x02"
    assert codec.unpack(data) == value


def test_struct_codec_needs_codecs():
    @dataclasses.dataclass
    class Plain:
        value: int

    with pytest.raises(TypeError):
        StructCodec(Plain)


def test_struct_codec_truncated():
    with pytest.raises(CodecError):
        StructCodec(Pack).unpack(b"\x09minecraft")