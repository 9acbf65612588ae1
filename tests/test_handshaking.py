import pytest

from ocelot.codec import U16, VARINT, BoundedString, CodecError, display_name
from ocelot.handshaking import Intent, ServerboundHandshakePacket


@pytest.mark.parametrize(
    "intent, wire_value",
    [(Intent.STATUS, 1), (Intent.LOGIN, 2), (Intent.TRANSFER, 3)],
)
def test_intent_wire_values(intent, wire_value):
    data = ServerboundHandshakePacket(0, "", 0, intent).serialize()
    assert data[-1] == wire_value


def test_intent_display():
    assert display_name("STATUS") == "Status"
    assert str(Intent.STATUS) == "Status"
    assert str(Intent.LOGIN) == "Login"
    assert str(Intent.TRANSFER) == "Transfer"


def test_minimal_wire_bytes():
    packet = ServerboundHandshakePacket(0, "", 0, Intent.STATUS)
    assert packet.serialize() == b"\x00\x00\x00\x00\x00\x01"


def test_round_trip():
    packet = ServerboundHandshakePacket(
        protocol_version=774,
        server_address="localhost",
        server_port=25565,
        intent=Intent.LOGIN,
    )
    data = packet.serialize()
    assert data[0] == ServerboundHandshakePacket.packet_id
    decoded = ServerboundHandshakePacket.deserialize(data[1:])
    assert decoded == packet
    assert decoded.intent is Intent.LOGIN


def test_unknown_intent_raises():
    payload = (
        VARINT.pack(774)
        + BoundedString(255).pack("localhost")
        + U16.pack(25565)
        + VARINT.pack(9)
    )
    with pytest.raises(CodecError):
        ServerboundHandshakePacket.deserialize(payload)


def test_address_too_long_raises():
    packet = ServerboundHandshakePacket(774, "a" * 256, 25565, Intent.STATUS)
    with pytest.raises(CodecError):
        packet.serialize()


def test_port_out_of_range_raises():
    packet = ServerboundHandshakePacket(774, "localhost", 70000, Intent.STATUS)
    with pytest.raises(CodecError):
        packet.serialize()