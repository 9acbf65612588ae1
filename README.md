# ocelot

A small toolkit for the Minecraft Java Edition network protocol: binary codecs
for the protocol's data types, packet classes for the handshaking, status,
login, configuration and play states, and a minimal asyncio server. The server
takes a client through the handshake, login and configuration, then sends it
the play login packet.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
ocelot
ocelot --host 127.0.0.1 --port 25565
```

By default the server listens on `0.0.0.0:25565`. It prints every packet it
sends or receives, and the fields of the packets it understands. Packets it
does not know are reported on standard error as `???` with their state and id.

Per connection, the server:

- reads the handshake and moves to the status or login state according to the
  intent (a transfer intent is treated as login);
- answers a login start with a login success carrying the same name and UUID,
  and moves to configuration on the login acknowledgement;
- answers client information with a known packs packet listing
  `minecraft:core` version `1.21.11`, answers the client's known packs with
  finish configuration, and prints plugin messages;
- on the acknowledgement of finish configuration, moves to play and sends the
  play login packet for `minecraft:overworld`.

The server's pieces can also be used directly: `ocelot.server.Connection`
serves one client over an asyncio stream pair, `serve(host, port)` runs the
listener, `frame_packet(packet)` prefixes a serialized packet with its length,
`read_frame(reader)` reads one such frame, and `format_packet_name(name)` turns
a packet class name such as `ClientboundLoginSuccessPacket` into
`Login Success`.

## Using the codecs

Every codec in `ocelot.codec` has `encode(value, writer)` and
`decode(reader)` methods that work on binary streams. It also has `pack(value)`
and `unpack(data)` methods that work on `bytes`. Invalid values and invalid
wire data raise `CodecError`, a subclass of `ValueError`.

```python
from ocelot.codec import VarInt, BoundedString, CodecError

assert VarInt().pack(25565) == b"\xdd\xc7\x01"
assert VarInt().unpack(b"\xff\xff\xff\xff\x0f") == -1

name = BoundedString(16)
data = name.pack("Steve")
assert name.unpack(data) == "Steve"

try:
    name.pack("x" * 17)
except CodecError:
    pass  # too long for the bound
```

Other codecs are `Integer`, `Boolean`, `VarLong`, `Json`, `PrefixedArray`,
`BoundedPrefixedArray`, `Optional`, `Uuid`, `RemainingBytes`, `EnumCodec` and
`StructCodec`. `StructCodec` codes a dataclass whose fields are declared with
`wire(codec)`. `ocelot.types` adds `Identifier` and `Position` together with
`IdentifierCodec` and `PositionCodec`.

## Packets

Packets are dataclasses derived from `ocelot.packet.Packet`. Each one knows its
id. `serialize()` returns the packet id as a VarInt followed by the fields, and
`deserialize(data)` reads the fields back from the payload that follows the id:

```python
import uuid
from ocelot.login import ServerboundLoginStartPacket

packet = ServerboundLoginStartPacket(name="Steve", player_uuid=uuid.uuid4())
payload = packet.serialize()
decoded = ServerboundLoginStartPacket.deserialize(payload[1:])
assert decoded == packet
```

The packet modules are `ocelot.handshaking`, `ocelot.status`, `ocelot.login`,
`ocelot.configuration` and `ocelot.play`.

## What it does not do

The server is a test bed, not a playable server. It does not answer status
requests, so clients see no entry in their server list; it sends no registry
data and handles no packets in the play state, so a client that reaches play
goes no further. There is no encryption, compression, authentication or world
storage.