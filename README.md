# celerity

Building blocks for a Minecraft Java Edition server:

- `celerity.varint`: `encode_varint`, `decode_varint`, `encode_varlong`,
  `decode_varlong` and `encoding_length`. Decoding a value that runs past its
  maximum size raises `VarIntTooBigError`.
- `celerity.bytebuffer`: `ByteBuffer`, a growable byte queue that reads from the
  front and writes to the back. It handles fixed-width integers and floats
  (little-endian unless `big_endian=True`), VarInts and VarLongs, VarInt-prefixed
  UTF-8 strings, modified UTF-8, UUIDs and NBT tag types. Reading past the end
  raises `BufferUnderflowError`.
- `celerity.nbt.tags`: the NBT tag model (`TagType`, `TagEnd`, `TagByte`,
  `TagShort`, `TagInt`, `TagLong`, `TagFloat`, `TagDouble`, `TagString`,
  `TagByteArray`, `TagIntArray`, `TagLongArray`, `TagList`, `TagCompound`,
  `NamedTag`) and `downcast`.
- `celerity.nbt.reader` / `celerity.nbt.writer`: `NBTReader` and `NBTWriter` for
  named (`read_tag`, `write_named_tag`) and nameless (`read_network_tag`,
  `write_tag` without a name) NBT.
- `celerity.nbt.builders`: `TagCompoundBuilder` and `TagListBuilder`, fluent builders.
- `celerity.nbt.json_reader`: `json_to_tag` and `JsonNBTReader`, which turn JSON
  into NBT. Integers get the narrowest integer tag, exact single-precision
  floats a `TagFloat`, booleans a `TagByte`, homogenous arrays of bytes, ints or
  longs the matching array tag, and objects a compound with sorted keys.
- `celerity.compression`: `CompressionType`, `detect_compression_type`,
  `compress` and `decompress` for gzip and zlib.
- `celerity.crypto`: `RSAKeypair` (1024-bit, DER public key, PKCS#1 v1.5
  decryption) and `BufferCrypter` (AES/CFB8 keyed with a 16-byte shared secret).
- `celerity.identifier`: `Identifier`, with `Identifier.parse("ns/name")` and
  `str()` giving `ns:name`.
- `celerity.known_pack`: `KnownPack(namespace, pack_id, version)`.
- `celerity.config`: `ServerConfig` and `ConfigManager`, read from
  `config/server.toml`.
- `celerity.scheduler`: `Scheduler` and `OwnerTrackingScheduler` for delayed and
  repeating tasks run on a background thread.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Round-trip values through a buffer:

```python
from celerity.bytebuffer import ByteBuffer

buf = ByteBuffer()
buf.write_varint(300)
buf.write_string("hello")
assert buf.read_varint() == 300
assert buf.read_string() == "hello"
```

Build an NBT compound, write it and read it back:

```python
from celerity.bytebuffer import ByteBuffer
from celerity.nbt.builders import TagCompoundBuilder
from celerity.nbt.reader import NBTReader
from celerity.nbt.tags import TagInt, TagString
from celerity.nbt.writer import NBTWriter

compound = (
    TagCompoundBuilder("root")
    .add("level", TagInt(5))
    .add("name", TagString("world"))
    .build_named()
)

buf = ByteBuffer()
NBTWriter(buf).write_named_tag(compound)
named = NBTReader(buf).read_tag()
assert named.name == "root"
```

Compress and decompress:

```python
from celerity.compression import CompressionType, compress, decompress

packed = compress(b"payload", CompressionType.ZLIB)
assert decompress(packed) == b"payload"
```

`decompress` returns data unchanged when it does not look like gzip or zlib,
and raises `ValueError` for a corrupt or truncated stream.

Schedule work:

```python
from celerity.scheduler import OwnerTrackingScheduler, Scheduler

scheduler = Scheduler()
task_id = scheduler.schedule_repeating_task(0.0, 0.05, lambda: print("tick"))
scheduler.cancel(task_id)

with OwnerTrackingScheduler(scheduler) as owned:
    owned.schedule_task(1.0, lambda: print("later"))
# leaving the block cancels every task it scheduled

scheduler.shutdown()
```

Delays and intervals are seconds or `timedelta` values. `cancel` returns whether
the task was still pending; `cancel_owner` and `OwnerTrackingScheduler.close`
return how many tasks were cancelled.

## Server configuration

`ServerConfig(server_root)` reads `<server_root>/config/server.toml`. A missing
key, a value of the wrong type or a number outside 0 to 65535 falls back to the
default:

| key                     | default                |
|-------------------------|------------------------|
| `port`                  | `25565`                |
| `compression_threshold` | `256`                  |
| `max_players`           | `64`                   |
| `motd`                  | `"A Minecraft Server"` |
| `favicon`               | `""`                   |

## What this package does not do

It is a library of parts, not a running server. It does not listen for
connections, has no packet definitions or protocol state handling, keeps no
players or data registries, and has no console or command to start it.