# gamewire

Game messages in the FlatBuffers binary layout, written and read in pure
Python, plus a small TCP backend that receives them. No third-party
dependencies.

What is in the package:

- `gamewire.flatbuf`: a minimal FlatBuffers `Builder` and a read-side
  `Table`. `root_position` and `size_prefixed_root_position` find the root
  table of a finished buffer. A buffer that is built wrongly or cannot be
  read raises `FlatBufferError`.
- `gamewire.sample`: the `Monster` table (position, name, colour), the
  `Vec3` struct and the `Color` enum (`Red`, `Green`, `Blue`), with
  `create_vec3` and `build_monster`.
- `gamewire.network`: the `Envelope` table, which wraps a message in a
  `NetworkUnion` (`NONE`, `Request`), and the `Request` table, which carries
  a `Package` status (`Init`, `Pending`, `CloseConnection`, `Message`), with
  `build_request` and `build_envelope`.
- `gamewire.demo`: encodes a sample monster and prints its name.
- `gamewire.server`: a TCP backend. It reads each connection until the peer
  closes it, decodes the bytes as an envelope and prints the status of any
  request inside.
- `gamewire.client`: builds a request envelope and sends it to the backend.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Building and reading a monster

```python
from gamewire.flatbuf import Builder
from gamewire.sample import Color, Monster, build_monster

builder = Builder(0)
root = build_monster(builder, "MonsterName", (1.0, 2.0, 3.0), Color.Red)
builder.finish(root)
data = builder.finished_bytes()

monster = Monster.from_bytes(data)
print(monster.name())        # MonsterName
pos = monster.pos()
print(pos.x(), pos.y(), pos.z())
print(monster.color())       # Red
```

Each accessor reads only the bytes it needs. Fields that are not in the
buffer read back as follows:

- `pos()` and `name()` return `None`.
- `color()` returns the schema default, `Color.Blue`.
- `Request.status()` returns `Package.Init`.

Values that are not part of an enum come back as plain integers. The
`mutate_*` methods overwrite fields in place. They need a writable buffer
such as a `bytearray`. A slot mutation returns `False` when the field is
absent from the buffer.

`Builder.finish_size_prefixed` writes a buffer with a leading 32-bit size.
Read such a buffer with the `from_size_prefixed_bytes` class methods.

## Request envelopes

```python
from gamewire.client import build_request_envelope
from gamewire.network import Envelope, NetworkUnion, Package

data = build_request_envelope(Package.Pending)
envelope = Envelope.from_bytes(data)
assert envelope.msg_type() is NetworkUnion.Request
print(envelope.request().status())   # Pending
```

`Envelope.msg()` returns the carried message as a raw `Table`.
`Envelope.request()` returns a `Request` only when the union type is
`Request`.

## Commands

Print the name decoded from a freshly encoded sample monster:

```
gamewire-demo
```

Start the backend. By default it listens on port 8000 on all addresses.
Stop it with Ctrl-C or SIGTERM.

```
gamewire-server
gamewire-server --debug --host 127.0.0.1 --port 9000
```

Send a request envelope to a running backend:

```
gamewire-client
gamewire-client --host localhost --port 8000 --status CloseConnection
```

By default the client sends to `localhost:8000` with status `Pending`. If
the connection fails, it reports `write to server failed` and exits with
status 1.

For each packet, the backend:

- logs its size at debug level;
- prints the status name of any request inside, for example `Pending`, or
  `Package(n)` for an unknown value;
- logs and skips packets that cannot be decoded.

## What it does not do

- The backend never replies. It does not keep connections open for more
  than one message, and it stores nothing. Each connection carries exactly
  one envelope, ended by the client closing the socket.
- Messages are not framed on the wire, so a size-prefixed buffer is not
  what the backend expects.
- The builder supports only what these schemas need: strings, inline
  structs, 8-bit scalar fields, 32-bit floats and table references. It has
  no general vectors and no nested tables under construction.