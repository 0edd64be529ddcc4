"""A small FlatBuffers builder and table reader.

Buffers are built back to front, the way the FlatBuffers format expects,
and read in place without decoding more than is asked for.
"""

from __future__ import annotations

import struct

UOFFSET_SIZE = 4
SIZE_PREFIX_SIZE = 4
VTABLE_METADATA_FIELDS = 2


class FlatBufferError(Exception):
    """Raised when a buffer is built wrongly or cannot be read."""


def _read(fmt: str, buf, at: int):
    if at < 0:
        raise FlatBufferError(f"negative offset {at} in buffer")
    try:
        return struct.unpack_from("<" + fmt, buf, at)[0]
    except struct.error as exc:
        raise FlatBufferError(f"cannot read {fmt!r} at offset {at}: {exc}") from exc


def _write(fmt: str, buf, at: int, value) -> None:
    if at < 0:
        raise FlatBufferError(f"negative offset {at} in buffer")
    try:
        struct.pack_into("<" + fmt, buf, at, value)
    except TypeError as exc:
        raise FlatBufferError("buffer is read-only") from exc
    except struct.error as exc:
        raise FlatBufferError(f"cannot write {fmt!r} at offset {at}: {exc}") from exc


def root_position(buf, offset: int = 0) -> int:
    """Return the position of the root table of a finished buffer."""
    return _read("I", buf, offset) + offset


def size_prefixed_root_position(buf, offset: int = 0) -> int:
    """Return the position of the root table of a size-prefixed buffer."""
    return _read("I", buf, offset + SIZE_PREFIX_SIZE) + offset + SIZE_PREFIX_SIZE


class Builder:
    """Builds a FlatBuffer from the end of a growing byte array."""

    def __init__(self, initial_size: int = 0) -> None:
        if initial_size < 0:
            raise FlatBufferError("initial size must not be negative")
        self._buf = bytearray(initial_size)
        self._head = initial_size
        self._minalign = 1
        self._vtable: list[int] | None = None
        self._object_end = 0
        self._finished = False

    # -- low-level placement -------------------------------------------------

    def offset(self) -> int:
        """Return the offset of the current head, measured from the end."""
        return len(self._buf) - self._head

    def _grow(self) -> None:
        old = len(self._buf)
        new_size = max(old * 2, 1)
        grown = bytearray(new_size)
        grown[new_size - old:] = self._buf
        self._buf = grown
        self._head += new_size - old

    def _pad(self, count: int) -> None:
        for _ in range(count):
            self._head -= 1
            self._buf[self._head] = 0

    def prep(self, size: int, additional: int) -> None:
        """Align so that `size` bytes fit after `additional` more bytes."""
        if size > self._minalign:
            self._minalign = size
        align = (~(len(self._buf) - self._head + additional) + 1) & (size - 1)
        while self._head < align + size + additional:
            self._grow()
        self._pad(align)

    def _place(self, fmt: str, value) -> None:
        self._head -= struct.calcsize("<" + fmt)
        struct.pack_into("<" + fmt, self._buf, self._head, value)

    def _prepend(self, fmt: str, value) -> None:
        self.prep(struct.calcsize("<" + fmt), 0)
        self._place(fmt, value)

    def prepend_float32(self, value: float) -> None:
        """Prepend a 32-bit float."""
        self._prepend("f", value)

    def _prepend_uoffset(self, off: int) -> None:
        self.prep(UOFFSET_SIZE, 0)
        if off > self.offset():
            raise FlatBufferError("offset points past the current head")
        self._place("I", self.offset() - off + UOFFSET_SIZE)

    # -- strings ---------------------------------------------------------------

    def create_string(self, text: str) -> int:
        """Write a zero-terminated UTF-8 string and return its offset."""
        if self._vtable is not None:
            raise FlatBufferError("cannot create a string inside an object")
        data = text.encode("utf-8")
        self.prep(UOFFSET_SIZE, len(data) + 1)
        self._place("B", 0)
        self._head -= len(data)
        self._buf[self._head:self._head + len(data)] = data
        self._place("I", len(data))
        return self.offset()

    # -- objects ---------------------------------------------------------------

    def start_object(self, num_fields: int) -> None:
        """Begin a table with room for `num_fields` fields."""
        if self._vtable is not None:
            raise FlatBufferError("objects must not be nested")
        self._vtable = [0] * num_fields
        self._object_end = self.offset()

    def _slot(self, slot: int) -> None:
        if self._vtable is None:
            raise FlatBufferError("no object is being built")
        if not 0 <= slot < len(self._vtable):
            raise FlatBufferError(f"slot {slot} is out of range")
        self._vtable[slot] = self.offset()

    def prepend_int8_slot(self, slot: int, value: int, default: int) -> None:
        """Add a signed byte field unless it equals its default."""
        if value != default:
            self._prepend("b", value)
            self._slot(slot)

    def prepend_uint8_slot(self, slot: int, value: int, default: int) -> None:
        """Add an unsigned byte field unless it equals its default."""
        if value != default:
            self._prepend("B", value)
            self._slot(slot)

    def prepend_uoffset_slot(self, slot: int, offset: int, default: int) -> None:
        """Add a reference field unless it equals its default."""
        if offset != default:
            self._prepend_uoffset(offset)
            self._slot(slot)

    def prepend_struct_slot(self, slot: int, offset: int, default: int) -> None:
        """Record a struct that was just written inline as a field."""
        if offset != default:
            if offset != self.offset():
                raise FlatBufferError("struct must be serialized inline")
            self._slot(slot)

    def end_object(self) -> int:
        """Finish the current table, write its vtable and return its offset."""
        if self._vtable is None:
            raise FlatBufferError("no object is being built")
        self._prepend("i", 0)
        object_offset = self.offset()

        fields = list(self._vtable)
        while fields and fields[-1] == 0:
            fields.pop()
        for field in reversed(fields):
            self._prepend("H", object_offset - field if field else 0)
        self._prepend("H", object_offset - self._object_end)
        self._prepend("H", (len(fields) + VTABLE_METADATA_FIELDS) * 2)

        struct.pack_into(
            "<i", self._buf, len(self._buf) - object_offset, self.offset() - object_offset
        )
        self._vtable = None
        return object_offset

    # -- finishing -------------------------------------------------------------

    def _finish(self, root: int, size_prefix: bool) -> None:
        if self._vtable is not None:
            raise FlatBufferError("cannot finish while an object is open")
        extra = UOFFSET_SIZE + (SIZE_PREFIX_SIZE if size_prefix else 0)
        self.prep(self._minalign, extra)
        self._prepend_uoffset(root)
        if size_prefix:
            self._prepend("I", self.offset())
        self._finished = True

    def finish(self, root: int) -> None:
        """Finish the buffer with `root` as its root table."""
        self._finish(root, False)

    def finish_size_prefixed(self, root: int) -> None:
        """Finish the buffer with a leading 32-bit size."""
        self._finish(root, True)

    def finished_bytes(self) -> bytes:
        """Return the finished buffer."""
        if not self._finished:
            raise FlatBufferError("buffer has not been finished")
        return bytes(self._buf[self._head:])


class Table:
    """A view of a table at a position inside a buffer."""

    def __init__(self, buf, pos: int) -> None:
        self.buf = buf
        self.pos = pos

    def field_offset(self, vtable_offset: int) -> int:
        """Return a field's offset from the table start, or 0 if absent."""
        vtable = self.pos - _read("i", self.buf, self.pos)
        if vtable_offset < _read("H", self.buf, vtable):
            return _read("H", self.buf, vtable + vtable_offset)
        return 0

    def get_int8(self, offset: int) -> int:
        return _read("b", self.buf, offset)

    def get_uint8(self, offset: int) -> int:
        return _read("B", self.buf, offset)

    def get_float32(self, offset: int) -> float:
        return _read("f", self.buf, offset)

    def byte_vector(self, offset: int) -> bytes:
        """Return the bytes of the vector referenced at `offset`."""
        start = offset + _read("I", self.buf, offset)
        length = _read("I", self.buf, start)
        begin = start + UOFFSET_SIZE
        if begin + length > len(self.buf):
            raise FlatBufferError("vector runs past the end of the buffer")
        return bytes(self.buf[begin:begin + length])

    def union(self, offset: int) -> "Table":
        """Return the table referenced by the field at `offset`."""
        at = self.pos + offset
        return Table(self.buf, at + _read("I", self.buf, at))

    def _mutate_slot(self, fmt: str, vtable_offset: int, value) -> bool:
        off = self.field_offset(vtable_offset)
        if not off:
            return False
        _write(fmt, self.buf, self.pos + off, value)
        return True

    def mutate_int8_slot(self, vtable_offset: int, value: int) -> bool:
        """Overwrite a present signed byte field; False if it is absent."""
        return self._mutate_slot("b", vtable_offset, value)

    def mutate_uint8_slot(self, vtable_offset: int, value: int) -> bool:
        """Overwrite a present unsigned byte field; False if it is absent."""
        return self._mutate_slot("B", vtable_offset, value)

    def mutate_float32(self, offset: int, value: float) -> bool:
        """Overwrite a 32-bit float at an absolute offset."""
        _write("f", self.buf, offset, value)
        return True