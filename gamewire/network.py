"""The network schema: an Envelope carrying a union of messages."""

from __future__ import annotations

from enum import IntEnum

from .flatbuf import Builder, Table, root_position, size_prefixed_root_position

_STATUS_FIELD = 4
_MSG_TYPE_FIELD = 4
_MSG_FIELD = 6


class NetworkUnion(IntEnum):
    NONE = 0
    Request = 1

    def __str__(self) -> str:
        return self.name


class Package(IntEnum):
    Init = 0
    Pending = 1
    CloseConnection = 2
    Message = 3

    def __str__(self) -> str:
        return self.name


def _as_enum(enum, value: int):
    try:
        return enum(value)
    except ValueError:
        return value


class Request:
    """A view of a Request table."""

    def __init__(self, buf, pos: int) -> None:
        self._tab = Table(buf, pos)

    @classmethod
    def from_bytes(cls, buf, offset: int = 0) -> "Request":
        return cls(buf, root_position(buf, offset))

    @classmethod
    def from_size_prefixed_bytes(cls, buf, offset: int = 0) -> "Request":
        return cls(buf, size_prefixed_root_position(buf, offset))

    def status(self) -> Package | int:
        o = self._tab.field_offset(_STATUS_FIELD)
        if o:
            return _as_enum(Package, self._tab.get_int8(self._tab.pos + o))
        return Package.Init

    def mutate_status(self, status: int) -> bool:
        return self._tab.mutate_int8_slot(_STATUS_FIELD, int(status))


class Envelope:
    """A view of an Envelope table, the root of every network packet."""

    def __init__(self, buf, pos: int) -> None:
        self._tab = Table(buf, pos)

    @classmethod
    def from_bytes(cls, buf, offset: int = 0) -> "Envelope":
        return cls(buf, root_position(buf, offset))

    @classmethod
    def from_size_prefixed_bytes(cls, buf, offset: int = 0) -> "Envelope":
        return cls(buf, size_prefixed_root_position(buf, offset))

    def msg_type(self) -> NetworkUnion | int:
        o = self._tab.field_offset(_MSG_TYPE_FIELD)
        if o:
            return _as_enum(NetworkUnion, self._tab.get_uint8(self._tab.pos + o))
        return NetworkUnion.NONE

    def mutate_msg_type(self, msg_type: int) -> bool:
        return self._tab.mutate_uint8_slot(_MSG_TYPE_FIELD, int(msg_type))

    def msg(self) -> Table | None:
        """Return the table of the carried message, or None if absent."""
        o = self._tab.field_offset(_MSG_FIELD)
        return self._tab.union(o) if o else None

    def request(self) -> Request | None:
        """Return the carried message as a Request if it is one."""
        if self.msg_type() != NetworkUnion.Request:
            return None
        table = self.msg()
        if table is None:
            return None
        return Request(table.buf, table.pos)


def build_request(builder: Builder, status: int) -> int:
    """Write a Request table and return its offset."""
    builder.start_object(1)
    builder.prepend_int8_slot(0, int(status), 0)
    return builder.end_object()


def build_envelope(builder: Builder, msg_type: int, msg: int) -> int:
    """Write an Envelope table and return its offset."""
    builder.start_object(2)
    builder.prepend_uint8_slot(0, int(msg_type), 0)
    builder.prepend_uoffset_slot(1, msg, 0)
    return builder.end_object()