"""The sample Monster schema: a monster with a position, name and colour."""

from __future__ import annotations

from enum import IntEnum

from .flatbuf import Builder, Table, root_position, size_prefixed_root_position

_POS_FIELD = 4
_NAME_FIELD = 6
_COLOR_FIELD = 8


class Color(IntEnum):
    Red = 0
    Green = 1
    Blue = 2

    def __str__(self) -> str:
        return self.name


def _as_color(value: int) -> Color | int:
    try:
        return Color(value)
    except ValueError:
        return value


class Vec3:
    """A three-float struct stored inline in a buffer."""

    def __init__(self, buf, pos: int) -> None:
        self._tab = Table(buf, pos)

    def x(self) -> float:
        return self._tab.get_float32(self._tab.pos)

    def y(self) -> float:
        return self._tab.get_float32(self._tab.pos + 4)

    def z(self) -> float:
        return self._tab.get_float32(self._tab.pos + 8)

    def mutate_x(self, value: float) -> bool:
        return self._tab.mutate_float32(self._tab.pos, value)

    def mutate_y(self, value: float) -> bool:
        return self._tab.mutate_float32(self._tab.pos + 4, value)

    def mutate_z(self, value: float) -> bool:
        return self._tab.mutate_float32(self._tab.pos + 8, value)


class Monster:
    """A view of a Monster table."""

    def __init__(self, buf, pos: int) -> None:
        self._tab = Table(buf, pos)

    @classmethod
    def from_bytes(cls, buf, offset: int = 0) -> "Monster":
        return cls(buf, root_position(buf, offset))

    @classmethod
    def from_size_prefixed_bytes(cls, buf, offset: int = 0) -> "Monster":
        return cls(buf, size_prefixed_root_position(buf, offset))

    def pos(self) -> Vec3 | None:
        o = self._tab.field_offset(_POS_FIELD)
        return Vec3(self._tab.buf, self._tab.pos + o) if o else None

    def name(self) -> str | None:
        o = self._tab.field_offset(_NAME_FIELD)
        if not o:
            return None
        return self._tab.byte_vector(self._tab.pos + o).decode("utf-8")

    def color(self) -> Color | int:
        o = self._tab.field_offset(_COLOR_FIELD)
        if o:
            return _as_color(self._tab.get_int8(self._tab.pos + o))
        return Color.Blue

    def mutate_color(self, color: int) -> bool:
        return self._tab.mutate_int8_slot(_COLOR_FIELD, int(color))


def create_vec3(builder: Builder, x: float, y: float, z: float) -> int:
    """Write a Vec3 inline and return its offset."""
    builder.prep(4, 12)
    builder.prepend_float32(z)
    builder.prepend_float32(y)
    builder.prepend_float32(x)
    return builder.offset()


def build_monster(
    builder: Builder,
    name: str | None = None,
    pos: tuple[float, float, float] | None = None,
    color: int = Color.Blue,
) -> int:
    """Write a Monster table and return its offset."""
    name_off = builder.create_string(name) if name is not None else 0
    builder.start_object(3)
    if name_off:
        builder.prepend_uoffset_slot(1, name_off, 0)
    if pos is not None:
        builder.prepend_struct_slot(0, create_vec3(builder, *pos), 0)
    builder.prepend_int8_slot(2, int(color), int(Color.Blue))
    return builder.end_object()