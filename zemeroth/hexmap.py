"""Hexagonal grid coordinates, directions and hex-shaped tile maps."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Iterator, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PosCube:
    """Cube coordinates of a hex; ``x + y + z == 0`` for valid positions."""

    x: float
    y: float
    z: float


@dataclass(frozen=True)
class PosHex:
    """Axial coordinates of a hex: ``q`` is the column, ``r`` the row."""

    q: float
    r: float


def hex_to_cube(hex_pos: PosHex) -> PosCube:
    return PosCube(x=hex_pos.q, y=-hex_pos.q - hex_pos.r, z=hex_pos.r)


def cube_to_hex(cube: PosCube) -> PosHex:
    return PosHex(q=cube.x, r=cube.z)


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def cube_round(cube: PosCube) -> PosCube:
    """Round fractional cube coordinates to the nearest hex."""
    rx = _round_half_away(cube.x)
    ry = _round_half_away(cube.y)
    rz = _round_half_away(cube.z)
    x_diff = abs(rx - cube.x)
    y_diff = abs(ry - cube.y)
    z_diff = abs(rz - cube.z)
    if x_diff > y_diff and x_diff > z_diff:
        rx = -ry - rz
    elif y_diff > z_diff:
        ry = -rx - rz
    else:
        rz = -rx - ry
    return PosCube(x=int(rx), y=int(ry), z=int(rz))


def hex_round(hex_pos: PosHex) -> PosHex:
    return cube_to_hex(cube_round(hex_to_cube(hex_pos)))


def distance_cube(a: PosCube, b: PosCube) -> int:
    return (abs(a.x - b.x) + abs(a.y - b.y) + abs(a.z - b.z)) // 2


def distance_hex(a: PosHex, b: PosHex) -> int:
    return distance_cube(hex_to_cube(a), hex_to_cube(b))


_ORIGIN = PosHex(0, 0)


def is_inboard(radius: int, pos: PosHex) -> bool:
    return distance_hex(_ORIGIN, pos) <= radius


def hex_positions(radius: int) -> Iterator[PosHex]:
    """Yield every position of a hex board row by row.

    The scan starts one step past the corner ``(-radius, -radius)``, so a
    board of radius zero yields nothing.
    """
    for r in range(-radius, radius + 1):
        for q in range(-radius, radius + 1):
            if q == -radius and r == -radius:
                continue
            pos = PosHex(q, r)
            if is_inboard(radius, pos):
                yield pos


def dump_map(radius: int, f: Callable[[PosHex], str]) -> None:
    """Print a map's state as an ASCII picture, one character per tile."""
    lines = []
    for r in range(-radius, radius + 1):
        cells = []
        for q in range(-radius, radius + 1):
            pos = PosHex(q, r)
            cells.append(f"{f(pos)} " if is_inboard(radius, pos) else "  ")
        lines.append(" " * (r + radius) + "".join(cells))
    print("\n".join(lines))
    print()


def radius_to_diameter(radius: int) -> int:
    return radius * 2 + 1


class HexMap(Generic[T]):
    """A hex-shaped board of the given radius holding one value per tile."""

    def __init__(self, radius: int, default: T = None) -> None:
        self.radius = radius
        self._size = radius_to_diameter(radius)
        self._tiles: list[T] = [default] * (self._size * self._size)

    def height(self) -> int:
        return radius_to_diameter(self.radius)

    def __iter__(self) -> Iterator[PosHex]:
        return hex_positions(self.radius)

    def is_inboard(self, pos: PosHex) -> bool:
        return is_inboard(self.radius, pos)

    def _index(self, pos: PosHex) -> int:
        if not self.is_inboard(pos):
            raise IndexError(f"position {pos} is outside of the map")
        return int((pos.r + self.radius) + (pos.q + self.radius) * self._size)

    def tile(self, pos: PosHex) -> T:
        return self._tiles[self._index(pos)]

    def set_tile(self, pos: PosHex, tile: T) -> None:
        self._tiles[self._index(pos)] = tile

    def __repr__(self) -> str:
        return f"HexMap(radius={self.radius})"


class Dir(Enum):
    """The six neighbour directions of a hex."""

    SOUTH_EAST = 0
    EAST = 1
    NORTH_EAST = 2
    NORTH_WEST = 3
    WEST = 4
    SOUTH_WEST = 5

    @classmethod
    def from_int(cls, n: int) -> Dir:
        if not 0 <= n < 6:
            raise ValueError(f"direction index out of range: {n}")
        return cls(n)

    def to_int(self) -> int:
        return self.value

    @classmethod
    def get_dir_from_to(cls, from_pos: PosHex, to_pos: PosHex) -> Dir:
        if distance_hex(from_pos, to_pos) != 1:
            raise ValueError(f"positions are not adjacent: {from_pos}, {to_pos}")
        diff = (to_pos.q - from_pos.q, to_pos.r - from_pos.r)
        for direction in cls:
            if diff == _DIR_TO_POS_DIFF[direction.value]:
                return direction
        raise ValueError(f"impossible positions: {from_pos}, {to_pos}")

    @staticmethod
    def get_neighbor_pos(pos: PosHex, direction: Dir) -> PosHex:
        dq, dr = _DIR_TO_POS_DIFF[direction.value]
        return PosHex(q=pos.q + dq, r=pos.r + dr)


_DIR_TO_POS_DIFF = ((1, 0), (1, -1), (0, -1), (-1, 0), (-1, 1), (0, 1))


def dirs() -> Iterator[Dir]:
    """Iterate over all directions in their fixed order."""
    return iter(Dir)