"""Conversions between hex positions and screen points."""

from __future__ import annotations

import random
from enum import Enum

from zemeroth.hexmap import PosHex, hex_round

SQRT_OF_3 = 1.73205

FLATNESS_COEFFICIENT = 0.8


def hex_to_point(size: float, hex_pos: PosHex) -> tuple[float, float]:
    """Centre of a hex on a flattened pointy-top layout."""
    x = size * SQRT_OF_3 * (hex_pos.q + hex_pos.r / 2.0)
    y = size * 3.0 / 2.0 * hex_pos.r
    return (x, y * FLATNESS_COEFFICIENT)


def point_to_hex(size: float, point: tuple[float, float]) -> PosHex:
    """The hex that contains the given point."""
    x, y = point
    y /= FLATNESS_COEFFICIENT
    q = (x * SQRT_OF_3 / 3.0 - y / 3.0) / size
    r = y * 2.0 / 3.0 / size
    return hex_round(PosHex(q, r))


def rand_tile_offset(size: float, radius: float) -> tuple[float, float]:
    """A random offset inside a tile, scaled by ``radius``."""
    if radius < 0.0:
        raise ValueError("radius must not be negative")
    r = size * radius
    return (
        random.uniform(-r, r),
        random.uniform(-r, r) * FLATNESS_COEFFICIENT,
    )


class Facing(Enum):
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def from_positions(
        cls, tile_size: float, from_pos: PosHex, to_pos: PosHex
    ) -> Facing | None:
        """Which way to face when moving between two positions, if at all."""
        if from_pos == to_pos:
            return None
        from_x, _ = hex_to_point(tile_size, from_pos)
        to_x, _ = hex_to_point(tile_size, to_pos)
        return cls.RIGHT if to_x > from_x else cls.LEFT