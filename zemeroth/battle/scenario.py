"""Battle scenarios: what to place on the map and where."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from zemeroth.battle.components import TileType
from zemeroth.battle.queries import (
    check_enemies_around,
    is_tile_completely_free,
    is_tile_plain_and_completely_free,
)
from zemeroth.hexmap import PosHex, distance_hex

if TYPE_CHECKING:
    from zemeroth.battle.state import State

_ATTEMPTS = 30
_ORIGIN = PosHex(0, 0)


class Line(Enum):
    ANY = "any"
    FRONT = "front"
    MIDDLE = "middle"
    BACK = "back"

    def to_range(self, radius: int) -> tuple[int, int]:
        """Half-open range of distances from the map's edge for this line."""
        if self is Line.FRONT:
            return (radius // 2, radius + 1)
        if self is Line.MIDDLE:
            return middle_range(0, radius)
        if self is Line.BACK:
            return (0, radius // 2)
        return (0, radius + 1)


@dataclass
class ObjectsGroup:
    owner: int | None
    typename: str
    line: Line | None
    count: int


@dataclass
class ExactObject:
    owner: int | None
    typename: str
    pos: PosHex


class ScenarioError(Exception):
    """A scenario that cannot be played."""


class MapIsTooSmall(ScenarioError):
    def __init__(self) -> None:
        super().__init__("map is too small")


class PosOutsideOfMap(ScenarioError):
    def __init__(self, pos: PosHex) -> None:
        super().__init__(f"position {pos} is outside of the map")
        self.pos = pos


class NoPlayerAgents(ScenarioError):
    def __init__(self) -> None:
        super().__init__("no player agents")


class NoEnemyAgents(ScenarioError):
    def __init__(self) -> None:
        super().__init__("no enemy agents")


class UnsupportedPlayersCount(ScenarioError):
    def __init__(self, count: int) -> None:
        super().__init__(f"unsupported players count: {count}")
        self.count = count


@dataclass
class Scenario:
    map_radius: int = 5
    players_count: int = 2
    rocky_tiles_count: int = 0
    exact_tiles: dict[PosHex, TileType] = field(default_factory=dict)
    objects: list[ObjectsGroup] = field(default_factory=list)
    exact_objects: list[ExactObject] = field(default_factory=list)

    def check(self) -> None:
        """Raise a ScenarioError if the scenario cannot be played."""
        if self.players_count != 2:
            raise UnsupportedPlayersCount(self.players_count)
        if self.map_radius < 3:
            raise MapIsTooSmall()
        for obj in self.exact_objects:
            if distance_hex(_ORIGIN, obj.pos) > self.map_radius:
                raise PosOutsideOfMap(obj.pos)
        owners = {obj.owner for obj in self.exact_objects}
        owners |= {group.owner for group in self.objects}
        if 0 not in owners:
            raise NoPlayerAgents()
        if 1 not in owners:
            raise NoEnemyAgents()


def default_scenario() -> Scenario:
    return Scenario()


def middle_range(min_value: int, max_value: int) -> tuple[int, int]:
    if min_value > max_value:
        raise ValueError("min must not be greater than max")
    size = max_value - min_value
    half = size // 2
    forth = size // 4
    low = half - forth
    high = half + forth
    if low == high:
        high += 1
    return (low, high)


def _ensure_random_allowed(state: State) -> None:
    if state.deterministic_mode:
        raise RuntimeError("random placement is not allowed in deterministic mode")


def random_free_pos(state: State) -> PosHex | None:
    """A random plain, unoccupied tile, or None if none was found."""
    _ensure_random_allowed(state)
    radius = state.map.radius
    for _ in range(_ATTEMPTS):
        pos = PosHex(
            q=random.randrange(-radius, radius),
            r=random.randrange(-radius, radius),
        )
        if is_tile_plain_and_completely_free(state, pos):
            return pos
    return None


def _random_free_sector_pos(state: State, player_id: int, line: Line) -> PosHex | None:
    _ensure_random_allowed(state)
    if player_id not in (0, 1):
        raise ValueError(f"unsupported player id: {player_id}")
    radius = state.map.radius
    low, high = line.to_range(radius)
    for _ in range(_ATTEMPTS):
        q = radius - random.randrange(low, high)
        pos = PosHex(
            q=-q if player_id == 0 else q,
            r=random.randrange(-radius, radius + 1),
        )
        no_enemies_around = not check_enemies_around(state, pos, player_id)
        if is_tile_completely_free(state, pos) and no_enemies_around:
            return pos
    return None


def random_pos(state: State, owner: int | None, line: Line | None) -> PosHex | None:
    """A random free position; owned objects on a line go to their side."""
    if owner is not None and line is not None:
        return _random_free_sector_pos(state, owner, line)
    return random_free_pos(state)