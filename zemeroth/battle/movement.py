"""Movement costs, paths and the pathfinder that fills a cost map."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator

from zemeroth.battle.components import PassiveAbility, TileType
from zemeroth.battle.queries import is_tile_blocked
from zemeroth.hexmap import Dir, HexMap, PosHex, dirs

if TYPE_CHECKING:
    from zemeroth.battle.state import State

MAX_COST = 2**31 - 1
"""Cost of a tile that has not been reached."""

_DANGEROUS_COST = 4
_DANGEROUS_ABILITIES = frozenset(
    {PassiveAbility.SPIKE_TRAP, PassiveAbility.BURN, PassiveAbility.POISON}
)
_TILE_TYPE_COST = {TileType.PLAIN: 1, TileType.ROCKS: 3}


@dataclass(frozen=True)
class Tile:
    """A pathfinder cell: the cost to reach it and the way back to the start."""

    cost: int = 0
    parent: Dir | None = None


def tile_cost(state: State, obj_id: int, from_pos: PosHex, to_pos: PosHex) -> int:
    """Move points needed to step onto ``to_pos``."""
    parts = state.parts
    for other_id in parts.passive_abilities.ids():
        if parts.pos.get(other_id).pos != to_pos:
            continue
        abilities = parts.passive_abilities.get(other_id).abilities
        if any(ability in _DANGEROUS_ABILITIES for ability in abilities):
            return _DANGEROUS_COST
    return _TILE_TYPE_COST[state.map.tile(to_pos)]


@dataclass(frozen=True)
class Step:
    from_pos: PosHex
    to_pos: PosHex


class Path:
    """A sequence of adjacent positions, starting where the mover stands."""

    def __init__(self, tiles: Iterable[PosHex]) -> None:
        self.tiles: tuple[PosHex, ...] = tuple(tiles)

    def from_pos(self) -> PosHex:
        return self.tiles[0]

    def to_pos(self) -> PosHex:
        return self.tiles[-1]

    def steps(self) -> Iterator[Step]:
        for from_pos, to_pos in zip(self.tiles, self.tiles[1:]):
            yield Step(from_pos, to_pos)

    def cost_for(self, state: State, obj_id: int) -> int:
        return sum(
            tile_cost(state, obj_id, step.from_pos, step.to_pos) for step in self.steps()
        )

    def truncate(self, state: State, obj_id: int) -> Path | None:
        """The part of the path the agent can afford, or None if not even a step."""
        move_points = state.parts.agent.get(obj_id).move_points
        new_tiles = [self.tiles[0]]
        cost = 0
        for step in self.steps():
            cost += tile_cost(state, obj_id, step.from_pos, step.to_pos)
            if cost > move_points:
                break
            new_tiles.append(step.to_pos)
        return Path(new_tiles) if len(new_tiles) >= 2 else None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self.tiles == other.tiles

    def __hash__(self) -> int:
        return hash(self.tiles)

    def __repr__(self) -> str:
        return f"Path({list(self.tiles)!r})"


class Pathfinder:
    """Computes the cheapest ways from an agent to every reachable tile."""

    def __init__(self, map_radius: int) -> None:
        self._queue: deque[PosHex] = deque()
        self.map: HexMap[Tile] = HexMap(map_radius, Tile())

    def _process_neighbor_pos(
        self, state: State, obj_id: int, original_pos: PosHex, neighbor_pos: PosHex
    ) -> None:
        old_cost = self.map.tile(original_pos).cost
        new_cost = old_cost + tile_cost(state, obj_id, original_pos, neighbor_pos)
        if self.map.tile(neighbor_pos).cost > new_cost:
            parent = Dir.get_dir_from_to(neighbor_pos, original_pos)
            self.map.set_tile(neighbor_pos, Tile(new_cost, parent))
            self._queue.append(neighbor_pos)

    def _clean_map(self) -> None:
        for pos in self.map:
            self.map.set_tile(pos, Tile(MAX_COST, None))

    def _try_to_push_neighbors(self, state: State, obj_id: int, pos: PosHex) -> None:
        for direction in dirs():
            neighbor_pos = Dir.get_neighbor_pos(pos, direction)
            if self.map.is_inboard(neighbor_pos) and not is_tile_blocked(
                state, neighbor_pos
            ):
                self._process_neighbor_pos(state, obj_id, pos, neighbor_pos)

    def fill_map(self, state: State, obj_id: int) -> None:
        """Fill the cost map starting from the object's position."""
        start_pos = state.parts.pos.get(obj_id).pos
        self._queue.clear()
        self._clean_map()
        self.map.set_tile(start_pos, Tile())
        self._queue.append(start_pos)
        while self._queue:
            pos = self._queue.popleft()
            self._try_to_push_neighbors(state, obj_id, pos)

    def path(self, destination: PosHex) -> Path | None:
        """The cheapest path to ``destination``, or None if it is unreachable."""
        if self.map.tile(destination).cost == MAX_COST:
            return None
        tiles = [destination]
        pos = destination
        while (tile := self.map.tile(pos)).cost != 0:
            if tile.parent is None:
                return None
            pos = Dir.get_neighbor_pos(pos, tile.parent)
            tiles.append(pos)
        tiles.reverse()
        return Path(tiles)