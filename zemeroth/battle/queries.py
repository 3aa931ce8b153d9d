"""Read-only questions about a battle state.

A state exposes ``parts`` (the component storages) and ``map`` (the tile map).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from zemeroth.battle.components import LastingEffect, PassiveAbility, Timed, TileType
from zemeroth.hexmap import Dir, PosHex, dirs, distance_hex
from zemeroth.utils import shuffled

if TYPE_CHECKING:
    from zemeroth.battle.state import State


def is_agent_belong_to(state: State, player_id: int, obj_id: int) -> bool:
    return state.parts.belongs_to.get(obj_id).player_id == player_id


def is_tile_blocked(state: State, pos: PosHex) -> bool:
    if not state.map.is_inboard(pos):
        raise ValueError(f"position {pos} is outside of the map")
    parts = state.parts
    return any(parts.pos.get(obj_id).pos == pos for obj_id in parts.blocker.ids())


def _anything_at(state: State, pos: PosHex) -> bool:
    parts = state.parts
    return any(parts.pos.get(obj_id).pos == pos for obj_id in parts.pos.ids())


def is_tile_plain_and_completely_free(state: State, pos: PosHex) -> bool:
    if not state.map.is_inboard(pos) or state.map.tile(pos) != TileType.PLAIN:
        return False
    return not _anything_at(state, pos)


def is_tile_completely_free(state: State, pos: PosHex) -> bool:
    if not state.map.is_inboard(pos):
        return False
    return not _anything_at(state, pos)


def is_lasting_effect_over(state: State, obj_id: int, timed_effect: Timed) -> bool:
    """Poison ends early once it can no longer hurt; otherwise duration decides."""
    if timed_effect.effect == LastingEffect.POISON:
        if state.parts.strength.get(obj_id).strength <= 1:
            return True
    return timed_effect.duration.is_over()


def check_enemies_around(state: State, pos: PosHex, player_id: int) -> bool:
    """Are there any enemy agents on the adjacent tiles?"""
    for direction in dirs():
        neighbor_id = agent_id_at_opt(state, Dir.get_neighbor_pos(pos, direction))
        if neighbor_id is not None:
            if state.parts.belongs_to.get(neighbor_id).player_id != player_id:
                return True
    return False


def ids_at(state: State, pos: PosHex) -> list[int]:
    parts = state.parts
    return [obj_id for obj_id in parts.pos.ids() if parts.pos.get(obj_id).pos == pos]


def obj_with_passive_ability_at(
    state: State, pos: PosHex, ability: PassiveAbility
) -> int | None:
    for obj_id in ids_at(state, pos):
        abilities = state.parts.passive_abilities.get_opt(obj_id)
        if abilities is not None and ability in abilities.abilities:
            return obj_id
    return None


def blocker_id_at(state: State, pos: PosHex) -> int:
    obj_id = blocker_id_at_opt(state, pos)
    if obj_id is None:
        raise LookupError(f"no single blocker at {pos}")
    return obj_id


def _single(ids: list[int]) -> int | None:
    return ids[0] if len(ids) == 1 else None


def blocker_id_at_opt(state: State, pos: PosHex) -> int | None:
    return _single(blocker_ids_at(state, pos))


def agent_id_at_opt(state: State, pos: PosHex) -> int | None:
    return _single(agent_ids_at(state, pos))


def agent_ids_at(state: State, pos: PosHex) -> list[int]:
    parts = state.parts
    return [obj_id for obj_id in parts.agent.ids() if parts.pos.get(obj_id).pos == pos]


def blocker_ids_at(state: State, pos: PosHex) -> list[int]:
    parts = state.parts
    return [
        obj_id for obj_id in parts.blocker.ids() if parts.pos.get(obj_id).pos == pos
    ]


def players_agent_ids(state: State, player_id: int) -> list[int]:
    return [
        obj_id
        for obj_id in state.parts.agent.ids()
        if is_agent_belong_to(state, player_id, obj_id)
    ]


def enemy_agent_ids(state: State, player_id: int) -> list[int]:
    return [
        obj_id
        for obj_id in state.parts.agent.ids()
        if not is_agent_belong_to(state, player_id, obj_id)
    ]


def free_neighbor_positions(state: State, origin: PosHex, count: int) -> list[PosHex]:
    """Up to ``count`` unblocked neighbours of ``origin``, in random order."""
    positions: list[PosHex] = []
    for direction in shuffled(dirs()):
        pos = Dir.get_neighbor_pos(origin, direction)
        if state.map.is_inboard(pos) and not is_tile_blocked(state, pos):
            positions.append(pos)
            if len(positions) == count:
                break
    return positions


def sort_agent_ids_by_distance_to_enemies(state: State, ids: list[int]) -> None:
    """Sort ``ids`` in place, nearest to an enemy first."""
    parts = state.parts

    def min_distance(obj_id: int) -> int:
        player_id = parts.belongs_to.get(obj_id).player_id
        agent_pos = parts.pos.get(obj_id).pos
        distances = (
            distance_hex(agent_pos, parts.pos.get(enemy_id).pos)
            for enemy_id in enemy_agent_ids(state, player_id)
        )
        return min(distances, default=state.map.height())

    ids.sort(key=lambda obj_id: min(min_distance(obj_id), state.map.height()))


def get_armor(state: State, obj_id: int) -> int:
    armor = state.parts.armor.get_opt(obj_id)
    return 0 if armor is None else armor.armor


def players_agent_types(state: State, player_id: int) -> list[str]:
    return [
        state.parts.meta.get(obj_id).name
        for obj_id in players_agent_ids(state, player_id)
    ]