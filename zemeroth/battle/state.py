"""The state of a battle."""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Mapping

from zemeroth.battle.apply import apply
from zemeroth.battle.components import BelongsTo, Meta, Parts, Pos, TileType
from zemeroth.battle.events import BattleResult, Create, CreateEvent, Event
from zemeroth.battle.scenario import Scenario, random_free_pos, random_pos
from zemeroth.hexmap import HexMap, PosHex

_log = logging.getLogger(__name__)

CreateObject = Callable[["State", str, PosHex, "int | None"], None]


def _create_object(state: State, prototype: str, pos: PosHex, owner: int | None) -> None:
    components: list[Any] = state.prototype_for(prototype)
    if owner is not None:
        components.append(BelongsTo(owner))
    components += [Pos(pos), Meta(prototype)]
    obj_id = state.alloc_id()
    event = Event(
        active_event=CreateEvent(),
        actor_ids=[obj_id],
        instant_effects=[(obj_id, [Create(pos, prototype, components)])],
    )
    state.apply(event)


class State:
    """Everything about a running battle: map, objects and whose turn it is.

    ``create_object(state, prototype, pos, owner)`` places each scenario
    object; by default it builds the object from its prototype.
    """

    def __init__(
        self,
        prototypes: Mapping[str, list[Any]],
        scenario: Scenario,
        create_object: CreateObject | None = None,
    ) -> None:
        scenario.check()
        self.prototypes = dict(prototypes)
        self.scenario = scenario
        self.map: HexMap[TileType] = HexMap(scenario.map_radius, TileType.PLAIN)
        self.parts = Parts()
        self.player_id = 0
        self.battle_result: BattleResult | None = None
        self.deterministic_mode = False
        self._create_terrain()
        self._create_objects(create_object or _create_object)

    def _create_terrain(self) -> None:
        for _ in range(self.scenario.rocky_tiles_count):
            pos = random_free_pos(self)
            if pos is not None:
                self.map.set_tile(pos, TileType.ROCKS)

    def _create_objects(self, create_object: CreateObject) -> None:
        initial_player_id = self.player_id
        for group in list(self.scenario.objects):
            if group.owner is not None:
                self.set_player_id(group.owner)
            for _ in range(group.count):
                pos = random_pos(self, group.owner, group.line)
                if pos is None:
                    _log.error("Can't find the position for %s", group.typename)
                    continue
                create_object(self, group.typename, pos, group.owner)
        for obj in list(self.scenario.exact_objects):
            if obj.owner is not None:
                self.set_player_id(obj.owner)
            create_object(self, obj.typename, obj.pos, obj.owner)
        self.set_player_id(initial_player_id)

    def next_player_id(self) -> int:
        candidate = self.player_id + 1
        return candidate if candidate < self.scenario.players_count else 0

    def prototype_for(self, name: str) -> list[Any]:
        """A fresh copy of the components of the named prototype."""
        try:
            components = self.prototypes[name]
        except KeyError:
            raise KeyError(f"no prototype named {name!r}") from None
        return copy.deepcopy(list(components))

    def set_player_id(self, player_id: int) -> None:
        self.player_id = player_id

    def set_battle_result(self, result: BattleResult) -> None:
        self.battle_result = result

    def alloc_id(self) -> int:
        return self.parts.alloc_id()

    def apply(self, event: Event) -> None:
        apply(self, event)

    def __repr__(self) -> str:
        return (
            f"State(player_id={self.player_id}, map={self.map!r}, "
            f"battle_result={self.battle_result!r})"
        )