"""Battle events and the instant effects they carry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

from zemeroth.battle.components import (
    Ability,
    LastingEffect,
    PassiveAbility,
    PlannedAbility,
    Timed,
)
from zemeroth.hexmap import Dir, PosHex

if TYPE_CHECKING:
    from zemeroth.battle.movement import Path


@dataclass
class BattleResult:
    winner_id: int
    survivor_types: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Create:
    pos: PosHex
    prototype: str
    components: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class Kill:
    dir: Dir | None = None


@dataclass(frozen=True)
class Vanish:
    pass


@dataclass(frozen=True)
class Stun:
    pass


@dataclass(frozen=True)
class Heal:
    strength: int


@dataclass(frozen=True)
class Wound:
    damage: int
    armor_break: int
    dir: Dir | None = None


@dataclass(frozen=True)
class Knockback:
    from_pos: PosHex
    to_pos: PosHex


@dataclass(frozen=True)
class FlyOff:
    from_pos: PosHex
    to_pos: PosHex


@dataclass(frozen=True)
class Throw:
    from_pos: PosHex
    to_pos: PosHex


@dataclass(frozen=True)
class Dodge:
    attacker_pos: PosHex


Effect = Union[Create, Kill, Vanish, Stun, Heal, Wound, Knockback, FlyOff, Throw, Dodge]


@dataclass(frozen=True)
class CreateEvent:
    pass


@dataclass(frozen=True)
class MoveTo:
    path: Path
    cost: int
    obj_id: int


@dataclass(frozen=True)
class Attack:
    attacker_id: int
    target_id: int
    mode: str = "active"
    weapon_type: str = "slash"


@dataclass(frozen=True)
class EndTurn:
    player_id: int


@dataclass(frozen=True)
class EndBattle:
    result: BattleResult


@dataclass(frozen=True)
class BeginTurn:
    player_id: int


@dataclass(frozen=True)
class UseAbility:
    obj_id: int
    pos: PosHex
    ability: Ability


@dataclass(frozen=True)
class UsePassiveAbility:
    obj_id: int
    pos: PosHex
    ability: PassiveAbility


@dataclass(frozen=True)
class EffectTick:
    obj_id: int
    effect: LastingEffect


@dataclass(frozen=True)
class EffectEnd:
    obj_id: int
    effect: LastingEffect


ActiveEvent = Union[
    CreateEvent,
    MoveTo,
    Attack,
    EndTurn,
    EndBattle,
    BeginTurn,
    UseAbility,
    UsePassiveAbility,
    EffectTick,
    EffectEnd,
]


@dataclass
class Event:
    """One thing that happened in a battle, with everything it caused."""

    active_event: ActiveEvent
    actor_ids: list[int] = field(default_factory=list)
    instant_effects: list[tuple[int, list[Effect]]] = field(default_factory=list)
    timed_effects: list[tuple[int, list[Timed]]] = field(default_factory=list)
    scheduled_abilities: list[tuple[int, list[PlannedAbility]]] = field(
        default_factory=list
    )