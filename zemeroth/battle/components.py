"""Component types attached to battle objects, and the storage that holds them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Iterator, TypeVar

from zemeroth.hexmap import PosHex

C = TypeVar("C")


class TileType(Enum):
    PLAIN = "plain"
    ROCKS = "rocks"


class PassiveAbility(Enum):
    SPIKE_TRAP = "spike_trap"
    BURN = "burn"
    POISON = "poison"


class LastingEffect(Enum):
    POISON = "poison"
    STUN = "stun"


@dataclass(frozen=True)
class Ability:
    """An active ability.

    ``value`` holds the ability's parameter where it has one: a throw or
    jump distance, or the number of attacks granted by a rage.
    """

    name: str
    value: int | None = None


@dataclass
class AbilityStatus:
    """Readiness of an ability; a positive cooldown means rounds left to wait."""

    cooldown: int = 0

    @property
    def is_ready(self) -> bool:
        return self.cooldown <= 0

    def update(self) -> None:
        """Count one round of the cooldown down."""
        if self.cooldown > 0:
            self.cooldown -= 1


@dataclass
class RechargeableAbility:
    ability: Ability
    status: AbilityStatus = field(default_factory=AbilityStatus)
    base_cooldown: int = 1


@dataclass
class Duration:
    """How long a lasting effect holds; ``rounds=None`` means forever."""

    rounds: int | None = None

    def is_over(self) -> bool:
        return self.rounds is not None and self.rounds <= 0


@dataclass
class Timed:
    duration: Duration
    phase: int
    effect: LastingEffect


@dataclass
class PlannedAbility:
    rounds: int
    phase: int
    ability: Ability


def phase_from_player_id(player_id: int) -> int:
    """The phase of a round in which the given player acts."""
    phase = int(player_id)
    if phase < 0:
        raise ValueError(f"invalid player id: {player_id!r}")
    return phase


@dataclass
class Agent:
    moves: int = 0
    attacks: int = 0
    jokers: int = 0
    attack_strength: int = 0
    attack_distance: int = 0
    attack_accuracy: int = 0
    weapon_type: str = "slash"
    attack_break: int = 0
    dodge: int = 0
    move_points: int = 0
    reactive_attacks: int = 0
    base_moves: int = 0
    base_attacks: int = 0
    base_jokers: int = 0


@dataclass
class Strength:
    strength: int
    base_strength: int


@dataclass
class Armor:
    armor: int


@dataclass
class Meta:
    name: str


@dataclass
class BelongsTo:
    player_id: int


@dataclass
class Pos:
    pos: PosHex


@dataclass
class Blocker:
    pass


@dataclass
class Abilities:
    abilities: list[RechargeableAbility] = field(default_factory=list)


@dataclass
class PassiveAbilities:
    abilities: list[PassiveAbility] = field(default_factory=list)


@dataclass
class Effects:
    effects: list[Timed] = field(default_factory=list)


@dataclass
class Schedule:
    planned: list[PlannedAbility] = field(default_factory=list)


@dataclass
class Summoner:
    count: int = 0


class Storage(Generic[C]):
    """Components of one kind, keyed by object id in insertion order."""

    def __init__(self) -> None:
        self._data: dict[int, C] = {}

    def get(self, obj_id: int) -> C:
        try:
            return self._data[obj_id]
        except KeyError:
            raise KeyError(f"object {obj_id} has no such component") from None

    def get_opt(self, obj_id: int) -> C | None:
        return self._data.get(obj_id)

    def insert(self, obj_id: int, component: C) -> None:
        self._data[obj_id] = component

    def remove(self, obj_id: int) -> None:
        self._data.pop(obj_id, None)

    def ids(self) -> list[int]:
        return list(self._data)

    def __contains__(self, obj_id: object) -> bool:
        return obj_id in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[int]:
        return iter(self.ids())

    def __repr__(self) -> str:
        return f"Storage({self._data!r})"


class Parts:
    """All component storages of a battle plus the object id allocator."""

    def __init__(self) -> None:
        self.strength: Storage[Strength] = Storage()
        self.armor: Storage[Armor] = Storage()
        self.pos: Storage[Pos] = Storage()
        self.meta: Storage[Meta] = Storage()
        self.belongs_to: Storage[BelongsTo] = Storage()
        self.agent: Storage[Agent] = Storage()
        self.blocker: Storage[Blocker] = Storage()
        self.abilities: Storage[Abilities] = Storage()
        self.passive_abilities: Storage[PassiveAbilities] = Storage()
        self.effects: Storage[Effects] = Storage()
        self.schedule: Storage[Schedule] = Storage()
        self.summoner: Storage[Summoner] = Storage()
        self._next_id = 0

    def _storages(self) -> tuple[Storage, ...]:
        return (
            self.strength,
            self.armor,
            self.pos,
            self.meta,
            self.belongs_to,
            self.agent,
            self.blocker,
            self.abilities,
            self.passive_abilities,
            self.effects,
            self.schedule,
            self.summoner,
        )

    def alloc_id(self) -> int:
        obj_id = self._next_id
        self._next_id += 1
        return obj_id

    def remove(self, obj_id: int) -> None:
        """Drop every component of the object."""
        for storage in self._storages():
            storage.remove(obj_id)