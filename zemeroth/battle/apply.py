"""Applying battle events to a state."""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any, Callable

from zemeroth.battle import events as ev
from zemeroth.battle.components import (
    Abilities,
    Agent,
    AbilityStatus,
    Armor,
    BelongsTo,
    Blocker,
    Effects,
    LastingEffect,
    Meta,
    PassiveAbilities,
    PlannedAbility,
    Pos,
    Schedule,
    Strength,
    Summoner,
    Timed,
    phase_from_player_id,
)
from zemeroth.battle.queries import (
    is_lasting_effect_over,
    is_tile_blocked,
    players_agent_ids,
)

if TYPE_CHECKING:
    from zemeroth.battle.state import State

_log = logging.getLogger(__name__)

_STORAGE_FOR_COMPONENT: dict[type, str] = {
    Pos: "pos",
    Strength: "strength",
    Armor: "armor",
    Meta: "meta",
    BelongsTo: "belongs_to",
    Agent: "agent",
    Blocker: "blocker",
    Abilities: "abilities",
    PassiveAbilities: "passive_abilities",
    Effects: "effects",
    Schedule: "schedule",
    Summoner: "summoner",
}


def apply(state: State, event: ev.Event) -> None:
    """Change the state according to the event and everything it caused."""
    _log.debug("apply: %r", event)
    handler = _EVENT_HANDLERS.get(type(event.active_event))
    if handler is None:
        raise TypeError(f"unknown event: {event.active_event!r}")
    handler(state, event.active_event)
    for obj_id, effects in event.instant_effects:
        for effect in effects:
            _apply_effect_instant(state, obj_id, effect)
    for obj_id, timed_effects in event.timed_effects:
        for timed in timed_effects:
            _apply_effect_timed(state, obj_id, timed)
    for obj_id, planned_abilities in event.scheduled_abilities:
        for planned in planned_abilities:
            _apply_scheduled_ability(state, obj_id, planned)


def _ignore(state: State, event: Any) -> None:
    pass


def _apply_move_to(state: State, event: ev.MoveTo) -> None:
    parts = state.parts
    agent = parts.agent.get(event.obj_id)
    parts.pos.get(event.obj_id).pos = event.path.to_pos()
    if agent.moves > 0:
        agent.moves -= event.cost
    else:
        agent.jokers -= event.cost
    if agent.moves < 0 or agent.jokers < 0:
        raise ValueError(f"object {event.obj_id} has not enough moves")


def _apply_attack(state: State, event: ev.Attack) -> None:
    agent = state.parts.agent.get(event.attacker_id)
    if agent.attacks > 0:
        agent.attacks -= 1
    else:
        agent.jokers -= 1
    if agent.attacks < 0 or agent.jokers < 0:
        raise ValueError(f"object {event.attacker_id} has no attacks left")


def _has_lasting_effect(state: State, obj_id: int, effect: LastingEffect) -> bool:
    effects = state.parts.effects.get_opt(obj_id)
    return effects is not None and any(t.effect == effect for t in effects.effects)


def _apply_end_turn(state: State, event: ev.EndTurn) -> None:
    parts = state.parts
    for obj_id in parts.agent.ids():
        agent = parts.agent.get(obj_id)
        if parts.belongs_to.get(obj_id).player_id == event.player_id:
            agent.attacks += agent.reactive_attacks
        if _has_lasting_effect(state, obj_id, LastingEffect.STUN):
            agent.attacks = 0
    for obj_id in parts.schedule.ids():
        schedule = parts.schedule.get(obj_id)
        schedule.planned = [p for p in schedule.planned if p.rounds > 0]
    for obj_id in parts.effects.ids():
        effects = parts.effects.get(obj_id)
        effects.effects = [
            timed
            for timed in effects.effects
            if not is_lasting_effect_over(state, obj_id, timed)
        ]


def _apply_end_battle(state: State, event: ev.EndBattle) -> None:
    state.set_battle_result(event.result)


def _zero_actions(state: State, obj_id: int) -> None:
    agent = state.parts.agent.get(obj_id)
    agent.moves = 0
    agent.attacks = 0
    agent.jokers = 0


def _update_lasting_effects_duration(state: State) -> None:
    phase = phase_from_player_id(state.player_id)
    for obj_id in state.parts.effects.ids():
        for timed in state.parts.effects.get(obj_id).effects:
            if timed.phase != phase or timed.duration.rounds is None:
                continue
            if timed.duration.rounds <= 0:
                raise ValueError(f"lasting effect of object {obj_id} is already over")
            timed.duration.rounds -= 1


def _reset_moves_and_attacks(state: State, player_id: int) -> None:
    for obj_id in players_agent_ids(state, player_id):
        agent = state.parts.agent.get(obj_id)
        agent.moves = agent.base_moves
        agent.attacks = agent.base_attacks
        agent.jokers = agent.base_jokers


def _apply_lasting_effects(state: State) -> None:
    for obj_id in players_agent_ids(state, state.player_id):
        effects = state.parts.effects.get_opt(obj_id)
        if effects is None:
            continue
        for timed in list(effects.effects):
            if timed.effect == LastingEffect.STUN:
                _zero_actions(state, obj_id)


def _update_cooldowns(state: State, player_id: int) -> None:
    for obj_id in players_agent_ids(state, player_id):
        abilities = state.parts.abilities.get_opt(obj_id)
        if abilities is not None:
            for rechargeable in abilities.abilities:
                rechargeable.status.update()


def _tick_planned_abilities(state: State) -> None:
    phase = phase_from_player_id(state.player_id)
    for obj_id in state.parts.schedule.ids():
        for planned in state.parts.schedule.get(obj_id).planned:
            if planned.phase == phase:
                planned.rounds -= 1


def _apply_begin_turn(state: State, event: ev.BeginTurn) -> None:
    state.set_player_id(event.player_id)
    _update_lasting_effects_duration(state)
    _reset_moves_and_attacks(state, event.player_id)
    _apply_lasting_effects(state)
    _update_cooldowns(state, event.player_id)
    _tick_planned_abilities(state)


def _apply_use_ability(state: State, event: ev.UseAbility) -> None:
    parts = state.parts
    obj_id = event.obj_id
    abilities = parts.abilities.get_opt(obj_id)
    if abilities is not None:
        for rechargeable in abilities.abilities:
            if rechargeable.ability != event.ability:
                continue
            if not rechargeable.status.is_ready:
                raise ValueError(f"ability {event.ability.name} is not ready")
            if rechargeable.base_cooldown != 0:
                rechargeable.status = AbilityStatus(rechargeable.base_cooldown)
    agent = parts.agent.get_opt(obj_id)
    if agent is not None:
        if agent.attacks > 0:
            agent.attacks -= 1
        elif agent.jokers > 0:
            agent.jokers -= 1
        else:
            raise RuntimeError("can't use an ability without attacks or jokers")
    name = event.ability.name
    if name in ("jump", "dash"):
        parts.pos.get(obj_id).pos = event.pos
    elif name == "rage":
        parts.agent.get(obj_id).attacks = (event.ability.value or 0) + 1
    elif name == "summon":
        parts.summoner.get(obj_id).count += 1


_EVENT_HANDLERS: dict[type, Callable[[Any, Any], None]] = {
    ev.CreateEvent: _ignore,
    ev.MoveTo: _apply_move_to,
    ev.Attack: _apply_attack,
    ev.EndTurn: _apply_end_turn,
    ev.EndBattle: _apply_end_battle,
    ev.BeginTurn: _apply_begin_turn,
    ev.UseAbility: _apply_use_ability,
    ev.UsePassiveAbility: _ignore,
    ev.EffectTick: _ignore,
    ev.EffectEnd: _ignore,
}


def _add_component(state: State, obj_id: int, component: Any) -> None:
    try:
        storage_name = _STORAGE_FOR_COMPONENT[type(component)]
    except KeyError:
        raise TypeError(f"unknown component: {component!r}") from None
    getattr(state.parts, storage_name).insert(obj_id, copy.deepcopy(component))


def _apply_scheduled_ability(state: State, obj_id: int, planned: PlannedAbility) -> None:
    _log.debug("apply scheduled ability: %r", planned)
    schedule = state.parts.schedule
    if schedule.get_opt(obj_id) is None:
        schedule.insert(obj_id, Schedule())
    planned_list = schedule.get(obj_id).planned
    fresh = copy.deepcopy(planned)
    for i, existing in enumerate(planned_list):
        if existing.ability == planned.ability:
            planned_list[i] = fresh
            return
    planned_list.append(fresh)


def _apply_effect_timed(state: State, obj_id: int, timed: Timed) -> None:
    _log.debug("apply timed effect: %r", timed)
    storage = state.parts.effects
    if storage.get_opt(obj_id) is None:
        storage.insert(obj_id, Effects())
    effects = storage.get(obj_id).effects
    fresh = copy.deepcopy(timed)
    for i, existing in enumerate(effects):
        if existing.effect == timed.effect:
            effects[i] = fresh
            return
    effects.append(fresh)


def _apply_heal(state: State, obj_id: int, effect: ev.Heal) -> None:
    component = state.parts.strength.get(obj_id)
    component.strength = min(component.strength + effect.strength, component.base_strength)
    effects = state.parts.effects.get_opt(obj_id)
    if effects is not None:
        effects.effects.clear()


def _apply_wound(state: State, obj_id: int, effect: ev.Wound) -> None:
    parts = state.parts
    if effect.damage < 0:
        raise ValueError("damage must not be negative")
    armor = parts.armor.get_opt(obj_id)
    if armor is not None:
        armor.armor = max(armor.armor - effect.armor_break, 0)
    strength = parts.strength.get(obj_id)
    strength.strength -= effect.damage
    if strength.strength <= 0:
        raise ValueError(f"wound would kill object {obj_id}; a kill is expected")
    agent = parts.agent.get(obj_id)
    agent.attacks = max(agent.attacks - 1, 0)


def _apply_relocation(state: State, obj_id: int, effect: Any) -> None:
    if not state.map.is_inboard(effect.from_pos):
        raise ValueError(f"position {effect.from_pos} is outside of the map")
    if not state.map.is_inboard(effect.to_pos):
        raise ValueError(f"position {effect.to_pos} is outside of the map")
    if is_tile_blocked(state, effect.to_pos):
        raise ValueError(f"tile {effect.to_pos} is blocked")
    state.parts.pos.get(obj_id).pos = effect.to_pos


def _apply_effect_instant(state: State, obj_id: int, effect: Any) -> None:
    _log.debug("apply instant effect: %r", effect)
    if isinstance(effect, ev.Create):
        for component in effect.components:
            _add_component(state, obj_id, component)
    elif isinstance(effect, (ev.Kill, ev.Vanish)):
        state.parts.remove(obj_id)
    elif isinstance(effect, ev.Stun):
        _zero_actions(state, obj_id)
    elif isinstance(effect, ev.Heal):
        _apply_heal(state, obj_id, effect)
    elif isinstance(effect, ev.Wound):
        _apply_wound(state, obj_id, effect)
    elif isinstance(effect, (ev.Knockback, ev.FlyOff, ev.Throw)):
        _apply_relocation(state, obj_id, effect)
    elif isinstance(effect, ev.Dodge):
        pass
    else:
        raise TypeError(f"unknown effect: {effect!r}")