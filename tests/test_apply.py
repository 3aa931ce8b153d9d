import pytest

from zemeroth.battle.apply import apply
from zemeroth.battle.components import (
    Abilities,
    Ability,
    AbilityStatus,
    Agent,
    Armor,
    Blocker,
    Duration,
    LastingEffect,
    Meta,
    PlannedAbility,
    Pos,
    RechargeableAbility,
    Strength,
    Summoner,
    Timed,
)
from zemeroth.battle.events import (
    Attack,
    BattleResult,
    BeginTurn,
    Create,
    CreateEvent,
    EndBattle,
    EndTurn,
    Event,
    Heal,
    Kill,
    MoveTo,
    Stun,
    Throw,
    UseAbility,
    Vanish,
    Wound,
)
from zemeroth.battle.scenario import ExactObject, Scenario
from zemeroth.battle.state import State
from zemeroth.hexmap import PosHex

HERO, IMP = 0, 1
HERO_POS = PosHex(0, 0)
IMP_POS = PosHex(0, 2)


def hero_agent(**kwargs):
    values = dict(
        moves=1,
        attacks=1,
        jokers=1,
        base_moves=1,
        base_attacks=1,
        base_jokers=1,
        move_points=3,
    )
    values.update(kwargs)
    return Agent(**values)


def make_state(hero=None, imp=None):
    prototypes = {
        "hero": hero if hero is not None else [hero_agent(), Strength(3, 3)],
        "imp": imp if imp is not None else [Agent(), Strength(2, 2)],
    }
    scenario = Scenario(
        exact_objects=[
            ExactObject(0, "hero", HERO_POS),
            ExactObject(1, "imp", IMP_POS),
        ]
    )
    return State(prototypes, scenario)


def effect_event(obj_id, *effects):
    return Event(CreateEvent(), instant_effects=[(obj_id, list(effects))])


def timed_event(obj_id, timed):
    return Event(CreateEvent(), timed_effects=[(obj_id, [timed])])


class _StraightPath:
    def __init__(self, destination):
        self.destination = destination

    def to_pos(self):
        return self.destination


def test_create_event_adds_components():
    state = make_state()
    new_id = state.alloc_id()
    pos = PosHex(1, 1)
    components = [Pos(pos), Meta("rock"), Blocker()]
    apply(state, effect_event(new_id, Create(pos, "rock", components)))
    assert state.parts.pos.get(new_id).pos == pos
    assert state.parts.meta.get(new_id).name == "rock"
    assert new_id in state.parts.blocker
    components[0].pos = PosHex(2, 2)
    assert state.parts.pos.get(new_id).pos == pos


def test_attack_spends_attacks_then_jokers():
    state = make_state()
    agent = state.parts.agent.get(HERO)
    apply(state, Event(Attack(HERO, IMP)))
    assert (agent.attacks, agent.jokers) == (0, 1)
    apply(state, Event(Attack(HERO, IMP)))
    assert (agent.attacks, agent.jokers) == (0, 0)
    with pytest.raises(ValueError):
        apply(state, Event(Attack(HERO, IMP)))


def test_move_to_uses_moves_then_jokers():
    state = make_state()
    agent = state.parts.agent.get(HERO)
    first = PosHex(0, 1)
    apply(state, Event(MoveTo(_StraightPath(first), 1, HERO)))
    assert state.parts.pos.get(HERO).pos == first
    assert agent.moves == 0
    second = PosHex(1, 1)
    apply(state, Event(MoveTo(_StraightPath(second), 1, HERO)))
    assert state.parts.pos.get(HERO).pos == second
    assert agent.jokers == 0


def test_wound_reduces_strength_and_armor():
    state = make_state(imp=[Agent(attacks=1), Strength(2, 2), Armor(1)])
    apply(state, effect_event(IMP, Wound(damage=1, armor_break=5)))
    assert state.parts.strength.get(IMP).strength == 1
    assert state.parts.armor.get(IMP).armor == 0
    assert state.parts.agent.get(IMP).attacks == 0


def test_wound_that_kills_is_rejected():
    state = make_state()
    with pytest.raises(ValueError):
        apply(state, effect_event(IMP, Wound(damage=2, armor_break=0)))


def test_heal_caps_at_base_and_clears_effects():
    state = make_state(imp=[Agent(), Strength(1, 2)])
    apply(state, timed_event(IMP, Timed(Duration(2), 1, LastingEffect.POISON)))
    apply(state, effect_event(IMP, Heal(strength=5)))
    assert state.parts.strength.get(IMP).strength == 2
    assert state.parts.effects.get(IMP).effects == []


@pytest.mark.parametrize("effect", [Kill(), Vanish()])
def test_kill_and_vanish_remove_object(effect):
    state = make_state()
    apply(state, effect_event(IMP, effect))
    assert IMP not in state.parts.pos
    assert IMP not in state.parts.agent
    assert IMP not in state.parts.strength
    assert HERO in state.parts.pos


def test_stun_effect_zeroes_actions():
    state = make_state()
    apply(state, effect_event(HERO, Stun()))
    agent = state.parts.agent.get(HERO)
    assert (agent.moves, agent.attacks, agent.jokers) == (0, 0, 0)


def test_timed_effect_of_same_kind_is_replaced():
    state = make_state()
    first = Timed(Duration(2), 1, LastingEffect.STUN)
    second = Timed(Duration(1), 1, LastingEffect.STUN)
    apply(state, timed_event(IMP, first))
    apply(state, timed_event(IMP, second))
    stored = state.parts.effects.get(IMP).effects
    assert stored == [second]
    assert stored[0] is not second


def test_scheduled_ability_of_same_kind_is_replaced():
    state = make_state()
    explode = Ability("explode_damage")
    apply(state, Event(CreateEvent(), scheduled_abilities=[(IMP, [PlannedAbility(1, 0, explode)])]))
    apply(state, Event(CreateEvent(), scheduled_abilities=[(IMP, [PlannedAbility(2, 0, explode)])]))
    assert state.parts.schedule.get(IMP).planned == [PlannedAbility(2, 0, explode)]


def test_end_battle_records_result():
    state = make_state()
    result = BattleResult(winner_id=0, survivor_types=["hero"])
    apply(state, Event(EndBattle(result)))
    assert state.battle_result == result


def test_begin_turn_resets_actions_and_ticks_counters():
    state = make_state()
    apply(state, Event(Attack(HERO, IMP)))
    apply(state, timed_event(HERO, Timed(Duration(2), 0, LastingEffect.POISON)))
    vanish = Ability("vanish")
    apply(state, Event(CreateEvent(), scheduled_abilities=[(HERO, [PlannedAbility(1, 0, vanish)])]))
    apply(state, Event(BeginTurn(player_id=0)))
    agent = state.parts.agent.get(HERO)
    assert state.player_id == 0
    assert agent.attacks == agent.base_attacks
    assert state.parts.effects.get(HERO).effects[0].duration.rounds == 1
    assert state.parts.schedule.get(HERO).planned[0].rounds == 0
    apply(state, Event(EndTurn(player_id=0)))
    assert state.parts.schedule.get(HERO).planned == []
    assert len(state.parts.effects.get(HERO).effects) == 1


def test_begin_turn_applies_stun():
    state = make_state()
    apply(state, timed_event(HERO, Timed(Duration(2), 1, LastingEffect.STUN)))
    apply(state, Event(BeginTurn(player_id=0)))
    agent = state.parts.agent.get(HERO)
    assert (agent.moves, agent.attacks, agent.jokers) == (0, 0, 0)


def test_end_turn_adds_reactive_attacks_and_drops_finished_effects():
    state = make_state(hero=[hero_agent(attacks=0, reactive_attacks=1), Strength(3, 3)])
    apply(state, timed_event(HERO, Timed(Duration(0), 0, LastingEffect.POISON)))
    apply(state, Event(EndTurn(player_id=0)))
    assert state.parts.agent.get(HERO).attacks == 1
    assert state.parts.effects.get(HERO).effects == []


def test_end_turn_stun_cancels_reactive_attacks():
    state = make_state(hero=[hero_agent(attacks=0, reactive_attacks=1), Strength(3, 3)])
    apply(state, timed_event(HERO, Timed(Duration(2), 1, LastingEffect.STUN)))
    apply(state, Event(EndTurn(player_id=0)))
    assert state.parts.agent.get(HERO).attacks == 0


def test_begin_turn_updates_cooldowns():
    club = Ability("club")
    hero = [hero_agent(), Abilities([RechargeableAbility(club, AbilityStatus(2), 2)])]
    state = make_state(hero=hero)
    apply(state, Event(BeginTurn(player_id=0)))
    assert state.parts.abilities.get(HERO).abilities[0].status.cooldown == 1


def test_use_ability_starts_cooldown():
    club = Ability("club")
    hero = [hero_agent(jokers=0), Abilities([RechargeableAbility(club, base_cooldown=2)])]
    state = make_state(hero=hero)
    apply(state, Event(UseAbility(HERO, IMP_POS, club)))
    assert state.parts.abilities.get(HERO).abilities[0].status.cooldown == 2
    assert state.parts.agent.get(HERO).attacks == 0
    with pytest.raises(ValueError):
        apply(state, Event(UseAbility(HERO, IMP_POS, club)))


def test_use_jump_moves_the_object():
    state = make_state()
    target = PosHex(1, 0)
    apply(state, Event(UseAbility(HERO, target, Ability("jump", 2))))
    assert state.parts.pos.get(HERO).pos == target


def test_use_rage_grants_attacks():
    state = make_state()
    rage_attacks = 3
    apply(state, Event(UseAbility(HERO, HERO_POS, Ability("rage", rage_attacks))))
    assert state.parts.agent.get(HERO).attacks == rage_attacks + 1


def test_use_summon_counts_summons():
    state = make_state(hero=[hero_agent(), Summoner(count=0)])
    apply(state, Event(UseAbility(HERO, HERO_POS, Ability("summon"))))
    assert state.parts.summoner.get(HERO).count == 1


def test_use_summon_without_summoner_fails():
    state = make_state()
    with pytest.raises(KeyError):
        apply(state, Event(UseAbility(HERO, HERO_POS, Ability("summon"))))


def test_use_ability_without_actions_fails():
    state = make_state(hero=[Agent(), Strength(3, 3)])
    with pytest.raises(RuntimeError):
        apply(state, Event(UseAbility(HERO, IMP_POS, Ability("club"))))


def test_throw_moves_to_free_tile_and_not_to_blocked_one():
    state = make_state(imp=[Agent(), Strength(2, 2), Blocker()])
    with pytest.raises(ValueError):
        apply(state, effect_event(HERO, Throw(HERO_POS, IMP_POS)))
    target = PosHex(-1, 0)
    apply(state, effect_event(HERO, Throw(HERO_POS, target)))
    assert state.parts.pos.get(HERO).pos == target