# zemeroth

The rules of a small turn-based tactics game played on a hexagonal grid.
It models the map, the objects on it and their components, how events
change a battle, how objects find their way across the board, and how a
campaign of battles goes on. It has no dependencies outside the standard
library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `zemeroth.hexmap`: axial and cube hex coordinates (`PosHex`, `PosCube`),
  `hex_to_cube`, `cube_to_hex`, `hex_round`, `cube_round`, `distance_hex`,
  `distance_cube`, `is_inboard`, `radius_to_diameter`, the six directions
  (`Dir`, `dirs()`), `hex_positions(radius)` to iterate over every tile of a
  board, `dump_map` to print a board as ASCII, and `HexMap`, a hex-shaped
  grid holding one value per tile. Reading or writing a tile outside the map
  raises `IndexError`.
- `zemeroth.geom`: `hex_to_point` and `point_to_hex` convert between hex
  positions and points on a flattened pointy-top layout;
  `rand_tile_offset` gives a random offset inside a tile; `Facing` says
  whether a sprite moving between two positions faces left or right.
- `zemeroth.utils`: `clamp`, `clamp_min`, `clamp_max` and `shuffled`.
- `zemeroth.errors`: `ZError` and its subclasses `GameError`, `UiError`,
  `SceneError`, `ZIOError` and `DeserializeError`, each wrapping an
  underlying error and showing it with a label.
- `zemeroth.battle.components`: tile types, abilities, lasting effects and
  the per-object components (`Agent`, `Strength`, `Armor`, `Pos`, `Meta`,
  `BelongsTo`, `Blocker`, `Abilities`, `PassiveAbilities`, `Effects`,
  `Schedule`, `Summoner`), kept by object id in `Storage`s gathered in
  `Parts`.
- `zemeroth.battle.events`: the `Event` record, the active events
  (`MoveTo`, `Attack`, `BeginTurn`, `EndTurn`, `UseAbility`, ...), the
  instant effects (`Create`, `Kill`, `Wound`, `Knockback`, ...) and
  `BattleResult`.
- `zemeroth.battle.scenario`: `Scenario`, its validation
  (`Scenario.check`, which raises a `ScenarioError` subclass such as
  `NoPlayerAgents` or `MapIsTooSmall`), `Line`, `middle_range` and random
  placement of objects (`random_pos`, `random_free_pos`).
- `zemeroth.battle.state`: the battle `State`. Building one checks the
  scenario, scatters rocky tiles, places every scenario object from its
  prototype, and afterwards changes only through `State.apply(event)`.
- `zemeroth.battle.apply`: `apply(state, event)`, which carries out an event
  together with its instant effects, timed effects and scheduled abilities.
- `zemeroth.battle.queries`: read-only questions about a state, such as
  `is_tile_blocked`, `agent_id_at_opt`, `players_agent_ids`,
  `check_enemies_around` and `sort_agent_ids_by_distance_to_enemies`.
- `zemeroth.battle.movement`: `tile_cost`, `Path` with its `Step`s, costs and
  truncation to what an agent can afford, and the `Pathfinder`, which fills
  a cost map from an agent's position and returns the cheapest `Path` to any
  reachable tile.
- `zemeroth.screen`: the abstract `Screen` and `Screens`, a stack of screens
  driven by `Push` and `Pop` transitions. Popping the last screen calls
  `quit()` on the context passed in.
- `zemeroth.campaign`: `Plan`, `CampaignNode`, `Award`, `casualties` and
  `CampaignState`, which walks through the battles of a plan and offers
  recruits between them.

## Examples

Hex geometry:

```python
from zemeroth.hexmap import HexMap, PosHex, distance_hex

board = HexMap(3, default=0)
print(board.height())                                # 7
print(distance_hex(PosHex(0, 0), PosHex(2, -1)))     # 2
print(len(list(board)))                              # 37
```

A battle and a path across it:

```python
from zemeroth.battle.components import Agent, Strength
from zemeroth.battle.events import Event, MoveTo
from zemeroth.battle.movement import Pathfinder
from zemeroth.battle.scenario import ExactObject, Scenario
from zemeroth.battle.state import State
from zemeroth.hexmap import PosHex

prototypes = {
    "swordsman": [Agent(moves=1, move_points=3), Strength(2, 2)],
    "imp": [Agent(), Strength(1, 1)],
}
scenario = Scenario(exact_objects=[
    ExactObject(owner=0, typename="swordsman", pos=PosHex(0, 0)),
    ExactObject(owner=1, typename="imp", pos=PosHex(0, 2)),
])
state = State(prototypes, scenario)

pathfinder = Pathfinder(scenario.map_radius)
pathfinder.fill_map(state, 0)
path = pathfinder.path(PosHex(0, 1))
print(path.cost_for(state, 0))                       # 1
state.apply(Event(MoveTo(path, cost=1, obj_id=0), actor_ids=[0]))
print(state.parts.pos.get(0).pos)                    # PosHex(q=0, r=1)
```

A campaign:

```python
from zemeroth.battle.events import BattleResult
from zemeroth.battle.scenario import Scenario
from zemeroth.campaign import Award, CampaignNode, CampaignState, Mode, Plan

plan = Plan(
    initial_agents=["swordsman", "alchemist"],
    nodes=[
        CampaignNode(Scenario(), Award(recruits=["spearman"])),
        CampaignNode(Scenario()),
    ],
)
campaign = CampaignState.from_plan(plan)
campaign.report_battle_results(BattleResult(0, ["swordsman", "alchemist"]))
print(campaign.mode is Mode.PREPARING_FOR_BATTLE)    # True
campaign.recruit(campaign.available_recruits()[0])
print(campaign.mode)                                 # Mode.READY_FOR_BATTLE
```

An invalid battle report or recruit raises `CampaignError`.

## What it does not do

- There is no command to run and no window: nothing here draws, plays
  sound or reads input. `Screen` is an abstract base; concrete screens and
  the context they draw on come from the code that uses the package.
- Battle commands are not checked or executed here, and there is no
  computer opponent. A `State` changes only through events you build and
  pass to `State.apply`; `apply` raises only where an event cannot be
  carried out at all.
- Scenarios, prototypes and campaign plans are not loaded from files; they
  are built in code.