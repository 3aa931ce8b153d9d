"""The campaign: a chain of battles with recruits awarded between them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from zemeroth.battle.events import BattleResult
from zemeroth.battle.scenario import Scenario

_PLAYER_ID = 0


class Mode(Enum):
    PREPARING_FOR_BATTLE = "preparing_for_battle"
    """Recruiting or upgrading fighters."""

    READY_FOR_BATTLE = "ready_for_battle"
    """The player is ready to start a new battle."""

    WON = "won"
    """The campaign is finished and the player has won."""

    FAILED = "failed"
    """The campaign is finished and the player has lost."""


@dataclass
class Award:
    """What the player gets after a successful battle."""

    recruits: list[str] = field(default_factory=list)


@dataclass
class CampaignNode:
    scenario: Scenario
    award: Award = field(default_factory=Award)


@dataclass
class Plan:
    initial_agents: list[str] = field(default_factory=list)
    nodes: list[CampaignNode] = field(default_factory=list)


class CampaignError(Exception):
    """An action that the campaign's current state does not allow."""


def casualties(initial_agents: Iterable[str], survivors: Iterable[str]) -> list[str]:
    """Agents that did not survive; each survivor cancels one matching agent."""
    agents = list(initial_agents)
    for typename in survivors:
        if typename in agents:
            agents.remove(typename)
    return agents


class CampaignState:
    """Progress through a campaign plan."""

    def __init__(self, nodes: list[CampaignNode], agents: list[str]) -> None:
        if not nodes:
            raise ValueError("No scenarios")
        self._nodes = list(nodes)
        self.current_scenario_index = 0
        self.mode = Mode.READY_FOR_BATTLE
        self.agents: list[str] = list(agents)
        self.last_battle_casualties: list[str] = []
        self._recruits: list[str] = []

    @classmethod
    def from_plan(cls, plan: Plan) -> CampaignState:
        return cls(plan.nodes, plan.initial_agents)

    def scenario(self) -> Scenario:
        """The scenario of the current battle."""
        return self._nodes[self.current_scenario_index].scenario

    def scenarios_count(self) -> int:
        return len(self._nodes)

    def recruit(self, typename: str) -> None:
        """Hire one of the available recruits and get ready for battle."""
        if self.mode is not Mode.PREPARING_FOR_BATTLE:
            raise CampaignError(f"can't recruit in mode {self.mode.value}")
        if typename not in self._recruits:
            raise CampaignError(f"{typename!r} is not an available recruit")
        self.agents.append(typename)
        self._recruits = []
        self.mode = Mode.READY_FOR_BATTLE

    def available_recruits(self) -> list[str]:
        return list(self._recruits)

    def report_battle_results(self, result: BattleResult) -> None:
        """Advance the campaign by the outcome of the current battle."""
        if self.mode is not Mode.READY_FOR_BATTLE:
            raise CampaignError(f"no battle is expected in mode {self.mode.value}")
        for survivor in result.survivor_types:
            if survivor not in self.agents:
                raise CampaignError(f"{survivor!r} is not one of the agents")
        if result.winner_id == _PLAYER_ID and not result.survivor_types:
            raise CampaignError("can't win with no survivors")

        self.last_battle_casualties = casualties(self.agents, result.survivor_types)
        self.agents = list(result.survivor_types)

        if result.winner_id != _PLAYER_ID:
            self.mode = Mode.FAILED
            return

        if self.current_scenario_index + 1 >= len(self._nodes):
            self.mode = Mode.WON
            return

        award = self._nodes[self.current_scenario_index].award
        self._recruits = list(award.recruits)
        self.current_scenario_index += 1
        self.mode = (
            Mode.PREPARING_FOR_BATTLE if self._recruits else Mode.READY_FOR_BATTLE
        )