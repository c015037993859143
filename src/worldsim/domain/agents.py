"""Automated player policies and the dispatcher that runs them each turn."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Protocol

from worldsim.domain.commands import (
    AttackCity,
    Command,
    CommandProcessor,
    CommandResult,
    DeclareWar,
    OfferCeasefire,
)
from worldsim.domain.enums import WeeklyActionType
from worldsim.domain.models import PlayerID
from worldsim.domain.rules_config import DEFAULT_RULES, AgentRules
from worldsim.utils.rng import RandomSource, random_uniform

logger = logging.getLogger(__name__)


class PlayerAgent(Protocol):
    """Policy deciding what an automated player does on a turn.

    Implementations only append commands to ``output``; execution is the
    dispatcher's job.
    """

    def enqueue_turn_commands(
        self,
        phase: WeeklyActionType,
        player_id: PlayerID,
        output: list[Command],
    ) -> None: ...


class SimpleRuleBasedBotAgent:
    """Reference bot: posture towards a rival in diplomacy, raid a city in war."""

    def __init__(self, rng: RandomSource, *, rules: AgentRules = DEFAULT_RULES.agents) -> None:
        self._rng = rng
        self._rules = rules

    def enqueue_turn_commands(
        self,
        phase: WeeklyActionType,
        player_id: PlayerID,
        output: list[Command],
    ) -> None:
        if phase == WeeklyActionType.DIPLOMACY:
            command_type = (
                OfferCeasefire
                if self._rng.random() > self._rules.ceasefire_threshold
                else DeclareWar
            )
            output.append(command_type(player_id, self._rules.rival_player_id))

        if phase == WeeklyActionType.WAR:
            intensity = random_uniform(
                self._rng,
                self._rules.attack_intensity_min,
                self._rules.attack_intensity_max,
            )
            output.append(AttackCity(player_id, self._rules.target_city_id, intensity))


AgentSource = Callable[[], Iterable[tuple[PlayerID, PlayerAgent]]]


class AgentDispatcher:
    """Collects one command batch per turn from every bound agent and executes it."""

    def __init__(self, agents: AgentSource, processor: CommandProcessor) -> None:
        self._agents = agents
        self._processor = processor
        self._buffer: list[Command] = []

    @property
    def last_batch(self) -> tuple[Command, ...]:
        return tuple(self._buffer)

    def collect(self, phase: WeeklyActionType) -> list[Command]:
        """Rebuild the command buffer from every agent in registration order."""

        self._buffer.clear()
        for player_id, agent in self._agents():
            produced: list[Command] = []
            try:
                agent.enqueue_turn_commands(phase, player_id, produced)
            except Exception:
                # A broken policy forfeits its turn; the rest of the batch still runs.
                logger.exception("agent for %s failed to produce commands", player_id)
                continue
            self._buffer.extend(produced)
        return list(self._buffer)

    def collect_and_execute(self, phase: WeeklyActionType) -> list[CommandResult]:
        self.collect(phase)
        results = self._processor.execute_batch(self._buffer)
        logger.debug(
            "executed %d agent command(s), %d succeeded",
            len(results),
            sum(1 for result in results if result.success),
        )
        return results

    def clear(self) -> None:
        self._buffer.clear()
