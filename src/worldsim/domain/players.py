"""Player roster, bot bindings and session setup."""

from __future__ import annotations

import logging
from collections.abc import Callable

from worldsim.domain.agents import PlayerAgent
from worldsim.domain.cities import CityRegistry
from worldsim.domain.diplomacy import DiplomacyRelationGraph
from worldsim.domain.enums import CommandError
from worldsim.domain.models import PlayerID, PlayerProfile
from worldsim.domain.rules_config import DEFAULT_RULES, SessionRules

logger = logging.getLogger(__name__)

HUMAN_ID_TEMPLATE = "player-human-{index}"
BOT_ID_TEMPLATE = "player-bot-{index}"


class PlayerRegistry:
    """Owns player profiles in registration order and the agents bound to bots."""

    def __init__(
        self,
        cities: CityRegistry,
        diplomacy: DiplomacyRelationGraph,
        *,
        rules: SessionRules = DEFAULT_RULES.session,
    ) -> None:
        self._cities = cities
        self._diplomacy = diplomacy
        self._rules = rules
        self._players: dict[PlayerID, PlayerProfile] = {}
        self._agents: dict[PlayerID, PlayerAgent] = {}

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._players

    @property
    def capacity(self) -> int:
        return self._rules.max_player_count

    def profiles(self) -> tuple[PlayerProfile, ...]:
        return tuple(self._players.values())

    def get(self, player_id: str) -> PlayerProfile | None:
        return self._players.get(PlayerID(player_id))

    def agents(self) -> list[tuple[PlayerID, PlayerAgent]]:
        """Bound agents in player registration order."""

        return [
            (player_id, self._agents[player_id])
            for player_id in self._players
            if player_id in self._agents
        ]

    def register_player(
        self,
        player_id: str,
        display_name: str | None,
        is_human: bool,
        agent: PlayerAgent | None = None,
        *,
        turn: int = 0,
    ) -> CommandError | None:
        """Register a player; returns the refusal reason or None on success."""

        if player_id is None or not player_id.strip():
            return CommandError.INVALID_PLAYER_ID
        key = PlayerID(player_id)
        if key in self._players:
            return CommandError.ALREADY_REGISTERED
        if len(self._players) >= self._rules.max_player_count:
            return CommandError.CAPACITY_EXCEEDED

        name = display_name if display_name and display_name.strip() else player_id
        self._players[key] = PlayerProfile(player_id=key, display_name=name, is_human=is_human)
        if not is_human and agent is not None:
            self._agents[key] = agent

        self._diplomacy.add_member(key, turn)
        city = self._cities.assign_free_city(key)
        logger.debug(
            "registered %s (%s); assigned city %s",
            key,
            "human" if is_human else "bot",
            city.id if city is not None else None,
        )
        return None

    def try_register_player(
        self,
        player_id: str,
        display_name: str | None,
        is_human: bool,
        agent: PlayerAgent | None = None,
        *,
        turn: int = 0,
    ) -> bool:
        return self.register_player(player_id, display_name, is_human, agent, turn=turn) is None

    def setup_prototype_multiplayer_session(
        self,
        human_count: int,
        bot_count: int,
        *,
        bot_factory: Callable[[], PlayerAgent],
        turn: int = 0,
    ) -> list[PlayerID]:
        """Reset the roster and register numbered humans followed by bots."""

        self.reset()
        cap = self._rules.max_player_count
        humans = max(1, min(cap, human_count))
        bots = max(0, min(cap - humans, bot_count))

        registered: list[PlayerID] = []
        for index in range(1, humans + 1):
            player_id = HUMAN_ID_TEMPLATE.format(index=index)
            if self.try_register_player(player_id, f"Human {index}", True, turn=turn):
                registered.append(PlayerID(player_id))
        for index in range(1, bots + 1):
            player_id = BOT_ID_TEMPLATE.format(index=index)
            if self.try_register_player(player_id, f"Bot {index}", False, bot_factory(), turn=turn):
                registered.append(PlayerID(player_id))
        return registered

    def reset(self) -> None:
        """Forget every player, agent and stance; ledgers and city owners are kept."""

        self._players.clear()
        self._agents.clear()
        self._diplomacy.clear_relations()
