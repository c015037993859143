"""Tests for player registration and prototype session setup."""

import pytest

from worldsim.domain.agents import SimpleRuleBasedBotAgent
from worldsim.domain.cities import CityRegistry
from worldsim.domain.diplomacy import DiplomacyRelationGraph
from worldsim.domain.enums import (
    AgreementType,
    CommandError,
    DiplomaticStance,
    TerrainType,
    TrustTitle,
)
from worldsim.domain.models import CityID, CityState, PlayerID
from worldsim.domain.players import PlayerRegistry
from worldsim.domain.rules_config import RulesConfig, SessionRules
from worldsim.utils.rng import seeded_random


def _registry(city_count: int = 2, max_players: int = 4):
    cities = CityRegistry()
    for index in range(city_count):
        cities.add(
            CityState(id=CityID(f"city-{index}"), name=f"City {index}", terrain=TerrainType.RIVER)
        )
    diplomacy = DiplomacyRelationGraph()
    rules = RulesConfig(session=SessionRules(max_player_count=max_players))
    return PlayerRegistry(cities, diplomacy, rules=rules.session), cities, diplomacy


def _bot():
    return SimpleRuleBasedBotAgent(seeded_random("test"))


class TestRegisterPlayer:
    def test_registers_and_assigns_city(self):
        players, cities, diplomacy = _registry()

        assert players.register_player("player-human-1", "Ada", True) is None

        profile = players.get("player-human-1")
        assert profile is not None
        assert profile.display_name == "Ada"
        assert profile.is_human is True
        assert cities.owner_of("city-0") == "player-human-1"
        assert diplomacy.is_member("player-human-1")

    def test_blank_display_name_falls_back_to_id(self):
        players, _, _ = _registry()

        players.register_player("player-human-1", "   ", True)

        profile = players.get("player-human-1")
        assert profile is not None
        assert profile.display_name == "player-human-1"

    @pytest.mark.parametrize("player_id", ["", "   "])
    def test_blank_id_is_refused(self, player_id):
        players, _, _ = _registry()

        assert players.register_player(player_id, "x", True) == CommandError.INVALID_PLAYER_ID
        assert len(players) == 0

    def test_duplicate_is_refused(self):
        players, _, _ = _registry()
        players.register_player("player-human-1", None, True)

        assert players.register_player("player-human-1", None, True) == (
            CommandError.ALREADY_REGISTERED
        )
        assert players.try_register_player("player-human-1", None, True) is False

    def test_capacity_is_enforced(self):
        players, _, _ = _registry(max_players=2)
        players.register_player("player-human-1", None, True)
        players.register_player("player-human-2", None, True)

        assert players.register_player("player-human-3", None, True) == (
            CommandError.CAPACITY_EXCEEDED
        )
        assert players.capacity == 2
        assert len(players) == 2

    def test_player_without_free_city_still_registers(self):
        players, cities, _ = _registry(city_count=1)
        players.register_player("player-human-1", None, True)

        assert players.register_player("player-human-2", None, True) is None
        assert cities.owner_of("city-0") == "player-human-1"

    def test_new_member_is_neutral_to_everyone(self):
        players, _, diplomacy = _registry()
        players.register_player("player-human-1", None, True)
        players.register_player("player-bot-1", None, False, _bot())

        assert diplomacy.get_relation("player-bot-1", "player-human-1") is not None
        assert diplomacy.get_stance("player-human-1", "player-bot-1") == DiplomaticStance.NEUTRAL

    def test_agents_follow_registration_order(self):
        players, _, _ = _registry(city_count=0)
        first, second = _bot(), _bot()
        players.register_player("player-bot-2", None, False, first)
        players.register_player("player-human-1", None, True, _bot())
        players.register_player("player-bot-1", None, False, second)

        # Humans never get an agent bound.
        assert players.agents() == [
            (PlayerID("player-bot-2"), first),
            (PlayerID("player-bot-1"), second),
        ]


class TestPrototypeSession:
    def test_numbered_humans_then_bots(self):
        players, _, _ = _registry()

        registered = players.setup_prototype_multiplayer_session(2, 1, bot_factory=_bot)

        assert registered == ["player-human-1", "player-human-2", "player-bot-1"]
        assert [p.display_name for p in players.profiles()] == ["Human 1", "Human 2", "Bot 1"]
        assert len(players.agents()) == 1

    @pytest.mark.parametrize(
        ("humans", "bots", "expected_humans", "expected_bots"),
        [
            (0, 0, 1, 0),
            (9, 9, 4, 0),
            (1, 9, 1, 3),
            (2, -1, 2, 0),
        ],
    )
    def test_counts_are_clamped(self, humans, bots, expected_humans, expected_bots):
        players, _, _ = _registry()

        players.setup_prototype_multiplayer_session(humans, bots, bot_factory=_bot)

        profiles = players.profiles()
        assert sum(1 for p in profiles if p.is_human) == expected_humans
        assert sum(1 for p in profiles if not p.is_human) == expected_bots

    def test_setup_resets_roster_and_relations(self):
        players, cities, diplomacy = _registry()
        players.register_player("player-custom", None, True)

        players.setup_prototype_multiplayer_session(1, 0, bot_factory=_bot)

        assert players.get("player-custom") is None
        assert diplomacy.is_member("player-custom") is False
        # City ownership survives a reset.
        assert cities.owner_of("city-0") == "player-custom"
        assert cities.owner_of("city-1") == "player-human-1"

    def test_setup_keeps_agreement_ledgers(self):
        players, _, diplomacy = _registry()
        players.register_player("player-human-1", None, True)
        players.register_player("player-bot-1", None, False, _bot())
        diplomacy.sign_agreement(
            PlayerID("player-human-1"), PlayerID("player-bot-1"), AgreementType.TRADE, 0
        )
        diplomacy.break_agreement(
            PlayerID("player-human-1"), PlayerID("player-bot-1"), AgreementType.TRADE
        )

        players.setup_prototype_multiplayer_session(1, 1, bot_factory=_bot)

        assert diplomacy.get_trust_title("player-human-1") == TrustTitle.UNRELIABLE
        (agreement,) = diplomacy.agreements_for("player-human-1")
        assert agreement.is_broken is True
