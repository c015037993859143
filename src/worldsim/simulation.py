"""The world simulation engine.

:class:`WorldSimulation` owns every registry for one session.  A host calls
:meth:`~WorldSimulation.initialize` once, :meth:`~WorldSimulation.advance`
once per logic step, submits commands and issues read queries in between,
and finally calls :meth:`~WorldSimulation.dispose`.  The engine is not
reentrant; callers must serialise access.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from worldsim.config import Settings
from worldsim.domain.agents import AgentDispatcher, PlayerAgent, SimpleRuleBasedBotAgent
from worldsim.domain.cities import CityRegistry
from worldsim.domain.commands import (
    AttackCity,
    BreakAgreement,
    Command,
    CommandContext,
    CommandProcessor,
    CommandResult,
    SignAgreement,
)
from worldsim.domain.diplomacy import DiplomacyRelationGraph
from worldsim.domain.enums import (
    AgreementType,
    CommandError,
    DiplomaticStance,
    TerrainType,
    TrustTitle,
    WeeklyActionType,
)
from worldsim.domain.models import (
    CityID,
    CityRecord,
    CitySnapshot,
    DiplomacyAgreement,
    DiplomacyRelation,
    LocationID,
    PlayerID,
    PlayerProfile,
    StrategicLocation,
)
from worldsim.domain.players import PlayerRegistry
from worldsim.domain.rules_config import DEFAULT_RULES, RulesConfig
from worldsim.domain.seed_data import (
    generate_cities,
    load_city_records,
    prototype_cities,
    prototype_locations,
)
from worldsim.domain.terrain import TerrainProfileTable
from worldsim.domain.tick import TurnScheduler
from worldsim.utils.rng import RandomSource, generate_seed, seeded_random

logger = logging.getLogger(__name__)

PRIMARY_HUMAN_ID = "player-human-1"
PRIMARY_BOT_ID = "player-bot-1"


@dataclass(slots=True)
class TurnReport:
    """What happened during the most recent call to ``advance``."""

    turn: int
    phase: WeeklyActionType
    rebellions: list[CityID] = field(default_factory=list)
    commands: list[Command] = field(default_factory=list)
    results: list[CommandResult] = field(default_factory=list)


class WorldSimulation:
    """Turn/command engine for a single multiplayer session."""

    def __init__(
        self,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        rng: RandomSource | None = None,
        city_records: Sequence[CityRecord] | None = None,
        generated_city_count: int | None = None,
        locations: Sequence[StrategicLocation] | None = None,
        human_players: int = 1,
        bot_players: int = 3,
    ) -> None:
        self._rules = rules
        self._rng = rng if rng is not None else seeded_random(generate_seed(0, 0, "session"))
        self._city_records = list(city_records) if city_records is not None else None
        self._generated_city_count = generated_city_count
        self._seed_locations = list(locations) if locations is not None else None
        self._human_players = human_players
        self._bot_players = bot_players

        self._terrain = TerrainProfileTable()
        self._cities = CityRegistry(rules=rules.cities)
        self._diplomacy = DiplomacyRelationGraph()
        self._players = PlayerRegistry(self._cities, self._diplomacy, rules=rules.session)
        self._locations: dict[LocationID, StrategicLocation] = {}
        self._scheduler = TurnScheduler(self._cities, self._rng)
        self._processor = CommandProcessor(
            CommandContext(
                cities=self._cities,
                diplomacy=self._diplomacy,
                clock=self._scheduler,
                rules=rules.commands,
            )
        )
        self._dispatcher = AgentDispatcher(self._players.agents, self._processor)
        self._last_report: TurnReport | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        rules: RulesConfig = DEFAULT_RULES,
    ) -> WorldSimulation:
        """Build an engine configured from application settings."""

        records = (
            load_city_records(settings.city_records_path)
            if settings.city_records_path is not None
            else None
        )
        return cls(
            rules=rules,
            rng=seeded_random(generate_seed(settings.session_seed, 0, "session")),
            city_records=records,
            generated_city_count=settings.generated_city_count,
            human_players=settings.human_players,
            bot_players=settings.bot_players,
        )

    # --- lifecycle --------------------------------------------------------------

    def initialize(self) -> None:
        """Seed terrain, world and players and rewind to turn 0."""

        self._clear()
        self._terrain.seed_defaults()
        self._seed_world()
        self._scheduler.reset()
        self.setup_prototype_multiplayer_session(self._human_players, self._bot_players)
        self.try_set_diplomatic_stance(PRIMARY_HUMAN_ID, PRIMARY_BOT_ID, DiplomaticStance.PEACE)
        logger.info(
            "session initialised with %d cities and %d players",
            len(self._cities),
            len(self._players),
        )

    def advance(self) -> None:
        """Run one turn: phase change, city effects, then every bot's commands."""

        rebellions = self._scheduler.advance()
        results = self._dispatcher.collect_and_execute(self._scheduler.phase)
        self._last_report = TurnReport(
            turn=self._scheduler.turn,
            phase=self._scheduler.phase,
            rebellions=rebellions,
            commands=list(self._dispatcher.last_batch),
            results=results,
        )

    def dispose(self) -> None:
        """Drop every registry; the engine must be initialised again before use."""

        self._clear()
        logger.info("session disposed")

    def _clear(self) -> None:
        self._terrain.clear()
        self._cities.clear()
        self._locations.clear()
        self._players.reset()
        self._diplomacy.clear()
        self._dispatcher.clear()
        self._scheduler.reset()
        self._last_report = None

    def _seed_world(self) -> None:
        if self._city_records is None:
            cities = prototype_cities(self._terrain)
        else:
            count = (
                self._generated_city_count
                if self._generated_city_count is not None
                else len(self._city_records)
            )
            cities = generate_cities(self._city_records, count, self._rng)

        for city in cities:
            if not self._cities.add(city):
                logger.warning("duplicate city id %s in seed data; skipped", city.id)
        locations = (
            self._seed_locations if self._seed_locations is not None else prototype_locations()
        )
        for location in locations:
            self._locations[location.id] = location

    # --- session setup ----------------------------------------------------------

    def setup_prototype_multiplayer_session(self, human_count: int = 1, bot_count: int = 3) -> None:
        self._players.setup_prototype_multiplayer_session(
            human_count,
            bot_count,
            bot_factory=self._default_bot,
            turn=self._scheduler.turn,
        )

    def try_register_player(
        self,
        player_id: str,
        display_name: str | None,
        is_human: bool,
        agent: PlayerAgent | None = None,
    ) -> bool:
        return self.register_player(player_id, display_name, is_human, agent) is None

    def register_player(
        self,
        player_id: str,
        display_name: str | None,
        is_human: bool,
        agent: PlayerAgent | None = None,
    ) -> CommandError | None:
        """Like :meth:`try_register_player` but reports why registration was refused."""

        return self._players.register_player(
            player_id, display_name, is_human, agent, turn=self._scheduler.turn
        )

    def _default_bot(self) -> PlayerAgent:
        return SimpleRuleBasedBotAgent(self._rng, rules=self._rules.agents)

    # --- commands ---------------------------------------------------------------

    def submit_command(self, command: Command | None) -> CommandResult:
        """Execute a command and return the detailed outcome."""

        return self._processor.execute(command)

    def execute_command(self, command: Command | None) -> bool:
        return self.submit_command(command).success

    def try_set_diplomatic_stance(
        self,
        source_player_id: str,
        target_player_id: str,
        stance: DiplomaticStance,
    ) -> bool:
        return self._diplomacy.set_stance(
            source_player_id, target_player_id, stance, self._scheduler.turn
        )

    def try_apply_battle(self, source_player_id: str, city_id: str, intensity: float) -> bool:
        return self.execute_command(AttackCity(source_player_id, city_id, intensity))

    def try_sign_agreement(
        self,
        source_player_id: str,
        target_player_id: str,
        agreement_type: AgreementType,
    ) -> bool:
        return self.execute_command(
            SignAgreement(source_player_id, target_player_id, agreement_type)
        )

    def try_break_agreement(
        self,
        source_player_id: str,
        target_player_id: str,
        agreement_type: AgreementType,
    ) -> bool:
        return self.execute_command(
            BreakAgreement(source_player_id, target_player_id, agreement_type)
        )

    # --- queries ----------------------------------------------------------------

    @property
    def rules(self) -> RulesConfig:
        return self._rules

    @property
    def turn(self) -> int:
        return self._scheduler.turn

    @property
    def current_action(self) -> WeeklyActionType:
        return self._scheduler.phase

    @property
    def last_report(self) -> TurnReport | None:
        return self._last_report

    @property
    def players(self) -> tuple[PlayerProfile, ...]:
        return self._players.profiles()

    def get_player(self, player_id: str) -> PlayerProfile | None:
        return self._players.get(player_id)

    def cities(self) -> list[CitySnapshot]:
        return self._cities.snapshots()

    def get_city(self, city_id: str) -> CitySnapshot | None:
        return self._cities.snapshot(city_id)

    def get_location(self, location_id: str) -> StrategicLocation | None:
        return self._locations.get(LocationID(location_id))

    def can_attack(self, source_player_id: str | None, target_player_id: str | None) -> bool:
        return self._diplomacy.can_attack(source_player_id, target_player_id)

    def get_stance(self, source_player_id: str, target_player_id: str) -> DiplomaticStance:
        return self._diplomacy.get_stance(source_player_id, target_player_id)

    def get_relation(
        self, source_player_id: str, target_player_id: str
    ) -> DiplomacyRelation | None:
        return self._diplomacy.get_relation(source_player_id, target_player_id)

    def get_trust_title(self, player_id: str) -> TrustTitle:
        return self._diplomacy.get_trust_title(player_id)

    def agreements_for(self, player_id: str) -> list[DiplomacyAgreement]:
        return self._diplomacy.agreements_for(player_id)

    def get_defense_multiplier(self, terrain: TerrainType) -> float:
        return self._terrain.get_defense_multiplier(terrain)

    def calculate_transit_tax_income(self, location_id: str, unit_count: int) -> int:
        """Tax collected from ``unit_count`` units crossing a bridge; 0 elsewhere."""

        location = self._locations.get(LocationID(location_id))
        if location is None or not location.is_bridge_crossing:
            return 0
        return max(0, unit_count) * max(0, location.transit_tax)

    def dispatch_analyst(self, city_id: str, max_discoveries: int = 1) -> int:
        """Reveal hidden deposits in a city; returns how many were found."""

        return self._cities.dispatch_analyst(city_id, max_discoveries)

    def owner_of(self, city_id: str) -> PlayerID | None:
        return self._cities.owner_of(city_id)
