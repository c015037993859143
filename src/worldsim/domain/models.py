"""Dataclasses describing every entity the simulation engine owns.

The registries hold the mutable records below.  Anything handed to callers
outside the engine is either immutable (profiles, locations, snapshots) or a
copy, so presentation code can never mutate engine state behind its back.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import NewType

from .enums import (
    AgreementType,
    DiplomaticStance,
    ResourceType,
    TerrainType,
    TrustTitle,
)

# --- Strongly typed identifiers -------------------------------------------------

CityID = NewType("CityID", str)
PlayerID = NewType("PlayerID", str)
LocationID = NewType("LocationID", str)


# --- Static data ----------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TerrainProfile:
    """Multipliers a terrain applies to the cities built on it."""

    terrain: TerrainType
    defense_multiplier: float = 1.0
    farming_multiplier: float = 1.0
    mining_multiplier: float = 1.0


@dataclass(frozen=True, slots=True)
class StrategicLocation:
    """Map location that may levy a transit tax."""

    id: LocationID
    name: str
    is_bridge_crossing: bool = False
    transit_tax: int = 0


@dataclass(frozen=True, slots=True)
class CityRecord:
    """Row of externally supplied city seed data."""

    id: str
    name: str
    description: str


# --- Cities ---------------------------------------------------------------------


@dataclass(slots=True)
class ResourceDeposit:
    """Resource deposit hidden beneath a city."""

    resource: ResourceType
    richness: float
    is_discovered: bool = False


@dataclass(slots=True)
class CityState:
    """Mutable city record owned by the city registry."""

    id: CityID
    name: str
    terrain: TerrainType
    description: str = ""
    owner_player_id: PlayerID | None = None
    population: int = 1000
    public_order: float = 100.0
    land_fertility: float = 100.0
    bandit_risk: float = 0.0
    defense_multiplier: float = 1.0
    farming_multiplier: float = 1.0
    mining_multiplier: float = 1.0
    deposits: list[ResourceDeposit] = field(default_factory=list)
    history_log: list[str] = field(default_factory=list)

    def snapshot(self) -> CitySnapshot:
        return CitySnapshot(
            id=self.id,
            name=self.name,
            terrain=self.terrain,
            description=self.description,
            owner_player_id=self.owner_player_id,
            population=self.population,
            public_order=self.public_order,
            land_fertility=self.land_fertility,
            bandit_risk=self.bandit_risk,
            defense_multiplier=self.defense_multiplier,
            farming_multiplier=self.farming_multiplier,
            mining_multiplier=self.mining_multiplier,
            deposits=tuple(replace(deposit) for deposit in self.deposits),
            history_log=tuple(self.history_log),
        )


@dataclass(frozen=True, slots=True)
class CitySnapshot:
    """Read-only view of a city at the moment it was taken."""

    id: CityID
    name: str
    terrain: TerrainType
    description: str
    owner_player_id: PlayerID | None
    population: int
    public_order: float
    land_fertility: float
    bandit_risk: float
    defense_multiplier: float
    farming_multiplier: float
    mining_multiplier: float
    deposits: tuple[ResourceDeposit, ...]
    history_log: tuple[str, ...]

    @property
    def discovered_deposits(self) -> tuple[ResourceDeposit, ...]:
        return tuple(deposit for deposit in self.deposits if deposit.is_discovered)


# --- Players and diplomacy ------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PlayerProfile:
    """Registered participant in a session."""

    player_id: PlayerID
    display_name: str
    is_human: bool


@dataclass(slots=True)
class DiplomacyAgreement:
    """Directional pact signed by ``source_player_id``."""

    source_player_id: PlayerID
    target_player_id: PlayerID
    type: AgreementType
    signed_turn: int
    is_broken: bool = False


@dataclass(slots=True)
class PlayerDiplomacyState:
    """Agreement ledger and reputation of a single player."""

    player_id: PlayerID
    trust_title: TrustTitle = TrustTitle.NEUTRAL
    agreements: list[DiplomacyAgreement] = field(default_factory=list)

    def mark_breach(self) -> None:
        self.trust_title = TrustTitle.UNRELIABLE

    def mark_loyal_behavior(self) -> None:
        # Unreliable is terminal.
        if self.trust_title != TrustTitle.UNRELIABLE:
            self.trust_title = TrustTitle.LOYAL


@dataclass(slots=True)
class DiplomacyRelation:
    """Stance held by ``source_player_id`` towards ``target_player_id``."""

    source_player_id: PlayerID
    target_player_id: PlayerID
    stance: DiplomaticStance = DiplomaticStance.NEUTRAL
    last_updated_turn: int = 0
