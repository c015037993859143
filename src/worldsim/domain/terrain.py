"""Terrain profiles and the stat ranges generated cities draw from."""

from __future__ import annotations

from dataclasses import dataclass

from worldsim.domain.enums import TerrainType
from worldsim.domain.models import TerrainProfile
from worldsim.utils.rng import RandomSource, random_uniform

DEFAULT_DEFENSE_MULTIPLIER = 1.0

# terrain -> (defense, farming, mining)
DEFAULT_TERRAIN_MULTIPLIERS: dict[TerrainType, tuple[float, float, float]] = {
    TerrainType.PLAINS: (1.0, 1.2, 0.8),
    TerrainType.MOUNTAIN: (1.2, 0.6, 1.4),
    TerrainType.FOREST: (1.1, 0.9, 1.1),
    TerrainType.DESERT: (0.9, 0.5, 1.0),
    TerrainType.RIVER: (1.0, 1.1, 0.9),
    TerrainType.BRIDGE_CROSSING: (1.05, 1.0, 1.0),
}


@dataclass(frozen=True, slots=True)
class StatRange:
    """Inclusive bounds for each multiplier of a generated city."""

    defense_min: float
    defense_max: float
    farming_min: float
    farming_max: float
    mining_min: float
    mining_max: float


TERRAIN_STAT_RANGES: dict[TerrainType, StatRange] = {
    TerrainType.PLAINS: StatRange(0.8, 1.05, 1.2, 1.6, 0.7, 1.0),
    TerrainType.MOUNTAIN: StatRange(1.3, 1.8, 0.5, 0.9, 1.2, 1.8),
    TerrainType.FOREST: StatRange(1.0, 1.3, 0.8, 1.1, 0.8, 1.2),
    TerrainType.DESERT: StatRange(0.7, 1.0, 0.3, 0.7, 1.0, 1.5),
    TerrainType.RIVER: StatRange(0.9, 1.2, 1.1, 1.5, 0.8, 1.1),
    TerrainType.BRIDGE_CROSSING: StatRange(1.1, 1.4, 0.9, 1.2, 0.9, 1.3),
}


class TerrainProfileTable:
    """Static mapping from terrain to its multiplier profile."""

    def __init__(self) -> None:
        self._profiles: dict[TerrainType, TerrainProfile] = {}

    def __len__(self) -> int:
        return len(self._profiles)

    def seed_defaults(self) -> None:
        """Replace the table contents with the built-in profiles."""

        self._profiles.clear()
        for terrain, (defense, farming, mining) in DEFAULT_TERRAIN_MULTIPLIERS.items():
            self.add_profile(terrain, defense, farming, mining)

    def add_profile(
        self,
        terrain: TerrainType,
        defense: float,
        farming: float,
        mining: float,
    ) -> TerrainProfile:
        profile = TerrainProfile(
            terrain=terrain,
            defense_multiplier=defense,
            farming_multiplier=farming,
            mining_multiplier=mining,
        )
        self._profiles[terrain] = profile
        return profile

    def get_profile(self, terrain: TerrainType) -> TerrainProfile | None:
        return self._profiles.get(terrain)

    def get_defense_multiplier(self, terrain: TerrainType) -> float:
        """Return the seeded defense multiplier, or 1.0 for unseeded terrain."""

        profile = self._profiles.get(terrain)
        if profile is None:
            return DEFAULT_DEFENSE_MULTIPLIER
        return profile.defense_multiplier

    def clear(self) -> None:
        self._profiles.clear()


def roll_city_multipliers(terrain: TerrainType, rng: RandomSource) -> tuple[float, float, float]:
    """Draw (defense, farming, mining) multipliers from the terrain's stat range."""

    stat_range = TERRAIN_STAT_RANGES[terrain]
    return (
        random_uniform(rng, stat_range.defense_min, stat_range.defense_max),
        random_uniform(rng, stat_range.farming_min, stat_range.farming_max),
        random_uniform(rng, stat_range.mining_min, stat_range.mining_max),
    )
