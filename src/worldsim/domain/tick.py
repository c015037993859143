"""Turn counter and weekly phase orchestration."""

from __future__ import annotations

import logging

from worldsim.domain.cities import CityRegistry
from worldsim.domain.enums import WeeklyActionType
from worldsim.domain.models import CityID
from worldsim.utils.rng import RandomSource

logger = logging.getLogger(__name__)

WEEK_LENGTH = 7

# Day of the week -> permitted action category.
WEEKLY_SCHEDULE: tuple[WeeklyActionType, ...] = (
    WeeklyActionType.DIPLOMACY,
    WeeklyActionType.DIPLOMACY,
    WeeklyActionType.RESOURCE_COLLECTION,
    WeeklyActionType.RESOURCE_COLLECTION,
    WeeklyActionType.HEADQUARTERS_DEVELOPMENT,
    WeeklyActionType.HEADQUARTERS_DEVELOPMENT,
    WeeklyActionType.WAR,
)


def resolve_phase(turn: int) -> WeeklyActionType:
    """Return the weekly action permitted on ``turn``."""

    return WEEKLY_SCHEDULE[turn % WEEK_LENGTH]


class TurnScheduler:
    """Advances the turn counter and applies the background effects of a turn.

    Peaceful recovery and rebellion rolls run every turn regardless of phase;
    only commands are phase-gated.
    """

    def __init__(self, cities: CityRegistry, rng: RandomSource) -> None:
        self._cities = cities
        self._rng = rng
        self._turn = 0
        self._phase = resolve_phase(0)

    @property
    def turn(self) -> int:
        return self._turn

    @property
    def phase(self) -> WeeklyActionType:
        return self._phase

    def reset(self) -> None:
        self._turn = 0
        self._phase = resolve_phase(0)

    def advance(self) -> list[CityID]:
        """Move to the next turn; returns the cities that rebelled."""

        self._turn += 1
        self._phase = resolve_phase(self._turn)
        rebelled = self._cities.apply_per_tick_effects(self._rng)
        logger.debug(
            "turn %d (%s): %d rebellion(s)", self._turn, self._phase, len(rebelled)
        )
        return rebelled
