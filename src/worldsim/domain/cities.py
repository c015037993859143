"""City wellbeing rules and the registry that owns every city record."""

from __future__ import annotations

import logging

from worldsim.domain.models import CityID, CitySnapshot, CityState, PlayerID
from worldsim.domain.rules_config import DEFAULT_RULES, CityRules
from worldsim.utils.rng import RandomSource, check_success

logger = logging.getLogger(__name__)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def register_battle(
    city: CityState,
    intensity: float,
    *,
    rules: CityRules = DEFAULT_RULES.cities,
) -> None:
    """Scar a city with a battle of the given (non-negative) intensity."""

    intensity = max(0.0, intensity)
    # The fertility floor only limits losses; it never raises a city that already sits below it.
    fertility_floor = min(rules.battle_fertility_floor, city.land_fertility)
    city.land_fertility = _clamp(
        max(fertility_floor, city.land_fertility - intensity * rules.battle_fertility_loss),
        rules.wellbeing_min,
        rules.wellbeing_max,
    )
    city.public_order = _clamp(
        city.public_order - intensity * rules.battle_order_loss,
        rules.wellbeing_min,
        rules.wellbeing_max,
    )
    city.bandit_risk = _clamp(
        city.bandit_risk + intensity * rules.battle_bandit_gain,
        rules.wellbeing_min,
        rules.wellbeing_max,
    )
    city.history_log.append(f"Battle scar intensity {intensity:.1f}")


def register_peaceful_turn(city: CityState, *, rules: CityRules = DEFAULT_RULES.cities) -> None:
    """Let a city recover for one turn."""

    city.land_fertility = _clamp(
        city.land_fertility + rules.peaceful_fertility_gain,
        rules.wellbeing_min,
        rules.wellbeing_max,
    )
    city.public_order = _clamp(
        city.public_order + rules.peaceful_order_gain,
        rules.wellbeing_min,
        rules.wellbeing_max,
    )
    city.bandit_risk = _clamp(
        city.bandit_risk - rules.peaceful_bandit_decay,
        rules.wellbeing_min,
        rules.wellbeing_max,
    )


def register_rebellion(city: CityState, *, rules: CityRules = DEFAULT_RULES.cities) -> None:
    city.public_order = _clamp(
        city.public_order - rules.rebellion_order_loss,
        rules.wellbeing_min,
        rules.wellbeing_max,
    )
    city.bandit_risk = _clamp(
        city.bandit_risk + rules.rebellion_bandit_gain,
        rules.wellbeing_min,
        rules.wellbeing_max,
    )
    city.history_log.append("Rebellion erupted")


class CityRegistry:
    """Owns city records and applies every mutation they undergo."""

    def __init__(self, *, rules: CityRules = DEFAULT_RULES.cities) -> None:
        self._rules = rules
        self._cities: dict[CityID, CityState] = {}

    def __len__(self) -> int:
        return len(self._cities)

    def __contains__(self, city_id: object) -> bool:
        return city_id in self._cities

    def add(self, city: CityState) -> bool:
        """Register a city; returns False if the id is already taken."""

        if city.id in self._cities:
            return False
        self._cities[city.id] = city
        return True

    def find(self, city_id: str | None) -> CityState | None:
        if city_id is None:
            return None
        return self._cities.get(CityID(city_id))

    def snapshot(self, city_id: str) -> CitySnapshot | None:
        city = self.find(city_id)
        return city.snapshot() if city is not None else None

    def snapshots(self) -> list[CitySnapshot]:
        return [city.snapshot() for city in self._cities.values()]

    def owner_of(self, city_id: str) -> PlayerID | None:
        city = self.find(city_id)
        return city.owner_player_id if city is not None else None

    def apply_battle(
        self,
        city_id: str,
        intensity: float,
        *,
        attacker_id: str | None = None,
    ) -> bool:
        """Apply battle damage to a city; False if the city does not exist."""

        city = self.find(city_id)
        if city is None:
            return False

        register_battle(city, intensity, rules=self._rules)
        if attacker_id:
            city.history_log.append(f"{attacker_id} attacked with intensity {intensity:.1f}")
        return True

    def apply_peaceful_turn(self, city: CityState) -> None:
        register_peaceful_turn(city, rules=self._rules)

    def roll_rebellion(self, city: CityState, rng: RandomSource) -> bool:
        """Roll for unrest in a city with low public order; returns True if it fired."""

        if city.public_order >= self._rules.rebellion_order_threshold:
            return False
        if not check_success(rng, self._rules.rebellion_chance):
            return False

        register_rebellion(city, rules=self._rules)
        logger.debug("rebellion erupted in %s", city.id)
        return True

    def apply_per_tick_effects(self, rng: RandomSource) -> list[CityID]:
        """Apply the background effects of one turn; returns cities that rebelled."""

        rebelled: list[CityID] = []
        for city in self._cities.values():
            self.apply_peaceful_turn(city)
            if self.roll_rebellion(city, rng):
                rebelled.append(city.id)
        return rebelled

    def dispatch_analyst(self, city_id: str, max_discoveries: int = 1) -> int:
        """Reveal up to ``max_discoveries`` hidden deposits in registration order.

        Returns how many deposits were discovered.  Unknown cities and
        non-positive caps discover nothing.
        """

        city = self.find(city_id)
        if city is None or max_discoveries <= 0:
            return 0

        discovered = 0
        for deposit in city.deposits:
            if deposit.is_discovered:
                continue
            deposit.is_discovered = True
            discovered += 1
            if discovered >= max_discoveries:
                break
        return discovered

    def assign_free_city(self, player_id: PlayerID) -> CityState | None:
        """Hand the first ownerless city to ``player_id``."""

        for city in self._cities.values():
            if city.owner_player_id is None or not city.owner_player_id.strip():
                city.owner_player_id = player_id
                return city
        return None

    def clear(self) -> None:
        self._cities.clear()
