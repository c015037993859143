"""Declarative rule configuration for the simulation engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CityRules:
    """Wellbeing bounds and per-tick deltas for cities."""

    wellbeing_min: float = 0.0
    wellbeing_max: float = 100.0
    battle_fertility_floor: float = 5.0
    battle_fertility_loss: float = 3.0
    battle_order_loss: float = 4.0
    battle_bandit_gain: float = 2.0
    peaceful_fertility_gain: float = 0.7
    peaceful_order_gain: float = 0.5
    peaceful_bandit_decay: float = 0.4
    rebellion_order_threshold: float = 30.0
    rebellion_chance: float = 0.15
    rebellion_order_loss: float = 8.0
    rebellion_bandit_gain: float = 7.0


@dataclass(frozen=True, slots=True)
class SessionRules:
    """Player roster limits."""

    max_player_count: int = 4


@dataclass(frozen=True, slots=True)
class CommandRules:
    """Switches selecting between rule variants."""

    # When set, attacks also need the War phase on top of a War stance.
    attack_requires_war_phase: bool = False


@dataclass(frozen=True, slots=True)
class AgentRules:
    """Tuning for the reference rule-based bot."""

    rival_player_id: str = "player-human-1"
    target_city_id: str = "city-karadag"
    ceasefire_threshold: float = 0.5
    attack_intensity_min: float = 0.4
    attack_intensity_max: float = 1.2


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    cities: CityRules = CityRules()
    session: SessionRules = SessionRules()
    commands: CommandRules = CommandRules()
    agents: AgentRules = AgentRules()

    def __post_init__(self) -> None:
        if not 0.0 <= self.cities.rebellion_chance <= 1.0:
            raise ValueError(
                f"rebellion_chance must be between 0.0 and 1.0, got {self.cities.rebellion_chance}"
            )
        if self.session.max_player_count < 1:
            raise ValueError(
                f"max_player_count must be positive, got {self.session.max_player_count}"
            )
        if self.agents.attack_intensity_min > self.agents.attack_intensity_max:
            raise ValueError("attack_intensity_min cannot be greater than attack_intensity_max")


DEFAULT_RULES = RulesConfig()
