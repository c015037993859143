"""Domain model for the world simulation.

This package hosts every rule of the turn/command engine:

* Dataclasses describing every entity (see :mod:`models`).
* Enumerations and strongly-typed identifiers used across the rules layer.
* Rule configuration objects (see :mod:`rules_config`).
* The registries (cities, players, diplomacy), the command processor, the
  turn scheduler and the bot dispatcher.

Everything here operates purely in memory; :mod:`worldsim.simulation` wires
the pieces into a single engine object.
"""

from . import (
    agents,
    cities,
    commands,
    diplomacy,
    enums,
    models,
    players,
    rules_config,
    seed_data,
    terrain,
    tick,
)

__all__ = [
    "agents",
    "cities",
    "commands",
    "diplomacy",
    "enums",
    "models",
    "players",
    "rules_config",
    "seed_data",
    "terrain",
    "tick",
]
