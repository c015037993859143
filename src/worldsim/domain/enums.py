"""Enumerations used across the world simulation domain."""

from __future__ import annotations

from enum import StrEnum


class TerrainType(StrEnum):
    """Terrain a city can sit on."""

    PLAINS = "plains"
    MOUNTAIN = "mountain"
    FOREST = "forest"
    DESERT = "desert"
    RIVER = "river"
    BRIDGE_CROSSING = "bridge_crossing"


class ResourceType(StrEnum):
    """Resource kinds a deposit may hold."""

    GRAIN = "grain"
    IRON = "iron"
    GOLD = "gold"
    TIMBER = "timber"
    STONE = "stone"


class WeeklyActionType(StrEnum):
    """Category of action permitted on a given day of the week."""

    DIPLOMACY = "diplomacy"
    RESOURCE_COLLECTION = "resource_collection"
    HEADQUARTERS_DEVELOPMENT = "headquarters_development"
    WAR = "war"


class AgreementType(StrEnum):
    """Pacts two players may sign."""

    NON_AGGRESSION = "non_aggression"
    TRADE = "trade"


class TrustTitle(StrEnum):
    """Reputation label earned through agreement behaviour."""

    NEUTRAL = "neutral"
    LOYAL = "loyal"
    UNRELIABLE = "unreliable"


class DiplomaticStance(StrEnum):
    """Relationship state between two players."""

    NEUTRAL = "neutral"
    PEACE = "peace"
    CEASEFIRE = "ceasefire"
    WAR = "war"


class CommandError(StrEnum):
    """Reasons a command can be rejected."""

    NOT_FOUND = "not_found"
    INVALID_PLAYER_ID = "invalid_player_id"
    ALREADY_REGISTERED = "already_registered"
    INVALID_PHASE = "invalid_phase"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    SELF_TARGETING = "self_targeting"
    NOT_AT_WAR = "not_at_war"
    UNKNOWN_COMMAND_KIND = "unknown_command_kind"
