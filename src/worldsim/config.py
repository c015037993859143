"""Lightweight configuration for the world simulation."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Session and host settings, overridable through ``WORLDSIM_*`` variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WORLDSIM_",
    )

    session_seed: int = Field(default=0, ge=0, description="Seed for every random draw")
    human_players: int = Field(default=1, ge=1, description="Humans registered on initialize")
    bot_players: int = Field(default=3, ge=0, description="Bots registered on initialize")
    city_records_path: Path | None = Field(
        default=None,
        description="CSV of id,name,description rows; the prototype world is used when unset",
    )
    generated_city_count: int | None = Field(
        default=None,
        ge=0,
        description="Cities to generate from the records (defaults to one per record)",
    )
    tick_interval_seconds: float = Field(
        default=1.0,
        description="Real-time seconds between automatic turns when scheduling is enabled",
        gt=0.0,
    )
    debug_tick_speed_multiplier: float = Field(
        default=1.0,
        description="Multiplier applied to the tick interval to speed up or slow down turns",
        gt=0.0,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )
    log_level: str = Field(default="INFO", description="Root logging level for the CLI")


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
