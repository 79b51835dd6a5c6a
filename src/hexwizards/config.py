"""Lightweight configuration for the Hex Wizards tools."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings; every field can be overridden with ``HEXWIZARDS_<NAME>``."""

    model_config = SettingsConfigDict(
        env_prefix="HEXWIZARDS_", env_file=".env", env_file_encoding="utf-8"
    )

    board_width: int = Field(default=30, ge=2, description="Cells in an even board row")
    board_height: int = Field(default=20, ge=1, description="Number of board rows")
    num_continents: int = Field(default=2, ge=1, description="Continents grown per board")
    min_continent_width: int = Field(
        default=2, ge=0, description="Lower bound (inclusive) of the continent stop roll"
    )
    max_continent_width: int = Field(
        default=6, ge=1, description="Upper bound (exclusive) of the continent stop roll"
    )
    num_players: int = Field(default=3, ge=1, description="Players seated in a new game")
    seed: str | None = Field(
        default=None, description="Seed for new games; a random seed is drawn when unset"
    )
    max_automatic_turns: int = Field(
        default=64,
        gt=0,
        description="Consecutive AI turns or auto-passes before a game pauses",
    )
    log_level: str = Field(default="INFO", description="Root logging level for the CLI")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )

    @model_validator(mode="after")
    def _check_continent_widths(self) -> Settings:
        if self.max_continent_width <= self.min_continent_width:
            raise ValueError("max_continent_width must be greater than min_continent_width")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
