"""Configuration management for DragonWatch.

This module provides centralized configuration using pydantic-settings,
supporting environment variables, .env files, and runtime overrides.

Example:
    >>> from dragonwatch.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.game.max_turns
    20

Environment Variables:
    DRAGONWATCH_GAME_MAX_TURNS: Turn limit of a run
    DRAGONWATCH_GAME_INITIAL_CITIZENS: Citizens alive at game start
    DRAGONWATCH_PACING_TIME_SCALE: Multiplier for every pacing delay (0 disables waits)
    DRAGONWATCH_DATABASE_PATH: Path to the SQLite key/value store
    DRAGONWATCH_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dragonwatch.core.exceptions import ConfigurationError


class GameSettings(BaseSettings):
    """Rules configuration consumed by the turn engine.

    Attributes:
        player_max_health: Starting and maximum health of the player.
        initial_citizens: Citizens available at game start.
        turn_death_count: Citizens killed by the enemy each unstunned turn.
        max_turns: Turn limit; reaching it ends the run.
        max_hand_size: Starting hand size limit.
        retreat_turn_interval: A retreat happens every N turns.
        special_card_weight: Draw weight multiplier for unlocked condition cards.
        turn_condition_threshold: Turn count that must be exceeded to unlock turn cards.
        health_condition_threshold: Health below which health cards unlock.
        population_condition_threshold: Available citizens below which population cards unlock.
        random_event_interval: A random event is drawn every N turns after the first.
    """

    model_config = SettingsConfigDict(
        env_prefix="DRAGONWATCH_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    player_max_health: int = Field(default=150, ge=1, description="Player max health")
    initial_citizens: int = Field(default=200, ge=0, description="Initial citizens")
    turn_death_count: int = Field(default=5, ge=0, description="Citizens lost per turn")
    max_turns: int = Field(default=20, ge=1, description="Turn limit")
    max_hand_size: int = Field(default=5, ge=0, description="Initial max hand size")
    retreat_turn_interval: int = Field(default=5, ge=1, description="Turns between retreats")
    special_card_weight: float = Field(
        default=3,
        gt=0,
        description="Weight multiplier for condition cards",
    )
    turn_condition_threshold: int = Field(default=15, ge=0)
    health_condition_threshold: int = Field(default=20, ge=0)
    population_condition_threshold: int = Field(default=50, ge=0)
    random_event_interval: int = Field(default=3, ge=1, description="Turns between events")

    @model_validator(mode="after")
    def validate_health_threshold(self) -> "GameSettings":
        """Ensure the health unlock threshold can be reached during a run.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If the threshold exceeds the player's max health.
        """
        if self.health_condition_threshold > self.player_max_health:
            raise ConfigurationError(
                f"health_condition_threshold ({self.health_condition_threshold}) must not "
                f"exceed player_max_health ({self.player_max_health})",
                config_key="health_condition_threshold",
            )
        return self


class PacingSettings(BaseSettings):
    """Pacing delays (seconds) the engine waits between presentation steps.

    Attributes:
        time_scale: Multiplier applied to every delay; 0 disables waiting.
        ready_poll_interval: Interval between subsystem-ready polls.
        initialize_settle: Wait after the subsystem reports ready.
        draw_card: Wait after each drawn card.
        card_effect_hold: Wait after a card's effect before it leaves the hand.
        card_effect_settle: Wait after the played card left the hand.
        hand_reset_action: Wait when a hand reset stands in for a card play.
        enemy_progress: Wait after the enemy acted.
        random_event_display: Wait while a random event is displayed.
        retreat_dialogue: Wait before the retreat areas are offered.
        retreat_travel: Wait after the retreat area was chosen.
        hand_reset_clear: Wait before the hand is cleared during a reset.
        hand_reset_settle: Wait after the hand was cleared during a reset.
    """

    model_config = SettingsConfigDict(
        env_prefix="DRAGONWATCH_PACING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    time_scale: float = Field(default=1.0, ge=0)
    ready_poll_interval: float = Field(default=0.1, gt=0)
    initialize_settle: float = Field(default=0.5, ge=0)
    draw_card: float = Field(default=0.2, ge=0)
    card_effect_hold: float = Field(default=0.3, ge=0)
    card_effect_settle: float = Field(default=0.2, ge=0)
    hand_reset_action: float = Field(default=0.1, ge=0)
    enemy_progress: float = Field(default=0.5, ge=0)
    random_event_display: float = Field(default=2.0, ge=0)
    retreat_dialogue: float = Field(default=1.5, ge=0)
    retreat_travel: float = Field(default=1.5, ge=0)
    hand_reset_clear: float = Field(default=0.3, ge=0)
    hand_reset_settle: float = Field(default=0.2, ge=0)


class StorageSettings(BaseSettings):
    """Configuration for persistent storage.

    Attributes:
        database_path: Path to the SQLite key/value store.
    """

    model_config = SettingsConfigDict(
        env_prefix="DRAGONWATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = Field(
        default=Path("data/dragonwatch.db"),
        description="Path to SQLite database",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        game: Rules configuration.
        pacing: Pacing delays.
        storage: Storage settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="DRAGONWATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="DragonWatch", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    game: GameSettings = Field(default_factory=GameSettings)
    pacing: PacingSettings = Field(default_factory=PacingSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Example:
        >>> clear_settings_cache()
        >>> settings = get_settings()  # Reloads from environment
    """
    get_settings.cache_clear()


__all__ = [
    "GameSettings",
    "PacingSettings",
    "StorageSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
