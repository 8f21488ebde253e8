"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        DragonWatchError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Static game data errors.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
"""

from __future__ import annotations

from dragonwatch.core.config import (
    GameSettings,
    PacingSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from dragonwatch.core.exceptions import (
    ConfigurationError,
    DragonWatchError,
    GameEngineError,
    InvalidGameStateError,
    PersistenceError,
    ScoreSubmissionError,
    ValidationError,
)
from dragonwatch.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "DragonWatchError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Game engine exceptions
    "GameEngineError",
    "InvalidGameStateError",
    # Persistence exceptions
    "PersistenceError",
    "ScoreSubmissionError",
    # Configuration
    "Settings",
    "GameSettings",
    "PacingSettings",
    "StorageSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
