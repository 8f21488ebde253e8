"""Custom exception hierarchy for DragonWatch.

All exceptions inherit from DragonWatchError, so callers can handle every
application failure at one boundary while keeping domain context in
``details``.

Runtime game conditions (empty pools, rejected input, re-entrant hand resets)
are not exceptions: they are logged and the engine carries on. The classes
below cover construction-time problems, programmer errors and I/O failures.

Example:
    >>> from dragonwatch.core.exceptions import ValidationError
    >>> raise ValidationError("Unknown card", field_name="replace_card")
"""

from __future__ import annotations

from typing import Any


class DragonWatchError(Exception):
    """Base exception for all DragonWatch errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(DragonWatchError):
    """Raised when application or game configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(DragonWatchError):
    """Raised when static game data is inconsistent.

    Typical causes are duplicate card names in a catalog, an event whose
    replacement card is missing, or a lookup of an unknown card.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


# =============================================================================
# Game Engine Exceptions
# =============================================================================


class GameEngineError(DragonWatchError):
    """Base exception for all turn engine errors."""


class InvalidGameStateError(GameEngineError):
    """Raised when an engine operation is used in a phase that forbids it.

    External player input never raises this; it is reserved for
    programmer errors such as reading the outcome of an unfinished game.
    """

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        expected_states: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid game state error with state context.

        Args:
            message: Human-readable error description.
            current_state: The current phase identifier.
            expected_states: List of phases that were expected.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if current_state:
            combined_details["current_state"] = current_state
        if expected_states:
            combined_details["expected_states"] = expected_states
        super().__init__(message, details=combined_details)


# =============================================================================
# Persistence & Reporting Exceptions
# =============================================================================


class PersistenceError(DragonWatchError):
    """Raised when the key/value store cannot be read or written."""

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize persistence error with key context.

        Args:
            message: Human-readable error description.
            key: The store key being accessed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if key:
            combined_details["key"] = key
        super().__init__(message, details=combined_details)


class ScoreSubmissionError(DragonWatchError):
    """Raised by score board adapters when a submission is rejected."""

    def __init__(
        self,
        message: str,
        *,
        board: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize score submission error with board context.

        Args:
            message: Human-readable error description.
            board: Score board number the value was sent to.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if board is not None:
            combined_details["board"] = board
        super().__init__(message, details=combined_details)


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
]
