"""Enumeration types for DragonWatch.

Phases of the turn state machine, battle areas, ending identifiers and the
unlock conditions that gate condition cards.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum


class GamePhase(StrEnum):
    """Named steps of the per-turn state machine.

    The phase is owned and mutated solely by the turn engine.
    """

    INITIALIZE = "initialize"
    DRAW_CARD = "draw_card"
    PLAYER_ACTION = "player_action"
    CARD_EFFECT = "card_effect"
    ENEMY_PROGRESS = "enemy_progress"
    RANDOM_EVENT = "random_event"
    CHECK_GAME_END = "check_game_end"
    RETREAT = "retreat"
    GAME_END = "game_end"

    @property
    def is_terminal(self) -> bool:
        """Whether the phase ends the run."""
        return self is GamePhase.GAME_END


class BattleArea(StrEnum):
    """Areas of the city the battle can move through on retreat."""

    MARKET = "market"
    RESIDENTIAL = "residential"
    BACK_ALLEY = "back_alley"
    CATHEDRAL = "cathedral"


class EndingId(IntEnum):
    """Persisted ending identifiers.

    The integer values are stored in the key/value store and must not change.
    """

    GAME_OVER = 1
    ALL_EVACUATED = 2
    HIGH_SURVIVAL = 3
    LOW_SURVIVAL = 4
    CORRUPTION = 5

    @property
    def is_true_ending(self) -> bool:
        """Whether this is the true ending (every citizen survived)."""
        return self is EndingId.ALL_EVACUATED


class UnlockCondition(StrEnum):
    """Thresholds that add condition cards to the draw pool, once each."""

    TURN = "turn"
    """Turn count exceeds the configured threshold."""

    HEALTH = "health"
    """Player health falls below the configured threshold."""

    POPULATION = "population"
    """Available citizens fall below the configured threshold."""


__all__ = [
    "GamePhase",
    "BattleArea",
    "EndingId",
    "UnlockCondition",
]
