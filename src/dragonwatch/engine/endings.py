"""Ending classification and persisted ending history.

Classification is a pure function of the final run metrics. The service
wraps it with persistence: the last ending is always overwritten, the
collected set only grows.
"""

from __future__ import annotations

from dragonwatch.core.config import GameSettings
from dragonwatch.core.constants import (
    CORRUPTION_DANGEROUS_USES,
    FULL_SURVIVAL_RATE,
    HIGH_SURVIVAL_RATE,
)
from dragonwatch.core.logging import get_logger
from dragonwatch.models.endings import EndingRecord
from dragonwatch.models.enums import EndingId
from dragonwatch.models.player import PlayerState
from dragonwatch.storage.endings import EndingStore


logger = get_logger(__name__)


def classify_ending(
    *,
    is_alive: bool,
    turn: int,
    max_turns: int,
    dangerous_card_usage_count: int,
    survival_rate: float,
) -> EndingId:
    """Map final run metrics to an ending; the first matching rule wins.

    1. Player dead: GameOver.
    2. Turn limit reached: GameOver.
    3. More than one dangerous card played: Corruption.
    4. Survival rate 1.0: AllEvacuated.
    5. Survival rate at least 0.5: HighSurvival.
    6. Otherwise: LowSurvival.

    Args:
        is_alive: Whether the player still has health.
        turn: Turn counter at game end.
        max_turns: Configured turn limit.
        dangerous_card_usage_count: Dangerous cards played.
        survival_rate: Surviving share of the initial population.

    Returns:
        The ending reached.
    """
    if not is_alive:
        return EndingId.GAME_OVER
    if turn >= max_turns:
        return EndingId.GAME_OVER
    if dangerous_card_usage_count > CORRUPTION_DANGEROUS_USES:
        return EndingId.CORRUPTION
    if survival_rate >= FULL_SURVIVAL_RATE:
        return EndingId.ALL_EVACUATED
    if survival_rate >= HIGH_SURVIVAL_RATE:
        return EndingId.HIGH_SURVIVAL
    return EndingId.LOW_SURVIVAL


class EndingService:
    """Classifies runs and keeps the ending history in an EndingStore."""

    def __init__(self, store: EndingStore, settings: GameSettings) -> None:
        """Initialize the service.

        Args:
            store: Persisted ending history.
            settings: Game settings providing the turn limit.
        """
        self._store = store
        self._settings = settings

    @property
    def store(self) -> EndingStore:
        return self._store

    @staticmethod
    def is_true_ending(ending_id: EndingId) -> bool:
        return ending_id.is_true_ending

    def classify(
        self,
        player: PlayerState,
        turn: int,
        max_turns: int | None = None,
    ) -> EndingId:
        """Classify a player's final state.

        Args:
            player: Final player state.
            turn: Turn counter at game end.
            max_turns: Turn limit; defaults to the configured one.

        Returns:
            The ending reached.
        """
        return classify_ending(
            is_alive=player.is_alive,
            turn=turn,
            max_turns=self._settings.max_turns if max_turns is None else max_turns,
            dangerous_card_usage_count=player.dangerous_card_usage_count,
            survival_rate=player.survival_rate,
        )

    @staticmethod
    def snapshot(ending_id: EndingId, player: PlayerState, turn: int) -> EndingRecord:
        """Capture the record persisted for a reached ending."""
        return EndingRecord(
            ending_id=ending_id,
            turn=turn,
            survival_rate=player.survival_rate,
            evacuated=player.evacuated_citizens,
            killed=player.killed_citizens,
            dangerous_card_count=player.dangerous_card_usage_count,
        )

    def record_and_persist(self, record: EndingRecord) -> bool:
        """Persist a reached ending.

        The last-ending record is overwritten unconditionally; the collected
        set gains the ending only if it is not already present.

        Args:
            record: Snapshot of the run, including the ending reached.

        Returns:
            True if the ending was collected for the first time.

        Raises:
            PersistenceError: If the store cannot be written.
        """
        self._store.save_last_ending(record)
        newly_collected = self._store.add_collected_ending(record.ending_id)
        logger.info(
            "Ending recorded",
            ending_id=int(record.ending_id),
            turn=record.turn,
            survival_rate=record.survival_rate,
            newly_collected=newly_collected,
        )
        return newly_collected

    def determine_and_record(self, player: PlayerState, turn: int) -> tuple[EndingRecord, bool]:
        """Classify the final state and persist it.

        Args:
            player: Final player state.
            turn: Turn counter at game end.

        Returns:
            The persisted record and whether the ending was newly collected.
        """
        record = self.snapshot(self.classify(player, turn), player, turn)
        return record, self.record_and_persist(record)

    def collected_count(self) -> int:
        return self._store.collected_count()


__all__ = [
    "EndingService",
    "classify_ending",
]
