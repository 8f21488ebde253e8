"""Persisted ending history.

Maps the last reached ending and the set of collected endings onto the
key/value store. Reading tolerates missing or malformed entries by falling
back to defaults, the same way a fresh install reads.
"""

from __future__ import annotations

from dragonwatch.core.logging import get_logger
from dragonwatch.models.endings import EndingRecord
from dragonwatch.models.enums import EndingId
from dragonwatch.storage.database import Database

logger = get_logger(__name__)


LAST_ENDING_ID_KEY = "last_ending_id"
LAST_ENDING_TURN_KEY = "last_ending_turn"
LAST_ENDING_SURVIVAL_RATE_KEY = "last_ending_survival_rate"
LAST_ENDING_EVACUATED_KEY = "last_ending_evacuated"
LAST_ENDING_KILLED_KEY = "last_ending_killed"
LAST_ENDING_DANGEROUS_CARD_COUNT_KEY = "last_ending_dangerous_card_count"
COLLECTED_ENDINGS_KEY = "collected_endings"


def _parse_int(raw: str | None, default: int = 0) -> int:
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_float(raw: str | None, default: float = 0.0) -> float:
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


class EndingStore:
    """Ending history backed by a :class:`Database`.

    Example:
        >>> store = EndingStore(Database("/tmp/dragonwatch.db"))
        >>> store.add_collected_ending(EndingId.ALL_EVACUATED)
        True
        >>> store.has_true_ending()
        True
    """

    def __init__(self, database: Database) -> None:
        """Initialize the store.

        Args:
            database: Key/value database to read and write.
        """
        self._database = database

    def save_last_ending(self, record: EndingRecord) -> None:
        """Overwrite the last-reached-ending record.

        Args:
            record: Snapshot of the run at game end.

        Raises:
            PersistenceError: If the store cannot be written.
        """
        self._database.set_values(
            {
                LAST_ENDING_ID_KEY: int(record.ending_id),
                LAST_ENDING_TURN_KEY: record.turn,
                LAST_ENDING_SURVIVAL_RATE_KEY: repr(record.survival_rate),
                LAST_ENDING_EVACUATED_KEY: record.evacuated,
                LAST_ENDING_KILLED_KEY: record.killed,
                LAST_ENDING_DANGEROUS_CARD_COUNT_KEY: record.dangerous_card_count,
            }
        )

    def load_last_ending(self) -> EndingRecord:
        """Read the last-reached-ending record.

        Returns:
            The saved record; GameOver with zero counts if nothing was saved.
        """
        raw_id = _parse_int(self._database.get_value(LAST_ENDING_ID_KEY), int(EndingId.GAME_OVER))
        try:
            ending_id = EndingId(raw_id)
        except ValueError:
            logger.warning("Unknown stored ending id", ending_id=raw_id)
            ending_id = EndingId.GAME_OVER

        survival_rate = _parse_float(self._database.get_value(LAST_ENDING_SURVIVAL_RATE_KEY))
        return EndingRecord(
            ending_id=ending_id,
            turn=max(0, _parse_int(self._database.get_value(LAST_ENDING_TURN_KEY))),
            survival_rate=min(1.0, max(0.0, survival_rate)),
            evacuated=max(0, _parse_int(self._database.get_value(LAST_ENDING_EVACUATED_KEY))),
            killed=max(0, _parse_int(self._database.get_value(LAST_ENDING_KILLED_KEY))),
            dangerous_card_count=max(
                0, _parse_int(self._database.get_value(LAST_ENDING_DANGEROUS_CARD_COUNT_KEY))
            ),
        )

    def get_collected_endings(self) -> list[EndingId]:
        """Endings reached at least once, in first-reached order.

        Entries that are not known ending ids are skipped.
        """
        raw = self._database.get_value(COLLECTED_ENDINGS_KEY, "") or ""
        collected: list[EndingId] = []
        for part in raw.split(","):
            try:
                ending_id = EndingId(int(part))
            except ValueError:
                continue
            if ending_id not in collected:
                collected.append(ending_id)
        return collected

    def add_collected_ending(self, ending_id: EndingId) -> bool:
        """Add an ending to the collected set.

        Args:
            ending_id: The ending reached.

        Returns:
            True if the ending was not collected before.
        """
        collected = self.get_collected_endings()
        if ending_id in collected:
            return False
        collected.append(ending_id)
        self._database.set_value(
            COLLECTED_ENDINGS_KEY,
            ",".join(str(int(item)) for item in collected),
        )
        logger.info("Ending collected", ending_id=int(ending_id), collected=len(collected))
        return True

    def is_ending_collected(self, ending_id: EndingId) -> bool:
        return ending_id in self.get_collected_endings()

    def collected_count(self) -> int:
        return len(self.get_collected_endings())

    def has_true_ending(self) -> bool:
        """Whether the true ending has ever been reached."""
        return self.is_ending_collected(EndingId.ALL_EVACUATED)


__all__ = [
    "EndingStore",
    "LAST_ENDING_ID_KEY",
    "LAST_ENDING_TURN_KEY",
    "LAST_ENDING_SURVIVAL_RATE_KEY",
    "LAST_ENDING_EVACUATED_KEY",
    "LAST_ENDING_KILLED_KEY",
    "LAST_ENDING_DANGEROUS_CARD_COUNT_KEY",
    "COLLECTED_ENDINGS_KEY",
]
