"""Storage module for DragonWatch persistence.

Provides SQLite-based storage for:
- A generic key/value table
- The last ending reached and the set of endings collected
"""

from dragonwatch.storage.database import (
    Database,
    KeyValueRecord,
    get_database,
    reset_database,
)
from dragonwatch.storage.endings import EndingStore

__all__ = [
    "Database",
    "KeyValueRecord",
    "EndingStore",
    "get_database",
    "reset_database",
]
