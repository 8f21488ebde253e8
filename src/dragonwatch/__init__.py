"""DragonWatch - turn engine of a survival card game.

A dragon guards a burning city. Each turn the player plays one card to pay
health or citizens for evacuations, heals and stuns while the enemy keeps
killing citizens. Random events strike every few turns, and the battle
retreats to another district every few more. The run ends in one of five
endings depending on how many citizens survived.

Example:
    >>> from dragonwatch import CardDefinition, RecordingPacer, create_engine
    >>>
    >>> cards = [CardDefinition(name="Evacuation Order", evacuation_amount=20)]
    >>> engine = create_engine(cards=cards, pacer=RecordingPacer())
    >>> engine.run_until_input()
    >>> engine.select_card(engine.player.hand[0], 0)
    >>> engine.run_until_input()

Modules:
    core: Configuration, logging, and base exceptions.
    models: Card, event and ending definitions, player state.
    engine: Phase state machine, pools, effects, endings and scoring.
    storage: SQLite key/value persistence and ending history.
"""

from __future__ import annotations

# Core
from dragonwatch.core.config import Settings, get_settings
from dragonwatch.core.exceptions import DragonWatchError
from dragonwatch.core.logging import configure_logging, get_logger

# Models
from dragonwatch.models import (
    BattleArea,
    CardCatalog,
    CardDefinition,
    EndingId,
    EventDefinition,
    GamePhase,
    PlayerState,
)

# Engine
from dragonwatch.engine import (
    EngineEventType,
    GameOutcome,
    RandomSource,
    RecordingPacer,
    StepStatus,
    TurnEngine,
    create_engine,
)

# Storage
from dragonwatch.storage import Database, EndingStore


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "DragonWatchError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "BattleArea",
    "CardCatalog",
    "CardDefinition",
    "EndingId",
    "EventDefinition",
    "GamePhase",
    "PlayerState",
    # Engine
    "EngineEventType",
    "GameOutcome",
    "RandomSource",
    "RecordingPacer",
    "StepStatus",
    "TurnEngine",
    "create_engine",
    # Storage
    "Database",
    "EndingStore",
]
