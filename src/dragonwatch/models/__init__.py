"""Data models for DragonWatch.

Static definitions (cards, events, endings) are frozen pydantic models.
PlayerState is a plain class with explicit change notifications.

Submodules:
    enums: GamePhase, BattleArea, EndingId, UnlockCondition
    cards: EffectSpec, CardDefinition, EventDefinition, CardCatalog
    player: PlayerState and its change notifications
    endings: EndingRecord, EndingDefinition, EndingCatalog

Example:
    >>> from dragonwatch.models import CardDefinition, PlayerState
    >>> card = CardDefinition(name="Prayer", heal_amount=20)
    >>> player = PlayerState(max_health=150, initial_citizens=200, max_hand_size=5)
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from dragonwatch.models.enums import (
    BattleArea,
    EndingId,
    GamePhase,
    UnlockCondition,
)

# =============================================================================
# Cards and Events
# =============================================================================
from dragonwatch.models.cards import (
    CardCatalog,
    CardDefinition,
    EffectSpec,
    EventDefinition,
    ValueRange,
)

# =============================================================================
# Player
# =============================================================================
from dragonwatch.models.player import (
    PlayerChange,
    PlayerObserver,
    PlayerState,
)

# =============================================================================
# Endings
# =============================================================================
from dragonwatch.models.endings import (
    EndingCatalog,
    EndingDefinition,
    EndingRecord,
)


__all__ = [
    # Enumerations
    "BattleArea",
    "EndingId",
    "GamePhase",
    "UnlockCondition",
    # Cards and events
    "CardCatalog",
    "CardDefinition",
    "EffectSpec",
    "EventDefinition",
    "ValueRange",
    # Player
    "PlayerChange",
    "PlayerObserver",
    "PlayerState",
    # Endings
    "EndingCatalog",
    "EndingDefinition",
    "EndingRecord",
]
