"""Turn engine for DragonWatch.

This package drives a run: the phase state machine, weighted card and event
pools, effect application, ending classification and scoring.
"""

from __future__ import annotations

# =============================================================================
# Turn Engine
# =============================================================================
from dragonwatch.engine.loop import (
    EngineEvent,
    EngineEventHandler,
    EngineEventType,
    GameOutcome,
    StepResult,
    StepStatus,
    TurnEngine,
    create_engine,
)

# =============================================================================
# Pools
# =============================================================================
from dragonwatch.engine.card_pool import CardPool
from dragonwatch.engine.event_pool import EventPool

# =============================================================================
# Effects
# =============================================================================
from dragonwatch.engine.effects import (
    EffectCues,
    EffectHost,
    EffectReport,
    NullEffectCues,
    apply_effect,
)

# =============================================================================
# Endings and Scoring
# =============================================================================
from dragonwatch.engine.endings import EndingService, classify_ending
from dragonwatch.engine.scoring import (
    LoggingScoreBoard,
    ScoreBoard,
    calculate_score,
    report_safely,
)

# =============================================================================
# Capabilities
# =============================================================================
from dragonwatch.engine.pacing import (
    Pacer,
    ReadyProbe,
    RecordingPacer,
    SleepPacer,
    always_ready,
)
from dragonwatch.engine.random_source import RandomSource


__all__ = [
    # Turn engine
    "EngineEvent",
    "EngineEventHandler",
    "EngineEventType",
    "GameOutcome",
    "StepResult",
    "StepStatus",
    "TurnEngine",
    "create_engine",
    # Pools
    "CardPool",
    "EventPool",
    # Effects
    "EffectCues",
    "EffectHost",
    "EffectReport",
    "NullEffectCues",
    "apply_effect",
    # Endings and scoring
    "EndingService",
    "classify_ending",
    "LoggingScoreBoard",
    "ScoreBoard",
    "calculate_score",
    "report_safely",
    # Capabilities
    "Pacer",
    "ReadyProbe",
    "RecordingPacer",
    "SleepPacer",
    "always_ready",
    "RandomSource",
]
