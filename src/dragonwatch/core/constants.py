"""Fixed rule constants for DragonWatch.

Values that are part of the game's rules rather than its tuning live here;
tunable numbers belong in :mod:`dragonwatch.core.config`.
"""

from __future__ import annotations

# =============================================================================
# Effect Rules
# =============================================================================

DAMAGE_REDUCTION_FACTOR = 0.5
"""Multiplier applied (rounded up) to the next damage after a reduction effect."""

DISABLE_DURATION_TURNS = 1
"""Turns a card stays disabled after a disable effect."""

CORRUPTION_DANGEROUS_USES = 1
"""Dangerous card uses above this count lead to the Corruption ending."""

HIGH_SURVIVAL_RATE = 0.5
"""Survival rate at or above which a run earns the HighSurvival ending."""

FULL_SURVIVAL_RATE = 1.0
"""Survival rate at or above which a run earns the AllEvacuated ending."""

# =============================================================================
# Score Rules
# =============================================================================

SURVIVAL_SCORE_MAX = 10_000
"""Score awarded for a survival rate of 1.0."""

TURN_BONUS_MAX = 5_000
"""Score bonus for clearing on the first turn, decreasing linearly to zero."""

PERFECT_BONUS = 5_000
"""Score bonus for clearing with every citizen alive."""

SCORE_BOARD = 1
"""Board receiving clear scores."""

ENDING_COUNT_BOARD = 2
"""Board receiving the number of distinct endings collected."""

# =============================================================================
# Cue Names
# =============================================================================

SOUND_PLAYER_DAMAGE = "PlayerDamage"
SOUND_ENEMY_ATTACK = "EnemyAttack"
SOUND_PLAYER_ATTACK = "PlayerAttack"
PARTICLE_ENEMY_ATTACK = "EnemyAttack"
PARTICLE_PLAYER_ATTACK = "PlayerAttack"


__all__ = [
    # Effect rules
    "DAMAGE_REDUCTION_FACTOR",
    "DISABLE_DURATION_TURNS",
    "CORRUPTION_DANGEROUS_USES",
    "HIGH_SURVIVAL_RATE",
    "FULL_SURVIVAL_RATE",
    # Score rules
    "SURVIVAL_SCORE_MAX",
    "TURN_BONUS_MAX",
    "PERFECT_BONUS",
    "SCORE_BOARD",
    "ENDING_COUNT_BOARD",
    # Cues
    "SOUND_PLAYER_DAMAGE",
    "SOUND_ENEMY_ATTACK",
    "SOUND_PLAYER_ATTACK",
    "PARTICLE_ENEMY_ATTACK",
    "PARTICLE_PLAYER_ATTACK",
]
