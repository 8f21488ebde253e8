"""Application of card and event effects.

Cards and events share one routine: costs are paid first, gains applied
next, special effects last. Presentation cues and engine-level operations are
reached through small injected interfaces so the routine runs headless.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from dragonwatch.core.constants import (
    PARTICLE_ENEMY_ATTACK,
    PARTICLE_PLAYER_ATTACK,
    SOUND_PLAYER_ATTACK,
    SOUND_PLAYER_DAMAGE,
)
from dragonwatch.core.logging import get_logger
from dragonwatch.engine.random_source import RandomSource
from dragonwatch.models.cards import CardCatalog, EffectSpec
from dragonwatch.models.player import PlayerState


logger = get_logger(__name__)


# =============================================================================
# Capabilities
# =============================================================================


class EffectCues(Protocol):
    """Audio and particle feedback triggered by effects."""

    def play_sound(self, name: str) -> None:
        ...

    def play_particle(self, name: str) -> None:
        ...


class NullEffectCues:
    """Cue sink that ignores every cue."""

    def play_sound(self, name: str) -> None:
        return None

    def play_particle(self, name: str) -> None:
        return None


class EffectHost(Protocol):
    """Engine operations an effect may invoke."""

    def stun_enemy(self, turns: int) -> None:
        ...

    def reset_hand(self, trigger_next_phase: bool = False) -> bool:
        ...

    def draw_additional_cards(self, count: int) -> int:
        ...

    def remove_random_cards(self, count: int) -> int:
        ...


# =============================================================================
# Application
# =============================================================================


@dataclass
class EffectReport:
    """What an applied effect actually did.

    Attributes:
        damage_taken: Health lost after any damage reduction.
        citizens_sacrificed: Citizens killed as a cost.
        healed: Whether a heal was applied.
        reinforcements: Citizens gained.
        evacuated: Citizens evacuated, after clamping.
        stun_turns: Turns added to the enemy stun counter.
        hand_reset: Whether a hand reset was accepted.
        cards_drawn: Extra cards drawn.
        cards_removed: Random cards discarded.
        replaced_card: Name of the card swapped into the hand, if any.
        disabled_cards: Names of the cards disabled.
    """

    damage_taken: int = 0
    citizens_sacrificed: int = 0
    healed: bool = False
    reinforcements: int = 0
    evacuated: int = 0
    stun_turns: int = 0
    hand_reset: bool = False
    cards_drawn: int = 0
    cards_removed: int = 0
    replaced_card: str | None = None
    disabled_cards: list[str] = field(default_factory=list)


def apply_effect(
    effect: EffectSpec,
    player: PlayerState,
    host: EffectHost,
    *,
    rng: RandomSource,
    catalog: CardCatalog | None = None,
    cues: EffectCues | None = None,
) -> EffectReport:
    """Apply an effect to the player and the engine.

    Order: health cost (a randomized range replaces the flat cost), citizen
    cost; then heal, reinforcements, evacuation, randomized evacuation; then
    stun, force-health-to-one, hand reshuffle, next-damage reduction, hand-size
    change, card replacement and card disabling.

    Args:
        effect: The effect to apply.
        player: Player state to mutate.
        host: Engine operations for stun and hand manipulation.
        rng: Random source for randomized magnitudes and hand slots.
        catalog: Card catalog used to resolve replacement cards.
        cues: Presentation cues; defaults to no cues.

    Returns:
        A report of what was actually applied.
    """
    cues = cues or NullEffectCues()
    report = EffectReport()

    # Costs
    health_cost = 0
    if effect.health_cost_range is not None:
        health_cost = rng.randint(effect.health_cost_range.minimum, effect.health_cost_range.maximum)
        report.damage_taken = player.take_damage(health_cost)
    elif effect.health_cost > 0:
        health_cost = effect.health_cost
        report.damage_taken = player.take_damage(health_cost)
    if health_cost > 0:
        cues.play_sound(SOUND_PLAYER_DAMAGE)
        cues.play_particle(PARTICLE_ENEMY_ATTACK)

    if effect.citizen_cost > 0:
        report.citizens_sacrificed = player.sacrifice(effect.citizen_cost)

    # Gains
    if effect.heal > 0:
        player.heal(effect.heal)
        report.healed = True
    if effect.citizen_gain > 0:
        player.call_reinforcements(effect.citizen_gain)
        report.reinforcements = effect.citizen_gain
    if effect.evacuation > 0:
        report.evacuated += player.evacuate(effect.evacuation)
    if effect.evacuation_range is not None:
        amount = rng.randint(effect.evacuation_range.minimum, effect.evacuation_range.maximum)
        report.evacuated += player.evacuate(amount)

    # Special effects
    if effect.enemy_stun_turns > 0:
        host.stun_enemy(effect.enemy_stun_turns)
        report.stun_turns = effect.enemy_stun_turns
        cues.play_sound(SOUND_PLAYER_ATTACK)
        cues.play_particle(PARTICLE_PLAYER_ATTACK)
    if effect.reduce_health_to_one:
        player.reduce_health_to_one()
    if effect.shuffle_hand:
        report.hand_reset = host.reset_hand(False)
    if effect.reduce_damage_next:
        player.set_damage_reduction_next()
    if effect.hand_size_change > 0:
        report.cards_drawn = host.draw_additional_cards(effect.hand_size_change)
    elif effect.hand_size_change < 0:
        report.cards_removed = host.remove_random_cards(-effect.hand_size_change)
    if effect.replace_card is not None:
        replacement = catalog.get_by_name(effect.replace_card) if catalog else None
        if replacement is None:
            logger.warning("Replacement card not found", card=effect.replace_card)
        elif player.replace_random_card(replacement, rng):
            report.replaced_card = replacement.name
    if effect.disable_card_count > 0:
        disabled = player.disable_random_cards(effect.disable_card_count, rng)
        report.disabled_cards = [card.name for card in disabled]

    return report


__all__ = [
    "EffectCues",
    "EffectHost",
    "EffectReport",
    "NullEffectCues",
    "apply_effect",
]
