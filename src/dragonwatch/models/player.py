"""Mutable player state for a single DragonWatch run.

PlayerState is the single source of truth for the player's survival metrics
and hand. Fields are plain attributes mutated only through named operations;
each operation notifies subscribers exactly once, after all of its field
writes are done.

Example:
    >>> player = PlayerState(max_health=150, initial_citizens=200, max_hand_size=5)
    >>> _ = player.subscribe(lambda state, change: print(change))
    >>> player.evacuate(30)
    citizens
    30
"""

from __future__ import annotations

import math
from collections.abc import Callable
from enum import StrEnum
from typing import TYPE_CHECKING

from dragonwatch.core.constants import DAMAGE_REDUCTION_FACTOR, DISABLE_DURATION_TURNS
from dragonwatch.core.logging import get_logger


if TYPE_CHECKING:
    from dragonwatch.engine.random_source import RandomSource
    from dragonwatch.models.cards import CardDefinition

logger = get_logger(__name__)


class PlayerChange(StrEnum):
    """What a notified operation changed."""

    HEALTH = "health"
    CITIZENS = "citizens"
    HAND = "hand"
    HAND_SIZE = "hand_size"
    DISABLED_CARDS = "disabled_cards"
    DANGEROUS_CARDS = "dangerous_cards"
    DAMAGE_REDUCTION = "damage_reduction"


PlayerObserver = Callable[["PlayerState", PlayerChange], None]


class PlayerState:
    """Survival metrics, hand and disabled-card countdowns of the player.

    Attributes:
        max_health: Upper bound for health.
        initial_citizens: Population at game start, the survival-rate base.
    """

    def __init__(
        self,
        *,
        max_health: int,
        initial_citizens: int,
        max_hand_size: int,
    ) -> None:
        """Initialize a fresh player.

        Args:
            max_health: Starting and maximum health.
            initial_citizens: Citizens available at game start.
            max_hand_size: Starting hand size limit.
        """
        self.max_health = max_health
        self.initial_citizens = initial_citizens
        self._health = max_health
        self._available_citizens = initial_citizens
        self._evacuated_citizens = 0
        self._killed_citizens = 0
        self._dangerous_card_usage_count = 0
        self._damage_reduction_next = False
        self._max_hand_size = max(0, max_hand_size)
        self._hand: list[CardDefinition] = []
        self._disabled_cards: dict[CardDefinition, int] = {}
        self._observers: list[PlayerObserver] = []

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def health(self) -> int:
        return self._health

    @property
    def available_citizens(self) -> int:
        return self._available_citizens

    @property
    def evacuated_citizens(self) -> int:
        return self._evacuated_citizens

    @property
    def killed_citizens(self) -> int:
        return self._killed_citizens

    @property
    def dangerous_card_usage_count(self) -> int:
        return self._dangerous_card_usage_count

    @property
    def damage_reduction_next(self) -> bool:
        return self._damage_reduction_next

    @property
    def max_hand_size(self) -> int:
        return self._max_hand_size

    @property
    def hand(self) -> list[CardDefinition]:
        """A copy of the hand, in UI order."""
        return list(self._hand)

    @property
    def disabled_cards(self) -> dict[CardDefinition, int]:
        """A copy of the disabled-card countdowns."""
        return dict(self._disabled_cards)

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    @property
    def is_alive(self) -> bool:
        return self._health > 0

    @property
    def all_evacuated(self) -> bool:
        return self._available_citizens == 0 and self._evacuated_citizens > 0

    @property
    def evacuation_progress(self) -> float:
        """Evacuated share of the citizens still alive."""
        total = self._available_citizens + self._evacuated_citizens
        if total == 0:
            return 0.0
        return self._evacuated_citizens / total

    @property
    def survival_rate(self) -> float:
        """Surviving share of the initial population, capped at 1.0."""
        if self.initial_citizens <= 0:
            return 0.0
        survivors = self._available_citizens + self._evacuated_citizens
        return min(1.0, survivors / self.initial_citizens)

    # -------------------------------------------------------------------------
    # Subscription
    # -------------------------------------------------------------------------

    def subscribe(self, observer: PlayerObserver) -> Callable[[], None]:
        """Register an observer called after every mutating operation.

        Args:
            observer: Callback receiving the state and what changed.

        Returns:
            A function that removes the observer again.
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self, change: PlayerChange) -> None:
        for observer in list(self._observers):
            try:
                observer(self, change)
            except Exception:
                logger.exception("Player observer failed", change=change.value)

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    def take_damage(self, amount: int) -> int:
        """Lose health, halving the damage once if a reduction is pending.

        Args:
            amount: Damage before reduction.

        Returns:
            Damage actually applied after reduction.
        """
        damage = max(0, amount)
        if self._damage_reduction_next:
            damage = math.ceil(damage * DAMAGE_REDUCTION_FACTOR)
            self._damage_reduction_next = False
        self._health = max(0, self._health - damage)
        self._notify(PlayerChange.HEALTH)
        return damage

    def heal(self, amount: int) -> None:
        """Restore health, clamped to max health."""
        self._health = min(self.max_health, self._health + max(0, amount))
        self._notify(PlayerChange.HEALTH)

    def reduce_health_to_one(self) -> None:
        self._health = 1
        self._notify(PlayerChange.HEALTH)

    def set_damage_reduction_next(self) -> None:
        """Arm the one-shot next-damage-halved flag."""
        self._damage_reduction_next = True
        self._notify(PlayerChange.DAMAGE_REDUCTION)

    # -------------------------------------------------------------------------
    # Citizens
    # -------------------------------------------------------------------------

    def evacuate(self, count: int) -> int:
        """Move available citizens to safety.

        Args:
            count: Citizens to evacuate.

        Returns:
            Citizens actually evacuated (never more than available).
        """
        moved = min(max(0, count), self._available_citizens)
        self._available_citizens -= moved
        self._evacuated_citizens += moved
        self._notify(PlayerChange.CITIZENS)
        return moved

    def call_reinforcements(self, count: int) -> None:
        self._available_citizens += max(0, count)
        self._notify(PlayerChange.CITIZENS)

    def sacrifice(self, count: int) -> int:
        """Spend available citizens as a cost; they count as killed.

        Args:
            count: Citizens demanded by the cost.

        Returns:
            Citizens actually killed (never more than available).
        """
        return self._kill(count)

    def process_turn_deaths(self, count: int) -> int:
        """Apply the enemy's per-turn killing.

        Args:
            count: Citizens the enemy kills this turn.

        Returns:
            Citizens actually killed (never more than available).
        """
        return self._kill(count)

    def _kill(self, count: int) -> int:
        killed = min(max(0, count), self._available_citizens)
        self._available_citizens -= killed
        self._killed_citizens += killed
        self._notify(PlayerChange.CITIZENS)
        return killed

    def increment_dangerous_card_usage(self) -> None:
        self._dangerous_card_usage_count += 1
        self._notify(PlayerChange.DANGEROUS_CARDS)

    # -------------------------------------------------------------------------
    # Hand
    # -------------------------------------------------------------------------

    def draw_card(self, card: CardDefinition) -> None:
        self._hand.append(card)
        self._notify(PlayerChange.HAND)

    def remove_card(self, card: CardDefinition) -> bool:
        """Remove the first hand card equal to ``card``.

        Returns:
            True if a card was removed.
        """
        try:
            self._hand.remove(card)
        except ValueError:
            return False
        self._notify(PlayerChange.HAND)
        return True

    def remove_card_at(self, index: int) -> CardDefinition:
        """Remove and return the hand card at ``index``.

        Raises:
            IndexError: If the index is outside the hand.
        """
        card = self._hand.pop(index)
        self._notify(PlayerChange.HAND)
        return card

    def clear_hand(self) -> None:
        self._hand.clear()
        self._notify(PlayerChange.HAND)

    def has_card(self, card: CardDefinition) -> bool:
        return card in self._hand

    def replace_random_card(self, card: CardDefinition, rng: RandomSource) -> bool:
        """Swap a uniformly chosen hand card for ``card``.

        Args:
            card: The incoming card.
            rng: Random source used to pick the slot.

        Returns:
            False if the hand was empty.
        """
        if not self._hand:
            return False
        index = rng.randrange(len(self._hand))
        self._hand[index] = card
        self._notify(PlayerChange.HAND)
        return True

    def change_max_hand_size(self, delta: int) -> None:
        self._max_hand_size = max(0, self._max_hand_size + delta)
        self._notify(PlayerChange.HAND_SIZE)

    # -------------------------------------------------------------------------
    # Disabled cards
    # -------------------------------------------------------------------------

    def disable_random_cards(self, count: int, rng: RandomSource) -> list[CardDefinition]:
        """Disable random hand cards that are not already disabled.

        Args:
            count: Cards to disable.
            rng: Random source used to pick the cards.

        Returns:
            The cards disabled, at most ``count``.
        """
        candidates: list[CardDefinition] = []
        for card in self._hand:
            if card not in self._disabled_cards and card not in candidates:
                candidates.append(card)

        disabled: list[CardDefinition] = []
        for _ in range(min(max(0, count), len(candidates))):
            card = candidates.pop(rng.randrange(len(candidates)))
            self._disabled_cards[card] = DISABLE_DURATION_TURNS
            disabled.append(card)

        self._notify(PlayerChange.DISABLED_CARDS)
        return disabled

    def is_card_disabled(self, card: CardDefinition) -> bool:
        return card in self._disabled_cards

    def tick_disabled_cards(self) -> None:
        """Count every disabled card down one turn, dropping expired entries."""
        for card in list(self._disabled_cards):
            remaining = self._disabled_cards[card] - 1
            if remaining <= 0:
                del self._disabled_cards[card]
            else:
                self._disabled_cards[card] = remaining
        self._notify(PlayerChange.DISABLED_CARDS)

    def __repr__(self) -> str:
        return (
            f"PlayerState(health={self._health}/{self.max_health}, "
            f"available={self._available_citizens}, evacuated={self._evacuated_citizens}, "
            f"killed={self._killed_citizens}, hand={len(self._hand)}/{self._max_hand_size})"
        )


__all__ = [
    "PlayerChange",
    "PlayerObserver",
    "PlayerState",
]
