"""Weighted card draw pool with one-shot unlockable condition cards.

The pool starts with every drawable card of the catalog. Condition cards join
it permanently the first time their threshold is crossed, and draw with their
weight multiplied by the configured special-card multiplier.
"""

from __future__ import annotations

from dragonwatch.core.config import GameSettings
from dragonwatch.core.logging import get_logger
from dragonwatch.engine.random_source import RandomSource
from dragonwatch.models.cards import CardCatalog, CardDefinition
from dragonwatch.models.enums import UnlockCondition


logger = get_logger(__name__)


class CardPool:
    """Cards currently eligible for drawing.

    Attributes:
        catalog: Every card known to the game.
    """

    def __init__(
        self,
        catalog: CardCatalog,
        settings: GameSettings,
        rng: RandomSource,
    ) -> None:
        """Initialize the pool from the catalog's drawable cards.

        Args:
            catalog: Card catalog.
            settings: Unlock thresholds and the condition-card multiplier.
            rng: Random source for draws.
        """
        self.catalog = catalog
        self._settings = settings
        self._rng = rng
        self._cards: list[CardDefinition] = catalog.drawable_cards()
        self._unlocked: set[UnlockCondition] = set()

        if not self._cards:
            logger.warning("Card pool is empty at start")
        else:
            logger.info("CardPool initialized", cards=len(self._cards))

    @property
    def cards(self) -> list[CardDefinition]:
        """A copy of the pool, in draw-iteration order."""
        return list(self._cards)

    @property
    def unlocked_conditions(self) -> frozenset[UnlockCondition]:
        return frozenset(self._unlocked)

    def weight_of(self, card: CardDefinition) -> float:
        """Effective draw weight of a card.

        Args:
            card: A card in the pool.

        Returns:
            The base weight, multiplied for condition cards.
        """
        if card.is_condition_card:
            return card.draw_weight * self._settings.special_card_weight
        return card.draw_weight

    def total_weight(self) -> float:
        return sum(self.weight_of(card) for card in self._cards)

    def draw_random_card(self) -> CardDefinition | None:
        """Draw one card with probability proportional to its weight.

        Returns:
            The drawn card, or None if the pool is empty.
        """
        if not self._cards:
            logger.warning("Card pool is empty")
            return None

        value = self._rng.uniform(0.0, self.total_weight())
        cumulative = 0.0
        for card in self._cards:
            cumulative += self.weight_of(card)
            if value <= cumulative:
                return card

        # floating-point rounding can leave value just above the final sum
        return self._cards[-1]

    def update_conditions(
        self,
        turn: int,
        health: int,
        remaining_population: int,
    ) -> list[CardDefinition]:
        """Unlock condition cards whose thresholds have been crossed.

        Each condition unlocks at most once per pool; later calls past the
        threshold add nothing.

        Args:
            turn: Current turn counter.
            health: Current player health.
            remaining_population: Citizens still available.

        Returns:
            The cards added by this call.
        """
        checks = (
            (UnlockCondition.TURN, turn > self._settings.turn_condition_threshold),
            (UnlockCondition.HEALTH, health < self._settings.health_condition_threshold),
            (
                UnlockCondition.POPULATION,
                remaining_population < self._settings.population_condition_threshold,
            ),
        )

        added: list[CardDefinition] = []
        for condition, met in checks:
            if not met or condition in self._unlocked:
                continue
            self._unlocked.add(condition)
            cards = self.catalog.condition_cards(condition)
            self._cards.extend(cards)
            added.extend(cards)
            logger.info(
                "Condition cards unlocked",
                condition=condition.value,
                cards=[card.name for card in cards],
            )
        return added


__all__ = ["CardPool"]
