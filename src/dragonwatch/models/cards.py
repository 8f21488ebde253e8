"""Card and event definitions for DragonWatch.

Cards and events are static data supplied before the engine starts and never
change during a run. Both describe their consequences with the same
:class:`EffectSpec`, so a single application routine handles them.

Example:
    >>> card = CardDefinition(name="Evacuation Order", citizen_cost=0, evacuation_amount=10)
    >>> card.effect.evacuation
    10
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dragonwatch.core.exceptions import ValidationError
from dragonwatch.models.enums import BattleArea, UnlockCondition


# =============================================================================
# Effects
# =============================================================================


class ValueRange(BaseModel):
    """Inclusive integer range used for randomized costs and effects.

    Attributes:
        minimum: Smallest value that can be drawn.
        maximum: Largest value that can be drawn.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    minimum: int = Field(ge=0)
    maximum: int = Field(ge=0)

    @model_validator(mode="after")
    def validate_order(self) -> "ValueRange":
        """Ensure the range is not inverted."""
        if self.minimum > self.maximum:
            msg = f"minimum ({self.minimum}) must not exceed maximum ({self.maximum})"
            raise ValueError(msg)
        return self


class EffectSpec(BaseModel):
    """Everything a card or event does to the player and the engine.

    Application order is costs, then gains, then special effects.

    Attributes:
        health_cost: Flat damage paid by the player.
        health_cost_range: Randomized damage; replaces the flat cost when set.
        citizen_cost: Citizens sacrificed (recorded as killed).
        heal: Health restored, clamped to max health.
        citizen_gain: Reinforcement citizens added to the available pool.
        evacuation: Citizens evacuated, clamped to available citizens.
        evacuation_range: Additional randomized evacuation.
        enemy_stun_turns: Turns the enemy skips its attack.
        reduce_health_to_one: Force the player's health to 1.
        shuffle_hand: Discard and redraw the whole hand.
        reduce_damage_next: Halve (rounding up) the next damage taken.
        hand_size_change: Positive draws extra cards, negative discards random ones.
        replace_card: Name of a card that replaces a random hand card.
        disable_card_count: Hand cards disabled for one turn.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    health_cost: int = Field(default=0, ge=0)
    health_cost_range: ValueRange | None = None
    citizen_cost: int = Field(default=0, ge=0)
    heal: int = Field(default=0, ge=0)
    citizen_gain: int = Field(default=0, ge=0)
    evacuation: int = Field(default=0, ge=0)
    evacuation_range: ValueRange | None = None
    enemy_stun_turns: int = Field(default=0, ge=0)
    reduce_health_to_one: bool = False
    shuffle_hand: bool = False
    reduce_damage_next: bool = False
    hand_size_change: int = 0
    replace_card: str | None = None
    disable_card_count: int = Field(default=0, ge=0)


# =============================================================================
# Cards
# =============================================================================


class CardDefinition(BaseModel):
    """A playable card.

    Equality and hashing use the card name only, so instances recreated by
    a loader still match cards already in a hand or the disabled map.

    Attributes:
        name: Unique card name.
        description: Flavour/rules text.
        health_cost: Flat health cost.
        health_cost_range: Randomized health cost, used instead of the flat cost.
        citizen_cost: Citizens sacrificed to play the card.
        heal_amount: Health restored.
        citizen_gain_amount: Reinforcements gained.
        evacuation_amount: Citizens evacuated.
        evacuation_range: Extra randomized evacuation.
        enemy_stun_turns: Turns the enemy is stunned.
        reduce_health_to_one: Playing the card drops health to 1.
        is_dangerous: Counts toward the Corruption ending.
        draw_weight: Relative draw probability.
        unlock_condition: Condition that adds the card to the pool mid-run.
        event_only: Only ever put in hand by events, never drawn.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    description: str = ""
    health_cost: int = Field(default=0, ge=0)
    health_cost_range: ValueRange | None = None
    citizen_cost: int = Field(default=0, ge=0)
    heal_amount: int = Field(default=0, ge=0)
    citizen_gain_amount: int = Field(default=0, ge=0)
    evacuation_amount: int = Field(default=0, ge=0)
    evacuation_range: ValueRange | None = None
    enemy_stun_turns: int = Field(default=0, ge=0)
    reduce_health_to_one: bool = False
    is_dangerous: bool = False
    draw_weight: float = Field(default=1.0, gt=0, le=10)
    unlock_condition: UnlockCondition | None = None
    event_only: bool = False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CardDefinition):
            return self.name == other.name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.name)

    @property
    def effect(self) -> EffectSpec:
        """The card's consequences as a shared effect description."""
        return EffectSpec(
            health_cost=self.health_cost,
            health_cost_range=self.health_cost_range,
            citizen_cost=self.citizen_cost,
            heal=self.heal_amount,
            citizen_gain=self.citizen_gain_amount,
            evacuation=self.evacuation_amount,
            evacuation_range=self.evacuation_range,
            enemy_stun_turns=self.enemy_stun_turns,
            reduce_health_to_one=self.reduce_health_to_one,
        )

    @property
    def is_condition_card(self) -> bool:
        """Whether the card only enters the pool once unlocked."""
        return self.unlock_condition is not None


# =============================================================================
# Events
# =============================================================================


class EventDefinition(BaseModel):
    """A random event that can strike during the RandomEvent phase.

    Attributes:
        event_id: Unique event identifier.
        description: What happens, shown to the player.
        effect_description: Summary of the consequences.
        is_universal: Can occur in every area.
        area: The single eligible area when not universal.
        hp_change: Positive heals, negative damages.
        citizen_change: Positive reinforces, negative sacrifices.
        enemy_stun_turns: Turns the enemy is stunned.
        shuffle_hand: Redraw the whole hand.
        reduce_damage_next: Halve the next damage taken.
        hand_size_change: Positive draws extra cards, negative discards.
        replace_card: Name of the card swapped into a random hand slot.
        disable_card_count: Hand cards disabled for one turn.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    event_id: str = Field(min_length=1)
    description: str = ""
    effect_description: str = ""
    is_universal: bool = False
    area: BattleArea | None = None
    hp_change: int = 0
    citizen_change: int = 0
    enemy_stun_turns: int = Field(default=0, ge=0)
    shuffle_hand: bool = False
    reduce_damage_next: bool = False
    hand_size_change: int = 0
    replace_card: str | None = None
    disable_card_count: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_area(self) -> "EventDefinition":
        """Ensure area-bound events name their area."""
        if not self.is_universal and self.area is None:
            msg = f"Event {self.event_id!r} is neither universal nor bound to an area"
            raise ValueError(msg)
        return self

    def can_occur_in(self, area: BattleArea) -> bool:
        """Check whether the event is eligible in an area.

        Args:
            area: The current battle area.

        Returns:
            True if the event is universal or bound to that area.
        """
        return self.is_universal or self.area == area

    @property
    def effect(self) -> EffectSpec:
        """The event's consequences as a shared effect description."""
        return EffectSpec(
            health_cost=max(0, -self.hp_change),
            citizen_cost=max(0, -self.citizen_change),
            heal=max(0, self.hp_change),
            citizen_gain=max(0, self.citizen_change),
            enemy_stun_turns=self.enemy_stun_turns,
            shuffle_hand=self.shuffle_hand,
            reduce_damage_next=self.reduce_damage_next,
            hand_size_change=self.hand_size_change,
            replace_card=self.replace_card,
            disable_card_count=self.disable_card_count,
        )


# =============================================================================
# Catalog
# =============================================================================


class CardCatalog:
    """Ordered, name-unique collection of every card known to the game.

    The catalog order is the order the draw pool iterates, which makes
    weighted draws reproducible for a seeded random source.

    Example:
        >>> catalog = CardCatalog([CardDefinition(name="Pray", unlock_condition="turn")])
        >>> [card.name for card in catalog.condition_cards(UnlockCondition.TURN)]
        ['Pray']
    """

    def __init__(self, cards: Iterable[CardDefinition]) -> None:
        """Initialize the catalog.

        Args:
            cards: Card definitions in catalog order.

        Raises:
            ValidationError: If two cards share a name.
        """
        self._cards: tuple[CardDefinition, ...] = tuple(cards)
        self._by_name: dict[str, CardDefinition] = {}
        for card in self._cards:
            if card.name in self._by_name:
                raise ValidationError(
                    "Duplicate card name in catalog",
                    field_name="name",
                    invalid_value=card.name,
                )
            self._by_name[card.name] = card

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "CardCatalog":
        """Build a catalog from plain mappings (e.g. parsed JSON).

        Args:
            records: One mapping per card.

        Returns:
            The validated catalog.
        """
        return cls(CardDefinition.model_validate(record) for record in records)

    def __iter__(self) -> Iterator[CardDefinition]:
        return iter(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get_by_name(self, name: str) -> CardDefinition | None:
        """Look up a card by name.

        Args:
            name: Card name.

        Returns:
            The card, or None if unknown.
        """
        return self._by_name.get(name)

    def drawable_cards(self) -> list[CardDefinition]:
        """Cards that start in the draw pool."""
        return [
            card
            for card in self._cards
            if not card.is_condition_card and not card.event_only
        ]

    def condition_cards(self, condition: UnlockCondition) -> list[CardDefinition]:
        """Cards unlocked by a condition, in catalog order.

        Args:
            condition: The unlock condition.

        Returns:
            Matching cards; event-only cards are never included.
        """
        return [
            card
            for card in self._cards
            if card.unlock_condition == condition and not card.event_only
        ]

    def validate_events(self, events: Iterable[EventDefinition]) -> None:
        """Check that every event's replacement card exists.

        Args:
            events: Event definitions to check.

        Raises:
            ValidationError: If an event references an unknown card.
        """
        for event in events:
            if event.replace_card is not None and event.replace_card not in self._by_name:
                raise ValidationError(
                    f"Event {event.event_id!r} replaces an unknown card",
                    field_name="replace_card",
                    invalid_value=event.replace_card,
                )


__all__ = [
    "ValueRange",
    "EffectSpec",
    "CardDefinition",
    "EventDefinition",
    "CardCatalog",
]
