"""Tests for the mutable player state."""

from __future__ import annotations

import pytest

from dragonwatch.engine.random_source import RandomSource
from dragonwatch.models import CardDefinition, PlayerChange, PlayerState


def _card(name: str) -> CardDefinition:
    return CardDefinition(name=name)


class TestInitialState:
    """Tests for a freshly created player."""

    def test_starting_values(self, player: PlayerState) -> None:
        """Test health, citizens and hand start at their configured values."""
        assert player.health == 150
        assert player.max_health == 150
        assert player.available_citizens == 200
        assert player.evacuated_citizens == 0
        assert player.killed_citizens == 0
        assert player.dangerous_card_usage_count == 0
        assert player.max_hand_size == 5
        assert player.hand == []
        assert player.damage_reduction_next is False

    def test_derived_values(self, player: PlayerState) -> None:
        """Test derived values of a fresh player."""
        assert player.is_alive is True
        assert player.all_evacuated is False
        assert player.evacuation_progress == 0.0
        assert player.survival_rate == 1.0

    def test_negative_hand_size_clamped(self) -> None:
        """Test a negative starting hand size is clamped to zero."""
        player = PlayerState(max_health=10, initial_citizens=10, max_hand_size=-2)
        assert player.max_hand_size == 0


class TestHealth:
    """Tests for health operations."""

    def test_damage_and_death(self, player: PlayerState) -> None:
        """Test damage lowers health and never below zero."""
        assert player.take_damage(40) == 40
        assert player.health == 110

        player.take_damage(500)
        assert player.health == 0
        assert player.is_alive is False

    def test_heal_clamped(self, player: PlayerState) -> None:
        """Test healing never exceeds max health."""
        player.take_damage(30)
        player.heal(100)
        assert player.health == 150

    def test_negative_amounts_ignored(self, player: PlayerState) -> None:
        """Test negative damage and healing have no effect."""
        player.take_damage(-10)
        player.heal(-10)
        assert player.health == 150

    @pytest.mark.parametrize(
        ("amount", "expected"),
        [(20, 10), (21, 11), (1, 1), (0, 0)],
    )
    def test_damage_reduction_rounds_up(
        self, player: PlayerState, amount: int, expected: int
    ) -> None:
        """Test pending reduction halves damage, rounding up."""
        player.set_damage_reduction_next()

        assert player.take_damage(amount) == expected
        assert player.health == 150 - expected
        assert player.damage_reduction_next is False

    def test_reduction_consumed_once(self, player: PlayerState) -> None:
        """Test the reduction applies to the next damage only."""
        player.set_damage_reduction_next()
        player.take_damage(20)
        player.take_damage(20)
        assert player.health == 150 - 10 - 20

    def test_reduce_health_to_one(self, player: PlayerState) -> None:
        """Test health can be forced to exactly one."""
        player.reduce_health_to_one()
        assert player.health == 1
        assert player.is_alive is True

    def test_health_stays_in_bounds(self, player: PlayerState) -> None:
        """Test health stays within [0, max] across mixed operations."""
        for amount in (30, -5, 400, 0):
            player.take_damage(amount)
            assert 0 <= player.health <= player.max_health
            player.heal(amount)
            assert 0 <= player.health <= player.max_health


class TestCitizens:
    """Tests for citizen accounting."""

    def test_evacuate_clamped(self, player: PlayerState) -> None:
        """Test evacuation never exceeds the available citizens."""
        assert player.evacuate(50) == 50
        assert player.evacuate(500) == 150
        assert player.available_citizens == 0
        assert player.evacuated_citizens == 200
        assert player.all_evacuated is True

    def test_sacrifice_counts_killed(self, player: PlayerState) -> None:
        """Test sacrificed citizens count as killed."""
        assert player.sacrifice(30) == 30
        assert player.available_citizens == 170
        assert player.killed_citizens == 30

    def test_turn_deaths_count_actual_losses(self) -> None:
        """Test killed citizens grow by the number actually lost."""
        player = PlayerState(max_health=10, initial_citizens=3, max_hand_size=1)

        assert player.process_turn_deaths(5) == 3
        assert player.killed_citizens == 3
        assert player.available_citizens == 0

    def test_population_is_conserved(self, player: PlayerState) -> None:
        """Test available + evacuated + killed equals initial + reinforcements."""
        player.evacuate(40)
        player.sacrifice(15)
        player.call_reinforcements(25)
        player.process_turn_deaths(5)
        player.evacuate(1000)

        total = player.available_citizens + player.evacuated_citizens + player.killed_citizens
        assert total == 200 + 25

    def test_survival_rate(self, player: PlayerState) -> None:
        """Test survival rate is survivors over the initial population."""
        player.process_turn_deaths(100)
        assert player.survival_rate == 0.5

        player.evacuate(50)
        assert player.survival_rate == 0.5

    def test_survival_rate_capped(self, player: PlayerState) -> None:
        """Test reinforcements never push survival above 1.0."""
        player.call_reinforcements(100)
        assert player.survival_rate == 1.0

    def test_survival_rate_without_population(self) -> None:
        """Test a run without citizens has zero survival."""
        player = PlayerState(max_health=10, initial_citizens=0, max_hand_size=1)
        assert player.survival_rate == 0.0

    def test_evacuation_progress(self, player: PlayerState) -> None:
        """Test progress is evacuated over living citizens."""
        player.process_turn_deaths(100)
        player.evacuate(25)
        assert player.evacuation_progress == 0.25

    def test_dangerous_usage(self, player: PlayerState) -> None:
        """Test dangerous card usage counter increments."""
        player.increment_dangerous_card_usage()
        player.increment_dangerous_card_usage()
        assert player.dangerous_card_usage_count == 2


class TestHand:
    """Tests for hand operations."""

    def test_draw_and_remove(self, player: PlayerState) -> None:
        """Test cards can be drawn and removed by value."""
        card = _card("Evacuation Order")
        player.draw_card(card)

        assert player.has_card(card)
        assert player.remove_card(card) is True
        assert player.remove_card(card) is False
        assert player.hand == []

    def test_remove_card_at(self, player: PlayerState) -> None:
        """Test removing by index keeps the other cards in order."""
        for name in ("A", "B", "C"):
            player.draw_card(_card(name))

        assert player.remove_card_at(1).name == "B"
        assert [card.name for card in player.hand] == ["A", "C"]

    def test_hand_is_a_copy(self, player: PlayerState) -> None:
        """Test mutating the returned hand does not affect the player."""
        player.draw_card(_card("A"))
        player.hand.clear()
        assert len(player.hand) == 1

    def test_clear_hand(self, player: PlayerState) -> None:
        """Test the hand can be emptied."""
        player.draw_card(_card("A"))
        player.clear_hand()
        assert player.hand == []

    def test_replace_random_card(self, player: PlayerState) -> None:
        """Test replacement swaps one card in place."""
        for name in ("A", "B", "C"):
            player.draw_card(_card(name))

        assert player.replace_random_card(_card("Curse"), RandomSource(seed=3)) is True

        names = [card.name for card in player.hand]
        assert len(names) == 3
        assert names.count("Curse") == 1

    def test_replace_on_empty_hand(self, player: PlayerState) -> None:
        """Test replacement is a no-op on an empty hand."""
        assert player.replace_random_card(_card("Curse"), RandomSource(seed=3)) is False
        assert player.hand == []

    def test_change_max_hand_size_clamped(self, player: PlayerState) -> None:
        """Test the hand size limit never goes negative."""
        player.change_max_hand_size(2)
        assert player.max_hand_size == 7

        player.change_max_hand_size(-20)
        assert player.max_hand_size == 0


class TestDisabledCards:
    """Tests for disabling hand cards."""

    def test_disable_and_expire(self, player: PlayerState) -> None:
        """Test a disabled card recovers after one tick."""
        card = _card("A")
        player.draw_card(card)

        disabled = player.disable_random_cards(1, RandomSource(seed=1))

        assert disabled == [card]
        assert player.is_card_disabled(card)
        assert player.disabled_cards == {card: 1}

        player.tick_disabled_cards()
        assert not player.is_card_disabled(card)
        assert player.disabled_cards == {}

    def test_disable_at_most_hand(self, player: PlayerState) -> None:
        """Test disabling more cards than held disables each once."""
        player.draw_card(_card("A"))
        player.draw_card(_card("A"))
        player.draw_card(_card("B"))

        disabled = player.disable_random_cards(5, RandomSource(seed=1))

        assert sorted(card.name for card in disabled) == ["A", "B"]

    def test_already_disabled_skipped(self, player: PlayerState) -> None:
        """Test cards already disabled are not picked again."""
        player.draw_card(_card("A"))
        player.draw_card(_card("B"))
        first = player.disable_random_cards(1, RandomSource(seed=1))
        second = player.disable_random_cards(1, RandomSource(seed=1))

        assert first != second
        assert len(player.disabled_cards) == 2

    def test_disabled_matches_by_name(self, player: PlayerState) -> None:
        """Test a recreated card with the same name is still disabled."""
        player.draw_card(_card("A"))
        player.disable_random_cards(1, RandomSource(seed=1))

        assert player.is_card_disabled(CardDefinition(name="A", heal_amount=5))


class TestNotifications:
    """Tests for observer notifications."""

    def test_one_notification_per_operation(self, player: PlayerState) -> None:
        """Test each mutating operation notifies exactly once."""
        changes: list[PlayerChange] = []
        player.subscribe(lambda state, change: changes.append(change))

        player.take_damage(10)
        player.evacuate(10)
        player.draw_card(_card("A"))
        player.change_max_hand_size(1)
        player.disable_random_cards(1, RandomSource(seed=1))
        player.increment_dangerous_card_usage()
        player.set_damage_reduction_next()

        assert changes == [
            PlayerChange.HEALTH,
            PlayerChange.CITIZENS,
            PlayerChange.HAND,
            PlayerChange.HAND_SIZE,
            PlayerChange.DISABLED_CARDS,
            PlayerChange.DANGEROUS_CARDS,
            PlayerChange.DAMAGE_REDUCTION,
        ]

    def test_observer_sees_final_state(self, player: PlayerState) -> None:
        """Test observers run after all field writes of the operation."""
        seen: list[tuple[int, int]] = []
        player.subscribe(
            lambda state, change: seen.append(
                (state.available_citizens, state.evacuated_citizens)
            )
        )

        player.evacuate(30)

        assert seen == [(170, 30)]

    def test_unsubscribe(self, player: PlayerState) -> None:
        """Test an unsubscribed observer is no longer called."""
        calls: list[PlayerChange] = []
        unsubscribe = player.subscribe(lambda state, change: calls.append(change))

        unsubscribe()
        player.heal(1)

        assert calls == []

    def test_failing_observer_does_not_break_operation(self, player: PlayerState) -> None:
        """Test an observer error is logged and other observers still run."""
        calls: list[PlayerChange] = []

        def broken(state: PlayerState, change: PlayerChange) -> None:
            raise RuntimeError("observer failed")

        player.subscribe(broken)
        player.subscribe(lambda state, change: calls.append(change))

        player.take_damage(5)

        assert player.health == 145
        assert calls == [PlayerChange.HEALTH]
