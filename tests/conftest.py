"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the DragonWatch test suite.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

    from dragonwatch.engine import StepResult, TurnEngine
    from dragonwatch.models import CardDefinition, EventDefinition


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from dragonwatch.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def isolated_database(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Point the global database at a per-test file."""
    from dragonwatch.storage.database import reset_database

    db_path = tmp_path / "global.db"
    monkeypatch.setenv("DRAGONWATCH_DATABASE_PATH", str(db_path))
    reset_database()
    yield db_path
    reset_database()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "DRAGONWATCH_GAME_MAX_TURNS": "12",
        "DRAGONWATCH_GAME_INITIAL_CITIZENS": "80",
        "DRAGONWATCH_PACING_TIME_SCALE": "0",
        "DRAGONWATCH_DEBUG": "true",
        "DRAGONWATCH_LOG_LEVEL": "DEBUG",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Capability Fixtures
# =============================================================================


@pytest.fixture
def rng() -> Any:
    """Provide a seeded random source."""
    from dragonwatch.engine.random_source import RandomSource

    return RandomSource(seed=1234)


@pytest.fixture
def pacer() -> Any:
    """Provide a pacer that records delays instead of sleeping."""
    from dragonwatch.engine.pacing import RecordingPacer

    return RecordingPacer()


@pytest.fixture
def database(tmp_path: Path) -> Any:
    """Provide a fresh SQLite key/value store."""
    from dragonwatch.storage.database import Database

    return Database(tmp_path / "dragonwatch.db")


@pytest.fixture
def ending_store(database: Any) -> Any:
    """Provide an ending store over the fresh database."""
    from dragonwatch.storage.endings import EndingStore

    return EndingStore(database)


@pytest.fixture
def game_settings() -> Any:
    """Provide default game settings."""
    from dragonwatch.core.config import GameSettings

    return GameSettings()


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def sample_cards() -> list[CardDefinition]:
    """Provide a small card catalog covering every card feature.

    Returns:
        Card definitions in catalog order.
    """
    from dragonwatch.models import CardDefinition, UnlockCondition, ValueRange

    return [
        CardDefinition(name="Evacuation Order", evacuation_amount=20),
        CardDefinition(name="Holy Flame", health_cost=20, enemy_stun_turns=1),
        CardDefinition(name="Sacrificial Rite", citizen_cost=10, heal_amount=40),
        CardDefinition(
            name="Wild Charge",
            health_cost_range=ValueRange(minimum=10, maximum=30),
            evacuation_range=ValueRange(minimum=5, maximum=15),
        ),
        CardDefinition(
            name="Forbidden Pact",
            reduce_health_to_one=True,
            evacuation_amount=50,
            is_dangerous=True,
        ),
        CardDefinition(name="Prayer", heal_amount=10, unlock_condition=UnlockCondition.TURN),
        CardDefinition(
            name="Mysterious Magic",
            citizen_gain_amount=10,
            unlock_condition=UnlockCondition.TURN,
        ),
        CardDefinition(name="Life Drain", heal_amount=50, unlock_condition=UnlockCondition.HEALTH),
        CardDefinition(
            name="Last Stand",
            evacuation_amount=30,
            unlock_condition=UnlockCondition.POPULATION,
        ),
        CardDefinition(name="Incapacitated", event_only=True),
    ]


@pytest.fixture
def sample_events() -> list[EventDefinition]:
    """Provide events covering universal, area-bound and special effects.

    Returns:
        Event definitions in catalog order.
    """
    from dragonwatch.models import BattleArea, EventDefinition

    return [
        EventDefinition(event_id="supply_drop", is_universal=True, hp_change=10),
        EventDefinition(event_id="collapsed_bridge", area=BattleArea.MARKET, citizen_change=-5),
        EventDefinition(event_id="refugee_wave", area=BattleArea.CATHEDRAL, citizen_change=15),
        EventDefinition(event_id="confusion", is_universal=True, disable_card_count=1),
        EventDefinition(event_id="curse", is_universal=True, replace_card="Incapacitated"),
    ]


@pytest.fixture
def player() -> Any:
    """Provide a player with default starting values."""
    from dragonwatch.models import PlayerState

    return PlayerState(max_health=150, initial_citizens=200, max_hand_size=5)


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def make_engine(
    database: Any,
    pacer: Any,
    sample_cards: list[CardDefinition],
    sample_events: list[EventDefinition],
) -> Callable[..., TurnEngine]:
    """Provide a factory for engines with overridable game settings.

    Keyword arguments that name a GameSettings field override it; ``cards``,
    ``events``, ``seed``, ``score_board``, ``ready_probe`` and ``cues`` are
    passed through to the engine.
    """
    from dragonwatch.core.config import GameSettings, Settings
    from dragonwatch.engine import RandomSource, create_engine

    def factory(
        *,
        cards: list[CardDefinition] | None = None,
        events: list[EventDefinition] | None = None,
        seed: int = 7,
        score_board: Any = None,
        ready_probe: Any = None,
        cues: Any = None,
        **game_overrides: Any,
    ) -> TurnEngine:
        settings = Settings(game=GameSettings(**game_overrides))
        return create_engine(
            cards=sample_cards if cards is None else cards,
            events=sample_events if events is None else events,
            settings=settings,
            database=database,
            rng=RandomSource(seed=seed),
            pacer=pacer,
            ready_probe=ready_probe,
            cues=cues,
            score_board=score_board,
        )

    return factory


def _first_playable(engine: TurnEngine) -> tuple[int, CardDefinition] | None:
    for index, card in enumerate(engine.player.hand):
        if not engine.player.is_card_disabled(card):
            return index, card
    return None


@pytest.fixture
def autoplay() -> Callable[..., StepResult]:
    """Provide a driver that answers every suspension until the run ends.

    Cards are chosen by ``choose_card(engine)`` (default: first enabled card;
    a hand reset stands in when nothing is playable) and retreat areas by
    ``choose_area(engine)`` (default: the first offered area).
    """
    from dragonwatch.engine import StepStatus

    def play(
        engine: TurnEngine,
        *,
        choose_card: Callable[[TurnEngine], tuple[int, CardDefinition] | None] | None = None,
        choose_area: Callable[[TurnEngine], Any] | None = None,
        max_steps: int = 10_000,
    ) -> StepResult:
        for _ in range(max_steps):
            result = engine.run_until_input()
            if result.status is StepStatus.GAME_ENDED:
                return result
            if result.status is StepStatus.WAITING_FOR_CARD:
                picked = (choose_card or _first_playable)(engine)
                if picked is None:
                    engine.reset_hand(True)
                else:
                    index, card = picked
                    engine.select_card(card, index)
            elif result.status is StepStatus.WAITING_FOR_AREA:
                engine.select_area(choose_area(engine) if choose_area else None)
        raise AssertionError("game did not reach GameEnd")

    return play
