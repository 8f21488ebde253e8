"""Turn engine: the per-turn phase state machine.

The engine is a cooperative, single-threaded loop. Each call to
:meth:`TurnEngine.step` runs exactly one phase body, which either completes
and advances to the next phase or suspends waiting on an external signal
(a card selection or an area choice). :meth:`TurnEngine.run_until_input`
keeps stepping until the engine suspends or the run ends.

Phase order::

    Initialize -> DrawCard -> PlayerAction -> CardEffect -> EnemyProgress
    -> RandomEvent -> CheckGameEnd -> {DrawCard, Retreat, GameEnd}
    Retreat -> DrawCard
    GameEnd -> GameEnd

Example:
    >>> engine = create_engine(cards=catalog, events=events, pacer=RecordingPacer())
    >>> result = engine.run_until_input()
    >>> result.status
    <StepStatus.WAITING_FOR_CARD: 'waiting_for_card'>
    >>> engine.select_card(engine.player.hand[0], 0)
    True
    >>> result = engine.run_until_input()
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any
from uuid import uuid4

from dragonwatch.core.config import GameSettings, PacingSettings, Settings, get_settings
from dragonwatch.core.constants import (
    ENDING_COUNT_BOARD,
    PARTICLE_ENEMY_ATTACK,
    SCORE_BOARD,
    SOUND_ENEMY_ATTACK,
)
from dragonwatch.core.exceptions import InvalidGameStateError, PersistenceError
from dragonwatch.core.logging import get_logger
from dragonwatch.engine.card_pool import CardPool
from dragonwatch.engine.effects import EffectCues, NullEffectCues, apply_effect
from dragonwatch.engine.endings import EndingService
from dragonwatch.engine.event_pool import EventPool
from dragonwatch.engine.pacing import Pacer, ReadyProbe, SleepPacer, always_ready
from dragonwatch.engine.random_source import RandomSource
from dragonwatch.engine.scoring import (
    LoggingScoreBoard,
    ScoreBoard,
    calculate_score,
    report_safely,
)
from dragonwatch.models.cards import CardCatalog, CardDefinition, EventDefinition
from dragonwatch.models.endings import EndingRecord
from dragonwatch.models.enums import BattleArea, GamePhase
from dragonwatch.models.player import PlayerState
from dragonwatch.storage.database import Database, get_database
from dragonwatch.storage.endings import EndingStore


logger = get_logger(__name__)


# =============================================================================
# Step Status
# =============================================================================


class StepStatus(StrEnum):
    """Outcome of running one phase body."""

    ADVANCED = "advanced"
    """The phase completed and the engine moved to the next phase."""

    WAITING_FOR_CARD = "waiting_for_card"
    """PlayerAction is suspended until a card is selected."""

    WAITING_FOR_AREA = "waiting_for_area"
    """Retreat is suspended until an area is chosen."""

    GAME_ENDED = "game_ended"
    """The run is over; further steps change nothing."""


@dataclass
class StepResult:
    """Result of a single :meth:`TurnEngine.step` call.

    Attributes:
        status: Whether the engine advanced, suspended or ended.
        phase: The phase whose body ran.
        next_phase: The phase the engine is in afterwards.
        turn: Turn counter after the step.
        message: Human-readable summary.
    """

    status: StepStatus
    phase: GamePhase
    next_phase: GamePhase
    turn: int
    message: str = ""

    @property
    def is_suspended(self) -> bool:
        return self.status in (StepStatus.WAITING_FOR_CARD, StepStatus.WAITING_FOR_AREA)


# =============================================================================
# Engine Events
# =============================================================================


class EngineEventType(StrEnum):
    """Signals the engine emits to external consumers."""

    PHASE_CHANGED = "phase_changed"
    CARD_USED = "card_used"
    AREA_SELECTION_REQUIRED = "area_selection_required"
    RANDOM_EVENT_OCCURRED = "random_event_occurred"
    GAME_ENDED = "game_ended"


class EngineEvent:
    """A signal emitted by the engine.

    Attributes:
        event_type: Type of the event.
        data: Event data payload.
    """

    def __init__(self, event_type: EngineEventType, data: dict[str, Any] | None = None) -> None:
        """Initialize an engine event.

        Args:
            event_type: Type identifier for the event.
            data: Optional event data payload.
        """
        self.event_type = event_type
        self.data = data or {}

    def __repr__(self) -> str:
        return f"EngineEvent({self.event_type.value!r}, {self.data!r})"


EngineEventHandler = Callable[[EngineEvent], None]


@dataclass
class GameOutcome:
    """Everything decided when the run reached GameEnd.

    Attributes:
        ending: The persisted ending snapshot.
        is_clear: Alive, under the turn limit and no citizen left behind.
        score: Clear score, None unless ``is_clear``.
        collected_endings: Distinct endings reached so far, this one included.
        newly_collected: Whether this run collected its ending for the first time.
    """

    ending: EndingRecord
    is_clear: bool
    score: int | None = None
    collected_endings: int = 0
    newly_collected: bool = False


# =============================================================================
# Turn Engine
# =============================================================================


class TurnEngine:
    """Per-turn phase state machine driving a single run.

    The engine owns the phase, the turn counter, the enemy stun counter, the
    battle area and the retreat counter. The player state is mutated only by
    the engine and by effects it applies.

    Attributes:
        player: The player state of this run.
        settings: Rules configuration.
    """

    def __init__(
        self,
        *,
        settings: GameSettings,
        player: PlayerState,
        card_pool: CardPool,
        event_pool: EventPool,
        ending_service: EndingService,
        rng: RandomSource,
        pacing: PacingSettings | None = None,
        pacer: Pacer | None = None,
        ready_probe: ReadyProbe | None = None,
        cues: EffectCues | None = None,
        score_board: ScoreBoard | None = None,
    ) -> None:
        """Initialize the engine in the Initialize phase.

        Args:
            settings: Rules configuration.
            player: Fresh player state.
            card_pool: Weighted card pool.
            event_pool: Random event pool.
            ending_service: Classifier and ending history.
            rng: Random source for every random decision.
            pacing: Pacing delays; defaults to the built-in values.
            pacer: Waits for pacing delays; defaults to a sleeping pacer.
            ready_probe: Polled until the presentation subsystem is ready.
            cues: Audio and particle cues.
            score_board: Leaderboard boundary for scores and ending counts.
        """
        self.settings = settings
        self.player = player
        self._card_pool = card_pool
        self._event_pool = event_pool
        self._ending_service = ending_service
        self._rng = rng
        self._pacing = pacing or PacingSettings()
        self._pacer = pacer or SleepPacer(self._pacing)
        self._ready_probe = ready_probe or always_ready
        self._cues = cues or NullEffectCues()
        self._score_board = score_board or LoggingScoreBoard()

        self._phase = GamePhase.INITIALIZE
        self._turn = 1
        self._enemy_stun_turns = 0
        self._current_area = BattleArea.MARKET
        self._retreat_count = 0
        self._running = True

        self._pending_card: CardDefinition | None = None
        self._pending_index: int | None = None
        self._hand_reset_action = False
        self._is_resetting_hand = False

        self._offered_areas: tuple[BattleArea, BattleArea] | None = None
        self._area_chosen = False
        self._selected_area: BattleArea | None = None

        self._outcome: GameOutcome | None = None
        self._event_handlers: dict[EngineEventType, list[EngineEventHandler]] = {}

        self._handlers: dict[GamePhase, Callable[[], StepResult]] = {
            GamePhase.INITIALIZE: self._run_initialize,
            GamePhase.DRAW_CARD: self._run_draw_card,
            GamePhase.PLAYER_ACTION: self._run_player_action,
            GamePhase.CARD_EFFECT: self._run_card_effect,
            GamePhase.ENEMY_PROGRESS: self._run_enemy_progress,
            GamePhase.RANDOM_EVENT: self._run_random_event,
            GamePhase.CHECK_GAME_END: self._run_check_game_end,
            GamePhase.RETREAT: self._run_retreat,
            GamePhase.GAME_END: self._run_game_end,
        }

        self._log = logger.bind(run_id=uuid4().hex[:12])
        self._log.info(
            "TurnEngine initialized",
            max_turns=settings.max_turns,
            initial_citizens=player.initial_citizens,
        )

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def turn(self) -> int:
        return self._turn

    @property
    def current_area(self) -> BattleArea:
        return self._current_area

    @property
    def retreat_count(self) -> int:
        return self._retreat_count

    @property
    def enemy_stun_turns(self) -> int:
        return self._enemy_stun_turns

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_resetting_hand(self) -> bool:
        return self._is_resetting_hand

    @property
    def card_pool(self) -> CardPool:
        return self._card_pool

    @property
    def pending_card(self) -> CardDefinition | None:
        """The card selected for this PlayerAction, if any."""
        return self._pending_card

    @property
    def pending_index(self) -> int | None:
        return self._pending_index

    @property
    def offered_areas(self) -> tuple[BattleArea, BattleArea] | None:
        """The two areas offered by the current retreat, if one is pending."""
        return self._offered_areas

    @property
    def outcome(self) -> GameOutcome:
        """The result of the run.

        Raises:
            InvalidGameStateError: If the run has not reached GameEnd yet.
        """
        if self._outcome is None:
            raise InvalidGameStateError(
                "The game has not ended yet",
                current_state=self._phase.value,
                expected_states=[GamePhase.GAME_END.value],
            )
        return self._outcome

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def on_event(self, event_type: EngineEventType, handler: EngineEventHandler) -> None:
        """Register an event handler.

        Args:
            event_type: Type of event to handle.
            handler: Callback invoked with the emitted event.
        """
        self._event_handlers.setdefault(event_type, []).append(handler)

    def _emit_event(self, event: EngineEvent) -> None:
        for handler in list(self._event_handlers.get(event.event_type, [])):
            try:
                handler(event)
            except Exception:
                self._log.exception("Event handler error", event_type=event.event_type.value)

    # -------------------------------------------------------------------------
    # Driver
    # -------------------------------------------------------------------------

    def step(self) -> StepResult:
        """Run the body of the current phase once.

        Returns:
            Whether the phase advanced, suspended or the run ended.
        """
        return self._handlers[self._phase]()

    def run_until_input(self) -> StepResult:
        """Step until the engine waits for external input or the run ends.

        Returns:
            The suspending or terminal step result.
        """
        while True:
            result = self.step()
            if result.status is not StepStatus.ADVANCED:
                return result

    def _advance(self, next_phase: GamePhase, message: str = "") -> StepResult:
        previous = self._phase
        self._change_phase(next_phase)
        return StepResult(
            status=StepStatus.ADVANCED,
            phase=previous,
            next_phase=next_phase,
            turn=self._turn,
            message=message,
        )

    def _suspend(self, status: StepStatus, message: str = "") -> StepResult:
        return StepResult(
            status=status,
            phase=self._phase,
            next_phase=self._phase,
            turn=self._turn,
            message=message,
        )

    def _change_phase(self, phase: GamePhase) -> None:
        previous = self._phase
        self._phase = phase
        if phase is GamePhase.PLAYER_ACTION:
            self._pending_card = None
            self._pending_index = None
        self._log.debug("Phase changed", previous=previous.value, phase=phase.value, turn=self._turn)
        self._emit_event(
            EngineEvent(
                EngineEventType.PHASE_CHANGED,
                {"phase": phase, "previous": previous},
            )
        )

    def _wait(self, seconds: float) -> None:
        self._pacer.wait(seconds)

    # -------------------------------------------------------------------------
    # Phase bodies
    # -------------------------------------------------------------------------

    def _run_initialize(self) -> StepResult:
        while not self._ready_probe():
            self._wait(self._pacing.ready_poll_interval)
        self._wait(self._pacing.initialize_settle)
        self._log.info("Game started", area=self._current_area.value)
        return self._advance(GamePhase.DRAW_CARD)

    def _run_draw_card(self) -> StepResult:
        self._card_pool.update_conditions(
            self._turn,
            self.player.health,
            self.player.available_citizens,
        )

        while len(self.player.hand) < self.player.max_hand_size:
            card = self._card_pool.draw_random_card()
            if card is None:
                self._log.warning(
                    "Hand left short",
                    hand=len(self.player.hand),
                    max_hand_size=self.player.max_hand_size,
                )
                break
            self.player.draw_card(card)
            self._wait(self._pacing.draw_card)

        return self._advance(GamePhase.PLAYER_ACTION)

    def _run_player_action(self) -> StepResult:
        if self._pending_card is None and not self._hand_reset_action:
            return self._suspend(StepStatus.WAITING_FOR_CARD, "Select a card to play")
        return self._advance(GamePhase.CARD_EFFECT)

    def _run_card_effect(self) -> StepResult:
        if self._hand_reset_action:
            self._hand_reset_action = False
            self._wait(self._pacing.hand_reset_action)
            return self._advance(GamePhase.ENEMY_PROGRESS, "Hand reset used as the action")

        card = self._pending_card
        index = self._pending_index
        if card is None:
            self._log.warning("No card pending in CardEffect")
            return self._advance(GamePhase.ENEMY_PROGRESS)

        report = apply_effect(
            card.effect,
            self.player,
            self,
            rng=self._rng,
            catalog=self._card_pool.catalog,
            cues=self._cues,
        )
        if card.is_dangerous:
            self.player.increment_dangerous_card_usage()

        self._log.info(
            "Card used",
            card=card.name,
            index=index,
            damage=report.damage_taken,
            evacuated=report.evacuated,
        )
        self._emit_event(EngineEvent(EngineEventType.CARD_USED, {"card": card, "index": index}))

        self._wait(self._pacing.card_effect_hold)
        self.player.remove_card(card)
        self._wait(self._pacing.card_effect_settle)
        return self._advance(GamePhase.ENEMY_PROGRESS, f"Played {card.name}")

    def _run_enemy_progress(self) -> StepResult:
        if self._enemy_stun_turns > 0:
            self._enemy_stun_turns -= 1
            self._log.info("Enemy stunned", turns_left=self._enemy_stun_turns)
        else:
            killed = self.player.process_turn_deaths(self.settings.turn_death_count)
            self._cues.play_sound(SOUND_ENEMY_ATTACK)
            self._cues.play_particle(PARTICLE_ENEMY_ATTACK)
            self._log.info("Enemy attacked", killed=killed)

        self._wait(self._pacing.enemy_progress)
        return self._advance(GamePhase.RANDOM_EVENT)

    def _run_random_event(self) -> StepResult:
        if self._turn > 1 and self._turn % self.settings.random_event_interval == 0:
            event = self._event_pool.draw_random_event(self._current_area)
            if event is not None:
                self._trigger_event(event)
        return self._advance(GamePhase.CHECK_GAME_END)

    def _trigger_event(self, event: EventDefinition) -> None:
        self._log.info("Random event", event_id=event.event_id, area=self._current_area.value)
        self._emit_event(
            EngineEvent(EngineEventType.RANDOM_EVENT_OCCURRED, {"event": event})
        )
        apply_effect(
            event.effect,
            self.player,
            self,
            rng=self._rng,
            catalog=self._card_pool.catalog,
            cues=self._cues,
        )
        self._wait(self._pacing.random_event_display)

    def _run_check_game_end(self) -> StepResult:
        if not self.player.is_alive:
            return self._advance(GamePhase.GAME_END, "The dragon has fallen")
        if self._turn >= self.settings.max_turns:
            return self._advance(GamePhase.GAME_END, "Turn limit reached")
        if self.player.available_citizens == 0:
            return self._advance(GamePhase.GAME_END, "No citizens left in the city")

        self._turn += 1
        self.player.tick_disabled_cards()

        if self._turn % self.settings.retreat_turn_interval == 0:
            return self._advance(GamePhase.RETREAT)
        return self._advance(GamePhase.DRAW_CARD)

    def _run_retreat(self) -> StepResult:
        if self._offered_areas is None:
            self._retreat_count += 1
            self._wait(self._pacing.retreat_dialogue)
            self._offered_areas = self._draw_retreat_areas()
            self._area_chosen = False
            self._selected_area = None
            first, second = self._offered_areas
            self._log.info(
                "Retreat",
                retreat_count=self._retreat_count,
                offered=[first.value, second.value],
            )
            self._emit_event(
                EngineEvent(
                    EngineEventType.AREA_SELECTION_REQUIRED,
                    {"areas": self._offered_areas},
                )
            )

        if not self._area_chosen:
            return self._suspend(StepStatus.WAITING_FOR_AREA, "Choose where to retreat")

        self._current_area = self._selected_area or self._offered_areas[0]
        self._offered_areas = None
        self._area_chosen = False
        self._selected_area = None
        self._wait(self._pacing.retreat_travel)
        return self._advance(GamePhase.DRAW_CARD, f"Retreated to {self._current_area.value}")

    def _draw_retreat_areas(self) -> tuple[BattleArea, BattleArea]:
        candidates = [area for area in BattleArea if area is not self._current_area]
        first = candidates.pop(self._rng.randrange(len(candidates)))
        second = candidates.pop(self._rng.randrange(len(candidates)))
        return first, second

    def _run_game_end(self) -> StepResult:
        if self._outcome is None:
            self._finish()
        return StepResult(
            status=StepStatus.GAME_ENDED,
            phase=GamePhase.GAME_END,
            next_phase=GamePhase.GAME_END,
            turn=self._turn,
            message=f"Ending {int(self.outcome.ending.ending_id)}",
        )

    def _finish(self) -> None:
        self._running = False
        player = self.player

        ending_id = self._ending_service.classify(player, self._turn)
        record = self._ending_service.snapshot(ending_id, player, self._turn)
        newly_collected = False
        try:
            newly_collected = self._ending_service.record_and_persist(record)
        except PersistenceError:
            self._log.exception("Failed to persist ending", ending_id=int(ending_id))

        is_clear = (
            player.is_alive
            and self._turn < self.settings.max_turns
            and player.available_citizens == 0
        )
        score: int | None = None
        if is_clear:
            score = calculate_score(player.survival_rate, self._turn, self.settings.max_turns)
            report_safely(self._score_board, SCORE_BOARD, score)

        collected = 0
        try:
            collected = self._ending_service.collected_count()
        except PersistenceError:
            self._log.exception("Failed to read collected endings")
        report_safely(self._score_board, ENDING_COUNT_BOARD, collected)

        self._outcome = GameOutcome(
            ending=record,
            is_clear=is_clear,
            score=score,
            collected_endings=collected,
            newly_collected=newly_collected,
        )
        self._log.info(
            "Game ended",
            ending_id=int(ending_id),
            turn=self._turn,
            survival_rate=player.survival_rate,
            is_clear=is_clear,
            score=score,
        )
        self._emit_event(
            EngineEvent(
                EngineEventType.GAME_ENDED,
                {"ending_id": ending_id, "outcome": self._outcome},
            )
        )

    # -------------------------------------------------------------------------
    # External input
    # -------------------------------------------------------------------------

    def select_card(self, card: CardDefinition | None, index: int) -> bool:
        """Select the card to play this turn.

        Ignored outside PlayerAction, for cards not in hand and for
        disabled cards.

        Args:
            card: The card chosen by the player.
            index: Its position in the hand, echoed in the card-used signal.

        Returns:
            True if the selection was accepted.
        """
        if self._phase is not GamePhase.PLAYER_ACTION:
            self._log.debug("Card selection outside PlayerAction ignored", phase=self._phase.value)
            return False
        if card is None or not self.player.has_card(card):
            self._log.debug("Card selection not in hand ignored")
            return False
        if self.player.is_card_disabled(card):
            self._log.debug("Disabled card selection ignored", card=card.name)
            return False

        self._pending_card = card
        self._pending_index = index
        return True

    def select_area(self, area: BattleArea | None = None) -> bool:
        """Answer a pending retreat.

        Passing None accepts the default, the first offered area. Ignored
        outside Retreat, before the areas were offered, and for areas that
        were not offered.

        Args:
            area: One of the offered areas, or None for the default.

        Returns:
            True if the choice was accepted.
        """
        if self._phase is not GamePhase.RETREAT or self._offered_areas is None:
            self._log.debug("Area selection outside Retreat ignored", phase=self._phase.value)
            return False
        if area is not None and area not in self._offered_areas:
            self._log.debug("Area not offered ignored", area=area.value)
            return False

        self._selected_area = area
        self._area_chosen = True
        return True

    # -------------------------------------------------------------------------
    # Operations for effects and collaborators
    # -------------------------------------------------------------------------

    def stun_enemy(self, turns: int) -> None:
        """Add turns to the enemy stun counter."""
        self._enemy_stun_turns += max(0, turns)

    def reset_hand(self, trigger_next_phase: bool = False) -> bool:
        """Discard the whole hand and redraw the same number of cards.

        Only allowed during PlayerAction or RandomEvent, and never while
        another reset is in progress. With ``trigger_next_phase`` during
        PlayerAction the reset counts as this turn's action: the first
        redrawn card becomes the pending selection and CardEffect skips
        effect application. Any other reset drops a pending card
        selection, since the hand it pointed into is gone.

        Args:
            trigger_next_phase: Use the reset as the turn's action.

        Returns:
            True if the reset ran.
        """
        if self._phase not in (GamePhase.PLAYER_ACTION, GamePhase.RANDOM_EVENT):
            self._log.debug("Hand reset outside allowed phases ignored", phase=self._phase.value)
            return False
        if self._is_resetting_hand:
            self._log.debug("Hand reset already in progress")
            return False

        self._is_resetting_hand = True
        armed = False
        try:
            count = len(self.player.hand)
            self._wait(self._pacing.hand_reset_clear)
            self.player.clear_hand()
            self._wait(self._pacing.hand_reset_settle)

            self._card_pool.update_conditions(
                self._turn,
                self.player.health,
                self.player.available_citizens,
            )
            for _ in range(count):
                card = self._card_pool.draw_random_card()
                if card is None:
                    break
                self.player.draw_card(card)
                self._wait(self._pacing.draw_card)

            if trigger_next_phase and self._phase is GamePhase.PLAYER_ACTION:
                hand = self.player.hand
                self._pending_card = hand[0] if hand else None
                self._pending_index = 0
                self._hand_reset_action = True
                armed = True
            else:
                self._pending_card = None
                self._pending_index = None
        finally:
            self._is_resetting_hand = False

        self._log.info("Hand reset", cards=len(self.player.hand), as_action=armed)
        return True

    def draw_additional_cards(self, count: int) -> int:
        """Draw extra cards and raise the max hand size by the number drawn.

        Args:
            count: Cards to draw.

        Returns:
            Cards actually drawn, fewer if the pool ran dry.
        """
        drawn = 0
        for _ in range(max(0, count)):
            card = self._card_pool.draw_random_card()
            if card is None:
                break
            self.player.draw_card(card)
            drawn += 1
            self._wait(self._pacing.draw_card)

        if drawn:
            self.player.change_max_hand_size(drawn)
        return drawn

    def remove_random_cards(self, count: int) -> int:
        """Discard random hand cards and lower the max hand size to match.

        Args:
            count: Cards to discard.

        Returns:
            Cards actually discarded, at most the hand size.
        """
        removed = 0
        for _ in range(min(max(0, count), len(self.player.hand))):
            self.player.remove_card_at(self._rng.randrange(len(self.player.hand)))
            removed += 1

        if removed:
            self.player.change_max_hand_size(-removed)
        return removed


# =============================================================================
# Factory
# =============================================================================


def create_engine(
    *,
    cards: CardCatalog | Iterable[CardDefinition],
    events: Iterable[EventDefinition] = (),
    settings: Settings | None = None,
    database: Database | None = None,
    rng: RandomSource | None = None,
    pacer: Pacer | None = None,
    ready_probe: ReadyProbe | None = None,
    cues: EffectCues | None = None,
    score_board: ScoreBoard | None = None,
) -> TurnEngine:
    """Wire a ready-to-run engine from static data and settings.

    Args:
        cards: Card catalog or card definitions in catalog order.
        events: Event definitions in catalog order.
        settings: Application settings; defaults to the cached settings.
        database: Key/value store for ending history; defaults to the global one.
        rng: Random source; defaults to an unseeded one.
        pacer: Pacer; defaults to sleeping for the configured delays.
        ready_probe: Subsystem-ready predicate; defaults to always ready.
        cues: Audio and particle cues.
        score_board: Leaderboard boundary.

    Returns:
        A TurnEngine in the Initialize phase.

    Raises:
        ValidationError: If the card data is inconsistent.
    """
    settings = settings or get_settings()
    catalog = cards if isinstance(cards, CardCatalog) else CardCatalog(cards)
    event_list = tuple(events)
    catalog.validate_events(event_list)

    rng = rng or RandomSource()
    game = settings.game
    player = PlayerState(
        max_health=game.player_max_health,
        initial_citizens=game.initial_citizens,
        max_hand_size=game.max_hand_size,
    )
    store = EndingStore(database or get_database())

    return TurnEngine(
        settings=game,
        player=player,
        card_pool=CardPool(catalog, game, rng),
        event_pool=EventPool(event_list, rng),
        ending_service=EndingService(store, game),
        rng=rng,
        pacing=settings.pacing,
        pacer=pacer or SleepPacer(settings.pacing),
        ready_probe=ready_probe,
        cues=cues,
        score_board=score_board,
    )


__all__ = [
    "EngineEvent",
    "EngineEventHandler",
    "EngineEventType",
    "GameOutcome",
    "StepResult",
    "StepStatus",
    "TurnEngine",
    "create_engine",
]
