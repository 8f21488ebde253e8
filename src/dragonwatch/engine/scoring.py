"""Clear-score calculation and score board reporting.

Scores are only produced for a clear. Reporting goes through a ScoreBoard;
any failure there is logged and swallowed so it can never hold up the end of
a run.
"""

from __future__ import annotations

from typing import Protocol

from dragonwatch.core.constants import PERFECT_BONUS, SURVIVAL_SCORE_MAX, TURN_BONUS_MAX
from dragonwatch.core.logging import get_logger


logger = get_logger(__name__)


def calculate_score(survival_rate: float, turn_count: int, max_turns: int = 20) -> int:
    """Score a cleared run.

    Args:
        survival_rate: Surviving share of the initial population.
        turn_count: Turn the run was cleared on.
        max_turns: Turn limit the turn bonus counts down from.

    Returns:
        Survival score plus turn bonus plus perfect bonus.

    Example:
        >>> calculate_score(1.0, 10)
        17500
    """
    survival_score = round(survival_rate * SURVIVAL_SCORE_MAX)

    turn_bonus = 0
    if turn_count <= max_turns:
        turn_bonus = round((max_turns - turn_count) / max_turns * TURN_BONUS_MAX)

    perfect_bonus = PERFECT_BONUS if survival_rate >= 1.0 else 0

    return survival_score + turn_bonus + perfect_bonus


class ScoreBoard(Protocol):
    """External leaderboard boundary."""

    def submit(self, board: int, value: int) -> None:
        """Send ``value`` to leaderboard ``board``.

        Raises:
            ScoreSubmissionError: If the board rejects the value.
        """
        ...


class LoggingScoreBoard:
    """Score board that only logs submissions.

    Attributes:
        submissions: Every (board, value) pair received, in order.
    """

    def __init__(self) -> None:
        self.submissions: list[tuple[int, int]] = []

    def submit(self, board: int, value: int) -> None:
        self.submissions.append((board, value))
        logger.info("Score submitted", board=board, value=value)


def report_safely(score_board: ScoreBoard, board: int, value: int) -> bool:
    """Submit a value, logging instead of raising on failure.

    Args:
        score_board: Board adapter to submit through.
        board: Leaderboard number.
        value: Value to submit.

    Returns:
        True if the submission succeeded.
    """
    try:
        score_board.submit(board, value)
    except Exception:
        logger.exception("Score submission failed", board=board, value=value)
        return False
    return True


__all__ = [
    "LoggingScoreBoard",
    "ScoreBoard",
    "calculate_score",
    "report_safely",
]
