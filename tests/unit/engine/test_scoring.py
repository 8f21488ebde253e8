"""Tests for score calculation and score board reporting."""

from __future__ import annotations

import pytest

from dragonwatch.core.exceptions import ScoreSubmissionError
from dragonwatch.engine.scoring import LoggingScoreBoard, calculate_score, report_safely


class TestCalculateScore:
    """Tests for calculate_score."""

    @pytest.mark.parametrize(
        ("survival_rate", "turn", "expected"),
        [
            (1.0, 10, 17500),
            (1.0, 20, 15000),
            (1.0, 0, 20000),
            (0.5, 10, 7500),
            (0.0, 20, 0),
            (0.75, 5, 11250),
        ],
    )
    def test_components(self, survival_rate: float, turn: int, expected: int) -> None:
        """Test survival score, turn bonus and perfect bonus add up."""
        assert calculate_score(survival_rate, turn) == expected

    def test_no_turn_bonus_past_limit(self) -> None:
        """Test runs past the turn limit get no turn bonus."""
        assert calculate_score(0.5, 25) == 5000

    def test_custom_turn_limit(self) -> None:
        """Test the turn bonus counts down from the given limit."""
        assert calculate_score(0.0, 5, max_turns=10) == 2500


class FailingBoard:
    """Board that rejects every submission."""

    def submit(self, board: int, value: int) -> None:
        raise ScoreSubmissionError("Leaderboard offline", board=board)


class TestReporting:
    """Tests for score board reporting."""

    def test_logging_board_records(self) -> None:
        """Test the logging board keeps every submission."""
        board = LoggingScoreBoard()

        assert report_safely(board, 1, 17500) is True
        assert report_safely(board, 2, 3) is True
        assert board.submissions == [(1, 17500), (2, 3)]

    def test_failure_swallowed(self) -> None:
        """Test a failing board never raises."""
        assert report_safely(FailingBoard(), 1, 100) is False
