"""Tests for pacing capabilities and the random source."""

from __future__ import annotations

import pytest

from dragonwatch.core.config import PacingSettings
from dragonwatch.engine import pacing
from dragonwatch.engine.pacing import RecordingPacer, SleepPacer, always_ready
from dragonwatch.engine.random_source import RandomSource


class TestPacers:
    """Tests for the pacer implementations."""

    def test_recording_pacer(self) -> None:
        """Test delays are recorded in order."""
        pacer = RecordingPacer()
        pacer.wait(0.5)
        pacer.wait(0.25)

        assert pacer.waits == [0.5, 0.25]
        assert pacer.total == 0.75

    def test_sleep_pacer_scales(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the sleeping pacer applies the time scale."""
        slept: list[float] = []
        monkeypatch.setattr(pacing.time, "sleep", slept.append)

        SleepPacer(PacingSettings(time_scale=0.5)).wait(2.0)

        assert slept == [1.0]

    def test_zero_time_scale_never_sleeps(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a zero time scale disables waiting."""
        slept: list[float] = []
        monkeypatch.setattr(pacing.time, "sleep", slept.append)

        SleepPacer(PacingSettings(time_scale=0)).wait(2.0)

        assert slept == []

    def test_always_ready(self) -> None:
        """Test the default probe reports ready."""
        assert always_ready() is True


class TestRandomSource:
    """Tests for RandomSource."""

    def test_seed_reproduces(self) -> None:
        """Test one seed yields one sequence."""
        first = RandomSource(seed=42)
        second = RandomSource(seed=42)

        assert [first.random() for _ in range(5)] == [second.random() for _ in range(5)]
        assert first.seed == 42

    def test_bounds(self) -> None:
        """Test draws stay inside their ranges."""
        rng = RandomSource(seed=7)

        for _ in range(200):
            assert 2.0 <= rng.uniform(2.0, 3.0) <= 3.0
            assert 1 <= rng.randint(1, 3) <= 3
            assert 0 <= rng.randrange(4) < 4

    def test_choice(self) -> None:
        """Test choice picks from the sequence and rejects empty input."""
        rng = RandomSource(seed=7)

        assert rng.choice(["only"]) == "only"
        with pytest.raises(ValueError):
            rng.choice([])
