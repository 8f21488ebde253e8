"""Pacing and readiness capabilities for the turn engine.

The engine never sleeps directly. It asks a Pacer to wait, which lets a
live front end block for real while tests and simulations record the
requested delays and carry on immediately.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Protocol

from dragonwatch.core.config import PacingSettings


ReadyProbe = Callable[[], bool]
"""Predicate polled until the presentation subsystem reports it is ready."""


def always_ready() -> bool:
    return True


class Pacer(Protocol):
    """Something that can wait for a number of seconds."""

    def wait(self, seconds: float) -> None:
        """Wait for ``seconds`` before returning."""
        ...


class SleepPacer:
    """Blocks the calling thread, scaled by the configured time scale."""

    def __init__(self, settings: PacingSettings | None = None) -> None:
        """Initialize the pacer.

        Args:
            settings: Pacing settings providing ``time_scale``.
        """
        self._time_scale = (settings or PacingSettings()).time_scale

    def wait(self, seconds: float) -> None:
        delay = seconds * self._time_scale
        if delay > 0:
            time.sleep(delay)


class RecordingPacer:
    """Returns immediately and remembers every requested delay.

    Attributes:
        waits: Requested delays in call order.
    """

    def __init__(self) -> None:
        self.waits: list[float] = []

    def wait(self, seconds: float) -> None:
        self.waits.append(seconds)

    @property
    def total(self) -> float:
        """Sum of all requested delays."""
        return sum(self.waits)


__all__ = [
    "Pacer",
    "ReadyProbe",
    "RecordingPacer",
    "SleepPacer",
    "always_ready",
]
