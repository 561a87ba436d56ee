"""
Meditation timer - a countdown started from the dashboard card.
"""

import math
import time
from typing import Callable, Optional

from .exceptions import ValidationError


class MeditationTimer:
    """Countdown derived from a start timestamp; nothing ticks in the background."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._ends_at: Optional[float] = None
        self.duration_seconds = 0

    def start(self, minutes: float) -> None:
        seconds = minutes * 60
        if not math.isfinite(seconds) or seconds < 1:
            raise ValidationError("Enter a number of minutes greater than zero.")
        seconds = int(seconds)
        self.duration_seconds = seconds
        self._ends_at = self._clock() + seconds

    def stop(self) -> None:
        self._ends_at = None

    def remaining_seconds(self) -> int:
        if self._ends_at is None:
            return 0
        return max(0, math.ceil(self._ends_at - self._clock()))

    def is_running(self) -> bool:
        return self.remaining_seconds() > 0

    def display(self) -> str:
        """Remaining time as ``m:ss``."""
        left = self.remaining_seconds()
        return f"{left // 60}:{left % 60:02d}"
