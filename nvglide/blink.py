"""Cursor blink state machine driven by the editor's blink timings."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass
from typing import Any, Optional


class BlinkState(enum.Enum):
    WAITING = "waiting"
    ON = "on"
    OFF = "off"


@dataclass(frozen=True)
class BlinkTiming:
    """Blink timings in milliseconds, plus the cursor state they belong to.

    Any change, including to ``cursor``, restarts the blink cycle.
    """

    blinkwait: Optional[int] = None
    blinkon: Optional[int] = None
    blinkoff: Optional[int] = None
    cursor: Any = None


_NEXT_STATE = {
    BlinkState.WAITING: BlinkState.ON,
    BlinkState.ON: BlinkState.OFF,
    BlinkState.OFF: BlinkState.ON,
}


class BlinkStatus:
    """Tracks which phase of the blink cycle the cursor is in.

    Times are seconds on a monotonic clock. After each update ``next_frame``
    holds the time at which the next phase change is due, if any.
    """

    def __init__(self, now: Optional[float] = None) -> None:
        self.state = BlinkState.WAITING
        self.last_transition = time.monotonic() if now is None else now
        self.previous: Optional[BlinkTiming] = None
        self.next_frame: Optional[float] = None

    @staticmethod
    def _delay_for(state: BlinkState, timing: BlinkTiming) -> Optional[int]:
        if state is BlinkState.WAITING:
            return timing.blinkwait
        if state is BlinkState.OFF:
            return timing.blinkoff
        return timing.blinkon

    def update_status(self, timing: BlinkTiming, now: Optional[float] = None) -> bool:
        """Advance the blink cycle; True when the cursor should be drawn."""
        if now is None:
            now = time.monotonic()

        if self.previous is None or timing != self.previous:
            self.previous = timing
            self.last_transition = now
            if timing.blinkwait is not None and timing.blinkwait != 0:
                self.state = BlinkState.WAITING
            else:
                self.state = BlinkState.ON

        if 0 in (timing.blinkwait, timing.blinkoff, timing.blinkon):
            self.next_frame = None
            return True

        delay = self._delay_for(self.state, timing)
        if delay is not None and delay > 0 and self.last_transition + delay / 1000.0 < now:
            self.state = _NEXT_STATE[self.state]
            self.last_transition = now

        scheduled = self._delay_for(self.state, timing)
        self.next_frame = None if scheduled is None else self.last_transition + scheduled / 1000.0

        return self.state is not BlinkState.OFF