"""Process-wide flag recording whether the application should keep running."""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


class RunningTracker:
    """Tracks whether the application is running and the code to exit with."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._running = True
        self._exit_code = 0

    def quit(self, reason: str) -> None:
        """Stop running, keeping the current exit code."""
        with self._lock:
            self._running = False
        logger.info("Quit %s", reason)

    def quit_with_code(self, code: int, reason: str) -> None:
        """Stop running and record the exit code."""
        with self._lock:
            self._exit_code = code
            self._running = False
        logger.info("Quit with code %s: %s", code, reason)

    def is_running(self) -> bool:
        with self._lock:
            return self._running

    def exit_code(self) -> int:
        with self._lock:
            return self._exit_code


RUNNING_TRACKER = RunningTracker()