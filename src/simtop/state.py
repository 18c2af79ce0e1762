"""Run state shared between the render and input loops."""

import logging
import threading
from enum import Enum

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Lifecycle phases of a dashboard run."""

    IDLE = "idle"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


class RunState:
    """
    One-way run flag plus lifecycle phase.

    The stop flag is a threading.Event so both loops can read it without
    holding a lock. Phase transitions only ever move forward:
    IDLE -> RUNNING -> STOPPING -> STOPPED.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._phase = Phase.IDLE
        self._stop_event = threading.Event()

    @property
    def phase(self) -> Phase:
        """Get the current phase."""
        with self._lock:
            return self._phase

    @property
    def is_running(self) -> bool:
        """True between start() and the first request_stop()."""
        return not self._stop_event.is_set() and self._phase is Phase.RUNNING

    def start(self) -> None:
        """Enter RUNNING. A RunState can only be started once."""
        with self._lock:
            if self._phase is not Phase.IDLE:
                raise RuntimeError(f"Cannot start from phase {self._phase.value}")
            self._phase = Phase.RUNNING
        logger.info("Dashboard running")

    def request_stop(self) -> None:
        """Move RUNNING to STOPPING. Calling it again is a no-op."""
        with self._lock:
            if self._phase is not Phase.RUNNING:
                return
            self._phase = Phase.STOPPING
            self._stop_event.set()
        logger.info("Stop requested")

    def mark_stopped(self) -> None:
        """Enter the terminal STOPPED phase."""
        with self._lock:
            if self._phase is Phase.STOPPED:
                return
            self._phase = Phase.STOPPED
            self._stop_event.set()
        logger.info("Dashboard stopped")

    def wait_stopped(self, timeout: float | None = None) -> bool:
        """Block until a stop has been requested or the timeout elapses."""
        return self._stop_event.wait(timeout=timeout)
