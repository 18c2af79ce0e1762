"""Loop controller coordinating the render loop and the command listener."""

import logging
import sys
import threading
import time
from collections.abc import Callable
from queue import Empty, Queue
from typing import TextIO

from simtop.commands import Command, CommandResult, Stop, apply_command, parse_command
from simtop.config import (
    DEFAULT_JOIN_TIMEOUT,
    DEFAULT_POLL_STEP,
    DEFAULT_TICK_INTERVAL,
    MIN_TICK_INTERVAL,
)
from simtop.metrics import MetricsSource
from simtop.registry import ProcessRegistry
from simtop.render import render_dashboard
from simtop.state import Phase, RunState

logger = logging.getLogger(__name__)

STOPPED_MESSAGE = "Dashboard stopped successfully."


def _print(text: str) -> None:
    print(text, flush=True)


class DashboardController:
    """
    Owns one dashboard run: the registry, the run state, and both loops.

    The render loop samples the metrics source every tick, refreshes the
    registry, and emits a frame. Between ticks it waits on the command
    queue, so it is also the single place commands are applied and the
    only one that decides to stop. The input loop just reads lines, parses
    them, and queues the results.

    Two ways to drive it:
        run(stream)       console mode; blocks until stopped.
        start()/submit()  background mode for hosts with their own input.
    """

    def __init__(
        self,
        source: MetricsSource,
        registry: ProcessRegistry | None = None,
        *,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
        poll_step: float = DEFAULT_POLL_STEP,
        on_frame: Callable[[str], None] | None = None,
        on_message: Callable[[str], None] | None = None,
    ) -> None:
        """
        Initialize the DashboardController.

        Args:
            source: Where aggregate usage and process samples come from.
            registry: Shared process registry. A fresh one is created if omitted.
            tick_interval: Seconds between frames.
            poll_step: Longest stretch the render loop waits before
                re-checking the run state.
            on_frame: Receives each rendered frame. Defaults to stdout.
            on_message: Receives command feedback. Defaults to stdout.
        """
        self._source = source
        self._registry = registry if registry is not None else ProcessRegistry()
        self._state = RunState()
        self._commands: Queue[Command] = Queue()
        self._tick_interval = max(MIN_TICK_INTERVAL, tick_interval)
        self._poll_step = min(max(0.01, poll_step), self._tick_interval)
        self._on_frame = on_frame or _print
        self._on_message = on_message or _print
        self._render_thread: threading.Thread | None = None
        self._listener_thread: threading.Thread | None = None

    @property
    def registry(self) -> ProcessRegistry:
        """Get the process registry."""
        return self._registry

    @property
    def state(self) -> RunState:
        """Get the run state."""
        return self._state

    @property
    def tick_interval(self) -> float:
        """Get the tick interval."""
        return self._tick_interval

    @tick_interval.setter
    def tick_interval(self, value: float) -> None:
        """Set the tick interval."""
        self._tick_interval = max(MIN_TICK_INTERVAL, value)
        self._poll_step = min(self._poll_step, self._tick_interval)

    @property
    def poll_step(self) -> float:
        """Get the poll step."""
        return self._poll_step

    @property
    def is_running(self) -> bool:
        """Check if the dashboard is running."""
        return self._state.is_running

    def run(self, stream: TextIO | None = None) -> int:
        """
        Run in console mode until stop or end of input.

        The command listener reads `stream` (stdin by default) in a daemon
        thread while the render loop runs in the calling thread.

        Returns:
            The process exit status, always 0.
        """
        stream = stream if stream is not None else sys.stdin
        self._state.start()
        self._listener_thread = threading.Thread(
            target=self._input_loop,
            args=(stream,),
            daemon=True,
            name="CommandListener",
        )
        self._listener_thread.start()

        try:
            self._render_loop()
        except KeyboardInterrupt:
            logger.info("Interrupted")
            self._state.request_stop()
        finally:
            self._shutdown(DEFAULT_JOIN_TIMEOUT)

        self._on_message(STOPPED_MESSAGE)
        return 0

    def start(self) -> None:
        """Start the render loop in a background thread."""
        if self._render_thread is not None and self._render_thread.is_alive():
            return

        self._state.start()
        self._render_thread = threading.Thread(
            target=self._render_loop,
            daemon=True,
            name="DashboardRender",
        )
        self._render_thread.start()

    def stop(self, timeout: float | None = DEFAULT_JOIN_TIMEOUT) -> None:
        """
        Stop a background run.

        Args:
            timeout: How long to wait for the render thread to stop (seconds).
        """
        self._state.request_stop()
        self._shutdown(timeout)

    def submit(self, line: str) -> Command | None:
        """
        Parse a line of input and queue it for the render loop.

        Returns:
            The parsed command, or None for a blank line.
        """
        command = parse_command(line)
        if command is not None:
            self._commands.put(command)
        return command

    def _shutdown(self, timeout: float | None) -> None:
        """Join both loops and enter the STOPPED phase."""
        for thread in (self._render_thread, self._listener_thread):
            if thread is not None and thread is not threading.current_thread():
                thread.join(timeout=timeout)
                if thread.is_alive():
                    # A listener blocked on a read only wakes on the next line or EOF
                    logger.warning("%s did not exit within %ss", thread.name, timeout)
        self._render_thread = None
        self._listener_thread = None
        if self._state.phase is not Phase.IDLE:
            self._state.mark_stopped()

    def _render_loop(self) -> None:
        """Main render loop; also the sole consumer of queued commands."""
        while self._state.is_running:
            self._tick()
            self._wait_for_next_tick(time.monotonic() + self._tick_interval)

    def _tick(self) -> None:
        """Sample, refresh the registry, and emit one frame."""
        try:
            aggregate = self._source.sample_aggregate()
            self._registry.replace(self._source.sample_processes())
        except Exception:
            logger.exception("Metrics sampling failed, skipping frame")
            return
        self._on_frame(render_dashboard(aggregate, self._registry.snapshot()))

    def _wait_for_next_tick(self, deadline: float) -> None:
        """Sleep until the deadline in poll_step slices, handling commands as they arrive."""
        while self._state.is_running:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return
            try:
                command = self._commands.get(timeout=min(remaining, self._poll_step))
            except Empty:
                continue
            self._dispatch(command)

    def _dispatch(self, command: Command) -> CommandResult:
        result = apply_command(command, self._registry, self._state)
        self._on_message(result.message)
        return result

    def _input_loop(self, stream: TextIO) -> None:
        """Read commands line by line; end of input counts as stop."""
        while self._state.is_running:
            line = stream.readline()
            if not line:
                logger.info("Command stream closed")
                self._commands.put(Stop())
                return

            command = parse_command(line)
            if command is None:
                continue
            self._commands.put(command)
            if isinstance(command, Stop):
                return
