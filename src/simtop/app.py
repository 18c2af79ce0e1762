"""simtop - Textual front-end over the dashboard controller."""

from collections import deque
from queue import Empty, Queue

from rich.text import Text
from textual.app import App, ComposeResult
from textual.css.query import NoMatches
from textual.widgets import Footer, Input, Static

from simtop.config import DEFAULT_TICK_INTERVAL
from simtop.controller import DashboardController
from simtop.metrics import MetricsSource, PsutilMetricsSource

MAX_FEEDBACK_LINES = 8


class DashboardView(Static):
    """Widget showing the latest rendered dashboard frame."""

    DEFAULT_CSS = """
    DashboardView {
        height: 1fr;
        padding: 1;
        background: $surface;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize DashboardView."""
        super().__init__("Loading dashboard...", *args, **kwargs)
        self._frame: str = ""

    @property
    def frame(self) -> str:
        """Get the frame currently shown."""
        return self._frame

    def show_frame(self, frame: str) -> None:
        # Frames contain literal brackets, so bypass markup parsing
        self._frame = frame
        self.update(Text(frame))


class FeedbackLog(Static):
    """Widget showing the most recent command feedback."""

    DEFAULT_CSS = """
    FeedbackLog {
        height: auto;
        min-height: 3;
        max-height: 12;
        padding: 0 1;
        border: solid $primary;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize FeedbackLog."""
        super().__init__(*args, **kwargs)
        self._messages: deque[str] = deque(maxlen=MAX_FEEDBACK_LINES)

    @property
    def messages(self) -> list[str]:
        """Get the messages currently shown, oldest first."""
        return list(self._messages)

    def add_message(self, message: str) -> None:
        self._messages.append(message)
        self.update(Text("\n".join(self._messages)))


class SimtopApp(App):
    """Main simtop application."""

    TITLE = "simtop"
    SUB_TITLE = "Resource Monitor"

    CSS = """
    Screen {
        layout: vertical;
    }

    #command-input {
        dock: bottom;
    }
    """

    BINDINGS = [
        ("escape", "quit", "Quit"),
    ]

    def __init__(
        self,
        source: MetricsSource | None = None,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
    ) -> None:
        """
        Initialize the SimtopApp.

        Args:
            source: Metrics source to display. Defaults to the live system.
            tick_interval: Seconds between dashboard frames.
        """
        super().__init__()
        self._frame_queue: Queue[str] = Queue()
        self._feedback_queue: Queue[str] = Queue()
        self._controller = DashboardController(
            source if source is not None else PsutilMetricsSource(),
            tick_interval=tick_interval,
            on_frame=self._frame_queue.put,
            on_message=self._feedback_queue.put,
        )

    @property
    def controller(self) -> DashboardController:
        """Get the dashboard controller."""
        return self._controller

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield DashboardView(id="dashboard")
        yield FeedbackLog(id="feedback")
        yield Input(placeholder="stop | kill <pid> | info <pid>", id="command-input")
        yield Footer()

    def on_mount(self) -> None:
        """Start the controller when the app is mounted."""
        self._controller.start()
        self.query_one("#command-input", Input).focus()
        # Set up a timer to poll the queues for updates
        self.set_interval(0.1, self._check_for_updates)

    def on_unmount(self) -> None:
        """Stop the controller when the app shuts down."""
        self._controller.stop()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Send a submitted line to the controller."""
        self._controller.submit(event.value)
        event.input.value = ""

    def _check_for_updates(self) -> None:
        """Drain frames and messages, then exit if the run has ended."""
        try:
            dashboard = self.query_one("#dashboard", DashboardView)
            feedback = self.query_one("#feedback", FeedbackLog)
        except NoMatches:
            return  # Widgets not mounted yet

        # Only the newest frame matters
        frame = None
        while True:
            try:
                frame = self._frame_queue.get_nowait()
            except Empty:
                break
        if frame is not None:
            dashboard.show_frame(frame)

        while True:
            try:
                feedback.add_message(self._feedback_queue.get_nowait())
            except Empty:
                break

        if not self._controller.is_running:
            self._controller.stop()
            self.exit()

    def action_quit(self) -> None:
        """Handle quit action with graceful cleanup."""
        self._controller.stop()
        self.exit()


def main() -> None:
    """Entry point for the simtop Textual application."""
    app = SimtopApp()
    app.run()


if __name__ == "__main__":
    main()
