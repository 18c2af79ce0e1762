"""Plain-text rendering of the simtop dashboard.

Everything here is a pure function of its arguments so frames can be
built and checked without threads, timers, or a terminal.
"""

from collections.abc import Sequence

from simtop.config import COLUMN_WIDTHS, GAUGE_SLOTS, HIGH_USAGE_THRESHOLD
from simtop.models import AggregateSample, ProcessEntry

HIGH_USAGE = "HIGH USAGE"
OK = "OK"

TITLE = "Real-Time Monitoring Dashboard"
FOOTER = "Type 'stop' to exit. Other commands: kill <pid>, info <pid>"


def classify(entry: ProcessEntry, threshold: float = HIGH_USAGE_THRESHOLD) -> str:
    """Return HIGH USAGE if CPU or memory is strictly above the threshold."""
    if entry.cpu_percent > threshold or entry.memory_percent > threshold:
        return HIGH_USAGE
    return OK


def gauge_filled(percent: float, slots: int = GAUGE_SLOTS) -> int:
    """Number of filled slots for a percentage, clamped to [0, slots]."""
    filled = round(percent / 100.0 * slots)
    return max(0, min(filled, slots))


def progress_bar(percent: float, slots: int = GAUGE_SLOTS) -> str:
    """Render a percentage as a fixed-width bar gauge."""
    filled = gauge_filled(percent, slots)
    return "[" + "#" * filled + "-" * (slots - filled) + "]"


def render_header() -> str:
    return f"{'=' * 20} {TITLE} {'=' * 20}"


def render_gauges(aggregate: AggregateSample) -> str:
    return (
        f"CPU Usage: {aggregate.cpu_percent:.2f}% {progress_bar(aggregate.cpu_percent)}\n"
        f"Memory Usage: {aggregate.memory_percent:.2f}% {progress_bar(aggregate.memory_percent)}"
    )


def render_table(processes: Sequence[ProcessEntry]) -> str:
    """Render the process table with a status column."""
    w = COLUMN_WIDTHS
    header = (
        f"{'PID':<{w['pid']}}"
        f"{'Process Name':<{w['name']}}"
        f"{'CPU%':<{w['cpu']}}"
        f"{'MEM%':<{w['mem']}}"
        f"{'STATUS':<{w['status']}}"
    )
    lines = [header.rstrip(), "-" * (sum(w.values()) - 1)]
    for proc in processes:
        row = (
            f"{proc.pid:<{w['pid']}}"
            f"{proc.name[: w['name'] - 1]:<{w['name']}}"
            f"{proc.cpu_percent:<{w['cpu']}.2f}"
            f"{proc.memory_percent:<{w['mem']}.2f}"
            f"{classify(proc)}"
        )
        lines.append(row)
    return "\n".join(lines)


def render_dashboard(aggregate: AggregateSample, processes: Sequence[ProcessEntry]) -> str:
    """Build one complete dashboard frame."""
    return "\n\n".join(
        [
            render_header(),
            render_gauges(aggregate),
            render_table(processes),
            FOOTER,
        ]
    )
