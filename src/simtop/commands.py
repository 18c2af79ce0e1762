"""Command parsing and execution for the simtop console."""

import logging
from dataclasses import dataclass
from typing import Union

from simtop.models import ProcessEntry
from simtop.registry import ProcessRegistry
from simtop.state import RunState

logger = logging.getLogger(__name__)

AVAILABLE_COMMANDS = "stop, kill <pid>, info <pid>"


@dataclass(slots=True, frozen=True)
class Stop:
    """End the dashboard."""


@dataclass(slots=True, frozen=True)
class Kill:
    """Remove a process from the registry (simulated termination)."""

    pid: int


@dataclass(slots=True, frozen=True)
class Info:
    """Show the registry record for a process."""

    pid: int


@dataclass(slots=True, frozen=True)
class Malformed:
    """A known command with bad or missing arguments."""

    reason: str


@dataclass(slots=True, frozen=True)
class Unknown:
    """A line whose first token is not a known command."""

    raw: str


Command = Union[Stop, Kill, Info, Malformed, Unknown]


@dataclass(slots=True, frozen=True)
class CommandResult:
    """Outcome of applying a command."""

    message: str
    is_terminal: bool = False


def parse_command(raw: str) -> Command | None:
    """
    Parse one line of console input.

    Blank lines yield None. The command word is case-insensitive; kill and
    info take exactly one integer pid, stop takes nothing.
    """
    line = raw.strip()
    if not line:
        return None

    word, *args = line.split()
    word = word.lower()

    if word == "stop":
        return Stop() if not args else Malformed("Usage: stop")

    if word in ("kill", "info"):
        usage = Malformed(f"Usage: {word} <pid>")
        if len(args) != 1:
            return usage
        try:
            pid = int(args[0])
        except ValueError:
            return usage
        return Kill(pid) if word == "kill" else Info(pid)

    return Unknown(line)


def format_process_info(entry: ProcessEntry) -> str:
    """Format a process record for the info command."""
    return (
        "Process Info:\n"
        f" PID   : {entry.pid}\n"
        f" Name  : {entry.name}\n"
        f" CPU%  : {entry.cpu_percent:.2f}%\n"
        f" MEM%  : {entry.memory_percent:.2f}%"
    )


def apply_command(command: Command, registry: ProcessRegistry, run_state: RunState) -> CommandResult:
    """Execute a parsed command against the registry."""
    logger.debug("Applying %r", command)

    if isinstance(command, Stop):
        run_state.request_stop()
        return CommandResult("Stopping dashboard...", is_terminal=True)

    if isinstance(command, Kill):
        if registry.remove(command.pid):
            return CommandResult(f"Simulated: Process {command.pid} terminated.")
        return CommandResult(f"Process {command.pid} not found.")

    if isinstance(command, Info):
        entry = registry.find(command.pid)
        if entry is None:
            return CommandResult(f"Process {command.pid} not found.")
        return CommandResult(format_process_info(entry))

    if isinstance(command, Malformed):
        return CommandResult(command.reason)

    return CommandResult(f"Unknown command: '{command.raw}'. Available: {AVAILABLE_COMMANDS}")
