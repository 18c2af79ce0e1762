"""Data models for simtop."""

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ProcessEntry:
    """Immutable record of a monitored process."""

    pid: int
    name: str
    cpu_percent: float  # Nominally 0.0 - 100.0, never clamped
    memory_percent: float  # Nominally 0.0 - 100.0, never clamped


@dataclass(slots=True, frozen=True)
class AggregateSample:
    """System-wide CPU and memory usage at one point in time."""

    cpu_percent: float
    memory_percent: float
