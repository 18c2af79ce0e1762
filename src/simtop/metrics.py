"""Metrics sources feeding the simtop dashboard."""

import logging
from typing import Protocol

import psutil

from simtop.config import (
    DEFAULT_PROCESS_LIMIT,
    SIMULATED_BASE_PID,
    SIMULATED_CPU_PERCENT,
    SIMULATED_MEMORY_PERCENT,
    SIMULATED_PROCESS_COUNT,
)
from simtop.models import AggregateSample, ProcessEntry

logger = logging.getLogger(__name__)


class MetricsSource(Protocol):
    """Anything that can report aggregate usage and a process list."""

    def sample_aggregate(self) -> AggregateSample: ...

    def sample_processes(self) -> list[ProcessEntry]: ...


class SimulatedMetricsSource:
    """
    Deterministic metrics source.

    Returns fixed aggregate percentages and a synthetic process list whose
    load grows with each entry, so the tail of the list crosses the high
    usage threshold (memory deliberately goes past 100%).
    """

    def __init__(
        self,
        cpu_percent: float = SIMULATED_CPU_PERCENT,
        memory_percent: float = SIMULATED_MEMORY_PERCENT,
        count: int = SIMULATED_PROCESS_COUNT,
        base_pid: int = SIMULATED_BASE_PID,
    ) -> None:
        self._aggregate = AggregateSample(cpu_percent, memory_percent)
        self._count = count
        self._base_pid = base_pid

    def sample_aggregate(self) -> AggregateSample:
        return self._aggregate

    def sample_processes(self) -> list[ProcessEntry]:
        return [
            ProcessEntry(
                pid=self._base_pid + i,
                name=f"Process_{i + 1}",
                cpu_percent=10.0 + i * 20,
                memory_percent=18.0 + i * 25,
            )
            for i in range(self._count)
        ]


class PsutilMetricsSource:
    """
    Metrics source backed by the real system through psutil.

    Reports the busiest processes only. Processes that die mid-poll, deny
    access, or are zombies are skipped.
    """

    def __init__(self, limit: int = DEFAULT_PROCESS_LIMIT) -> None:
        """
        Initialize the PsutilMetricsSource.

        Args:
            limit: Maximum number of processes to report, busiest first.
        """
        self._limit = max(1, limit)
        # Initialize CPU percent (first call returns 0.0)
        psutil.cpu_percent(interval=None)

    @property
    def limit(self) -> int:
        """Get the process limit."""
        return self._limit

    def sample_aggregate(self) -> AggregateSample:
        return AggregateSample(
            cpu_percent=psutil.cpu_percent(interval=None),
            memory_percent=psutil.virtual_memory().percent,
        )

    def sample_processes(self) -> list[ProcessEntry]:
        processes: list[ProcessEntry] = []

        for proc in psutil.process_iter(attrs=["pid", "name", "cpu_percent", "memory_percent"]):
            try:
                info = proc.info
                processes.append(
                    ProcessEntry(
                        pid=info.get("pid", 0),
                        name=info.get("name") or "",
                        cpu_percent=info.get("cpu_percent") or 0.0,
                        memory_percent=info.get("memory_percent") or 0.0,
                    )
                )
            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                logger.debug("Skipping process %s", proc.pid)
                continue

        processes.sort(key=lambda p: p.cpu_percent, reverse=True)
        return processes[: self._limit]
