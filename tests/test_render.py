"""Tests for dashboard rendering."""

import pytest

from simtop.models import AggregateSample, ProcessEntry
from simtop.render import (
    FOOTER,
    HIGH_USAGE,
    OK,
    classify,
    gauge_filled,
    progress_bar,
    render_dashboard,
    render_gauges,
    render_header,
    render_table,
)


class TestClassify:
    """Tests for usage classification."""

    def test_high_cpu(self):
        """Test CPU above the threshold is HIGH USAGE."""
        assert classify(ProcessEntry(1, "a", 71.0, 0.0)) == HIGH_USAGE

    def test_high_memory(self):
        """Test memory above the threshold is HIGH USAGE."""
        assert classify(ProcessEntry(1, "a", 0.0, 70.01)) == HIGH_USAGE

    def test_boundary_is_ok(self):
        """Test exactly 70/70 is still OK (strict comparison)."""
        assert classify(ProcessEntry(1, "a", 70.0, 70.0)) == OK

    def test_custom_threshold(self):
        """Test the threshold can be overridden."""
        assert classify(ProcessEntry(1, "a", 20.0, 0.0), threshold=10.0) == HIGH_USAGE


class TestGauge:
    """Tests for bar gauges."""

    @pytest.mark.parametrize(
        ("percent", "filled"),
        [(0.0, 0), (100.0, 30), (50.0, 15), (45.5, 14), (-10.0, 0), (118.0, 30)],
    )
    def test_gauge_filled(self, percent, filled):
        """Test filled slot counts, clamped at both ends."""
        assert gauge_filled(percent) == filled

    def test_progress_bar_width(self):
        """Test bars always have 30 slots plus brackets."""
        for percent in (0.0, 33.3, 100.0, 250.0):
            bar = progress_bar(percent)
            assert len(bar) == 32
            assert bar.startswith("[") and bar.endswith("]")

    def test_progress_bar_half(self):
        """Test a 50% bar."""
        assert progress_bar(50.0) == "[" + "#" * 15 + "-" * 15 + "]"


class TestRenderDashboard:
    """Tests for the full frame."""

    def test_header(self):
        """Test the header carries the title."""
        assert "Real-Time Monitoring Dashboard" in render_header()

    def test_gauges(self):
        """Test CPU and memory lines use two decimals."""
        text = render_gauges(AggregateSample(45.5, 63.7))

        assert "CPU Usage: 45.50% [" in text
        assert "Memory Usage: 63.70% [" in text

    def test_table_rows(self):
        """Test each process appears with its status."""
        table = render_table(
            [
                ProcessEntry(1000, "Process_1", 10.0, 18.0),
                ProcessEntry(1004, "Process_5", 90.0, 118.0),
            ]
        )
        lines = table.splitlines()

        assert lines[0].split() == ["PID", "Process", "Name", "CPU%", "MEM%", "STATUS"]
        assert set(lines[1]) == {"-"}
        assert lines[2].split() == ["1000", "Process_1", "10.00", "18.00", "OK"]
        assert lines[3].split() == ["1004", "Process_5", "90.00", "118.00", "HIGH", "USAGE"]

    def test_table_columns_aligned(self):
        """Test columns start at fixed offsets."""
        row = render_table([ProcessEntry(7, "x", 1.0, 2.0)]).splitlines()[2]

        assert row.index("x") == 10
        assert row.index("1.00") == 30
        assert row.index("2.00") == 40
        assert row.index("OK") == 50

    def test_empty_table(self):
        """Test an empty registry still renders headings."""
        assert len(render_table([]).splitlines()) == 2

    def test_dashboard_is_pure(self):
        """Test the same inputs always give the same frame."""
        aggregate = AggregateSample(10.0, 20.0)
        processes = [ProcessEntry(1, "a", 1.0, 1.0)]

        assert render_dashboard(aggregate, processes) == render_dashboard(aggregate, processes)

    def test_dashboard_sections(self):
        """Test the frame contains every section in order."""
        frame = render_dashboard(AggregateSample(10.0, 20.0), [ProcessEntry(1, "a", 1.0, 1.0)])

        header = frame.index("Real-Time Monitoring Dashboard")
        cpu = frame.index("CPU Usage")
        table = frame.index("Process Name")
        footer = frame.index(FOOTER)
        assert header < cpu < table < footer
