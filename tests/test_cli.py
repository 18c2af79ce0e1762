"""Tests for the console entry point."""

import io

from simtop import cli


def test_main_stop(monkeypatch, capsys):
    """Test the console dashboard prints a frame and exits 0 on stop."""
    monkeypatch.setattr("sys.stdin", io.StringIO("info 1004\nkill 1001\nstop\n"))

    assert cli.main() == 0

    out = capsys.readouterr().out
    assert "Real-Time Monitoring Dashboard" in out
    assert "CPU Usage: 45.50%" in out
    assert "HIGH USAGE" in out
    assert " MEM%  : 118.00%" in out
    assert "Simulated: Process 1001 terminated." in out
    assert out.rstrip().endswith("Dashboard stopped successfully.")


def test_main_end_of_input(monkeypatch, capsys):
    """Test closing stdin exits 0 just like stop."""
    monkeypatch.setattr("sys.stdin", io.StringIO(""))

    assert cli.main() == 0
    assert "Dashboard stopped successfully." in capsys.readouterr().out
