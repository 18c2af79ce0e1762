"""Default settings for simtop."""

# Render loop timing (seconds)
DEFAULT_TICK_INTERVAL = 1.0
DEFAULT_POLL_STEP = 0.1  # How often a sleeping render loop checks for commands
MIN_TICK_INTERVAL = 0.05
DEFAULT_JOIN_TIMEOUT = 5.0

# Classification and gauges
HIGH_USAGE_THRESHOLD = 70.0  # Strictly greater than this is HIGH USAGE
GAUGE_SLOTS = 30

# Simulated metrics
SIMULATED_CPU_PERCENT = 45.5
SIMULATED_MEMORY_PERCENT = 63.7
SIMULATED_PROCESS_COUNT = 5
SIMULATED_BASE_PID = 1000

# Real metrics
DEFAULT_PROCESS_LIMIT = 15

# Table layout
COLUMN_WIDTHS = {
    "pid": 10,
    "name": 20,
    "cpu": 10,
    "mem": 10,
    "status": 20,
}
