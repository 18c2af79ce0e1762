"""Console entry point for simtop."""

import logging
import sys

from simtop.controller import DashboardController
from simtop.metrics import SimulatedMetricsSource


def _print_frame(frame: str) -> None:
    print(f"\n{frame}\n", flush=True)


def main() -> int:
    """Run the simulated dashboard on stdin/stdout."""
    logging.basicConfig(
        level=logging.WARNING,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    controller = DashboardController(SimulatedMetricsSource(), on_frame=_print_frame)
    return controller.run(sys.stdin)


if __name__ == "__main__":
    sys.exit(main())
