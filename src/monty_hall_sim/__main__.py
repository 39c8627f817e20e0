"""Allow ``python -m monty_hall_sim``."""

import sys

from monty_hall_sim.cli import main

if __name__ == "__main__":
    sys.exit(main())
