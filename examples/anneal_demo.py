"""
Annealing demo.

Runs a YAML-configured annealing schedule and prints one line per sweep,
"<total energy> <|M|>", with a blank line between temperature stages.

    python examples/anneal_demo.py examples/magnetite.yaml
"""

import logging
import sys
from pathlib import Path

from spinanneal.io import load_config, format_records
from spinanneal.utils import configure_logging


def main(config_path):
    configure_logging(logging.WARNING)

    config = load_config(config_path)
    system = config.build_system()
    annealer = config.build_annealer(system)

    state = system.initial_state(config.initial_state, rng=annealer.rng)

    for line in format_records(annealer.iter_sweeps(state)):
        print(line, flush=True)


if __name__ == '__main__':
    default = Path(__file__).parent / 'magnetite.yaml'
    main(sys.argv[1] if len(sys.argv) > 1 else default)
