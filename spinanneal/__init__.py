"""
spinanneal: Monte Carlo annealing of classical spin lattices

A Python package for simulating Heisenberg-like magnets on periodic crystal
structures with the Metropolis algorithm under a cooling schedule.

Main Components
---------------
core : Core domain models (Lattice, Adjacency, State, Hamiltonian, SpinSystem)
monte_carlo : Metropolis integrator and annealing driver
io : YAML run configuration, diagnostic output
visualization : Annealing trace plots
utils : Logging setup

Quick Start
-----------
>>> import numpy as np
>>> from spinanneal import SpinSystem, AnnealingSchedule, Annealer
>>>
>>> # Magnetite cell, 4x4x4, per-bond exchange couplings
>>> system = SpinSystem.from_preset('magnetite', shape=(4, 4, 4))
>>> rng = np.random.default_rng(42)
>>> state = system.initial_state('random_with_norms', rng=rng)
>>>
>>> schedule = AnnealingSchedule(initial_temperature=250.0, cooling=10.0,
...                              floor=0.1, sweeps_per_stage=100)
>>> result = Annealer(system, schedule, rng=rng).run(state)
>>> result.trace.tail()

Current Version: 0.1.0
"""

__version__ = "0.1.0"

# High-level API exports
from .core import (
    # Lattice
    Site,
    Vertex,
    Lattice,
    LatticeBuilder,
    Adjacency,
    create_lattice,
    load_preset,

    # State
    Spin,
    State,

    # Hamiltonian
    AbstractEnergyComponent,
    ExchangeComponent,
    CouplingExchangeComponent,
    ZAxisAnisotropy,
    Hamiltonian,

    # Spin System
    SpinSystem,
)

from .monte_carlo import (
    MetropolisIntegrator,
    AnnealingSchedule,
    Annealer,
)

__all__ = [
    # Version info
    '__version__',

    # Core abstractions
    'Site',
    'Vertex',
    'Lattice',
    'LatticeBuilder',
    'Adjacency',
    'create_lattice',
    'load_preset',
    'Spin',
    'State',
    'AbstractEnergyComponent',
    'ExchangeComponent',
    'CouplingExchangeComponent',
    'ZAxisAnisotropy',
    'Hamiltonian',
    'SpinSystem',

    # Monte Carlo
    'MetropolisIntegrator',
    'AnnealingSchedule',
    'Annealer',
]
