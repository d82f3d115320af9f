"""
Core domain models for the spinanneal package.

This module contains the fundamental abstractions:
- Lattice: site indexing and periodic boundaries
- Adjacency: flattened neighbour table
- State: classical spin configurations
- Hamiltonian: composable energy components
- SpinSystem: complete physical system

These are the building blocks used by the Monte Carlo driver.
"""

from .lattice import (
    Site,
    Vertex,
    Lattice,
    LatticeBuilder,
    Adjacency,
    Locator,
    LatticePreset,
    available_presets,
    load_preset,
    load_vertices,
    create_lattice,
)

from .state import Spin, State

from .hamiltonian import (
    AbstractEnergyComponent,
    ExchangeComponent,
    CouplingExchangeComponent,
    ZAxisAnisotropy,
    ZeemanComponent,
    Hamiltonian,
    create_component,
)

from .spin_system import SpinSystem

__all__ = [
    # Lattice
    'Site',
    'Vertex',
    'Lattice',
    'LatticeBuilder',
    'Adjacency',
    'Locator',
    'LatticePreset',
    'available_presets',
    'load_preset',
    'load_vertices',
    'create_lattice',

    # State
    'Spin',
    'State',

    # Hamiltonian
    'AbstractEnergyComponent',
    'ExchangeComponent',
    'CouplingExchangeComponent',
    'ZAxisAnisotropy',
    'ZeemanComponent',
    'Hamiltonian',
    'create_component',

    # Spin System
    'SpinSystem',
]
