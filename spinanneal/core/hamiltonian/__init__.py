"""
Hamiltonian module.

Energy components share one interface (site energy and lattice total) and
compose additively:
- ExchangeComponent: uniform Heisenberg exchange
- CouplingExchangeComponent: per-bond Heisenberg exchange
- ZAxisAnisotropy: single-ion anisotropy along z
- ZeemanComponent: uniform external field
- Hamiltonian: sum of any list of components
"""

from .base import AbstractEnergyComponent
from .exchange import ExchangeComponent, CouplingExchangeComponent
from .anisotropy import ZAxisAnisotropy, ZeemanComponent
from .composed import (
    Hamiltonian,
    COMPONENT_REGISTRY,
    create_component,
    build_hamiltonian,
)

__all__ = [
    'AbstractEnergyComponent',
    'ExchangeComponent',
    'CouplingExchangeComponent',
    'ZAxisAnisotropy',
    'ZeemanComponent',
    'Hamiltonian',
    'COMPONENT_REGISTRY',
    'create_component',
    'build_hamiltonian',
]
