"""
Additive composition of energy components.
"""

from typing import Dict, Iterable, List

import numpy as np

from ..lattice import Adjacency
from ..state import State
from .base import AbstractEnergyComponent
from .exchange import ExchangeComponent, CouplingExchangeComponent
from .anisotropy import ZAxisAnisotropy, ZeemanComponent


class Hamiltonian(AbstractEnergyComponent):
    """
    Sum of any number of energy components.

    Each term keeps its own convention for the lattice total, so the
    double-counting correction of exchange terms never leaks into on-site
    terms.

    Parameters
    ----------
    terms : Iterable[AbstractEnergyComponent]
        Components to add up. An empty Hamiltonian has zero energy.

    Examples
    --------
    >>> adjacency = Adjacency(lattice)
    >>> hamiltonian = Hamiltonian([
    ...     CouplingExchangeComponent(adjacency),
    ...     ZAxisAnisotropy(0.1),
    ... ])
    >>> hamiltonian.total_energy(state)
    """

    def __init__(self, terms: Iterable[AbstractEnergyComponent] = ()):
        terms = list(terms)
        for term in terms:
            if not isinstance(term, AbstractEnergyComponent):
                raise TypeError(f"{term!r} is not an energy component")
        self.terms: List[AbstractEnergyComponent] = terms

    def energy(self, state: State, index: int) -> float:
        return sum((term.energy(state, index) for term in self.terms), 0.0)

    def site_energies(self, state: State) -> np.ndarray:
        total = np.zeros(len(state))
        for term in self.terms:
            total += term.site_energies(state)
        return total

    def total_energy(self, state: State) -> float:
        return sum((term.total_energy(state) for term in self.terms), 0.0)

    def add(self, term: AbstractEnergyComponent) -> 'Hamiltonian':
        """New Hamiltonian with one more term."""
        return Hamiltonian(self.terms + [term])

    def __add__(self, other: AbstractEnergyComponent) -> 'Hamiltonian':
        if isinstance(other, Hamiltonian):
            return Hamiltonian(self.terms + other.terms)
        if isinstance(other, AbstractEnergyComponent):
            return self.add(other)
        return NotImplemented

    def __len__(self) -> int:
        return len(self.terms)

    def __iter__(self):
        return iter(self.terms)

    def __repr__(self) -> str:
        inner = ', '.join(repr(term) for term in self.terms)
        return f"Hamiltonian([{inner}])"


# Component registry for config-based construction
COMPONENT_REGISTRY = {
    'exchange': ExchangeComponent,
    'coupling_exchange': CouplingExchangeComponent,
    'z_anisotropy': ZAxisAnisotropy,
    'zeeman': ZeemanComponent,
}

# Components built on the neighbour table
_NEEDS_ADJACENCY = {'exchange', 'coupling_exchange'}


def create_component(kind: str, adjacency: Adjacency, **params) -> AbstractEnergyComponent:
    """
    Factory function to create energy components from string names.

    Parameters
    ----------
    kind : str
        One of the keys of ``COMPONENT_REGISTRY``
    adjacency : Adjacency
        Neighbour table, used by exchange terms
    **params
        Arguments passed to the component constructor
        (e.g., exchange=1.0, strength=0.2, field=[0, 0, 1])

    Raises
    ------
    ValueError
        If kind is not recognized
    """
    if kind not in COMPONENT_REGISTRY:
        available = ', '.join(COMPONENT_REGISTRY.keys())
        raise ValueError(f"Unknown energy component '{kind}'. "
                         f"Available components: {available}")

    component_class = COMPONENT_REGISTRY[kind]
    if kind in _NEEDS_ADJACENCY:
        return component_class(adjacency, **params)
    return component_class(**params)


def build_hamiltonian(descriptions: Iterable[Dict], adjacency: Adjacency) -> Hamiltonian:
    """Hamiltonian from a list of ``{'kind': ..., **params}`` mappings."""
    terms = []
    for term in descriptions:
        params = dict(term)
        kind = params.pop('kind')
        terms.append(create_component(kind, adjacency, **params))
    return Hamiltonian(terms)
