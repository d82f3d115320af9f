"""
Heisenberg exchange terms.

Both variants read their bonds from an :class:`Adjacency`:

    E_i = -Σ_j J_ij (S_i · S_j)

where j runs over the neighbours of site i. The lattice total is half the
sum of site energies, because every bond appears once from each end.
"""

from abc import abstractmethod

import numpy as np

from ..lattice import Adjacency
from ..state import State
from .base import AbstractEnergyComponent


class _BondExchange(AbstractEnergyComponent):

    def __init__(self, adjacency: Adjacency):
        if not isinstance(adjacency, Adjacency):
            raise TypeError("adjacency must be an Adjacency instance")
        self.adjacency = adjacency
        # Source site of every bond, aligned with adjacency.neighbors
        self._sources = np.repeat(np.arange(adjacency.nsites), np.diff(adjacency.offsets))

    @abstractmethod
    def _bond_couplings(self) -> np.ndarray:
        """Coupling of every bond, aligned with adjacency.neighbors."""
        pass

    @abstractmethod
    def _site_couplings(self, index: int) -> np.ndarray:
        """Couplings of the bonds leaving site ``index``."""
        pass

    def _check_size(self, state: State) -> None:
        if len(state) != self.adjacency.nsites:
            raise ValueError(
                f"State has {len(state)} sites, adjacency has {self.adjacency.nsites}"
            )

    def energy(self, state: State, index: int) -> float:
        neighbors = self.adjacency.neighbors_of(index)
        if neighbors is None:
            raise IndexError(f"Site {index} is outside the adjacency table")
        spins = state.spins
        dots = spins[neighbors] @ spins[index]
        return -float(np.dot(self._site_couplings(index), dots))

    def site_energies(self, state: State) -> np.ndarray:
        self._check_size(state)
        spins = state.spins
        bond_dots = np.einsum('ij,ij->i', spins[self._sources], spins[self.adjacency.neighbors])
        return -np.bincount(self._sources,
                            weights=self._bond_couplings() * bond_dots,
                            minlength=self.adjacency.nsites)

    def total_energy(self, state: State) -> float:
        return 0.5 * float(np.sum(self.site_energies(state)))


class ExchangeComponent(_BondExchange):
    """
    Exchange with one coupling shared by every bond.

    Parameters
    ----------
    adjacency : Adjacency
        Neighbour table
    exchange : float
        Coupling J (positive favours parallel spins)
    """

    def __init__(self, adjacency: Adjacency, exchange: float):
        super().__init__(adjacency)
        self.exchange = float(exchange)

    def _bond_couplings(self) -> np.ndarray:
        return np.full(self.adjacency.nbonds, self.exchange)

    def _site_couplings(self, index: int) -> np.ndarray:
        return np.full(len(self.adjacency.neighbors_of(index)), self.exchange)

    def __repr__(self) -> str:
        return f"ExchangeComponent(J={self.exchange}, bonds={self.adjacency.nbonds})"


class CouplingExchangeComponent(_BondExchange):
    """
    Exchange with a coupling per bond, taken from the adjacency table.

    Bonds whose vertex carries no coupling contribute nothing.
    """

    def _bond_couplings(self) -> np.ndarray:
        return self.adjacency.couplings

    def _site_couplings(self, index: int) -> np.ndarray:
        return self.adjacency.couplings_of(index)

    def __repr__(self) -> str:
        return f"CouplingExchangeComponent(bonds={self.adjacency.nbonds})"
