"""
Abstract base class for energy components.

An energy component is one term of a Hamiltonian. It answers two
questions about a spin state: the energy attached to a single site, and the
energy of the whole lattice. The Metropolis integrator only ever asks the
first one, since a single-spin update only changes bonds touching that site.
"""

from abc import ABC, abstractmethod

import numpy as np

from ..state import State


class AbstractEnergyComponent(ABC):
    """
    Abstract base class for Hamiltonian terms.

    Subclasses implement :meth:`energy`. The default :meth:`total_energy` is
    the plain sum of site energies, which is right for on-site terms.
    Two-site terms count every bond once from each end and must override it.
    """

    @abstractmethod
    def energy(self, state: State, index: int) -> float:
        """
        Energy contribution of a single site.

        Parameters
        ----------
        state : State
            Spin configuration
        index : int
            Site index

        Returns
        -------
        energy : float
        """
        pass

    def site_energies(self, state: State) -> np.ndarray:
        """Energy of every site, shape (nsites,)."""
        return np.array([self.energy(state, i) for i in range(len(state))])

    def total_energy(self, state: State) -> float:
        """Energy of the whole lattice."""
        return float(np.sum(self.site_energies(state)))

    def __add__(self, other: 'AbstractEnergyComponent'):
        from .composed import Hamiltonian
        if not isinstance(other, AbstractEnergyComponent):
            return NotImplemented
        return Hamiltonian([self]) + other

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
