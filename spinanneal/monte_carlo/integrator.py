"""
Metropolis Monte Carlo integrator for classical Heisenberg spins.

One sweep proposes one update per site. A proposal keeps the magnitude of
the current spin and draws a fresh uniformly random direction; it is
accepted with the Metropolis probability min(1, exp(-ΔE / T)), where ΔE
only involves the local energy of the updated site. Accepted updates are
visible to every later proposal of the same sweep.
"""

import logging
import math
from typing import Optional

import numpy as np

from ..core.hamiltonian import AbstractEnergyComponent
from ..core.state import State, random_directions

logger = logging.getLogger(__name__)


def acceptance_probability(delta: float, temperature: float) -> float:
    """
    Metropolis acceptance probability of an energy change.

    Parameters
    ----------
    delta : float
        Energy change E_new - E_old
    temperature : float
        Temperature in energy units (k_B = 1)

    Returns
    -------
    probability : float
        1 for delta <= 0, otherwise exp(-delta / temperature). At
        temperature <= 0 uphill moves are never accepted.
    """
    if delta <= 0:
        return 1.0
    if temperature <= 0:
        return 0.0
    return math.exp(-delta / temperature)


class MetropolisIntegrator:
    """
    Single-spin-flip Metropolis sampler with an annealing temperature.

    Parameters
    ----------
    temperature : float
        Initial temperature, must be positive
    rng : np.random.Generator, optional
        Random source for proposals and acceptance draws
    shuffle : bool, optional
        Visit sites in a fresh random permutation each sweep instead of
        index order (default: False)

    Attributes
    ----------
    accepted : int
        Accepted proposals in the last sweep
    proposed : int
        Proposals made in the last sweep

    Examples
    --------
    >>> integrator = MetropolisIntegrator(250.0, rng=np.random.default_rng(7))
    >>> state = integrator.step(hamiltonian, state)
    >>> integrator.cool(10.0)
    >>> integrator.temp()
    240.0
    """

    def __init__(self,
                 temperature: float,
                 rng: Optional[np.random.Generator] = None,
                 shuffle: bool = False):
        if temperature <= 0:
            raise ValueError(f"Temperature must be positive, got {temperature}")

        self._temperature = float(temperature)
        self.rng = np.random.default_rng() if rng is None else rng
        self.shuffle = shuffle
        self.accepted = 0
        self.proposed = 0

    def temp(self) -> float:
        """Current temperature."""
        return self._temperature

    def cool(self, delta: float) -> None:
        """
        Lower the temperature by ``delta``.

        Raises
        ------
        ValueError
            If delta is not positive; annealing only ever goes down.
        """
        if delta <= 0:
            raise ValueError(f"Cooling step must be positive, got {delta}")
        self._temperature -= delta
        logger.debug("Cooled to T = %g", self._temperature)

    def acceptance_rate(self) -> float:
        """Fraction of accepted proposals in the last sweep."""
        if self.proposed == 0:
            return 0.0
        return self.accepted / self.proposed

    def step(self, hamiltonian: AbstractEnergyComponent, state: State) -> State:
        """
        One Monte Carlo sweep.

        Parameters
        ----------
        hamiltonian : AbstractEnergyComponent
            Energy model; only its site energy is evaluated
        state : State
            Current configuration, left untouched

        Returns
        -------
        state : State
            New configuration after one proposal per site
        """
        nsites = len(state)
        new_state = state.copy()
        spins = new_state.spins

        order = self.rng.permutation(nsites) if self.shuffle else range(nsites)
        directions = random_directions(nsites, self.rng)
        draws = self.rng.random(nsites)

        accepted = 0
        for k, i in enumerate(order):
            current = spins[i].copy()
            old_energy = hamiltonian.energy(new_state, i)

            spins[i] = directions[k] * np.linalg.norm(current)
            delta = hamiltonian.energy(new_state, i) - old_energy

            if delta <= 0 or draws[k] < acceptance_probability(delta, self._temperature):
                accepted += 1
            else:
                spins[i] = current

        self.accepted = accepted
        self.proposed = nsites
        return new_state

    def __repr__(self) -> str:
        return f"MetropolisIntegrator(T={self._temperature:g}, shuffle={self.shuffle})"
