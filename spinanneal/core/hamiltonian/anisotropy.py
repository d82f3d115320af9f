"""
On-site energy terms.
"""

import numpy as np

from ..state import State
from .base import AbstractEnergyComponent


class ZAxisAnisotropy(AbstractEnergyComponent):
    """
    Uniaxial single-ion anisotropy along z.

        E_i = -D (S_i^z)^2

    Positive D makes z an easy axis, negative D an easy plane.
    """

    def __init__(self, strength: float):
        self.strength = float(strength)

    def energy(self, state: State, index: int) -> float:
        z = state.spins[index, 2]
        return -self.strength * float(z * z)

    def site_energies(self, state: State) -> np.ndarray:
        return -self.strength * state.spins[:, 2] ** 2

    def __repr__(self) -> str:
        return f"ZAxisAnisotropy(D={self.strength})"


class ZeemanComponent(AbstractEnergyComponent):
    """
    Coupling to a uniform external field.

        E_i = -h · S_i
    """

    def __init__(self, field):
        self.field = np.array(field, dtype=np.float64)
        if self.field.shape != (3,):
            raise ValueError(f"Field must be a 3-vector, got shape {self.field.shape}")

    def energy(self, state: State, index: int) -> float:
        return -float(np.dot(self.field, state.spins[index]))

    def site_energies(self, state: State) -> np.ndarray:
        return -(state.spins @ self.field)

    def __repr__(self) -> str:
        return f"ZeemanComponent(h={self.field.tolist()})"
