"""
Classical Heisenberg spins and spin states.

A spin is a 3-vector whose length is the magnetic moment of its site. A
state holds one spin per lattice site, in lattice index order, stored as an
``(nsites, 3)`` array so that energy terms can work on numpy slices.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np


def _rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return np.random.default_rng() if rng is None else rng


def random_directions(n: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Unit vectors uniformly distributed on the sphere.

    Three independent standard-normal draws per vector, then normalised;
    the Gaussian is isotropic so the directions carry no axis bias.

    Returns
    -------
    directions : np.ndarray, shape (n, 3)
    """
    vectors = _rng(rng).standard_normal((n, 3))
    return vectors / np.linalg.norm(vectors, axis=1, keepdims=True)


@dataclass(frozen=True)
class Spin:
    """
    A classical spin.

    Attributes
    ----------
    x, y, z : float
        Cartesian components; the length is the magnetic moment
    """
    x: float
    y: float
    z: float

    @classmethod
    def up(cls) -> 'Spin':
        """Unit spin along +z."""
        return cls(0.0, 0.0, 1.0)

    @classmethod
    def random(cls, rng: Optional[np.random.Generator] = None) -> 'Spin':
        """Unit spin with a uniformly random direction."""
        return cls.from_array(random_directions(1, rng)[0])

    @classmethod
    def from_array(cls, vector) -> 'Spin':
        x, y, z = (float(c) for c in vector)
        return cls(x, y, z)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])

    def norm(self) -> float:
        return float(np.sqrt(self.x * self.x + self.y * self.y + self.z * self.z))

    def normalized(self) -> 'Spin':
        """
        Unit spin along the same direction.

        Raises
        ------
        ValueError
            For the zero vector, which has no direction.
        """
        norm = self.norm()
        if norm == 0.0:
            raise ValueError("Cannot normalize a zero-length spin")
        return Spin(self.x / norm, self.y / norm, self.z / norm)

    def with_norm(self, norm: float) -> 'Spin':
        """Spin along the same direction with magnitude ``norm``."""
        if norm <= 0:
            raise ValueError(f"Spin magnitude must be positive, got {norm}")
        unit = self.normalized()
        return Spin(unit.x * norm, unit.y * norm, unit.z * norm)

    def dot(self, other: 'Spin') -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def __mul__(self, other: 'Spin') -> float:
        if not isinstance(other, Spin):
            return NotImplemented
        return self.dot(other)


class State:
    """
    Spin configuration of a lattice.

    Parameters
    ----------
    spins : array_like, shape (nsites, 3)
        Spin vectors in lattice index order. The array is copied.

    Examples
    --------
    >>> state = State.up(8)
    >>> state.mag()
    (0.0, 0.0, 8.0)
    >>> state.mag_len()
    8.0
    """

    def __init__(self, spins):
        spins = np.array(spins, dtype=np.float64)
        if spins.ndim != 2 or spins.shape[1] != 3:
            raise ValueError(f"spins must have shape (nsites, 3), got {spins.shape}")
        self._spins = spins

    @classmethod
    def up(cls, size: int) -> 'State':
        """Every spin is the unit +z vector."""
        spins = np.zeros((size, 3))
        spins[:, 2] = 1.0
        return cls(spins)

    @classmethod
    def random(cls, size: int, rng: Optional[np.random.Generator] = None) -> 'State':
        """Uniformly random unit spins."""
        return cls(random_directions(size, rng))

    @classmethod
    def random_with_norms(cls,
                          size: int,
                          norms: Sequence[float],
                          rng: Optional[np.random.Generator] = None) -> 'State':
        """
        Random directions scaled to a per-site magnitude.

        Parameters
        ----------
        size : int
            Number of sites
        norms : Sequence[float], length size
            Magnitude of each spin, indexed like the lattice
        """
        norms = np.asarray(norms, dtype=np.float64)
        if norms.shape != (size,):
            raise ValueError(f"Expected {size} magnitudes, got {norms.shape[0] if norms.ndim else 0}")
        if np.any(norms <= 0):
            raise ValueError("Spin magnitudes must be positive")
        return cls(random_directions(size, rng) * norms[:, np.newaxis])

    @property
    def spins(self) -> np.ndarray:
        """Underlying ``(nsites, 3)`` array."""
        return self._spins

    def __len__(self) -> int:
        return self._spins.shape[0]

    def __getitem__(self, index: int) -> Spin:
        return Spin.from_array(self._spins[index])

    def __iter__(self):
        for row in self._spins:
            yield Spin.from_array(row)

    def copy(self) -> 'State':
        return State(self._spins)

    def with_spin(self, index: int, spin: Spin) -> 'State':
        """New state equal to this one except at ``index``."""
        state = self.copy()
        state._spins[index] = spin.as_array()
        return state

    def norms(self) -> np.ndarray:
        return np.linalg.norm(self._spins, axis=1)

    def mag(self) -> Tuple[float, float, float]:
        """Magnetization: vector sum of all spins."""
        mx, my, mz = self._spins.sum(axis=0)
        return float(mx), float(my), float(mz)

    def mag_len(self) -> float:
        """Length of the magnetization."""
        return float(np.linalg.norm(self._spins.sum(axis=0)))

    def __eq__(self, other) -> bool:
        if not isinstance(other, State):
            return NotImplemented
        return np.array_equal(self._spins, other._spins)

    __hash__ = None

    def __repr__(self) -> str:
        return f"State(sites={len(self)}, |M|={self.mag_len():.4f})"
