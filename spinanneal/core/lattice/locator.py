"""
Real-space positions of lattice sites.
"""

from typing import Optional, Sequence

import numpy as np

from .base import Lattice, Site


class Locator:
    """
    Maps sites to Cartesian coordinates.

    Parameters
    ----------
    a1, a2, a3 : array_like, shape (3,)
        Primitive lattice vectors
    basis : Sequence[array_like]
        Position of every atom of the unit cell, in real space

    Notes
    -----
    A site in cell (cx, cy, cz) sits at

        r = cx * a1 + cy * a2 + cz * a3 + basis[atom]

    The cell is used as given, so call ``Lattice.inside`` first when the
    first image is wanted.
    """

    def __init__(self, a1, a2, a3, basis: Sequence):
        self.vectors = np.array([a1, a2, a3], dtype=np.float64)
        if self.vectors.shape != (3, 3):
            raise ValueError("Primitive vectors must be 3-component vectors")

        self.basis = np.array(basis, dtype=np.float64).reshape(-1, 3)

    @classmethod
    def for_cubic(cls, a: float = 1.0) -> 'Locator':
        """Simple cubic lattice with a single atom at the cell origin."""
        if a <= 0:
            raise ValueError("Lattice constant must be positive")
        return cls([a, 0.0, 0.0], [0.0, a, 0.0], [0.0, 0.0, a], [[0.0, 0.0, 0.0]])

    def locate(self, site: Site) -> Optional[np.ndarray]:
        """Position of a site, None when its atom has no basis position."""
        if not (0 <= site.atom < len(self.basis)):
            return None
        return np.asarray(site.cell, dtype=np.float64) @ self.vectors + self.basis[site.atom]

    def positions(self, lattice: Lattice) -> np.ndarray:
        """
        Positions of every site of a lattice.

        Returns
        -------
        positions : np.ndarray, shape (nsites, 3)
            Rows in lattice index order.

        Raises
        ------
        ValueError
            If the lattice has more atoms per cell than the basis.
        """
        if lattice.natoms > len(self.basis):
            raise ValueError(
                f"Basis has {len(self.basis)} atoms, lattice needs {lattice.natoms}"
            )
        return np.array([self.locate(site) for site in lattice.sites()])

    def __repr__(self) -> str:
        return f"Locator(basis_atoms={len(self.basis)})"
