"""
Flattened neighbour table.

The adjacency of a lattice is stored CSR-style: the neighbours of site ``i``
live in ``neighbors[offsets[i]:offsets[i + 1]]`` and their couplings in the
matching slice of ``couplings``. The table is built once and only read
afterwards, by every energy evaluation.
"""

import logging
from typing import Optional

import numpy as np

from .base import Lattice

logger = logging.getLogger(__name__)


class Adjacency:
    """
    Immutable neighbour and coupling table of a lattice.

    Parameters
    ----------
    lattice : Lattice
        Lattice whose vertices define the bonds

    Attributes
    ----------
    offsets : np.ndarray, shape (nsites + 1,)
        Non-decreasing running bond counts, starting at 0
    neighbors : np.ndarray, shape (nbonds,)
        Target site index of every bond
    couplings : np.ndarray, shape (nbonds,)
        Coupling of every bond (0.0 where the vertex carries none)

    Notes
    -----
    Building costs O(total bond count). Lookups past the last site return
    None rather than raising, so missing edges are decided by the lattice
    boundary conditions and never by this table.
    """

    def __init__(self, lattice: Lattice):
        offsets = [0]
        neighbors = []
        couplings = []

        for site in lattice.sites():
            targets = lattice.tgts(site)
            if targets is None:
                raise RuntimeError(f"Enumerated site {site} is not inside {lattice}")

            for target, coupling in targets:
                index = lattice.index(target)
                if index is None:
                    raise RuntimeError(f"Accepted target {target} of {site} has no index")
                neighbors.append(index)
                couplings.append(0.0 if coupling is None else coupling)

            offsets.append(len(neighbors))

        self.offsets = self._frozen(np.array(offsets, dtype=np.intp))
        self.neighbors = self._frozen(np.array(neighbors, dtype=np.intp))
        self.couplings = self._frozen(np.array(couplings, dtype=np.float64))

        logger.debug("Adjacency built: %d sites, %d bonds", self.nsites, self.nbonds)

    @staticmethod
    def _frozen(array: np.ndarray) -> np.ndarray:
        array.flags.writeable = False
        return array

    @property
    def nsites(self) -> int:
        return len(self.offsets) - 1

    @property
    def nbonds(self) -> int:
        return len(self.neighbors)

    def _bounds(self, item: int) -> Optional[slice]:
        if item < 0 or item >= len(self.offsets) - 1:
            return None
        return slice(self.offsets[item], self.offsets[item + 1])

    def neighbors_of(self, item: int) -> Optional[np.ndarray]:
        """Neighbour indices of site ``item``, None past the last site."""
        bounds = self._bounds(item)
        if bounds is None:
            return None
        return self.neighbors[bounds]

    def couplings_of(self, item: int) -> Optional[np.ndarray]:
        """Bond couplings of site ``item``, None past the last site."""
        bounds = self._bounds(item)
        if bounds is None:
            return None
        return self.couplings[bounds]

    def __len__(self) -> int:
        return self.nsites

    def __repr__(self) -> str:
        return f"Adjacency(sites={self.nsites}, bonds={self.nbonds})"
