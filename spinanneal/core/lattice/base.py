"""
Lattice geometry and site indexing.

This module defines how sites of a crystal are addressed. A site is a pair
(unit cell, atom type); the lattice decides whether a site exists, wraps it
into the first image along periodic axes and flattens it into a dense index.
Lattices are purely geometric objects - they contain NO spin information.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Mapping, NamedTuple, Optional, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)


class Site(NamedTuple):
    """
    A location in the lattice.

    Attributes
    ----------
    cell : Tuple[int, int, int]
        Which unit cell the site is in (cx, cy, cz)
    atom : int
        Which atom of the unit cell the site is
    """
    cell: Tuple[int, int, int]
    atom: int


@dataclass(frozen=True)
class Vertex:
    """
    Bond template anchored at one atom type of the unit cell.

    A vertex goes from atom ``src`` of some cell to atom ``tgt`` of the cell
    displaced by ``delta``. Vertices are directed: a symmetric bond needs
    two opposite entries.

    Attributes
    ----------
    src : int
        Source atom type
    tgt : int
        Target atom type
    delta : Tuple[int, int, int]
        Cell offset from the source cell to the target cell
    coupling : float, optional
        Exchange coupling of the bond (None when the bond carries none)
    """
    src: int
    tgt: int
    delta: Tuple[int, int, int]
    coupling: Optional[float] = None

    def target_for(self, site: Site) -> Optional[Site]:
        """
        Candidate target of this vertex for a given site.

        Returns None when the vertex is not anchored at ``site.atom``. The
        candidate is not checked against the lattice.
        """
        if site.atom != self.src:
            return None
        cx, cy, cz = site.cell
        dx, dy, dz = self.delta
        return Site((cx + dx, cy + dy, cz + dz), self.tgt)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Vertex':
        """Build a vertex from its structured-data form."""
        delta = tuple(int(d) for d in data['delta'])
        if len(delta) != 3:
            raise ValueError(f"Vertex delta must have 3 components, got {data['delta']}")
        coupling = data.get('coupling')
        return cls(
            src=int(data['src']),
            tgt=int(data['tgt']),
            delta=delta,
            coupling=None if coupling is None else float(coupling),
        )

    def to_dict(self) -> Dict:
        return {
            'src': self.src,
            'tgt': self.tgt,
            'delta': list(self.delta),
            'coupling': self.coupling,
        }


class Lattice:
    """
    Finite lattice of unit cells with per-axis boundary conditions.

    Every valid site maps to exactly one integer in ``[0, nsites)``. The
    flattening is row-major with the atom index fastest, then x, then y,
    then z:

        index = natoms * (sx * (sy * cz + cy) + cx) + atom

    Parameters
    ----------
    pbc : Tuple[bool, bool, bool]
        Periodic flag per axis
    shape : Tuple[int, int, int]
        Number of cells per axis
    natoms : int
        Number of atoms per unit cell
    vertices : Sequence[Vertex]
        Bond templates

    Examples
    --------
    >>> lattice = Lattice((True, True, False), (10, 10, 10), 1, [])
    >>> lattice.inside(Site((10, -1, 9), 0))
    Site(cell=(0, 9, 9), atom=0)
    >>> lattice.inside(Site((10, 10, 10), 0)) is None
    True
    """

    def __init__(self,
                 pbc: Tuple[bool, bool, bool],
                 shape: Tuple[int, int, int],
                 natoms: int,
                 vertices: Sequence[Vertex] = ()):
        if len(pbc) != 3 or len(shape) != 3:
            raise ValueError("pbc and shape must both have 3 components")

        if any(int(s) < 1 for s in shape):
            raise ValueError(f"Lattice shape must be positive on every axis, got {shape}")

        if natoms < 1:
            raise ValueError("natoms must be at least 1")

        for vertex in vertices:
            if not isinstance(vertex, Vertex):
                raise TypeError("vertices must be Vertex instances")
            if not (0 <= vertex.src < natoms and 0 <= vertex.tgt < natoms):
                raise ValueError(
                    f"Vertex {vertex} references an atom outside [0, {natoms})"
                )

        self.pbc = tuple(bool(p) for p in pbc)
        self.shape = tuple(int(s) for s in shape)
        self.natoms = int(natoms)
        self.vertices = tuple(vertices)

    def inside(self, site: Site) -> Optional[Site]:
        """
        Canonical form of a site in the first image of the lattice.

        Parameters
        ----------
        site : Site
            Any site, possibly outside the lattice

        Returns
        -------
        site : Site or None
            The site with its cell wrapped into ``[0, shape)`` along periodic
            axes, or None when the atom id is out of range or a coordinate
            falls outside a non-periodic axis.
        """
        if not (0 <= site.atom < self.natoms):
            return None

        cell = []
        for coord, size, periodic in zip(site.cell, self.shape, self.pbc):
            if not periodic and (coord < 0 or coord >= size):
                return None
            # Python's % floors, so negative coordinates wrap correctly
            cell.append(coord % size)

        return Site(tuple(cell), site.atom)

    def index(self, site: Site) -> Optional[int]:
        """Dense index of a site, or None when the site is not inside."""
        site = self.inside(site)
        if site is None:
            return None
        sx, sy, _ = self.shape
        cx, cy, cz = site.cell
        return self.natoms * (sx * (sy * cz + cy) + cx) + site.atom

    def site_at(self, index: int) -> Optional[Site]:
        """Inverse of :meth:`index`, None for indices outside ``[0, nsites)``."""
        if not (0 <= index < self.nsites()):
            return None
        sx, sy, _ = self.shape
        cell_index, atom = divmod(index, self.natoms)
        cx = cell_index % sx
        cy = (cell_index // sx) % sy
        cz = cell_index // sx // sy
        return Site((cx, cy, cz), atom)

    def tgts(self, site: Site) -> Optional[List[Tuple[Site, Optional[float]]]]:
        """
        Neighbours of a site according to the vertex list.

        Returns
        -------
        targets : List[Tuple[Site, Optional[float]]] or None
            Canonical target sites paired with the vertex coupling, in
            vertex-list order. Targets falling outside the lattice are left
            out. None when ``site`` itself is not inside.
        """
        site = self.inside(site)
        if site is None:
            return None

        targets = []
        for vertex in self.vertices:
            candidate = vertex.target_for(site)
            if candidate is None:
                continue
            candidate = self.inside(candidate)
            if candidate is None:
                continue
            targets.append((candidate, vertex.coupling))
        return targets

    def sites(self) -> Iterator[Site]:
        """
        Enumerate every site in index order.

        Each call returns a new generator, so the enumeration can be
        restarted any number of times.
        """
        sx, sy, sz = self.shape
        for cz in range(sz):
            for cy in range(sy):
                for cx in range(sx):
                    for atom in range(self.natoms):
                        yield Site((cx, cy, cz), atom)

    def nsites(self) -> int:
        sx, sy, sz = self.shape
        return self.natoms * sx * sy * sz

    def map_sites(self, op: Callable[[Site], Any]) -> List[Any]:
        """Apply ``op`` to every site, in index order."""
        return [op(site) for site in self.sites()]

    def values_for_atoms(self, per_atom: Mapping[int, float]) -> np.ndarray:
        """
        Per-site array from a per-atom-type table.

        Parameters
        ----------
        per_atom : Mapping[int, float] or Sequence[float]
            Value for each atom type (e.g., magnetic moments)

        Returns
        -------
        values : np.ndarray, shape (nsites,)

        Raises
        ------
        ValueError
            If an atom type of the lattice has no entry in ``per_atom``, or
            ``per_atom`` names atom types the lattice does not have. Both
            are broken lattice descriptions, never runtime conditions.
        """
        if not isinstance(per_atom, Mapping):
            per_atom = list(per_atom)
            if len(per_atom) != self.natoms:
                raise ValueError(
                    f"Expected {self.natoms} per-atom values, got {len(per_atom)}"
                )
            per_atom = dict(enumerate(per_atom))

        unknown = sorted(set(per_atom) - set(range(self.natoms)))
        if unknown:
            raise ValueError(
                f"Atom types {unknown} are outside the lattice "
                f"(lattice has {self.natoms} atoms per cell)"
            )

        missing = [atom for atom in range(self.natoms) if atom not in per_atom]
        if missing:
            raise ValueError(
                f"No value assigned to atom types {missing} "
                f"(lattice has {self.natoms} atoms per cell)"
            )

        table = np.array([float(per_atom[atom]) for atom in range(self.natoms)])
        return np.tile(table, self.nsites() // self.natoms)

    def __repr__(self) -> str:
        return (f"Lattice(pbc={self.pbc}, shape={self.shape}, "
                f"natoms={self.natoms}, vertices={len(self.vertices)})")


class LatticeBuilder:
    """
    Small builder for lattices.

    Defaults: fully periodic, 10x10x10 cells, one atom per cell, no vertices.

    Examples
    --------
    >>> lattice = (LatticeBuilder()
    ...            .pbc((True, True, False))
    ...            .shape((4, 4, 4))
    ...            .finalize())
    """

    def __init__(self):
        self._pbc = (True, True, True)
        self._shape = (10, 10, 10)
        self._natoms = 1
        self._vertices: List[Vertex] = []

    def pbc(self, pbc: Tuple[bool, bool, bool]) -> 'LatticeBuilder':
        self._pbc = tuple(pbc)
        return self

    def shape(self, shape: Tuple[int, int, int]) -> 'LatticeBuilder':
        self._shape = tuple(shape)
        return self

    def natoms(self, natoms: int) -> 'LatticeBuilder':
        self._natoms = natoms
        return self

    def vertices(self, vertices: Sequence[Vertex]) -> 'LatticeBuilder':
        self._vertices = list(vertices)
        return self

    def finalize(self) -> Lattice:
        lattice = Lattice(self._pbc, self._shape, self._natoms, self._vertices)
        logger.debug("Built %r", lattice)
        return lattice
