"""
SpinSystem: Complete representation of a simulated magnet.

This module defines the SpinSystem class which combines:
- Lattice (geometry and site indexing)
- Adjacency (neighbour table, built once)
- Hamiltonian (energy components)
- Magnetic moments (spin magnitude of every site)

This is the main object handed to the Monte Carlo driver.
"""

import logging
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from .lattice import Lattice, Adjacency, load_preset
from .hamiltonian import AbstractEnergyComponent, Hamiltonian, build_hamiltonian
from .state import State

logger = logging.getLogger(__name__)

INITIAL_STATES = ('up', 'random', 'random_with_norms')


class SpinSystem:
    """
    Complete physical representation of a classical spin lattice.

    Parameters
    ----------
    lattice : Lattice
        Crystallographic lattice defining the sites and bonds
    interactions : Iterable[Dict] or AbstractEnergyComponent
        Either a ready energy component, or a list of term descriptions
        built against this system's adjacency:
            [
                {'kind': 'coupling_exchange'},
                {'kind': 'exchange', 'exchange': 1.0},
                {'kind': 'z_anisotropy', 'strength': 0.1},
                {'kind': 'zeeman', 'field': [0, 0, 0.5]},
            ]
    moments : Sequence[float] or Mapping[int, float], optional
        Magnetic moment of every atom type. Every atom type of the lattice
        must have one. Default: unit moments.
    metadata : Dict, optional
        Additional information (material, description, etc.)

    Attributes
    ----------
    lattice : Lattice
    adjacency : Adjacency
    hamiltonian : AbstractEnergyComponent
    site_moments : np.ndarray, shape (nsites,)

    Examples
    --------
    >>> preset = load_preset('cubic')
    >>> lattice = preset.lattice(shape=(8, 8, 8))
    >>> system = SpinSystem(lattice, [{'kind': 'exchange', 'exchange': 1.0}])
    >>> state = system.initial_state('random', rng=np.random.default_rng(0))
    >>> system.total_energy(state)

    Load from YAML configuration:

    >>> system = SpinSystem.from_config('magnetite.yaml')
    """

    def __init__(self,
                 lattice: Lattice,
                 interactions: Union[Iterable[Dict], AbstractEnergyComponent],
                 moments: Optional[Union[Sequence[float], Mapping[int, float]]] = None,
                 metadata: Optional[Dict] = None):
        # Validation
        if not isinstance(lattice, Lattice):
            raise TypeError("lattice must be a Lattice instance")

        self.lattice = lattice
        self.adjacency = Adjacency(lattice)

        if isinstance(interactions, AbstractEnergyComponent):
            self._check_component(interactions, lattice.nsites())
            self.hamiltonian = interactions
            self.interactions = None
        else:
            self.interactions = [dict(term) for term in interactions]
            self.hamiltonian = build_hamiltonian(self.interactions, self.adjacency)

        if moments is None:
            self.moments = None
            self.site_moments = np.ones(lattice.nsites())
        else:
            self.moments = moments
            self.site_moments = lattice.values_for_atoms(moments)
            if np.any(self.site_moments <= 0):
                raise ValueError("Magnetic moments must be positive")

        self.metadata = metadata or {}

        logger.info("Spin system ready: %d sites, %d bonds",
                    self.nsites, self.adjacency.nbonds)

    @staticmethod
    def _check_component(component: AbstractEnergyComponent, nsites: int) -> None:
        """Bond-based terms must share the lattice's site count."""
        terms = component.terms if isinstance(component, Hamiltonian) else [component]
        for term in terms:
            adjacency = getattr(term, 'adjacency', None)
            if adjacency is not None and adjacency.nsites != nsites:
                raise ValueError(
                    f"{term!r} was built for {adjacency.nsites} sites, "
                    f"lattice has {nsites}"
                )

    @classmethod
    def from_preset(cls,
                    preset: str,
                    shape: Tuple[int, int, int] = (10, 10, 10),
                    pbc: Tuple[bool, bool, bool] = (True, True, True),
                    interactions: Optional[Iterable[Dict]] = None,
                    use_moments: bool = True) -> 'SpinSystem':
        """
        Build a system from a bundled lattice preset.

        Without explicit interactions, presets that carry couplings get a
        per-bond exchange and the others a unit uniform exchange.
        """
        data = load_preset(preset)
        lattice = data.lattice(shape=shape, pbc=pbc)

        if interactions is None:
            if any(v.coupling is not None for v in data.vertices):
                interactions = [{'kind': 'coupling_exchange'}]
            else:
                interactions = [{'kind': 'exchange', 'exchange': 1.0}]

        moments = data.moments if use_moments else None
        return cls(lattice, interactions, moments=moments,
                   metadata={'preset': data.name, 'description': data.description})

    @classmethod
    def from_config(cls, config_path: str) -> 'SpinSystem':
        """
        Load system from YAML configuration file.

        See :func:`spinanneal.io.config_loader.load_config` for the format.
        """
        from ..io.config_loader import load_config
        return load_config(config_path).build_system()

    @property
    def nsites(self) -> int:
        return self.lattice.nsites()

    @property
    def natoms(self) -> int:
        return self.lattice.natoms

    def initial_state(self,
                      kind: str = 'random',
                      rng: Optional[np.random.Generator] = None) -> State:
        """
        Starting configuration.

        Parameters
        ----------
        kind : str
            'up': every spin along +z with unit length
            'random': uniformly random unit spins
            'random_with_norms': random directions at the site moments
        rng : np.random.Generator, optional
            Random source
        """
        if kind == 'up':
            return State.up(self.nsites)
        if kind == 'random':
            return State.random(self.nsites, rng)
        if kind == 'random_with_norms':
            return State.random_with_norms(self.nsites, self.site_moments, rng)

        raise ValueError(f"Unknown initial state '{kind}'. "
                         f"Available: {', '.join(INITIAL_STATES)}")

    def energy(self, state: State, index: int) -> float:
        return self.hamiltonian.energy(state, index)

    def total_energy(self, state: State) -> float:
        return self.hamiltonian.total_energy(state)

    def to_dict(self) -> Dict:
        """
        Serialize to dictionary.

        Returns
        -------
        data : Dict
            Snapshot of the system parameters, suitable for saving with
            results for reproducibility
        """
        moments = self.moments
        if isinstance(moments, Mapping):
            moments = {int(k): float(v) for k, v in moments.items()}
        elif moments is not None:
            moments = [float(m) for m in moments]

        return {
            'lattice': {
                'pbc': list(self.lattice.pbc),
                'shape': list(self.lattice.shape),
                'natoms': self.natoms,
                'vertices': [v.to_dict() for v in self.lattice.vertices],
            },
            'interactions': self.interactions if self.interactions is not None
            else repr(self.hamiltonian),
            'moments': moments,
            'metadata': self.metadata,
        }

    def __repr__(self) -> str:
        return (f"SpinSystem(sites={self.nsites}, "
                f"bonds={self.adjacency.nbonds}, "
                f"hamiltonian={self.hamiltonian!r})")

    def __str__(self) -> str:
        """Detailed string representation."""
        lines = [
            "="*50,
            "Spin System",
            "="*50,
            f"Lattice: {self.lattice}",
            f"Sites: {self.nsites}",
            f"Bonds: {self.adjacency.nbonds}",
            f"Moments: min {self.site_moments.min():g}, max {self.site_moments.max():g}",
            "",
            "Hamiltonian:",
        ]

        terms = self.hamiltonian.terms if isinstance(self.hamiltonian, Hamiltonian) \
            else [self.hamiltonian]
        for term in terms:
            lines.append(f"  {term!r}")

        if self.metadata:
            lines.append("")
            lines.append("Metadata:")
            for key, value in self.metadata.items():
                lines.append(f"  {key}: {value}")

        lines.append("="*50)

        return "\n".join(lines)
