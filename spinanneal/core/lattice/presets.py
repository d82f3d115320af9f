"""
Preset bond templates for common magnetic lattices and materials.

The templates are data, not code: each preset is a JSON file in the
``data/`` directory next to this module with the keys

    name        : preset name
    description : one-line description
    natoms      : atoms per unit cell
    moments     : magnetic moment per atom type (optional)
    vertices    : list of {"src", "tgt", "delta", "coupling"}

Available presets:
- cubic: simple cubic, 6 nearest neighbours
- hcp: hexagonal close packed, 2 atoms per cell
- honeycomb: stacked honeycomb layers, 2 atoms per cell
- manganite: 27 atoms per cell, per-bond couplings
- magnetite: 24 atoms per cell, per-bond couplings
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import numpy as np

from .base import Lattice, Vertex

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / 'data'


@dataclass(frozen=True)
class LatticePreset:
    """
    Bond-template data of one material.

    Attributes
    ----------
    name : str
        Preset name
    natoms : int
        Atoms per unit cell
    vertices : Tuple[Vertex, ...]
        Bond templates
    moments : Tuple[float, ...], optional
        Magnetic moment per atom type
    description : str
        Free-form description
    """
    name: str
    natoms: int
    vertices: Tuple[Vertex, ...]
    moments: Optional[Tuple[float, ...]] = None
    description: str = ''

    @classmethod
    def from_dict(cls, data: Dict) -> 'LatticePreset':
        natoms = int(data['natoms'])
        moments = data.get('moments')
        if moments is not None and len(moments) != natoms:
            raise ValueError(
                f"Preset '{data.get('name')}' lists {len(moments)} moments "
                f"for {natoms} atoms"
            )
        return cls(
            name=str(data.get('name', '')),
            natoms=natoms,
            vertices=tuple(Vertex.from_dict(v) for v in data['vertices']),
            moments=None if moments is None else tuple(float(m) for m in moments),
            description=str(data.get('description', '')),
        )

    def lattice(self,
                shape: Tuple[int, int, int] = (10, 10, 10),
                pbc: Tuple[bool, bool, bool] = (True, True, True)) -> Lattice:
        """Lattice of the given shape built from this preset."""
        return Lattice(pbc, shape, self.natoms, self.vertices)

    def site_moments(self, lattice: Lattice) -> np.ndarray:
        """Per-site magnetic moments of a lattice built from this preset."""
        if self.moments is None:
            raise ValueError(f"Preset '{self.name}' defines no magnetic moments")
        return lattice.values_for_atoms(self.moments)


def available_presets() -> List[str]:
    """Names of the presets shipped with the package."""
    return sorted(path.stem for path in DATA_DIR.glob('*.json'))


def _preset_path(name_or_path: Union[str, Path]) -> Path:
    path = Path(name_or_path)
    if path.suffix == '.json' and path.exists():
        return path

    path = DATA_DIR / f"{name_or_path}.json"
    if not path.exists():
        available = ', '.join(available_presets())
        raise ValueError(f"Unknown lattice preset '{name_or_path}'. "
                         f"Available presets: {available}")
    return path


def load_preset(name_or_path: Union[str, Path]) -> LatticePreset:
    """
    Load a preset by name, or from a JSON file with the same layout.

    Examples
    --------
    >>> preset = load_preset('manganite')
    >>> preset.natoms
    27
    """
    path = _preset_path(name_or_path)
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    preset = LatticePreset.from_dict(data)
    logger.debug("Loaded preset '%s' (%d vertices) from %s",
                 preset.name, len(preset.vertices), path)
    return preset


def load_vertices(name_or_path: Union[str, Path]) -> List[Vertex]:
    """Vertex list of a preset."""
    return list(load_preset(name_or_path).vertices)


def create_lattice(preset: str,
                   shape: Tuple[int, int, int] = (10, 10, 10),
                   pbc: Tuple[bool, bool, bool] = (True, True, True)) -> Lattice:
    """
    Factory function to create lattices from preset names.

    Parameters
    ----------
    preset : str
        Preset name (see :func:`available_presets`) or path to a JSON file
    shape : Tuple[int, int, int]
        Number of cells per axis
    pbc : Tuple[bool, bool, bool]
        Periodic flag per axis

    Raises
    ------
    ValueError
        If the preset is not recognized
    """
    return load_preset(preset).lattice(shape=shape, pbc=pbc)
