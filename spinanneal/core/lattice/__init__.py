"""
Lattice geometry module.

This module provides the site indexing scheme of periodic crystals, the
precomputed neighbour table and the preset bond templates. Lattices
represent ONLY geometric structure - no spin information.
"""

from .base import Site, Vertex, Lattice, LatticeBuilder
from .adjacency import Adjacency
from .locator import Locator
from .presets import (
    LatticePreset,
    available_presets,
    load_preset,
    load_vertices,
    create_lattice,
)

__all__ = [
    'Site',
    'Vertex',
    'Lattice',
    'LatticeBuilder',
    'Adjacency',
    'Locator',
    'LatticePreset',
    'available_presets',
    'load_preset',
    'load_vertices',
    'create_lattice',
]
