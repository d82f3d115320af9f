"""
Unit tests for Adjacency.

Tests the flattened neighbour table:
- Offsets and sizes
- Neighbour ordering and couplings
- Out-of-range lookups
"""

import numpy as np
import pytest
from spinanneal.core.lattice import Vertex, Lattice, LatticeBuilder, Adjacency, create_lattice, load_vertices


class TestAdjacencySize:
    """Test table sizes."""

    def test_manganite_reference_size(self):
        """Test the 4x4x4 periodic manganite table size."""
        lattice = (LatticeBuilder()
                   .pbc((True, True, True))
                   .shape((4, 4, 4))
                   .natoms(27)
                   .vertices(load_vertices('manganite'))
                   .finalize())
        adjacency = Adjacency(lattice)

        assert len(adjacency.offsets) == 1729
        assert len(adjacency.neighbors) == 10368
        assert len(adjacency.couplings) == 10368

    def test_periodic_cubic_size(self):
        """Test that every periodic cubic site has 6 neighbours."""
        adjacency = Adjacency(create_lattice('cubic', shape=(4, 4, 4)))

        assert adjacency.nsites == 64
        assert adjacency.nbonds == 384
        assert np.all(np.diff(adjacency.offsets) == 6)

    def test_open_cubic_size(self):
        """Test bond count of an open 3x3x3 cubic lattice."""
        lattice = create_lattice('cubic', shape=(3, 3, 3), pbc=(False, False, False))
        adjacency = Adjacency(lattice)

        # 3 axes * 2 bonds per line * 9 lines, counted from both ends
        assert adjacency.nbonds == 108
        assert len(adjacency.neighbors_of(0)) == 3
        # Centre site
        assert len(adjacency.neighbors_of(13)) == 6


class TestAdjacencyContent:
    """Test neighbour indices and couplings."""

    def test_offsets_non_decreasing(self):
        """Test offsets start at zero and never decrease."""
        lattice = create_lattice('hcp', shape=(3, 3, 2), pbc=(True, True, False))
        adjacency = Adjacency(lattice)

        assert adjacency.offsets[0] == 0
        assert np.all(np.diff(adjacency.offsets) >= 0)
        assert adjacency.offsets[-1] == adjacency.nbonds

    def test_neighbor_order_follows_vertices(self):
        """Test neighbour order on a 4x1x1 periodic cubic chain."""
        adjacency = Adjacency(create_lattice('cubic', shape=(4, 1, 1)))

        assert list(adjacency.neighbors_of(0)) == [1, 0, 0, 3, 0, 0]
        assert list(adjacency.neighbors_of(3)) == [0, 3, 3, 2, 3, 3]

    def test_missing_coupling_defaults_to_zero(self):
        """Test that vertices without coupling give 0.0."""
        adjacency = Adjacency(create_lattice('cubic', shape=(2, 2, 2)))
        assert np.all(adjacency.couplings == 0.0)

    def test_couplings_follow_vertices(self):
        """Test per-bond couplings are carried over."""
        vertices = [
            Vertex(0, 1, (0, 0, 0), 2.0),
            Vertex(1, 0, (0, 0, 0), 2.0),
            Vertex(0, 0, (1, 0, 0), None),
        ]
        lattice = Lattice((False, False, False), (2, 1, 1), 2, vertices)
        adjacency = Adjacency(lattice)

        assert list(adjacency.neighbors_of(0)) == [1, 2]
        assert np.allclose(adjacency.couplings_of(0), [2.0, 0.0])
        # Second cell has no +x neighbour on an open axis
        assert list(adjacency.neighbors_of(2)) == [3]

    def test_table_is_read_only(self):
        """Test that the arrays cannot be modified."""
        adjacency = Adjacency(create_lattice('cubic', shape=(2, 2, 2)))

        with pytest.raises(ValueError):
            adjacency.neighbors[0] = 5


class TestAdjacencyLookup:
    """Test bound-checked lookups."""

    def test_lookup_past_end_is_none(self):
        """Test that indices at or past nsites give None."""
        adjacency = Adjacency(create_lattice('cubic', shape=(2, 2, 2)))

        assert adjacency.neighbors_of(8) is None
        assert adjacency.couplings_of(8) is None
        assert adjacency.neighbors_of(100) is None

    def test_negative_lookup_is_none(self):
        """Test that negative indices give None."""
        adjacency = Adjacency(create_lattice('cubic', shape=(2, 2, 2)))
        assert adjacency.neighbors_of(-1) is None

    def test_repr(self):
        """Test __repr__ output."""
        adjacency = Adjacency(create_lattice('cubic', shape=(2, 2, 2)))
        assert repr(adjacency) == "Adjacency(sites=8, bonds=48)"


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
