"""
Unit tests for SpinSystem.
"""

import numpy as np
import pytest
from spinanneal.core import (
    Lattice,
    Adjacency,
    Vertex,
    SpinSystem,
    Hamiltonian,
    ExchangeComponent,
    CouplingExchangeComponent,
    ZAxisAnisotropy,
    create_lattice,
)


class TestSpinSystemCreation:
    """Test construction."""

    def test_from_interaction_list(self):
        """Test building the Hamiltonian from term descriptions."""
        lattice = create_lattice('cubic', shape=(3, 3, 3))
        system = SpinSystem(lattice, [{'kind': 'exchange', 'exchange': 1.0},
                                      {'kind': 'z_anisotropy', 'strength': 0.1}])

        assert system.nsites == 27
        assert system.adjacency.nbonds == 162
        assert len(system.hamiltonian) == 2
        assert np.allclose(system.site_moments, 1.0)

    def test_from_component(self):
        """Test passing a ready energy component."""
        lattice = create_lattice('cubic', shape=(2, 2, 2))
        hamiltonian = Hamiltonian([ZAxisAnisotropy(1.0)])
        system = SpinSystem(lattice, hamiltonian)

        assert system.hamiltonian is hamiltonian
        assert np.isclose(system.total_energy(system.initial_state('up')), -8.0)

    def test_from_preset_with_couplings(self):
        """Test that coupled presets default to per-bond exchange."""
        system = SpinSystem.from_preset('magnetite', shape=(1, 1, 1))

        assert isinstance(system.hamiltonian.terms[0], CouplingExchangeComponent)
        assert system.natoms == 24
        assert set(system.site_moments) == {5.0, 6.0}
        assert system.metadata['preset'] == 'magnetite'

    def test_from_preset_without_couplings(self):
        """Test that uncoupled presets default to unit exchange."""
        system = SpinSystem.from_preset('honeycomb', shape=(3, 3, 2))
        term = system.hamiltonian.terms[0]

        assert isinstance(term, ExchangeComponent)
        assert term.exchange == 1.0

    def test_preset_without_moments_option(self):
        """Test ignoring preset moments."""
        system = SpinSystem.from_preset('manganite', shape=(1, 1, 1), use_moments=False)
        assert np.allclose(system.site_moments, 1.0)


class TestSpinSystemValidation:
    """Test construction-time invariants."""

    def test_lattice_type(self):
        """Test that a Lattice is required."""
        with pytest.raises(TypeError, match="Lattice"):
            SpinSystem("cubic", [])

    def test_missing_atom_moment_raises(self):
        """Test that every atom type needs a moment."""
        lattice = Lattice((True, True, True), (2, 2, 2), 3,
                          [Vertex(0, 1, (0, 0, 0)), Vertex(1, 0, (0, 0, 0))])
        with pytest.raises(ValueError, match="No value assigned"):
            SpinSystem(lattice, [], moments={0: 1.0, 1: 2.0})

    def test_moments_of_other_material_raise(self):
        """Test that a moment table for a different cell is rejected."""
        lattice = create_lattice('magnetite', shape=(1, 1, 1))
        manganite_moments = SpinSystem.from_preset('manganite', shape=(1, 1, 1)).moments

        with pytest.raises(ValueError, match="Expected 24 per-atom values, got 27"):
            SpinSystem(lattice, [], moments=manganite_moments)

    def test_moment_for_unknown_atom_raises(self):
        """Test that moment mappings only name atoms of the cell."""
        lattice = create_lattice('cubic', shape=(2, 2, 2))
        with pytest.raises(ValueError, match="outside the lattice"):
            SpinSystem(lattice, [], moments={0: 1.0, 3: 2.0})

    def test_component_for_other_lattice_raises(self):
        """Test that a ready component must match the lattice size."""
        other = Adjacency(create_lattice('cubic', shape=(3, 3, 3)))
        lattice = create_lattice('cubic', shape=(2, 2, 2))

        with pytest.raises(ValueError, match="built for 27 sites, lattice has 8"):
            SpinSystem(lattice, ExchangeComponent(other, 1.0))
        with pytest.raises(ValueError, match="built for 27 sites, lattice has 8"):
            SpinSystem(lattice, Hamiltonian([ZAxisAnisotropy(0.1), ExchangeComponent(other, 1.0)]))

    def test_non_positive_moment_raises(self):
        """Test that moments must be positive."""
        lattice = create_lattice('cubic', shape=(2, 2, 2))
        with pytest.raises(ValueError, match="must be positive"):
            SpinSystem(lattice, [], moments=[0.0])

    def test_unknown_initial_state_raises(self):
        """Test initial state names."""
        system = SpinSystem(create_lattice('cubic', shape=(2, 2, 2)), [])
        with pytest.raises(ValueError, match="Unknown initial state"):
            system.initial_state('neel')


class TestSpinSystemStates:
    """Test initial states."""

    def test_random_with_norms(self):
        """Test that random states carry the site moments."""
        system = SpinSystem.from_preset('magnetite', shape=(2, 1, 1))
        state = system.initial_state('random_with_norms', rng=np.random.default_rng(0))

        assert len(state) == 48
        assert np.allclose(state.norms(), system.site_moments)

    def test_up_and_random(self):
        """Test unit initial states."""
        system = SpinSystem(create_lattice('cubic', shape=(2, 2, 2)), [])

        assert system.initial_state('up').mag_len() == 8.0
        assert np.allclose(system.initial_state('random').norms(), 1.0)


class TestSpinSystemRepr:
    """Test serialization and string forms."""

    def test_to_dict(self):
        """Test dictionary snapshot."""
        system = SpinSystem.from_preset('cubic', shape=(2, 3, 4))
        data = system.to_dict()

        assert data['lattice']['shape'] == [2, 3, 4]
        assert len(data['lattice']['vertices']) == 6
        assert data['interactions'] == [{'kind': 'exchange', 'exchange': 1.0}]

    def test_str(self):
        """Test detailed string form."""
        system = SpinSystem.from_preset('cubic', shape=(2, 2, 2))
        text = str(system)

        assert "Spin System" in text
        assert "ExchangeComponent" in text


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
