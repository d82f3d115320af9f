"""
Unit tests for the Metropolis integrator.

Tests:
- Acceptance probability limits
- Temperature handling and cooling
- Sweep semantics (purity, magnitudes, local energies)
- Relaxation towards order
"""

import math

import numpy as np
import pytest
from spinanneal.core import (
    AbstractEnergyComponent,
    Adjacency,
    ExchangeComponent,
    Hamiltonian,
    State,
    create_lattice,
)
from spinanneal.monte_carlo import MetropolisIntegrator, acceptance_probability


@pytest.fixture
def ferromagnet():
    adjacency = Adjacency(create_lattice('cubic', shape=(4, 4, 4)))
    return ExchangeComponent(adjacency, 1.0)


class TestAcceptanceProbability:
    """Test the Metropolis criterion."""

    def test_downhill_always_accepted(self):
        """Test probability 1 for non-positive energy changes."""
        assert acceptance_probability(0.0, 1.0) == 1.0
        assert acceptance_probability(-3.0, 0.01) == 1.0
        assert acceptance_probability(-3.0, 0.0) == 1.0

    def test_uphill_boltzmann_factor(self):
        """Test exp(-delta/T) for positive changes."""
        for delta, temperature in [(1.0, 1.0), (0.5, 2.0), (3.0, 10.0)]:
            p = acceptance_probability(delta, temperature)
            assert np.isclose(p, math.exp(-delta / temperature))
            assert 0.0 < p < 1.0

    def test_low_temperature_limit(self):
        """Test that uphill moves freeze out as T -> 0."""
        probabilities = [acceptance_probability(1.0, t) for t in [1.0, 0.1, 0.01, 0.001]]

        assert all(a > b for a, b in zip(probabilities, probabilities[1:]))
        assert probabilities[-1] < 1e-100

    def test_high_temperature_limit(self):
        """Test that every move is accepted as T -> infinity."""
        assert acceptance_probability(1.0, 1e12) > 1.0 - 1e-11

    def test_non_positive_temperature(self):
        """Test that uphill moves are rejected at zero temperature."""
        assert acceptance_probability(1.0, 0.0) == 0.0
        assert acceptance_probability(1.0, -5.0) == 0.0


class TestTemperature:
    """Test temperature state."""

    def test_initial_temperature(self):
        """Test temp() returns the constructor value."""
        assert MetropolisIntegrator(250.0).temp() == 250.0

    def test_cool(self):
        """Test that cooling lowers the temperature by the step."""
        integrator = MetropolisIntegrator(250.0)
        integrator.cool(10.0)
        assert integrator.temp() == 240.0

    def test_cooling_terminates(self):
        """Test that repeated cooling crosses a floor in a computable number of steps."""
        integrator = MetropolisIntegrator(250.0)
        steps = 0
        while integrator.temp() >= 0.1:
            integrator.cool(10.0)
            steps += 1

        assert steps == math.floor((250.0 - 0.1) / 10.0) + 1

    def test_non_positive_temperature_raises(self):
        """Test that integrators start at a positive temperature."""
        with pytest.raises(ValueError, match="Temperature must be positive"):
            MetropolisIntegrator(0.0)

    def test_non_positive_cooling_raises(self):
        """Test that cooling never raises the temperature."""
        integrator = MetropolisIntegrator(1.0)
        with pytest.raises(ValueError, match="Cooling step must be positive"):
            integrator.cool(0.0)
        with pytest.raises(ValueError, match="Cooling step must be positive"):
            integrator.cool(-1.0)


class TestStep:
    """Test single sweeps."""

    def test_input_state_untouched(self, ferromagnet):
        """Test that a sweep returns a new state and leaves its input alone."""
        state = State.random(64, np.random.default_rng(0))
        before = state.spins.copy()

        integrator = MetropolisIntegrator(5.0, rng=np.random.default_rng(1))
        new_state = integrator.step(ferromagnet, state)

        assert np.array_equal(state.spins, before)
        assert new_state is not state
        assert not np.shares_memory(new_state.spins, state.spins)

    def test_magnitudes_preserved(self, ferromagnet):
        """Test that proposals keep each site's magnitude."""
        norms = np.linspace(0.5, 3.0, 64)
        state = State.random_with_norms(64, norms, np.random.default_rng(2))

        integrator = MetropolisIntegrator(2.0, rng=np.random.default_rng(3))
        for _ in range(5):
            state = integrator.step(ferromagnet, state)

        assert np.allclose(state.norms(), norms)

    def test_one_proposal_per_site(self, ferromagnet):
        """Test sweep size bookkeeping."""
        integrator = MetropolisIntegrator(1.0, rng=np.random.default_rng(4))
        integrator.step(ferromagnet, State.up(64))

        assert integrator.proposed == 64
        assert 0 <= integrator.accepted <= 64

    def test_flat_energy_accepts_everything(self):
        """Test that zero energy changes are always accepted."""
        integrator = MetropolisIntegrator(1e-6, rng=np.random.default_rng(5))
        state = integrator.step(Hamiltonian(), State.up(10))

        assert integrator.acceptance_rate() == 1.0
        assert not np.allclose(state.spins, State.up(10).spins)

    def test_ground_state_frozen_at_low_temperature(self, ferromagnet):
        """Test that the ordered state survives a sweep near T = 0."""
        integrator = MetropolisIntegrator(1e-12, rng=np.random.default_rng(6))
        state = integrator.step(ferromagnet, State.up(64))

        assert integrator.accepted == 0
        assert state == State.up(64)

    def test_high_temperature_accepts_almost_everything(self, ferromagnet):
        """Test that moves are accepted at very high temperature."""
        integrator = MetropolisIntegrator(1e12, rng=np.random.default_rng(7))
        integrator.step(ferromagnet, State.up(64))

        assert integrator.acceptance_rate() > 0.99

    def test_only_local_energy_used(self):
        """Test that sweeps never evaluate the lattice total."""
        class LocalOnly(AbstractEnergyComponent):
            def __init__(self):
                self.calls = 0

            def energy(self, state, index):
                self.calls += 1
                return -state.spins[index, 2]

            def total_energy(self, state):
                raise AssertionError("total energy evaluated during a sweep")

        term = LocalOnly()
        integrator = MetropolisIntegrator(1.0, rng=np.random.default_rng(8))
        integrator.step(term, State.up(12))

        # Current and proposed energy for every site
        assert term.calls == 24

    def test_sequential_consistency(self):
        """Test that later proposals see earlier accepted updates."""
        class Recorder(AbstractEnergyComponent):
            def __init__(self):
                self.seen = []

            def energy(self, state, index):
                if index == 1:
                    self.seen.append(state.spins[0].copy())
                return 0.0

        term = Recorder()
        integrator = MetropolisIntegrator(1.0, rng=np.random.default_rng(9))
        new_state = integrator.step(term, State.up(2))

        # Site 0 was updated first, site 1 saw its new value
        assert np.allclose(term.seen[0], new_state.spins[0])
        assert not np.allclose(term.seen[0], [0.0, 0.0, 1.0])

    def test_shuffled_sweep_visits_every_site(self):
        """Test that a shuffled sweep still visits each site once."""
        class Visits(AbstractEnergyComponent):
            def __init__(self):
                self.visited = []

            def energy(self, state, index):
                self.visited.append(int(index))
                return 0.0

        term = Visits()
        integrator = MetropolisIntegrator(1.0, rng=np.random.default_rng(10), shuffle=True)
        integrator.step(term, State.up(20))

        # Two evaluations per visit
        assert sorted(term.visited[::2]) == list(range(20))

    def test_seeded_sweeps_reproducible(self, ferromagnet):
        """Test that equal seeds give equal trajectories."""
        start = State.random(64, np.random.default_rng(11))

        a = MetropolisIntegrator(1.5, rng=np.random.default_rng(12)).step(ferromagnet, start)
        b = MetropolisIntegrator(1.5, rng=np.random.default_rng(12)).step(ferromagnet, start)

        assert a == b


class TestRelaxation:
    """Test physical behaviour over many sweeps."""

    def test_ferromagnet_orders_when_cooled(self, ferromagnet):
        """Test that slow cooling of a ferromagnet builds magnetization."""
        rng = np.random.default_rng(2024)
        state = State.random(64, rng)
        integrator = MetropolisIntegrator(3.0, rng=rng)

        while integrator.temp() > 0.1:
            for _ in range(30):
                state = integrator.step(ferromagnet, state)
            integrator.cool(0.25)

        assert state.mag_len() / 64 > 0.7
        # Ground state energy is -192
        assert ferromagnet.total_energy(state) < -0.7 * 192

    def test_energy_drops_at_low_temperature(self, ferromagnet):
        """Test that a quench from disorder lowers the energy."""
        rng = np.random.default_rng(99)
        state = State.random(64, rng)
        initial = ferromagnet.total_energy(state)

        integrator = MetropolisIntegrator(0.05, rng=rng)
        for _ in range(20):
            state = integrator.step(ferromagnet, state)

        assert ferromagnet.total_energy(state) < initial - 50.0


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
