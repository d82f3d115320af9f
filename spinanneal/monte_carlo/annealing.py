"""
Simulated annealing driver.

A run is a bounded loop: a fixed number of sweeps at the current
temperature, then a cooling step, until the temperature drops below a
floor. The stage at which the temperature first falls below the floor is
still simulated, then the run stops.
"""

import logging
from dataclasses import dataclass, field, asdict
from typing import Iterator, List, Optional

import numpy as np
import pandas as pd
from tqdm import tqdm

from ..core.spin_system import SpinSystem
from ..core.state import State
from .integrator import MetropolisIntegrator

logger = logging.getLogger(__name__)

TRACE_COLUMNS = ['stage', 'sweep', 'temperature', 'energy', 'mag_len', 'acceptance']


@dataclass(frozen=True)
class AnnealingSchedule:
    """
    Linear cooling schedule.

    Attributes
    ----------
    initial_temperature : float
        Starting temperature, must be positive
    cooling : float
        Temperature decrement between stages, must be positive
    floor : float
        The run stops after the first stage below this temperature. Must
        be positive, so at most that last stage sits at or below zero,
        where the integrator never accepts a move that raises the energy.
    sweeps_per_stage : int
        Monte Carlo sweeps at each temperature
    """
    initial_temperature: float
    cooling: float
    floor: float
    sweeps_per_stage: int = 1000

    def __post_init__(self):
        if self.initial_temperature <= 0:
            raise ValueError("initial_temperature must be positive")
        if self.cooling <= 0:
            raise ValueError("cooling must be positive")
        if self.initial_temperature - self.cooling >= self.initial_temperature:
            raise ValueError("cooling step is too small to change the temperature")
        if self.floor <= 0:
            raise ValueError("floor must be positive")
        if self.sweeps_per_stage < 1:
            raise ValueError("sweeps_per_stage must be at least 1")

    def temperatures(self) -> Iterator[float]:
        """Temperature of every stage, with the same arithmetic as the integrator."""
        temperature = self.initial_temperature
        while True:
            yield temperature
            if temperature < self.floor:
                return
            temperature -= self.cooling

    def num_stages(self) -> int:
        return sum(1 for _ in self.temperatures())

    def num_sweeps(self) -> int:
        return self.num_stages() * self.sweeps_per_stage


@dataclass(frozen=True)
class SweepRecord:
    """Diagnostics of one completed sweep."""
    stage: int
    sweep: int
    temperature: float
    energy: float
    mag_len: float
    acceptance: float


@dataclass
class AnnealingResult:
    """
    Outcome of an annealing run.

    Attributes
    ----------
    state : State
        Final spin configuration
    trace : pd.DataFrame
        One row per sweep with the columns of ``TRACE_COLUMNS``
    """
    state: State
    trace: pd.DataFrame = field(repr=False)

    @property
    def final_energy(self) -> float:
        return float(self.trace['energy'].iloc[-1])

    @property
    def final_mag_len(self) -> float:
        return float(self.trace['mag_len'].iloc[-1])


class Annealer:
    """
    Runs a spin system through an annealing schedule.

    Parameters
    ----------
    system : SpinSystem
        Lattice, Hamiltonian and moments
    schedule : AnnealingSchedule
        Cooling schedule
    rng : np.random.Generator, optional
        Random source shared by the integrator
    shuffle : bool, optional
        Randomize site visitation order within sweeps
    progress : bool, optional
        Show a tqdm progress bar (default: False)
    """

    def __init__(self,
                 system: SpinSystem,
                 schedule: AnnealingSchedule,
                 rng: Optional[np.random.Generator] = None,
                 shuffle: bool = False,
                 progress: bool = False):
        if not isinstance(system, SpinSystem):
            raise TypeError("system must be a SpinSystem instance")
        if not isinstance(schedule, AnnealingSchedule):
            raise TypeError("schedule must be an AnnealingSchedule instance")

        self.system = system
        self.schedule = schedule
        self.rng = np.random.default_rng() if rng is None else rng
        self.shuffle = shuffle
        self.progress = progress
        self.state: Optional[State] = None

    def iter_sweeps(self, state: State) -> Iterator[SweepRecord]:
        """
        Run the schedule, yielding diagnostics after every sweep.

        The latest configuration is available as ``self.state``.
        """
        if len(state) != self.system.nsites:
            raise ValueError(
                f"State has {len(state)} sites, system has {self.system.nsites}"
            )

        hamiltonian = self.system.hamiltonian
        integrator = MetropolisIntegrator(self.schedule.initial_temperature,
                                          rng=self.rng, shuffle=self.shuffle)
        self.state = state
        stage = 0

        while True:
            temperature = integrator.temp()
            logger.info("Stage %d: T = %g", stage, temperature)

            for sweep in range(self.schedule.sweeps_per_stage):
                self.state = integrator.step(hamiltonian, self.state)
                yield SweepRecord(
                    stage=stage,
                    sweep=sweep,
                    temperature=temperature,
                    energy=hamiltonian.total_energy(self.state),
                    mag_len=self.state.mag_len(),
                    acceptance=integrator.acceptance_rate(),
                )

            if integrator.temp() < self.schedule.floor:
                break
            integrator.cool(self.schedule.cooling)
            stage += 1

        logger.info("Annealing finished after %d stages", stage + 1)

    def run(self, state: State) -> AnnealingResult:
        """Run the full schedule and collect the per-sweep trace."""
        records: List[SweepRecord] = []
        sweeps = self.iter_sweeps(state)
        for record in tqdm(sweeps,
                           total=self.schedule.num_sweeps(),
                           desc="Annealing",
                           disable=not self.progress):
            records.append(record)

        trace = pd.DataFrame([asdict(r) for r in records], columns=TRACE_COLUMNS)
        return AnnealingResult(state=self.state, trace=trace)
