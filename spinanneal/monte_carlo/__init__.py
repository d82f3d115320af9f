"""
Monte Carlo module.

- MetropolisIntegrator: single-spin-flip sweeps at a given temperature
- AnnealingSchedule / Annealer: stepwise cooling runs with per-sweep traces
"""

from .integrator import MetropolisIntegrator, acceptance_probability
from .annealing import (
    AnnealingSchedule,
    Annealer,
    AnnealingResult,
    SweepRecord,
    TRACE_COLUMNS,
)

__all__ = [
    'MetropolisIntegrator',
    'acceptance_probability',
    'AnnealingSchedule',
    'Annealer',
    'AnnealingResult',
    'SweepRecord',
    'TRACE_COLUMNS',
]
