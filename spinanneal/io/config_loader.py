"""Run configuration loading.

A run is described by a YAML file:

    lattice:
      preset: magnetite          # bundled preset name or path to a JSON file
      shape: [4, 4, 4]
      pbc: [true, true, true]
      moments: preset            # 'preset', 'unit', or a per-atom list

    interactions:
      - kind: coupling_exchange
      - kind: z_anisotropy
        strength: 0.05

    initial_state: random_with_norms

    annealing:
      initial_temperature: 250.0
      cooling: 10.0
      floor: 0.1
      sweeps_per_stage: 1000
      shuffle: false

    seed: 1234

    project:
      name: "Magnetite anneal"
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import numpy as np
import yaml

from ..core.lattice import load_preset
from ..core.spin_system import SpinSystem, INITIAL_STATES
from ..monte_carlo.annealing import AnnealingSchedule, Annealer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LatticeConfig:
    """Geometry section of a run configuration."""
    preset: str
    shape: Tuple[int, int, int] = (10, 10, 10)
    pbc: Tuple[bool, bool, bool] = (True, True, True)
    moments: Union[str, List[float]] = 'preset'


@dataclass(frozen=True)
class SimulationConfig:
    """Complete run configuration."""
    lattice: LatticeConfig
    interactions: List[Dict[str, Any]]
    annealing: AnnealingSchedule
    initial_state: str = 'random'
    shuffle: bool = False
    seed: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def build_system(self) -> SpinSystem:
        """Spin system described by this configuration."""
        preset = load_preset(self.lattice.preset)
        lattice = preset.lattice(shape=self.lattice.shape, pbc=self.lattice.pbc)

        moments = self.lattice.moments
        if moments == 'preset':
            moments = preset.moments
        elif moments == 'unit':
            moments = None

        metadata = {'preset': preset.name, **self.metadata}
        return SpinSystem(lattice, self.interactions, moments=moments, metadata=metadata)

    def rng(self) -> np.random.Generator:
        return np.random.default_rng(self.seed)

    def build_annealer(self, system: SpinSystem, progress: bool = False) -> Annealer:
        return Annealer(system, self.annealing, rng=self.rng(),
                        shuffle=self.shuffle, progress=progress)


def _triple(raw: Any, kind: type, name: str, default: tuple) -> tuple:
    if raw is None:
        return default
    if not isinstance(raw, (list, tuple)) or len(raw) != 3:
        raise ValueError(f"'{name}' must be a list of 3 values, got {raw!r}")
    # bool is a subclass of int, so `shape: [true, 4, 4]` needs its own check
    for value in raw:
        if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
            raise ValueError(
                f"'{name}' entries must be {kind.__name__} values, got {value!r}"
            )
    return tuple(raw)


def _parse_lattice(raw: Mapping[str, Any]) -> LatticeConfig:
    if 'preset' not in raw:
        raise ValueError("lattice section needs a 'preset' entry")

    moments = raw.get('moments', 'preset')
    if isinstance(moments, str):
        if moments not in ('preset', 'unit'):
            raise ValueError(f"lattice.moments must be 'preset', 'unit' or a list, got {moments!r}")
    else:
        moments = [float(m) for m in moments]

    return LatticeConfig(
        preset=str(raw['preset']),
        shape=_triple(raw.get('shape'), int, 'lattice.shape', (10, 10, 10)),
        pbc=_triple(raw.get('pbc'), bool, 'lattice.pbc', (True, True, True)),
        moments=moments,
    )


def _parse_interactions(raw: Any) -> List[Dict[str, Any]]:
    if raw is None:
        return [{'kind': 'coupling_exchange'}]
    if not isinstance(raw, list):
        raise ValueError("interactions must be a list of terms")

    terms = []
    for term in raw:
        if not isinstance(term, Mapping) or 'kind' not in term:
            raise ValueError(f"Every interaction needs a 'kind', got {term!r}")
        terms.append(dict(term))
    return terms


def parse_config(raw: Mapping[str, Any]) -> SimulationConfig:
    """Build a :class:`SimulationConfig` from an already-loaded mapping."""
    if 'lattice' not in raw:
        raise ValueError("Configuration needs a 'lattice' section")

    annealing = raw.get('annealing', {}) or {}
    schedule = AnnealingSchedule(
        initial_temperature=float(annealing.get('initial_temperature', 250.0)),
        cooling=float(annealing.get('cooling', 10.0)),
        floor=float(annealing.get('floor', 0.1)),
        sweeps_per_stage=int(annealing.get('sweeps_per_stage', 1000)),
    )

    initial_state = str(raw.get('initial_state', 'random'))
    if initial_state not in INITIAL_STATES:
        raise ValueError(f"Unknown initial_state '{initial_state}'. "
                         f"Available: {', '.join(INITIAL_STATES)}")

    seed = raw.get('seed')

    return SimulationConfig(
        lattice=_parse_lattice(raw['lattice']),
        interactions=_parse_interactions(raw.get('interactions')),
        annealing=schedule,
        initial_state=initial_state,
        shuffle=bool(annealing.get('shuffle', False)),
        seed=None if seed is None else int(seed),
        metadata=dict(raw.get('project', {}) or {}),
    )


def load_config(path: Union[str, Path]) -> SimulationConfig:
    """Load a run configuration from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        A :class:`SimulationConfig` populated from YAML.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found at {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        raw: Mapping[str, Any] = yaml.safe_load(handle) or {}

    logger.info("Loaded run configuration from %s", config_path)
    return parse_config(raw)
