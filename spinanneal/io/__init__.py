"""
Input/output: YAML run configuration and diagnostic output.
"""

from .config_loader import LatticeConfig, SimulationConfig, load_config, parse_config
from .diagnostics import format_records, format_trace, write_trace, save_trace_csv

__all__ = [
    'LatticeConfig',
    'SimulationConfig',
    'load_config',
    'parse_config',
    'format_records',
    'format_trace',
    'write_trace',
    'save_trace_csv',
]
