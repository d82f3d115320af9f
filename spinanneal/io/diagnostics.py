"""
Per-sweep diagnostic output.

The text stream has one line per sweep, ``<total_energy> <mag_len>``
separated by a space, and a blank line between temperature stages.
Numbers use Python float formatting (``0.0``, ``1e-07``), so the stream
keeps the layout of older logs but is not byte-compatible with them.
"""

from pathlib import Path
from typing import Iterable, Iterator, Union

import pandas as pd

from ..monte_carlo.annealing import SweepRecord


def format_records(records: Iterable[SweepRecord]) -> Iterator[str]:
    """Lines of the diagnostic stream, stage separators included."""
    stage = None
    for record in records:
        if stage is not None and record.stage != stage:
            yield ""
        stage = record.stage
        yield f"{record.energy} {record.mag_len}"


def format_trace(trace: pd.DataFrame) -> str:
    """Diagnostic stream of a complete annealing trace."""
    lines = []
    previous = None
    for stage, energy, mag_len in trace[['stage', 'energy', 'mag_len']].itertuples(index=False):
        if previous is not None and stage != previous:
            lines.append("")
        previous = stage
        lines.append(f"{energy} {mag_len}")
    return "\n".join(lines) + ("\n" if lines else "")


def write_trace(trace: pd.DataFrame, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_trace(trace), encoding='utf-8')
    return path


def save_trace_csv(trace: pd.DataFrame, path: Union[str, Path]) -> Path:
    """Save the full trace, every column, as CSV."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    trace.to_csv(path, index=False)
    return path
