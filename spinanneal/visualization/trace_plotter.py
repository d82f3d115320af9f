"""
Plots of annealing traces.
"""

from pathlib import Path
from typing import Optional, Union

import matplotlib.pyplot as plt
import pandas as pd


def plot_trace(trace: pd.DataFrame,
               save_path: Optional[Union[str, Path]] = None,
               show_plot: bool = False):
    """
    Energy and magnetization against sweep number.

    Parameters
    ----------
    trace : pd.DataFrame
        Annealing trace with 'energy', 'mag_len' and 'temperature' columns
    save_path : str or Path, optional
        Where to save the figure
    show_plot : bool
        Call ``plt.show()`` after drawing

    Returns
    -------
    fig, axes
    """
    fig, axes = plt.subplots(3, 1, figsize=(10, 9), sharex=True)
    sweeps = range(len(trace))

    axes[0].plot(sweeps, trace['energy'], lw=0.8, color='tab:blue')
    axes[0].set_ylabel('Total energy', fontsize=12)

    axes[1].plot(sweeps, trace['mag_len'], lw=0.8, color='tab:red')
    axes[1].set_ylabel('|M|', fontsize=12)

    axes[2].plot(sweeps, trace['temperature'], lw=1.2, color='k')
    axes[2].set_ylabel('T', fontsize=12)
    axes[2].set_xlabel('Sweep', fontsize=12)

    for ax in axes:
        ax.grid(True, alpha=0.3)

    fig.tight_layout()

    if save_path is not None:
        plt.savefig(save_path, bbox_inches='tight', dpi=300)
    if show_plot:
        plt.show()

    return fig, axes


def plot_stage_averages(trace: pd.DataFrame,
                        save_path: Optional[Union[str, Path]] = None,
                        show_plot: bool = False):
    """
    Mean energy and |M| of every temperature stage against temperature.

    The first half of each stage is dropped as equilibration.
    """
    position = trace.groupby('stage').cumcount()
    size = trace.groupby('stage')['stage'].transform('size')
    stages = (trace[position >= size // 2]
              .groupby('temperature')[['energy', 'mag_len']]
              .mean())

    fig, (ax_e, ax_m) = plt.subplots(1, 2, figsize=(12, 5))

    ax_e.plot(stages.index, stages['energy'], 'o-', color='tab:blue')
    ax_e.set_xlabel('T', fontsize=12)
    ax_e.set_ylabel('<E>', fontsize=12)

    ax_m.plot(stages.index, stages['mag_len'], 'o-', color='tab:red')
    ax_m.set_xlabel('T', fontsize=12)
    ax_m.set_ylabel('<|M|>', fontsize=12)

    for ax in (ax_e, ax_m):
        ax.grid(True, alpha=0.3)

    fig.tight_layout()

    if save_path is not None:
        plt.savefig(save_path, bbox_inches='tight', dpi=300)
    if show_plot:
        plt.show()

    return fig, (ax_e, ax_m)
