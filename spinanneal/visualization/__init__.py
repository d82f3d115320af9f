"""Visualization of annealing runs."""

from .trace_plotter import plot_trace, plot_stage_averages

__all__ = ['plot_trace', 'plot_stage_averages']
