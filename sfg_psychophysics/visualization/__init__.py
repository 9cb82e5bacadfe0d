"""
Visualization module for stimuli and staircases.

This module contains functions for:
- Plotting chord assignments against the stimulus spectrogram
- Plotting staircase progressions and posterior evolution
"""

from .chord_plots import plot_chords
from .staircase_plots import plot_posterior_evolution, plot_staircase

__all__ = ["plot_chords", "plot_posterior_evolution", "plot_staircase"]
