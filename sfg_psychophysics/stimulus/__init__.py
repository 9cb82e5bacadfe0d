"""
Stimulus module for stochastic figure-ground (SFG) sounds.

This module contains:
- Stimulus parameters and the log-spaced frequency grid
- Figure placement and trajectories
- Chord synthesis and tabular stimulus records
"""

from .parameters import StimulusParameters
from .frequency_grid import FrequencyGrid
from .figure_placement import FigurePlacer, FigureTrajectory
from .chord_synth import ChordSynthesizer, StimulusOutput, onset_offset_ramp, synthesize
from .records import (
    RECORD_COLUMNS,
    chord_frequency_frame,
    generate_stimulus_set,
    records_to_dataframe,
    stimulus_record,
)

__all__ = [
    "StimulusParameters",
    "FrequencyGrid",
    "FigurePlacer",
    "FigureTrajectory",
    "ChordSynthesizer",
    "StimulusOutput",
    "onset_offset_ramp",
    "synthesize",
    "RECORD_COLUMNS",
    "chord_frequency_frame",
    "generate_stimulus_set",
    "records_to_dataframe",
    "stimulus_record",
]
