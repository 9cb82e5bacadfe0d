"""
SFG Psychophysics - Stochastic Figure-Ground Stimulus Synthesis and QUEST Thresholding
"""

__version__ = "0.1.0"

# Import main classes and functions for easy access
from .errors import ConfigurationError, EstimatorDegenerateError, SFGError
from .stimulus.parameters import StimulusParameters
from .stimulus.chord_synth import ChordSynthesizer, StimulusOutput, synthesize
from .procedures.quest import QuestStaircase
from .procedures.threshold_run import ThresholdRun, RunStatus

__all__ = [
    "ConfigurationError",
    "EstimatorDegenerateError",
    "SFGError",
    "StimulusParameters",
    "ChordSynthesizer",
    "StimulusOutput",
    "synthesize",
    "QuestStaircase",
    "ThresholdRun",
    "RunStatus",
]
