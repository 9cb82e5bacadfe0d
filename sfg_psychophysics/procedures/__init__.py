"""
Procedures module for adaptive threshold estimation.

This module contains implementations of:
- QUEST Bayesian staircase
- Discrete stimulus level grids (coherence, background tone count)
- Threshold runs with catch trials and a precision stopping rule
"""

from .quest import QuestStaircase
from .levels import LevelGrid, coherence_levels, background_levels
from .threshold_run import (
    RunStatus,
    ThresholdRun,
    Trial,
    TrialOutcome,
    background_run,
    coherence_run,
)

__all__ = [
    "QuestStaircase",
    "LevelGrid",
    "coherence_levels",
    "background_levels",
    "RunStatus",
    "ThresholdRun",
    "Trial",
    "TrialOutcome",
    "background_run",
    "coherence_run",
]
