"""
Simulation module for in-silico thresholding.

This module contains functions and classes for:
- Simulating listener responses to SFG stimuli
- Running single and batched simulated threshold runs
"""

from .response_model import SimulatedListener
from .threshold_simulation import simulate_batch, simulate_threshold_run

__all__ = ["SimulatedListener", "simulate_batch", "simulate_threshold_run"]
