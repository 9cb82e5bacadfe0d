"""
Analysis module for threshold run results.

This module contains functions for:
- Summarising single runs (estimates, hit and false alarm rates)
- Accuracy of batches of simulated runs
"""

from .staircase_summary import estimate_errors, needs_rerun, summarize_run

__all__ = ["estimate_errors", "needs_rerun", "summarize_run"]
