"""
In-silico threshold runs: a simulated listener answering a QUEST run.
"""
# Standard library imports
import logging
from typing import Callable, Dict, List, Optional

# Third-party imports
import numpy as np
import pandas as pd
from tqdm import tqdm

# Local imports
from .response_model import SimulatedListener
from ..analysis.staircase_summary import summarize_run
from ..procedures.threshold_run import ThresholdRun

logger = logging.getLogger(__name__)


def simulate_threshold_run(run: ThresholdRun, listener: SimulatedListener,
                           random_state=None) -> ThresholdRun:
    """Answer trials of ``run`` with ``listener`` until the run finishes."""
    rng = np.random.default_rng(random_state)
    while not run.finished:
        trial = run.next_trial()
        response = listener.respond(trial.log_snr, trial.figure_present, random_state=rng)
        run.record(trial, response)
    return run


def simulate_batch(n_runs: int, run_factory: Callable[[np.random.Generator], ThresholdRun],
                   listener: SimulatedListener, seed: Optional[int] = None,
                   progress: bool = True) -> pd.DataFrame:
    """
    Repeat a simulated threshold run.

    Args:
        n_runs (int): Number of independent runs.
        run_factory (callable): Builds a fresh ThresholdRun from a Generator
            (used for the trial order).
        listener (SimulatedListener): Simulated participant.
        seed (int): Seed for the whole batch.
        progress (bool): Show a tqdm progress bar.

    Returns:
        pd.DataFrame: One row per run, see :func:`summarize_run`.
    """
    seeds = np.random.SeedSequence(seed).spawn(n_runs)
    results: List[Dict] = []
    for run_id, child in enumerate(tqdm(seeds, desc="Simulating threshold runs", disable=not progress)):
        rng = np.random.default_rng(child)
        run = simulate_threshold_run(run_factory(rng), listener, random_state=rng)
        summary = summarize_run(run, listener.true_threshold)
        summary['run'] = run_id
        results.append(summary)
    logger.info("simulated %d threshold runs", n_runs)
    return pd.DataFrame(results)
