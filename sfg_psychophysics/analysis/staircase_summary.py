"""Summaries of finished threshold runs and batches of simulated runs."""

import logging
from typing import Dict

import numpy as np
import pandas as pd

from ..procedures.threshold_run import RunStatus, ThresholdRun
from ..utils.defaults import MAX_FALSE_ALARM_RATE

logger = logging.getLogger(__name__)


def summarize_run(run: ThresholdRun, true_threshold=None) -> Dict:
    """Flat summary of a threshold run.

    Args:
        run (ThresholdRun): A (usually finished) run.
        true_threshold (float): Known threshold of a simulated listener.

    Returns:
        dict: status, trial counts, level estimate, posterior stats and
        hit / false alarm rates; ``error`` when ``true_threshold`` is given.
    """
    estimate_value, estimate_log_snr = run.levels.nearest(run.staircase.mean())
    summary = {
        'status': run.status.value,
        'n_trials': run.trial_count,
        'n_updates': run.staircase.trial_count,
        'estimate': estimate_value,
        'estimate_log_snr': estimate_log_snr,
        'posterior_mean': run.staircase.mean(),
        'posterior_sd': run.staircase.sd(),
        'hit_rate': run.hit_rate(),
        'false_alarm_rate': run.false_alarm_rate(),
    }
    if true_threshold is not None:
        summary['true_threshold'] = true_threshold
        summary['error'] = summary['posterior_mean'] - true_threshold
    return summary


def needs_rerun(run: ThresholdRun, max_false_alarm_rate: float = MAX_FALSE_ALARM_RATE) -> bool:
    """True when catch-trial false alarms make the estimate untrustworthy."""
    rate = run.false_alarm_rate()
    if np.isnan(rate):
        return False
    if rate > max_false_alarm_rate:
        logger.warning("false alarm rate %.2f above %.2f, rerun the thresholding",
                       rate, max_false_alarm_rate)
        return True
    return False


def estimate_errors(results: pd.DataFrame) -> Dict:
    """Accuracy of simulated runs (needs an ``error`` column)."""
    if results.empty or 'error' not in results:
        raise ValueError("results must contain an 'error' column from simulated runs")
    errors = results['error'].to_numpy(dtype=float)
    return {
        'n_runs': len(results),
        'bias': float(np.mean(errors)),
        'rmse': float(np.sqrt(np.mean(errors ** 2))),
        'mean_abs_error': float(np.mean(np.abs(errors))),
        'mean_trials': float(results['n_trials'].mean()),
        'converged_share': float((results['status'] == RunStatus.CONVERGED.value).mean()),
    }
