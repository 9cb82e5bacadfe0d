"""
Trial-by-trial threshold run driving a QUEST staircase.

The run decides which trials carry a figure (the rest are catch trials),
recommends the level of each figure trial, scores responses and stops once
the posterior is precise enough or the trial ceiling is hit. Presenting the
stimulus and collecting the response is left to the caller.
"""
# Standard library imports
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

# Third-party imports
import numpy as np
import pandas as pd

# Local imports
from .levels import LevelGrid, background_levels, coherence_levels
from .quest import QuestStaircase
from ..errors import ConfigurationError
from ..utils.defaults import (
    DEFAULT_IGNORE_TRIALS,
    DEFAULT_MIN_TRIALS,
    DEFAULT_EXTRA_TRIALS,
    DEFAULT_CATCH_RATIO,
    DEFAULT_T_GUESS_SD,
    COHERENCE_T_GUESS,
    COHERENCE_P_THRESHOLD,
    BACKGROUND_T_GUESS,
    BACKGROUND_P_THRESHOLD,
)

logger = logging.getLogger(__name__)


class RunStatus(Enum):
    ACTIVE = 'active'
    CONVERGED = 'converged'
    MAX_TRIALS_REACHED = 'max_trials_reached'


@dataclass(frozen=True)
class Trial:
    """A trial handed to the presentation layer.

    ``level`` is the stimulus value to present (coherence or background tone
    count); catch trials carry the same level so decoy stimuli stay matched.
    """
    number: int
    figure_present: bool
    level: object
    log_snr: float


@dataclass
class TrialOutcome:
    trial: Trial
    response: Optional[bool]
    correct: bool
    used_for_update: bool
    estimate_mean: float
    estimate_sd: float


class ThresholdRun:
    """
    Sequential QUEST run over a discrete level grid.

    Args:
        staircase (QuestStaircase): Estimator owned by this run.
        levels (LevelGrid): Stimulus levels the recommendation is mapped onto.
        ignore_trials (int): Leading trials presented but not used for updates.
        min_trials (int): Trials before the precision check applies.
        extra_trials (int): Further trials allowed while the posterior SD is
            above ``target_sd``.
        target_sd (float): Stop criterion; defaults to the level resolution.
        catch_ratio (float): Share of figure-absent trials.
        rng (np.random.Generator or int): Source for the trial order.
        keep_posteriors (bool): Store a copy of the posterior after each trial.
    """

    def __init__(self, staircase: QuestStaircase, levels: LevelGrid,
                 ignore_trials: int = DEFAULT_IGNORE_TRIALS,
                 min_trials: int = DEFAULT_MIN_TRIALS,
                 extra_trials: int = DEFAULT_EXTRA_TRIALS,
                 target_sd: Optional[float] = None,
                 catch_ratio: float = DEFAULT_CATCH_RATIO,
                 rng=None, keep_posteriors: bool = False):
        if ignore_trials < 1:
            raise ConfigurationError("ignore_trials must be > 0")
        if min_trials < 1 or extra_trials < 0:
            raise ConfigurationError("min_trials must be positive and extra_trials non-negative")
        if ignore_trials >= min_trials:
            raise ConfigurationError("ignore_trials must be smaller than min_trials")
        if not 0 <= catch_ratio < 1:
            raise ConfigurationError("catch_ratio must be within [0, 1)")

        self.staircase = staircase
        self.levels = levels
        self.ignore_trials = ignore_trials
        self.min_trials = min_trials
        self.max_trials = min_trials + extra_trials
        self.target_sd = levels.resolution() if target_sd is None else float(target_sd)
        self.rng = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)

        # trial order is fixed up front, catch trials at random positions
        self.trial_types = np.ones(self.max_trials, dtype=bool)
        n_catch = int(np.round(self.max_trials * catch_ratio))
        self.trial_types[self.rng.permutation(self.max_trials)[:n_catch]] = False

        self.status = RunStatus.ACTIVE
        self.outcomes: List[TrialOutcome] = []
        self.keep_posteriors = keep_posteriors
        self.posteriors: List[np.ndarray] = []
        self._pending: Optional[Trial] = None

    @property
    def trial_count(self) -> int:
        return len(self.outcomes)

    @property
    def finished(self) -> bool:
        return self.status is not RunStatus.ACTIVE

    def next_trial(self) -> Trial:
        """Trial to present next, using the current posterior mean."""
        if self.finished:
            raise RuntimeError(f"threshold run already finished ({self.status.value})")
        if self._pending is not None:
            return self._pending
        number = self.trial_count + 1
        level, log_snr = self.levels.nearest(self.staircase.mean())
        self._pending = Trial(number=number, figure_present=bool(self.trial_types[number - 1]),
                              level=level, log_snr=log_snr)
        return self._pending

    def record(self, trial: Trial, response: Optional[bool]) -> RunStatus:
        """
        Store the response to ``trial`` and advance the run.

        ``response`` is True when the listener reported a figure, False when
        not, and None when no response arrived. A missing response counts as
        incorrect for figure and catch trials alike.

        Raises:
            EstimatorDegenerateError: from the staircase update; nothing is
                recorded and ``trial`` stays pending.
        """
        if self._pending is None or trial != self._pending:
            raise RuntimeError(f"trial {trial.number} is not the pending trial")

        if trial.figure_present:
            correct = response is True
        else:
            correct = response is False

        used = trial.figure_present and trial.number > self.ignore_trials
        if used:
            self.staircase.update(trial.log_snr, response)
        elif response is None:
            logger.info("missing response on trial %d scored as incorrect", trial.number)
        # a degenerate update leaves the trial pending
        self._pending = None

        self.outcomes.append(TrialOutcome(
            trial=trial, response=response, correct=correct, used_for_update=used,
            estimate_mean=self.staircase.mean(), estimate_sd=self.staircase.sd()))
        if self.keep_posteriors:
            self.posteriors.append(self.staircase.pdf)

        self._advance_status()
        return self.status

    def _advance_status(self) -> None:
        n = self.trial_count
        if n < self.min_trials:
            return
        sd = self.staircase.sd()
        if sd < self.target_sd:
            self.status = RunStatus.CONVERGED
            logger.info("threshold run converged after %d trials (sd %.3f < %.3f)",
                        n, sd, self.target_sd)
        elif n >= self.max_trials:
            self.status = RunStatus.MAX_TRIALS_REACHED
            logger.info("threshold run stopped at the %d trial ceiling (sd %.3f, target %.3f)",
                        n, sd, self.target_sd)
        elif n == self.min_trials:
            logger.info("sd %.3f above target %.3f after %d trials, adding up to %d trials",
                        sd, self.target_sd, n, self.max_trials - n)

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------
    def estimate(self):
        """Level nearest to the posterior mean."""
        value, _ = self.levels.nearest(self.staircase.mean())
        return value

    def hit_rate(self) -> float:
        """Share of figure trials with a 'figure' response."""
        figure = [o for o in self.outcomes if o.trial.figure_present]
        if not figure:
            return float('nan')
        return sum(o.response is True for o in figure) / len(figure)

    def false_alarm_rate(self) -> float:
        """Share of catch trials with a 'figure' response."""
        catch = [o for o in self.outcomes if not o.trial.figure_present]
        if not catch:
            return float('nan')
        return sum(o.response is True for o in catch) / len(catch)

    def history_frame(self) -> pd.DataFrame:
        return pd.DataFrame([{
            'trial': o.trial.number,
            'figure_present': o.trial.figure_present,
            'level': o.trial.level,
            'log_snr': o.trial.log_snr,
            'response': o.response,
            'correct': o.correct,
            'used_for_update': o.used_for_update,
            'estimate_mean': o.estimate_mean,
            'estimate_sd': o.estimate_sd,
        } for o in self.outcomes])


def coherence_run(tone_components: int, t_guess: float = COHERENCE_T_GUESS,
                  t_guess_sd: float = DEFAULT_T_GUESS_SD,
                  p_threshold: float = COHERENCE_P_THRESHOLD,
                  quest_params: Optional[dict] = None, **run_params) -> ThresholdRun:
    """Run estimating the figure coherence at a fixed total tone count."""
    staircase = QuestStaircase(t_guess, t_guess_sd, p_threshold, **(quest_params or {}))
    return ThresholdRun(staircase, coherence_levels(tone_components), **run_params)


def background_run(tone_components: int, base_coherence: int,
                   t_guess: float = BACKGROUND_T_GUESS,
                   t_guess_sd: float = DEFAULT_T_GUESS_SD,
                   p_threshold: float = BACKGROUND_P_THRESHOLD,
                   quest_params: Optional[dict] = None, **run_params) -> ThresholdRun:
    """Run estimating the background tone count for a coherence found earlier."""
    staircase = QuestStaircase(t_guess, t_guess_sd, p_threshold, **(quest_params or {}))
    return ThresholdRun(staircase, background_levels(tone_components, base_coherence), **run_params)
