"""
QUEST adaptive staircase (Watson & Pelli, 1983).

The posterior over the threshold ``t`` is a table over ``t_guess + x`` with
``x`` spaced by ``grain`` across ``[-range/2, range/2]``. Responses are scored
with a Weibull psychometric function in log-intensity units::

    P(correct | intensity, t) = gamma + (1 - gamma - delta) * W(intensity - t)
    W(x) = 1 - exp(-10 ** (beta * (x + x_threshold)))

``x_threshold`` is chosen so that ``P = p_threshold`` when ``intensity == t``,
so the posterior mean estimates the intensity giving ``p_threshold`` correct.
"""
# Standard library imports
import copy
import logging
from typing import List, Optional, Tuple

# Third-party imports
import numpy as np

# Local imports
from ..errors import ConfigurationError, EstimatorDegenerateError
from ..utils.defaults import (
    DEFAULT_BETA,
    DEFAULT_DELTA,
    DEFAULT_GAMMA,
    DEFAULT_GRAIN,
    DEFAULT_RANGE,
)

logger = logging.getLogger(__name__)


def weibull_threshold_offset(p_threshold: float, beta: float, gamma: float, delta: float) -> float:
    """Offset that puts ``p_threshold`` at zero on the psychometric function."""
    detection = (p_threshold - gamma) / (1 - gamma - delta)
    return np.log10(-np.log(1 - detection)) / beta


class QuestStaircase:
    """Bayesian sequential threshold estimator.

    Args:
        t_guess (float): Prior mean of the threshold (log units).
        t_guess_sd (float): Prior standard deviation.
        p_threshold (float): Target probability correct defining the threshold.
        beta (float): Weibull slope.
        delta (float): Lapse rate, fraction of blind responses.
        gamma (float): Guess rate, probability correct without a stimulus.
        grain (float): Table step.
        range (float): Width of the table around ``t_guess``.
    """

    def __init__(self, t_guess: float, t_guess_sd: float, p_threshold: float,
                 beta: float = DEFAULT_BETA, delta: float = DEFAULT_DELTA,
                 gamma: float = DEFAULT_GAMMA, grain: float = DEFAULT_GRAIN,
                 range: float = DEFAULT_RANGE):
        if t_guess_sd <= 0:
            raise ConfigurationError("t_guess_sd must be positive")
        if beta <= 0:
            raise ConfigurationError("beta must be positive")
        if grain <= 0 or range <= 0:
            raise ConfigurationError("grain and range must be positive")
        if not (0 <= gamma < 1 and 0 <= delta < 1 and gamma + delta < 1):
            raise ConfigurationError("gamma and delta must be in [0, 1) with gamma + delta < 1")
        if not gamma < p_threshold < 1 - delta:
            raise ConfigurationError(
                f"p_threshold must lie between gamma ({gamma}) and 1 - delta ({1 - delta})")

        self.t_guess = float(t_guess)
        self.t_guess_sd = float(t_guess_sd)
        self.p_threshold = float(p_threshold)
        self.beta = float(beta)
        self.delta = float(delta)
        self.gamma = float(gamma)
        self.grain = float(grain)
        self.range = float(range)
        self.x_threshold = weibull_threshold_offset(p_threshold, beta, gamma, delta)

        half = int(np.ceil(self.range / self.grain / 2 - 1e-9))
        self.x = np.arange(-half, half + 1) * self.grain
        prior = np.exp(-0.5 * (self.x / self.t_guess_sd) ** 2)
        self._pdf = prior / prior.sum()
        self.history: List[Tuple[float, bool]] = []

    # ------------------------------------------------------------------
    # Psychometric function
    # ------------------------------------------------------------------
    def p_correct(self, x):
        """Probability correct at ``x = intensity - threshold``."""
        x = np.asarray(x, dtype=float)
        detection = 1 - np.exp(-10 ** (self.beta * (x + self.x_threshold)))
        return self.gamma + (1 - self.gamma - self.delta) * detection

    # ------------------------------------------------------------------
    # Posterior queries
    # ------------------------------------------------------------------
    @property
    def pdf(self) -> np.ndarray:
        """Copy of the normalised posterior table."""
        return self._pdf.copy()

    @property
    def intensities(self) -> np.ndarray:
        """Threshold values the posterior table is defined on."""
        return self.t_guess + self.x

    @property
    def trial_count(self) -> int:
        return len(self.history)

    def mean(self) -> float:
        return self.t_guess + float(np.sum(self._pdf * self.x))

    def mode(self) -> float:
        return self.t_guess + float(self.x[np.argmax(self._pdf)])

    def sd(self) -> float:
        mean_x = np.sum(self._pdf * self.x)
        variance = np.sum(self._pdf * self.x ** 2) - mean_x ** 2
        return float(np.sqrt(max(variance, 0.0)))

    standard_deviation = sd

    def quantile(self, q: float = 0.5) -> float:
        """Posterior quantile of the threshold."""
        if not 0 <= q <= 1:
            raise ValueError("quantile order must be within [0, 1]")
        cdf = np.cumsum(self._pdf)
        rising = np.flatnonzero(np.diff(np.concatenate([[-1.0], cdf])) > 0)
        return self.t_guess + float(np.interp(q * cdf[-1], cdf[rising], self.x[rising]))

    def recommend(self, levels=None):
        """
        Intensity to test next: the posterior mean.

        With a ``LevelGrid`` the mean is mapped onto the nearest level and the
        level value (e.g. a coherence or background tone count) is returned.
        """
        t_test = self.mean()
        if levels is None:
            return t_test
        value, _ = levels.nearest(t_test)
        return value

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------
    def update(self, intensity: float, response: Optional[bool]) -> None:
        """
        Fold one trial into the posterior.

        A missing response (None) is scored as incorrect. Intensities outside
        the posterior table are clipped to its edge.

        Raises:
            EstimatorDegenerateError: if the updated posterior has no mass.
        """
        if response is None:
            logger.info("missing response at intensity %.3f scored as incorrect", intensity)
            response = False
        response = bool(response)

        low, high = self.t_guess + self.x[0], self.t_guess + self.x[-1]
        if not low <= intensity <= high:
            logger.warning("intensity %.3f outside posterior range [%.3f, %.3f], clipped",
                           intensity, low, high)
            intensity = float(np.clip(intensity, low, high))

        p = self.p_correct(intensity - self.intensities)
        likelihood = p if response else 1 - p
        posterior = self._pdf * likelihood
        total = posterior.sum()
        if not np.isfinite(total) or total <= np.finfo(float).tiny:
            raise EstimatorDegenerateError(
                f"posterior mass vanished after response {response} at intensity {intensity:.3f}")
        self._pdf = posterior / total
        self.history.append((float(intensity), response))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("quest update: intensity %.3f response %s -> mean %.3f sd %.3f",
                         intensity, response, self.mean(), self.sd())

    def copy(self) -> "QuestStaircase":
        return copy.deepcopy(self)

    def __repr__(self):
        return (f"QuestStaircase(mean={self.mean():.3f}, sd={self.sd():.3f}, "
                f"trials={self.trial_count})")
