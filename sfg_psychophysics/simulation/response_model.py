"""Simulated listener for SFG figure detection."""

import numpy as np

from ..errors import ConfigurationError
from ..procedures.quest import weibull_threshold_offset
from ..utils.defaults import DEFAULT_BETA, DEFAULT_DELTA, DEFAULT_GAMMA


class SimulatedListener:
    """Models detection of an SFG figure with the QUEST psychometric family."""

    def __init__(self, true_threshold, p_threshold, beta=DEFAULT_BETA, delta=DEFAULT_DELTA,
                 gamma=DEFAULT_GAMMA, miss_rate=0.0, false_alarm_rate=0.1):
        """Initialize the listener.

        ``miss_rate`` is the chance of giving no response at all and
        ``false_alarm_rate`` the chance of reporting a figure on catch trials.
        """
        if not 0 <= miss_rate < 1:
            raise ConfigurationError("miss_rate must be within [0, 1)")
        self.true_threshold = true_threshold
        self.p_threshold = p_threshold
        self.beta = beta
        self.delta = delta
        self.gamma = gamma
        self.miss_rate = miss_rate
        self.false_alarm_rate = false_alarm_rate
        self.x_threshold = weibull_threshold_offset(p_threshold, beta, gamma, delta)

    def get_response_probability(self, log_snr):
        """Probability of detecting the figure at a given log SNR."""
        x = np.asarray(log_snr, dtype=float) - self.true_threshold
        detection = 1 - np.exp(-10 ** (self.beta * (x + self.x_threshold)))
        return self.gamma + (1 - self.gamma - self.delta) * detection

    def respond(self, log_snr, figure_present=True, random_state=None):
        """Generate a 'figure' report (True/False), or None for no response."""
        rng = np.random.default_rng(random_state)
        if self.miss_rate and rng.random() < self.miss_rate:
            return None
        if not figure_present:
            return bool(rng.random() < self.false_alarm_rate)
        return bool(rng.random() < self.get_response_probability(log_snr))
