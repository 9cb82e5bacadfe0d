"""Discrete stimulus levels on the log-SNR axis used by the staircases."""

from typing import Tuple

import numpy as np

from ..errors import ConfigurationError


class LevelGrid:
    """Stimulus parameter values paired with their log-SNR intensities."""

    def __init__(self, values, log_snr, name="level"):
        self.values = np.asarray(values)
        self.log_snr = np.asarray(log_snr, dtype=float)
        self.name = name
        if self.values.ndim != 1 or self.values.shape != self.log_snr.shape or not len(self.values):
            raise ConfigurationError("levels need matching, non-empty value and log-SNR vectors")

    def __len__(self):
        return len(self.values)

    def nearest(self, t: float) -> Tuple:
        """
        Level closest to log-SNR ``t``.

        When two levels are equally close the lower value (smaller coherence
        or background tone count) is returned.
        """
        if np.isnan(t):
            raise ValueError("cannot map NaN onto a level grid")
        distance = np.abs(self.log_snr - t)
        best = np.min(distance)
        candidates = np.flatnonzero(np.isclose(distance, best, rtol=1e-12, atol=1e-12))
        index = candidates[np.argmin(self.values[candidates])]
        return self.values[index].item(), float(self.log_snr[index])

    def log_snr_of(self, value) -> float:
        matches = np.flatnonzero(self.values == value)
        if not len(matches):
            raise KeyError(f"{value!r} is not a {self.name} on this grid")
        return float(self.log_snr[matches[0]])

    def resolution(self) -> float:
        """Median step between successive finite log-SNR levels."""
        with np.errstate(invalid='ignore'):
            steps = np.abs(np.diff(self.log_snr))
        steps = steps[np.isfinite(steps)]
        if not len(steps):
            raise ConfigurationError("a single level has no resolution")
        return float(np.median(steps))

    def __repr__(self):
        return f"LevelGrid({self.name}, {self.values.min()}..{self.values.max()})"


def coherence_levels(tone_components: int) -> LevelGrid:
    """Coherence 0..T-1 at a fixed total of T tones per chord.

    SNR is figure tones over background tones, so coherence 0 maps to -inf.
    """
    if tone_components < 2:
        raise ConfigurationError("need at least two tones per chord for coherence levels")
    coherence = np.arange(tone_components)
    with np.errstate(divide='ignore'):
        log_snr = np.log(coherence / (tone_components - coherence))
    return LevelGrid(coherence, log_snr, name="coherence")


def background_levels(tone_components: int, base_coherence: int) -> LevelGrid:
    """Background tone counts 1..T-c for a fixed figure coherence c."""
    if not 1 <= base_coherence < tone_components:
        raise ConfigurationError(
            f"base coherence {base_coherence} must be within 1..{tone_components - 1}")
    background = np.arange(1, tone_components - base_coherence + 1)
    return LevelGrid(background, np.log(base_coherence / background), name="background")
