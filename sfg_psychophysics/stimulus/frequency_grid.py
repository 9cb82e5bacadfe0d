"""Log-uniform frequency grid from which all SFG tones are drawn."""

import numpy as np

from ..errors import ConfigurationError


class FrequencyGrid:
    """Ordered, log-uniformly spaced set of candidate tone frequencies.

    Grid indices are the unit in which the figure is stepped up or down.
    Tones are rendered at the rounded (integer Hz) grid frequencies.
    """

    def __init__(self, freq_min, freq_max, length):
        if length < 2:
            raise ConfigurationError("frequency grid needs at least two points")
        if freq_min <= 0 or freq_max <= freq_min:
            raise ConfigurationError("frequency grid requires 0 < freq_min < freq_max")
        self.freq_min = float(freq_min)
        self.freq_max = float(freq_max)
        self._log_freqs = np.linspace(np.log(freq_min), np.log(freq_max), int(length))
        self._log_freqs.flags.writeable = False
        self._rounded = np.round(np.exp(self._log_freqs))
        self._rounded.flags.writeable = False

    @classmethod
    def from_params(cls, params):
        return cls(params.freq_min, params.freq_max, params.grid_length)

    def __len__(self):
        return len(self._log_freqs)

    @property
    def frequencies(self):
        """Exact grid frequencies in Hz."""
        return np.exp(self._log_freqs)

    @property
    def rounded(self):
        """Grid frequencies rounded to whole Hz (read-only view)."""
        return self._rounded

    def to_hz(self, indices):
        """Rounded frequencies for an array of grid indices."""
        indices = np.asarray(indices, dtype=int)
        if indices.size and (indices.min() < 0 or indices.max() >= len(self)):
            raise IndexError(f"grid index out of range [0, {len(self)})")
        return self._rounded[indices]

    def __repr__(self):
        return f"FrequencyGrid({self.freq_min:g}, {self.freq_max:g}, {len(self)})"
