"""
Stimulus parameters for stochastic figure-ground (SFG) stimuli.
"""
# Standard library imports
from dataclasses import dataclass, replace, asdict
from typing import Dict, Optional, Tuple, Union

# Third-party imports
import numpy as np

# Local imports
from ..errors import ConfigurationError
from ..utils.defaults import (
    DEFAULT_SAMPLE_RATE,
    DEFAULT_CHORD_DURATION,
    DEFAULT_CHORD_ONSET,
    DEFAULT_TOTAL_DURATION,
    DEFAULT_TONE_COMPONENTS,
    DEFAULT_FREQ_MIN,
    DEFAULT_FREQ_MAX,
    DEFAULT_GRID_LENGTH,
    DEFAULT_FIGURE_DURATION,
    DEFAULT_FIGURE_COHERENCE,
    DEFAULT_FIGURE_STEP,
    DEFAULT_FIGURE_MIN_ONSET,
    DEFAULT_SNR_MAX_DEVIATION,
)

ToneComponents = Union[int, Tuple[int, int]]

# tolerance when checking that durations map onto whole sample / chord counts
_WHOLE_TOL = 1e-6


def _whole_count(value: float, name: str) -> int:
    """Return value as int, raising if it is not a whole number."""
    rounded = int(round(value))
    if abs(value - rounded) > _WHOLE_TOL:
        raise ConfigurationError(f"{name} must correspond to a whole number of samples, got {value}")
    return rounded


@dataclass(frozen=True)
class StimulusParameters:
    """
    Immutable parameter set for a single SFG stimulus.

    Durations are in seconds, frequencies in Hz. ``figure_duration`` is in
    chords, ``figure_coherence`` is the number of figure tones per chord and
    ``figure_step`` is the number of grid steps the figure moves per chord
    (0 = static figure). ``figure_onset`` is a 0-based chord index, or None to
    place the figure at random inside
    ``[figure_min_onset, total_duration - figure_min_onset]``.

    ``tone_components`` is either an exact background tone count per chord or
    an inclusive ``(min, max)`` range. It is ignored when ``snr`` is set, in
    which case the background count is derived from the figure tone count.
    """
    sample_rate: int = DEFAULT_SAMPLE_RATE
    chord_duration: float = DEFAULT_CHORD_DURATION
    chord_onset: float = DEFAULT_CHORD_ONSET
    total_duration: float = DEFAULT_TOTAL_DURATION
    tone_components: ToneComponents = DEFAULT_TONE_COMPONENTS
    freq_min: float = DEFAULT_FREQ_MIN
    freq_max: float = DEFAULT_FREQ_MAX
    grid_length: int = DEFAULT_GRID_LENGTH
    figure_duration: int = DEFAULT_FIGURE_DURATION
    figure_coherence: int = DEFAULT_FIGURE_COHERENCE
    figure_step: int = DEFAULT_FIGURE_STEP
    figure_onset: Optional[int] = None
    figure_min_onset: float = DEFAULT_FIGURE_MIN_ONSET
    snr: Optional[float] = None
    snr_max_deviation: int = DEFAULT_SNR_MAX_DEVIATION
    seed: Optional[int] = None

    def __post_init__(self):
        # YAML and CSV give lists; keep the dataclass hashable
        if isinstance(self.tone_components, (list, tuple, np.ndarray)):
            values = tuple(int(v) for v in self.tone_components)
            if len(values) == 1:
                values = (values[0], values[0])
            elif len(values) != 2:
                raise ConfigurationError(
                    f"tone_components must be an int or a (min, max) pair, got {self.tone_components!r}")
            object.__setattr__(self, 'tone_components', values)
        else:
            object.__setattr__(self, 'tone_components', int(self.tone_components))

    # ------------------------------------------------------------------
    # Derived quantities
    # ------------------------------------------------------------------
    @property
    def n_chords(self) -> int:
        """Whole chords in the stimulus; a trailing partial chord is dropped."""
        return int(np.floor(self.total_duration / self.chord_duration + _WHOLE_TOL))

    @property
    def chord_samples(self) -> int:
        return _whole_count(self.sample_rate * self.chord_duration, "chord_duration")

    @property
    def onset_samples(self) -> int:
        return _whole_count(self.sample_rate * self.chord_onset, "chord_onset")

    @property
    def total_samples(self) -> int:
        return _whole_count(self.sample_rate * self.total_duration, "total_duration")

    @property
    def snr_mode(self) -> bool:
        return self.snr is not None

    def average_background_count(self) -> float:
        """Mean background tones per chord needed to reach the target SNR."""
        if not self.snr_mode or self.snr == 0:
            return 0.0
        figure_tones_per_chord = self.figure_duration * self.figure_coherence / self.n_chords
        return figure_tones_per_chord / self.snr

    def background_count_range(self) -> Tuple[int, int]:
        """Inclusive (min, max) background tone count per chord."""
        if not self.snr_mode:
            if isinstance(self.tone_components, tuple):
                return self.tone_components
            return self.tone_components, self.tone_components
        if self.snr == 0:
            return 0, int(self.snr_max_deviation)
        average = self.average_background_count()
        low = int(np.round(average - self.snr_max_deviation))
        high = int(np.round(average + self.snr_max_deviation))
        return max(low, 0), high

    @property
    def tone_ceiling(self) -> int:
        """Upper bound on background + figure tones in any chord."""
        return self.background_count_range()[1]

    def figure_onset_window(self) -> Tuple[int, int]:
        """Inclusive (first, last) admissible 0-based figure start chord."""
        if self.figure_onset is not None:
            return self.figure_onset, self.figure_onset
        first = int(np.round(self.figure_min_onset / self.chord_duration))
        last = int(np.round((self.total_duration - self.figure_min_onset) / self.chord_duration)) \
            - self.figure_duration
        return first, last

    def trajectory_height(self) -> int:
        """Grid steps covered by a stepped figure from first to last chord."""
        return abs(self.figure_step) * (self.figure_duration - 1)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def validate(self) -> "StimulusParameters":
        """Raise ConfigurationError for any inconsistent combination; return self."""
        if self.sample_rate <= 0:
            raise ConfigurationError("sample_rate must be positive")
        if self.chord_duration <= 0 or self.total_duration <= 0 or self.chord_onset < 0:
            raise ConfigurationError("durations must be positive")

        chord_samples = self.chord_samples
        onset_samples = self.onset_samples
        total_samples = self.total_samples
        if 2 * onset_samples > chord_samples:
            raise ConfigurationError(
                f"onset/offset ramps ({onset_samples} samples each) do not fit into a chord "
                f"of {chord_samples} samples")
        if self.n_chords < 1 or total_samples < chord_samples:
            raise ConfigurationError("total_duration is shorter than a single chord")

        if self.freq_min <= 0 or self.freq_max <= self.freq_min:
            raise ConfigurationError("frequency range must satisfy 0 < freq_min < freq_max")
        if self.grid_length < 2:
            raise ConfigurationError("grid_length must be at least 2")

        if self.snr_mode and self.snr < 0:
            raise ConfigurationError("snr must be >= 0, use None to disable SNR mode")
        low, high = self.background_count_range()
        if low < 0 or high < low:
            raise ConfigurationError(f"invalid background tone range ({low}, {high})")
        if high > self.grid_length:
            raise ConfigurationError(
                f"requested {high} background tones but the frequency grid only has "
                f"{self.grid_length} entries")

        if self.figure_duration < 1:
            raise ConfigurationError("figure_duration must be at least one chord")
        if self.figure_coherence < 0:
            raise ConfigurationError("figure_coherence must be >= 0")
        if self.figure_coherence > high:
            raise ConfigurationError(
                f"figure coherence {self.figure_coherence} exceeds the tone budget ceiling {high}")
        if self.grid_length - self.trajectory_height() < self.figure_coherence:
            raise ConfigurationError(
                f"figure with step {self.figure_step} over {self.figure_duration} chords "
                f"cannot fit {self.figure_coherence} tones into a grid of {self.grid_length}")

        first, last = self.figure_onset_window()
        if self.figure_onset is not None:
            if first < 0 or last + self.figure_duration > self.n_chords:
                raise ConfigurationError(
                    f"figure at chord {self.figure_onset} with duration {self.figure_duration} "
                    f"does not fit into {self.n_chords} chords")
        elif last < first or first < 0:
            raise ConfigurationError(
                f"no room for a {self.figure_duration}-chord figure between "
                f"{self.figure_min_onset}s and {self.total_duration - self.figure_min_onset}s")
        return self

    # ------------------------------------------------------------------
    # Pure updates
    # ------------------------------------------------------------------
    def with_coherence(self, coherence: int) -> "StimulusParameters":
        return replace(self, figure_coherence=int(coherence))

    def with_tone_components(self, tone_components: ToneComponents) -> "StimulusParameters":
        return replace(self, tone_components=tone_components)

    def with_seed(self, seed: Optional[int]) -> "StimulusParameters":
        return replace(self, seed=seed)

    def to_dict(self) -> Dict:
        return asdict(self)
