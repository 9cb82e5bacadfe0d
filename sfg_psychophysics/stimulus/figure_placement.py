"""
Temporal placement and frequency trajectory of the SFG figure.
"""
# Standard library imports
from dataclasses import dataclass
from typing import Tuple

# Third-party imports
import numpy as np

# Local imports
from ..errors import ConfigurationError


@dataclass(frozen=True)
class FigureTrajectory:
    """Grid indices of the figure tones over the figure interval.

    ``indices`` has one row per coherent tone and one column per figure chord.
    ``start`` and ``end`` are inclusive 0-based chord indices.
    """
    start: int
    end: int
    indices: np.ndarray

    def contains(self, chord: int) -> bool:
        return self.start <= chord <= self.end

    def chord_indices(self, chord: int) -> np.ndarray:
        """Figure grid indices in a given (absolute) chord."""
        if not self.contains(chord):
            raise IndexError(f"chord {chord} is outside the figure interval [{self.start}, {self.end}]")
        return self.indices[:, chord - self.start]


class FigurePlacer:
    """
    Selects where the figure sits in time and which grid indices it uses.

    The starting indices of a stepped figure are restricted so that shifting
    every index by ``figure_step`` once per chord never leaves the grid:
    the admissible range shrinks by ``|step| * (duration - 1)`` at the top for
    rising figures and at the bottom for falling ones.
    """

    def __init__(self, params, grid_length: int):
        self.duration = params.figure_duration
        self.coherence = params.figure_coherence
        self.step = params.figure_step
        self.grid_length = int(grid_length)
        self._window = params.figure_onset_window()
        self._fixed_onset = params.figure_onset is not None
        self._height = params.trajectory_height()

    def place_interval(self, rng: np.random.Generator) -> Tuple[int, int]:
        """Return the inclusive (start, end) chords of the figure.

        A fixed onset is used as is and consumes no random numbers; otherwise
        the start is drawn uniformly from all admissible windows.
        """
        first, last = self._window
        if last < first:
            raise ConfigurationError("figure placement window is empty")
        if self._fixed_onset:
            start = first
        else:
            start = int(rng.integers(first, last, endpoint=True))
        return start, start + self.duration - 1

    def start_index_range(self) -> np.ndarray:
        """Grid indices a figure tone may start from."""
        n_valid = self.grid_length - self._height
        if n_valid < self.coherence:
            raise ConfigurationError(
                f"only {max(n_valid, 0)} starting indices keep a step-{self.step} figure on the grid, "
                f"{self.coherence} needed")
        valid = np.arange(n_valid)
        if self.step < 0:
            valid = valid + self._height
        return valid

    def draw_trajectory(self, start: int, rng: np.random.Generator) -> FigureTrajectory:
        """Draw distinct starting indices and step them across the figure chords."""
        valid = self.start_index_range()
        start_indices = rng.choice(valid, size=self.coherence, replace=False)
        steps = np.arange(self.duration) * self.step
        indices = start_indices[:, np.newaxis] + steps[np.newaxis, :]
        return FigureTrajectory(start=start, end=start + self.duration - 1, indices=indices.astype(int))

    def draw_decoy(self, rng: np.random.Generator) -> np.ndarray:
        """Independent figure-sized draw for one chord of a figure-absent stimulus."""
        return rng.choice(self.grid_length, size=self.coherence, replace=False)
