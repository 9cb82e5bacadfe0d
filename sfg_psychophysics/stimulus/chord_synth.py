"""
Chord-by-chord synthesis of stochastic figure-ground (SFG) stimuli.

A stimulus is a sequence of short chords of pure tones drawn from a
log-spaced frequency grid. Inside the figure interval a fixed number of tones
(the coherence) either repeat or move together across chords; the remaining
background tones are redrawn independently for every chord. Figure-absent
stimuli get the same number of extra tones, drawn independently per chord.

All randomness comes from one ``numpy.random.Generator`` created from
``params.seed`` (or passed in), consumed in this order:

1. figure start chord, only when ``figure_onset`` is None;
2. figure starting grid indices, only when the figure is present;
3. per chord, in chord order: background tone count, background indices,
   then decoy indices for figure-absent chords inside the figure interval.
"""
# Standard library imports
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

# Third-party imports
import numpy as np

# Local imports
from .figure_placement import FigurePlacer, FigureTrajectory
from .frequency_grid import FrequencyGrid

logger = logging.getLogger(__name__)


@dataclass
class StimulusOutput:
    """Audio and per-chord frequency assignments of one synthesized stimulus.

    ``samples`` is ``(total_samples, 2)`` with identical channels, peak
    normalised to 1. ``figure_freqs`` is ``(coherence, n_chords)`` and
    ``background_freqs`` is ``(tone_ceiling, n_chords)``, both in Hz and NaN
    where a slot is unused. Decoy tones of figure-absent stimuli are recorded
    in ``figure_freqs``.
    """
    samples: np.ndarray
    figure_freqs: np.ndarray
    background_freqs: np.ndarray
    figure_start: int
    figure_end: int
    figure_present: bool
    grid: FrequencyGrid
    figure_indices: List[np.ndarray] = field(default_factory=list)
    background_indices: List[np.ndarray] = field(default_factory=list)
    trajectory: Optional[FigureTrajectory] = None

    @property
    def n_chords(self) -> int:
        return self.background_freqs.shape[1]

    def chord_frequencies(self, chord: int) -> Tuple[np.ndarray, np.ndarray]:
        """(figure, background) frequencies of a chord with NaN padding removed."""
        fig = self.figure_freqs[:, chord]
        bg = self.background_freqs[:, chord]
        return fig[~np.isnan(fig)], bg[~np.isnan(bg)]


def onset_offset_ramp(chord_samples: int, onset_samples: int) -> np.ndarray:
    """Raised-sine ramp: rise over the onset, flat middle, mirrored fall."""
    rise = np.sin(np.linspace(0, 1, onset_samples) * np.pi / 2)
    flat = np.ones(chord_samples - 2 * onset_samples)
    return np.concatenate([rise, flat, rise[::-1]])


class ChordSynthesizer:
    """Builds SFG stimuli for one validated parameter set.

    The grid, ramp and time axis are computed once per instance; every call
    to :meth:`synthesize` returns fresh buffers.
    """

    def __init__(self, params):
        self.params = params.validate()
        self.grid = FrequencyGrid.from_params(params)
        self.placer = FigurePlacer(params, len(self.grid))
        self.ramp = onset_offset_ramp(params.chord_samples, params.onset_samples)
        self.time_nodes = np.arange(1, params.chord_samples + 1) / params.sample_rate

        dropped = params.total_samples - params.n_chords * params.chord_samples
        if dropped > 0:
            logger.warning(
                "total duration %.4fs is not a whole number of %.4fs chords, "
                "the last %d samples are left silent", params.total_duration,
                params.chord_duration, dropped)

    def render_chord(self, frequencies: np.ndarray) -> np.ndarray:
        """Sum of unit sinusoids at the given frequencies, ramped."""
        frequencies = np.asarray(frequencies, dtype=float)
        tones = np.sin(2 * np.pi * frequencies[:, np.newaxis] * self.time_nodes[np.newaxis, :])
        return tones.sum(axis=0) * self.ramp

    def synthesize(self, figure_present: bool = True,
                   rng: Optional[np.random.Generator] = None) -> StimulusOutput:
        """
        Generate one stimulus.

        Args:
            figure_present (bool): Embed the coherent figure if True, otherwise
                add independently drawn decoy tones in the figure interval.
            rng (np.random.Generator): Random source. Defaults to a generator
                seeded with ``params.seed``.

        Returns:
            StimulusOutput: audio buffer and frequency assignments.
        """
        params = self.params
        if rng is None:
            rng = np.random.default_rng(params.seed)

        n_chords = params.n_chords
        n_samples = params.chord_samples
        grid_length = len(self.grid)
        low, ceiling = params.background_count_range()
        coherence = params.figure_coherence

        start, end = self.placer.place_interval(rng)
        trajectory = self.placer.draw_trajectory(start, rng) if figure_present else None

        samples = np.zeros((params.total_samples, 2))
        figure_freqs = np.full((coherence, n_chords), np.nan)
        background_freqs = np.full((ceiling, n_chords), np.nan)
        all_figure_idx = []
        all_background_idx = []
        no_tones = np.empty(0, dtype=int)

        for chord in range(n_chords):
            n_background = int(rng.integers(low, ceiling, endpoint=True))
            in_figure = start <= chord <= end

            if in_figure and figure_present:
                figure_idx = trajectory.chord_indices(chord)
                # only tones not already in the figure can be used for background
                available = np.setdiff1d(np.arange(grid_length), figure_idx)
                background_idx = rng.choice(available, size=min(n_background, len(available)),
                                            replace=False)
            elif in_figure:
                background_idx = rng.choice(grid_length, size=n_background, replace=False)
                figure_idx = self.placer.draw_decoy(rng)
                background_idx = background_idx[~np.isin(background_idx, figure_idx)]
            else:
                background_idx = rng.choice(grid_length, size=n_background, replace=False)
                figure_idx = no_tones

            # drop the tail of the background when the chord is over budget
            if len(background_idx) + len(figure_idx) > ceiling:
                background_idx = background_idx[:max(ceiling - len(figure_idx), 0)]

            figure_hz = self.grid.to_hz(figure_idx)
            background_hz = self.grid.to_hz(background_idx)
            if in_figure:
                figure_freqs[:, chord] = figure_hz
            background_freqs[:len(background_hz), chord] = background_hz
            all_figure_idx.append(np.asarray(figure_idx, dtype=int))
            all_background_idx.append(np.asarray(background_idx, dtype=int))

            chord_wave = self.render_chord(np.concatenate([background_hz, figure_hz]))
            offset = chord * n_samples
            samples[offset:offset + n_samples, :] = chord_wave[:, np.newaxis]

        peak = np.max(np.abs(samples))
        if peak > 0:
            samples /= peak
        else:
            logger.warning("stimulus contains no tones, returning silence")

        logger.debug(
            "synthesized %d chords, figure %s in chords %d-%d, coherence %d, step %d",
            n_chords, "present" if figure_present else "absent", start, end,
            coherence, params.figure_step)

        return StimulusOutput(
            samples=samples,
            figure_freqs=figure_freqs,
            background_freqs=background_freqs,
            figure_start=start,
            figure_end=end,
            figure_present=figure_present,
            grid=self.grid,
            figure_indices=all_figure_idx,
            background_indices=all_background_idx,
            trajectory=trajectory,
        )


def synthesize(params, figure_present: bool = True,
               rng: Optional[np.random.Generator] = None) -> StimulusOutput:
    """Generate a single SFG stimulus for ``params``."""
    return ChordSynthesizer(params).synthesize(figure_present=figure_present, rng=rng)
