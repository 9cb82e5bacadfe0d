"""
Tabular descriptions of generated stimuli and batch generation of stimulus sets.

Nothing here writes files; the DataFrames follow the column layout of the
stimulus parameter CSVs so a caller can save them next to the audio.
"""
# Standard library imports
import logging
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

# Third-party imports
import numpy as np
import pandas as pd

# Local imports
from .chord_synth import ChordSynthesizer, StimulusOutput
from ..errors import ConfigurationError
from ..utils.defaults import MAX_STIMULI_PER_SET

logger = logging.getLogger(__name__)

RECORD_COLUMNS = [
    'filename', 'totalDuration', 'chordDuration', 'chordOnset', 'figurePresent',
    'figureDuration', 'figureCoherence', 'figureStepSize', 'sampleFrequency',
    'figureStartChord', 'figureEndChord', 'snr', 'snrMaxDeviation', 'toneComponents',
]


def stimulus_record(params, output: StimulusOutput, filename: str) -> Dict:
    """One row describing a generated stimulus."""
    return {
        'filename': filename,
        'totalDuration': params.total_duration,
        'chordDuration': params.chord_duration,
        'chordOnset': params.chord_onset,
        'figurePresent': bool(output.figure_present),
        'figureDuration': params.figure_duration,
        'figureCoherence': params.figure_coherence,
        'figureStepSize': params.figure_step,
        'sampleFrequency': params.sample_rate,
        'figureStartChord': output.figure_start,
        'figureEndChord': output.figure_end,
        'snr': np.nan if params.snr is None else params.snr,
        'snrMaxDeviation': params.snr_max_deviation,
        'toneComponents': str(params.tone_components),
    }


def records_to_dataframe(records: List[Dict]) -> pd.DataFrame:
    return pd.DataFrame(records, columns=RECORD_COLUMNS)


def chord_frequency_frame(output: StimulusOutput) -> pd.DataFrame:
    """Long-format (chord, role, frequency) table of all tones in a stimulus."""
    rows = []
    for chord in range(output.n_chords):
        figure, background = output.chord_frequencies(chord)
        role = 'figure' if output.figure_present else 'decoy'
        rows.extend((chord, role, float(f)) for f in figure)
        rows.extend((chord, 'background', float(f)) for f in background)
    return pd.DataFrame(rows, columns=['chord', 'role', 'frequency'])


def generate_stimulus_set(n_stimuli: int, params, figure_present: bool,
                          seed: Optional[int] = None,
                          durations: Optional[Sequence[int]] = None,
                          coherences: Optional[Sequence[int]] = None,
                          step_sizes: Optional[Sequence[int]] = None,
                          prefix: str = 'stim') -> Tuple[pd.DataFrame, Dict[str, StimulusOutput]]:
    """
    Generate a set of stimuli sharing base parameters.

    For every stimulus the figure duration, coherence and step size are picked
    at random from the given lists (the base parameter value when a list is
    not given), and the stimulus gets its own seed derived from ``seed``.

    Args:
        n_stimuli (int): Number of stimuli, 1 to 1000.
        params (StimulusParameters): Base parameters.
        figure_present (bool): Figure or decoy stimuli.
        seed (int): Seed for the set; the same seed reproduces the set.
        durations, coherences, step_sizes (list): Candidate values.
        prefix (str): Filename prefix.

    Returns:
        tuple: (DataFrame of stimulus records, dict filename -> StimulusOutput)
    """
    if not 1 <= n_stimuli <= MAX_STIMULI_PER_SET:
        raise ConfigurationError(f"n_stimuli must be within 1..{MAX_STIMULI_PER_SET}, got {n_stimuli}")

    rng = np.random.default_rng(seed)
    durations = list(durations) if durations else [params.figure_duration]
    coherences = list(coherences) if coherences else [params.figure_coherence]
    step_sizes = list(step_sizes) if step_sizes else [params.figure_step]
    digits = len(str(n_stimuli))

    records = []
    outputs = {}
    for number in range(1, n_stimuli + 1):
        stim_params = replace(
            params,
            figure_duration=int(durations[rng.integers(len(durations))]),
            figure_coherence=int(coherences[rng.integers(len(coherences))]),
            figure_step=int(step_sizes[rng.integers(len(step_sizes))]),
            seed=int(rng.integers(2 ** 31 - 1)),
        )
        output = ChordSynthesizer(stim_params).synthesize(figure_present=figure_present)
        filename = f"{prefix}-{number:0{digits}d}"
        records.append(stimulus_record(stim_params, output, filename))
        outputs[filename] = output

    logger.info("generated %d %s stimuli", n_stimuli,
                "figure" if figure_present else "figure-absent")
    return records_to_dataframe(records), outputs
