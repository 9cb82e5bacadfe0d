import sys
from pathlib import Path

import numpy as np
import pytest

# Ensure project root is importable
proj_root = Path(__file__).resolve().parents[1]
if str(proj_root) not in sys.path:
    sys.path.insert(0, str(proj_root))

from sfg_psychophysics.stimulus import StimulusParameters


@pytest.fixture
def base_params():
    """Lab default stimulus: 2 s of 50 ms chords on a 129-point grid."""
    return StimulusParameters(
        sample_rate=44100,
        chord_duration=0.05,
        chord_onset=0.01,
        total_duration=2.0,
        tone_components=(9, 21),
        freq_min=179,
        freq_max=7246,
        grid_length=129,
        figure_duration=10,
        figure_coherence=4,
        figure_step=0,
        seed=1234,
    )


@pytest.fixture
def rng():
    return np.random.default_rng(12345)
