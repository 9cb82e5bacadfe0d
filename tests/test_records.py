import numpy as np
import pandas as pd
import pytest

from sfg_psychophysics.errors import ConfigurationError
from sfg_psychophysics.stimulus import (
    RECORD_COLUMNS,
    chord_frequency_frame,
    generate_stimulus_set,
    stimulus_record,
    synthesize,
)


def test_stimulus_record(base_params):
    output = synthesize(base_params)
    record = stimulus_record(base_params, output, 'stim-1')
    assert list(record) == RECORD_COLUMNS
    assert record['figureStartChord'] == output.figure_start
    assert record['figurePresent'] is True
    assert np.isnan(record['snr'])


def test_chord_frequency_frame(base_params):
    output = synthesize(base_params)
    frame = chord_frequency_frame(output)
    n_tones = (~np.isnan(output.figure_freqs)).sum() + (~np.isnan(output.background_freqs)).sum()
    assert len(frame) == n_tones
    assert (frame['role'] == 'figure').sum() == 4 * 10


def test_generate_set(base_params):
    records, outputs = generate_stimulus_set(3, base_params, True, seed=5, coherences=[2, 6])
    assert list(records.columns) == RECORD_COLUMNS
    assert list(records['filename']) == ['stim-1', 'stim-2', 'stim-3']
    assert set(outputs) == set(records['filename'])
    assert set(records['figureCoherence']) <= {2, 6}


def test_generate_set_is_reproducible(base_params):
    a, outputs_a = generate_stimulus_set(2, base_params, False, seed=9)
    b, outputs_b = generate_stimulus_set(2, base_params, False, seed=9)
    pd.testing.assert_frame_equal(a, b)
    for name in outputs_a:
        np.testing.assert_array_equal(outputs_a[name].samples, outputs_b[name].samples)


def test_filenames_are_zero_padded(base_params):
    records, _ = generate_stimulus_set(12, base_params.with_tone_components(9), True, seed=1,
                                       prefix='sfg')
    assert records['filename'].iloc[0] == 'sfg-01'
    assert records['filename'].iloc[-1] == 'sfg-12'


@pytest.mark.parametrize("n", [0, 1001])
def test_set_size_is_bounded(base_params, n):
    with pytest.raises(ConfigurationError):
        generate_stimulus_set(n, base_params, True)
