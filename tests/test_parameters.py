import pytest

from sfg_psychophysics.errors import ConfigurationError
from sfg_psychophysics.stimulus import StimulusParameters


def test_derived_counts(base_params):
    assert base_params.n_chords == 40
    assert base_params.chord_samples == 2205
    assert base_params.onset_samples == 441
    assert base_params.total_samples == 88200
    assert base_params.validate() is base_params


def test_trailing_partial_chord_is_dropped(base_params):
    params = base_params.with_seed(1)
    params = StimulusParameters(**{**params.to_dict(), 'total_duration': 2.02})
    assert params.n_chords == 40
    assert params.total_samples == 89082


def test_tone_components_list_becomes_tuple():
    params = StimulusParameters(tone_components=[5, 10])
    assert params.tone_components == (5, 10)
    assert params.background_count_range() == (5, 10)
    assert StimulusParameters(tone_components=12).background_count_range() == (12, 12)


def test_snr_mode_background_range(base_params):
    params = StimulusParameters(**{**base_params.to_dict(), 'snr': 1.0,
                                   'figure_coherence': 8, 'figure_duration': 10})
    # 80 figure tones over 40 chords at SNR 1 -> 2 background tones per chord
    assert params.average_background_count() == pytest.approx(2.0)
    assert params.background_count_range() == (1, 3)


def test_zero_snr_background_range(base_params):
    params = StimulusParameters(**{**base_params.to_dict(), 'snr': 0.0, 'snr_max_deviation': 2})
    assert params.background_count_range() == (0, 2)


def test_pure_updates_return_new_parameters(base_params):
    updated = base_params.with_coherence(7)
    assert updated.figure_coherence == 7
    assert base_params.figure_coherence == 4
    assert base_params.with_tone_components(15).tone_components == 15
    assert base_params.with_seed(None).seed is None


def test_figure_onset_window(base_params):
    # 0.2 s min onset -> chord 4; last start leaves 0.2 s after a 10-chord figure
    assert base_params.figure_onset_window() == (4, 26)
    fixed = StimulusParameters(**{**base_params.to_dict(), 'figure_onset': 12})
    assert fixed.figure_onset_window() == (12, 12)


@pytest.mark.parametrize("overrides", [
    {'chord_duration': 0.0333},                           # fractional chord samples
    {'chord_onset': 0.03},                                # ramps longer than a chord
    {'total_duration': 0.01},                             # shorter than one chord
    {'freq_min': 8000},                                   # inverted frequency range
    {'tone_components': (10, 200)},                       # more tones than grid entries
    {'tone_components': 5, 'figure_coherence': 6},        # coherence above ceiling
    {'grid_length': 20, 'tone_components': (5, 10), 'figure_step': 3},  # stepped figure leaves grid
    {'total_duration': 1.0, 'figure_min_onset': 0.4},     # no room for the figure
    {'figure_onset': 35},                                 # fixed onset runs past the end
    {'figure_onset': -1},
    {'snr': -1.0},
    {'figure_duration': 0},
])
def test_invalid_parameters(base_params, overrides):
    params = StimulusParameters(**{**base_params.to_dict(), **overrides})
    with pytest.raises(ConfigurationError):
        params.validate()


def test_bad_tone_components_shape():
    with pytest.raises(ConfigurationError):
        StimulusParameters(tone_components=(1, 2, 3))
