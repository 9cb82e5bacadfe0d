import numpy as np
import pytest

from sfg_psychophysics.errors import ConfigurationError
from sfg_psychophysics.stimulus import FigurePlacer, StimulusParameters


def make_placer(base_params, **overrides):
    params = StimulusParameters(**{**base_params.to_dict(), **overrides})
    return FigurePlacer(params, params.grid_length)


@pytest.mark.parametrize("step", [2, -2])
def test_start_index_range_keeps_trajectory_on_grid(base_params, step):
    placer = make_placer(base_params, figure_step=step)
    valid = placer.start_index_range()
    assert len(valid) == 129 - 18
    if step > 0:
        assert valid[0] == 0 and valid[-1] == 110
    else:
        assert valid[0] == 18 and valid[-1] == 128


@pytest.mark.parametrize("step", [0, 3, -3])
def test_trajectory_moves_in_lockstep(base_params, rng, step):
    placer = make_placer(base_params, figure_step=step, figure_coherence=6)
    trajectory = placer.draw_trajectory(5, rng)
    assert trajectory.indices.shape == (6, 10)
    assert (trajectory.start, trajectory.end) == (5, 14)
    assert len(set(trajectory.indices[:, 0])) == 6
    np.testing.assert_array_equal(np.diff(trajectory.indices, axis=1), step)
    assert trajectory.indices.min() >= 0
    assert trajectory.indices.max() < 129
    np.testing.assert_array_equal(trajectory.chord_indices(7), trajectory.indices[:, 2])
    with pytest.raises(IndexError):
        trajectory.chord_indices(15)


def test_fixed_onset_consumes_no_randomness(base_params, rng):
    placer = make_placer(base_params, figure_onset=12)
    state = rng.bit_generator.state
    assert placer.place_interval(rng) == (12, 21)
    assert rng.bit_generator.state == state


def test_random_onset_covers_window(base_params, rng):
    placer = make_placer(base_params)
    starts = {placer.place_interval(rng)[0] for _ in range(2000)}
    assert starts == set(range(4, 27))


def test_too_many_figure_tones_for_stepped_figure(base_params):
    placer = FigurePlacer(
        StimulusParameters(**{**base_params.to_dict(), 'figure_step': 14}), 129)
    # 14 * 9 = 126 leaves only 3 starting indices for 4 tones
    with pytest.raises(ConfigurationError):
        placer.start_index_range()


def test_decoy_draw_is_distinct(base_params, rng):
    placer = make_placer(base_params, figure_coherence=8)
    decoy = placer.draw_decoy(rng)
    assert len(decoy) == 8
    assert len(set(decoy)) == 8
