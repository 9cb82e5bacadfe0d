import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest

from sfg_psychophysics.procedures import coherence_run
from sfg_psychophysics.simulation import SimulatedListener, simulate_threshold_run
from sfg_psychophysics.stimulus import StimulusParameters, synthesize
from sfg_psychophysics.visualization import plot_chords, plot_posterior_evolution, plot_staircase


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


@pytest.fixture
def finished_run():
    run = coherence_run(20, min_trials=20, extra_trials=0, rng=4, keep_posteriors=True)
    return simulate_threshold_run(run, SimulatedListener(-0.5, 0.85), random_state=4)


@pytest.mark.parametrize("figure_present", [True, False])
def test_plot_chords(base_params, figure_present):
    params = StimulusParameters(**{**base_params.to_dict(), 'figure_step': 1})
    fig = plot_chords(synthesize(params, figure_present), params)
    assert len(fig.axes) >= 2
    assert "Coherence 4" in fig._suptitle.get_text()


def test_plot_staircase(finished_run):
    fig = plot_staircase(finished_run, title="Coherence run")
    assert fig.axes[0].get_title() == "Coherence run"


def test_plot_posterior_evolution(finished_run):
    fig = plot_posterior_evolution(finished_run.posteriors, finished_run.staircase.intensities)
    image = fig.axes[0].images[0]
    assert image.get_array().shape == (len(finished_run.staircase.x), finished_run.trial_count)
    assert np.isfinite(image.get_array()).all()
