import logging

import numpy as np
import pytest

from sfg_psychophysics.errors import ConfigurationError, EstimatorDegenerateError
from sfg_psychophysics.procedures import QuestStaircase, coherence_levels
from sfg_psychophysics.simulation import SimulatedListener


@pytest.fixture
def quest():
    return QuestStaircase(t_guess=-0.21, t_guess_sd=0.5, p_threshold=0.85)


def test_prior_statistics(quest):
    assert quest.mean() == pytest.approx(-0.21, abs=1e-9)
    assert quest.mode() == pytest.approx(-0.21)
    assert quest.sd() == pytest.approx(0.5, abs=1e-3)
    assert quest.quantile(0.5) == pytest.approx(-0.21, abs=quest.grain)
    assert quest.recommend() == quest.mean()
    assert quest.pdf.sum() == pytest.approx(1.0)
    assert quest.trial_count == 0


def test_table_spans_range(quest):
    assert len(quest.x) == 7001
    assert quest.x[0] == pytest.approx(-3.5)
    assert quest.x[-1] == pytest.approx(3.5)


def test_psychometric_function(quest):
    assert float(quest.p_correct(0.0)) == pytest.approx(0.85)
    assert float(quest.p_correct(-10.0)) == pytest.approx(0.5)
    assert float(quest.p_correct(10.0)) == pytest.approx(0.98)
    values = quest.p_correct(np.linspace(-2, 2, 50))
    assert np.all(np.diff(values) >= 0)


def test_recommend_on_level_grid(quest):
    # log(9 / 11) is the coherence level closest to -0.21 at 20 tones
    assert quest.recommend(coherence_levels(20)) == 9


def test_update_direction(quest):
    seen = quest.copy()
    seen.update(-0.21, True)
    assert seen.mean() < quest.mean()
    missed = quest.copy()
    missed.update(-0.21, False)
    assert missed.mean() > quest.mean()
    assert quest.trial_count == 0
    assert seen.history == [(-0.21, True)]


def test_missing_response_scored_as_incorrect(quest):
    missing = quest.copy()
    wrong = quest.copy()
    for intensity in (-0.3, 0.1, -0.5):
        missing.update(intensity, None)
        wrong.update(intensity, False)
    np.testing.assert_array_equal(missing.pdf, wrong.pdf)
    assert [r for _, r in missing.history] == [False, False, False]


def test_out_of_range_intensity_is_clipped(quest, caplog):
    with caplog.at_level(logging.WARNING):
        quest.update(10.0, True)
    assert "clipped" in caplog.text
    assert quest.history[-1][0] == pytest.approx(-0.21 + 3.5)


def test_degenerate_posterior_raises():
    quest = QuestStaircase(t_guess=0.0, t_guess_sd=1.0, p_threshold=0.5,
                           beta=20, delta=0.0, gamma=0.0)
    quest.update(3.5, False)
    before = quest.pdf
    with pytest.raises(EstimatorDegenerateError):
        quest.update(-3.5, True)
    np.testing.assert_array_equal(quest.pdf, before)
    assert quest.trial_count == 1


@pytest.mark.parametrize("kwargs", [
    {'t_guess_sd': 0},
    {'p_threshold': 0.4},
    {'p_threshold': 0.99},
    {'beta': -1},
    {'grain': 0},
    {'gamma': 0.6, 'delta': 0.5},
])
def test_invalid_settings(kwargs):
    settings = {'t_guess': 0.0, 't_guess_sd': 1.0, 'p_threshold': 0.85, **kwargs}
    with pytest.raises(ConfigurationError):
        QuestStaircase(**settings)


def test_quantile_order_checked(quest):
    with pytest.raises(ValueError):
        quest.quantile(1.5)


def test_recovers_simulated_threshold():
    true_threshold = -0.4
    listener = SimulatedListener(true_threshold, p_threshold=0.85)
    rng = np.random.default_rng(2024)
    errors, early_sd, final_sd = [], [], []
    for _ in range(40):
        quest = QuestStaircase(t_guess=0.0, t_guess_sd=2.0, p_threshold=0.85)
        for trial in range(60):
            intensity = quest.mean()
            quest.update(intensity, listener.respond(intensity, random_state=rng))
            if trial == 9:
                early_sd.append(quest.sd())
        final_sd.append(quest.sd())
        errors.append(quest.mean() - true_threshold)
    errors = np.array(errors)
    assert abs(errors.mean()) < 0.1
    assert np.mean(np.abs(errors) < 0.3) >= 0.8
    assert np.mean(final_sd) < np.mean(early_sd)
    assert max(final_sd) < 2.0
