from pathlib import Path

import pytest
import yaml

from sfg_psychophysics.errors import ConfigurationError
from sfg_psychophysics.utils.config import (
    load_config,
    quest_settings_from_config,
    run_settings_from_config,
    stimulus_parameters_from_config,
)

DEFAULT_CONFIG = Path(__file__).resolve().parents[1] / 'configs' / 'default.yaml'


def write_config(tmp_path, config):
    path = tmp_path / 'config.yaml'
    path.write_text(yaml.safe_dump(config))
    return path


def test_default_config():
    config = load_config(DEFAULT_CONFIG)
    params = stimulus_parameters_from_config(config)
    assert params.n_chords == 40
    assert params.tone_components == 20
    quest = quest_settings_from_config(config)
    assert quest['p_threshold'] == 0.85
    assert run_settings_from_config(config)['min_trials'] == 90


def test_tone_range_from_yaml(tmp_path):
    path = write_config(tmp_path, {'stimulus': {'tone_components': [9, 21], 'seed': 3}})
    params = stimulus_parameters_from_config(load_config(path))
    assert params.tone_components == (9, 21)
    assert params.seed == 3


def test_quest_defaults_are_merged():
    settings = quest_settings_from_config({'quest': {'beta': 2.0}}, defaults={'beta': 3.5, 'gamma': 0.5})
    assert settings == {'beta': 2.0, 'gamma': 0.5}


def test_invalid_stimulus_is_rejected(tmp_path):
    path = write_config(tmp_path, {'stimulus': {'tone_components': 3, 'figure_coherence': 4}})
    config = load_config(path)
    with pytest.raises(ConfigurationError):
        stimulus_parameters_from_config(config)
    assert stimulus_parameters_from_config(config, validate=False).figure_coherence == 4


@pytest.mark.parametrize("builder,config", [
    (stimulus_parameters_from_config, {'stimulus': {'coherence': 4}}),
    (quest_settings_from_config, {'quest': {'slope': 3.5}}),
    (run_settings_from_config, {'run': {'max_trials': 100}}),
])
def test_unknown_keys(builder, config):
    with pytest.raises(ConfigurationError):
        builder(config)


def test_unknown_section(tmp_path):
    path = write_config(tmp_path, {'experiment': {}})
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_top_level_must_be_mapping(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / 'absent.yaml')
