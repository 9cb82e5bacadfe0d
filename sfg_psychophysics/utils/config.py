"""Loading stimulus and staircase settings from YAML files."""

from dataclasses import fields
from pathlib import Path
from typing import Dict, Optional

import yaml

from ..errors import ConfigurationError
from ..stimulus.parameters import StimulusParameters

QUEST_KEYS = {'t_guess', 't_guess_sd', 'p_threshold', 'beta', 'delta', 'gamma', 'grain', 'range'}
RUN_KEYS = {'ignore_trials', 'min_trials', 'extra_trials', 'target_sd', 'catch_ratio'}
SECTIONS = {'stimulus', 'quest', 'run', 'simulation'}


def load_config(config_path) -> Dict:
    """Load configuration from YAML file."""
    path = Path(config_path)
    with open(path, 'r') as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"{path} must contain a mapping at the top level")
    unknown = set(config) - SECTIONS
    if unknown:
        raise ConfigurationError(f"unknown config sections in {path}: {sorted(unknown)}")
    return config


def _check_keys(section: Dict, allowed, name: str) -> Dict:
    section = dict(section or {})
    unknown = set(section) - set(allowed)
    if unknown:
        raise ConfigurationError(f"unknown keys in '{name}' section: {sorted(unknown)}")
    return section


def stimulus_parameters_from_config(config: Dict, validate: bool = True) -> StimulusParameters:
    """Build StimulusParameters from the ``stimulus`` section."""
    allowed = {f.name for f in fields(StimulusParameters)}
    section = _check_keys(config.get('stimulus'), allowed, 'stimulus')
    params = StimulusParameters(**section)
    return params.validate() if validate else params


def quest_settings_from_config(config: Dict, defaults: Optional[Dict] = None) -> Dict:
    """Keyword arguments for QuestStaircase from the ``quest`` section."""
    section = _check_keys(config.get('quest'), QUEST_KEYS, 'quest')
    return {**(defaults or {}), **section}


def run_settings_from_config(config: Dict) -> Dict:
    """Keyword arguments for ThresholdRun from the ``run`` section."""
    return _check_keys(config.get('run'), RUN_KEYS, 'run')
