#!/usr/bin/env python3
"""
Main simulation script for in-silico SFG thresholding.

Runs the coherence staircase and then the background staircase (which uses
the coherence estimate) against simulated listeners and reports how well the
thresholds are recovered.
"""

import argparse
import logging
import sys
from pathlib import Path

import matplotlib.pyplot as plt
import seaborn as sns

# Add the package to the path
sys.path.append(str(Path(__file__).parent.parent))

from sfg_psychophysics.analysis import estimate_errors
from sfg_psychophysics.errors import ConfigurationError
from sfg_psychophysics.procedures import background_run, coherence_run
from sfg_psychophysics.simulation import SimulatedListener, simulate_batch, simulate_threshold_run
from sfg_psychophysics.utils.config import (
    load_config,
    quest_settings_from_config,
    run_settings_from_config,
    stimulus_parameters_from_config,
)

DEFAULT_CONFIG = Path(__file__).parent.parent / 'configs' / 'default.yaml'


def run_simulation(config, n_listeners, plot_path=None):
    """Run the two-stage thresholding simulation based on configuration."""
    params = stimulus_parameters_from_config(config)
    if isinstance(params.tone_components, tuple):
        raise ConfigurationError("thresholding needs a fixed tone count per chord")
    tone_components = params.tone_components

    quest = quest_settings_from_config(config)
    run_settings = run_settings_from_config(config)
    sim = config.get('simulation', {})
    seed = sim.get('seed')

    staircase_keys = ('t_guess', 't_guess_sd', 'p_threshold')
    staircase_args = {k: quest[k] for k in staircase_keys if k in quest}
    quest_params = {k: v for k, v in quest.items() if k not in staircase_keys}

    listener = SimulatedListener(
        true_threshold=sim.get('true_threshold', -0.5),
        p_threshold=staircase_args.get('p_threshold', 0.85),
        miss_rate=sim.get('miss_rate', 0.0),
        **{k: quest_params[k] for k in ('beta', 'delta', 'gamma') if k in quest_params},
    )

    print(f"Running coherence thresholding for {n_listeners} simulated listeners")
    print(f"Tones per chord: {tone_components}, true threshold: {listener.true_threshold}")

    def make_coherence_run(rng):
        return coherence_run(tone_components, quest_params=quest_params, rng=rng,
                             **staircase_args, **run_settings)

    coherence_results = simulate_batch(n_listeners, make_coherence_run, listener, seed=seed)
    summary = estimate_errors(coherence_results)

    # background stage for one listener, consuming the coherence estimate
    first = simulate_threshold_run(make_coherence_run(seed), listener, random_state=seed)
    base_coherence = first.estimate()
    print(f"Coherence estimate for background thresholding: {base_coherence}")
    background = background_run(tone_components, base_coherence, quest_params=quest_params,
                                rng=seed, **run_settings)
    background = simulate_threshold_run(background, listener, random_state=seed)
    print(f"Background tone estimate: {background.estimate()} ({background.status.value})")

    if plot_path:
        fig, ax = plt.subplots(figsize=(10, 6))
        sns.histplot(data=coherence_results, x='error', hue='status', ax=ax)
        ax.set_title('Coherence threshold error (log SNR)')
        fig.savefig(plot_path)
        plt.close(fig)
        print(f"Saved error distribution to {plot_path}")

    return summary


def main():
    parser = argparse.ArgumentParser(description='Run SFG thresholding simulation study')
    parser.add_argument('--config', type=str,
                        default=str(DEFAULT_CONFIG),
                        help='Path to configuration file')
    parser.add_argument('--n-listeners', type=int,
                        help='Number of listeners to simulate')
    parser.add_argument('--plot', type=str,
                        help='Save a histogram of estimate errors to this path')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log staircase state transitions')

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="[%(levelname)s] %(name)s: %(message)s")

    # Load configuration
    try:
        config = load_config(args.config)
    except FileNotFoundError:
        print(f"Configuration file {args.config} not found.")
        sys.exit(1)

    n_listeners = args.n_listeners or config.get('simulation', {}).get('n_listeners', 100)

    try:
        results = run_simulation(config, n_listeners, plot_path=args.plot)
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}")
        sys.exit(2)

    print("Simulation completed successfully!")
    print(f"Results: {results}")


if __name__ == "__main__":
    main()
