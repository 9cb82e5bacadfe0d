"""Example of a simulated coherence thresholding run with QUEST."""
import matplotlib.pyplot as plt

from sfg_psychophysics.analysis import needs_rerun, summarize_run
from sfg_psychophysics.procedures import coherence_run
from sfg_psychophysics.simulation import SimulatedListener, simulate_threshold_run
from sfg_psychophysics.visualization import plot_posterior_evolution, plot_staircase


def main():
    # Listener whose 85%-correct threshold sits at log SNR -0.6 (coherence ~7 of 20)
    listener = SimulatedListener(
        true_threshold=-0.6,
        p_threshold=0.85,
        miss_rate=0.02,
        false_alarm_rate=0.1
    )

    run = coherence_run(
        tone_components=20,
        min_trials=60,
        extra_trials=20,
        rng=7,
        keep_posteriors=True
    )
    run = simulate_threshold_run(run, listener, random_state=7)

    summary = summarize_run(run, listener.true_threshold)
    for key, value in summary.items():
        print(f"{key:>18}: {value}")
    if needs_rerun(run):
        print("False alarm rate too high, the run should be repeated")

    plot_staircase(run)
    plot_posterior_evolution(run.posteriors, run.staircase.intensities)
    plt.show()


if __name__ == "__main__":
    main()
