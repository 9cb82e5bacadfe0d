import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib.colors import LinearSegmentedColormap


def plot_staircase(run, title="QUEST staircase", show=False):
    """
    Plot presented log SNR per trial with the running posterior mean.

    Args:
        run: ThresholdRun with recorded outcomes
        title: Plot title
        show: Call plt.show() before returning
    """
    history = run.history_frame()
    palette = sns.color_palette("deep")

    fig, ax = plt.subplots(figsize=(12, 6))
    figure_trials = history[history['figure_present']]
    for correct, color, label in ((True, palette[2], 'Correct'), (False, palette[3], 'Incorrect')):
        subset = figure_trials[figure_trials['correct'] == correct]
        ax.plot(subset['trial'], subset['log_snr'], 'o', color=color, label=label)
    ignored = figure_trials[~figure_trials['used_for_update']]
    ax.plot(ignored['trial'], ignored['log_snr'], 'o', markerfacecolor='none',
            color='gray', markersize=12, label='Not used for update')

    mean = history['estimate_mean'].to_numpy()
    sd = history['estimate_sd'].to_numpy()
    ax.plot(history['trial'], mean, '-', color=palette[0], label='Posterior mean')
    ax.fill_between(history['trial'], mean - sd, mean + sd, color=palette[0], alpha=0.2)

    ax.set_xlabel('Trial')
    ax.set_ylabel('log SNR')
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend()
    if show:
        plt.show()
    return fig


def plot_posterior_evolution(pdf_history, intensities, title="Posterior evolution", show=False):
    """Plot the posterior table after each trial as a heatmap."""
    colors = [(1, 1, 1), (0, 0, 1)]
    cmap = LinearSegmentedColormap.from_list("custom", colors, N=100)

    fig, ax = plt.subplots(figsize=(12, 8))
    image = ax.imshow(
        np.array(pdf_history).T,
        aspect='auto',
        extent=[0, len(pdf_history), intensities[0], intensities[-1]],
        origin='lower',
        cmap=cmap
    )
    fig.colorbar(image, ax=ax, label='Posterior probability')
    ax.set_title(title)
    ax.set_xlabel('Trial Number')
    ax.set_ylabel('Threshold (log SNR)')
    if show:
        plt.show()
    return fig
