"""Diagnostic plots of SFG chord assignments against the stimulus spectrogram."""

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from scipy.signal import spectrogram


def plot_chords(output, params, title=None, show=False):
    """
    Plot background and figure chords beside a spectrogram of the audio.

    Args:
        output (StimulusOutput): Result of ChordSynthesizer.synthesize.
        params (StimulusParameters): Parameters the stimulus was made with.
        title (str): Figure title, defaults to coherence / duration.
        show (bool): Call plt.show() before returning.

    Returns:
        matplotlib.figure.Figure
    """
    palette = sns.color_palette("deep")
    blue, red = palette[0], palette[3]
    chords = np.arange(output.n_chords)
    fig_start, fig_end = output.figure_start, output.figure_end
    freq_limits = (params.freq_min, params.freq_max)

    fig, (ax_chords, ax_spec) = plt.subplots(1, 2, figsize=(16, 6))

    # Chord assignments
    for row in output.background_freqs:
        ax_chords.plot(chords, row, 'o', color=blue, markerfacecolor='none')
    for row in output.figure_freqs:
        ax_chords.plot(chords, row, '*', color=red, markersize=10)
    for x in (fig_start - 0.5, fig_end + 0.5):
        ax_chords.axvline(x, color='k', linewidth=2)
    ax_chords.set_yscale('log')
    ax_chords.set_ylim(freq_limits[0] * 0.9, freq_limits[1] * 1.1)
    ax_chords.set_xlabel('Chord number')
    ax_chords.set_ylabel('Frequency (Hz)')
    ax_chords.set_title('Background and figure chords')

    # Spectrogram, one segment per chord
    f, t, sxx = spectrogram(output.samples[:, 0], fs=params.sample_rate,
                            nperseg=params.chord_samples, noverlap=0)
    keep = f <= np.ceil(freq_limits[1] / 1000) * 1000
    power_db = 10 * np.log10(sxx[keep] + 1e-12)
    ax_spec.pcolormesh(t, f[keep] / 1000, power_db, shading='auto',
                       vmin=power_db.max() - 70, cmap='viridis')
    chord_dur = params.chord_duration
    for x in (fig_start * chord_dur, (fig_end + 1) * chord_dur):
        ax_spec.axvline(x, color='w', linewidth=2)
    centres = (np.arange(fig_start, fig_end + 1) + 0.5) * chord_dur
    for row in output.figure_freqs:
        ax_spec.plot(centres, row[fig_start:fig_end + 1] / 1000, 'wx', markersize=10)
    ax_spec.set_xlabel('Time (s)')
    ax_spec.set_ylabel('Frequency (kHz)')
    ax_spec.set_title('Spectrogram of SFG stimulus')

    fig.suptitle(title or f"Coherence {params.figure_coherence}, duration {params.figure_duration} chords")
    fig.tight_layout()
    if show:
        plt.show()
    return fig
