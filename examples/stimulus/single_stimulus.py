"""Example usage of the SFG chord synthesizer with a diagnostic plot."""
import matplotlib.pyplot as plt

from sfg_psychophysics.stimulus import ChordSynthesizer, StimulusParameters, chord_frequency_frame
from sfg_psychophysics.visualization import plot_chords


def main():
    # Rising figure of 4 tones over 12 chords, random onset
    params = StimulusParameters(
        total_duration=2.0,
        chord_duration=0.05,
        chord_onset=0.01,
        tone_components=20,
        figure_duration=12,
        figure_coherence=4,
        figure_step=2,
        seed=2020,
    )
    synthesizer = ChordSynthesizer(params)

    figure_stim = synthesizer.synthesize(figure_present=True)
    decoy_stim = synthesizer.synthesize(figure_present=False)

    print(f"Figure in chords {figure_stim.figure_start}-{figure_stim.figure_end}")
    print(chord_frequency_frame(figure_stim).groupby('role').size())

    plot_chords(figure_stim, params, title="Figure present")
    plot_chords(decoy_stim, params, title="Figure absent")
    plt.show()


if __name__ == "__main__":
    main()
