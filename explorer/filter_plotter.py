# explorer/filter_plotter.py
import numpy as np
from scipy.signal import freqz

from synth.engine import design_filter_bank
from utils.music_utils import freq_to_note_name

PLOT_MAX_HZ = 5000.0
FORMANT_COLORS = ("tab:red", "tab:orange", "tab:green", "tab:blue")


# ============================================================
# Filter response
# ============================================================

def filter_response(params, sample_rate, n_points=1024):
    """
    Summed magnitude response (dB) of the four parallel formant filters.
    Returns (freqs, magnitude_db).
    """
    bank = design_filter_bank(params.bandpass_centres, sample_rate)
    freqs = np.linspace(1.0, min(PLOT_MAX_HZ, 0.5 * sample_rate), n_points)

    total = np.zeros(n_points, dtype=complex)
    for b, a in bank:
        _w, h = freqz(b, a, worN=freqs, fs=sample_rate)
        total += h

    mag_db = 20.0 * np.log10(np.maximum(np.abs(total), 1e-9))
    return freqs, mag_db


def update_filter_response(window, params):
    ax = window.ax_response
    ax.clear()

    if params is None:
        ax.set_title("Formant filters")
        window.canvas.draw_idle()
        return

    freqs, mag_db = filter_response(params, window.sample_rate)
    ax.plot(freqs, mag_db, color="black", linewidth=1.0)

    for i, (fc, color) in enumerate(zip(params.bandpass_centres, FORMANT_COLORS), 1):
        if fc is None or not np.isfinite(fc):
            continue
        ax.axvline(fc, color=color, linestyle="--", alpha=0.7, label=f"F{i}")

    note = freq_to_note_name(params.oscillator_f0)
    ax.set_title(
        f"Formant filters  F0 = {params.oscillator_f0:.0f} Hz ({note})"
    )
    ax.set_xlim(0, freqs[-1])
    ax.set_xlabel("Frequency (Hz)")
    ax.set_ylabel("Gain (dB)")
    window.canvas.draw_idle()
