# synth/engine.py
"""
Formant synthesizer: the audio side of the vowel space explorer.

A sawtooth oscillator (optionally frequency-modulated) and a white-noise
source are mixed at the levels given by ``SynthesisParams`` and sent through
four parallel band-pass filters, one per formant. Audio is produced by a
sounddevice output stream whose callback pulls blocks from ``render``.
"""
import logging
import threading
from typing import Optional

import numpy as np
from scipy.signal import iirpeak, lfilter

from analysis.playback import BANDPASS_Q, SynthesisParams

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100
BLOCKSIZE = 512
MASTER_GAIN = 0.25


def db_to_gain(db):
    return 10.0 ** (db / 20.0)


def design_filter_bank(centres, sample_rate, qs=BANDPASS_Q):
    """
    (b, a) peak-filter coefficients per formant. Centres are kept inside
    (1 Hz, 0.99 * Nyquist) so the design never fails; the parameters
    themselves are not touched.
    """
    nyquist = 0.5 * sample_rate
    bank = []
    for fc, q in zip(centres, qs):
        fc = min(max(float(fc), 1.0), 0.99 * nyquist)
        b, a = iirpeak(fc, q, fs=sample_rate)
        bank.append((b, a))
    return bank


class FormantSynth:
    """
    Lifecycle: ``apply`` params at any time, ``start`` on pointer press,
    ``stop`` on release. ``stop`` is safe to call repeatedly or before
    ``start``.
    """

    def __init__(
        self,
        sample_rate: int = SAMPLE_RATE,
        blocksize: int = BLOCKSIZE,
        stream_factory=None,
        seed: Optional[int] = None,
    ) -> None:
        self.sample_rate = int(sample_rate)
        self.blocksize = int(blocksize)
        self.stream = None
        self.stream_lock = threading.Lock()
        self._stream_factory = stream_factory

        # (params, filter bank) swapped as one reference so the audio
        # thread never sees a half-updated pair
        self._state = None

        self._zi = [np.zeros(2) for _ in BANDPASS_Q]
        self._phase = 0.0        # carrier phase, cycles
        self._mod_phase = 0.0    # modulator phase, radians
        self._rng = np.random.default_rng(seed)

    # -------------------------
    # Parameters
    # -------------------------
    @property
    def params(self) -> Optional[SynthesisParams]:
        state = self._state
        return state[0] if state is not None else None

    def apply(self, params: SynthesisParams) -> None:
        bank = design_filter_bank(params.bandpass_centres, self.sample_rate)
        self._state = (params, bank)

    # -------------------------
    # Rendering
    # -------------------------
    def render(self, frames: int) -> np.ndarray:
        """Render ``frames`` mono samples in [-1, 1]."""
        state = self._state
        if state is None or frames <= 0:
            return np.zeros(max(frames, 0), dtype=np.float32)
        params, bank = state

        dt = 1.0 / self.sample_rate
        f0 = float(params.oscillator_f0 or 0.0)
        harmonicity = params.harmonicity or 0.0
        mod_index = params.modulation_index or 0.0

        steps = np.arange(1, frames + 1, dtype=float)
        mod_phase = self._mod_phase + 2.0 * np.pi * harmonicity * f0 * dt * steps
        inst_freq = f0 * (1.0 + mod_index * np.sin(mod_phase))
        phase = self._phase + np.cumsum(inst_freq) * dt
        saw = 2.0 * np.mod(phase, 1.0) - 1.0

        self._phase = float(np.mod(phase[-1], 1.0))
        self._mod_phase = float(np.mod(mod_phase[-1], 2.0 * np.pi))

        noise = self._rng.uniform(-1.0, 1.0, frames)
        source = (saw * db_to_gain(params.tone_volume_db)
                  + noise * db_to_gain(params.noise_volume_db))

        out = np.zeros(frames, dtype=float)
        for i, (b, a) in enumerate(bank):
            y, self._zi[i] = lfilter(b, a, source, zi=self._zi[i])
            out += y

        out *= MASTER_GAIN
        return np.clip(out, -1.0, 1.0).astype(np.float32)

    def audio_callback(self, outdata, frames, _time_info, status) -> None:
        if status:
            logger.debug("output stream status: %s", status)
        try:
            outdata[:, 0] = self.render(frames)
        except Exception:  # noqa: BLE001
            logger.exception("FormantSynth render failed")
            outdata.fill(0)

    def reset(self) -> None:
        """Clear oscillator phase and filter memory."""
        self._zi = [np.zeros(2) for _ in BANDPASS_Q]
        self._phase = 0.0
        self._mod_phase = 0.0

    # -------------------------
    # Public control
    # -------------------------
    @property
    def is_playing(self) -> bool:
        return self.stream is not None

    def _open_stream(self):
        factory = self._stream_factory
        if factory is None:
            import sounddevice as sd
            factory = sd.OutputStream
        return factory(
            samplerate=self.sample_rate,
            blocksize=self.blocksize,
            channels=1,
            dtype="float32",
            callback=self.audio_callback,
        )

    def start(self) -> None:
        with self.stream_lock:
            if self.stream is not None:
                return
            try:
                stream = self._open_stream()
                stream.start()
            except Exception:  # noqa: BLE001
                logger.exception("Failed to start audio output stream")
                self.stream = None
                return
            self.stream = stream
            logger.info(
                "FormantSynth stream started at %d Hz blocksize %d",
                self.sample_rate,
                self.blocksize,
            )

    def stop(self) -> None:
        with self.stream_lock:
            if self.stream is None:
                return
            try:
                self.stream.stop()
                self.stream.close()
            except Exception:  # noqa: BLE001
                logger.exception("Error stopping audio output stream")
            finally:
                self.stream = None
                self.reset()
            logger.info("FormantSynth stream stopped")
