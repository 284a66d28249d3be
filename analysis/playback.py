# analysis/playback.py
"""
Turn the active formant set and voice-source mode into synthesis parameters.

The synth is a sawtooth carrier (frequency-modulated for vibrato) mixed with
white noise and fed through four parallel band-pass filters centred on F1-F4.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class VoiceSourceMode(Enum):
    VOICED = "voiced"
    WHISPER = "whisper"
    VIBRATO = "vibrato"

    @classmethod
    def coerce(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"unknown voice source mode: {value!r}") from None


@dataclass
class ActiveFormants:
    f1: float
    f2: float
    f3: float
    f4: float
    f0: float

    def as_tuple(self):
        return self.f1, self.f2, self.f3, self.f4


@dataclass(frozen=True)
class SynthesisParams:
    bandpass_f1: float
    bandpass_f2: float
    bandpass_f3: float
    bandpass_f4: float
    oscillator_f0: float
    harmonicity: Optional[float]
    modulation_index: Optional[float]
    tone_volume_db: float
    noise_volume_db: float

    @property
    def bandpass_centres(self):
        return (self.bandpass_f1, self.bandpass_f2,
                self.bandpass_f3, self.bandpass_f4)


# (harmonicity, modulation index, tone dB, noise dB)
SOURCE_LEVELS = {
    VoiceSourceMode.VOICED: (1.0, 0.0, 3.0, -18.0),
    VoiceSourceMode.WHISPER: (None, None, -40.0, -12.0),
    VoiceSourceMode.VIBRATO: (0.80, 0.08, 0.0, -18.0),
}

# Band-pass Q per formant, F1..F4
BANDPASS_Q = (10.0, 15.0, 25.0, 35.0)


def derive(active: ActiveFormants, mode, speaker_f0_default=None) -> SynthesisParams:
    """
    Build synth parameters. ``speaker_f0_default`` stands in when the active
    F0 is unset or non-positive.
    """
    harmonicity, mod_index, tone_db, noise_db = SOURCE_LEVELS[VoiceSourceMode.coerce(mode)]

    f0 = active.f0
    if (f0 is None or f0 <= 0) and speaker_f0_default is not None:
        f0 = speaker_f0_default

    return SynthesisParams(
        bandpass_f1=active.f1,
        bandpass_f2=active.f2,
        bandpass_f3=active.f3,
        bandpass_f4=active.f4,
        oscillator_f0=f0,
        harmonicity=harmonicity,
        modulation_index=mod_index,
        tone_volume_db=tone_db,
        noise_volume_db=noise_db,
    )
