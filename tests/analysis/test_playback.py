import pytest

from analysis.playback import (
    BANDPASS_Q,
    ActiveFormants,
    VoiceSourceMode,
    derive,
)


@pytest.fixture
def active():
    return ActiveFormants(f1=500.0, f2=1500.0, f3=2500.0, f4=3500.0, f0=110.0)


def test_voiced(active):
    p = derive(active, VoiceSourceMode.VOICED)
    assert p.bandpass_centres == (500.0, 1500.0, 2500.0, 3500.0)
    assert p.oscillator_f0 == 110.0
    assert p.harmonicity == 1.0
    assert p.modulation_index == 0.0
    assert p.tone_volume_db == 3.0
    assert p.noise_volume_db == -18.0


@pytest.mark.parametrize("formants, f0_default", [
    ((500.0, 1500.0, 2500.0, 3500.0, 110.0), None),
    ((270.0, 2290.0, 3010.0, 4010.0, 0.0), 110.0),
    ((1030.0, 1370.0, 3170.0, 4370.0, None), 180.0),
    ((900.0, 2800.0, 3900.0, 5000.0, 320.0), 180.0),
])
def test_whisper_levels_ignore_other_inputs(formants, f0_default):
    p = derive(ActiveFormants(*formants), "whisper", speaker_f0_default=f0_default)
    assert p.harmonicity is None
    assert p.modulation_index is None
    assert p.tone_volume_db == -40.0
    assert p.noise_volume_db == -12.0


def test_vibrato(active):
    p = derive(active, VoiceSourceMode.VIBRATO)
    assert p.harmonicity == pytest.approx(0.8)
    assert p.modulation_index == pytest.approx(0.08)
    assert p.tone_volume_db == 0.0
    assert p.noise_volume_db == -18.0


def test_bandpass_follows_active_formants(active):
    active.f3 = 2700.0
    p = derive(active, VoiceSourceMode.VOICED)
    assert p.bandpass_f3 == 2700.0
    assert active.as_tuple() == (500.0, 1500.0, 2700.0, 3500.0)


@pytest.mark.parametrize("f0", [None, 0.0, -5.0])
def test_missing_f0_uses_speaker_default(active, f0):
    active.f0 = f0
    p = derive(active, VoiceSourceMode.VOICED, speaker_f0_default=180.0)
    assert p.oscillator_f0 == 180.0


def test_explicit_f0_wins_over_default(active):
    p = derive(active, VoiceSourceMode.VOICED, speaker_f0_default=180.0)
    assert p.oscillator_f0 == 110.0


def test_unknown_mode_raises(active):
    with pytest.raises(ValueError):
        derive(active, "growl")


def test_q_values_rise_with_formant():
    assert BANDPASS_Q == (10.0, 15.0, 25.0, 35.0)
