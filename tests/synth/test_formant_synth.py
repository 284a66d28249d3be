import numpy as np
import pytest

from analysis.playback import ActiveFormants, VoiceSourceMode, derive
from synth.engine import FormantSynth, db_to_gain, design_filter_bank


@pytest.fixture
def params():
    active = ActiveFormants(f1=500.0, f2=1500.0, f3=2500.0, f4=3500.0, f0=110.0)
    return derive(active, VoiceSourceMode.VOICED)


@pytest.fixture
def synth(fake_stream_factory):
    return FormantSynth(sample_rate=16000, blocksize=256,
                        stream_factory=fake_stream_factory, seed=0)


def _band_energy(signal, sr, lo, hi):
    power = np.abs(np.fft.rfft(signal * np.hanning(len(signal)))) ** 2
    freqs = np.fft.rfftfreq(len(signal), 1.0 / sr)
    mask = (freqs >= lo) & (freqs <= hi)
    return float(power[mask].sum())


def test_db_to_gain():
    assert db_to_gain(0.0) == pytest.approx(1.0)
    assert db_to_gain(-20.0) == pytest.approx(0.1)


def test_filter_bank_clamps_centres_to_nyquist():
    bank = design_filter_bank((500.0, 1500.0, 9000.0, 12000.0), 16000)
    assert len(bank) == 4
    for b, a in bank:
        assert np.all(np.isfinite(b))
        assert np.all(np.isfinite(a))


def test_render_without_params_is_silent(synth):
    out = synth.render(128)
    assert out.dtype == np.float32
    assert out.shape == (128,)
    assert not np.any(out)


def test_render_is_bounded(synth, params):
    synth.apply(params)
    assert synth.params is params
    out = np.concatenate([synth.render(256) for _ in range(8)])
    assert out.dtype == np.float32
    assert np.max(np.abs(out)) <= 1.0
    assert np.any(out != 0.0)


def test_render_energy_sits_on_formants(synth, params):
    synth.apply(params)
    out = np.concatenate([synth.render(256) for _ in range(32)]).astype(float)
    near_f1 = _band_energy(out, 16000, 400, 600)
    far = _band_energy(out, 16000, 6800, 7000)
    assert near_f1 > 10.0 * far


def test_whisper_still_produces_sound(synth, params):
    active = ActiveFormants(500.0, 1500.0, 2500.0, 3500.0, 110.0)
    synth.apply(derive(active, VoiceSourceMode.WHISPER))
    out = synth.render(512)
    assert np.any(out != 0.0)


def test_audio_callback_fills_first_channel(synth, params):
    synth.apply(params)
    outdata = np.zeros((256, 1), dtype=np.float32)
    synth.audio_callback(outdata, 256, None, None)
    assert np.any(outdata[:, 0] != 0.0)


def test_audio_callback_zero_fills_on_error(synth, params, monkeypatch):
    synth.apply(params)

    def boom(frames):
        raise RuntimeError("render failed")

    monkeypatch.setattr(synth, "render", boom)
    outdata = np.ones((256, 1), dtype=np.float32)
    synth.audio_callback(outdata, 256, None, None)
    assert not np.any(outdata)


def test_start_opens_one_stream(synth, fake_stream_factory):
    synth.start()
    synth.start()
    assert synth.is_playing
    assert len(fake_stream_factory.instances) == 1
    stream = fake_stream_factory.instances[0]
    assert stream.started
    assert stream.kwargs["samplerate"] == 16000
    assert stream.kwargs["blocksize"] == 256
    assert stream.kwargs["channels"] == 1
    assert stream.kwargs["callback"] == synth.audio_callback


def test_stop_closes_stream_and_is_idempotent(synth, fake_stream_factory):
    synth.start()
    stream = fake_stream_factory.instances[0]
    synth.stop()
    synth.stop()
    assert not synth.is_playing
    assert not stream.started
    assert stream.closed


def test_stop_before_start_is_safe(synth):
    synth.stop()
    assert not synth.is_playing


def test_stop_resets_oscillator_state(synth, params):
    synth.apply(params)
    synth.start()
    synth.render(100)
    synth.stop()
    assert synth._phase == 0.0
    assert synth._mod_phase == 0.0
    assert all(not np.any(z) for z in synth._zi)


def test_start_failure_leaves_synth_stopped(params):
    def broken_factory(**kwargs):
        raise OSError("no audio device")

    synth = FormantSynth(stream_factory=broken_factory)
    synth.apply(params)
    synth.start()
    assert not synth.is_playing
    # Still safe to stop afterwards
    synth.stop()


def test_restart_after_stop(synth, fake_stream_factory):
    synth.start()
    synth.stop()
    synth.start()
    assert synth.is_playing
    assert len(fake_stream_factory.instances) == 2
