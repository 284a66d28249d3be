# tests/test_music_utils.py
from utils.music_utils import freq_to_note_name, hz_to_midi


def test_hz_to_midi_basic():
    assert hz_to_midi(440) == 69  # A4


def test_hz_to_midi_none_zero_negative():
    assert hz_to_midi(None) is None
    assert hz_to_midi(0) is None
    assert hz_to_midi(-50) is None


def test_hz_to_midi_fractional_rounding():
    midi = hz_to_midi(445)
    assert isinstance(midi, int)
    assert midi == 69


def test_freq_to_note_name():
    assert freq_to_note_name(440) == "A4"
    assert freq_to_note_name(110) == "A2"
    assert freq_to_note_name(261.63) == "C4"


def test_freq_to_note_name_invalid():
    assert freq_to_note_name(None) == "N/A"
    assert freq_to_note_name(0) == "N/A"
    assert freq_to_note_name(1e-3) == "N/A"
