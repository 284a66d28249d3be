# tests/conftest.py
from unittest.mock import MagicMock

import matplotlib
import pytest

from analysis.acoustic_ranges import SpeakerCategory, range_for
from analysis.geometry import DEFAULT_GEOMETRY
from analysis.vowel_catalog import load_catalog
matplotlib.use("Agg")


class FakeStream:
    """Stands in for sounddevice.OutputStream."""

    instances = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.started = False
        self.closed = False
        FakeStream.instances.append(self)

    def start(self):
        self.started = True

    def stop(self):
        self.started = False

    def close(self):
        self.closed = True


class FakeWindow:
    def __init__(self, sample_rate=44100):
        self.ax_response = MagicMock()
        self.canvas = MagicMock()
        self.canvas.draw_idle = MagicMock()
        self.sample_rate = sample_rate


@pytest.fixture
def catalog():
    return load_catalog()


@pytest.fixture
def male_range():
    return range_for(SpeakerCategory.MALE)


@pytest.fixture
def female_range():
    return range_for(SpeakerCategory.FEMALE)


@pytest.fixture
def geometry():
    return DEFAULT_GEOMETRY


@pytest.fixture
def fake_synth():
    synth = MagicMock()
    synth.apply = MagicMock()
    synth.start = MagicMock()
    synth.stop = MagicMock()
    return synth


@pytest.fixture
def fake_stream_factory():
    FakeStream.instances = []
    return FakeStream


@pytest.fixture
def fake_window():
    return FakeWindow()
