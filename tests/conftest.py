import pytest

from fakes import FakeFFmpeg


@pytest.fixture
def fake_ffmpeg(monkeypatch):
    fake = FakeFFmpeg()
    monkeypatch.setattr("adapters.ffmpeg_adapter.subprocess.run", fake)
    return fake
