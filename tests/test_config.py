# tests/test_config.py

from __future__ import annotations

import os
from pathlib import Path

import pytest

from freemind_sonos.config import Settings
from freemind_sonos.freemind.freemind_client import AuthMethod


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("FMSONOS_"):
            monkeypatch.delenv(key)


def test_defaults() -> None:
    s = Settings.from_env(dotenv=False)

    assert s.log_level == "INFO"
    assert s.media_dir == Path("./media")
    assert s.freemind.method is AuthMethod.PASSWORD
    assert s.speaker.sound.volume == 10
    assert s.music_lead_seconds == 120.0
    assert s.resume_music is False
    assert s.alert_window_minutes == 30
    assert s.tts.language == "en-gb"


def test_values_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("FMSONOS_USERNAME", "Alex")
    monkeypatch.setenv("FMSONOS_MEDIA_DIR", str(tmp_path))
    monkeypatch.setenv("FMSONOS_FREEMIND_SERVER", "https://fm.local")
    monkeypatch.setenv("FMSONOS_FREEMIND_METHOD", "Token")
    monkeypatch.setenv("FMSONOS_JELLYFIN_USER_ID", "  ")
    monkeypatch.setenv("FMSONOS_SPEAKER_IP", " 10.0.0.5 ")
    monkeypatch.setenv("FMSONOS_SPEAKER_LOUDNESS", "yes")
    monkeypatch.setenv("FMSONOS_SPEAKER_BASS", "-3")
    monkeypatch.setenv("FMSONOS_RESUME_MUSIC", "1")
    monkeypatch.setenv("FMSONOS_TTS_API_KEY", "abc")

    s = Settings.from_env(dotenv=False)

    assert s.username == "Alex"
    assert s.media_dir == tmp_path
    assert s.freemind.server == "https://fm.local"
    assert s.freemind.method is AuthMethod.TOKEN
    assert s.jellyfin.user_id is None
    assert s.speaker.ip == "10.0.0.5"
    assert s.speaker.sound.loudness is True
    assert s.speaker.sound.bass == -3
    assert s.resume_music is True
    assert s.tts.api_key == "abc"


def test_malformed_numbers_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FMSONOS_SPEAKER_VOLUME", "loud")
    monkeypatch.setenv("FMSONOS_MUSIC_LEAD_SECONDS", "-5")
    monkeypatch.setenv("FMSONOS_ALERT_WINDOW_MINUTES", "0")

    s = Settings.from_env(dotenv=False)

    assert s.speaker.sound.volume == 10
    assert s.music_lead_seconds == 0.0
    assert s.alert_window_minutes == 1
