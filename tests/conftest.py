# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from freemind_sonos.core.state import AppState

from .fakes import FakeRegistry, FakeSpeaker, FakeSpeech, FakeTracks


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the pipeline.

    We intentionally use a SimpleNamespace rather than reading the environment,
    to keep unit tests isolated and deterministic.
    """
    media_dir = tmp_path / "media"
    media_dir.mkdir()
    return SimpleNamespace(
        username="Alex",
        media_dir=media_dir,
        local_server="http://192.168.0.2/media/",
        music_lead_seconds=0,
        resume_music=False,
        resume_offset_seconds=120,
        alert_window_minutes=30,
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """AppState wired with deterministic fakes."""
    return AppState(
        settings=settings,
        speaker=FakeSpeaker(),
        registry=FakeRegistry(),
        speech=FakeSpeech(),
        tracks=FakeTracks(),
    )
