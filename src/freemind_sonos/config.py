# src/freemind_sonos/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole run.
- No secrets required at import time (the CLI checks what the chosen command needs).
- Sub-configs (Freemind, Jellyfin, speaker, TTS) are built here so clients never read env.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .freemind.freemind_client import AuthMethod, FreemindConfig
from .media.jellyfin import JellyfinConfig
from .speaker.sonos import SoundConfig, SpeakerConfig
from .tts.engine import TTSConfig

ENV_PREFIX = "FMSONOS"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv() -> None:
    """Load a local .env (never overrides variables already set)."""
    load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_opt(name: str) -> str | None:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return None
    return v.strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    username: str
    log_level: str
    data_dir: Path

    # ---- Local media server (serves media_dir at local_server) ----
    media_dir: Path
    local_server: str

    # ---- Services ----
    tts: TTSConfig
    freemind: FreemindConfig
    jellyfin: JellyfinConfig
    speaker: SpeakerConfig

    # ---- Pipeline timing ----
    music_lead_seconds: float
    resume_music: bool
    resume_offset_seconds: int
    alert_window_minutes: int

    @staticmethod
    def from_env(*, dotenv: bool = True) -> "Settings":
        if dotenv:
            _load_dotenv()

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/freemind_sonos"))

        tts = TTSConfig(
            api_key=_env(_k("TTS_API_KEY"), ""),
            language=_env(_k("TTS_LANGUAGE"), "en-gb"),
            voice=_env(_k("TTS_VOICE"), "Nancy"),
        )

        freemind = FreemindConfig(
            server=_env(_k("FREEMIND_SERVER"), "https://example.com/api:8080"),
            username=_env(_k("FREEMIND_USERNAME"), "username"),
            secret=_env(_k("FREEMIND_SECRET"), "password"),
            method=AuthMethod.parse(_env_opt(_k("FREEMIND_METHOD"))),
        )

        jellyfin = JellyfinConfig(
            server=_env(_k("JELLYFIN_SERVER"), "https://example.com/jellyfin"),
            api_key=_env(_k("JELLYFIN_API_KEY"), ""),
            user_id=_env_opt(_k("JELLYFIN_USER_ID")),
            stream_base=_env_opt(_k("JELLYFIN_STREAM_BASE")),
        )

        defaults = SoundConfig()
        speaker = SpeakerConfig(
            ip=_env(_k("SPEAKER_IP"), "127.0.0.1").strip(),
            sound=SoundConfig(
                volume=_env_int(_k("SPEAKER_VOLUME"), defaults.volume),
                crossfade=_env_bool(_k("SPEAKER_CROSSFADE"), defaults.crossfade),
                shuffle=_env_bool(_k("SPEAKER_SHUFFLE"), defaults.shuffle),
                repeat=_env_bool(_k("SPEAKER_REPEAT"), defaults.repeat),
                loudness=_env_bool(_k("SPEAKER_LOUDNESS"), defaults.loudness),
                treble=_env_int(_k("SPEAKER_TREBLE"), defaults.treble),
                bass=_env_int(_k("SPEAKER_BASS"), defaults.bass),
            ),
        )

        return Settings(
            username=_env(_k("USERNAME"), "there"),
            log_level=_env(_k("LOG_LEVEL"), "INFO"),
            data_dir=data_dir,
            media_dir=_env_path(_k("MEDIA_DIR"), Path("./media")),
            local_server=_env(_k("LOCAL_SERVER"), "http://192.168.0.1/media/"),
            tts=tts,
            freemind=freemind,
            jellyfin=jellyfin,
            speaker=speaker,
            music_lead_seconds=max(0.0, _env_float(_k("MUSIC_LEAD_SECONDS"), 120.0)),
            resume_music=_env_bool(_k("RESUME_MUSIC"), False),
            resume_offset_seconds=max(0, _env_int(_k("RESUME_OFFSET_SECONDS"), 120)),
            alert_window_minutes=max(1, _env_int(_k("ALERT_WINDOW_MINUTES"), 30)),
        )

