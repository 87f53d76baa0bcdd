# src/freemind_sonos/core/pipeline.py

from __future__ import annotations

"""
Announcement pipeline.

Every step is awaited in order; the ordering is part of the user experience
(music -> digest is prepared -> music fades out -> digest is spoken -> music comes back).
"""

import asyncio
import logging
import time
from datetime import datetime
from pathlib import Path

from ..media.jellyfin import MediaError, Track
from ..tts import phrases
from .state import AppState

logger = logging.getLogger(__name__)

SPEECH_FILE = "tts.mp3"


async def _start_music(state: AppState) -> Track | None:
    try:
        track = await state.tracks.random_track()
    except MediaError:
        logger.exception("Could not pick a random track; continuing without music.")
        return None

    if track is not None:
        await state.speaker.play_uri(state.tracks.stream_url(track), start=True)
    return track


async def _speak(state: AppState, text: str) -> None:
    settings = state.settings
    path = Path(settings.media_dir) / SPEECH_FILE
    await state.speech.save(text, path)
    await state.speaker.play_file(SPEECH_FILE, settings.local_server)


async def _refresh(state: AppState) -> None:
    records = await state.registry.fetch()
    state.digest.replace(records)


async def announce_digest(state: AppState, now: float | None = None) -> str:
    """Play music, then fade it out and announce what is due today."""
    settings = state.settings

    track = await _start_music(state)

    await _refresh(state)
    now_ts = time.time() if now is None else now
    today = state.digest.due_today(now_ts)
    message = phrases.digest_announcement(settings.username, today, now_ts)
    logger.info("%d entries due today.", len(today))
    logger.debug("Digest text:\n%s", message)

    path = Path(settings.media_dir) / SPEECH_FILE
    await state.speech.save(message, path)

    lead = float(settings.music_lead_seconds)
    if track is not None and lead > 0:
        logger.debug("Letting the music play for %.0fs", lead)
        await asyncio.sleep(lead)

    if track is not None:
        await state.speaker.fade_out()

    await state.speaker.play_file(SPEECH_FILE, settings.local_server)

    if track is not None and settings.resume_music:
        await state.speaker.wait_for_end()
        uri = state.tracks.stream_url(track, start_seconds=int(settings.resume_offset_seconds))
        await state.speaker.play_uri(uri, start=False)
        await state.speaker.play()
        await state.speaker.fade_in()

    return message


async def announce_alert(state: AppState, window_minutes: int, now: float | None = None) -> bool:
    """Speak the alerts that become effective within the window. Returns False if there were none."""
    await _refresh(state)
    now_ts = time.time() if now is None else now

    if not state.digest.needs_alert_within(window_minutes, now_ts):
        logger.info("No alerts within the next %d minutes.", window_minutes)
        return False

    alerts = state.digest.alerts_within(window_minutes, now_ts)
    logger.info("%d alerts within the next %d minutes.", len(alerts), window_minutes)
    await _speak(state, phrases.alert_announcement(state.settings.username, alerts, now_ts))
    return True


async def announce_date(state: AppState, now: datetime | None = None) -> str:
    moment = now or datetime.now()
    message = phrases.date_announcement(state.settings.username, moment)
    await _speak(state, message)
    return message
