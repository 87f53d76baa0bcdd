# src/freemind_sonos/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the announcement pipeline.

The pipeline depends on Protocols instead of the concrete HTTP/UPnP clients.
This keeps the external services swappable and makes testing easier.
"""

from pathlib import Path
from typing import Protocol

from ..freemind.task_models import TaskRecord
from ..media.jellyfin import Track


class Registry(Protocol):
    """Source of registry entries (Freemind server)."""
    async def fetch(self) -> list[TaskRecord]: ...


class SpeechSynth(Protocol):
    async def save(self, text: str, path: Path) -> Path: ...


class TrackSource(Protocol):
    async def random_track(self) -> Track | None: ...
    def stream_url(self, track: Track, start_seconds: int = 0) -> str: ...


class Speaker(Protocol):
    """The subset of speaker control the pipeline needs."""

    async def play(self) -> None: ...
    async def play_uri(self, uri: str, *, start: bool = True) -> None: ...
    async def play_file(self, name: str, server: str) -> None: ...
    async def wait_for_end(self, poll: float | None = None) -> None: ...
    async def fade_out(self, *, step: int = 3, delay: float | None = None) -> None: ...
    async def fade_in(self, *, step: int = 3, delay: float | None = None) -> None: ...
