# src/freemind_sonos/speaker/sonos.py

from __future__ import annotations

"""
Sonos speaker control.

soco is a blocking UPnP client; every call is pushed to a worker thread so the
announcement pipeline can stay a plain sequence of awaited steps.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

import soco
from soco.exceptions import SoCoException

logger = logging.getLogger(__name__)

T = TypeVar("T")

# requests (used by soco) raises IOError subclasses on network problems.
SPEAKER_ERRORS: tuple[type[BaseException], ...] = (SoCoException, OSError)


class SpeakerError(RuntimeError):
    """A command sent to the speaker failed."""


@dataclass(frozen=True, slots=True)
class SoundConfig:
    volume: int = 10
    crossfade: bool = False
    shuffle: bool = False
    repeat: bool = False
    loudness: bool = False
    treble: int = 5
    bass: int = 5


@dataclass(frozen=True, slots=True)
class SpeakerConfig:
    ip: str = "127.0.0.1"
    sound: SoundConfig = field(default_factory=SoundConfig)


class SonosSpeaker:
    """Async facade over one soco.SoCo device."""

    def __init__(self, device: Any, *, poll_interval: float = 0.5) -> None:
        self.device = device
        self.poll_interval = poll_interval

    @property
    def ip(self) -> str:
        return str(getattr(self.device, "ip_address", "?"))

    async def _run(self, what: str, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        try:
            return await asyncio.to_thread(fn, *args, **kwargs)
        except SPEAKER_ERRORS as exc:
            raise SpeakerError(f"{what} failed on {self.ip}: {exc!r}") from exc

    async def volume(self) -> int:
        return await self._run("volume", lambda: int(self.device.volume))

    async def set_volume(self, volume: int) -> None:
        def _set() -> None:
            self.device.volume = max(0, min(100, int(volume)))

        await self._run("set_volume", _set)

    async def set_volume_relative(self, delta: int) -> int:
        return await self._run("set_relative_volume", self.device.set_relative_volume, delta)

    async def play(self) -> None:
        await self._run("play", self.device.play)

    async def pause(self) -> None:
        await self._run("pause", self.device.pause)

    async def is_playing(self) -> bool:
        info = await self._run("transport info", self.device.get_current_transport_info)
        return info.get("current_transport_state") == "PLAYING"

    async def play_uri(self, uri: str, *, start: bool = True) -> None:
        """Load `uri` as the current transport URI; start playback unless already playing."""
        logger.debug("Setting transport URI on %s: %s", self.ip, uri)
        await self._run("play_uri", self.device.play_uri, uri, start=False)
        if start and not await self.is_playing():
            await self.play()

    async def play_file(self, name: str, server: str) -> None:
        """Play a file exposed by the local media server."""
        uri = f"{server}{name}".replace(" ", "%20")
        await self.play_uri(uri)

    async def wait_for_end(self, poll: float | None = None) -> None:
        """Block until the transport leaves PLAYING, checking every `poll` seconds."""
        interval = self.poll_interval if poll is None else poll
        while await self.is_playing():
            await asyncio.sleep(interval)

    async def fade_out(self, *, step: int = 3, delay: float | None = None) -> None:
        """Lower the volume stepwise, pause, then restore the original volume."""
        original = await self.volume()
        pause_s = self.poll_interval if delay is None else delay
        current = original
        while current > step:
            current = await self.set_volume_relative(-step)
            await asyncio.sleep(pause_s)
        await self.pause()
        await self.set_volume(original)

    async def fade_in(self, *, step: int = 3, delay: float | None = None) -> None:
        """Start from silence and raise the volume stepwise back to where it was."""
        target = await self.volume()
        pause_s = self.poll_interval if delay is None else delay
        await self.set_volume(0)
        current = 0
        while current < target - step:
            current = await self.set_volume_relative(step)
            await asyncio.sleep(pause_s)
        await self.set_volume(target)


def _apply(device: Any, what: str, fn: Callable[[], object]) -> None:
    try:
        fn()
    except SPEAKER_ERRORS:
        logger.debug("Failed to %s for %s", what, device.ip_address)


def _setup_device(device: Any, sound: SoundConfig) -> None:
    # Fails fast if the speaker is not reachable at all.
    name = device.player_name
    logger.debug("Found speaker %r at %s", name, device.ip_address)

    def _set(attr: str, value: object) -> Callable[[], None]:
        return lambda: setattr(device, attr, value)

    _apply(device, "stop playback", device.stop)
    _apply(device, "set volume", _set("volume", sound.volume))
    _apply(device, "set crossfade", _set("cross_fade", sound.crossfade))
    _apply(device, "set shuffle", _set("shuffle", sound.shuffle))
    _apply(device, "set repeat mode", _set("repeat", sound.repeat))
    _apply(device, "set loudness", _set("loudness", sound.loudness))
    _apply(device, "set treble", _set("treble", sound.treble))
    _apply(device, "set bass", _set("bass", sound.bass))
    _apply(device, "clear playlist", device.clear_queue)

    try:
        device.unjoin()
        logger.info("%s is coordinator of a standalone group", device.ip_address)
    except SPEAKER_ERRORS:
        logger.error("Failed to set coordinator for %s", device.ip_address)


async def connect_speaker(
    config: SpeakerConfig,
    *,
    factory: Callable[[str], Any] = soco.SoCo,
) -> SonosSpeaker | None:
    """Connect to the configured speaker and apply its sound profile (None if unreachable)."""
    logger.debug("Connecting to %s . . .", config.ip)
    try:
        device = factory(config.ip)
        await asyncio.to_thread(_setup_device, device, config.sound)
    except (*SPEAKER_ERRORS, ValueError) as exc:
        logger.warning("Failed to connect to %s: %r", config.ip, exc)
        return None

    logger.debug("Successfully connected to %s.", config.ip)
    return SonosSpeaker(device)
