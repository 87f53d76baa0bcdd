# src/freemind_sonos/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- validates the local media directory,
- checks that the machine is on a network (the speaker has to reach local_server),
- connects the speaker,
- wires the concrete HTTP clients into AppState.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from pathlib import Path

import ifaddr

from ..config import Settings
from ..core.state import AppState
from ..freemind.freemind_client import FreemindClient
from ..media.jellyfin import JellyfinClient
from ..speaker.sonos import SonosSpeaker, SpeakerConfig, connect_speaker
from ..tts.engine import VoiceRSSClient

logger = logging.getLogger(__name__)

SpeakerConnector = Callable[[SpeakerConfig], Awaitable[SonosSpeaker | None]]


class BootstrapError(RuntimeError):
    """The environment is not usable for an announcement (message is user-facing)."""


def check_media_dir(path: Path) -> Path:
    if not path.exists():
        raise BootstrapError(f"Configured media directory does not exist: {path}")
    if not path.is_dir():
        raise BootstrapError(f"Configured media directory is not a directory: {path}")
    return path


def local_ipv4_addresses() -> list[str]:
    """Non-loopback IPv4 addresses of the machine's network interfaces."""
    out: list[str] = []
    for adapter in ifaddr.get_adapters():
        for ip in adapter.ips:
            if ip.is_IPv4 and not str(ip.ip).startswith("127."):
                out.append(str(ip.ip))
    return out


def check_network(addresses: list[str] | None = None) -> list[str]:
    addrs = local_ipv4_addresses() if addresses is None else addresses
    if not addrs:
        raise BootstrapError(
            "This machine does not have any IPv4 address. Make sure a network interface is "
            "connected and has a valid IPv4 address, the speaker needs to reach the media server."
        )
    logger.info("Found %d IP addresses", len(addrs))
    logger.debug("These IP addresses were found: %s", ", ".join(addrs))
    return addrs


async def create_initial_state(
    settings: Settings,
    *,
    connector: SpeakerConnector = connect_speaker,
) -> AppState:
    """Validate the environment and build AppState from the given settings."""
    check_media_dir(Path(settings.media_dir))
    check_network()

    logger.debug("Trying to connect to configured speaker . . .")
    speaker = await connector(settings.speaker)
    if speaker is None:
        raise BootstrapError(f"Could not connect to the speaker at {settings.speaker.ip}")

    return AppState(
        settings=settings,
        speaker=speaker,
        registry=FreemindClient(settings.freemind),
        speech=VoiceRSSClient(settings.tts),
        tracks=JellyfinClient(settings.jellyfin),
    )
