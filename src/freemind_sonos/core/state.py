# src/freemind_sonos/core/state.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..freemind.task_digest import TaskDigest
from .ports import Registry, Speaker, SpeechSynth, TrackSource

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """Everything one run needs, wired by cli.bootstrap (or by tests)."""

    # Settings (or any object with the same attributes, e.g. SimpleNamespace in tests).
    settings: Any

    speaker: Speaker
    registry: Registry
    speech: SpeechSynth
    tracks: TrackSource

    digest: TaskDigest = field(default_factory=TaskDigest)

    async def aclose(self) -> None:
        """Release HTTP connections held by the clients (best-effort)."""
        for client in (self.registry, self.speech, self.tracks):
            close = getattr(client, "aclose", None)
            if close is None:
                continue
            try:
                await close()
            except Exception:
                logger.debug("Closing %s failed.", type(client).__name__, exc_info=True)
