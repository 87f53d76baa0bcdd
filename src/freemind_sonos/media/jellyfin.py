# src/freemind_sonos/media/jellyfin.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

# Jellyfin positions are expressed in 100ns ticks.
TICKS_PER_SECOND = 10_000_000


class MediaError(RuntimeError):
    """The media server could not be queried."""


@dataclass(frozen=True, slots=True)
class JellyfinConfig:
    server: str = "https://example.com/jellyfin"
    api_key: str = ""
    user_id: str | None = None
    # Public base the speaker can reach, if it differs from `server`.
    stream_base: str | None = None


@dataclass(frozen=True, slots=True)
class Track:
    id: str
    name: str
    artist: str | None = None

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> Track:
        artists = item.get("Artists") or []
        artist = item.get("AlbumArtist") or (artists[0] if artists else None)
        return cls(id=str(item["Id"]), name=str(item.get("Name") or ""), artist=artist)


class JellyfinClient:
    """Picks random audio items from a Jellyfin server and builds their stream URLs."""

    def __init__(
        self,
        config: JellyfinConfig,
        *,
        http: httpx.AsyncClient | None = None,
        timeout: float = 15.0,
    ) -> None:
        self._config = config
        self._http = http or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def random_track(self) -> Track | None:
        params: dict[str, str] = {
            "IncludeItemTypes": "Audio",
            "Recursive": "true",
            "SortBy": "Random",
            "Limit": "1",
        }
        if self._config.user_id:
            params["userId"] = self._config.user_id

        url = self._config.server.rstrip("/") + "/Items"
        try:
            resp = await self._http.get(url, params=params, headers={"X-Emby-Token": self._config.api_key})
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise MediaError(f"Jellyfin query failed: {exc!r}") from exc

        items = data.get("Items") if isinstance(data, dict) else None
        if not items:
            logger.info("Jellyfin returned no audio items.")
            return None

        try:
            track = Track.from_item(items[0])
        except (KeyError, TypeError) as exc:
            raise MediaError(f"Unexpected Jellyfin item: {items[0]!r}") from exc

        logger.info("Picked track %s (%s)", track.name, track.id)
        return track

    def stream_url(self, track: Track, start_seconds: int = 0) -> str:
        base = (self._config.stream_base or self._config.server).rstrip("/")
        query: dict[str, str | int] = {}
        if start_seconds > 0:
            query["startTimeTicks"] = start_seconds * TICKS_PER_SECOND
        if self._config.api_key:
            query["api_key"] = self._config.api_key

        url = httpx.URL(f"{base}/Audio/{track.id}/stream.mp3")
        return str(url.copy_merge_params(query)) if query else str(url)
