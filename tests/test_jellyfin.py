# tests/test_jellyfin.py

from __future__ import annotations

import httpx
import pytest

from freemind_sonos.media.jellyfin import JellyfinClient, JellyfinConfig, MediaError, Track


def make_client(handler, **config) -> JellyfinClient:
    cfg = JellyfinConfig(server="https://jf.example.org/", api_key="K", **config)
    return JellyfinClient(cfg, http=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_random_track_queries_items() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"Items": [{"Id": "abc", "Name": "Song", "Artists": ["Band"]}]})

    client = make_client(handler, user_id="u1")
    track = await client.random_track()
    await client.aclose()

    assert track == Track(id="abc", name="Song", artist="Band")
    request = seen[0]
    assert request.url.path == "/Items"
    assert request.url.params["IncludeItemTypes"] == "Audio"
    assert request.url.params["SortBy"] == "Random"
    assert request.url.params["Limit"] == "1"
    assert request.url.params["userId"] == "u1"
    assert request.headers["X-Emby-Token"] == "K"


@pytest.mark.asyncio
async def test_no_items_means_no_track() -> None:
    client = make_client(lambda request: httpx.Response(200, json={"Items": []}))
    assert await client.random_track() is None


@pytest.mark.asyncio
async def test_server_error_raises_media_error() -> None:
    client = make_client(lambda request: httpx.Response(503))
    with pytest.raises(MediaError):
        await client.random_track()


@pytest.mark.asyncio
async def test_non_json_raises_media_error() -> None:
    client = make_client(lambda request: httpx.Response(200, text="<html>"))
    with pytest.raises(MediaError):
        await client.random_track()


def test_stream_url() -> None:
    client = make_client(lambda request: httpx.Response(200))
    track = Track(id="abc", name="Song")

    assert client.stream_url(track) == "https://jf.example.org/Audio/abc/stream.mp3?api_key=K"
    assert client.stream_url(track, start_seconds=120) == (
        "https://jf.example.org/Audio/abc/stream.mp3?startTimeTicks=1200000000&api_key=K"
    )

    public = make_client(lambda request: httpx.Response(200), stream_base="http://lan/media")
    assert public.stream_url(track).startswith("http://lan/media/Audio/abc/stream.mp3")
