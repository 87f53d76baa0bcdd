# src/freemind_sonos/tts/engine.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)

VOICERSS_URL = "http://api.voicerss.org/"


class SpeechError(RuntimeError):
    """VoiceRSS could not synthesize the requested text."""


@dataclass(frozen=True, slots=True)
class TTSConfig:
    """VoiceRSS request parameters resolved from settings."""

    api_key: str
    language: str = "en-gb"
    voice: str = "Nancy"
    codec: str = "MP3"
    audio_format: str = "48khz_16bit_stereo"


class VoiceRSSClient:
    """
    Remote text-to-speech via the VoiceRSS REST API.

    Notes:
    - VoiceRSS reports most failures with HTTP 200 and a plain-text body starting
      with "ERROR", so the body is checked as well as the status code.
    - The HTTP client is owned by this object; close it with aclose().
    """

    def __init__(
        self,
        config: TTSConfig,
        *,
        http: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._config = config
        self._http = http or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        await self._http.aclose()

    def _params(self, text: str) -> dict[str, str]:
        cfg = self._config
        return {
            "key": cfg.api_key,
            "hl": cfg.language,
            "c": cfg.codec,
            "f": cfg.audio_format,
            "v": cfg.voice,
            "src": text,
        }

    async def synthesize(self, text: str) -> bytes:
        text = " ".join(text.split())
        if not text:
            raise SpeechError("Nothing to synthesize.")

        try:
            resp = await self._http.get(VOICERSS_URL, params=self._params(text))
        except httpx.HTTPError as exc:
            raise SpeechError(f"VoiceRSS request failed: {exc!r}") from exc

        if resp.is_error:
            raise SpeechError(f"VoiceRSS answered {resp.status_code}")

        audio = resp.content
        if audio[:5] == b"ERROR":
            raise SpeechError(f"VoiceRSS rejected the request: {audio.decode('utf-8', 'replace').strip()}")

        logger.debug("Synthesized %d chars into %d bytes", len(text), len(audio))
        return audio

    async def save(self, text: str, path: Path) -> Path:
        """Synthesize `text` and write the audio to `path`."""
        audio = await self.synthesize(text)
        try:
            path.write_bytes(audio)
        except OSError as exc:
            raise SpeechError(f"Could not write speech file {path}: {exc}") from exc
        logger.info("Speech written to %s (%d bytes)", path, len(audio))
        return path
