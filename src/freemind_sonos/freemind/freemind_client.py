# src/freemind_sonos/freemind/freemind_client.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

import httpx

from .registry_xml import parse_registry
from .task_models import TaskRecord

logger = logging.getLogger(__name__)

USER_AGENT = "Freemind Sonos CLI"


class FreemindError(RuntimeError):
    """The Freemind server could not be reached or answered with an error status."""


class AuthMethod(StrEnum):
    TOKEN = "token"
    PASSWORD = "password"

    @classmethod
    def parse(cls, raw: str | None) -> AuthMethod:
        if not raw:
            return cls.PASSWORD
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.PASSWORD


@dataclass(frozen=True, slots=True)
class FreemindConfig:
    server: str = "https://example.com/api:8080"
    username: str = "username"
    secret: str = "password"
    method: AuthMethod = AuthMethod.PASSWORD


class FreemindClient:
    """
    Async client for the Freemind registry API.

    The HTTP client is created in the constructor and owned by this object.
    Use it as an async context manager (or call aclose()) to release connections.
    """

    def __init__(
        self,
        config: FreemindConfig,
        *,
        http: httpx.AsyncClient | None = None,
        timeout: float = 15.0,
    ) -> None:
        self._config = config
        self._http = http or httpx.AsyncClient(
            headers={"user-agent": USER_AGENT},
            timeout=timeout,
        )

    async def __aenter__(self) -> FreemindClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def _headers(self) -> dict[str, str]:
        return {
            "user": self._config.username,
            self._config.method.value: self._config.secret,
            "content-type": "text/xml",
        }

    async def call(self, endpoint: str, payload: str = "") -> httpx.Response:
        """POST `payload` to the configured server + `endpoint`."""
        url = f"{self._config.server}{endpoint}"
        try:
            resp = await self._http.post(url, headers=self._headers(), content=payload)
        except httpx.HTTPError as exc:
            raise FreemindError(f"Freemind request to {url} failed: {exc!r}") from exc

        if resp.is_error:
            raise FreemindError(f"Freemind server answered {resp.status_code} for {url}")
        return resp

    async def fetch(self) -> list[TaskRecord]:
        """Fetch the whole registry."""
        resp = await self.call("/xml/fetch")

        content_type = resp.headers.get("content-type", "")
        if content_type.split(";")[0].strip().lower() != "text/xml":
            logger.warning("Freemind answered with content-type %r, expected text/xml", content_type)
            return []

        records = parse_registry(resp.content)
        logger.info("Fetched %d registry entries from %s", len(records), self._config.server)
        return records
