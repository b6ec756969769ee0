"""Fetch JSON reference tables with timeout and bounded retry."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import httpx

from genoscan.config import FetchPolicy
from genoscan.errors import SourceUnavailable

logger = logging.getLogger(__name__)

USER_AGENT = "genoscan/0.1"


class JsonFetcher:
    """Load a JSON document from an HTTP(S) URL or a local path.

    Remote requests are retried ``policy.retries`` times with a linearly
    increasing delay. Local files are read once in a worker thread.
    """

    def __init__(
        self,
        policy: FetchPolicy | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.policy = policy or FetchPolicy()
        self.transport = transport

    async def fetch(self, source_id: str, location: str) -> Any:
        if location.startswith(("http://", "https://")):
            return await self._fetch_remote(source_id, location)
        return await self._fetch_local(source_id, Path(location))

    async def _fetch_remote(self, source_id: str, url: str) -> Any:
        attempts = self.policy.retries + 1
        last_error: Exception | None = None

        async with httpx.AsyncClient(
            timeout=self.policy.timeout,
            transport=self.transport,
            headers={"User-Agent": USER_AGENT},
        ) as client:
            for attempt in range(1, attempts + 1):
                try:
                    response = await client.get(url)
                    response.raise_for_status()
                    return response.json()
                except (httpx.HTTPError, ValueError) as exc:
                    last_error = exc
                    logger.warning(
                        "Fetch of %s failed (attempt %d/%d): %s",
                        source_id,
                        attempt,
                        attempts,
                        exc,
                    )

                if attempt < attempts:
                    await asyncio.sleep(self.policy.backoff(attempt))

        raise SourceUnavailable(source_id, f"{url}: {last_error}") from last_error

    async def _fetch_local(self, source_id: str, path: Path) -> Any:
        try:
            raw = await asyncio.to_thread(path.read_text, encoding="utf-8")
            return json.loads(raw)
        except (OSError, ValueError) as exc:
            logger.warning("Could not read %s from %s: %s", source_id, path, exc)
            raise SourceUnavailable(source_id, f"{path}: {exc}") from exc
